"""
handlers/cell_handler.py
------------------------
HTTP endpoints for cells. ``GET /cells?cellblock_id=N`` narrows the list to one block.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify

from handlers.context import get_context
from handlers.errors import int_arg, json_body, json_errors, not_found
from models.cell import Cell

cell_blueprint = Blueprint("cells", __name__)


@cell_blueprint.route("/cells", methods=["GET"])
@json_errors("Failed to retrieve cells")
def list_cells():
    repo = get_context().cells
    cellblock_id = int_arg("cellblock_id")
    cells = repo.get_by_cell_block_id(cellblock_id) if cellblock_id is not None else repo.get_all()
    return jsonify([c.to_dict() for c in cells])


@cell_blueprint.route("/cells/occupancy", methods=["GET"])
@json_errors("Failed to retrieve cell occupancy")
def cell_occupancy():
    return jsonify(get_context().cells.get_occupancy())


@cell_blueprint.route("/cells/<int:cell_id>", methods=["GET"])
@json_errors("Failed to retrieve cell")
def get_cell(cell_id: int):
    cell = get_context().cells.get_by_id(cell_id)
    if cell is None:
        return not_found("Cell not found")
    return jsonify(cell.to_dict())


@cell_blueprint.route("/cells", methods=["POST"])
@json_errors("Failed to add cell")
def create_cell():
    cell = get_context().cells.create(Cell.from_dict(json_body()))
    return jsonify(cell.to_dict()), HTTPStatus.CREATED


@cell_blueprint.route("/cells/<int:cell_id>", methods=["PUT"])
@json_errors("Failed to update cell")
def update_cell(cell_id: int):
    cell = get_context().cells.update(cell_id, Cell.from_dict(json_body()))
    return jsonify(cell.to_dict())


@cell_blueprint.route("/cells/<int:cell_id>", methods=["DELETE"])
@json_errors("Failed to delete cell")
def delete_cell(cell_id: int):
    get_context().cells.delete(cell_id)
    return "", HTTPStatus.NO_CONTENT
