"""
handlers/cell_block_handler.py
------------------------------
HTTP endpoints for cell blocks.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify

from handlers.context import get_context
from handlers.errors import json_body, json_errors, not_found
from models.cell_block import CellBlock

cell_block_blueprint = Blueprint("cell_blocks", __name__)


@cell_block_blueprint.route("/cellblocks", methods=["GET"])
@json_errors("Failed to retrieve cell blocks")
def list_cell_blocks():
    return jsonify([b.to_dict() for b in get_context().cell_blocks.get_all()])


@cell_block_blueprint.route("/cellblocks/occupancy", methods=["GET"])
@json_errors("Failed to retrieve cell block occupancy")
def cell_block_occupancy():
    return jsonify(get_context().cell_blocks.get_occupancy())


@cell_block_blueprint.route("/cellblocks/<int:cellblock_id>", methods=["GET"])
@json_errors("Failed to retrieve cell block")
def get_cell_block(cellblock_id: int):
    cell_block = get_context().cell_blocks.get_by_id(cellblock_id)
    if cell_block is None:
        return not_found("Cell block not found")
    return jsonify(cell_block.to_dict())


@cell_block_blueprint.route("/cellblocks", methods=["POST"])
@json_errors("Failed to add cell block")
def create_cell_block():
    cell_block = get_context().cell_blocks.create(CellBlock.from_dict(json_body()))
    return jsonify(cell_block.to_dict()), HTTPStatus.CREATED


@cell_block_blueprint.route("/cellblocks/<int:cellblock_id>", methods=["PUT"])
@json_errors("Failed to update cell block")
def update_cell_block(cellblock_id: int):
    cell_block = get_context().cell_blocks.update(cellblock_id, CellBlock.from_dict(json_body()))
    return jsonify(cell_block.to_dict())


@cell_block_blueprint.route("/cellblocks/<int:cellblock_id>", methods=["DELETE"])
@json_errors("Failed to delete cell block")
def delete_cell_block(cellblock_id: int):
    get_context().cell_blocks.delete(cellblock_id)
    return "", HTTPStatus.NO_CONTENT
