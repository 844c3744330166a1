"""
handlers/parole_handler.py
--------------------------
HTTP endpoints for parole reviews.

POST and PUT accept ``"update_prisoner_status": true`` in the body to copy
the review status onto the prisoner record.
"""

from http import HTTPStatus

from flask import Blueprint, jsonify

from handlers.context import get_context
from handlers.errors import int_arg, json_body, json_errors, not_found
from models.parole import Parole

parole_blueprint = Blueprint("paroles", __name__)


@parole_blueprint.route("/paroles", methods=["GET"])
@json_errors("Failed to retrieve parole records")
def list_paroles():
    repo = get_context().paroles
    prisoner_id = int_arg("prisoner_id")
    paroles = repo.get_by_prisoner_id(prisoner_id) if prisoner_id is not None else repo.get_all()
    return jsonify([p.to_dict() for p in paroles])


@parole_blueprint.route("/paroles/<int:parole_id>", methods=["GET"])
@json_errors("Failed to retrieve parole record")
def get_parole(parole_id: int):
    parole = get_context().paroles.get_by_id(parole_id)
    if parole is None:
        return not_found("Parole record not found")
    return jsonify(parole.to_dict())


@parole_blueprint.route("/paroles", methods=["POST"])
@json_errors("Failed to add parole record")
def create_parole():
    data = json_body()
    parole = get_context().paroles.create(
        Parole.from_dict(data),
        update_prisoner_status=bool(data.get("update_prisoner_status")),
    )
    return jsonify(parole.to_dict()), HTTPStatus.CREATED


@parole_blueprint.route("/paroles/<int:parole_id>", methods=["PUT"])
@json_errors("Failed to update parole record")
def update_parole(parole_id: int):
    data = json_body()
    parole = get_context().paroles.update(
        parole_id,
        Parole.from_dict(data),
        update_prisoner_status=bool(data.get("update_prisoner_status")),
    )
    return jsonify(parole.to_dict())


@parole_blueprint.route("/paroles/<int:parole_id>", methods=["DELETE"])
@json_errors("Failed to delete parole record")
def delete_parole(parole_id: int):
    get_context().paroles.delete(parole_id)
    return "", HTTPStatus.NO_CONTENT
