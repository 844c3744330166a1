"""
handlers/prisoner_handler.py
----------------------------
HTTP endpoints for prisoner records.

    GET    /prisoners            list, or search with ?name=&cellblock_id=&offense=&parole_status=
    POST   /prisoners            create
    GET    /prisoners/<id>       read
    PUT    /prisoners/<id>       full update
    DELETE /prisoners/<id>       delete
"""

from http import HTTPStatus

from flask import Blueprint, jsonify, request

from handlers.context import get_context
from handlers.errors import int_arg, json_body, json_errors, not_found
from models.prisoner import Prisoner

prisoner_blueprint = Blueprint("prisoners", __name__)

SEARCH_FIELDS = ("name", "cellblock_id", "offense", "parole_status")


@prisoner_blueprint.route("/prisoners", methods=["GET"])
@json_errors("Failed to retrieve prisoners")
def list_prisoners():
    repo = get_context().prisoners
    criteria = {k: request.args.get(k) for k in SEARCH_FIELDS if request.args.get(k)}
    if "cellblock_id" in criteria:
        criteria["cellblock_id"] = int_arg("cellblock_id")
    prisoners = repo.search(**criteria) if criteria else repo.get_all()
    return jsonify([p.to_dict() for p in prisoners])


@prisoner_blueprint.route("/prisoners/<int:prisoner_id>", methods=["GET"])
@json_errors("Failed to retrieve prisoner")
def get_prisoner(prisoner_id: int):
    prisoner = get_context().prisoners.get_by_id(prisoner_id)
    if prisoner is None:
        return not_found("Prisoner not found")
    return jsonify(prisoner.to_dict())


@prisoner_blueprint.route("/prisoners", methods=["POST"])
@json_errors("Failed to add prisoner")
def create_prisoner():
    prisoner = get_context().prisoners.create(Prisoner.from_dict(json_body()))
    return jsonify(prisoner.to_dict()), HTTPStatus.CREATED


@prisoner_blueprint.route("/prisoners/<int:prisoner_id>", methods=["PUT"])
@json_errors("Failed to update prisoner")
def update_prisoner(prisoner_id: int):
    prisoner = get_context().prisoners.update(prisoner_id, Prisoner.from_dict(json_body()))
    return jsonify(prisoner.to_dict())


@prisoner_blueprint.route("/prisoners/<int:prisoner_id>", methods=["DELETE"])
@json_errors("Failed to delete prisoner")
def delete_prisoner(prisoner_id: int):
    get_context().prisoners.delete(prisoner_id)
    return "", HTTPStatus.NO_CONTENT
