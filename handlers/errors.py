"""
handlers/errors.py
------------------
Turns exceptions into HTTP responses. This is the only place where an
error becomes a status code.
"""

from functools import wraps
from http import HTTPStatus
from typing import Any, Callable, Optional

from flask import jsonify, request

from repositories.errors import EntityNotFoundError
from services.report_service import UnknownReportError
from utils.logger import get_logger

logger = get_logger(__name__)


class InvalidRequestError(ValueError):
    """The request itself is malformed (e.g. the body is not a JSON object)."""


def json_body() -> dict[str, Any]:
    """
    Return the request body as a dict.

    Raises:
        InvalidRequestError: If the body is missing or not a JSON object.
    """
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise InvalidRequestError("Request body must be a JSON object")
    return data


def int_arg(name: str) -> Optional[int]:
    """
    Read an integer query parameter.

    Returns:
        The parsed value, or None when the parameter is absent or empty.

    Raises:
        InvalidRequestError: If the parameter is given but is not an integer.
    """
    raw = request.args.get(name, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidRequestError(f"Query parameter '{name}' must be an integer, got '{raw}'")


def json_errors(failure_message: str) -> Callable:
    """
    Decorator that maps exceptions raised by a handler to JSON error responses.

    Usage:
        @bp.route("/prisoners")
        @json_errors("Failed to retrieve prisoners")
        def list_prisoners():
            ...

    Behavior:
        - EntityNotFoundError / UnknownReportError -> 404 {"error"}
        - InvalidRequestError -> 400 {"error"}
        - anything else -> 500 {"error": failure_message, "details"}, logged.
    """
    def decorator(func: Callable):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except (EntityNotFoundError, UnknownReportError) as e:
                logger.warning(f"{request.method} {request.path}: {e}")
                return jsonify({"error": str(e)}), HTTPStatus.NOT_FOUND
            except InvalidRequestError as e:
                logger.warning(f"{request.method} {request.path}: {e}")
                return jsonify({"error": str(e)}), HTTPStatus.BAD_REQUEST
            except Exception as e:
                logger.error(f"{failure_message} ({request.method} {request.path}): {e}")
                return (
                    jsonify({"error": failure_message, "details": str(e)}),
                    HTTPStatus.INTERNAL_SERVER_ERROR,
                )

        return wrapper

    return decorator


def not_found(message: str):
    """404 response for a by-id read that found nothing."""
    return jsonify({"error": message}), HTTPStatus.NOT_FOUND
