# unitturn/routes/common.py
import sqlite3
from typing import Any, Tuple

from flask import jsonify, request
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from unitturn.logger import get_logger
from unitturn.schemas.api_result import ApiResult
from unitturn.schemas.error_type import ErrorType, HTTP_STATUS

logger = get_logger(__name__)

OPERATOR_HEADER = "X-Operator-Id"
ANONYMOUS_OPERATOR = "anonymous"


def classify_error(e: Exception) -> Tuple[ErrorType, str]:
    """
    Map an exception raised by a service to an ErrorType.
    Services raise ValueError for bad input / missing rows and RuntimeError
    for state conflicts, so the message decides the finer split.
    """
    msg = str(e)
    lowered = msg.lower()

    if isinstance(e, ValidationError):
        return ErrorType.VALIDATION_ERROR, msg
    if isinstance(e, (SQLAlchemyError, sqlite3.Error)):
        return ErrorType.DATABASE_ERROR, msg

    if isinstance(e, RuntimeError):
        if "already exported" in lowered or "must be saved" in lowered:
            return ErrorType.STATE_CONFLICT, msg
        return ErrorType.SYSTEM_ERROR, msg

    if isinstance(e, ValueError):
        if "not found" in lowered:
            return ErrorType.NOT_FOUND, msg
        if "invalid value" in lowered:
            return ErrorType.VALIDATION_ERROR, msg
        return ErrorType.INPUT_ERROR, msg

    return ErrorType.SYSTEM_ERROR, msg


def ok(data: Any = None, status: int = 200):
    return jsonify(ApiResult.success(data).model_dump(mode="json")), status


def fail(e: Exception):
    error_type, msg = classify_error(e)
    status = HTTP_STATUS[error_type]
    if status >= 500:
        logger.exception("Request %s %s failed", request.method, request.path)
    else:
        logger.info("Request %s %s rejected: %s %s", request.method, request.path, error_type.value, msg)
    return jsonify(ApiResult.failure(error_type, msg).model_dump(mode="json")), status


def get_operator_id() -> str:
    return request.headers.get(OPERATOR_HEADER) or ANONYMOUS_OPERATOR


def get_json_body() -> dict:
    body = request.get_json(silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise ValueError("Request body must be a JSON object")
    return body
