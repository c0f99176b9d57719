"""
Request body helpers.

Authenticated routes read their JSON body by hand, after the identity
dependency has run, so a bad token is reported before a bad body.
"""

import json
from typing import Any, Dict, Type, TypeVar

from fastapi import Request, status
from pydantic import BaseModel, ValidationError

from libs.result import Error
from src.api.error import ClientError

M = TypeVar("M", bound=BaseModel)


def _invalid_body(message: str) -> ClientError:
    return ClientError(Error("INVALID_BODY", message), status.HTTP_400_BAD_REQUEST)


async def read_json_object(request: Request, required: bool = True) -> Dict[str, Any]:
    """Decode the body as a JSON object; an empty body is {} when not required"""
    raw = await request.body()
    if not raw.strip():
        if required:
            raise _invalid_body("Request body must be a JSON object")
        return {}

    try:
        body = json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise _invalid_body("Request body is not valid JSON")

    if not isinstance(body, dict):
        raise _invalid_body("Request body must be a JSON object")
    return body


def parse_model(model: Type[M], body: Dict[str, Any]) -> M:
    try:
        return model.model_validate(body)
    except ValidationError as e:
        first = e.errors()[0] if e.errors() else {}
        location = ".".join(str(part) for part in first.get("loc", ()))
        message = first.get("msg", "Invalid request body")
        raise _invalid_body(f"{location}: {message}" if location else message)
