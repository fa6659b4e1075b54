"""
Request decoding helpers shared by the catalog routers.
"""

from __future__ import annotations

import json
from typing import TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError
from starlette.datastructures import QueryParams

from .errors import MalformedRequest, RecordNotFound
from .validator import Validator

MAX_BODY_BYTES = 1_048_576
MAX_ID = 2**63 - 1

ModelT = TypeVar("ModelT", bound=BaseModel)


def _reject_constant(name: str) -> None:
    # NaN and Infinity are not JSON.
    raise MalformedRequest(f"body contains invalid JSON value {name}")


def _describe_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    if first.get("type") == "extra_forbidden":
        return f'body contains unknown key "{location}"'
    if location:
        return f'body contains incorrect JSON type for "{location}"'
    return "body contains incorrect JSON type"


async def read_json(request: Request, model: type[ModelT]) -> ModelT:
    """
    Decode the request body into `model`.

    Every decoding problem (size, syntax, shape, types, unknown keys) is a
    client error and raises `MalformedRequest`. Business rules are checked
    afterwards by the caller's Validator.
    """
    body = await request.body()
    if len(body) > MAX_BODY_BYTES:
        raise MalformedRequest(f"body must not be larger than {MAX_BODY_BYTES} bytes")
    if not body.strip():
        raise MalformedRequest("body must not be empty")

    try:
        data = json.loads(body, parse_constant=_reject_constant)
    except UnicodeDecodeError as exc:
        raise MalformedRequest("body must be UTF-8 encoded") from exc
    except json.JSONDecodeError as exc:
        raise MalformedRequest(f"body contains badly-formed JSON (at character {exc.pos})") from exc

    if not isinstance(data, dict):
        raise MalformedRequest("body must contain a single JSON object")

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedRequest(_describe_validation_error(exc)) from exc


def read_id_param(raw: str) -> int:
    # Plain ASCII digits only; ids are bigint.
    if not raw or not (raw.isascii() and raw.isdigit()):
        raise RecordNotFound()
    record_id = int(raw)
    if record_id < 1 or record_id > MAX_ID:
        raise RecordNotFound()
    return record_id


def read_string(qs: QueryParams, key: str, default: str) -> str:
    value = qs.get(key, "")
    if value == "":
        return default
    return value


def read_int(qs: QueryParams, key: str, default: int, v: Validator) -> int:
    value = qs.get(key, "")
    if value == "":
        return default
    try:
        return int(value)
    except ValueError:
        v.add_error(key, "must be an integer value")
        return default
