"""JSON request/response helpers shared by every route.

``read_json`` turns a request body into a validated model instance and maps
every decoding problem to a ``ClientInputError`` whose message is safe to show
to the caller. ``write_json`` renders an envelope as tab-indented JSON.
Neither helper logs; handlers and exception handlers decide what to report.
"""

from __future__ import annotations

import json
import re
from typing import Any, Mapping, Sequence, Type, TypeVar, Union

from fastapi import Request, Response
from pydantic import BaseModel, ValidationError
from pydantic_core import to_jsonable_python

from app.core.config import settings
from app.core.errors import (
    BodyTooLargeError,
    ClientInputError,
    EmptyBodyError,
    IncorrectTypeError,
    InvalidDecodeTargetError,
    InvalidIDParameterError,
    MalformedJSONError,
    MultipleJSONValuesError,
    ResponseEncodeError,
    UnknownFieldError,
)
from app.schemas.common import INT64_MAX, Envelope

M = TypeVar("M", bound=BaseModel)

HeaderValue = Union[str, Sequence[str]]

JSON_MEDIA_TYPE = "application/json"

# JSON insignificant whitespace; str.isspace() accepts far more.
_WHITESPACE = re.compile(r"[ \t\n\r]*")
_ID_PATTERN = re.compile(r"[+-]?[0-9]+")
_DIGITS = re.compile(r"[0-9]+")
# What is left of a number cut off after its integer digits.
_PARTIAL_NUMBER = re.compile(r"\.|[eE][+-]?")
_LITERALS = ("true", "false", "null")


class _NonStandardConstant(ValueError):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(name)


_decoder = json.JSONDecoder(parse_constant=_reject_constant)


async def _read_capped(request: Request, max_bytes: int) -> bytes:
    declared = request.headers.get("content-length")
    if declared is not None and _DIGITS.fullmatch(declared) and int(declared) > max_bytes:
        raise BodyTooLargeError(max_bytes)

    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > max_bytes:
            raise BodyTooLargeError(max_bytes)
        chunks.append(chunk)
    return b"".join(chunks)


def _byte_offset(text: str, pos: int) -> int:
    """1-based byte position of ``text[pos]`` in the UTF-8 body."""
    return len(text[:pos].encode("utf-8")) + 1


def _is_truncated(text: str, exc: json.JSONDecodeError) -> bool:
    if exc.pos >= len(text) or exc.msg.startswith("Unterminated string"):
        return True
    rest = text[exc.pos:].rstrip(" \t\n\r")
    if rest == "-" or any(literal.startswith(rest) for literal in _LITERALS):
        return True
    return (
        exc.pos > 0
        and text[exc.pos - 1].isdigit()
        and _PARTIAL_NUMBER.fullmatch(rest) is not None
    )


def _field_path(loc: Sequence[Union[str, int]]) -> str:
    return ".".join(part for part in loc if isinstance(part, str))


def _is_type_mismatch(error_type: str) -> bool:
    return (
        error_type.endswith("_type")
        or error_type.endswith("_parsing")
        or error_type == "int_from_float"
    )


def _translate_validation_error(exc: ValidationError, offset: int) -> ClientInputError | None:
    for error in exc.errors():
        loc = error["loc"]
        if error["type"] == "json_invalid":
            return MalformedJSONError()
        if error["type"] == "extra_forbidden":
            names = [part for part in loc if isinstance(part, str)]
            return UnknownFieldError(names[-1] if names else "")
        if _is_type_mismatch(error["type"]):
            field = _field_path(loc)
            if field:
                return IncorrectTypeError(field=field)
            return IncorrectTypeError(offset=offset)
    return None


def _check_target(model: Any) -> None:
    if not (isinstance(model, type) and issubclass(model, BaseModel)):
        raise InvalidDecodeTargetError(
            f"read_json needs a pydantic model class, got {model!r}"
        )
    if model.model_config.get("extra") != "forbid":
        raise InvalidDecodeTargetError(
            f"{model.__name__} must forbid extra fields to be used as a request body"
        )


async def read_json(request: Request, model: Type[M], *, max_bytes: int | None = None) -> M:
    """Decode exactly one JSON document from the request body into ``model``.

    The body is capped at ``max_bytes`` (``settings.MAX_BODY_BYTES`` when not
    given). Unknown keys and type mismatches are rejected, as is anything but
    whitespace after the first value. Validation failures that are neither are
    re-raised as the original ``ValidationError``.

    Raises:
        ClientInputError: a subclass describing what is wrong with the body.
        InvalidDecodeTargetError: ``model`` is not a usable model class.
    """
    _check_target(model)
    limit = settings.MAX_BODY_BYTES if max_bytes is None else max_bytes

    raw = await _read_capped(request, limit)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedJSONError(exc.start + 1) from exc

    start = _WHITESPACE.match(text, 0).end()
    if start == len(text):
        raise EmptyBodyError()

    try:
        _, end = _decoder.raw_decode(text, start)
    except json.JSONDecodeError as exc:
        if _is_truncated(text, exc):
            raise MalformedJSONError() from exc
        raise MalformedJSONError(_byte_offset(text, exc.pos)) from exc
    except _NonStandardConstant as exc:
        raise MalformedJSONError() from exc

    try:
        instance = model.model_validate_json(text[start:end], strict=True)
    except ValidationError as exc:
        translated = _translate_validation_error(exc, _byte_offset(text, start))
        if translated is None:
            raise
        raise translated from exc

    if _WHITESPACE.match(text, end).end() != len(text):
        raise MultipleJSONValuesError()
    return instance


def write_json(
    status: int,
    data: Envelope,
    headers: Mapping[str, HeaderValue] | None = None,
) -> Response:
    """Render ``data`` as a tab-indented JSON response.

    Serialisation happens before the response object is built, so a failure
    leaves nothing half-written. Caller headers are applied first and
    ``Content-Type`` is set last, so it cannot be overridden.

    Raises:
        ResponseEncodeError: ``data`` holds something JSON cannot represent.
    """
    try:
        body = json.dumps(
            data,
            indent="\t",
            ensure_ascii=False,
            allow_nan=False,
            default=to_jsonable_python,
        )
    except (TypeError, ValueError) as exc:
        raise ResponseEncodeError(str(exc)) from exc

    response = Response(content=(body + "\n").encode("utf-8"), status_code=status)
    for key, value in (headers or {}).items():
        if isinstance(value, str):
            response.headers[key] = value
            continue
        del response.headers[key]
        for item in value:
            response.headers.append(key, item)
    response.headers["Content-Type"] = JSON_MEDIA_TYPE
    return response


def read_id_param(request: Request) -> int:
    """Parse the ``id`` path parameter as a non-negative signed 64-bit integer."""
    raw = request.path_params.get("id")
    if raw is None or not _ID_PATTERN.fullmatch(str(raw)):
        raise InvalidIDParameterError()
    value = int(raw)
    if value < 0 or value > INT64_MAX:
        raise InvalidIDParameterError()
    return value
