from __future__ import annotations

from typing import Annotated, Any, Dict

from pydantic import AfterValidator, BaseModel, ConfigDict
from pydantic_core import PydanticCustomError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Top-level shape of every JSON response body.
Envelope = Dict[str, Any]


def _fits_int64(value: int) -> int:
    if not INT64_MIN <= value <= INT64_MAX:
        raise PydanticCustomError("int64_type", "Input should fit in a signed 64-bit integer")
    return value


# Integers outside int64 are a type mismatch, not a range violation.
Int64 = Annotated[int, AfterValidator(_fits_int64)]


class StrictModel(BaseModel):
    """Base for request bodies: unknown keys are rejected, types are not coerced."""

    model_config = ConfigDict(extra="forbid", strict=True)
