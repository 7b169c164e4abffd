from __future__ import annotations

import pytest

from app.api.json_io import read_id_param
from app.core.errors import InvalidIDParameterError


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("42", 42), ("0", 0), ("+7", 7), ("-0", 0), ("9223372036854775807", 9223372036854775807)],
)
def test_valid_ids(make_request, raw: str, expected: int) -> None:
    assert read_id_param(make_request(path_params={"id": raw})) == expected


@pytest.mark.parametrize(
    "raw",
    ["-1", "abc", "", " 42", "4_2", "1.5", "0x1f", "9223372036854775808"],
)
def test_invalid_ids(make_request, raw: str) -> None:
    with pytest.raises(InvalidIDParameterError) as info:
        read_id_param(make_request(path_params={"id": raw}))
    assert info.value.message == "invalid id parameter"


def test_missing_id(make_request) -> None:
    with pytest.raises(InvalidIDParameterError):
        read_id_param(make_request())
