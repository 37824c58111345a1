"""
Parameter Validation - Request input contract for camera commands.

Validators never raise for bad input; they return a ParamResult that holds
either the parsed value or the fixed plain-text rejection message.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

CAMERA_ID_MIN = 0
CAMERA_ID_MAX = 3

MISSING_CAMERA_ID = "Missing camera_id parameter"
INVALID_CAMERA_ID = "Invalid camera_id parameter"
CAMERA_ID_OUT_OF_RANGE = "Camera_id out of range"
MISSING_OR_INVALID_PARAMS = "Missing or invalid parameters"

# Sign, leading zeros, then at most 10 significant digits.
_INT_RE = re.compile(r"(-?)0*([0-9]{1,10})")

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1


@dataclass(frozen=True)
class ParamResult:
    """Outcome of validating one or more request parameters."""

    value: Any = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def parse_int(raw: str | None) -> int | None:
    """
    Parses a strict decimal 32-bit signed integer.

    Returns None for anything else, including values outside the int32 range.
    """
    if raw is None:
        return None
    match = _INT_RE.fullmatch(raw)
    if match is None:
        return None
    sign, digits = match.groups()
    value = -int(digits) if sign else int(digits)
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def validate_camera_id(params: Mapping[str, str]) -> ParamResult:
    """
    Extracts camera_id and checks it lies in [CAMERA_ID_MIN, CAMERA_ID_MAX].

    Absent and empty values are both reported as missing.
    """
    raw = params.get("camera_id")
    if not raw:
        return ParamResult(error=MISSING_CAMERA_ID)

    camera_id = parse_int(raw)
    if camera_id is None:
        return ParamResult(error=INVALID_CAMERA_ID)

    if camera_id < CAMERA_ID_MIN or camera_id > CAMERA_ID_MAX:
        return ParamResult(error=CAMERA_ID_OUT_OF_RANGE)

    return ParamResult(value=camera_id)


def validate_int_params(params: Mapping[str, str], names: Sequence[str]) -> ParamResult:
    """
    Extracts integer parameters by name.

    On success value is a tuple of ints in the order of names. Any absent,
    empty, or unparseable parameter rejects the whole set.
    """
    values = []
    for name in names:
        value = parse_int(params.get(name) or None)
        if value is None:
            return ParamResult(error=MISSING_OR_INVALID_PARAMS)
        values.append(value)
    return ParamResult(value=tuple(values))
