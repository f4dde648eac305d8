#  Copyright ©  2025 SRI International.
#  This work is licensed under CC BY-NC-ND 4.0 license.
#  To view a copy of this license, visit https://creativecommons.org/licenses/by-nc-nd/4.0/
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from enum import Enum
import re
from typing import *

class FieldKind(Enum):
    STRING = "string"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    DURATION = "duration"

# nanoseconds per unit
DURATION_UNITS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_UNIT_ALT = "|".join(sorted(map(re.escape, DURATION_UNITS), key=len, reverse=True))
_COMPONENT = rf"(\d+\.?\d*|\.\d+)({_UNIT_ALT})"
_DURATION_RE = re.compile(rf"[-+]?(?:{_COMPONENT})+")
_COMPONENT_RE = re.compile(_COMPONENT)

ZERO_DURATION = timedelta(0)


def parse_duration(text: str) -> timedelta:
    """
    Parse a compact duration such as "300ms", "1.5h" or "2h45m".
    The bare literal "0" is accepted; every other component needs a unit.
    Raises ValueError on anything else. Resolution is one microsecond.
    """
    s = text.strip()
    if s in {"0", "+0", "-0"}:
        return ZERO_DURATION
    if not _DURATION_RE.fullmatch(s):
        raise ValueError(f"invalid duration {text!r}")
    sign = -1 if s.startswith("-") else 1
    total_ns = Decimal(0)
    for number, unit in _COMPONENT_RE.findall(s):
        try:
            total_ns += Decimal(number) * DURATION_UNITS[unit]
        except InvalidOperation as e:
            raise ValueError(f"invalid duration {text!r}") from e
    try:
        return sign * timedelta(microseconds=float(total_ns / 1000))
    except OverflowError as e:
        raise ValueError(f"duration out of range {text!r}") from e


def parse_bool(value: Any) -> bool:
    # only the exact lowercase literal is true
    if isinstance(value, bool):
        return value
    return str(value) == "true"


def parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError(f"expected an integer, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(str(value).strip())


def parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError(f"expected a number, got boolean {value!r}")
    if isinstance(value, (int, float)):
        return float(value)
    return float(str(value).strip())


def _duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError(f"expected a duration, got boolean {value!r}")
    if isinstance(value, (int, float)):
        # native numbers from a structured file are seconds
        try:
            return timedelta(seconds=value)
        except OverflowError as e:
            raise ValueError(f"duration out of range {value!r}") from e
    return parse_duration(str(value))


def _string(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


PARSERS: dict[FieldKind, Callable[[Any], Any]] = {
    FieldKind.STRING: _string,
    FieldKind.INT: parse_int,
    FieldKind.FLOAT: parse_float,
    FieldKind.BOOL: parse_bool,
    FieldKind.DURATION: _duration,
}

ZERO_VALUES: dict[FieldKind, Any] = {
    FieldKind.STRING: "",
    FieldKind.INT: 0,
    FieldKind.FLOAT: 0.0,
    FieldKind.BOOL: False,
    FieldKind.DURATION: ZERO_DURATION,
}


def coerce(kind: FieldKind, value: Any) -> Any:
    """Coerce a raw source value to `kind`; raises ValueError if it does not parse."""
    return PARSERS[kind](value)


def zero_value(kind: FieldKind) -> Any:
    return ZERO_VALUES[kind]


def is_zero(kind: FieldKind, value: Any) -> bool:
    return value == ZERO_VALUES[kind]
