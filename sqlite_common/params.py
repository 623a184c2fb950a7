"""Positional parameter binding for prepared statements

Every value bound to a ``?`` placeholder is first classified into one of a
closed set of parameter kinds. Callers may also build the kinds explicitly
when they want a range check, e.g. ``LongParam(row_id)``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Sequence, Tuple, Union

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1
LONG_MIN = -(2**63)
LONG_MAX = 2**63 - 1


def _check_range(value, low, high, kind):
    if not low <= value <= high:
        raise OverflowError(f"{value} does not fit in a {kind} parameter")


@dataclass(frozen=True)
class IntParam:
    """32-bit integer"""

    value: int

    def __post_init__(self):
        _check_range(self.value, INT_MIN, INT_MAX, "32-bit integer")


@dataclass(frozen=True)
class NullableIntParam:
    """32-bit integer or SQL NULL"""

    value: Optional[int]

    def __post_init__(self):
        if self.value is not None:
            _check_range(self.value, INT_MIN, INT_MAX, "32-bit integer")


@dataclass(frozen=True)
class StrParam:
    value: str

    def __post_init__(self):
        if not isinstance(self.value, str):
            raise TypeError(f"StrParam expects str, got {type(self.value).__name__}")


@dataclass(frozen=True)
class LongParam:
    """64-bit integer"""

    value: int

    def __post_init__(self):
        _check_range(self.value, LONG_MIN, LONG_MAX, "64-bit integer")


@dataclass(frozen=True)
class ObjectParam:
    """Anything else; the driver decides whether it can be stored"""

    value: Any


Param = Union[IntParam, NullableIntParam, StrParam, LongParam, ObjectParam]

_PARAM_TYPES = (IntParam, NullableIntParam, StrParam, LongParam, ObjectParam)


class IdType(Enum):
    """Integer widths an id column can be read as"""

    INT = "int"
    LONG = "long"


def to_param(value: Any) -> Param:
    """Classify a raw value into its parameter kind"""
    if isinstance(value, _PARAM_TYPES):
        return value
    # bool is an int subclass but is not an integer parameter
    if isinstance(value, bool):
        return ObjectParam(value)
    if isinstance(value, int):
        if INT_MIN <= value <= INT_MAX:
            return IntParam(value)
        return LongParam(value)
    if value is None:
        return NullableIntParam(None)
    if isinstance(value, str):
        return StrParam(value)
    return ObjectParam(value)


def bind_params(values: Sequence[Any]) -> Tuple[Any, ...]:
    """Return the positional tuple handed to the driver

    Position i in the result binds to the (i + 1)th placeholder.
    """
    return tuple(to_param(value).value for value in values)
