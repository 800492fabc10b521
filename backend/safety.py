# safety.py
import math
from decimal import Decimal, InvalidOperation
from numbers import Real
from typing import Tuple

from constants import WeightUnit
from models import InvalidWeightError, InvalidUnitError, DataTypeError, ScoreInputError

def require_weight(value, field: str = "weight") -> Decimal:
    """
    Fail-fast contract shared by every dosing function.
    Negative / NaN / infinite inputs raise; nothing is clamped.
    """
    # bool is an int subclass; True kg is never a real measurement
    if isinstance(value, bool):
        raise InvalidWeightError(f"{field} must be a number, got a boolean")
    if not isinstance(value, (Real, Decimal)):
        raise DataTypeError(f"Field '{field}' must be numeric, got {type(value)}")

    if isinstance(value, Decimal):
        weight = value
    else:
        if not math.isfinite(value):
            raise InvalidWeightError(f"{field} must be finite, got {value}")
        try:
            # str() keeps the shortest repr, so 59.9 stays 59.9 and not 59.899999...
            weight = Decimal(str(value))
        except InvalidOperation:
            raise DataTypeError(f"Field '{field}' must be numeric, got {value!r}")

    if not weight.is_finite():
        raise InvalidWeightError(f"{field} must be finite, got {value}")
    if weight < 0:
        raise InvalidWeightError(f"{field} must be >= 0, got {value}")
    return weight

def coerce_unit(unit) -> WeightUnit:
    if isinstance(unit, WeightUnit):
        return unit
    if isinstance(unit, str):
        try:
            return WeightUnit(unit.strip().lower())
        except ValueError:
            pass
    raise InvalidUnitError(f"Unknown weight unit {unit!r}. Expected 'kg' or 'lbs'")

def require_int_in_range(field: str, value, bounds: Tuple[int, int]) -> int:
    lo, hi = bounds
    if isinstance(value, bool) or not isinstance(value, int):
        raise DataTypeError(f"Field '{field}' must be an integer, got {type(value)}")
    if not (lo <= value <= hi):
        raise ScoreInputError(f"Invalid {field}: {value} (expected {lo}-{hi})")
    return value

def require_non_negative(field: str, value) -> float:
    if isinstance(value, bool) or not isinstance(value, (Real, Decimal)):
        raise DataTypeError(f"Field '{field}' must be numeric, got {type(value)}")
    if isinstance(value, float) and not math.isfinite(value):
        raise ScoreInputError(f"Invalid {field}: {value}")
    if value < 0:
        raise ScoreInputError(f"Invalid {field}: {value} (must be >= 0)")
    return value
