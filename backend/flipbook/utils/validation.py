# backend/flipbook/utils/validation.py
import math
import re
from typing import Any, Optional

from ..errors import InvalidInput

_ID_PATTERN = re.compile(r"^\d+$")


def parse_positive_id(raw: Any, message: str = "invalid id") -> int:
    """Parse a path id, raising InvalidInput unless it is a positive integer"""
    if isinstance(raw, bool):
        raise InvalidInput(message)
    if isinstance(raw, int):
        value = raw
    else:
        text = str(raw).strip()
        if not _ID_PATTERN.match(text):
            raise InvalidInput(message)
        value = int(text)

    if value <= 0:
        raise InvalidInput(message)
    return value


def coerce_sort_order(value: Any) -> Optional[int]:
    """Integer sort order from a loosely typed JSON value.

    Returns None for anything that is not an integer (including null,
    booleans, fractional numbers and non-numeric strings) so the caller
    keeps the stored value.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        if not math.isfinite(number):
            return None
        return int(number) if number.is_integer() else None
    return None
