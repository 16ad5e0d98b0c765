"""Module for miscellaneous multi-use functions"""

__all__ = ['dump_compact_json', 'is_number', 'stringify_property']

import json
from typing import Any


def dump_compact_json(obj: Any) -> str:
    """
    Serializes a JSON-compatible value to its canonical compact text form:
    no insignificant whitespace, object keys sorted, non-ASCII kept as-is.

    Args:
        obj:
            A JSON-compatible value

    Returns:
        str
    """
    return json.dumps(obj, separators=(',', ':'), sort_keys=True, ensure_ascii=False)


def is_number(value: Any) -> bool:
    """True for JSON numbers; booleans are not numbers"""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def stringify_property(value: Any) -> str:
    """Strings are kept verbatim, anything else becomes its compact JSON text"""
    if isinstance(value, str):
        return value

    return dump_compact_json(value)
