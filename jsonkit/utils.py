"""Utility functions for jsonkit."""

from __future__ import annotations

import json
import logging
import math
import sys
from typing import Any, Iterable, Optional

from .models import MISSING, JsonType, LogLevel

Segment = str | int


def json_type_of(value: Any) -> JsonType:
    """
    Get the JSON type tag for a Python value.

    Args:
        value: A value produced by a JSON/YAML parser

    Returns:
        The JsonType of the value
    """
    if value is None:
        return JsonType.NULL
    elif isinstance(value, bool):
        return JsonType.BOOLEAN
    elif isinstance(value, (int, float)):
        return JsonType.NUMBER
    elif isinstance(value, str):
        return JsonType.STRING
    elif isinstance(value, (list, tuple)):
        return JsonType.ARRAY
    elif isinstance(value, dict):
        return JsonType.OBJECT
    raise TypeError(f"Not a JSON value: {type(value).__name__}")


def is_numeric(value: Any) -> bool:
    """Check if a value is numeric (int or float)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integral(value: Any) -> bool:
    """Check if a numeric value has no fractional part."""
    if isinstance(value, int):
        return True
    return math.isfinite(value) and value.is_integer()


def segment_label(segment: Segment) -> str:
    """Label for a single path segment: the key itself or the [i] index form."""
    if isinstance(segment, int):
        return f"[{segment}]"
    return segment


def build_path(segments: Iterable[Segment]) -> str:
    """Render segments in dotted/bracketed form, e.g. 'a.b[2].c'."""
    path = ""
    for segment in segments:
        if isinstance(segment, int):
            path = f"{path}[{segment}]"
        elif path:
            path = f"{path}.{segment}"
        else:
            path = segment
    return path


def escape_pointer_segment(segment: Segment) -> str:
    return str(segment).replace("~", "~0").replace("/", "~1")


def build_pointer(segments: Iterable[Segment]) -> str:
    """Render segments as a root-relative pointer, e.g. '/a/b/0'. Root is '/'."""
    parts = [escape_pointer_segment(s) for s in segments]
    if not parts:
        return "/"
    return "/" + "/".join(parts)


def utf16_length(text: str) -> int:
    """Length of a string in UTF-16 code units."""
    # Lone surrogates are legal in parsed JSON strings and count as one unit
    return len(text.encode("utf-16-le", "surrogatepass")) // 2


def strict_equals(left: Any, right: Any) -> bool:
    """
    Primitive equality in the JSON sense.

    Containers are only equal to themselves (identity), never by structure.
    Booleans are never equal to numbers.
    """
    left_type = json_type_of(left)
    right_type = json_type_of(right)
    if left_type.is_container or right_type.is_container:
        return left is right
    if left_type != right_type:
        return False
    return left == right


def format_value(value: Any) -> str:
    """
    Format a value for human display.

    Strings are double-quoted, containers pretty-printed, null and absent
    values rendered as the literal tokens 'null' and 'undefined'.
    """
    if value is MISSING:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list, tuple)):
        try:
            return json.dumps(value, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            return str(value)
    return json.dumps(value)


_LOG_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARN: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
}


def apply_log_level(level: Optional[LogLevel]) -> None:
    """Set the level of the package logger from a config LogLevel, if one is given."""
    if level is not None:
        logging.getLogger("jsonkit").setLevel(_LOG_LEVELS[level])


def default_max_depth() -> int:
    """
    Nesting depth the recursive walkers can reach under the current recursion limit.

    Each nesting level costs two interpreter frames; a third of the limit is
    left for the caller.
    """
    return max(sys.getrecursionlimit() // 3, 1)
