"""Helpers for embedded script strings and JSON value rendering.

A string wrapped in a single outer pair of braces (``"{count}"``) is a
script reference: opaque code that is copied verbatim into the output.
Any other string is a literal.
"""

from __future__ import annotations

import json
import re
from typing import Any

IDENTIFIER_RE = re.compile(r"^[A-Za-z_$][A-Za-z0-9_$]*$")


def is_identifier(name: Any) -> bool:
    return isinstance(name, str) and bool(IDENTIFIER_RE.match(name))


def is_script_ref(value: Any) -> bool:
    """Return True if value is a brace-wrapped script reference.

    The opening brace must only close at the final character, so
    ``"{a} and {b}"`` is not a script reference.
    """
    if not isinstance(value, str) or len(value) < 2:
        return False
    if value[0] != "{" or value[-1] != "}":
        return False
    depth = 0
    for i, char in enumerate(value):
        if char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0 and i != len(value) - 1:
                return False
    return depth == 0


def has_braces(value: str) -> bool:
    return "{" in value or "}" in value


def script_text(value: str) -> str:
    """Strip the outer braces of a script reference, if present.

    Used for fields that always hold code (conditions, effect bodies,
    data sources), where the braces are optional.
    """
    if is_script_ref(value):
        return value[1:-1]
    return value


def render_key(key: str) -> str:
    return key if is_identifier(key) else json.dumps(key, ensure_ascii=False)


def render_value(value: Any) -> str:
    """Render a JSON value as a source-level literal.

    Script references are emitted verbatim (without their braces).
    """
    if isinstance(value, str):
        if is_script_ref(value):
            return value[1:-1]
        return json.dumps(value, ensure_ascii=False)
    if value is True:
        return "true"
    if value is False:
        return "false"
    if value is None:
        return "null"
    if isinstance(value, (int, float)):
        return json.dumps(value)
    if isinstance(value, list):
        return "[" + ", ".join(render_value(v) for v in value) + "]"
    if isinstance(value, dict):
        if not value:
            return "{}"
        items = ", ".join(f"{render_key(k)}: {render_value(v)}" for k, v in value.items())
        return "{" + items + "}"
    raise TypeError(f"Cannot render value of type {type(value).__name__}")


def format_number(value: int | float) -> str:
    """Render a number without a trailing ``.0`` for integral floats."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
