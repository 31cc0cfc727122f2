"""Format predicate registry.

Maps each recognized styleFormats predicate key to its CSS media feature
and its runtime comparison. Web output turns a predicate into a media
query; cross-platform output embeds the predicate table in the style
module and checks it at runtime with ``isFormat``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping

from src.generator.tree import FormatPredicate
from src.generator.values import format_number

# Registry mapping predicate field to (document key, CSS media feature)
FORMAT_PREDICATES: dict[str, tuple[str, str]] = {
    "min_width": ("minWidth", "min-width"),
    "max_width": ("maxWidth", "max-width"),
    "min_height": ("minHeight", "min-height"),
    "max_height": ("maxHeight", "max-height"),
    "orientation": ("orientation", "orientation"),
}


def media_condition(predicate: FormatPredicate) -> str:
    """Translate a predicate to a CSS media condition.

    Example: minWidth 1024 and orientation landscape become
    ``(min-width: 1024px) and (orientation: landscape)``.
    """
    parts = []
    for field_name, (_, feature) in FORMAT_PREDICATES.items():
        value = getattr(predicate, field_name)
        if value is None:
            continue
        if isinstance(value, (int, float)):
            parts.append(f"({feature}: {format_number(value)}px)")
        else:
            parts.append(f"({feature}: {value})")
    return " and ".join(parts)


def format_table(formats: Mapping[str, FormatPredicate]) -> str:
    """Render the styleFormats table as a source literal for runtime checks."""
    table = {}
    for name, predicate in formats.items():
        entry = {}
        for field_name, (key, _) in FORMAT_PREDICATES.items():
            value = getattr(predicate, field_name)
            if value is None:
                continue
            if isinstance(value, float) and value.is_integer():
                value = int(value)
            entry[key] = value
        table[name] = entry
    return json.dumps(table, indent=2)
