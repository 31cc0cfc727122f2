"""Style emission tables, one per target platform.

Each style entry kind maps to an emitter that writes into a StyleSink:
runtime fragments (source expressions merged at render time, later
fragments win) or CSS blocks for the style module. Platform differences
live entirely in which emitter each table holds; selector and static
string entries map to ``_drop`` on cross-platform.
"""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.generator.registries.formats import media_condition
from src.generator.tree import (
    ConditionalStyle,
    DynamicStyle,
    FormatPredicate,
    FormatStyle,
    PlainStyle,
    SelectorStyle,
    StaticStyle,
    StyleEntry,
)
from src.generator.values import format_number, render_value

logger = logging.getLogger(__name__)

INDENT = "  "

# Numeric values for these properties are emitted without a unit
UNITLESS_PROPERTIES = frozenset(
    {"opacity", "zIndex", "flex", "flexGrow", "flexShrink", "fontWeight", "lineHeight",
     "order", "zoom"}
)

_UPPER_RE = re.compile(r"([A-Z])")


@dataclass
class StyleSink:
    """Collects one element's style output.

    Attributes:
        class_name: Resolved name of the element, used as its CSS class
        runtime: Runtime fragments in declaration order
        css_blocks: CSS rules scoped under the class
        helpers: Runtime helpers the fragments call (e.g. ``isFormat``)
    """

    class_name: str
    runtime: list[str] = field(default_factory=list)
    css_blocks: list[str] = field(default_factory=list)
    helpers: list[str] = field(default_factory=list)

    @property
    def has_static(self) -> bool:
        return bool(self.css_blocks)

    def use_helper(self, name: str) -> None:
        if name not in self.helpers:
            self.helpers.append(name)


StyleEmitter = Callable[[Any, StyleSink, Mapping[str, FormatPredicate]], None]


# =============================================================================
# CSS helpers
# =============================================================================


def css_property(key: str) -> str:
    """camelCase to kebab-case; custom properties (``--x``) are kept."""
    if key.startswith("--"):
        return key
    return _UPPER_RE.sub(lambda m: "-" + m.group(1).lower(), key)


def css_value(key: str, value: Any) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if key in UNITLESS_PROPERTIES or value == 0:
            return format_number(value)
        return f"{format_number(value)}px"
    return str(value)


def css_rule(selector: str, style: Mapping[str, Any], important: bool = False,
             depth: int = 0) -> str:
    pad = INDENT * depth
    suffix = " !important" if important else ""
    lines = [f"{pad}{selector} {{"]
    for key, value in style.items():
        lines.append(f"{pad}{INDENT}{css_property(key)}: {css_value(key, value)}{suffix};")
    lines.append(f"{pad}}}")
    return "\n".join(lines)


def split_selector_list(selector: str) -> list[str]:
    """Split a selector list on top-level commas."""
    parts: list[str] = []
    depth = 0
    start = 0
    for i, char in enumerate(selector):
        if char in "([":
            depth += 1
        elif char in ")]":
            depth = max(0, depth - 1)
        elif char == "," and depth == 0:
            parts.append(selector[start:i])
            start = i + 1
    parts.append(selector[start:])
    return parts


def scope_selector(selector: str, class_name: str) -> str:
    """Scope a raw selector under a class.

    ``&`` stands for the class itself (``&:hover``); a selector without
    ``&`` targets descendants. Comma-separated selectors are scoped one by
    one; commas inside ``(...)`` or ``[...]`` belong to their selector.
    """
    scoped = []
    for part in split_selector_list(selector):
        part = part.strip()
        if "&" in part:
            scoped.append(part.replace("&", f".{class_name}"))
        else:
            scoped.append(f".{class_name} {part}")
    return ", ".join(scoped)


# =============================================================================
# Emitters
# =============================================================================


def _runtime_object(entry: PlainStyle, sink: StyleSink, formats) -> None:
    sink.runtime.append(render_value(entry.style))


def _runtime_conditional(entry: ConditionalStyle, sink: StyleSink, formats) -> None:
    sink.runtime.append(f"({entry.condition}) && {render_value(entry.style)}")


def _runtime_dynamic(entry: DynamicStyle, sink: StyleSink, formats) -> None:
    sink.runtime.append(f"({entry.script})")


def _runtime_format(entry: FormatStyle, sink: StyleSink, formats) -> None:
    sink.use_helper("isFormat")
    sink.runtime.append(f"isFormat({json.dumps(entry.format)}) && {render_value(entry.style)}")


def _css_format(entry: FormatStyle, sink: StyleSink, formats) -> None:
    condition = media_condition(formats[entry.format])
    rule = css_rule(f".{sink.class_name}", entry.style, important=True, depth=1)
    sink.css_blocks.append(f"@media {condition} {{\n{rule}\n}}")


def _css_selector(entry: SelectorStyle, sink: StyleSink, formats) -> None:
    sink.css_blocks.append(css_rule(scope_selector(entry.selector, sink.class_name), entry.style))


def _css_static(entry: StaticStyle, sink: StyleSink, formats) -> None:
    sink.css_blocks.append(f".{sink.class_name} {{\n{entry.css}\n}}")


def _drop(entry: StyleEntry, sink: StyleSink, formats) -> None:
    logger.debug(f"{sink.class_name}: '{entry.kind}' style has no cross-platform equivalent")


# Registry mapping style entry kind to emitter, per platform
WEB_STYLE_EMITTERS: dict[str, StyleEmitter] = {
    "object": _runtime_object,
    "conditional": _runtime_conditional,
    "dynamic": _runtime_dynamic,
    "format": _css_format,
    "selector": _css_selector,
    "static": _css_static,
}

CROSS_PLATFORM_STYLE_EMITTERS: dict[str, StyleEmitter] = {
    "object": _runtime_object,
    "conditional": _runtime_conditional,
    "dynamic": _runtime_dynamic,
    "format": _runtime_format,
    "selector": _drop,
    "static": _drop,
}
