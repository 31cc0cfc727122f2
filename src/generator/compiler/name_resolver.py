"""Name resolver: deterministic, collision-free names for every element.

Names are a pure function of the document: explicit names are reserved
first, then every unnamed element receives
``<Component>_<type>_<i>_<j>...`` from its sibling-index trail. A
generated name that collides with a reserved or earlier name gets a
numeric suffix (``Name``, ``Name2``, ``Name3``, ...). Traversal follows
component declaration order and pre-order within each tree, so unchanged
input always yields the same names.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from src.generator.errors import ConflictError
from src.generator.visitors import ElementCollector

if TYPE_CHECKING:
    from src.generator.context import CompilationContext

_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_]")


def generated_name(component: str, node_type: str, trail: tuple[str, ...]) -> str:
    """Base name for an unnamed element, before collision handling."""
    parts = [component, _UNSAFE_RE.sub("_", node_type), *trail]
    return "_".join(parts)


def resolve_names(ctx: CompilationContext) -> None:
    """Register component definitions and name every element node.

    Duplicate explicit names (component or element) are reported as
    ConflictError with both locations; the first declaration keeps the name.
    """
    reserved: dict[str, str] = {}

    # Pass 1: component definitions and explicit element names
    collected = []
    for component in ctx.tree.components:
        existing = ctx.register_component(component)
        if existing is not None:
            ctx.errors.append(
                ConflictError(
                    f"{component.path}.name",
                    f"Duplicate component name '{component.name}'",
                    f"{existing.path}.name",
                )
            )
            continue
        _reserve(ctx, reserved, component.name, f"{component.path}.name")
        ctx.assign_name(component.path, component.name)

        elements = ElementCollector().collect(component.children)
        collected.append((component, elements))
        for _, node in elements:
            if node.name is not None:
                if _reserve(ctx, reserved, node.name, f"{node.path}.name"):
                    ctx.assign_name(node.path, node.name)

    # Pass 2: generated names for the rest
    used = set(reserved)
    for component, elements in collected:
        for trail, node in elements:
            if node.name is not None:
                continue
            base = generated_name(component.name, node.type, trail)
            name = base
            suffix = 2
            while name in used:
                name = f"{base}{suffix}"
                suffix += 1
            used.add(name)
            ctx.assign_name(node.path, name)


def _reserve(ctx: CompilationContext, reserved: dict[str, str], name: str, path: str) -> bool:
    other = reserved.get(name)
    if other is not None:
        ctx.errors.append(ConflictError(path, f"Duplicate name '{name}'", other))
        return False
    reserved[name] = path
    return True
