"""Visitor that finds references to other component definitions."""

from __future__ import annotations

from collections.abc import Container
from typing import TYPE_CHECKING

from .base import NodeVisitor, Trail

if TYPE_CHECKING:
    from src.generator.tree import Child, ElementNode, FragmentNode, IfNode, MapNode


class ComponentReferenceCollector(NodeVisitor[list[str]]):
    """Collects the names of component definitions used as element types.

    A node's ``type`` is a weak reference: it names another definition in
    the registry rather than owning it. Names are returned once each, in
    order of first use.

    Usage:
        collector = ComponentReferenceCollector(ctx.components)
        names = collector.collect(component.children)
    """

    def __init__(self, registry: Container[str]) -> None:
        self.registry = registry

    def collect(self, children: list[Child]) -> list[str]:
        names: list[str] = []
        for result in self.visit_children(children, ()):
            _extend_unique(names, result)
        return names

    def visit_default(self, node: Child, trail: Trail) -> list[str]:
        return []

    def combine_element(
        self, node: ElementNode, trail: Trail, children: list[list[str]]
    ) -> list[str]:
        names = [node.type] if node.type in self.registry else []
        for child in children:
            _extend_unique(names, child)
        return names

    def combine_map(self, node: MapNode, trail: Trail, children: list[list[str]]) -> list[str]:
        return _merge(children)

    def combine_if(
        self,
        node: IfNode,
        trail: Trail,
        children: list[list[str]],
        else_children: list[list[str]] | None,
    ) -> list[str]:
        return _merge(children + (else_children or []))

    def combine_fragment(
        self, node: FragmentNode, trail: Trail, children: list[list[str]]
    ) -> list[str]:
        return _merge(children)


def _extend_unique(target: list[str], names: list[str]) -> None:
    for name in names:
        if name not in target:
            target.append(name)


def _merge(groups: list[list[str]]) -> list[str]:
    merged: list[str] = []
    for group in groups:
        _extend_unique(merged, group)
    return merged
