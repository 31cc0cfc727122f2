"""Visitor that lists the element nodes of a child tree in pre-order."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import NodeVisitor, Trail

if TYPE_CHECKING:
    from src.generator.tree import Child, ElementNode, FragmentNode, IfNode, MapNode

CollectedElements = list[tuple[Trail, "ElementNode"]]


class ElementCollector(NodeVisitor[CollectedElements]):
    """Collects (trail, element) pairs, parents before children.

    Pre-order in document order is the deterministic order used for name
    generation and stylesheet fragments.

    Usage:
        elements = ElementCollector().collect(component.children)
    """

    def collect(self, children: list[Child], trail: Trail = ()) -> CollectedElements:
        collected: CollectedElements = []
        for result in self.visit_children(children, trail):
            collected.extend(result)
        return collected

    def visit_default(self, node: Child, trail: Trail) -> CollectedElements:
        return []

    def combine_element(
        self, node: ElementNode, trail: Trail, children: list[CollectedElements]
    ) -> CollectedElements:
        return [(trail, node)] + _flatten(children)

    def combine_map(
        self, node: MapNode, trail: Trail, children: list[CollectedElements]
    ) -> CollectedElements:
        return _flatten(children)

    def combine_if(
        self,
        node: IfNode,
        trail: Trail,
        children: list[CollectedElements],
        else_children: list[CollectedElements] | None,
    ) -> CollectedElements:
        return _flatten(children) + _flatten(else_children or [])

    def combine_fragment(
        self, node: FragmentNode, trail: Trail, children: list[CollectedElements]
    ) -> CollectedElements:
        return _flatten(children)


def _flatten(groups: list[CollectedElements]) -> CollectedElements:
    return [item for group in groups for item in group]
