"""Base visitor class for component child trees."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, TypeVar

if TYPE_CHECKING:
    from src.generator.tree import (
        Child,
        ElementNode,
        FragmentNode,
        IfNode,
        MapNode,
    )

T = TypeVar("T")

Trail = tuple[str, ...]


class NodeVisitor(ABC, Generic[T]):
    """Abstract visitor for child trees.

    Subclasses implement visit methods for specific node types. The base
    class handles traversal for container nodes (Element, Map, If,
    Fragment) and passes each node its trail: the sibling-index path from
    the component root, e.g. ``("0", "2")``. If-nodes continue the trail
    of their else branch under an ``else`` segment.

    Type parameter T is the return type of visit methods.

    Usage:
        class MyVisitor(NodeVisitor[int]):
            def visit_default(self, node, trail):
                return 1

            def combine_element(self, node, trail, children):
                return 1 + sum(children)
    """

    def visit(self, node: Child, trail: Trail = ()) -> T:
        """Dispatch to the appropriate visit method.

        Looks for visit_{ClassName} method, falls back to visit_default.
        """
        method_name = f"visit_{type(node).__name__}"
        visitor = getattr(self, method_name, self.visit_default)
        return visitor(node, trail)

    def visit_children(self, children: list[Child], trail: Trail) -> list[T]:
        return [self.visit(child, trail + (str(i),)) for i, child in enumerate(children)]

    @abstractmethod
    def visit_default(self, node: Child, trail: Trail) -> T:
        """Default handler for leaf nodes (text, script)."""
        ...

    # Container nodes - traverse children and combine results

    def visit_ElementNode(self, node: ElementNode, trail: Trail) -> T:
        return self.combine_element(node, trail, self.visit_children(node.children, trail))

    def visit_MapNode(self, node: MapNode, trail: Trail) -> T:
        return self.combine_map(node, trail, self.visit_children(node.children, trail))

    def visit_IfNode(self, node: IfNode, trail: Trail) -> T:
        children = self.visit_children(node.children, trail)
        else_children = None
        if node.else_children is not None:
            else_children = self.visit_children(node.else_children, trail + ("else",))
        return self.combine_if(node, trail, children, else_children)

    def visit_FragmentNode(self, node: FragmentNode, trail: Trail) -> T:
        return self.combine_fragment(node, trail, self.visit_children(node.children, trail))

    # Combine methods - subclasses override to customize combination logic

    @abstractmethod
    def combine_element(self, node: ElementNode, trail: Trail, children: list[T]) -> T:
        ...

    @abstractmethod
    def combine_map(self, node: MapNode, trail: Trail, children: list[T]) -> T:
        ...

    @abstractmethod
    def combine_if(
        self, node: IfNode, trail: Trail, children: list[T], else_children: list[T] | None
    ) -> T:
        ...

    @abstractmethod
    def combine_fragment(self, node: FragmentNode, trail: Trail, children: list[T]) -> T:
        ...
