"""Markup builder: renders a component's child tree as nested elements."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from src.generator.builders.statement_builder import render_pattern
from src.generator.compiler.expression_normalizer import bindings_from_pattern
from src.generator.tree import (
    Child,
    ComponentNode,
    ElementNode,
    FragmentNode,
    IfNode,
    MapNode,
    PropEntry,
    ScriptNode,
    TextNode,
)
from src.generator.values import is_script_ref, render_value, script_text
from src.generator.visitors.base import NodeVisitor, Trail

if TYPE_CHECKING:
    from src.generator.compiler.context_binder import ContextBinding
    from src.generator.compiler.style_resolver import ComponentStyles
    from src.generator.context import CompilationContext
    from src.generator.registries.platforms import PlatformProfile

INDENT = "  "

Lines = list[str]


def indent(lines: Lines, depth: int = 1) -> Lines:
    pad = INDENT * depth
    return [pad + line for line in lines]


def render_attribute(key: str, value: Any) -> str:
    if is_script_ref(value):
        return f"{key}={{{script_text(value)}}}"
    if isinstance(value, str):
        if '"' in value or "\\" in value or "\n" in value:
            return f"{key}={{{json.dumps(value, ensure_ascii=False)}}}"
        return f'{key}="{value}"'
    return f"{key}={{{render_value(value)}}}"


def render_class_attribute(parts: list[Any]) -> str:
    """Space-join class names in order; script parts turn it into a template literal."""
    if not any(is_script_ref(p) for p in parts):
        return render_attribute("className", " ".join(str(p) for p in parts))
    pieces = [f"${{{script_text(p)}}}" if is_script_ref(p) else str(p) for p in parts]
    return "className={`" + " ".join(pieces) + "`}"


def render_text(value: Any) -> str:
    if not isinstance(value, str):
        return f"{{{render_value(value)}}}"
    if value != value.strip() or "\n" in value or not value:
        return f"{{{json.dumps(value, ensure_ascii=False)}}}"
    return value.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class MarkupBuilder(NodeVisitor[Lines]):
    """Builds the markup of one component for one platform.

    Records what the markup needs at runtime (native elements, style
    helpers, Fragment) so the code generator can import it.

    Usage:
        builder = MarkupBuilder(ctx, profile, styles)
        lines = builder.build_component(component, providers)
    """

    def __init__(
        self, ctx: CompilationContext, profile: PlatformProfile, styles: ComponentStyles
    ) -> None:
        self.ctx = ctx
        self.profile = profile
        self.styles = styles
        self.native_elements: list[str] = []
        self.helpers: list[str] = []
        self.needs_fragment = False

    def build_component(
        self, component: ComponentNode, providers: list[ContextBinding]
    ) -> Lines:
        """Root element of the component, wrapped in its context providers."""
        self._element_name(component.element)
        children = self.visit_children(component.children, ())
        lines = self._element(component.element, component.path, component.props, children)
        for binding in reversed(providers):
            lines = (
                [f"<{binding.identifier}.Provider value={{{binding.value}}}>"]
                + indent(lines)
                + [f"</{binding.identifier}.Provider>"]
            )
        return lines

    # =========================================================================
    # Leaves
    # =========================================================================

    def visit_default(self, node: Child, trail: Trail) -> Lines:
        if isinstance(node, ScriptNode):
            return [f"{{{node.script}}}"]
        if isinstance(node, TextNode):
            return [render_text(node.value)]
        raise TypeError(f"Unsupported node type: {type(node).__name__}")

    # =========================================================================
    # Containers
    # =========================================================================

    def visit_ElementNode(self, node: ElementNode, trail: Trail) -> Lines:
        # Native imports are recorded in document order, parents first
        self._element_name(node.type)
        return super().visit_ElementNode(node, trail)

    def combine_element(self, node: ElementNode, trail: Trail, children: list[Lines]) -> Lines:
        return self._element(node.type, node.path, node.props, children)

    def combine_map(self, node: MapNode, trail: Trail, children: list[Lines]) -> Lines:
        bindings, holes = bindings_from_pattern(node.pattern)
        params = render_pattern(node.pattern.kind, bindings, holes)
        if node.index:
            params = f"{params}, {node.index}"
        body = self._group(node.children, children, key=node.key)
        return [f"{{({node.data}).map(({params}) => ("] + indent(body) + ["))}"]

    def combine_if(
        self,
        node: IfNode,
        trail: Trail,
        children: list[Lines],
        else_children: list[Lines] | None,
    ) -> Lines:
        body = indent(self._group(node.children, children))
        if else_children is None:
            return [f"{{({node.condition}) && ("] + body + [")}"]
        alternative = indent(self._group(node.else_children, else_children))
        return [f"{{({node.condition}) ? ("] + body + [") : ("] + alternative + [")}"]

    def combine_fragment(self, node: FragmentNode, trail: Trail, children: list[Lines]) -> Lines:
        flat = _flatten(children)
        if not flat:
            return ["<></>"]
        return ["<>"] + indent(flat) + ["</>"]

    # =========================================================================
    # Helpers
    # =========================================================================

    def _group(self, nodes: list[Child], rendered: list[Lines], key: str | None = None) -> Lines:
        """Render sibling children as a single expression."""
        flat = _flatten(rendered)
        if key is not None:
            self.needs_fragment = True
            return [f"<Fragment key={{{key}}}>"] + indent(flat) + ["</Fragment>"]
        if not nodes:
            return ["null"]
        if len(nodes) == 1 and isinstance(nodes[0], (ElementNode, FragmentNode)):
            return flat
        return ["<>"] + indent(flat) + ["</>"]

    def _element_name(self, node_type: str) -> str:
        if self.ctx.is_component(node_type):
            return node_type
        element = self.profile.element_type(node_type)
        if self.profile.is_native_import(element) and element not in self.native_elements:
            self.native_elements.append(element)
        return element

    def _use_helper(self, helper: str | None) -> None:
        if helper and helper not in self.helpers:
            self.helpers.append(helper)

    def _attributes(self, path: str, props: list[PropEntry]) -> str:
        style = self.styles.for_node(path)
        class_parts: list[Any] = [style.class_name] if style.class_name else []
        parts: list[str] = []

        for entry in props:
            if entry.kind == "spread":
                parts.append(f"{{...{entry.script}}}")
                continue
            for key, value in entry.values.items():
                if key == "className" and self.profile.uses_class_names:
                    class_parts.append(value)
                    continue
                parts.append(render_attribute(key, value))

        if class_parts:
            parts.insert(0, render_class_attribute(class_parts))

        if style.runtime:
            expression, helper = self.profile.merge_styles(list(style.runtime))
            self._use_helper(helper)
            parts.append(f"style={{{expression}}}")
        for helper in style.helpers:
            self._use_helper(helper)

        return "".join(f" {p}" for p in parts)

    def _element(
        self, node_type: str, path: str, props: list[PropEntry], children: list[Lines]
    ) -> Lines:
        element = self._element_name(node_type)
        opening = f"<{element}{self._attributes(path, props)}"
        flat = _flatten(children)
        if not flat:
            return [f"{opening} />"]
        return [f"{opening}>"] + indent(flat) + [f"</{element}>"]


def _flatten(groups: list[Lines]) -> Lines:
    return [line for group in groups for line in group]
