"""Style resolver: classifies style entries and builds both style outputs.

Run once per component per platform. For every styled element (the
component root and each element node in pre-order) the entries are fed,
in declaration order, through the platform's emission table:

- object, conditional and dynamic entries become runtime fragments;
- format entries become media-query blocks on web and format-guarded
  runtime fragments on cross-platform;
- selector and static-string entries become CSS on web and are dropped on
  cross-platform.

An element with any CSS contribution is referenced by its resolved name
as class. Stylesheet artifacts are assembled in component declaration
order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.generator.registries.formats import format_table
from src.generator.registries.platforms import (
    CROSS_PLATFORM_STYLE_HELPERS,
    GLOBAL_STYLESHEET_PATH,
    PlatformProfile,
)
from src.generator.registries.style_emitters import StyleSink
from src.generator.tree import ComponentNode, Platform
from src.generator.visitors import ElementCollector

if TYPE_CHECKING:
    from src.generator.context import CompilationContext

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ElementStyle:
    """Resolved style of one element.

    Attributes:
        class_name: Stylesheet class, only when the element has CSS rules
        runtime: Runtime style-assembly list, in declaration order
        helpers: Runtime helpers referenced by the fragments
    """

    class_name: str | None = None
    runtime: tuple[str, ...] = ()
    helpers: tuple[str, ...] = ()


@dataclass
class ComponentStyles:
    """Style output of one component: element styles and its CSS fragment."""

    component: str
    elements: dict[str, ElementStyle] = field(default_factory=dict)
    css: str = ""

    def for_node(self, path: str) -> ElementStyle:
        return self.elements.get(path, ElementStyle())

    @property
    def helpers(self) -> list[str]:
        helpers: list[str] = []
        for style in self.elements.values():
            for helper in style.helpers:
                if helper not in helpers:
                    helpers.append(helper)
        return helpers


def resolve_component_styles(
    ctx: CompilationContext, component: ComponentNode, profile: PlatformProfile
) -> ComponentStyles:
    """Resolve every style entry of a component for one platform."""
    result = ComponentStyles(component=component.name)
    targets = [(component.path, component.style)]
    targets.extend(
        (node.path, node.style) for _, node in ElementCollector().collect(component.children)
    )

    blocks: list[str] = []
    for path, entries in targets:
        if not entries:
            continue
        sink = StyleSink(class_name=ctx.name_of(path))
        for entry in entries:
            emitter = profile.style_emitters[entry.kind]
            emitter(entry, sink, ctx.tree.style_formats)
        blocks.extend(sink.css_blocks)
        result.elements[path] = ElementStyle(
            class_name=sink.class_name if sink.has_static and profile.uses_class_names else None,
            runtime=tuple(sink.runtime),
            helpers=tuple(sink.helpers),
        )

    result.css = "\n\n".join(blocks)
    logger.debug(
        f"{component.name}: {len(result.elements)} styled element(s), "
        f"{len(blocks)} CSS block(s) for {profile.platform.value}"
    )
    return result


def _join(parts: list[str | None]) -> str:
    text = "\n\n".join(p.rstrip("\n") for p in parts if p and p.strip())
    return text + "\n" if text else ""


def assemble_stylesheets(
    ctx: CompilationContext, profile: PlatformProfile, styles: list[ComponentStyles]
) -> dict[str, str]:
    """Build the global stylesheet and the per-app style module.

    The global sheet holds the app ``styleSheet`` text followed by each
    component's override, verbatim. The style module holds the app
    ``styleModule`` text followed by, per component in declaration order,
    its ``styleModule`` override and its CSS fragment. On cross-platform the
    style module is a source module that also exports the format table and
    the ``isFormat``/``mergeStyles`` helpers.
    """
    components = ctx.tree.components
    global_sheet = _join([ctx.tree.style_sheet] + [c.style_sheet for c in components])

    by_name = {s.component: s for s in styles}
    module_parts: list[str | None] = [ctx.tree.style_module]
    for component in components:
        module_parts.append(component.style_module)
        component_styles = by_name.get(component.name)
        if component_styles is not None:
            module_parts.append(component_styles.css)

    if profile.platform == Platform.CROSS_PLATFORM:
        module_parts.insert(0, f"import {{ Dimensions, StyleSheet }} from '{profile.native_source}';")
        module_parts.append(f"export const styleFormats = {format_table(ctx.tree.style_formats)};")
        module_parts.append(CROSS_PLATFORM_STYLE_HELPERS)

    return {
        GLOBAL_STYLESHEET_PATH: global_sheet,
        profile.style_module_path: _join(module_parts),
    }
