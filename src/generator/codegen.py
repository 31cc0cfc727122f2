"""Code generator: assembles per-component source files and the entry module.

Consumes the annotated tree and the per-component results of the earlier
stages (statements, import collector, resolved styles). Everything that
differs between targets comes from the PlatformProfile.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from src.generator.builders.import_builder import render_imports
from src.generator.builders.markup_builder import INDENT, MarkupBuilder, indent
from src.generator.builders.statement_builder import render_pattern, render_statement
from src.generator.compiler.expression_normalizer import Statement, bindings_from_pattern
from src.generator.compiler.import_collector import REACT_SOURCE, ImportCollector
from src.generator.registries.platforms import GLOBAL_STYLESHEET_PATH

if TYPE_CHECKING:
    from src.generator.compiler.style_resolver import ComponentStyles
    from src.generator.context import CompilationContext
    from src.generator.registries.platforms import PlatformProfile
    from src.generator.tree import ComponentNode

logger = logging.getLogger(__name__)


class CodeGenerator:
    """Generates source text for one platform.

    Usage:
        generator = CodeGenerator(ctx, profile)
        source = generator.generate_component(component, statements, collector, styles)
        entry = generator.generate_entry()
    """

    def __init__(self, ctx: CompilationContext, profile: PlatformProfile):
        self.ctx = ctx
        self.profile = profile

    def generate_component(
        self,
        component: ComponentNode,
        statements: list[Statement],
        collector: ImportCollector,
        styles: ComponentStyles,
    ) -> str:
        """Generate the source file of one component.

        Runtime imports discovered while building markup (native elements,
        style helpers, ``Fragment``) go through the same collector, so a
        clash with a user import surfaces in ``collector.errors``.
        """
        providers = self.ctx.contexts.provide_instructions(component.name) if self.ctx.contexts else []
        consumes = self.ctx.contexts.consume_statements(component.name) if self.ctx.contexts else []

        builder = MarkupBuilder(self.ctx, self.profile, styles)
        markup = builder.build_component(component, providers)

        if builder.needs_fragment:
            collector.add_named(REACT_SOURCE, "Fragment")
        for element in builder.native_elements:
            collector.add_named(self.profile.native_source, element)
        if self.profile.helper_source:
            for helper in builder.helpers:
                collector.add_named(self.profile.helper_source, helper)

        sections = []
        imports = render_imports(collector.block)
        if imports:
            sections.append(imports)
        if providers:
            sections.append(
                "\n".join(f"export const {b.identifier} = createContext(null);" for b in providers)
            )
        sections.append(self._function(component, statements + consumes, markup))
        logger.debug(
            f"{component.name}: {len(statements)} statement(s), "
            f"{len(collector.block.bindings)} import binding(s)"
        )
        return "\n\n".join(sections) + "\n"

    def _function(
        self, component: ComponentNode, statements: list[Statement], markup: list[str]
    ) -> str:
        if component.params is not None:
            bindings, holes = bindings_from_pattern(component.params)
            params = render_pattern(component.params.kind, bindings, holes)
        else:
            params = "props"

        lines = [f"export default function {component.name}({params}) {{"]
        for statement in statements:
            lines.append(INDENT + render_statement(statement))
        if statements:
            lines.append("")
        lines.append(f"{INDENT}return (")
        lines.extend(indent(markup, 2))
        lines.append(f"{INDENT});")
        lines.append("}")
        return "\n".join(lines)

    def generate_entry(self) -> str:
        """Entry module: loads the stylesheets (web) and re-exports the root component."""
        lines = []
        if self.profile.uses_class_names:
            lines.append(f"import './{GLOBAL_STYLESHEET_PATH}';")
            lines.append(f"import './{self.profile.style_module_path}';")
            lines.append("")
        lines.append(f"export {{ default }} from './components/{self.ctx.tree.root_component}';")
        return "\n".join(lines) + "\n"
