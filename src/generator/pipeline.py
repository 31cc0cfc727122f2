"""Compilation pipeline.

Stage order:
1. loader          - validate the raw document into a typed AppTree
2. name_resolver   - register components and name every element
3. context_binder  - link provideContexts to useContexts
4. per component   - normalize expressions, collect imports, resolve
                     styles and generate source (optionally on a thread pool)
5. stylesheets     - assemble the global stylesheet and the style module

App-wide registries are built and frozen in stages 1-3, before any
per-component work. Errors accumulate across every stage; a run returns
either all artifacts and no errors, or no artifacts and the ordered
error list.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any

from src.generator.codegen import CodeGenerator
from src.generator.compiler.context_binder import bind_contexts
from src.generator.compiler.expression_normalizer import normalize_component
from src.generator.compiler.import_collector import collect_component_imports
from src.generator.compiler.name_resolver import resolve_names
from src.generator.compiler.style_resolver import (
    ComponentStyles,
    assemble_stylesheets,
    resolve_component_styles,
)
from src.generator.context import CompilationContext
from src.generator.errors import CompilationFailed, CompilerError, StructuralError
from src.generator.loader import load_tree
from src.generator.registries.platforms import PlatformProfile, get_profile
from src.generator.tree import ComponentNode, Platform

logger = logging.getLogger(__name__)


@dataclass
class CompilationResult:
    """Result of one compilation run.

    Attributes:
        platform: Target platform, when it could be determined
        artifacts: Output path (relative to the output root) to file content
        errors: All errors, in stage order then document order
    """

    platform: Platform | None = None
    artifacts: dict[str, str] = field(default_factory=dict)
    errors: list[CompilerError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise CompilationFailed(self.errors)


@dataclass
class ComponentOutput:
    """Per-component work product."""

    component: ComponentNode
    source: str
    styles: ComponentStyles
    errors: list[CompilerError]


class CompilationPipeline:
    """Runs every stage for one target platform.

    Usage:
        pipeline = CompilationPipeline(platform="web", max_workers=4)
        result = pipeline.run(document)
    """

    def __init__(self, platform: Platform | str | None = None, max_workers: int = 1):
        self.platform = platform
        self.max_workers = max(1, max_workers)

    def run(self, document: Any) -> CompilationResult:
        loaded = load_tree(document)
        if not loaded.is_valid:
            logger.info(f"Document rejected with {len(loaded.errors)} structural error(s)")
            return CompilationResult(errors=list(loaded.errors))
        tree = loaded.tree

        requested = self.platform or tree.platform or Platform.WEB
        try:
            platform = Platform(requested)
        except ValueError:
            return CompilationResult(
                errors=[StructuralError("platform", f"Unknown platform '{requested}'")]
            )
        profile = get_profile(platform)

        ctx = CompilationContext(tree=tree, platform=platform)
        resolve_names(ctx)
        plan, context_errors = bind_contexts(tree)
        ctx.contexts = plan
        ctx.add_errors(context_errors)
        ctx.freeze()

        if ctx.errors:
            # Import conflicts are still reported; styles and codegen are skipped.
            for errors in self._map(lambda c: self._check_component(ctx, c), tree.components):
                ctx.add_errors(errors)
            return self._failed(ctx)

        outputs = self._map(lambda c: self._compile_component(ctx, profile, c), tree.components)
        for output in outputs:
            ctx.add_errors(output.errors)
        if ctx.errors:
            return self._failed(ctx)

        generator = CodeGenerator(ctx, profile)
        artifacts: dict[str, str] = {}
        for output in outputs:
            artifacts[profile.component_path(output.component.name)] = output.source
        artifacts[profile.entry_path()] = generator.generate_entry()
        artifacts.update(assemble_stylesheets(ctx, profile, [o.styles for o in outputs]))

        logger.info(
            f"Compiled '{tree.name}' for {platform.value}: "
            f"{len(outputs)} component(s), {len(artifacts)} artifact(s)"
        )
        return CompilationResult(platform=platform, artifacts=artifacts)

    def _map(self, fn, components: list[ComponentNode]) -> list:
        """Apply fn to every component; results keep declaration order."""
        if self.max_workers == 1 or len(components) < 2:
            return [fn(c) for c in components]
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            return list(executor.map(fn, components))

    @staticmethod
    def _check_component(ctx: CompilationContext, component: ComponentNode) -> list[CompilerError]:
        statements = normalize_component(component)
        return list(collect_component_imports(ctx, component, statements).errors)

    @staticmethod
    def _compile_component(
        ctx: CompilationContext, profile: PlatformProfile, component: ComponentNode
    ) -> ComponentOutput:
        statements = normalize_component(component)
        collector = collect_component_imports(ctx, component, statements)
        styles = resolve_component_styles(ctx, component, profile)
        source = CodeGenerator(ctx, profile).generate_component(
            component, statements, collector, styles
        )
        return ComponentOutput(
            component=component, source=source, styles=styles, errors=list(collector.errors)
        )

    @staticmethod
    def _failed(ctx: CompilationContext) -> CompilationResult:
        logger.info(f"Compilation failed with {len(ctx.errors)} error(s)")
        return CompilationResult(platform=ctx.platform, errors=list(ctx.errors))


def compile_app(
    document: Any, platform: Platform | str | None = None, max_workers: int = 1
) -> CompilationResult:
    """Compile a document for one platform.

    Args:
        document: Parsed JSON document (``type: "app"``)
        platform: Target platform; defaults to the document's, then web
        max_workers: Worker threads for per-component work

    Returns:
        CompilationResult with artifacts, or errors and no artifacts
    """
    return CompilationPipeline(platform=platform, max_workers=max_workers).run(document)
