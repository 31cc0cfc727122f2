"""Import collector: per-file import deduplication.

Imports are component-scoped: the collector only deduplicates the
bindings that end up in one generated file. Each spec is normalized into
local-name to (source, symbol) bindings. Identical bindings collapse into
one; a local name bound to two different (source, symbol) pairs is a
ConflictError naming both specs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from src.generator.compiler.expression_normalizer import Statement, hooks_used
from src.generator.errors import ConflictError
from src.generator.tree import ComponentNode, ImportKind, ImportSpec
from src.generator.visitors import ComponentReferenceCollector

if TYPE_CHECKING:
    from src.generator.context import CompilationContext

logger = logging.getLogger(__name__)

GENERATED_ORIGIN = "<generated>"
REACT_SOURCE = "react"


@dataclass(frozen=True)
class ImportBinding:
    """A single local name bound by an import."""

    source: str
    symbol: str
    local: str
    kind: ImportKind


@dataclass
class ImportBlock:
    """Deduplicated imports for one generated file, in first-appearance order."""

    bindings: list[ImportBinding] = field(default_factory=list)
    side_effects: list[str] = field(default_factory=list)

    def sources(self) -> list[str]:
        ordered: list[str] = []
        for source in [b.source for b in self.bindings] + self.side_effects:
            if source not in ordered:
                ordered.append(source)
        return ordered

    def locals(self) -> list[str]:
        return [b.local for b in self.bindings]


def normalize_spec(spec: ImportSpec) -> list[ImportBinding]:
    """Normalize default/named/namespace forms into bindings."""
    bindings = []
    if spec.default is not None:
        bindings.append(ImportBinding(spec.source, "default", spec.default, ImportKind.DEFAULT))
    if spec.namespace is not None:
        bindings.append(ImportBinding(spec.source, "*", spec.namespace, ImportKind.NAMESPACE))
    for symbol, alias in spec.named.items():
        bindings.append(ImportBinding(spec.source, symbol, alias or symbol, ImportKind.NAMED))
    return bindings


class ImportCollector:
    """Collects and deduplicates the imports of one generated file.

    Usage:
        collector = ImportCollector("App")
        collector.add_named("react", "useState")
        collector.add_spec(spec)
        block = collector.block
        errors = collector.errors
    """

    def __init__(self, file_label: str) -> None:
        self.file_label = file_label
        self.block = ImportBlock()
        self.errors: list[ConflictError] = []
        self._by_local: dict[str, tuple[ImportBinding, str]] = {}

    def add_spec(self, spec: ImportSpec) -> None:
        bindings = normalize_spec(spec)
        if not bindings:
            if spec.source not in self.block.side_effects:
                self.block.side_effects.append(spec.source)
            return
        for binding in bindings:
            self.add(binding, spec.path or GENERATED_ORIGIN)

    def add_named(self, source: str, symbol: str, origin: str = GENERATED_ORIGIN) -> None:
        self.add(ImportBinding(source, symbol, symbol, ImportKind.NAMED), origin)

    def add_default(self, source: str, local: str, origin: str = GENERATED_ORIGIN) -> None:
        self.add(ImportBinding(source, "default", local, ImportKind.DEFAULT), origin)

    def add(self, binding: ImportBinding, origin: str) -> None:
        existing = self._by_local.get(binding.local)
        if existing is None:
            self._by_local[binding.local] = (binding, origin)
            self.block.bindings.append(binding)
            return

        first, first_origin = existing
        if (first.source, first.symbol) == (binding.source, binding.symbol):
            logger.debug(f"{self.file_label}: collapsed duplicate import of '{binding.local}'")
            return
        self.errors.append(
            ConflictError(
                origin,
                f"Import alias '{binding.local}' in {self.file_label} binds "
                f"{_describe(binding)} but is already bound to {_describe(first)} "
                f"by {first_origin}",
                first_origin,
            )
        )


def _describe(binding: ImportBinding) -> str:
    return f"'{binding.symbol}' from '{binding.source}'"


def collect_component_imports(
    ctx: CompilationContext, component: ComponentNode, statements: list[Statement]
) -> ImportCollector:
    """Collect the imports of one component's generated file.

    Order of contributions: implicit React hooks, app-level imports, the
    component's own imports, referenced component definitions, consumed
    contexts declared in other files. Platform runtime imports are added
    later by the code generator through the same collector.
    """
    collector = ImportCollector(component.name)

    for hook in hooks_used(statements):
        collector.add_named(REACT_SOURCE, hook)
    if component.provide_contexts:
        collector.add_named(REACT_SOURCE, "createContext")
    if component.use_contexts:
        collector.add_named(REACT_SOURCE, "useContext")

    for spec in ctx.tree.imports:
        collector.add_spec(spec)
    for spec in component.imports:
        collector.add_spec(spec)

    references = ComponentReferenceCollector(ctx.components).collect(component.children)
    for name in references:
        if name != component.name:
            collector.add_default(f"./{name}", name, origin=f"{component.path}.children")

    if ctx.contexts is not None:
        for binding in ctx.contexts.consumes.get(component.name, []):
            if binding.provider != component.name:
                collector.add_named(
                    f"./{binding.provider}",
                    binding.identifier,
                    origin=f"{component.path}.useContexts",
                )
    return collector
