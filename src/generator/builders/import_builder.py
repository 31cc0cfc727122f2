"""Import builder: renders an ImportBlock as import statements."""

from __future__ import annotations

from src.generator.compiler.import_collector import ImportBinding, ImportBlock
from src.generator.tree import ImportKind


def _named_clause(bindings: list[ImportBinding]) -> str:
    names = [
        b.symbol if b.symbol == b.local else f"{b.symbol} as {b.local}" for b in bindings
    ]
    return "{ " + ", ".join(names) + " }"


def render_source(source: str, bindings: list[ImportBinding]) -> list[str]:
    """Render the import lines of one source.

    The first default binding and all named bindings share one line;
    extra default aliases become ``default as X`` named entries and
    namespace imports get their own line.
    """
    defaults = [b for b in bindings if b.kind == ImportKind.DEFAULT]
    named = [b for b in bindings if b.kind == ImportKind.NAMED]
    namespaces = [b for b in bindings if b.kind == ImportKind.NAMESPACE]

    named = defaults[1:] + named
    clauses = []
    if defaults:
        clauses.append(defaults[0].local)
    if named:
        clauses.append(_named_clause(named))

    lines = []
    if clauses:
        lines.append(f"import {', '.join(clauses)} from '{source}';")
    for binding in namespaces:
        lines.append(f"import * as {binding.local} from '{source}';")
    return lines


def render_imports(block: ImportBlock) -> str:
    """Render all imports grouped per source, in first-appearance order."""
    lines = []
    for source in block.sources():
        bindings = [b for b in block.bindings if b.source == source]
        if bindings:
            lines.extend(render_source(source, bindings))
        else:
            lines.append(f"import '{source}';")
    return "\n".join(lines)
