"""Compiler stages between loading and code generation.

Phases:
1. name_resolver         - Register components, name every element node
2. context_binder        - Link provideContexts to useContexts
3. expression_normalizer - Expressions to canonical statements
4. import_collector      - Per-file import deduplication
5. style_resolver        - Runtime fragments and CSS per element

App-wide phases (1-2) accumulate into CompilationContext; the rest run
per component against the frozen context.
"""

from src.generator.compiler.context_binder import ContextBinding, ContextPlan, bind_contexts
from src.generator.compiler.expression_normalizer import (
    Statement,
    StatementKind,
    normalize_component,
    normalize_expression,
)
from src.generator.compiler.import_collector import ImportCollector, collect_component_imports
from src.generator.compiler.name_resolver import resolve_names
from src.generator.compiler.style_resolver import (
    ComponentStyles,
    assemble_stylesheets,
    resolve_component_styles,
)

__all__ = [
    "ContextBinding",
    "ContextPlan",
    "ComponentStyles",
    "ImportCollector",
    "Statement",
    "StatementKind",
    "assemble_stylesheets",
    "bind_contexts",
    "collect_component_imports",
    "normalize_component",
    "normalize_expression",
    "resolve_component_styles",
    "resolve_names",
]
