"""Context binder: links provideContexts declarations to useContexts references.

Builds the app-wide registry (context name to declaring component) in a
first pass, then resolves every consumer against it. Context names are
unique across the whole app, not per branch.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from src.generator.compiler.expression_normalizer import Binding, Statement, StatementKind
from src.generator.errors import CompilerError, DuplicateContextError, UnknownContextError
from src.generator.tree import AppTree, PatternKind


def context_identifier(name: str) -> str:
    """Generated identifier of the context object for a context name."""
    return f"{name}Context"


@dataclass(frozen=True)
class ContextBinding:
    """One provided context.

    Attributes:
        name: Context name as declared
        identifier: Generated context object identifier
        provider: Name of the declaring component
        value: Expression text passed to the provider
    """

    name: str
    identifier: str
    provider: str
    value: str


@dataclass
class ContextPlan:
    """Provide/consume wiring for every component, keyed by component name."""

    registry: dict[str, ContextBinding] = field(default_factory=dict)
    provides: dict[str, list[ContextBinding]] = field(default_factory=dict)
    consumes: dict[str, list[ContextBinding]] = field(default_factory=dict)

    def provide_instructions(self, component: str) -> list[ContextBinding]:
        return self.provides.get(component, [])

    def consume_statements(self, component: str) -> list[Statement]:
        """``const Theme = useContext(ThemeContext);`` for each consumed context."""
        return [
            Statement(
                kind=StatementKind.CONTEXT,
                pattern_kind=PatternKind.SCALAR,
                bindings=(Binding(binding.name),),
                value=binding.identifier,
                hook="useContext",
            )
            for binding in self.consumes.get(component, [])
        ]


def bind_contexts(tree: AppTree) -> tuple[ContextPlan, list[CompilerError]]:
    """Build the context plan, collecting every duplicate and unknown reference."""
    plan = ContextPlan()
    errors: list[CompilerError] = []
    declared_at: dict[str, str] = {}

    for component in tree.components:
        for name, value in component.provide_contexts.items():
            path = f"{component.path}.provideContexts.{name}"
            existing = plan.registry.get(name)
            if existing is not None:
                errors.append(
                    DuplicateContextError(
                        path,
                        context=name,
                        component=component.name,
                        other_component=existing.provider,
                        other_path=declared_at[name],
                    )
                )
                continue
            binding = ContextBinding(
                name=name,
                identifier=context_identifier(name),
                provider=component.name,
                value=value,
            )
            plan.registry[name] = binding
            declared_at[name] = path
            plan.provides.setdefault(component.name, []).append(binding)

    for component in tree.components:
        for i, name in enumerate(component.use_contexts):
            binding = plan.registry.get(name)
            if binding is None:
                errors.append(
                    UnknownContextError(
                        f"{component.path}.useContexts[{i}]", component=component.name, context=name
                    )
                )
                continue
            consumed = plan.consumes.setdefault(component.name, [])
            if binding not in consumed:
                consumed.append(binding)

    return plan, errors
