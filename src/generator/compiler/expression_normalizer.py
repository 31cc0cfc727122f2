"""Expression normalizer: shorthand expressions to canonical statements.

Each expression becomes one Statement carrying its declaration kind, its
resolved bindings and its expression text. Script expressions pass
through untouched. Declaration order is kept as is: no reordering, no
deduplication, and a later binding may shadow an earlier one.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from src.generator.tree import (
    CallbackExpression,
    ComponentNode,
    EffectExpression,
    Expression,
    MemoExpression,
    Pattern,
    PatternKind,
    RefExpression,
    ScriptExpression,
    StateExpression,
    VarExpression,
)
from src.generator.values import render_value


class StatementKind(str, Enum):
    SCRIPT = "script"
    STATE = "state"
    VAR = "var"
    REF = "ref"
    EFFECT = "effect"
    MEMO = "memo"
    CALLBACK = "callback"
    CONTEXT = "context"


@dataclass(frozen=True)
class Binding:
    """One bound name with its source key, rendered default and rest flag."""

    name: str
    key: str | None = None
    default: str | None = None
    rest: bool = False


@dataclass(frozen=True)
class Statement:
    """Canonical statement record.

    Attributes:
        kind: Declaration kind
        declaration: ``const`` or ``let`` for declaring statements
        pattern_kind: Shape of the binding pattern
        bindings: Bound names in declaration order (array holes omitted)
        holes: Positions of array holes, for rendering
        value: Expression text (initial value, hook argument or raw script)
        deps: Dependency list for effect/memo/callback hooks
        args: Callback parameters
        hook: Runtime hook this statement calls, if any
    """

    kind: StatementKind
    declaration: str = "const"
    pattern_kind: PatternKind | None = None
    bindings: tuple[Binding, ...] = ()
    holes: tuple[int, ...] = ()
    value: str | None = None
    deps: tuple[str, ...] | None = None
    args: tuple[str, ...] = ()
    hook: str | None = None

    @property
    def bound_names(self) -> list[str]:
        return [b.name for b in self.bindings]


def bindings_from_pattern(pattern: Pattern) -> tuple[tuple[Binding, ...], tuple[int, ...]]:
    """Resolve a pattern into bindings, plus the positions of array holes."""
    if pattern.kind == PatternKind.SCALAR:
        return (Binding(name=pattern.name),), ()
    bindings = []
    holes = []
    for i, element in enumerate(pattern.elements):
        if element.name is None:
            holes.append(i)
            continue
        bindings.append(
            Binding(
                name=element.name,
                key=element.key,
                default=render_value(element.default) if element.has_default else None,
                rest=element.rest,
            )
        )
    return tuple(bindings), tuple(holes)


def _pattern_statement(kind: StatementKind, pattern: Pattern, **kwargs) -> Statement:
    bindings, holes = bindings_from_pattern(pattern)
    return Statement(
        kind=kind, pattern_kind=pattern.kind, bindings=bindings, holes=holes, **kwargs
    )


def normalize_expression(expression: Expression) -> Statement:
    """Expand one expression into its canonical statement."""
    if isinstance(expression, ScriptExpression):
        return Statement(kind=StatementKind.SCRIPT, value=expression.script)

    if isinstance(expression, StateExpression):
        return Statement(
            kind=StatementKind.STATE,
            pattern_kind=PatternKind.ARRAY,
            bindings=(Binding(expression.value_name), Binding(expression.setter_name)),
            value=(
                render_value(expression.initial_state) if expression.has_initial_state else None
            ),
            hook="useState",
        )

    if isinstance(expression, VarExpression):
        return _pattern_statement(
            StatementKind.VAR,
            expression.pattern,
            declaration=expression.declaration,
            value=render_value(expression.value) if expression.has_value else None,
        )

    if isinstance(expression, RefExpression):
        return Statement(
            kind=StatementKind.REF,
            pattern_kind=PatternKind.SCALAR,
            bindings=(Binding(expression.name),),
            value=(
                render_value(expression.initial_value) if expression.has_initial_value else None
            ),
            hook="useRef",
        )

    if isinstance(expression, EffectExpression):
        return Statement(
            kind=StatementKind.EFFECT,
            value=expression.effect,
            deps=tuple(expression.deps) if expression.deps is not None else None,
            hook="useEffect",
        )

    if isinstance(expression, MemoExpression):
        return _pattern_statement(
            StatementKind.MEMO,
            expression.pattern,
            value=expression.value,
            deps=tuple(expression.deps),
            hook="useMemo",
        )

    if isinstance(expression, CallbackExpression):
        return Statement(
            kind=StatementKind.CALLBACK,
            pattern_kind=PatternKind.SCALAR,
            bindings=(Binding(expression.name),),
            value=expression.body,
            deps=tuple(expression.deps),
            args=tuple(expression.args),
            hook="useCallback",
        )

    raise TypeError(f"Unsupported expression type: {type(expression).__name__}")


def normalize_component(component: ComponentNode) -> list[Statement]:
    """Normalize a component's expressions, in declaration order."""
    return [normalize_expression(e) for e in component.expressions]


def hooks_used(statements: list[Statement]) -> list[str]:
    """Runtime hooks called by the statements, in order of first use."""
    hooks: list[str] = []
    for statement in statements:
        if statement.hook and statement.hook not in hooks:
            hooks.append(statement.hook)
    return hooks
