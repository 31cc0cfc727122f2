"""Statement builder: renders canonical statements as source text."""

from __future__ import annotations

from src.generator.compiler.expression_normalizer import Binding, Statement, StatementKind
from src.generator.tree import PatternKind
from src.generator.values import render_key


def render_binding(binding: Binding, object_pattern: bool) -> str:
    if binding.rest:
        return f"...{binding.name}"
    text = binding.name
    if object_pattern and binding.key is not None and binding.key != binding.name:
        text = f"{render_key(binding.key)}: {binding.name}"
    if binding.default is not None:
        text = f"{text} = {binding.default}"
    return text


def render_pattern(
    kind: PatternKind, bindings: tuple[Binding, ...], holes: tuple[int, ...] = ()
) -> str:
    """Render a binding pattern: ``name``, ``[a, , b = 1]`` or ``{a: b, ...rest}``."""
    if kind == PatternKind.SCALAR:
        return bindings[0].name
    if kind == PatternKind.OBJECT:
        return "{" + ", ".join(render_binding(b, True) for b in bindings) + "}"
    slots = []
    remaining = iter(bindings)
    for i in range(len(bindings) + len(holes)):
        slots.append("" if i in holes else render_binding(next(remaining), False))
    return "[" + ", ".join(slots) + "]"


def _deps(deps: tuple[str, ...] | None) -> str:
    return "[" + ", ".join(deps or ()) + "]"


def render_statement(statement: Statement) -> str:
    """Render one statement.

    Script payloads are inserted verbatim, including their line breaks.
    """
    kind = statement.kind
    if kind == StatementKind.SCRIPT:
        return statement.value

    pattern = (
        render_pattern(statement.pattern_kind, statement.bindings, statement.holes)
        if statement.pattern_kind is not None
        else ""
    )
    argument = statement.value if statement.value is not None else ""

    if kind == StatementKind.STATE:
        return f"const {pattern} = useState({argument});"
    if kind == StatementKind.REF:
        return f"const {pattern} = useRef({argument});"
    if kind == StatementKind.VAR:
        if statement.value is None:
            return f"{statement.declaration} {pattern};"
        return f"{statement.declaration} {pattern} = {statement.value};"
    if kind == StatementKind.CONTEXT:
        return f"const {pattern} = useContext({statement.value});"
    if kind == StatementKind.EFFECT:
        deps = f", {_deps(statement.deps)}" if statement.deps is not None else ""
        return f"useEffect(() => {{\n{statement.value}\n}}{deps});"
    if kind == StatementKind.MEMO:
        return f"const {pattern} = useMemo(() => ({statement.value}), {_deps(statement.deps)});"
    if kind == StatementKind.CALLBACK:
        args = ", ".join(statement.args)
        return (
            f"const {pattern} = useCallback(({args}) => {{\n{statement.value}\n}}, "
            f"{_deps(statement.deps)});"
        )
    raise ValueError(f"Unsupported statement kind: {kind}")
