"""Tests for context binding."""

from src.generator.builders.statement_builder import render_statement
from src.generator.compiler.context_binder import bind_contexts, context_identifier
from src.generator.errors import DuplicateContextError, UnknownContextError
from src.generator.loader import load_tree
from tests.conftest import make_app, make_component


def _bind(*components):
    result = load_tree(make_app(*components))
    assert result.is_valid, [str(e) for e in result.errors]
    return bind_contexts(result.tree)


def test_context_identifier():
    assert context_identifier("Theme") == "ThemeContext"


def test_provide_and_consume():
    plan, errors = _bind(
        make_component("App", provideContexts={"Theme": "{theme}"}),
        make_component("Button", useContexts=["Theme"]),
    )

    assert errors == []
    binding = plan.registry["Theme"]
    assert (binding.provider, binding.identifier, binding.value) == ("App", "ThemeContext", "theme")
    assert plan.provide_instructions("App") == [binding]
    assert plan.consumes["Button"] == [binding]


def test_consume_statement():
    plan, _ = _bind(
        make_component("App", provideContexts={"Theme": "{theme}"}),
        make_component("Button", useContexts=["Theme"]),
    )
    statements = plan.consume_statements("Button")

    assert [render_statement(s) for s in statements] == [
        "const Theme = useContext(ThemeContext);"
    ]
    assert plan.consume_statements("App") == []


def test_duplicate_context_names_both_components():
    plan, errors = _bind(
        make_component("A", provideContexts={"X": "{a}"}),
        make_component("B", provideContexts={"X": "{b}"}),
    )

    assert len(errors) == 1
    error = errors[0]
    assert isinstance(error, DuplicateContextError)
    assert (error.component, error.other_component) == ("B", "A")
    assert error.path == "components[1].provideContexts.X"
    assert error.other_path == "components[0].provideContexts.X"
    assert "A" in error.message and "B" in error.message


def test_duplicate_context_in_same_branch_is_still_duplicate():
    """Context names are app-wide, regardless of where providers sit in the tree."""
    _, errors = _bind(
        make_component("A", provideContexts={"X": "{a}"}, children=[{"type": "B"}]),
        make_component("B", provideContexts={"X": "{b}"}),
    )
    assert [type(e) for e in errors] == [DuplicateContextError]


def test_unknown_context():
    _, errors = _bind(make_component("App", useContexts=["Missing"]))

    assert len(errors) == 1
    assert isinstance(errors[0], UnknownContextError)
    assert errors[0].path == "components[0].useContexts[0]"


def test_all_context_errors_reported():
    _, errors = _bind(
        make_component("A", provideContexts={"X": "{a}"}, useContexts=["Y"]),
        make_component("B", provideContexts={"X": "{b}"}, useContexts=["Z"]),
    )
    assert [type(e) for e in errors] == [
        DuplicateContextError,
        UnknownContextError,
        UnknownContextError,
    ]


def test_provider_may_consume_its_own_context():
    plan, errors = _bind(make_component("App", provideContexts={"Theme": "{t}"}, useContexts=["Theme"]))

    assert errors == []
    assert plan.consumes["App"][0].provider == "App"
