"""Tests for deterministic element naming."""

from src.generator.compiler.name_resolver import generated_name, resolve_names
from src.generator.context import CompilationContext
from src.generator.errors import ConflictError
from src.generator.loader import load_tree
from tests.conftest import build_context, make_app, make_component


def _names(document) -> dict[str, str]:
    return dict(build_context(document).names)


def test_generated_name_from_trail():
    assert generated_name("App", "div", ("0", "2")) == "App_div_0_2"


def test_generated_name_sanitizes_type():
    assert generated_name("App", "my-widget", ("1",)) == "App_my_widget_1"


def test_component_root_named_after_component():
    names = _names(make_app(make_component("Card")))
    assert names["components[0]"] == "Card"


def test_unnamed_elements_get_trail_names():
    document = make_app(
        make_component(
            "App",
            children=[{"type": "div", "children": [{"type": "span"}, "text", {"type": "span"}]}],
        )
    )
    names = _names(document)

    assert names["components[0].children[0]"] == "App_div_0"
    assert names["components[0].children[0].children[0]"] == "App_span_0_0"
    assert names["components[0].children[0].children[2]"] == "App_span_0_2"


def test_explicit_name_kept():
    document = make_app(make_component("App", children=[{"type": "div", "name": "Header"}]))
    assert _names(document)["components[0].children[0]"] == "Header"


def test_generated_name_avoids_explicit_names():
    """An explicit name equal to a generated one pushes the generated one to a suffix."""
    document = make_app(
        make_component(
            "App",
            children=[{"type": "div"}, {"type": "span", "name": "App_div_0"}],
        )
    )
    names = _names(document)

    assert names["components[0].children[1]"] == "App_div_0"
    assert names["components[0].children[0]"] == "App_div_02"


def test_else_branch_trail():
    document = make_app(
        make_component(
            "App",
            children=[{"type": "If", "condition": "{ok}", "children": [{"type": "b"}],
                       "else": [{"type": "i"}]}],
        )
    )
    names = _names(document)

    assert names["components[0].children[0].children[0]"] == "App_b_0_0"
    assert names["components[0].children[0].else[0]"] == "App_i_0_else_0"


def test_names_are_unique_across_components():
    document = make_app(
        make_component("A", children=[{"type": "div"}]),
        make_component("B", children=[{"type": "div"}, {"type": "p", "name": "Title"}]),
    )
    names = list(_names(document).values())

    assert len(names) == len(set(names))


def test_names_are_deterministic():
    document = make_app(
        make_component("A", children=[{"type": "div", "children": [{"type": "span"}]}]),
        make_component("B", children=[{"type": "Map", "data": "{xs}", "children": [{"type": "li"}]}]),
    )
    assert _names(document) == _names(document)


def test_duplicate_element_names_conflict():
    document = make_app(
        make_component("A", children=[{"type": "div", "name": "Box"}]),
        make_component("B", children=[{"type": "div", "name": "Box"}]),
    )
    ctx = CompilationContext(tree=load_tree(document).tree, platform="web")
    resolve_names(ctx)

    assert len(ctx.errors) == 1
    error = ctx.errors[0]
    assert isinstance(error, ConflictError)
    assert error.path == "components[1].children[0].name"
    assert error.other_path == "components[0].children[0].name"


def test_duplicate_component_names_conflict():
    document = make_app(make_component("A"), make_component("A"))
    ctx = CompilationContext(tree=load_tree(document).tree, platform="web")
    resolve_names(ctx)

    assert [type(e) for e in ctx.errors] == [ConflictError]
    assert ctx.errors[0].other_path == "components[0].name"


def test_element_name_clashing_with_component_name():
    document = make_app(
        make_component("A", children=[{"type": "div", "name": "B"}]),
        make_component("B"),
    )
    ctx = CompilationContext(tree=load_tree(document).tree, platform="web")
    resolve_names(ctx)

    assert len(ctx.errors) == 1
    assert ctx.errors[0].path == "components[1].name"
