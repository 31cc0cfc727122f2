"""Tests for the tree loader."""

import pytest

from src.generator.errors import StructuralError
from src.generator.loader import load_tree
from src.generator.tree import (
    ConditionalStyle,
    DynamicStyle,
    ElementNode,
    FormatStyle,
    IfNode,
    MapNode,
    PatternKind,
    PlainStyle,
    Platform,
    ScriptNode,
    SelectorStyle,
    SpreadProps,
    StateExpression,
    StaticStyle,
    TextNode,
    VarExpression,
)
from tests.conftest import make_app, make_component


def _errors(document) -> list[StructuralError]:
    result = load_tree(document)
    assert not result.is_valid
    return result.errors


def _component(**fields):
    result = load_tree(make_app(make_component(**fields)))
    assert result.is_valid, [str(e) for e in result.errors]
    return result.tree.components[0]


# =============================================================================
# Document level
# =============================================================================


def test_minimal_document_loads():
    """Single component with defaults becomes the root component."""
    result = load_tree(make_app())

    assert result.is_valid
    assert result.tree.root_component == "App"
    assert result.tree.components[0].element == "div"
    assert result.tree.components[0].path == "components[0]"


def test_document_must_be_object():
    errors = _errors(["not", "an", "app"])
    assert errors[0].path == ""


def test_wrong_document_type():
    errors = _errors(make_app(type="page"))
    assert errors[0].path == "type"


def test_unknown_platform_rejected():
    errors = _errors(make_app(platform="desktop"))
    assert errors[0].path == "platform"


def test_document_platform_loaded():
    result = load_tree(make_app(platform="cross-platform"))
    assert result.tree.platform == Platform.CROSS_PLATFORM


def test_missing_components():
    errors = _errors({"type": "app"})
    assert errors[0].path == "components"


def test_unknown_root_component():
    errors = _errors(make_app(rootComponent="Missing"))
    assert errors[0].path == "rootComponent"


def test_all_errors_reported_in_one_run():
    """Loader keeps going after the first problem."""
    document = make_app(
        make_component("A", children=[{"type": "Map"}]),
        make_component("B", expressions=[{"type": "nope"}]),
    )
    paths = [e.path for e in _errors(document)]

    assert "components[0].children[0].data" in paths
    assert "components[1].expressions[0].type" in paths


# =============================================================================
# Components
# =============================================================================


def test_component_requires_name():
    errors = _errors(make_app({"type": "Component"}))
    assert errors[0].path == "components[0].name"


def test_component_name_must_be_identifier():
    errors = _errors(make_app(make_component("my-app")))
    assert errors[0].path == "components[0].name"


def test_top_level_entry_must_be_component():
    errors = _errors(make_app({"name": "App", "type": "div"}))
    assert errors[0].path == "components[0].type"


def test_nested_component_definition_rejected():
    document = make_app(make_component(children=[{"type": "Component", "name": "Inner"}]))
    errors = _errors(document)
    assert errors[0].path == "components[0].children[0].type"


def test_single_child_accepted_without_list():
    component = _component(children="hello")
    assert component.children == [TextNode(value="hello")]


def test_children_classification():
    component = _component(
        children=[
            "text",
            "{count}",
            3,
            None,
            {"type": "Script", "script": "{items.length}"},
            {"type": "span", "name": "Label"},
        ]
    )
    kinds = [type(c) for c in component.children]

    assert kinds == [TextNode, ScriptNode, TextNode, TextNode, ScriptNode, ElementNode]
    assert component.children[1].script == "count"
    assert component.children[4].script == "items.length"
    assert component.children[5].name == "Label"


def test_text_with_stray_braces_rejected():
    errors = _errors(make_app(make_component(children=["Total: {count}"])))
    assert errors[0].path == "components[0].children[0]"


def test_map_node_defaults():
    component = _component(children=[{"type": "Map", "data": "{items}", "children": []}])
    node = component.children[0]

    assert isinstance(node, MapNode)
    assert node.data == "items"
    assert node.pattern.kind == PatternKind.SCALAR
    assert node.pattern.name == "item"


def test_if_node_with_else():
    component = _component(
        children=[{"type": "If", "condition": "{ok}", "children": ["yes"], "else": ["no"]}]
    )
    node = component.children[0]

    assert isinstance(node, IfNode)
    assert node.condition == "ok"
    assert node.else_children == [TextNode(value="no")]


def test_spread_props():
    component = _component(props=[{"id": "main"}, "{rest}"])

    assert component.props[0].values == {"id": "main"}
    assert component.props[1] == SpreadProps(script="rest")


def test_provided_contexts_forms():
    by_object = _component(provideContexts={"Theme": "{theme}"})
    by_list = _component(provideContexts=["theme"])

    assert by_object.provide_contexts == {"Theme": "theme"}
    assert by_list.provide_contexts == {"theme": "theme"}


# =============================================================================
# Patterns
# =============================================================================


def _var_pattern(var):
    component = _component(expressions=[{"type": "var", "var": var, "value": "{source}"}])
    return component.expressions[0].pattern


def test_array_pattern_with_holes_defaults_and_rest():
    pattern = _var_pattern(["a", None, {"name": "b", "default": 1}, {"...": "rest"}])

    assert pattern.kind == PatternKind.ARRAY
    assert pattern.bound_names == ["a", "b", "rest"]
    assert pattern.elements[1].name is None
    assert pattern.elements[2].has_default
    assert pattern.elements[3].rest


def test_object_pattern_alias_forms():
    pattern = _var_pattern({"a": None, "b": "beta", "c": {"as": "gamma", "default": 0}, "...": "rest"})

    assert pattern.kind == PatternKind.OBJECT
    assert pattern.bound_names == ["a", "beta", "gamma", "rest"]
    assert [e.key for e in pattern.elements[:3]] == ["a", "b", "c"]


@pytest.mark.parametrize(
    "var",
    [
        [{"...": "a"}, {"...": "b"}],
        [{"...": "a"}, "b"],
        [None, None],
        {"...": "x", "a": None},
        "not-an-identifier",
    ],
)
def test_invalid_patterns(var):
    document = make_app(make_component(expressions=[{"type": "var", "var": var, "value": 1}]))
    assert _errors(document)


# =============================================================================
# Expressions
# =============================================================================


def test_state_expression_with_pair():
    component = _component(
        expressions=[{"type": "state", "var": ["count", "setCount"], "initialState": 1}]
    )
    expression = component.expressions[0]

    assert isinstance(expression, StateExpression)
    assert (expression.value_name, expression.setter_name) == ("count", "setCount")
    assert expression.initial_state == 1


def test_state_expression_single_name_derives_setter():
    component = _component(expressions=[{"type": "state", "var": "open"}])
    expression = component.expressions[0]

    assert expression.setter_name == "setOpen"
    assert not expression.has_initial_state


def test_plain_string_expression_is_script():
    component = _component(expressions=["console.log('hi');"])
    assert component.expressions[0].script == "console.log('hi');"


def test_let_var_without_value():
    component = _component(expressions=[{"type": "var", "var": "x", "kind": "let"}])
    expression = component.expressions[0]

    assert isinstance(expression, VarExpression)
    assert expression.declaration == "let"
    assert not expression.has_value


def test_const_var_requires_value():
    document = make_app(make_component(expressions=[{"type": "var", "var": "x"}]))
    assert _errors(document)[0].path == "components[0].expressions[0]"


def test_unknown_expression_type():
    document = make_app(make_component(expressions=[{"type": "signal", "var": "x"}]))
    assert _errors(document)[0].path == "components[0].expressions[0].type"


def test_deps_must_be_list():
    document = make_app(
        make_component(expressions=[{"type": "effect", "effect": "{run()}", "deps": "a"}])
    )
    assert _errors(document)[0].path == "components[0].expressions[0].deps"


# =============================================================================
# Styles
# =============================================================================


def test_style_entry_classification():
    component = _component(
        style=[
            {"color": "red"},
            {"condition": "{active}", "style": {"color": "blue"}},
            {"selector": "&:hover", "style": {"color": "green"}},
            "{dynamicStyle}",
            "color: black;",
        ]
    )
    kinds = [type(s) for s in component.style]
    assert kinds == [PlainStyle, ConditionalStyle, SelectorStyle, DynamicStyle, StaticStyle]


def test_format_style_requires_known_format():
    document = make_app(make_component(style=[{"format": "wide", "style": {"width": 30}}]))
    assert _errors(document)[0].path == "components[0].style[0].format"


def test_format_style_with_declared_format():
    document = make_app(
        make_component(style=[{"format": "wide", "style": {"width": 30}}]),
        styleFormats={"wide": {"minWidth": 1024}},
    )
    result = load_tree(document)

    assert isinstance(result.tree.components[0].style[0], FormatStyle)
    assert result.tree.style_formats["wide"].min_width == 1024


def test_ambiguous_style_entry():
    document = make_app(
        make_component(style=[{"condition": "{a}", "selector": "&:hover", "style": {}}])
    )
    assert "ambiguous" in _errors(document)[0].message


def test_unknown_format_predicate_key():
    document = make_app(styleFormats={"wide": {"minWdth": 1024}})
    assert _errors(document)[0].path == "styleFormats.wide"


def test_stylesheet_values_cannot_be_scripts():
    document = make_app(
        make_component(style=[{"selector": "&:hover", "style": {"color": "{color}"}}])
    )
    assert _errors(document)[0].path == "components[0].style[0].style.color"


# =============================================================================
# Imports
# =============================================================================


def test_import_forms():
    document = make_app(
        imports=[
            {"import": "React", "from": "react"},
            {"import": "*", "as": "utils", "from": "./utils"},
            {"import": {"useState": {}, "useMemo": "memo", "default": "Lib"}, "from": "lib"},
            {"from": "./polyfill"},
        ]
    )
    imports = load_tree(document).tree.imports

    assert imports[0].default == "React"
    assert imports[1].namespace == "utils"
    assert imports[2].named == {"useState": None, "useMemo": "memo"}
    assert imports[2].default == "Lib"
    assert imports[3].default is None and not imports[3].named


def test_import_requires_source():
    errors = _errors(make_app(imports=[{"import": "React"}]))
    assert errors[0].path == "imports[0]"


# =============================================================================
# Field types
# =============================================================================


def test_document_name_must_be_string():
    assert [e.path for e in _errors(make_app(name=5))] == ["name"]


@pytest.mark.parametrize("key", ["styleSheet", "styleModule"])
def test_component_stylesheet_fields_must_be_strings(key):
    errors = _errors(make_app(make_component("App", **{key: 5})))
    assert [e.path for e in errors] == [f"components[0].{key}"]


def test_format_name_must_be_string():
    document = make_app(
        make_component(style=[{"format": [], "style": {}}]),
        styleFormats={"wide": {"minWidth": 1024}},
    )
    assert _errors(document)[0].path == "components[0].style[0].format"


def test_map_key_must_be_script_string():
    document = make_app(
        make_component(children=[{"type": "Map", "data": "{items}", "key": 3, "children": []}])
    )
    assert _errors(document)[0].path == "components[0].children[0].key"
