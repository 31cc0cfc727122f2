"""Typed node graph for the UI tree compiler.

The input document tags its entries ad hoc (an expression is a ``state``
because of its ``type`` key, a style entry is a ``format`` because it has a
``format`` key). The loader classifies every raw entry once and validates
it into one of the tagged models below, so later stages dispatch on a
single ``type``/``kind`` field and never re-inspect raw keys.

Models are frozen: stages annotate nodes through CompilationContext,
never by mutating the tree.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field

# =============================================================================
# Enums
# =============================================================================


class Platform(str, Enum):
    """Target platform for generated code."""

    WEB = "web"
    CROSS_PLATFORM = "cross-platform"


class PatternKind(str, Enum):
    """Shape of a destructuring pattern."""

    SCALAR = "scalar"
    ARRAY = "array"
    OBJECT = "object"


class ImportKind(str, Enum):
    """How an import binds its local name."""

    DEFAULT = "default"
    NAMED = "named"
    NAMESPACE = "namespace"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


# =============================================================================
# Patterns
# =============================================================================


class PatternElement(_Frozen):
    """One slot of an array or object pattern.

    ``name`` is None for array holes. ``key`` is the source property for
    object patterns. ``default`` holds a raw JSON value, rendered later.
    """

    name: str | None = None
    key: str | None = None
    default: Any = None
    has_default: bool = False
    rest: bool = False


class Pattern(_Frozen):
    """A binding pattern: scalar identifier, array or object destructuring."""

    kind: PatternKind
    name: str | None = None
    elements: list[PatternElement] = Field(default_factory=list)

    @property
    def bound_names(self) -> list[str]:
        """Names bound by this pattern, in declaration order."""
        if self.kind == PatternKind.SCALAR:
            return [self.name] if self.name else []
        return [e.name for e in self.elements if e.name]


# =============================================================================
# Expressions
# =============================================================================


class ScriptExpression(_Frozen):
    """Opaque code copied verbatim into the component body."""

    type: Literal["script"] = "script"
    script: str


class StateExpression(_Frozen):
    type: Literal["state"] = "state"
    value_name: str
    setter_name: str
    initial_state: Any = None
    has_initial_state: bool = False


class VarExpression(_Frozen):
    type: Literal["var"] = "var"
    pattern: Pattern
    value: Any = None
    has_value: bool = True
    declaration: Literal["const", "let"] = "const"


class RefExpression(_Frozen):
    type: Literal["ref"] = "ref"
    name: str
    initial_value: Any = None
    has_initial_value: bool = False


class EffectExpression(_Frozen):
    type: Literal["effect"] = "effect"
    effect: str
    deps: list[str] | None = None


class MemoExpression(_Frozen):
    type: Literal["memo"] = "memo"
    pattern: Pattern
    value: str
    deps: list[str] = Field(default_factory=list)


class CallbackExpression(_Frozen):
    type: Literal["callback"] = "callback"
    name: str
    args: list[str] = Field(default_factory=list)
    body: str
    deps: list[str] = Field(default_factory=list)


Expression = Annotated[
    Union[
        ScriptExpression,
        StateExpression,
        VarExpression,
        RefExpression,
        EffectExpression,
        MemoExpression,
        CallbackExpression,
    ],
    Field(discriminator="type"),
]


# =============================================================================
# Styles
# =============================================================================


class PlainStyle(_Frozen):
    """Static key/value style map, merged at render time."""

    kind: Literal["object"] = "object"
    style: dict[str, Any]


class ConditionalStyle(_Frozen):
    kind: Literal["conditional"] = "conditional"
    condition: str
    style: dict[str, Any]


class FormatStyle(_Frozen):
    """Style applied when a named styleFormats predicate holds."""

    kind: Literal["format"] = "format"
    format: str
    style: dict[str, Any]


class SelectorStyle(_Frozen):
    """Raw CSS selector plus declarations (web only)."""

    kind: Literal["selector"] = "selector"
    selector: str
    style: dict[str, Any]


class StaticStyle(_Frozen):
    """Raw CSS declarations text (web only)."""

    kind: Literal["static"] = "static"
    css: str


class DynamicStyle(_Frozen):
    """Runtime expression producing a style object."""

    kind: Literal["dynamic"] = "dynamic"
    script: str


StyleEntry = Annotated[
    Union[PlainStyle, ConditionalStyle, FormatStyle, SelectorStyle, StaticStyle, DynamicStyle],
    Field(discriminator="kind"),
]


class FormatPredicate(_Frozen):
    """Responsive condition referenced by ``format`` style entries."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    min_width: float | None = Field(default=None, alias="minWidth")
    max_width: float | None = Field(default=None, alias="maxWidth")
    min_height: float | None = Field(default=None, alias="minHeight")
    max_height: float | None = Field(default=None, alias="maxHeight")
    orientation: Literal["portrait", "landscape"] | None = None


# =============================================================================
# Imports and props
# =============================================================================


class ImportSpec(_Frozen):
    """One import declaration as written in the document.

    ``named`` maps imported symbol to local alias (None keeps the symbol
    name). A spec with no bindings at all is a side-effect import.
    """

    source: str
    default: str | None = None
    named: dict[str, str | None] = Field(default_factory=dict)
    namespace: str | None = None
    path: str = ""


class ObjectProps(_Frozen):
    kind: Literal["object"] = "object"
    values: dict[str, Any]


class SpreadProps(_Frozen):
    kind: Literal["spread"] = "spread"
    script: str


PropEntry = Annotated[Union[ObjectProps, SpreadProps], Field(discriminator="kind")]


# =============================================================================
# Nodes
# =============================================================================


class TextNode(_Frozen):
    """Primitive child: string, number, bool or null."""

    kind: Literal["text"] = "text"
    value: Any = None


class ScriptNode(_Frozen):
    """Raw code rendered in a markup position."""

    kind: Literal["script"] = "script"
    script: str


class ElementNode(_Frozen):
    """Native element or reference to another component definition by name."""

    kind: Literal["element"] = "element"
    type: str
    name: str | None = None
    props: list[PropEntry] = Field(default_factory=list)
    children: list[Child] = Field(default_factory=list)
    style: list[StyleEntry] = Field(default_factory=list)
    path: str = ""


class MapNode(_Frozen):
    kind: Literal["map"] = "map"
    data: str
    pattern: Pattern
    index: str | None = None
    key: str | None = None
    children: list[Child] = Field(default_factory=list)
    path: str = ""


class IfNode(_Frozen):
    kind: Literal["if"] = "if"
    condition: str
    children: list[Child] = Field(default_factory=list)
    else_children: list[Child] | None = None
    path: str = ""


class FragmentNode(_Frozen):
    kind: Literal["fragment"] = "fragment"
    children: list[Child] = Field(default_factory=list)
    path: str = ""


Child = Annotated[
    Union[ElementNode, MapNode, IfNode, FragmentNode, ScriptNode, TextNode],
    Field(discriminator="kind"),
]


class ComponentNode(_Frozen):
    """A top-level component definition, compiled to one function."""

    name: str
    type: Literal["Component"] = "Component"
    element: str = "div"
    params: Pattern | None = None
    props: list[PropEntry] = Field(default_factory=list)
    children: list[Child] = Field(default_factory=list)
    expressions: list[Expression] = Field(default_factory=list)
    imports: list[ImportSpec] = Field(default_factory=list)
    style: list[StyleEntry] = Field(default_factory=list)
    provide_contexts: dict[str, str] = Field(default_factory=dict)
    use_contexts: list[str] = Field(default_factory=list)
    style_sheet: str | None = None
    style_module: str | None = None
    path: str = ""


class AppTree(_Frozen):
    """Root of one compilation run."""

    name: str = "App"
    platform: Platform | None = None
    dependencies: dict[str, str] = Field(default_factory=dict)
    imports: list[ImportSpec] = Field(default_factory=list)
    style_sheet: str = ""
    style_module: str = ""
    style_formats: dict[str, FormatPredicate] = Field(default_factory=dict)
    root_component: str
    components: list[ComponentNode]

    def component(self, name: str) -> ComponentNode | None:
        for component in self.components:
            if component.name == name:
                return component
        return None


ElementNode.model_rebuild()
MapNode.model_rebuild()
IfNode.model_rebuild()
FragmentNode.model_rebuild()
ComponentNode.model_rebuild()
