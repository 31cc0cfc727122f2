"""Tree loader: parses a raw JSON document into a typed AppTree.

Every structural problem is recorded with its path into the document; the
loader keeps going after an error so a single run reports all of them.
Each raw entry is classified by one discriminating check and validated
into its tagged model with a pydantic TypeAdapter.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, TypeAdapter, ValidationError

from .errors import StructuralError
from .tree import (
    AppTree,
    Child,
    ComponentNode,
    Expression,
    FormatPredicate,
    ImportSpec,
    Pattern,
    PatternElement,
    PatternKind,
    Platform,
    PropEntry,
    StyleEntry,
)
from .values import has_braces, is_identifier, is_script_ref, script_text

logger = logging.getLogger(__name__)

COMPONENT_MARKER = "Component"
REST_MARKER = "..."
PREDICATE_KEYS = ("minWidth", "maxWidth", "minHeight", "maxHeight", "orientation")
STYLE_DISCRIMINATORS = ("condition", "format", "selector")
CONTROL_TYPES = ("Map", "If", "Script", "Fragment")

_EXPRESSION_ADAPTER: TypeAdapter = TypeAdapter(Expression)
_STYLE_ADAPTER: TypeAdapter = TypeAdapter(StyleEntry)
_PROP_ADAPTER: TypeAdapter = TypeAdapter(PropEntry)
_CHILD_ADAPTER: TypeAdapter = TypeAdapter(Child)


class _Invalid(Exception):
    """Internal signal: the entry at this path was reported and skipped."""


@dataclass
class LoadResult:
    """Result of loading a document."""

    tree: AppTree | None = None
    errors: list[StructuralError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return self.tree is not None and not self.errors


def _as_list(value: Any) -> list[Any]:
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


class TreeLoader:
    """Validates a raw document and builds the typed node graph."""

    def __init__(self, document: Any) -> None:
        self.document = document
        self.result = LoadResult()
        self._format_names: set[str] = set()

    def load(self) -> LoadResult:
        """Run all checks and return the tree, or the accumulated errors."""
        doc = self.document
        if not isinstance(doc, dict):
            self._error("", "Document must be a JSON object")
            return self.result

        if doc.get("type", "app") != "app":
            self._error("type", f"Document type must be 'app', got {doc.get('type')!r}")

        platform = doc.get("platform")
        if platform is not None and platform not in {p.value for p in Platform}:
            self._error("platform", f"Unknown platform {platform!r}")
            platform = None

        style_formats = self._load_formats(doc.get("styleFormats") or {})
        imports = self._load_imports(doc.get("imports"), "imports")

        raw_components = doc.get("components")
        if not isinstance(raw_components, list) or not raw_components:
            self._error("components", "Document must declare a non-empty 'components' list")
            raw_components = []

        components: list[ComponentNode] = []
        for i, raw in enumerate(raw_components):
            try:
                components.append(self._load_component(raw, f"components[{i}]"))
            except _Invalid:
                continue

        root = doc.get("rootComponent")
        if root is None and components:
            root = components[0].name
        elif root is not None and not any(c.name == root for c in components):
            if not any(
                isinstance(raw, dict) and raw.get("name") == root for raw in raw_components
            ):
                self._error("rootComponent", f"Root component '{root}' is not defined")

        for key in ("name", "styleSheet", "styleModule"):
            if doc.get(key) is not None and not isinstance(doc.get(key), str):
                self._error(key, f"'{key}' must be a string")

        dependencies = doc.get("dependencies") or {}
        if not isinstance(dependencies, dict):
            self._error("dependencies", "'dependencies' must be an object")
            dependencies = {}

        if self.result.errors:
            logger.info(f"Document rejected with {len(self.result.errors)} structural error(s)")
            return self.result

        fields = dict(
            name=doc.get("name") or "App",
            platform=Platform(platform) if platform else None,
            dependencies={str(k): str(v) for k, v in dependencies.items()},
            imports=imports,
            style_sheet=doc.get("styleSheet") or "",
            style_module=doc.get("styleModule") or "",
            style_formats=style_formats,
            root_component=root,
            components=components,
        )
        try:
            self.result.tree = self._build(AppTree, fields, "")
        except _Invalid:
            return self.result
        logger.debug(f"Loaded app '{self.result.tree.name}' with {len(components)} component(s)")
        return self.result

    # =========================================================================
    # Error helpers
    # =========================================================================

    def _error(self, path: str, message: str) -> None:
        self.result.errors.append(StructuralError(path, message))

    def _fail(self, path: str, message: str) -> _Invalid:
        self._error(path, message)
        return _Invalid(path)

    def _validate(self, adapter: TypeAdapter, data: dict[str, Any], path: str) -> Any:
        try:
            return adapter.validate_python(data)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
                for err in e.errors()
            )
            raise self._fail(path, f"Invalid entry ({details})") from e

    def _build(self, model: type[BaseModel], fields: dict[str, Any], path: str) -> Any:
        try:
            return model(**fields)
        except ValidationError as e:
            details = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'value'}: {err['msg']}"
                for err in e.errors()
            )
            raise self._fail(path, f"Invalid {model.__name__} ({details})") from e

    # =========================================================================
    # Formats and imports
    # =========================================================================

    def _load_formats(self, raw: Any) -> dict[str, FormatPredicate]:
        if not isinstance(raw, dict):
            self._error("styleFormats", "'styleFormats' must be an object")
            return {}
        formats: dict[str, FormatPredicate] = {}
        for name, predicate in raw.items():
            path = f"styleFormats.{name}"
            self._format_names.add(name)
            if not isinstance(predicate, dict) or not predicate:
                self._error(path, "Format predicate must be a non-empty object")
                continue
            unknown = [k for k in predicate if k not in PREDICATE_KEYS]
            if unknown:
                self._error(
                    path,
                    f"Unknown predicate key(s) {unknown}. Recognized keys: {list(PREDICATE_KEYS)}",
                )
                continue
            try:
                formats[name] = FormatPredicate.model_validate(predicate)
            except ValidationError as e:
                self._error(path, f"Invalid predicate ({e.errors()[0]['msg']})")
        return formats

    def _load_imports(self, raw: Any, path: str) -> list[ImportSpec]:
        specs: list[ImportSpec] = []
        for i, entry in enumerate(_as_list(raw)):
            try:
                specs.append(self._load_import(entry, f"{path}[{i}]"))
            except _Invalid:
                continue
        return specs

    def _load_import(self, raw: Any, path: str) -> ImportSpec:
        if not isinstance(raw, dict):
            raise self._fail(path, "Import must be an object")
        source = raw.get("from")
        if not isinstance(source, str) or not source:
            raise self._fail(path, "Import requires a non-empty 'from' source")

        symbol = raw.get("import")
        if symbol is None:
            return ImportSpec(source=source, path=path)

        if symbol == "*":
            alias = raw.get("as")
            if not is_identifier(alias):
                raise self._fail(path, "Namespace import requires an identifier 'as' alias")
            return ImportSpec(source=source, namespace=alias, path=path)

        if isinstance(symbol, str):
            local = raw.get("as") or symbol
            if not is_identifier(local):
                raise self._fail(path, f"Import name {local!r} is not a valid identifier")
            return ImportSpec(source=source, default=local, path=path)

        if isinstance(symbol, dict):
            named: dict[str, str | None] = {}
            default = None
            for name, shape in symbol.items():
                alias = self._import_alias(shape, f"{path}.import.{name}")
                if name == "default":
                    if alias is None:
                        raise self._fail(
                            f"{path}.import.default", "Default import needs an alias"
                        )
                    default = alias
                    continue
                if not is_identifier(name):
                    raise self._fail(f"{path}.import", f"{name!r} is not a valid identifier")
                named[name] = alias
            return ImportSpec(source=source, default=default, named=named, path=path)

        raise self._fail(path, "'import' must be a name, '*' or an object of names")

    def _import_alias(self, shape: Any, path: str) -> str | None:
        if shape is None or shape is True or shape == {}:
            return None
        alias = shape.get("as") if isinstance(shape, dict) else shape
        if not is_identifier(alias):
            raise self._fail(path, f"Import alias {alias!r} is not a valid identifier")
        return alias

    # =========================================================================
    # Components and nodes
    # =========================================================================

    def _load_component(self, raw: Any, path: str) -> ComponentNode:
        if not isinstance(raw, dict):
            raise self._fail(path, "Component definition must be an object")

        name = raw.get("name")
        if not isinstance(name, str) or not name:
            raise self._fail(f"{path}.name", "Component definition requires a non-empty name")
        if not is_identifier(name):
            raise self._fail(f"{path}.name", f"Component name {name!r} is not a valid identifier")

        node_type = raw.get("type", COMPONENT_MARKER)
        if node_type != COMPONENT_MARKER:
            raise self._fail(
                f"{path}.type",
                f"Top-level entries must have type '{COMPONENT_MARKER}', got {node_type!r}",
            )

        error_count = len(self.result.errors)
        element = raw.get("element", "div")
        if not isinstance(element, str) or not element:
            self._error(f"{path}.element", "'element' must be a non-empty string")

        params = None
        if raw.get("params") is not None:
            params = self._safe(lambda: self._load_pattern(raw["params"], f"{path}.params"))

        provide = self._load_provided_contexts(raw.get("provideContexts"), path)
        use = [
            ctx
            for i, ctx in enumerate(_as_list(raw.get("useContexts")))
            if self._check_context_name(ctx, f"{path}.useContexts[{i}]")
        ]

        fields = dict(
            name=name,
            element=element,
            params=params,
            props=self._load_props(raw.get("props"), f"{path}.props"),
            children=self._load_children(raw.get("children"), f"{path}.children"),
            expressions=self._load_expressions(raw.get("expressions"), f"{path}.expressions"),
            imports=self._load_imports(raw.get("imports"), f"{path}.imports"),
            style=self._load_styles(raw.get("style"), f"{path}.style"),
            provide_contexts=provide,
            use_contexts=use,
            style_sheet=raw.get("styleSheet"),
            style_module=raw.get("styleModule"),
            path=path,
        )
        for key in ("styleSheet", "styleModule"):
            if raw.get(key) is not None and not isinstance(raw.get(key), str):
                self._error(f"{path}.{key}", f"'{key}' must be a string")
        if len(self.result.errors) > error_count:
            raise _Invalid(path)
        return self._build(ComponentNode, fields, path)

    def _safe(self, build):
        try:
            return build()
        except _Invalid:
            return None

    def _check_context_name(self, name: Any, path: str) -> bool:
        if not is_identifier(name):
            self._error(path, f"Context name {name!r} is not a valid identifier")
            return False
        return True

    def _load_provided_contexts(self, raw: Any, path: str) -> dict[str, str]:
        provided: dict[str, str] = {}
        if isinstance(raw, dict):
            for name, value in raw.items():
                if self._check_context_name(name, f"{path}.provideContexts.{name}"):
                    if not isinstance(value, str) or not value:
                        self._error(
                            f"{path}.provideContexts.{name}",
                            "Context value must be a script string",
                        )
                        continue
                    provided[name] = script_text(value)
            return provided
        for i, name in enumerate(_as_list(raw)):
            if self._check_context_name(name, f"{path}.provideContexts[{i}]"):
                provided[name] = name
        return provided

    def _load_props(self, raw: Any, path: str) -> list[Any]:
        entries = []
        for i, entry in enumerate(_as_list(raw)):
            entry_path = f"{path}[{i}]" if isinstance(raw, list) else path
            if isinstance(entry, dict):
                if any(not key for key in entry):
                    self._error(entry_path, "Prop names must be non-empty strings")
                    continue
                data = {"kind": "object", "values": entry}
            elif isinstance(entry, str) and entry:
                data = {"kind": "spread", "script": script_text(entry)}
            else:
                self._error(entry_path, "Props entries must be objects or script strings")
                continue
            prop = self._safe(lambda: self._validate(_PROP_ADAPTER, data, entry_path))
            if prop is not None:
                entries.append(prop)
        return entries

    def _load_children(self, raw: Any, path: str) -> list[Any]:
        children = []
        for i, entry in enumerate(_as_list(raw)):
            child = self._safe(lambda: self._load_child(entry, f"{path}[{i}]"))
            if child is not None:
                children.append(child)
        return children

    def _load_child(self, raw: Any, path: str) -> Any:
        if isinstance(raw, str):
            if is_script_ref(raw):
                return self._validate(
                    _CHILD_ADAPTER, {"kind": "script", "script": script_text(raw)}, path
                )
            if has_braces(raw):
                raise self._fail(
                    path, "Text child contains braces but is not a single script reference"
                )
            return self._validate(_CHILD_ADAPTER, {"kind": "text", "value": raw}, path)
        if raw is None or isinstance(raw, (bool, int, float)):
            return self._validate(_CHILD_ADAPTER, {"kind": "text", "value": raw}, path)
        if not isinstance(raw, dict):
            raise self._fail(path, "Child must be a node, a primitive or a script reference")

        node_type = raw.get("type")
        if not isinstance(node_type, str) or not node_type:
            raise self._fail(f"{path}.type", "Node requires a non-empty string 'type'")
        if node_type == COMPONENT_MARKER:
            raise self._fail(
                f"{path}.type", "Component definitions are only allowed at the top level"
            )

        if node_type == "Script":
            script = raw.get("script")
            if not isinstance(script, str):
                raise self._fail(f"{path}.script", "Script node requires a 'script' string")
            return self._validate(
                _CHILD_ADAPTER, {"kind": "script", "script": script_text(script)}, path
            )

        children = self._load_children(raw.get("children"), f"{path}.children")

        if node_type == "Map":
            data = self._require_code(raw, "data", path)
            pattern = self._load_pattern(raw.get("var", "item"), f"{path}.var")
            index = raw.get("index")
            if index is not None and not is_identifier(index):
                raise self._fail(f"{path}.index", f"Index name {index!r} is not a valid identifier")
            key = raw.get("key")
            if key is not None and (not isinstance(key, str) or not key):
                raise self._fail(f"{path}.key", "Key must be a script string")
            return self._validate(_CHILD_ADAPTER, {
                "kind": "map",
                "data": data,
                "pattern": pattern,
                "index": index,
                "key": script_text(key) if key is not None else None,
                "children": children,
                "path": path,
            }, path)

        if node_type == "If":
            condition = self._require_code(raw, "condition", path)
            else_children = None
            if "else" in raw:
                else_children = self._load_children(raw["else"], f"{path}.else")
            return self._validate(_CHILD_ADAPTER, {
                "kind": "if",
                "condition": condition,
                "children": children,
                "else_children": else_children,
                "path": path,
            }, path)

        if node_type == "Fragment":
            return self._validate(
                _CHILD_ADAPTER, {"kind": "fragment", "children": children, "path": path}, path
            )

        name = raw.get("name")
        if name is not None and not is_identifier(name):
            raise self._fail(f"{path}.name", f"Node name {name!r} is not a valid identifier")
        return self._validate(_CHILD_ADAPTER, {
            "kind": "element",
            "type": node_type,
            "name": name,
            "props": self._load_props(raw.get("props"), f"{path}.props"),
            "children": children,
            "style": self._load_styles(raw.get("style"), f"{path}.style"),
            "path": path,
        }, path)

    def _require_code(self, raw: dict[str, Any], key: str, path: str) -> str:
        value = raw.get(key)
        if not isinstance(value, str) or not value:
            raise self._fail(f"{path}.{key}", f"'{raw.get('type')}' node requires a '{key}' script")
        return script_text(value)

    # =========================================================================
    # Patterns
    # =========================================================================

    def _load_pattern(self, raw: Any, path: str) -> Pattern:
        if isinstance(raw, str):
            if not is_identifier(raw):
                raise self._fail(path, f"{raw!r} is not a valid identifier")
            return Pattern(kind=PatternKind.SCALAR, name=raw)
        if isinstance(raw, list):
            elements = [self._array_element(item, f"{path}[{i}]") for i, item in enumerate(raw)]
            return self._checked_pattern(PatternKind.ARRAY, elements, path)
        if isinstance(raw, dict):
            elements = [
                self._object_element(key, value, f"{path}.{key}") for key, value in raw.items()
            ]
            return self._checked_pattern(PatternKind.OBJECT, elements, path)
        raise self._fail(path, "Pattern must be a name, an array or an object")

    def _checked_pattern(
        self, kind: PatternKind, elements: list[PatternElement], path: str
    ) -> Pattern:
        rest_positions = [i for i, e in enumerate(elements) if e.rest]
        if len(rest_positions) > 1:
            raise self._fail(path, "Pattern may contain at most one rest capture")
        if rest_positions and rest_positions[0] != len(elements) - 1:
            raise self._fail(path, "Rest capture must be the last pattern entry")
        if not any(e.name for e in elements):
            raise self._fail(path, "Pattern must bind at least one name")
        return Pattern(kind=kind, elements=elements)

    def _array_element(self, item: Any, path: str) -> PatternElement:
        if item is None:
            return PatternElement()
        if isinstance(item, str):
            if not is_identifier(item):
                raise self._fail(path, f"{item!r} is not a valid identifier")
            return PatternElement(name=item)
        if isinstance(item, dict):
            if REST_MARKER in item:
                rest = item[REST_MARKER]
                if len(item) != 1 or not is_identifier(rest):
                    raise self._fail(path, "Rest capture must be {'...': name}")
                return PatternElement(name=rest, rest=True)
            name = item.get("name")
            if not is_identifier(name):
                raise self._fail(path, f"{name!r} is not a valid identifier")
            return PatternElement(
                name=name, default=item.get("default"), has_default="default" in item
            )
        raise self._fail(path, "Array pattern entries must be names, objects or null")

    def _object_element(self, key: str, value: Any, path: str) -> PatternElement:
        if key == REST_MARKER:
            if not is_identifier(value):
                raise self._fail(path, "Rest capture must name an identifier")
            return PatternElement(name=value, rest=True)
        if value is None or value is True or value == {}:
            if not is_identifier(key):
                raise self._fail(path, f"{key!r} needs an alias to be bound")
            return PatternElement(name=key, key=key)
        if isinstance(value, str):
            if not is_identifier(value):
                raise self._fail(path, f"Alias {value!r} is not a valid identifier")
            return PatternElement(name=value, key=key)
        if isinstance(value, dict):
            alias = value.get("as", key)
            if not is_identifier(alias):
                raise self._fail(path, f"Alias {alias!r} is not a valid identifier")
            return PatternElement(
                name=alias, key=key, default=value.get("default"), has_default="default" in value
            )
        raise self._fail(path, "Object pattern values must be null, an alias or an object")

    # =========================================================================
    # Expressions
    # =========================================================================

    def _load_expressions(self, raw: Any, path: str) -> list[Any]:
        expressions = []
        for i, entry in enumerate(_as_list(raw)):
            expression = self._safe(lambda: self._load_expression(entry, f"{path}[{i}]"))
            if expression is not None:
                expressions.append(expression)
        return expressions

    def _load_expression(self, raw: Any, path: str) -> Any:
        if isinstance(raw, str):
            return self._validate(_EXPRESSION_ADAPTER, {"type": "script", "script": raw}, path)
        if not isinstance(raw, dict):
            raise self._fail(path, "Expression must be a script string or an object")

        kind = raw.get("type")
        if kind == "script":
            data = {"type": "script", "script": raw.get("script")}
        elif kind == "state":
            value_name, setter = self._state_names(raw.get("var"), f"{path}.var")
            data = {
                "type": "state",
                "value_name": value_name,
                "setter_name": setter,
                "initial_state": raw.get("initialState"),
                "has_initial_state": "initialState" in raw,
            }
        elif kind == "var":
            declaration = raw.get("kind", "const")
            if "value" not in raw and declaration != "let":
                raise self._fail(path, "'var' expression requires a value")
            data = {
                "type": "var",
                "pattern": self._load_pattern(raw.get("var"), f"{path}.var"),
                "value": raw.get("value"),
                "has_value": "value" in raw,
                "declaration": declaration,
            }
        elif kind == "ref":
            name = raw.get("var")
            if not is_identifier(name):
                raise self._fail(f"{path}.var", f"{name!r} is not a valid identifier")
            data = {
                "type": "ref",
                "name": name,
                "initial_value": raw.get("initialValue"),
                "has_initial_value": "initialValue" in raw,
            }
        elif kind == "effect":
            data = {
                "type": "effect",
                "effect": self._require_code(raw, "effect", path),
                "deps": self._deps(raw.get("deps"), f"{path}.deps"),
            }
        elif kind == "memo":
            data = {
                "type": "memo",
                "pattern": self._load_pattern(raw.get("var"), f"{path}.var"),
                "value": self._require_code(raw, "value", path),
                "deps": self._deps(raw.get("deps"), f"{path}.deps") or [],
            }
        elif kind == "callback":
            name = raw.get("var")
            if not is_identifier(name):
                raise self._fail(f"{path}.var", f"{name!r} is not a valid identifier")
            data = {
                "type": "callback",
                "name": name,
                "args": raw.get("args") or [],
                "body": self._require_code(raw, "body", path),
                "deps": self._deps(raw.get("deps"), f"{path}.deps") or [],
            }
        else:
            raise self._fail(f"{path}.type", f"Unknown expression type {kind!r}")
        return self._validate(_EXPRESSION_ADAPTER, data, path)

    def _state_names(self, raw: Any, path: str) -> tuple[str, str]:
        if isinstance(raw, str) and is_identifier(raw):
            return raw, f"set{raw[0].upper()}{raw[1:]}"
        if (
            isinstance(raw, list)
            and len(raw) == 2
            and all(is_identifier(n) for n in raw)
        ):
            return raw[0], raw[1]
        raise self._fail(path, "State requires [value, setter] identifier names")

    def _deps(self, raw: Any, path: str) -> list[str] | None:
        if raw is None:
            return None
        if not isinstance(raw, list) or not all(isinstance(d, str) and d for d in raw):
            raise self._fail(path, "Dependencies must be a list of script strings")
        return [script_text(d) for d in raw]

    # =========================================================================
    # Styles
    # =========================================================================

    def _load_styles(self, raw: Any, path: str) -> list[Any]:
        entries = []
        for i, entry in enumerate(_as_list(raw)):
            entry_path = f"{path}[{i}]" if isinstance(raw, list) else path
            style = self._safe(lambda: self._load_style(entry, entry_path))
            if style is not None:
                entries.append(style)
        return entries

    def _load_style(self, raw: Any, path: str) -> Any:
        if isinstance(raw, str):
            if is_script_ref(raw):
                data = {"kind": "dynamic", "script": script_text(raw)}
            else:
                data = {"kind": "static", "css": raw}
            return self._validate(_STYLE_ADAPTER, data, path)
        if not isinstance(raw, dict):
            raise self._fail(path, "Style entry must be an object or a string")

        tags = [key for key in STYLE_DISCRIMINATORS if key in raw]
        if len(tags) > 1:
            raise self._fail(path, f"Style entry is ambiguous: has both {tags}")
        if not tags:
            return self._validate(
                _STYLE_ADAPTER, {"kind": "object", "style": self._style_map(raw, path)}, path
            )

        tag = tags[0]
        extra = [k for k in raw if k not in (tag, "style")]
        if extra:
            raise self._fail(path, f"Unexpected key(s) {extra} in '{tag}' style entry")
        style = self._style_map(raw.get("style"), f"{path}.style")

        if tag == "condition":
            condition = raw["condition"]
            if not isinstance(condition, str) or not condition:
                raise self._fail(f"{path}.condition", "Condition must be a script string")
            data = {"kind": "conditional", "condition": script_text(condition), "style": style}
        elif tag == "format":
            name = raw["format"]
            if not isinstance(name, str):
                raise self._fail(f"{path}.format", "Format name must be a string")
            if name not in self._format_names:
                raise self._fail(
                    f"{path}.format",
                    f"Unknown format {name!r}. Defined formats: {sorted(self._format_names)}",
                )
            self._check_static_values(style, f"{path}.style")
            data = {"kind": "format", "format": name, "style": style}
        else:
            selector = raw["selector"]
            if not isinstance(selector, str) or not selector.strip():
                raise self._fail(f"{path}.selector", "Selector must be a non-empty string")
            self._check_static_values(style, f"{path}.style")
            data = {"kind": "selector", "selector": selector, "style": style}
        return self._validate(_STYLE_ADAPTER, data, path)

    def _style_map(self, raw: Any, path: str) -> dict[str, Any]:
        if not isinstance(raw, dict):
            raise self._fail(path, "Style must be an object")
        return raw

    def _check_static_values(self, style: dict[str, Any], path: str) -> None:
        """Stylesheet-bound entries can only hold literal strings and numbers."""
        for key, value in style.items():
            if isinstance(value, bool) or not isinstance(value, (str, int, float)):
                raise self._fail(f"{path}.{key}", "Stylesheet values must be strings or numbers")
            if isinstance(value, str) and is_script_ref(value):
                raise self._fail(f"{path}.{key}", "Stylesheet values cannot be scripts")


def load_tree(document: Any) -> LoadResult:
    """Convenience function to load a document."""
    return TreeLoader(document).load()
