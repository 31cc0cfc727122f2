"""Compilation context shared by all stages of one run.

Holds the two app-wide registries (component names, contexts) and the
single-assignment name annotations. Registries are frozen before any
per-component work starts, so that work can run on worker threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

from .tree import AppTree, ComponentNode, Platform

if TYPE_CHECKING:
    from .compiler.context_binder import ContextPlan
    from .errors import CompilerError


@dataclass
class CompilationContext:
    """Accumulation context for one compilation run.

    Attributes:
        tree: The loaded document
        platform: Target platform of this run
        components: Frozen registry of component definitions by name
        names: Resolved name of every element node, keyed by document path
        contexts: Provide/consume plan from the context binder
        errors: Errors accumulated by all stages
    """

    tree: AppTree
    platform: Platform
    components: Mapping[str, ComponentNode] = field(default_factory=dict)
    names: dict[str, str] = field(default_factory=dict)
    contexts: ContextPlan | None = None
    errors: list[CompilerError] = field(default_factory=list)
    frozen: bool = False

    def register_component(self, component: ComponentNode) -> ComponentNode | None:
        """Register a component definition. Returns the earlier holder of the name, if any."""
        if self.frozen:
            raise RuntimeError("Component registry is frozen")
        existing = self.components.get(component.name)
        if existing is None:
            self.components[component.name] = component
        return existing

    def assign_name(self, path: str, name: str) -> None:
        """Record the resolved name of the node at path. Names are assigned once."""
        if self.frozen:
            raise RuntimeError("Names are frozen")
        current = self.names.get(path)
        if current is not None and current != name:
            raise RuntimeError(f"Node at {path} already named '{current}'")
        self.names[path] = name

    def name_of(self, path: str) -> str:
        return self.names[path]

    def is_component(self, type_name: str) -> bool:
        return type_name in self.components

    def freeze(self) -> None:
        """Freeze the registries before per-component work begins."""
        self.components = MappingProxyType(dict(self.components))
        self.names = MappingProxyType(dict(self.names))
        self.frozen = True

    def add_errors(self, errors: list[CompilerError]) -> None:
        self.errors.extend(errors)
