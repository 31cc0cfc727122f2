"""Visitor implementations for component child-tree traversal."""

from .base import NodeVisitor, Trail
from .component_reference_collector import ComponentReferenceCollector
from .element_collector import ElementCollector

__all__ = ["NodeVisitor", "Trail", "ComponentReferenceCollector", "ElementCollector"]
