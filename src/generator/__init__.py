"""Declarative UI tree to component source compiler.

Compiles a JSON app document (components, expressions, styles, contexts)
into component source files plus stylesheet artifacts for one target
platform per run.

The compilation pipeline:
  1. Document (parsed JSON) -> TreeLoader -> AppTree (pydantic models)
  2. AppTree -> name resolution, context binding (app-wide, then frozen)
  3. Per component: statements, imports, styles -> CodeGenerator
  4. Stylesheets assembled in component declaration order
"""

from .errors import (
    CompilationFailed,
    CompilerError,
    ConflictError,
    DuplicateContextError,
    StructuralError,
    UnknownContextError,
)
from .loader import LoadResult, load_tree
from .pipeline import CompilationPipeline, CompilationResult, compile_app
from .tree import AppTree, ComponentNode, Platform

__all__ = [
    "compile_app",
    "CompilationPipeline",
    "CompilationResult",
    "load_tree",
    "LoadResult",
    "AppTree",
    "ComponentNode",
    "Platform",
    "CompilerError",
    "StructuralError",
    "ConflictError",
    "DuplicateContextError",
    "UnknownContextError",
    "CompilationFailed",
]
