"""Compiler error types.

Every stage reports problems as CompilerError instances instead of raising,
so a single run surfaces the complete set of problems. CompilationFailed
wraps the accumulated list for callers that prefer exceptions.
"""

from __future__ import annotations


class CompilerError(Exception):
    """Base class for all compilation errors.

    Attributes:
        path: Location in the input document (e.g. ``components[0].style[1]``)
        message: Human readable reason
    """

    kind = "compiler"

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{path}: {message}" if path else message)
        self.path = path
        self.message = message

    def to_dict(self) -> dict[str, str]:
        return {"kind": self.kind, "path": self.path, "message": self.message}


class StructuralError(CompilerError):
    """Malformed or missing required fields in the input document."""

    kind = "structural"


class ConflictError(CompilerError):
    """Two declarations claim the same identity (name, import alias, context)."""

    kind = "conflict"

    def __init__(self, path: str, message: str, other_path: str) -> None:
        super().__init__(path, message)
        self.other_path = other_path

    def to_dict(self) -> dict[str, str]:
        data = super().to_dict()
        data["other_path"] = self.other_path
        return data


class DuplicateContextError(ConflictError):
    """A context name appears in more than one component's provideContexts."""

    kind = "duplicate_context"

    def __init__(self, path: str, context: str, component: str, other_component: str,
                 other_path: str) -> None:
        super().__init__(
            path,
            f"Context '{context}' provided by both '{other_component}' and '{component}'",
            other_path,
        )
        self.context = context
        self.component = component
        self.other_component = other_component


class UnknownContextError(CompilerError):
    """A component consumes a context that no component provides."""

    kind = "unknown_context"

    def __init__(self, path: str, component: str, context: str) -> None:
        super().__init__(path, f"Component '{component}' uses undeclared context '{context}'")
        self.component = component
        self.context = context


class CompilationFailed(Exception):
    """Raised when a compilation run produced errors."""

    def __init__(self, errors: list[CompilerError]) -> None:
        lines = "\n".join(f"  {e}" for e in errors)
        super().__init__(f"Compilation failed with {len(errors)} error(s):\n{lines}")
        self.errors = errors
