"""Compile request and response models.

These models define the interface of the HTTP service and the result
returned by CompileService.
"""

from typing import Any

from pydantic import BaseModel, Field

from src.generator.errors import CompilerError
from src.generator.tree import Platform


class CompileRequest(BaseModel):
    """Request body for the compile endpoint."""

    document: dict[str, Any] = Field(..., description="App document (type: 'app')")
    platform: Platform | None = Field(
        default=None,
        description="Target platform; defaults to the document's platform, then the service default",
    )


class CompileErrorModel(BaseModel):
    """One compilation error, located by document path."""

    kind: str
    path: str
    message: str
    other_path: str | None = Field(
        default=None, description="Location of the earlier declaration, for conflicts"
    )

    @classmethod
    def from_error(cls, error: CompilerError) -> "CompileErrorModel":
        return cls(**error.to_dict())


class CompileResponse(BaseModel):
    """Result of a compilation run."""

    status: str  # "success", "error"
    platform: Platform | None = None
    artifacts: dict[str, str] = Field(default_factory=dict)
    errors: list[CompileErrorModel] = Field(default_factory=list)
    output_dir: str | None = Field(
        default=None, description="Where artifacts were written, when written"
    )
