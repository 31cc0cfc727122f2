"""Compile service API."""

from src.service.compile_service import CompileService, DocumentLoadError

__all__ = ["CompileService", "DocumentLoadError"]
