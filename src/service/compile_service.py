"""Compile service - orchestrates document compilation.

This service:
1. Loads an app document from a dict, a file path or an http(s) URL
2. Compiles it for the requested platform
3. Writes the artifacts under an output directory
4. Returns a structured CompileResponse

Configuration is environment-based:
- UITREE_OUTPUT_DIR: default output directory (default: build)
- UITREE_DEFAULT_PLATFORM: platform used when neither the caller nor the
  document names one (default: web)
- UITREE_MAX_WORKERS: worker threads for per-component work (default: 1)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

import httpx

from src.generator import compile_app
from src.generator.tree import Platform
from src.models.compile_job import CompileErrorModel, CompileResponse

logger = logging.getLogger(__name__)

OUTPUT_DIR = os.environ.get("UITREE_OUTPUT_DIR", "build")
DEFAULT_PLATFORM = os.environ.get("UITREE_DEFAULT_PLATFORM", Platform.WEB.value)
MAX_WORKERS = int(os.environ.get("UITREE_MAX_WORKERS", "1"))

# Timeout for fetching remote documents
FETCH_TIMEOUT = 30.0


class DocumentLoadError(Exception):
    """Raised when an input document cannot be read or parsed."""

    pass


class CompileService:
    """Service for compiling app documents and writing artifacts."""

    def __init__(
        self,
        output_dir: str | Path | None = None,
        default_platform: Platform | str | None = None,
        max_workers: int | None = None,
    ):
        """Initialize compile service.

        Args:
            output_dir: Directory artifacts are written to
            default_platform: Platform used when the document names none
            max_workers: Worker threads for per-component work
        """
        self.output_dir = Path(output_dir or OUTPUT_DIR)
        self.default_platform = Platform(default_platform or DEFAULT_PLATFORM)
        self.max_workers = max_workers or MAX_WORKERS

    def load_document(self, source: str | Path | dict[str, Any]) -> dict[str, Any]:
        """Load a document from a dict, a JSON file or an http(s) URL.

        Raises:
            DocumentLoadError: If the source cannot be read or is not a JSON object
        """
        if isinstance(source, dict):
            return source

        text = str(source)
        if text.startswith(("http://", "https://")):
            data = self._fetch(text)
        else:
            path = Path(text)
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except OSError as e:
                raise DocumentLoadError(f"Cannot read {path}: {e}") from e
            except json.JSONDecodeError as e:
                raise DocumentLoadError(f"Invalid JSON in {path}: {e}") from e

        if not isinstance(data, dict):
            raise DocumentLoadError(f"Document in {text} must be a JSON object")
        return data

    def _fetch(self, url: str) -> Any:
        logger.info(f"Fetching document from {url}")
        try:
            with httpx.Client(timeout=FETCH_TIMEOUT) as client:
                response = client.get(url)
        except httpx.HTTPError as e:
            raise DocumentLoadError(f"Failed to fetch {url}: {e}") from e
        if response.status_code != 200:
            raise DocumentLoadError(f"HTTP {response.status_code} fetching {url}")
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise DocumentLoadError(f"Invalid JSON from {url}: {e}") from e

    def resolve_platform(
        self, document: dict[str, Any], platform: Platform | str | None = None
    ) -> Platform | str:
        """Caller's platform, then the document's, then the service default."""
        if platform is not None:
            return platform
        return document.get("platform") or self.default_platform

    def compile(
        self, document: dict[str, Any], platform: Platform | str | None = None
    ) -> CompileResponse:
        """Compile a document without writing anything."""
        result = compile_app(
            document,
            platform=self.resolve_platform(document, platform),
            max_workers=self.max_workers,
        )
        if not result.ok:
            logger.warning(f"Compilation failed with {len(result.errors)} error(s)")
            return CompileResponse(
                status="error",
                platform=result.platform,
                errors=[CompileErrorModel.from_error(e) for e in result.errors],
            )
        return CompileResponse(
            status="success", platform=result.platform, artifacts=result.artifacts
        )

    def write_artifacts(self, artifacts: dict[str, str], output_dir: str | Path | None = None) -> Path:
        """Write artifacts under the output directory, creating folders as needed."""
        root = Path(output_dir) if output_dir is not None else self.output_dir
        for relative, content in artifacts.items():
            target = root / relative
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        logger.info(f"Wrote {len(artifacts)} artifact(s) to {root}")
        return root

    def compile_to_disk(
        self,
        source: str | Path | dict[str, Any],
        platform: Platform | str | None = None,
        output_dir: str | Path | None = None,
    ) -> CompileResponse:
        """Load, compile and write. Nothing is written when compilation fails."""
        document = self.load_document(source)
        response = self.compile(document, platform)
        if response.status == "success":
            root = self.write_artifacts(response.artifacts, output_dir)
            response.output_dir = str(root)
        return response
