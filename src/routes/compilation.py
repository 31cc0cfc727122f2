"""Compile routes."""

import logging

from fastapi import APIRouter, HTTPException, Query

from src.generator.registries.platforms import PLATFORMS
from src.models.compile_job import CompileRequest, CompileResponse
from src.service.compile_service import CompileService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/compile", tags=["compile"])


def _get_service() -> CompileService:
    return CompileService()


@router.post("", response_model=CompileResponse)
async def compile_document(
    request: CompileRequest,
    write: bool = Query(False, description="Also write artifacts to the output directory"),
) -> CompileResponse:
    """Compile an app document for one platform.

    Returns every artifact on success. Any compilation error rejects the
    whole document with HTTP 422 and the ordered error list.
    """
    service = _get_service()
    response = service.compile(request.document, request.platform)

    if response.status != "success":
        logger.info(f"Rejected document with {len(response.errors)} error(s)")
        raise HTTPException(
            status_code=422,
            detail=[e.model_dump(exclude_none=True) for e in response.errors],
        )

    if write:
        root = service.write_artifacts(response.artifacts)
        response.output_dir = str(root)
    return response


@router.get("/platforms")
async def list_platforms() -> dict[str, list[str]]:
    """List the supported target platforms."""
    return {"platforms": [p.value for p in PLATFORMS]}
