"""API routes for template discovery."""

import logging

from fastapi import APIRouter

from htmlbook.converter.converter import get_converter
from htmlbook.converter.schemas import TemplateListResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=TemplateListResponse)
async def list_templates():
    """List resolvable template names and the directory search order."""
    registry = get_converter().registry
    return TemplateListResponse(
        names=registry.list_names(),
        search_path=[str(path) for path in registry.search_path],
    )
