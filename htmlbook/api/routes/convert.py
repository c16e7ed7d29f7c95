"""API routes for document conversion.

Accepts document trees in their JSON shape and returns HTMLBook markup.
Converter errors map to HTTP errors here; the converter itself never
catches them.
"""

import logging
from typing import Callable

from fastapi import APIRouter, HTTPException

from htmlbook.converter.converter import get_converter
from htmlbook.converter.schemas import (
    ConvertNodeRequest,
    ConvertRequest,
    ConvertResponse,
    OutlineRequest,
    OutlineResponse,
)
from htmlbook.nodes.loader import load_document_tree, load_node
from htmlbook.projection.outline import generate_outline
from htmlbook.templates.registry import TemplateNotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/convert", tags=["convert"])


def _run(action: Callable[[], str]) -> str:
    """Run a load/convert step, translating converter errors to HTTP errors.

    Validation errors, unknown node kinds and malformed trees are all
    ValueError subclasses and map to 422.
    """
    try:
        return action()
    except TemplateNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("", response_model=ConvertResponse)
async def convert_document(request: ConvertRequest):
    """Convert a document tree to HTMLBook."""
    converter = get_converter()

    def action() -> str:
        document = load_document_tree(request.document)
        if request.whole_tree:
            return converter.convert_tree(document, transform=request.transform)
        return converter.convert(document, transform=request.transform)

    html = _run(action)
    logger.info(f"Converted document ({len(html)} chars)")
    return ConvertResponse(html=html)


@router.post("/node", response_model=ConvertResponse)
async def convert_node(request: ConvertNodeRequest):
    """Convert a single node (section, block, list, table or inline)."""
    converter = get_converter()

    def action() -> str:
        node = load_node(
            request.node,
            document_attributes=request.document_attributes,
            references=request.references,
        )
        if request.whole_tree:
            return converter.convert_tree(node)
        return converter.convert(node)

    return ConvertResponse(html=_run(action))


@router.post("/outline", response_model=OutlineResponse)
async def convert_outline(request: OutlineRequest):
    """Generate the table-of-contents outline of a document tree."""

    def action() -> str:
        document = load_document_tree(request.document)
        return generate_outline(
            document,
            toclevels=request.toclevels,
            sectnumlevels=request.sectnumlevels,
        )

    return OutlineResponse(outline=_run(action))
