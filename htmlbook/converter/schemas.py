"""Request/response schemas for the conversion API."""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ConvertRequest(BaseModel):
    """Convert a whole document tree."""

    document: dict[str, Any] = Field(
        ...,
        description="Document tree payload (kind 'document', optional 'references')",
    )
    transform: Optional[str] = Field(
        default=None,
        description="'embedded' renders the document without its outer wrapper",
    )
    whole_tree: bool = Field(
        default=True,
        description="Render children bottom-up; false uses each node's own content",
    )


class ConvertNodeRequest(BaseModel):
    """Convert a single node outside of a full document."""

    node: dict[str, Any] = Field(..., description="Node payload of any kind")
    document_attributes: dict[str, Any] = Field(default_factory=dict)
    references: dict[str, Optional[str]] = Field(default_factory=dict)
    whole_tree: bool = True


class OutlineRequest(BaseModel):
    """Generate the table-of-contents outline of a document."""

    document: dict[str, Any]
    toclevels: Optional[int] = Field(default=None, ge=0)
    sectnumlevels: Optional[int] = Field(default=None, ge=0)


class ConvertResponse(BaseModel):
    html: str


class OutlineResponse(BaseModel):
    outline: str


class TemplateListResponse(BaseModel):
    names: list[str]
    search_path: list[str]
