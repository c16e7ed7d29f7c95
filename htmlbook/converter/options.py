"""Converter configuration."""

import os
from pathlib import Path

from pydantic import BaseModel, Field

TEMPLATE_DIRS_ENV = "HTMLBOOK_TEMPLATE_DIRS"


class ConverterOptions(BaseModel):
    """Options for an HtmlbookConverter instance."""

    template_dirs: list[Path] = Field(
        default_factory=list,
        description="Template directories searched before the builtin templates",
    )
    autoescape: bool = Field(
        default=False,
        description="Jinja2 autoescaping. Off: node content is already markup",
    )
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    @classmethod
    def from_env(cls) -> "ConverterOptions":
        """Build options from HTMLBOOK_TEMPLATE_DIRS (os.pathsep separated)."""
        raw = os.environ.get(TEMPLATE_DIRS_ENV, "")
        template_dirs = [Path(part) for part in raw.split(os.pathsep) if part]
        return cls(template_dirs=template_dirs)
