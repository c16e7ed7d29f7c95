"""Shared fixtures for converter tests."""
from __future__ import annotations

from typing import Any

import pytest

from htmlbook.converter import HtmlbookConverter
from htmlbook.nodes.loader import load_document_tree


def section_payload(
    section_id: str,
    title: str,
    level: int = 1,
    blocks: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    payload = {
        "kind": "section",
        "id": section_id,
        "title": title,
        "level": level,
        "blocks": blocks or [],
    }
    payload.update(extra)
    return payload


def paragraph_payload(text: str, **extra: Any) -> dict[str, Any]:
    payload = {"kind": "block", "context": "paragraph", "content": text}
    payload.update(extra)
    return payload


@pytest.fixture
def converter() -> HtmlbookConverter:
    return HtmlbookConverter()


@pytest.fixture
def book():
    """Numbered two-chapter book with a TOC block and nested sections."""
    return load_document_tree(
        {
            "header_title": "Sample Book",
            "attributes": {"sectnums": "", "toclevels": 3},
            "blocks": [
                {"kind": "block", "context": "toc", "id": "toc"},
                section_payload(
                    "ch1",
                    "Getting Started",
                    blocks=[
                        paragraph_payload("Welcome."),
                        section_payload(
                            "ch1-install",
                            "Installing",
                            level=2,
                            blocks=[
                                section_payload("ch1-install-linux", "On Linux", level=3),
                            ],
                        ),
                        section_payload("ch1-config", "Configuring", level=2),
                    ],
                ),
                section_payload("ch2", "Next Steps"),
            ],
        }
    )
