"""Table-of-contents outline generation.

Builds nested <ol> markup from the section children of a document or
section. Depth is limited by the ``toclevels`` document attribute and
number prefixes by ``sectnumlevels``. The walk uses an explicit work
stack, so nesting depth is bounded by memory rather than the interpreter
recursion limit.
"""

import logging
from typing import Any, Optional, Union

from htmlbook.nodes.schemas import AbstractBlock, Section

logger = logging.getLogger(__name__)

DEFAULT_TOCLEVELS = 2
DEFAULT_SECTNUMLEVELS = 3


def generate_outline(
    root: AbstractBlock,
    toclevels: Optional[int] = None,
    sectnumlevels: Optional[int] = None,
) -> str:
    """Generate the outline markup rooted at a document or section.

    Args:
        root: Container whose child sections form the outline
        toclevels: Depth cutoff (default: document attribute, then 2)
        sectnumlevels: Number prefix cutoff (default: document attribute, then 3)

    Returns:
        Nested <ol> markup, or "" when the root has no sections or its
        level is not below ``toclevels``
    """
    attributes = root.document.attributes if root.document is not None else {}
    if toclevels is None:
        toclevels = _int_attribute(attributes, "toclevels", DEFAULT_TOCLEVELS)
    if sectnumlevels is None:
        sectnumlevels = _int_attribute(attributes, "sectnumlevels", DEFAULT_SECTNUMLEVELS)

    parts: list[str] = []
    # Items are either literal markup or a container still to expand
    stack: list[Union[str, AbstractBlock]] = [root]

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        sections = item.sections
        if not sections or item.level >= toclevels:
            continue

        work: list[Union[str, AbstractBlock]] = ["<ol>"]
        for section in sections:
            work.append("<li>")
            work.append(_section_link(section, sectnumlevels))
            work.append(section)
            work.append("</li>")
        work.append("</ol>")
        stack.extend(reversed(work))

    return "".join(parts)


def _section_link(section: Section, sectnumlevels: int) -> str:
    text = section.title or ""
    if section.numbered and section.sectnum and section.level < sectnumlevels:
        text = f"{section.sectnum} {text}"
    return f'<a href="#{section.id or ""}">{text}</a>'


def _int_attribute(attributes: dict[str, Any], name: str, default: int) -> int:
    value = attributes.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Ignoring non-integer {name}={value!r}, using {default}")
        return default
