"""Build document trees from their JSON/YAML shape.

This is the input side of the converter: it validates a payload into
node models, numbers sections, collects the reference table and binds
one shared DocumentContext to every node. Once loaded, a tree is treated
as read-only.
"""

import json
import logging
import re
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml
from pydantic import TypeAdapter

from .schemas import (
    AbstractBlock,
    AbstractNode,
    Document,
    DocumentContext,
    List,
    Node,
    References,
    Section,
    Table,
)

logger = logging.getLogger(__name__)

_node_adapter: TypeAdapter = TypeAdapter(Node)

_INVALID_ID_CHARS = re.compile(r"[^a-z0-9]+")


def load_document_tree(payload: dict[str, Any]) -> Document:
    """Load a full document tree.

    Args:
        payload: Document mapping; an optional top-level ``references``
            mapping (id -> target text) seeds the reference table.

    Returns:
        The Document root with its context bound to every node
    """
    data = dict(payload)
    references = data.pop("references", None) or {}
    data.setdefault("kind", "document")
    if data["kind"] != "document":
        raise ValueError(f"Expected a document payload, got kind '{data['kind']}'")

    document = Document.model_validate(data)
    bind_document_context(document, document.attributes, references)
    return document


def load_node(
    payload: dict[str, Any],
    document_attributes: Optional[dict[str, Any]] = None,
    references: Optional[dict[str, Optional[str]]] = None,
) -> AbstractNode:
    """Load a single node (any kind) with its own document context."""
    node = _node_adapter.validate_python(payload)
    if isinstance(node, Document):
        attributes = node.attributes
    else:
        attributes = document_attributes or {}
    bind_document_context(node, attributes, references or {})
    return node


def load_document_file(path: Path) -> Document:
    """Load a document tree from a .json, .yaml or .yml file."""
    path = Path(path)
    suffix = path.suffix.lower()

    with open(path, "r", encoding="utf-8") as f:
        if suffix == ".json":
            payload = json.load(f)
        elif suffix in (".yaml", ".yml"):
            payload = yaml.safe_load(f)
        else:
            raise ValueError(f"Unsupported document file type: {path}")

    if not isinstance(payload, dict):
        raise ValueError(f"Document file must contain a mapping: {path}")

    logger.debug(f"Loaded document payload from {path}")
    return load_document_tree(payload)


def iter_tree(root: AbstractNode) -> Iterator[AbstractNode]:
    """Yield every node of a tree in document order.

    Covers child blocks, list items (dlist terms and descriptions
    included) and table cells. Uses an explicit stack.
    """
    stack: list[AbstractNode] = [root]
    while stack:
        node = stack.pop()
        yield node

        children: list[AbstractNode] = []
        if isinstance(node, List):
            children.extend(node.list_items)
        elif isinstance(node, Table):
            children.extend(node.rows.all_cells())
        if isinstance(node, AbstractBlock):
            children.extend(node.blocks)
        stack.extend(reversed(children))


def bind_document_context(
    root: AbstractNode,
    attributes: dict[str, Any],
    references: dict[str, Optional[str]],
) -> DocumentContext:
    """Number sections, collect ids and attach one shared context.

    Sections without an id get one generated from their title.

    Raises:
        ValueError: On a duplicate id or a section whose level is lower
            than its enclosing section's
    """
    if isinstance(root, AbstractBlock):
        _number_sections(root, sectnums=_is_set(attributes.get("sectnums")))

    ids: dict[str, Optional[str]] = dict(references)
    seen: set[str] = set()
    nodes = list(iter_tree(root))
    for node in nodes:
        if node.id is None:
            continue
        if node.id in seen:
            raise ValueError(f"Duplicate node id: {node.id}")
        seen.add(node.id)

    for node in nodes:
        if node.id is None and isinstance(node, Section):
            node.id = _generate_section_id(node.title, seen)
            seen.add(node.id)
        if node.id is not None and node.id not in ids:
            ids[node.id] = node.attributes.get("reftext") or getattr(node, "title", None)

    context = DocumentContext(
        references=References(ids=ids),
        attributes=attributes,
        root=root if isinstance(root, Document) else None,
    )
    for node in nodes:
        node.document = context

    logger.debug(f"Bound document context to {len(nodes)} nodes ({len(ids)} ids)")
    return context


def _generate_section_id(title: Optional[str], taken: set[str]) -> str:
    """Build ``_`` + lower-cased title, suffixed ``_2``, ``_3``... when taken."""
    slug = _INVALID_ID_CHARS.sub("_", (title or "").lower()).strip("_")
    base = f"_{slug or 'section'}"
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}_{suffix}"
        suffix += 1
    return candidate


def _number_sections(root: AbstractBlock, sectnums: bool) -> None:
    """Fill index/number/sectnum for sections that do not carry them.

    Sections are numbered among the sections of their nearest enclosing
    section (or the root), even when nested inside ordinary blocks.
    """
    # (index, numbered) counters per enclosing section
    counters: dict[int, list[int]] = {}
    stack: list[tuple[AbstractBlock, AbstractBlock]] = [
        (block, root) for block in reversed(root.blocks) if isinstance(block, AbstractBlock)
    ]
    while stack:
        block, enclosing = stack.pop()
        if isinstance(block, Section):
            if block.level < enclosing.level:
                raise ValueError(
                    f"Section '{block.title}' at level {block.level} "
                    f"is nested under level {enclosing.level}"
                )
            counts = counters.setdefault(id(enclosing), [0, 0])
            block.index = counts[0]
            counts[0] += 1
            if block.numbered is None:
                block.numbered = sectnums and not block.special
            if block.numbered:
                counts[1] += 1
                if block.number is None:
                    block.number = counts[1]
                if block.sectnum is None:
                    parent_sectnum = enclosing.sectnum if isinstance(enclosing, Section) else None
                    block.sectnum = (
                        f"{parent_sectnum}.{block.number}"
                        if parent_sectnum
                        else str(block.number)
                    )
            enclosing = block

        for child in reversed(block.blocks):
            if isinstance(child, AbstractBlock):
                stack.append((child, enclosing))


def _is_set(value: Any) -> bool:
    """Attribute set-ness: present and not explicitly false."""
    return value is not None and value is not False
