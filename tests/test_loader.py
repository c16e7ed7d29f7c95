"""Tests for building document trees from payloads."""
from __future__ import annotations

import json

import pytest
import yaml
from pydantic import ValidationError

from conftest import paragraph_payload, section_payload
from htmlbook.nodes.loader import (
    iter_tree,
    load_document_file,
    load_document_tree,
    load_node,
)
from htmlbook.nodes.schemas import (
    Block,
    DescriptionListEntry,
    Document,
    Inline,
    List,
    ListItem,
    Section,
)


def test_every_node_shares_one_context(book) -> None:
    nodes = list(iter_tree(book))
    contexts = {id(node.document) for node in nodes}
    assert len(contexts) == 1
    assert book.document.root is book
    assert book.document.attributes == book.attributes


def test_sections_are_numbered_when_sectnums_set(book) -> None:
    ch1, ch2 = book.sections
    install, config = ch1.sections
    assert (ch1.sectnum, ch2.sectnum) == ("1", "2")
    assert (install.sectnum, config.sectnum) == ("1.1", "1.2")
    assert install.sections[0].sectnum == "1.1.1"
    assert (ch1.index, ch2.index) == (0, 1)
    assert ch2.number == 2
    assert all(section.numbered for section in (ch1, ch2, install, config))


def test_sections_unnumbered_without_sectnums() -> None:
    document = load_document_tree({"blocks": [section_payload("a", "A")]})
    section = document.sections[0]
    assert section.numbered is False
    assert section.sectnum is None


def test_special_sections_skip_numbering() -> None:
    document = load_document_tree(
        {
            "attributes": {"sectnums": True},
            "blocks": [
                section_payload("pref", "Preface", sectname="preface", special=True),
                section_payload("ch1", "One"),
            ],
        }
    )
    preface, chapter = document.sections
    assert preface.numbered is False
    assert chapter.sectnum == "1"
    assert chapter.index == 1


def test_explicit_numbering_is_kept() -> None:
    document = load_document_tree(
        {
            "attributes": {"sectnums": True},
            "blocks": [section_payload("a", "A", sectnum="IV", number=4)],
        }
    )
    section = document.sections[0]
    assert (section.sectnum, section.number) == ("IV", 4)


def test_references_collect_ids() -> None:
    document = load_document_tree(
        {
            "references": {"external": "Elsewhere", "a": "Override"},
            "blocks": [
                section_payload("a", "A"),
                section_payload("b", "B", attributes={"reftext": "Part B"}),
                paragraph_payload("text", id="p1"),
            ],
        }
    )
    ids = document.document.references.ids
    assert ids == {"external": "Elsewhere", "a": "Override", "b": "Part B", "p1": None}


def test_duplicate_ids_are_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate node id: a"):
        load_document_tree(
            {"blocks": [section_payload("a", "A"), paragraph_payload("x", id="a")]}
        )


def test_section_level_cannot_decrease() -> None:
    with pytest.raises(ValueError, match="nested under level 2"):
        load_document_tree(
            {
                "blocks": [
                    section_payload(
                        "a", "A", level=2, blocks=[section_payload("b", "B", level=1)]
                    )
                ]
            }
        )


def test_missing_section_ids_are_generated() -> None:
    document = load_document_tree(
        {
            "blocks": [
                {"kind": "section", "title": "Getting Started!", "level": 1},
                {"kind": "section", "title": "Getting started", "level": 1},
                section_payload("_notes", "Existing"),
                {"kind": "section", "title": "Notes", "level": 1},
                {"kind": "section", "level": 1},
            ]
        }
    )
    ids = [section.id for section in document.sections]
    assert ids == ["_getting_started", "_getting_started_2", "_notes", "_notes_2", "_section"]
    references = document.document.references.ids
    assert references["_getting_started"] == "Getting Started!"
    assert references["_notes_2"] == "Notes"


def test_explicit_duplicate_of_generated_id_still_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate node id: _intro"):
        load_document_tree(
            {"blocks": [section_payload("_intro", "A"), section_payload("_intro", "B")]}
        )


def test_sections_inside_blocks_number_with_enclosing_section() -> None:
    document = load_document_tree(
        {
            "attributes": {"sectnums": True},
            "blocks": [
                section_payload(
                    "ch1",
                    "One",
                    blocks=[
                        section_payload("a", "A", level=2),
                        {
                            "kind": "block",
                            "context": "sidebar",
                            "blocks": [section_payload("b", "B", level=2)],
                        },
                        section_payload("c", "C", level=2),
                    ],
                )
            ],
        }
    )
    chapter = document.sections[0]
    a, c = chapter.sections
    b = chapter.blocks[1].blocks[0]
    assert (a.sectnum, b.sectnum, c.sectnum) == ("1.1", "1.2", "1.3")
    assert (a.index, b.index, c.index) == (0, 1, 2)


def test_section_level_checked_across_intermediate_blocks() -> None:
    with pytest.raises(ValueError, match="nested under level 2"):
        load_document_tree(
            {
                "blocks": [
                    section_payload(
                        "a",
                        "A",
                        level=2,
                        blocks=[
                            {
                                "kind": "block",
                                "context": "example",
                                "blocks": [section_payload("b", "B", level=1)],
                            }
                        ],
                    )
                ]
            }
        )


def test_unknown_kind_is_a_validation_error() -> None:
    with pytest.raises(ValidationError):
        load_document_tree({"blocks": [{"kind": "figure", "context": "image"}]})


def test_non_document_payload_rejected() -> None:
    with pytest.raises(ValueError, match="Expected a document payload"):
        load_document_tree({"kind": "section", "title": "A"})


def test_list_variants() -> None:
    document = load_document_tree(
        {
            "blocks": [
                {"kind": "list", "context": "ulist", "items": [{"text": "one"}, {"text": "two"}]},
                {
                    "kind": "list",
                    "context": "dlist",
                    "items": [
                        {"terms": [{"text": "CPU"}], "description": {"text": "Processor"}},
                    ],
                },
            ]
        }
    )
    ulist, dlist = document.blocks
    assert isinstance(ulist, List) and all(isinstance(i, ListItem) for i in ulist.items)
    assert isinstance(dlist.items[0], DescriptionListEntry)
    assert [item.text for item in dlist.list_items] == ["CPU", "Processor"]
    assert dlist.list_items[0].document is document.document


def test_dlist_requires_entries() -> None:
    with pytest.raises(ValidationError):
        load_document_tree(
            {"blocks": [{"kind": "list", "context": "dlist", "items": [{"text": "x"}]}]}
        )


def test_load_node_fragment() -> None:
    node = load_node(
        {"kind": "inline", "context": "anchor", "type": "xref", "target": "ch1"},
        document_attributes={"lang": "en"},
        references={"ch1": "Chapter One"},
    )
    assert isinstance(node, Inline)
    assert node.node_name == "inline_anchor"
    assert node.document.attributes == {"lang": "en"}
    assert node.document.references.ids == {"ch1": "Chapter One"}
    assert node.document.root is None


def test_load_node_document_uses_own_attributes() -> None:
    node = load_node({"kind": "document", "attributes": {"toclevels": 1}})
    assert isinstance(node, Document)
    assert node.document.root is node
    assert node.document.attributes == {"toclevels": 1}


def test_load_document_file_json_and_yaml(tmp_path) -> None:
    payload = {
        "header_title": "From File",
        "blocks": [section_payload("a", "A", blocks=[paragraph_payload("Hi")])],
    }
    json_file = tmp_path / "book.json"
    json_file.write_text(json.dumps(payload))
    yaml_file = tmp_path / "book.yml"
    yaml_file.write_text(yaml.safe_dump(payload))

    for path in (json_file, yaml_file):
        document = load_document_file(path)
        assert document.header_title == "From File"
        assert isinstance(document.sections[0], Section)
        assert isinstance(document.sections[0].blocks[0], Block)


def test_load_document_file_rejects_unknown_suffix(tmp_path) -> None:
    path = tmp_path / "book.txt"
    path.write_text("{}")
    with pytest.raises(ValueError, match="Unsupported document file type"):
        load_document_file(path)
