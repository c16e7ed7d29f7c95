#!/usr/bin/env python3
"""Render a document tree file to HTMLBook.

Reads a JSON or YAML document tree (the shape accepted by
htmlbook.nodes.loader) and writes the converted markup.

Usage:
    python scripts/render_document.py book.json -o book.html
    python scripts/render_document.py book.yaml --embedded -t my_templates/
"""

import argparse
import logging
import sys
from pathlib import Path

from htmlbook.converter import ConverterOptions, HtmlbookConverter
from htmlbook.converter.converter import EMBEDDED_TRANSFORM
from htmlbook.nodes.loader import load_document_file

logger = logging.getLogger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Render a JSON/YAML document tree to HTMLBook"
    )
    parser.add_argument("input", type=Path, help="Document tree file (.json, .yaml, .yml)")
    parser.add_argument(
        "-o", "--output",
        type=Path,
        help="Output file (default: stdout)",
    )
    parser.add_argument(
        "-t", "--template-dir",
        type=Path,
        action="append",
        default=[],
        help="Template directory searched before the builtin templates (repeatable)",
    )
    parser.add_argument(
        "--embedded",
        action="store_true",
        help="Render the document body without the outer html wrapper",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Debug logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if not args.input.exists():
        print(f"Error: Input file not found: {args.input}", file=sys.stderr)
        return 1

    converter = HtmlbookConverter(ConverterOptions(template_dirs=args.template_dir))
    document = load_document_file(args.input)
    transform = EMBEDDED_TRANSFORM if args.embedded else None
    html = converter.convert_tree(document, transform=transform)

    if args.output:
        args.output.write_text(html + "\n", encoding="utf-8")
        logger.info(f"Wrote {len(html)} chars to {args.output}")
    else:
        print(html)

    return 0


if __name__ == "__main__":
    exit(main())
