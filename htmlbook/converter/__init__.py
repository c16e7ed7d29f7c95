"""Conversion entry point.

- options.py   - ConverterOptions (template search path, Jinja2 settings)
- converter.py - HtmlbookConverter and the process-wide get_converter()
"""

from .converter import EMBEDDED_TRANSFORM, HtmlbookConverter, get_converter
from .options import ConverterOptions

__all__ = [
    "EMBEDDED_TRANSFORM",
    "ConverterOptions",
    "HtmlbookConverter",
    "get_converter",
]
