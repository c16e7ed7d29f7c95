"""Projection of document tree nodes into template models.

- projector.py - Kind dispatch and per-kind presentation models
- outline.py   - Table-of-contents outline markup
"""

from .outline import DEFAULT_SECTNUMLEVELS, DEFAULT_TOCLEVELS, generate_outline
from .projector import NodeProjector, UnknownNodeKindError

__all__ = [
    "DEFAULT_SECTNUMLEVELS",
    "DEFAULT_TOCLEVELS",
    "NodeProjector",
    "UnknownNodeKindError",
    "generate_outline",
]
