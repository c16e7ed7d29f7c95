"""Template lookup and rendering.

Architecture:
- builtin/     - Default HTMLBook templates, one ``<name>.html`` per node name
- registry.py  - TemplateRegistry for resolving and caching templates
- renderer.py  - TemplateRenderer for executing templates against node models
"""

from .registry import (
    DEFAULT_TEMPLATE_DIR,
    TemplateNotFoundError,
    TemplateRegistry,
    create_environment,
)
from .renderer import TemplateRenderer

__all__ = [
    "DEFAULT_TEMPLATE_DIR",
    "TemplateNotFoundError",
    "TemplateRegistry",
    "TemplateRenderer",
    "create_environment",
]
