"""HTMLBook converter.

Turns parsed semantic document trees into HTMLBook markup:
- Node models and a JSON/YAML tree loader
- Projection of nodes into template-facing models
- Table-of-contents outline generation
- Jinja2 template lookup across ordered directories
"""

__version__ = "0.1.0"
