"""Template rendering against presentation models."""

from typing import Any

from jinja2 import Template


class TemplateRenderer:
    """Executes a resolved template against a projected node model.

    The model is exposed to templates as ``node``. Jinja2 errors are not
    caught here.
    """

    def render(self, template: Template, model: dict[str, Any]) -> str:
        return template.render(node=model)
