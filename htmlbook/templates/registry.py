"""Template registry - resolves logical names to parsed Jinja2 templates.

- Templates are ``<name>.html`` files
- Caller-supplied directories are searched in order, then builtin/
- First match wins; a parsed template is cached per name for the
  lifetime of the registry and parsed at most once
"""

import logging
import threading
from pathlib import Path
from typing import Iterable, Optional

from jinja2 import Environment, Template

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "builtin"
TEMPLATE_SUFFIX = ".html"


def create_environment(
    autoescape: bool = False,
    trim_blocks: bool = True,
    lstrip_blocks: bool = True,
) -> Environment:
    """Create the Jinja2 environment templates are parsed with.

    Null model fields print as an empty string rather than "None".
    """
    return Environment(
        autoescape=autoescape,
        trim_blocks=trim_blocks,
        lstrip_blocks=lstrip_blocks,
        finalize=lambda value: "" if value is None else value,
    )


class TemplateNotFoundError(ValueError):
    """Raised when no search directory provides a template."""

    def __init__(self, name: str, search_path: Iterable[Path] = ()):
        self.name = name
        self.search_path = list(search_path)
        super().__init__(f"Template not found {name}")


class TemplateRegistry:
    """Registry of parsed templates, searched across ordered directories.

    Usage:
        registry = TemplateRegistry([Path("my_templates")], env)
        template = registry.get("section")
    """

    def __init__(
        self,
        template_dirs: Optional[Iterable[Path]] = None,
        env: Optional[Environment] = None,
    ):
        """Initialize the registry.

        Args:
            template_dirs: Directories searched before the builtin one
            env: Jinja2 environment used to parse templates
        """
        self.search_path: list[Path] = [Path(d) for d in (template_dirs or [])]
        self.search_path.append(DEFAULT_TEMPLATE_DIR)
        self.env = env or create_environment()

        # Cache
        self._templates: dict[str, Template] = {}
        self._lock = threading.Lock()

    def get(self, name: str) -> Template:
        """Get the parsed template for a logical name.

        Args:
            name: Logical template name (node name or "embedded")

        Returns:
            Parsed Jinja2 template

        Raises:
            TemplateNotFoundError: If no search directory has ``<name>.html``
        """
        template = self._templates.get(name)
        if template is not None:
            return template

        with self._lock:
            # Another thread may have parsed it while we waited
            template = self._templates.get(name)
            if template is None:
                template = self._load(name)
                self._templates[name] = template
        return template

    def find(self, name: str) -> Optional[Path]:
        """Return the first file providing ``name``, or None."""
        for template_dir in self.search_path:
            path = template_dir / f"{name}{TEMPLATE_SUFFIX}"
            if path.is_file():
                return path
        return None

    def is_cached(self, name: str) -> bool:
        return name in self._templates

    def list_names(self) -> list[str]:
        """List every resolvable template name across the search path."""
        names: set[str] = set()
        for template_dir in self.search_path:
            if not template_dir.is_dir():
                continue
            for template_file in template_dir.glob(f"*{TEMPLATE_SUFFIX}"):
                names.add(template_file.stem)
        return sorted(names)

    def _load(self, name: str) -> Template:
        path = self.find(name)
        if path is None:
            raise TemplateNotFoundError(name, self.search_path)

        template = self.env.from_string(path.read_text(encoding="utf-8"))
        logger.debug(f"Loaded template: {name} ({path})")
        return template
