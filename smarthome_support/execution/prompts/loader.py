"""
Jinja2 loader for the prompt templates shipped with the package.

Every name in Template must have a matching <name>.jinja2 file in the
templates directory; this is checked once at import.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _validate_templates():
    for name in dir(Template):
        if not name.startswith("_"):
            path = TEMPLATES_DIR / f"{getattr(Template, name)}.jinja2"
            if not path.exists():
                raise FileNotFoundError(f"Template missing: {path}")


_validate_templates()


@lru_cache(maxsize=1)
def _get_environment() -> Environment:
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=select_autoescape(default=False),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(template_name: str, **context) -> str:
    """
    Render a prompt template.

    Args:
        template_name: One of the Template constants (no .jinja2 extension)
        **context: Variables referenced by the template

    Returns:
        The rendered prompt. Raises if the template uses an undefined variable.
    """
    template = _get_environment().get_template(f"{template_name}.jinja2")
    return template.render(**context)
