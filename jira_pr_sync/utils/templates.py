"""Contains utilities for rendering Jinja2 templates."""

from pathlib import Path
from typing import Any

import jinja2
import structlog

logger: structlog.stdlib.BoundLogger = structlog.get_logger(__name__)

TEMPLATES_DIRECTORY = Path(__file__).parent.parent / "templates"
"""Directory holding the Jinja2 templates shipped with the package."""


def construct_jinja2_environment() -> jinja2.Environment:
    """Construct a Jinja2 environment that loads the packaged templates.

    Values are HTML-escaped, since templates render into pull request
    descriptions that GitHub displays as HTML.
    """
    jinja_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(TEMPLATES_DIRECTORY),
        undefined=jinja2.StrictUndefined,
        autoescape=True,
        keep_trailing_newline=False,
    )
    return jinja_env


def render_template(template_name: str, environment: jinja2.Environment | None = None, **context: Any) -> str:
    """Render a packaged Jinja2 template with the given context."""
    if environment is None:
        environment = construct_jinja2_environment()
    try:
        template = environment.get_template(template_name)
    except jinja2.TemplateNotFound:
        logger.error("Jinja2 template not found", template_name=template_name, templates_directory=str(TEMPLATES_DIRECTORY))
        raise
    try:
        return template.render(**context)
    except jinja2.UndefinedError as exc:
        logger.error("Failed to render template", template_name=template_name, error=str(exc))
        raise
