"""HTML documentation rendering for a BackendModel."""
from __future__ import annotations
import asyncio
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Union
from jinja2 import Environment, StrictUndefined, select_autoescape
from markupsafe import escape
from genbackend.core.config import settings
from genbackend.generators.doc_template import DEFAULT_TEMPLATE, TEMPLATE_NAME
from genbackend.schemas.backend import BackendModel

log = logging.getLogger(__name__)

ERROR_PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>Error - API Documentation</title>
    <style>
      body {{ font-family: Arial, sans-serif; margin: 40px; line-height: 1.6; }}
      .error {{ color: red; border: 1px solid red; padding: 20px; border-radius: 5px; }}
    </style>
  </head>
  <body>
    <h1>Error Generating Documentation</h1>
    <div class="error">
      <p>There was an error generating the documentation:</p>
      <p>{message}</p>
    </div>
    <p>Please check the server logs for more information.</p>
  </body>
</html>
"""


def status_class(status: int) -> str:
    family = int(status) // 100
    return f"code-{family}xx" if family in (2, 4, 5) else "code-other"


def _environment() -> Environment:
    env = Environment(
        autoescape=select_autoescape(default_for_string=True, default=True),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["status_class"] = status_class
    return env


class TemplateStore:
    """Templates on disk, materialized from the built-in default on first use."""

    def __init__(self, templates_dir: Union[str, Path]):
        self.templates_dir = Path(templates_dir)

    def path_for(self, name: str) -> Path:
        return self.templates_dir / name

    def load_or_create(self, name: str = TEMPLATE_NAME) -> str:
        """Return the template source, writing the default first if it is missing."""
        path = self.path_for(name)
        if not path.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(DEFAULT_TEMPLATE, encoding="utf-8")
            log.info("Created default documentation template at %s", path)
        return path.read_text(encoding="utf-8")


def error_page(message: str) -> str:
    return ERROR_PAGE.format(message=escape(message))


def render_with_template(model: BackendModel, source: str) -> str:
    template = _environment().from_string(source)
    return template.render(
        backend=model,
        title=f"{model.name} API Documentation",
        description=model.description,
        version=model.version,
        date=datetime.now(timezone.utc).date().isoformat(),
    )


async def render(model: BackendModel, templates_dir: Optional[Union[str, Path]] = None) -> str:
    """
    Render HTML documentation for a backend model.

    Never raises: any failure (template I/O, syntax errors, missing fields)
    produces a self-contained error page instead.
    """
    store = TemplateStore(templates_dir or settings.templates_dir)
    try:
        log.info("Rendering documentation...")
        source = await asyncio.to_thread(store.load_or_create, TEMPLATE_NAME)
        return render_with_template(model, source)
    except Exception as e:
        log.exception("Error rendering documentation: %s", e)
        return error_page(str(e) or e.__class__.__name__)
