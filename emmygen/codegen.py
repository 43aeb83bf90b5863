"""Render templates and write generated annotation files.

Takes the context from context_builder and writes one <module>.lua per
module under the output directory.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .context_builder import build_context
from .models import Module

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"
MODULE_TEMPLATE = "module.lua.j2"


def create_environment() -> jinja2.Environment:
    """Jinja2 environment used for every module file."""
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render_module(
    module: dict[str, Any],
    namespace: str,
    env: jinja2.Environment | None = None,
) -> str:
    """Render the annotation file for a single module context."""
    env = env or create_environment()
    template = env.get_template(MODULE_TEMPLATE)
    return template.render(module=module, namespace=namespace)


def render_all(context: dict[str, Any]) -> dict[str, str]:
    """Render every module in a context, keyed by qualified module name."""
    env = create_environment()
    return {
        module["name"]: render_module(module, context["namespace"], env)
        for module in context["modules"]
    }


def generate(
    api: Module,
    output_dir: str | Path,
    config: GeneratorConfig | None = None,
) -> list[Path]:
    """Generate annotation files for an API description.

    Any error creating the directory or writing a file aborts the run.
    Existing files are overwritten.
    """
    config = config or GeneratorConfig()
    context = build_context(api, config)
    rendered = render_all(context)

    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    written: list[Path] = []
    for name, content in rendered.items():
        logger.info("Generating module %s", name)
        output_path = output_dir / f"{name}.lua"
        output_path.write_text(content, encoding="utf-8")
        written.append(output_path)

    logger.info(
        "Generated %d modules (%d functions) in %s",
        context["module_count"], context["function_count"], output_dir,
    )
    return written
