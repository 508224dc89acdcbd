# SPDX-License-Identifier: MIT
# Copyright (c) 2026 OmniNode Team
"""Sandboxed, deterministic template rendering.

Templates are Jinja2 files rendered in a ``SandboxedEnvironment`` with
``StrictUndefined``: a template cannot call into arbitrary Python, and any
reference to a missing variable fails the render instead of producing empty
text.

Variables are restricted to plain data (None, bool, int, float, str,
mappings with string keys, lists and tuples) and checked before rendering.
Output always uses LF newlines and keeps the template's trailing newline, so
equal inputs yield byte-identical text.

Filters:
    py: Python literal for a value (strings double-quoted)
    docstring: Text safe to embed in a triple-quoted docstring
    to_snake_case / to_pascal_case / to_constant_case: Name conversion
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from jinja2 import FileSystemLoader, StrictUndefined, TemplateError, TemplateNotFound
from jinja2.sandbox import SandboxedEnvironment

from chaingen.errors import ModelCodegenErrorContext, TemplateRenderError
from chaingen.utils.util_name_converter import NameConverter

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATES_DIR: Path = Path(__file__).resolve().parent.parent / "templates"


def _python_literal(value: object) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(_python_literal(item) for item in value) + "]"
    return repr(value)


def _docstring_text(value: object) -> str:
    return str(value).replace("\\", "\\\\").replace('"""', '\\"\\"\\"')


class TemplateEngine:
    """Renders named templates from a templates directory.

    Args:
        templates_dir: Directory holding ``*.j2`` templates. Defaults to the
            templates shipped with the package.

    Example:
        >>> engine = TemplateEngine()
        >>> source = engine.render("handler.py.j2", {"contract_name": "Token", ...})
    """

    def __init__(self, templates_dir: Path | None = None) -> None:
        self.templates_dir = Path(templates_dir) if templates_dir else DEFAULT_TEMPLATES_DIR
        self._env = SandboxedEnvironment(
            loader=FileSystemLoader(str(self.templates_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            newline_sequence="\n",
        )
        self._env.filters["py"] = _python_literal
        self._env.filters["docstring"] = _docstring_text
        self._env.filters["to_snake_case"] = NameConverter.to_snake_case
        self._env.filters["to_pascal_case"] = NameConverter.to_pascal_case
        self._env.filters["to_constant_case"] = NameConverter.to_constant_case

    def render(self, template_name: str, variables: Mapping[str, object]) -> str:
        """Render ``template_name`` with ``variables``.

        Raises:
            TemplateRenderError: If the template is missing or invalid, a
                variable is missing or holds an unsupported value, or the
                template uses a variable in a way its structure does not
                allow (e.g. iterating a number).
        """
        context = ModelCodegenErrorContext(operation="render", target_name=template_name)
        self._check_variables(variables, context)

        try:
            template = self._env.get_template(template_name)
            rendered = template.render(**variables)
        except TemplateNotFound as e:
            raise TemplateRenderError(
                f"Template not found: {template_name} in {self.templates_dir}",
                context=context,
            ) from e
        except TemplateError as e:
            raise TemplateRenderError(
                f"Failed to render {template_name}: {e}",
                context=context,
            ) from e
        except (TypeError, ValueError, KeyError, IndexError) as e:
            raise TemplateRenderError(
                f"Variables do not match the structure of {template_name}: {e}",
                context=context,
            ) from e

        logger.debug(
            "Rendered template",
            extra={"template": template_name, "length": len(rendered)},
        )
        return rendered.replace("\r\n", "\n")

    def _check_variables(
        self,
        variables: Mapping[str, object],
        context: ModelCodegenErrorContext,
    ) -> None:
        if not isinstance(variables, Mapping):
            raise TemplateRenderError(
                f"Template variables must be a mapping, got {type(variables).__name__}",
                context=context,
            )
        for key, value in variables.items():
            self._check_value(value, key, context)

    def _check_value(self, value: object, path: str, context: ModelCodegenErrorContext) -> None:
        if value is None or isinstance(value, (bool, int, float, str)):
            return
        if isinstance(value, Mapping):
            for key, item in value.items():
                if not isinstance(key, str):
                    raise TemplateRenderError(
                        f"Template variable '{path}' has a non-string key {key!r}",
                        context=context,
                    )
                self._check_value(item, f"{path}.{key}", context)
            return
        if isinstance(value, (list, tuple)):
            for index, item in enumerate(value):
                self._check_value(item, f"{path}[{index}]", context)
            return
        raise TemplateRenderError(
            f"Template variable '{path}' has unsupported type {type(value).__name__}",
            context=context,
        )


__all__ = ["DEFAULT_TEMPLATES_DIR", "TemplateEngine"]
