"""
Template engine wrapper for code generation.

Provides a simple interface for Jinja2 template rendering
with common utilities for code generation.
"""

import json
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, Optional
from pathlib import Path

from jinja2 import (
    DictLoader,
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateNotFound,
    TemplateSyntaxError,
)

from ...logging_config import get_logger
from .naming import (
    pluralize,
    singularize,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)

logger = get_logger(__name__)

PARSE_STAGE = "parse"
EXECUTE_STAGE = "execute"


class TemplateError(Exception):
    """Exception raised for template-related errors."""

    def __init__(self, stage: str, cause: Exception, template_name: str = "<string>"):
        self.stage = stage
        self.cause = cause
        self.template_name = template_name
        super().__init__(f"Failed to {stage} template {template_name}: {cause}")


class FunctionTable(Mapping):
    """
    Read-only registry of helper functions exposed to templates.

    Built once and shared by reference; ``extend`` returns a new table.
    """

    def __init__(self, functions: Optional[Dict[str, Callable]] = None):
        self._functions = MappingProxyType(dict(functions or {}))

    def __getitem__(self, name: str) -> Callable:
        return self._functions[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._functions)

    def __len__(self) -> int:
        return len(self._functions)

    def extend(self, functions: Dict[str, Callable]) -> "FunctionTable":
        merged = dict(self._functions)
        merged.update(functions)
        return FunctionTable(merged)


# Template helper functions

def indent(value: str, spaces: int = 4) -> str:
    """Indent all non-empty lines in a string."""
    prefix = " " * spaces
    lines = str(value).split("\n")
    return "\n".join(prefix + line if line else line for line in lines)


def quote(value: str) -> str:
    """Wrap in double quotes with escaping."""
    return json.dumps(str(value))


def backquote(value: str) -> str:
    return f"`{value}`"


def join(items, separator: str = ", ") -> str:
    return separator.join(str(item) for item in items)


def build_default_functions() -> FunctionTable:
    """Case conversions and string helpers available to every template."""
    return FunctionTable(
        {
            "to_lower": lambda value: str(value).lower(),
            "to_upper": lambda value: str(value).upper(),
            "to_title": lambda value: str(value).title(),
            "to_camel": to_camel_case,
            "to_pascal": to_pascal_case,
            "to_snake": to_snake_case,
            "to_kebab": to_kebab_case,
            "pluralize": pluralize,
            "singularize": singularize,
            "join": join,
            "replace": lambda value, old, new: str(value).replace(old, new),
            "contains": lambda value, part: part in str(value),
            "has_prefix": lambda value, prefix: str(value).startswith(prefix),
            "has_suffix": lambda value, suffix: str(value).endswith(suffix),
            "trim": lambda value: str(value).strip(),
            "split": lambda value, separator: str(value).split(separator),
            "repeat": lambda value, count: str(value) * count,
            "indent": indent,
            "quote": quote,
            "backquote": backquote,
        }
    )


class TemplateEngine:
    """Wrapper for Jinja2 template engine with code generation utilities."""

    def __init__(
        self,
        template_dir: Optional[Path] = None,
        functions: Optional[FunctionTable] = None,
    ):
        """
        Initialize template engine.

        Args:
            template_dir: Directory containing template files
            functions: Helper functions exposed as filters and globals
        """
        self.template_dir = template_dir
        self.functions = functions if functions is not None else build_default_functions()
        self._env = self._setup_environment()

    def _setup_environment(self) -> Environment:
        """Setup Jinja2 environment with code generation utilities."""
        if self.template_dir and self.template_dir.exists():
            loader = FileSystemLoader(str(self.template_dir))
        else:
            # Use in-memory templates
            loader = DictLoader({})

        env = Environment(
            loader=loader,
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )

        for name, func in self.functions.items():
            env.filters[name] = func
            env.globals[name] = func

        return env

    def template_exists(self, template_name: str) -> bool:
        """Check if a template exists."""
        try:
            self._env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False
        except TemplateSyntaxError:
            return True

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render a template with the given context.

        Args:
            template_name: Name of template file
            context: Variables to pass to template

        Returns:
            Rendered template content

        Raises:
            TemplateError: On parse or execute failure
        """
        try:
            template = self._env.get_template(template_name)
        except (TemplateSyntaxError, TemplateNotFound) as e:
            raise TemplateError(PARSE_STAGE, e, template_name) from e

        return self._execute(template, context, template_name)

    def render_string(self, template_string: str, context: Dict[str, Any]) -> str:
        """
        Render a template string with the given context.

        Args:
            template_string: Template content as string
            context: Variables to pass to template

        Returns:
            Rendered content
        """
        try:
            template = self._env.from_string(template_string)
        except TemplateSyntaxError as e:
            raise TemplateError(PARSE_STAGE, e) from e

        return self._execute(template, context, "<string>")

    def _execute(self, template, context: Dict[str, Any], template_name: str) -> str:
        try:
            return template.render(**context)
        except Exception as e:
            # Any failure while rendering is an execute-stage error
            logger.debug("Template %s failed during execution: %s", template_name, e)
            raise TemplateError(EXECUTE_STAGE, e, template_name) from e


def create_template_engine(
    template_dir: Optional[Path] = None, functions: Optional[FunctionTable] = None
) -> TemplateEngine:
    """Create a template engine for a directory and function table."""
    return TemplateEngine(template_dir, functions)


def render(template_body: str, context: Dict[str, Any], functions: FunctionTable) -> str:
    """
    Render a template body against a context with the given helpers.

    Raises:
        TemplateError: With ``stage`` set to ``"parse"`` or ``"execute"``
    """
    return TemplateEngine(functions=functions).render_string(template_body, context)
