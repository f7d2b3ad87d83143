"""Jinja2 rendering of the lighttpd templates.

Templates are rendered with ``StrictUndefined`` so that a missing parameter
is a RenderError instead of an empty string silently baked into the server
configuration.
"""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from symfttpd.core.utils.io import write_text
from symfttpd.data import get_data_path
from symfttpd.exceptions import RenderError

# Characters escaped by PHP's preg_quote(); the generated rewrite rules are
# PCRE patterns.
_PREG_SPECIAL = frozenset(".\\+*?[^]$(){}=!<>|:-#")

REQUIRED_PARAMETERS: Dict[str, tuple[str, ...]] = {
    "rules.conf.j2": ("dirs", "files", "phps", "default", "nophp"),
    "lighttpd.conf.j2": (
        "document_root",
        "port",
        "bind",
        "error_log",
        "access_log",
        "pidfile",
        "rules_file",
        "php_cgi_cmd",
    ),
}


def preg_quote(value: Any) -> str:
    """Escape regular expression metacharacters the way PCRE expects."""
    return "".join(f"\\{ch}" if ch in _PREG_SPECIAL else ch for ch in str(value))


class TemplateRenderer:
    """Render templates from a directory (bundled lighttpd templates by default)."""

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        self.template_dir = Path(template_dir) if template_dir else get_data_path("templates", "lighttpd")
        self._env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            undefined=StrictUndefined,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self._env.filters["preg_quote"] = preg_quote
        self._env.globals["temp_dir"] = tempfile.gettempdir

    def render(self, template_name: str, parameters: Mapping[str, Any]) -> str:
        """Render ``template_name`` with ``parameters``.

        Raises:
            RenderError: On a missing parameter, unknown template or template error
        """
        missing = [k for k in REQUIRED_PARAMETERS.get(template_name, ()) if k not in parameters]
        if missing:
            raise RenderError(
                f"Missing parameter(s) for {template_name}: {', '.join(missing)}",
                context={"template": template_name, "missing": missing},
            )
        try:
            template = self._env.get_template(template_name)
            return template.render(**dict(parameters))
        except TemplateError as exc:
            raise RenderError(
                f"Unable to render {template_name}: {exc}",
                context={"template": template_name},
            ) from exc

    def render_to_file(self, template_name: str, target: Path, parameters: Mapping[str, Any]) -> str:
        """Render ``template_name`` and atomically write it to ``target``."""
        text = self.render(template_name, parameters)
        write_text(target, text)
        return text


__all__ = ["REQUIRED_PARAMETERS", "TemplateRenderer", "preg_quote"]
