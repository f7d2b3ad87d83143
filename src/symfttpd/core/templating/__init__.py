from __future__ import annotations

from .renderer import TemplateRenderer, preg_quote

__all__ = ["TemplateRenderer", "preg_quote"]
