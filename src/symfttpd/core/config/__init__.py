"""Configuration loading and generated-file persistence."""
from __future__ import annotations

from .settings import ConfigLoader, SymfttpdConfig, load_config
from .writer import ConfigWriter

__all__ = ["ConfigLoader", "ConfigWriter", "SymfttpdConfig", "load_config"]
