from __future__ import annotations

from .builder import CONFIG_TEMPLATE, RULES_TEMPLATE, RuleSnapshotBuilder
from .models import ConfigSnapshot, RuleSet, ServerOptions

__all__ = [
    "CONFIG_TEMPLATE",
    "RULES_TEMPLATE",
    "ConfigSnapshot",
    "RuleSet",
    "RuleSnapshotBuilder",
    "ServerOptions",
]
