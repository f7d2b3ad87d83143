"""Project inspection: web root scanning and on-disk layout."""
from __future__ import annotations

from .layout import ProjectLayout
from .scanner import HIDDEN_PREFIX, SCRIPT_SUFFIX, ScanOptions, ScanResult, scan, script_name

__all__ = [
    "HIDDEN_PREFIX",
    "SCRIPT_SUFFIX",
    "ProjectLayout",
    "ScanOptions",
    "ScanResult",
    "scan",
    "script_name",
]
