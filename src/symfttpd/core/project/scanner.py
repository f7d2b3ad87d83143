"""Web root classification.

Every non-hidden entry directly under the web root whose name is valid
UTF-8 lands in exactly one of three buckets:

- ``dirs``: directories (symlinked plugin asset dirs included)
- ``files``: anything that is not a PHP script, served as a static file
- ``scripts``: PHP front controllers lighttpd is allowed to execute

Only the top level is inspected; lighttpd rules match on the first path
segment so deeper entries never change the generated rules.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from symfttpd.exceptions import NotFoundError

SCRIPT_SUFFIX = ".php"
HIDDEN_PREFIX = "."

logger = logging.getLogger(__name__)


def script_name(name: str) -> str:
    """Return ``name`` as a script filename (``frontend_dev`` -> ``frontend_dev.php``)."""
    name = name.strip()
    return name if name.endswith(SCRIPT_SUFFIX) else f"{name}{SCRIPT_SUFFIX}"


def _is_encodable(name: str) -> bool:
    # Undecodable bytes come back from os.scandir as lone surrogates.
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _canonical(names: Iterable[str]) -> tuple[str, ...]:
    return tuple(sorted(set(names)))


@dataclass(frozen=True)
class ScanOptions:
    """What the scan (and the rules built from it) should expose.

    ``deny`` lists web root subdirectories where PHP must never run; the scan
    itself does not use it but carries it so one value configures both steps.
    """

    default_entry: str = "index"
    allow: tuple[str, ...] = ()
    deny: tuple[str, ...] = ("uploads",)
    restrict: bool = False

    @property
    def default_script(self) -> str:
        return script_name(self.default_entry)

    @property
    def allowed_scripts(self) -> tuple[str, ...]:
        return _canonical(script_name(n) for n in self.allow if n and n.strip())


@dataclass(frozen=True)
class ScanResult:
    dirs: tuple[str, ...]
    files: tuple[str, ...]
    scripts: tuple[str, ...]


def scan(web_root: Path | str, options: ScanOptions | None = None) -> ScanResult:
    """Classify the entries of ``web_root``.

    The default script and allow-listed scripts are always part of
    ``scripts``, even when missing on disk: they may be created later and the
    rules must already route to them.

    Raises:
        NotFoundError: If ``web_root`` does not exist or is not a directory
    """
    options = options or ScanOptions()
    root = Path(web_root)
    if not root.is_dir():
        raise NotFoundError(
            f'Directory "{root}" not found.',
            context={"web_root": str(root)},
        )

    dirs: list[str] = []
    files: list[str] = []
    scripts: list[str] = [options.default_script, *options.allowed_scripts]

    with os.scandir(root) as entries:
        for entry in entries:
            name = entry.name
            if name.startswith(HIDDEN_PREFIX):
                continue
            if not _is_encodable(name):
                logger.debug("skipping %r in %s: name is not valid UTF-8", name, root)
                continue
            if entry.is_dir():
                dirs.append(name)
            elif not name.endswith(SCRIPT_SUFFIX):
                files.append(name)
            elif not options.restrict:
                scripts.append(name)

    return ScanResult(
        dirs=_canonical(dirs),
        files=_canonical(files),
        scripts=_canonical(scripts),
    )


__all__ = ["HIDDEN_PREFIX", "SCRIPT_SUFFIX", "ScanOptions", "ScanResult", "scan", "script_name"]
