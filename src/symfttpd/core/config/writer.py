from __future__ import annotations

import logging
from pathlib import Path

from symfttpd.core.rules.models import ConfigSnapshot
from symfttpd.core.utils.io import write_text

logger = logging.getLogger(__name__)


class ConfigWriter:
    """Persist rendered text, skipping writes that would not change the file.

    lighttpd reads its files only at start-up, but an unchanged file is still
    left untouched so its mtime keeps meaning "last real change".
    """

    def write(self, content: str, path: Path, *, force: bool = False) -> bool:
        """Write ``content`` to ``path`` atomically.

        Returns True when the file was (re)written.
        """
        path = Path(path)
        if not force and path.exists():
            try:
                if path.read_text(encoding="utf-8") == content:
                    return False
            except (OSError, UnicodeDecodeError):
                logger.debug("unreadable %s, overwriting", path)
        write_text(path, content)
        logger.debug("wrote %s (%d bytes)", path, len(content))
        return True

    def write_snapshot(
        self,
        snapshot: ConfigSnapshot,
        *,
        config_file: Path,
        rules_file: Path,
        force: bool = False,
    ) -> tuple[bool, bool]:
        """Write the rules first so the config never includes a missing file."""
        rules_written = self.write(snapshot.rules_text, rules_file, force=force)
        config_written = self.write(snapshot.config_text, config_file, force=force)
        return config_written, rules_written


__all__ = ["ConfigWriter"]
