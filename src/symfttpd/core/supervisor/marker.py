from __future__ import annotations

from pathlib import Path

from symfttpd.core.utils.io import remove_file, touch_file


class RestartMarker:
    """A zero-byte file whose existence means "a restart has been requested"."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.exists()

    def create(self) -> None:
        touch_file(self.path)

    def consume(self) -> bool:
        """Delete the marker; True if a restart request was pending."""
        return remove_file(self.path)

    def __repr__(self) -> str:
        return f"RestartMarker({str(self.path)!r})"


__all__ = ["RestartMarker"]
