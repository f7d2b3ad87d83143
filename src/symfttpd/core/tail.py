"""Follow lighttpd's log files and forward new lines.

Each followed file remembers a byte offset and the inode it was read from.
Only complete lines are forwarded, so a line being written while the file is
read shows up whole on the next pass. Truncation or replacement (log
rotation) restarts reading from the beginning of the new content.
"""
from __future__ import annotations

import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Optional

from symfttpd.core.utils.io import PathLike

logger = logging.getLogger(__name__)

Sink = Callable[[str, str], None]


class LogTail:
    """Incremental reader of one growing text file."""

    def __init__(self, path: PathLike, *, from_end: bool = False) -> None:
        self.path = Path(path)
        self.offset = 0
        self.inode: Optional[int] = None
        if from_end:
            self.seek_end()

    def seek_end(self) -> None:
        """Skip everything already in the file."""
        try:
            st = self.path.stat()
        except FileNotFoundError:
            return
        self.offset = st.st_size
        self.inode = st.st_ino

    def consume(self) -> Iterator[str]:
        """Yield complete lines appended since the previous call."""
        try:
            st = self.path.stat()
        except FileNotFoundError:
            return

        if self.inode is not None and st.st_ino != self.inode:
            logger.debug("%s was replaced, reading from the start", self.path)
            self.offset = 0
        elif st.st_size < self.offset:
            logger.debug("%s was truncated, reading from the start", self.path)
            self.offset = 0
        self.inode = st.st_ino

        if st.st_size == self.offset:
            return

        with self.path.open("rb") as fh:
            fh.seek(self.offset)
            for raw in fh:
                if not raw.endswith(b"\n"):
                    break
                self.offset += len(raw)
                yield raw.rstrip(b"\r\n").decode("utf-8", errors="replace")


def _print_line(name: str, line: str) -> None:
    sys.stdout.write(f"[{name}] {line}\n")
    sys.stdout.flush()


class MultiTail:
    """Several named LogTails drained together into one sink."""

    def __init__(self, sink: Optional[Sink] = None) -> None:
        self.sink = sink or _print_line
        self._tails: dict[str, LogTail] = {}

    def add(self, name: str, tail: LogTail) -> LogTail:
        self._tails[name] = tail
        return tail

    def add_file(self, name: str, path: PathLike, *, from_end: bool = False) -> LogTail:
        return self.add(name, LogTail(path, from_end=from_end))

    @property
    def names(self) -> list[str]:
        return list(self._tails)

    def consume(self) -> int:
        """Forward every new complete line; return how many were forwarded."""
        count = 0
        for name, tail in self._tails.items():
            try:
                for line in tail.consume():
                    self.sink(name, line)
                    count += 1
            except OSError as exc:
                logger.warning("cannot read %s: %s", tail.path, exc)
        return count


__all__ = ["LogTail", "MultiTail", "Sink"]
