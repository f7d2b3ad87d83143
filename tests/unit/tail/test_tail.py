from __future__ import annotations

import os
from pathlib import Path

from symfttpd.core.tail import LogTail, MultiTail


def append(path: Path, text: str) -> None:
    with path.open("a", encoding="utf-8") as fh:
        fh.write(text)


def test_missing_file_yields_nothing(tmp_path: Path) -> None:
    assert list(LogTail(tmp_path / "access.log").consume()) == []


def test_only_new_lines_are_returned(tmp_path: Path) -> None:
    log = tmp_path / "access.log"
    append(log, "one\ntwo\n")
    tail = LogTail(log)

    assert list(tail.consume()) == ["one", "two"]
    assert list(tail.consume()) == []

    append(log, "three\n")
    assert list(tail.consume()) == ["three"]


def test_partial_line_waits_for_newline(tmp_path: Path) -> None:
    log = tmp_path / "error.log"
    append(log, "complete\npart")
    tail = LogTail(log)

    assert list(tail.consume()) == ["complete"]

    append(log, "ial\n")
    assert list(tail.consume()) == ["partial"]


def test_from_end_skips_existing_content(tmp_path: Path) -> None:
    log = tmp_path / "access.log"
    append(log, "old\n")
    tail = LogTail(log, from_end=True)

    append(log, "new\n")

    assert list(tail.consume()) == ["new"]


def test_truncation_restarts_from_beginning(tmp_path: Path) -> None:
    log = tmp_path / "access.log"
    append(log, "a long first line\n")
    tail = LogTail(log)
    list(tail.consume())

    log.write_text("short\n", encoding="utf-8")

    assert list(tail.consume()) == ["short"]


def test_replaced_file_is_read_from_start(tmp_path: Path) -> None:
    log = tmp_path / "access.log"
    append(log, "before rotation\n")
    tail = LogTail(log)
    list(tail.consume())

    rotated = tmp_path / "access.log.1"
    os.replace(log, rotated)
    append(log, "after rotation, a longer line than before\n")

    assert list(tail.consume()) == ["after rotation, a longer line than before"]


def test_consume_is_restartable(tmp_path: Path) -> None:
    log = tmp_path / "access.log"
    append(log, "1\n2\n3\n")
    tail = LogTail(log)

    lines = tail.consume()
    assert next(lines) == "1"
    lines.close()

    assert list(tail.consume()) == ["2", "3"]


def test_multitail_labels_lines(tmp_path: Path) -> None:
    access = tmp_path / "access.log"
    error = tmp_path / "error.log"
    append(access, "GET /\n")
    append(error, "boom\n")
    received: list[tuple[str, str]] = []
    multi = MultiTail(sink=lambda name, line: received.append((name, line)))
    multi.add_file("access", access)
    multi.add_file("error", error)

    assert multi.consume() == 2
    assert received == [("access", "GET /"), ("error", "boom")]
    assert multi.names == ["access", "error"]
    assert multi.consume() == 0


def test_default_sink_prints(tmp_path: Path, capsys) -> None:
    log = tmp_path / "error.log"
    append(log, "fatal\n")
    multi = MultiTail()
    multi.add("error", LogTail(log))

    multi.consume()

    assert capsys.readouterr().out == "[error] fatal\n"
