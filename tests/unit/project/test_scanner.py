from __future__ import annotations

import os
from pathlib import Path

import pytest

from helpers.fs import make_web_root
from symfttpd.core.project import ScanOptions, scan, script_name
from symfttpd.exceptions import NotFoundError


def test_scan_classifies_top_level_entries(web_root: Path) -> None:
    result = scan(web_root)

    assert result.dirs == ("css", "js")
    assert result.files == ("robots.txt",)
    assert result.scripts == ("index.php",)


def test_scan_is_deterministic(web_root: Path) -> None:
    assert scan(web_root) == scan(web_root)


def test_scan_ignores_hidden_entries(web_root: Path) -> None:
    make_web_root(web_root, [".htaccess", ".svn/", ".hidden.php"])

    result = scan(web_root)

    everything = result.dirs + result.files + result.scripts
    assert not [name for name in everything if name.startswith(".")]


def test_scan_only_inspects_top_level(web_root: Path) -> None:
    make_web_root(web_root, ["css/deep/", "css/deep/extra.php"])

    assert scan(web_root).scripts == ("index.php",)


def test_restrict_mode_keeps_default_and_allowed_scripts_only(tmp_path: Path) -> None:
    web = make_web_root(
        tmp_path / "web",
        ["index.php", "frontend_dev.php", "backend.php", "robots.txt"],
    )
    options = ScanOptions(default_entry="index", allow=("frontend_dev",), restrict=True)

    result = scan(web, options)

    assert result.scripts == ("frontend_dev.php", "index.php")
    assert result.files == ("robots.txt",)


def test_default_and_allowed_scripts_listed_even_when_missing(tmp_path: Path) -> None:
    web = make_web_root(tmp_path / "web", [])
    options = ScanOptions(default_entry="app", allow=("app_dev.php", ""))

    assert scan(web, options).scripts == ("app.php", "app_dev.php")


def test_symlinked_directory_counts_as_dir(tmp_path: Path) -> None:
    target = make_web_root(tmp_path / "plugins" / "sfPlugin" / "web", ["style.css"])
    web = make_web_root(tmp_path / "web", ["index.php"])
    (web / "sfPlugin").symlink_to(target, target_is_directory=True)

    assert scan(web).dirs == ("sfPlugin",)


def test_scan_missing_web_root_raises(tmp_path: Path) -> None:
    with pytest.raises(NotFoundError):
        scan(tmp_path / "nope")


def test_scan_file_as_web_root_raises(tmp_path: Path) -> None:
    path = tmp_path / "web"
    path.write_text("", encoding="utf-8")

    with pytest.raises(FileNotFoundError):
        scan(path)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("index", "index.php"),
        ("index.php", "index.php"),
        (" frontend_dev ", "frontend_dev.php"),
    ],
)
def test_script_name(name: str, expected: str) -> None:
    assert script_name(name) == expected


def test_scan_skips_names_that_are_not_utf8(web_root: Path) -> None:
    open(os.path.join(os.fsencode(web_root), b"caf\xe9.txt"), "wb").close()

    result = scan(web_root)

    assert result.files == ("robots.txt",)
    # Every scanned name can be written into the UTF-8 rules file.
    for name in result.dirs + result.files + result.scripts:
        name.encode("utf-8")
