import os
import sys
from pathlib import Path

import pytest
import yaml

# Keep the repository free of Python bytecode and __pycache__ artifacts during tests.
sys.dont_write_bytecode = True

TESTS_ROOT = Path(__file__).resolve().parent
REPO_ROOT = TESTS_ROOT.parent
SRC_ROOT = REPO_ROOT / "src"

# Make src/ importable as 'symfttpd'
for p in (SRC_ROOT, TESTS_ROOT):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from helpers.fs import FAKE_LIGHTTPD, make_web_root, write_script  # noqa: E402
from symfttpd.core.logs import reset_logging_for_tests  # noqa: E402

FAKE_PHP_CGI = "/usr/bin/php-cgi"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path_factory: pytest.TempPathFactory, monkeypatch: pytest.MonkeyPatch):
    """No user config and no SYMFTTPD_* variables leak into tests."""
    for key in list(os.environ):
        if key.startswith("SYMFTTPD_"):
            monkeypatch.delenv(key, raising=False)
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("SYMFTTPD_USER_CONFIG", str(home / "config.yml"))
    yield
    reset_logging_for_tests()


@pytest.fixture
def web_root(tmp_path: Path) -> Path:
    return make_web_root(tmp_path / "project" / "web", ["index.php", "robots.txt", "css/", "js/"])


@pytest.fixture
def project_root(web_root: Path) -> Path:
    """A symfony-like project whose symfttpd.yml names a php-cgi binary."""
    root = web_root.parent
    (root / "symfttpd.yml").write_text(
        yaml.safe_dump({"php_cgi_cmd": FAKE_PHP_CGI}),
        encoding="utf-8",
    )
    return root


@pytest.fixture
def fake_lighttpd(tmp_path: Path) -> Path:
    return write_script(tmp_path / "bin" / "lighttpd", FAKE_LIGHTTPD)
