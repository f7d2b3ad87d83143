from __future__ import annotations

import os
from pathlib import Path

import pytest
import yaml

from symfttpd.core.config import ConfigLoader, SymfttpdConfig, load_config
from symfttpd.core.config.settings import deep_merge, split_list
from symfttpd.exceptions import ConfigurationError, ExecutableNotFoundError


def write_yaml(path: Path, data: dict) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(yaml.safe_dump(data), encoding="utf-8")
    return path


class TestDefaults:
    def test_bundled_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config == SymfttpdConfig()
        assert config.port == 4042
        assert config.bind == "127.0.0.1"
        assert config.default == "index"
        assert config.only is False
        assert config.allow == ()
        assert config.nophp == ("uploads",)
        assert config.poll_interval_seconds == 1.0

    def test_scan_options(self) -> None:
        options = SymfttpdConfig(default="frontend", allow=("frontend_dev",), only=True).scan_options()

        assert options.default_script == "frontend.php"
        assert options.allowed_scripts == ("frontend_dev.php",)
        assert options.deny == ("uploads",)
        assert options.restrict is True


class TestLayering:
    def test_project_file_overrides_user_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        user = write_yaml(tmp_path / "home" / "config.yml", {"port": 8000, "bind": "0.0.0.0"})
        monkeypatch.setenv("SYMFTTPD_USER_CONFIG", str(user))
        project = tmp_path / "project"
        write_yaml(project / "symfttpd.yml", {"port": 8080})

        config = load_config(project)

        assert config.port == 8080
        assert config.bind == "0.0.0.0"

    def test_config_dir_project_file(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "config" / "symfttpd.yml", {"default": "frontend"})

        assert load_config(tmp_path).default == "frontend"

    def test_environment_overrides_files(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"port": 8080, "only": False})
        environ = dict(
            os.environ,
            SYMFTTPD_PORT="9090",
            SYMFTTPD_ONLY="true",
            SYMFTTPD_ALLOW="frontend_dev, backend_dev",
        )

        config = load_config(tmp_path, environ=environ)

        assert config.port == 9090
        assert config.only is True
        assert config.allow == ("frontend_dev", "backend_dev")

    def test_cli_overrides_win_and_none_is_ignored(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"port": 8080, "bind": "10.0.0.1"})

        config = load_config(
            tmp_path,
            overrides={"port": 4343, "bind": None, "nophp": "uploads,media"},
            environ=dict(os.environ, SYMFTTPD_PORT="9090"),
        )

        assert config.port == 4343
        assert config.bind == "10.0.0.1"
        assert config.nophp == ("uploads", "media")

    def test_comma_separated_lists_in_files(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"allow": "a,b", "nophp": ["uploads", "files"]})

        config = load_config(tmp_path)

        assert config.allow == ("a", "b")
        assert config.nophp == ("uploads", "files")

    def test_malformed_environment_value(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="SYMFTTPD_BIND") as excinfo:
            load_config(tmp_path, environ=dict(os.environ, SYMFTTPD_BIND="[x"))

        assert excinfo.value.context == {"variable": "SYMFTTPD_BIND"}


class TestValidation:
    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"prot": 80})

        with pytest.raises(ConfigurationError, match="prot"):
            load_config(tmp_path)

    def test_port_out_of_range(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"port": 70000})

        with pytest.raises(ConfigurationError):
            load_config(tmp_path)

    def test_non_mapping_file(self, tmp_path: Path) -> None:
        (tmp_path / "symfttpd.yml").write_text("- just\n- a list\n", encoding="utf-8")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_config(tmp_path)

    def test_unparsable_file(self, tmp_path: Path) -> None:
        (tmp_path / "symfttpd.yml").write_text("port: [unclosed\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_config(tmp_path)

    def test_empty_file_is_fine(self, tmp_path: Path) -> None:
        (tmp_path / "symfttpd.yml").write_text("", encoding="utf-8")

        assert load_config(tmp_path) == SymfttpdConfig()

    def test_configuration_error_payload(self, tmp_path: Path) -> None:
        write_yaml(tmp_path / "symfttpd.yml", {"port": "http"})

        with pytest.raises(ConfigurationError) as excinfo:
            ConfigLoader(tmp_path).load()

        payload = excinfo.value.to_json_error()
        assert payload["code"] == "ConfigurationError"
        assert payload["context"]["errors"]


class TestPhpCgi:
    def test_configured_command_wins(self) -> None:
        assert SymfttpdConfig(php_cgi_cmd="/opt/php/bin/php-cgi").resolve_php_cgi() == "/opt/php/bin/php-cgi"

    def test_missing_php_cgi(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PATH", str(tmp_path))

        with pytest.raises(ExecutableNotFoundError, match="php-cgi"):
            SymfttpdConfig().resolve_php_cgi()


def test_split_list() -> None:
    assert split_list("a, b,,c ") == ["a", "b", "c"]
    assert split_list(["x", " y "]) == ["x", "y"]
    assert split_list(None) == []
    assert split_list(False) == []


def test_deep_merge_does_not_mutate() -> None:
    base = {"a": {"b": 1, "c": 2}, "d": 1}
    merged = deep_merge(base, {"a": {"b": 3}})

    assert merged == {"a": {"b": 3, "c": 2}, "d": 1}
    assert base == {"a": {"b": 1, "c": 2}, "d": 1}
