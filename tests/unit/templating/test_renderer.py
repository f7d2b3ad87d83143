from __future__ import annotations

from pathlib import Path

import pytest

from symfttpd.core.templating import TemplateRenderer, preg_quote
from symfttpd.exceptions import RenderError

RULES_PARAMS = {
    "dirs": ["css"],
    "files": ["robots.txt"],
    "phps": ["index.php"],
    "default": "index.php",
    "nophp": [],
}


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("css", "css"),
        ("robots.txt", "robots\\.txt"),
        ("sf-plugin", "sf\\-plugin"),
        ("a+b(c)", "a\\+b\\(c\\)"),
        ("what?$", "what\\?\\$"),
    ],
)
def test_preg_quote(raw: str, expected: str) -> None:
    assert preg_quote(raw) == expected


def test_render_bundled_rules_template() -> None:
    text = TemplateRenderer().render("rules.conf.j2", RULES_PARAMS)

    assert "url.rewrite-once = (" in text
    assert text.rstrip().endswith(")")


def test_missing_parameter_is_render_error() -> None:
    params = dict(RULES_PARAMS)
    del params["default"]

    with pytest.raises(RenderError) as excinfo:
        TemplateRenderer().render("rules.conf.j2", params)

    assert excinfo.value.context["missing"] == ["default"]


def test_render_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        TemplateRenderer().render("rules.conf.j2", {})


def test_undefined_variable_in_custom_template(tmp_path: Path) -> None:
    (tmp_path / "custom.j2").write_text("port = {{ port }}\n", encoding="utf-8")

    with pytest.raises(RenderError):
        TemplateRenderer(tmp_path).render("custom.j2", {})


def test_unknown_template(tmp_path: Path) -> None:
    with pytest.raises(RenderError):
        TemplateRenderer(tmp_path).render("nope.j2", {})


def test_temp_dir_global_and_filter(tmp_path: Path) -> None:
    import tempfile

    (tmp_path / "custom.j2").write_text("{{ temp_dir() }} {{ name|preg_quote }}", encoding="utf-8")

    text = TemplateRenderer(tmp_path).render("custom.j2", {"name": "a.b"})

    assert text == f"{tempfile.gettempdir()} a\\.b"


def test_render_to_file(tmp_path: Path) -> None:
    target = tmp_path / "cache" / "rules.conf"

    text = TemplateRenderer().render_to_file("rules.conf.j2", target, RULES_PARAMS)

    assert target.read_text(encoding="utf-8") == text
