"""Tests for wren.templating.store — loading and rendering named templates."""

from pathlib import Path
from typing import Any

import pytest

from wren.errors import TemplateLoadError, TemplateNotFound, TemplateRenderError
from wren.templating.store import TemplateStore


class _FakeTemplate:
    def __init__(self, render: Any) -> None:
        self._render = render

    def render(self, context: dict[str, Any]) -> str:
        return self._render(context)


def _explode(context: dict[str, Any]) -> str:
    msg = "context mismatch"
    raise KeyError(msg)


class TestLoad:
    def test_loads_every_matching_file(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        assert store.names == frozenset({"base.html", "page.html"})
        assert len(store) == 2
        assert "page.html" in store
        assert list(store) == ["base.html", "page.html"]

    def test_pattern_filters_files(self, template_dir: Path) -> None:
        (template_dir / "notes.txt").write_text("not a template")

        store = TemplateStore.load(template_dir, "*.html")
        assert "notes.txt" not in store

    def test_recursive_pattern_uses_relative_names(self, template_dir: Path) -> None:
        partials = template_dir / "partials"
        partials.mkdir()
        (partials / "nav.html").write_text("<nav></nav>")

        store = TemplateStore.load(template_dir, "**/*.html")
        assert "partials/nav.html" in store

    def test_missing_directory(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateLoadError, match="does not exist"):
            TemplateStore.load(tmp_path / "missing")

    def test_pattern_matches_nothing(self, tmp_path: Path) -> None:
        with pytest.raises(TemplateLoadError, match="matches no templates"):
            TemplateStore.load(tmp_path)

    def test_syntax_error_aborts_load(self, template_dir: Path) -> None:
        (template_dir / "broken.html").write_text("{% if title %}never closed")

        with pytest.raises(TemplateLoadError, match="broken.html"):
            TemplateStore.load(template_dir)

    def test_globals_are_available(self, tmp_path: Path) -> None:
        (tmp_path / "asset.html").write_text("{{ static('style.css') }}")

        store = TemplateStore.load(tmp_path, globals_={"static": lambda p: f"/static/{p}"})
        assert store.render("asset.html") == "/static/style.css"


class TestRender:
    def test_render_with_context(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        html = store.render("page.html", {"title": "Home"})
        assert "<title>Home</title>" in html
        assert "<h1>Home</h1>" in html

    def test_autoescape(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        html = store.render("page.html", {"title": "<script>alert(1)</script>"})
        assert "<script>" not in html

    def test_unknown_name(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        with pytest.raises(TemplateNotFound):
            store.render("missing.html", {})

    def test_undefined_variable_is_a_render_error(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        with pytest.raises(TemplateRenderError) as exc_info:
            store.render("page.html", {})
        assert exc_info.value.name == "page.html"

    def test_engine_failure_is_wrapped(self) -> None:
        store = TemplateStore({"bad.html": _FakeTemplate(_explode)})

        with pytest.raises(TemplateRenderError) as exc_info:
            store.render("bad.html")
        assert exc_info.value.name == "bad.html"
        assert "context mismatch" in exc_info.value.message

    def test_context_is_copied(self) -> None:
        seen: list[dict[str, Any]] = []
        context = {"Name": "Ada"}
        store = TemplateStore({"t.html": _FakeTemplate(lambda ctx: seen.append(ctx) or "")})

        store.render("t.html", context)
        assert seen == [{"Name": "Ada"}]
        assert seen[0] is not context


class TestRequire:
    def test_all_present(self, template_dir: Path) -> None:
        TemplateStore.load(template_dir).require(["page.html", "base.html"])

    def test_lists_missing_names(self, template_dir: Path) -> None:
        store = TemplateStore.load(template_dir)

        with pytest.raises(TemplateLoadError) as exc_info:
            store.require(["page.html", "form.html", "success.html"])
        message = str(exc_info.value)
        assert "form.html" in message
        assert "success.html" in message
