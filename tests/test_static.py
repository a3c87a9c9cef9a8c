"""Tests for static file serving middleware."""

import os
from pathlib import Path

import pytest

from wren.app import App
from wren.config import AppConfig
from wren.middleware.static import StaticFiles
from wren.testing import TestClient

from conftest import bare_app


def _app(static_dir: Path, **kwargs: object) -> App:
    app = bare_app()
    app.add_middleware(StaticFiles(directory=static_dir, prefix="/static", **kwargs))

    @app.route("/")
    def index():
        return "home"

    return app


class TestStaticFileServing:
    async def test_serves_css_file(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/style.css")
            assert response.status == 200
            assert "text/css" in response.content_type
            assert response.text == "body { color: red; }"

    async def test_bytes_are_unchanged(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/data.bin")
            assert response.status == 200
            assert response.body_bytes == b"\x00\x01\x02\xff"

    async def test_unknown_extension_is_octet_stream(self, tmp_path: Path) -> None:
        (tmp_path / "blob.wrenunknown").write_bytes(b"abc")

        async with TestClient(_app(tmp_path)) as client:
            response = await client.get("/static/blob.wrenunknown")
            assert response.content_type == "application/octet-stream"

    async def test_cache_control_and_length(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir, cache_control="no-cache")) as client:
            response = await client.get("/static/style.css")
            assert response.header("cache-control") == "no-cache"
            assert response.header("content-length") == str(len("body { color: red; }"))

    async def test_head_sends_headers_only(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.head("/static/style.css")
            assert response.status == 200
            assert response.body_bytes == b""
            assert response.header("content-length") == str(len("body { color: red; }"))

    async def test_nested_file(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/docs/index.html")
            assert response.status == 200
            assert response.text == "<h1>Docs</h1>"


class TestStaticFallThrough:
    async def test_missing_file_is_404(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/missing.css")
            assert response.status == 404

    async def test_non_prefixed_path_reaches_router(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/")
            assert response.status == 200
            assert response.text == "home"

    async def test_prefix_must_end_at_a_segment(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/staticstyle.css")
            assert response.status == 404

    async def test_bare_prefix(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/")
            assert response.status == 404

    async def test_directory_without_index_is_not_listed(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.get("/static/docs")
            assert response.status == 404

    async def test_directory_with_index(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir, index="index.html")) as client:
            response = await client.get("/static/docs")
            assert response.status == 200
            assert response.text == "<h1>Docs</h1>"

    async def test_post_is_not_served(self, static_dir: Path) -> None:
        async with TestClient(_app(static_dir)) as client:
            response = await client.post("/static/style.css")
            assert response.status == 404


class TestStaticSecurity:
    async def test_traversal_outside_root(self, tmp_path: Path) -> None:
        root = tmp_path / "public"
        root.mkdir()
        (tmp_path / "secret.txt").write_text("top secret")

        async with TestClient(_app(root)) as client:
            response = await client.get("/static/../secret.txt")
            assert response.status == 404
            assert "top secret" not in response.text

    async def test_encoded_style_nested_traversal(self, tmp_path: Path) -> None:
        root = tmp_path / "public"
        (root / "css").mkdir(parents=True)
        (tmp_path / "secret.txt").write_text("top secret")

        async with TestClient(_app(root)) as client:
            response = await client.get("/static/css/../../secret.txt")
            assert response.status == 404

    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    async def test_symlink_outside_root(self, tmp_path: Path) -> None:
        root = tmp_path / "public"
        root.mkdir()
        secret = tmp_path / "secret.txt"
        secret.write_text("top secret")
        (root / "link.txt").symlink_to(secret)

        async with TestClient(_app(root)) as client:
            response = await client.get("/static/link.txt")
            assert response.status == 404


class TestConfiguredStatic:
    async def test_app_serves_config_static_dir(self, static_dir: Path) -> None:
        app = App(AppConfig(template_dir=None, static_dir=static_dir, static_url="/assets"))

        async with TestClient(app) as client:
            response = await client.get("/assets/style.css")
            assert response.status == 200

            response = await client.get("/static/style.css")
            assert response.status == 404

    async def test_missing_static_dir_is_skipped(self, tmp_path: Path) -> None:
        app = App(AppConfig(template_dir=None, static_dir=tmp_path / "nope"))

        @app.route("/")
        def index():
            return "home"

        async with TestClient(app) as client:
            assert (await client.get("/")).status == 200
            assert (await client.get("/static/style.css")).status == 404

    def test_properties(self, static_dir: Path) -> None:
        mw = StaticFiles(static_dir, "assets/")
        assert mw.directory == static_dir.resolve()
        assert mw.prefix == "/assets"
