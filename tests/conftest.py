"""Shared fixtures for wren tests."""

from pathlib import Path

import pytest

from wren.app import App
from wren.config import AppConfig

BASE_HTML = """\
<!DOCTYPE html>
<html>
<head><title>{% block title %}Test{% endblock %}</title></head>
<body>{% block content %}{% endblock %}</body>
</html>
"""

PAGE_HTML = """\
{% extends "base.html" %}
{% block title %}{{ title }}{% endblock %}
{% block content %}<h1>{{ title }}</h1>{% endblock %}
"""


def bare_app(**config_overrides: object) -> App:
    """An App with no template store and no static directory."""
    cfg = AppConfig(template_dir=None, static_dir=None, **config_overrides)
    return App(config=cfg)


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    """A template directory with ``base.html`` and ``page.html``."""
    directory = tmp_path / "templates"
    directory.mkdir()
    (directory / "base.html").write_text(BASE_HTML)
    (directory / "page.html").write_text(PAGE_HTML)
    return directory


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """A static directory with a stylesheet, a binary file, and a subdirectory."""
    directory = tmp_path / "static"
    directory.mkdir()
    (directory / "style.css").write_text("body { color: red; }")
    (directory / "data.bin").write_bytes(b"\x00\x01\x02\xff")
    docs = directory / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")
    return directory
