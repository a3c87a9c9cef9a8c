"""The Wren site: home page, greeting page, and the signup form.

Templates and static assets ship inside this package, so the defaults
work from any working directory::

    from wren.site import create_app

    app = create_app()
    app.run()
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from wren.app import App
from wren.config import AppConfig
from wren.site import handlers

TEMPLATE_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


def site_config(environ: Mapping[str, str] | None = None, **overrides: Any) -> AppConfig:
    """``AppConfig.from_env`` with the bundled template and static directories as defaults."""
    return AppConfig.from_env(
        environ,
        defaults={"template_dir": TEMPLATE_DIR, "static_dir": STATIC_DIR},
        **overrides,
    )


def create_app(config: AppConfig | None = None) -> App:
    """Build the site app. Nothing is loaded until ``app.load()`` or the first request."""
    app = App(config or site_config())

    app.route("/", name="home", templates=("home.html",))(handlers.home)
    app.route("/hello", name="hello", templates=("hello.html",))(handlers.hello)
    app.route(
        "/form",
        methods=["GET", "POST"],
        name="form",
        templates=("form.html", "success.html"),
    )(handlers.form)

    return app
