"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups. ``AppConfig.from_env()`` layers ``WREN_*``
environment variables over the defaults; ``validate()`` runs at startup.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from wren.errors import ConfigurationError

LOG_LEVELS = ("critical", "error", "warning", "info", "debug")

ENV_PREFIX = "WREN_"


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=3000, template_dir="site/templates")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False

    # Templates
    template_dir: str | Path | None = "templates"
    template_pattern: str = "*.html"
    autoescape: bool = True
    trim_blocks: bool = True
    lstrip_blocks: bool = True

    # Static files
    static_dir: str | Path | None = "static"
    static_url: str = "/static"
    static_cache_control: str = "public, max-age=3600"

    # Limits
    max_content_length: int = 10 * 1024 * 1024  # 10 MB

    # Logging
    log_level: str = "info"
    access_log: bool = True

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        *,
        defaults: Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> AppConfig:
        """Build a config from ``WREN_*`` environment variables.

        Each field maps to ``WREN_<FIELD>`` (e.g. ``WREN_PORT``). Values
        are layered: field defaults, then *defaults*, then the
        environment, then *overrides* (``None`` overrides are skipped so
        unset CLI flags can be passed straight through).

        Raises ``ConfigurationError`` if a variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = dict(defaults or {})
        for f in fields(cls):
            raw = env.get(ENV_PREFIX + f.name.upper())
            if raw is None or raw == "":
                continue
            parse = _PARSERS.get(f.name, str)
            try:
                values[f.name] = parse(raw)
            except ValueError as exc:
                msg = f"{ENV_PREFIX}{f.name.upper()}={raw!r}: {exc}"
                raise ConfigurationError(msg) from exc
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    def validate(self) -> None:
        """Check the config for values the server cannot start with.

        Raises ``ConfigurationError`` listing every problem found.
        """
        problems: list[str] = []
        if not 0 < self.port < 65536:
            problems.append(f"port must be between 1 and 65535, got {self.port}")
        if not self.static_url.startswith("/"):
            problems.append(f"static_url must start with '/', got {self.static_url!r}")
        if self.max_content_length <= 0:
            problems.append("max_content_length must be positive")
        if self.log_level.lower() not in LOG_LEVELS:
            problems.append(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )
        if self.template_dir is not None and not Path(self.template_dir).is_dir():
            problems.append(f"template_dir {str(self.template_dir)!r} is not a directory")
        if problems:
            raise ConfigurationError("; ".join(problems))


def _parse_bool(value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    msg = "expected a boolean (true/false)"
    raise ValueError(msg)


def _parse_optional_path(value: str) -> str | None:
    # "none" disables the feature (no templates, no static serving)
    return None if value.strip().lower() == "none" else value


_PARSERS: dict[str, Callable[[str], Any]] = {
    "port": int,
    "debug": _parse_bool,
    "autoescape": _parse_bool,
    "trim_blocks": _parse_bool,
    "lstrip_blocks": _parse_bool,
    "template_dir": _parse_optional_path,
    "static_dir": _parse_optional_path,
    "max_content_length": int,
    "access_log": _parse_bool,
}
