"""Tests for wren.config — AppConfig defaults, env layering, validation."""

from pathlib import Path

import pytest

from wren.config import AppConfig
from wren.errors import ConfigurationError


class TestAppConfig:
    def test_defaults(self) -> None:
        cfg = AppConfig()

        assert cfg.host == "127.0.0.1"
        assert cfg.port == 8080
        assert cfg.debug is False
        assert cfg.template_dir == "templates"
        assert cfg.template_pattern == "*.html"
        assert cfg.autoescape is True
        assert cfg.static_dir == "static"
        assert cfg.static_url == "/static"
        assert cfg.max_content_length == 10 * 1024 * 1024
        assert cfg.log_level == "info"
        assert cfg.access_log is True

    def test_override(self) -> None:
        cfg = AppConfig(host="0.0.0.0", port=3000, debug=True)

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 3000
        assert cfg.debug is True

    def test_frozen(self) -> None:
        cfg = AppConfig()

        with pytest.raises(AttributeError):
            cfg.debug = True  # type: ignore[misc]


class TestFromEnv:
    def test_empty_environment_keeps_defaults(self) -> None:
        assert AppConfig.from_env({}) == AppConfig()

    def test_reads_prefixed_variables(self) -> None:
        cfg = AppConfig.from_env(
            {
                "WREN_HOST": "0.0.0.0",
                "WREN_PORT": "9000",
                "WREN_DEBUG": "true",
                "WREN_TEMPLATE_DIR": "site/templates",
                "WREN_MAX_CONTENT_LENGTH": "1024",
                "WREN_LOG_LEVEL": "debug",
                "WREN_ACCESS_LOG": "off",
            }
        )

        assert cfg.host == "0.0.0.0"
        assert cfg.port == 9000
        assert cfg.debug is True
        assert cfg.template_dir == "site/templates"
        assert cfg.max_content_length == 1024
        assert cfg.log_level == "debug"
        assert cfg.access_log is False

    def test_none_disables_static(self) -> None:
        cfg = AppConfig.from_env({"WREN_STATIC_DIR": "none"})
        assert cfg.static_dir is None

    def test_empty_value_is_ignored(self) -> None:
        cfg = AppConfig.from_env({"WREN_PORT": ""})
        assert cfg.port == 8080

    def test_overrides_win_over_environment(self) -> None:
        cfg = AppConfig.from_env({"WREN_PORT": "9000"}, port=7000)
        assert cfg.port == 7000

    def test_none_overrides_are_skipped(self) -> None:
        cfg = AppConfig.from_env({"WREN_PORT": "9000"}, port=None, host=None)
        assert cfg.port == 9000
        assert cfg.host == "127.0.0.1"

    def test_defaults_sit_below_environment(self) -> None:
        defaults = {"template_dir": "bundled", "port": 5000}
        cfg = AppConfig.from_env({"WREN_PORT": "9000"}, defaults=defaults)

        assert cfg.template_dir == "bundled"
        assert cfg.port == 9000

    def test_bad_integer(self) -> None:
        with pytest.raises(ConfigurationError, match="WREN_PORT"):
            AppConfig.from_env({"WREN_PORT": "eighty"})

    def test_bad_boolean(self) -> None:
        with pytest.raises(ConfigurationError, match="WREN_DEBUG"):
            AppConfig.from_env({"WREN_DEBUG": "maybe"})


class TestValidate:
    def test_valid(self, tmp_path: Path) -> None:
        AppConfig(template_dir=tmp_path).validate()

    def test_no_template_dir_is_valid(self) -> None:
        AppConfig(template_dir=None).validate()

    def test_missing_template_dir(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="template_dir"):
            AppConfig(template_dir=tmp_path / "missing").validate()

    @pytest.mark.parametrize("port", [0, 65536, -1])
    def test_port_out_of_range(self, port: int) -> None:
        with pytest.raises(ConfigurationError, match="port"):
            AppConfig(template_dir=None, port=port).validate()

    def test_static_url_needs_leading_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="static_url"):
            AppConfig(template_dir=None, static_url="static").validate()

    def test_unknown_log_level(self) -> None:
        with pytest.raises(ConfigurationError, match="log_level"):
            AppConfig(template_dir=None, log_level="loud").validate()

    def test_non_positive_body_limit(self) -> None:
        with pytest.raises(ConfigurationError, match="max_content_length"):
            AppConfig(template_dir=None, max_content_length=0).validate()

    def test_reports_every_problem(self) -> None:
        with pytest.raises(ConfigurationError) as exc_info:
            AppConfig(template_dir=None, port=0, log_level="loud").validate()
        message = str(exc_info.value)
        assert "port" in message
        assert "log_level" in message
