"""Tests for configuration management."""

import logging
import os
from pathlib import Path
from unittest.mock import patch

from lens_pricing.config import DEFAULT_COMPETITOR_NAME, Settings, configure_logging


class TestSettings:
    """Tests for Settings dataclass and loading."""

    def test_from_env_defaults(self) -> None:
        """Settings should have sensible defaults."""
        with patch.dict(os.environ, {}, clear=True), patch(
            "lens_pricing.config.load_dotenv"
        ):
            settings = Settings.from_env()
            assert settings.log_level == "INFO"
            assert settings.data_dir == Path("./data")
            assert settings.competitor_name == DEFAULT_COMPETITOR_NAME
            assert settings.apply_practice_rebate is False
            assert settings.catalog_path is None

    def test_from_env_custom(self, mock_env_vars: dict[str, str]) -> None:
        """Settings should load custom values from env."""
        settings = Settings.from_env()
        assert settings.log_level == "DEBUG"
        assert settings.data_dir == Path("/tmp/test_data")
        assert settings.competitor_name == "Lens Depot"
        assert settings.apply_practice_rebate is True
        assert settings.catalog_path == Path("/tmp/test_data/catalog.csv")

    def test_apply_practice_rebate_case_insensitive(self) -> None:
        """APPLY_PRACTICE_REBATE should be case-insensitive."""
        with patch.dict(os.environ, {"APPLY_PRACTICE_REBATE": "TRUE"}, clear=False):
            settings = Settings.from_env()
            assert settings.apply_practice_rebate is True

    def test_apply_practice_rebate_false(self) -> None:
        """Any value other than true disables the practice rebate."""
        with patch.dict(os.environ, {"APPLY_PRACTICE_REBATE": "yes"}, clear=False):
            settings = Settings.from_env()
            assert settings.apply_practice_rebate is False

    def test_ensure_directories(self, tmp_path: Path) -> None:
        """ensure_directories should create data_dir."""
        settings = Settings(log_level="INFO", data_dir=tmp_path / "catalogs")
        settings.ensure_directories()
        assert (tmp_path / "catalogs").is_dir()


class TestConfigureLogging:
    """Tests for logging setup."""

    def test_configure_logging_calls_basic_config(self) -> None:
        """configure_logging passes the upper-cased level to basicConfig."""
        with patch("lens_pricing.config.logging.basicConfig") as basic_config:
            configure_logging("debug")

        basic_config.assert_called_once()
        assert basic_config.call_args.kwargs["level"] == "DEBUG"
        assert "%(levelname)s" in basic_config.call_args.kwargs["format"]

    def test_module_logger_name(self) -> None:
        """Modules log under their package name."""
        from lens_pricing.compute import comparison

        assert comparison.logger.name == "lens_pricing.compute.comparison"
        assert isinstance(comparison.logger, logging.Logger)
