"""Configuration management for the lens pricing engine."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DEFAULT_COMPETITOR_NAME = "1-800 Contacts"


@dataclass
class Settings:
    """Application settings loaded from environment variables.

    Attributes:
        log_level: Logging verbosity level.
        data_dir: Directory for catalog files and exports.
        competitor_name: Online competitor shown in comparisons.
        apply_practice_rebate: Whether the quarterly practice rebate is
            subtracted from the practice's final amount.
        catalog_path: Optional brand catalog file loaded at startup.
    """

    log_level: str
    data_dir: Path
    competitor_name: str = DEFAULT_COMPETITOR_NAME
    apply_practice_rebate: bool = False
    catalog_path: Path | None = None

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from environment variables.

        Returns:
            Settings instance with loaded configuration.
        """
        load_dotenv()

        log_level = os.getenv("LOG_LEVEL", "INFO")
        data_dir = Path(os.getenv("DATA_DIR", "./data"))
        competitor_name = os.getenv("COMPETITOR_NAME", DEFAULT_COMPETITOR_NAME)
        apply_practice_rebate = (
            os.getenv("APPLY_PRACTICE_REBATE", "false").lower() == "true"
        )
        catalog_env = os.getenv("CATALOG_PATH")
        catalog_path = Path(catalog_env) if catalog_env else None

        logger.debug(
            f"Loaded settings: log_level={log_level}, data_dir={data_dir}, "
            f"competitor_name={competitor_name}, "
            f"apply_practice_rebate={apply_practice_rebate}"
        )

        return cls(
            log_level=log_level,
            data_dir=data_dir,
            competitor_name=competitor_name,
            apply_practice_rebate=apply_practice_rebate,
            catalog_path=catalog_path,
        )

    def ensure_directories(self) -> None:
        """Create required directories if they don't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(f"Ensured data directory exists: {self.data_dir}")


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for scripts and services.

    Args:
        level: Logging level name (e.g. "DEBUG", "INFO").
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
