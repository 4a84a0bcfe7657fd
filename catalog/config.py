"""
Catalog Configuration Handler

Manages YAML configuration file for the local catalog.
Provides defaults and validation.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from config.settings import (
    CATALOG_CONFIG_PATH,
    FEED_PAGE_LIMIT,
    METADATA_DB_NAME,
    STORAGE_BASE_PATH,
)


class CatalogConfig:
    """
    Catalog configuration with YAML file support.

    Reads from config/catalog.yaml if it exists,
    otherwise uses defaults from config/settings.py.

    Usage:
        config = CatalogConfig()
        base_path = config.storage_base_path
        limit = config.feed_page_limit
    """

    DEFAULT_CONFIG_PATH = CATALOG_CONFIG_PATH

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration.

        Args:
            config_path: Path to YAML config file (None = use default)
        """
        self.logger = logging.getLogger(__name__)
        self.config_path = Path(config_path or self.DEFAULT_CONFIG_PATH)

        # Load configuration (defaults + file overrides)
        self._config = self._load_config()

        self.logger.info(f"Catalog config loaded from {self.config_path}")

    def _get_defaults(self) -> Dict[str, Any]:
        """Get default configuration values from settings"""
        return {
            "storage_base_path": str(STORAGE_BASE_PATH),
            "metadata_db_name": METADATA_DB_NAME,
            "feed_page_limit": FEED_PAGE_LIMIT,
        }

    def _load_config(self) -> Dict[str, Any]:
        """Load configuration from YAML file or use defaults"""
        config = self._get_defaults()

        if self.config_path.exists():
            try:
                with open(self.config_path, "r") as f:
                    file_config = yaml.safe_load(f) or {}

                # File overrides defaults
                config.update(file_config)

                self.logger.info(f"Loaded config from {self.config_path}")

            except (OSError, yaml.YAMLError) as e:
                self.logger.warning(
                    f"Failed to load config from {self.config_path}: {e}. "
                    f"Using defaults."
                )
        else:
            self.logger.info(
                f"Config file not found at {self.config_path}. Using defaults."
            )

        self._validate_config(config)

        return config

    def _validate_config(self, config: Dict[str, Any]) -> None:
        """Validate configuration values"""
        if not str(config["metadata_db_name"]).strip():
            raise ValueError("metadata_db_name cannot be empty")

        limit = config["feed_page_limit"]
        if not isinstance(limit, int) or limit <= 0:
            raise ValueError(f"feed_page_limit must be a positive integer: {limit}")

    def save(self) -> None:
        """Save configuration to YAML file"""
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.config_path, "w") as f:
                yaml.dump(
                    self._config,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    indent=2,
                )

            self.logger.info(f"Config saved to {self.config_path}")

        except OSError as e:
            self.logger.error(f"Failed to save config: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        return self._config.get(key, default)

    def set(self, key: str, value: Any, save: bool = True) -> None:
        """
        Set a configuration value.

        Args:
            key: Configuration key
            value: New value
            save: If True, write the file immediately
        """
        candidate = {**self._config, key: value}
        self._validate_config(candidate)
        self._config = candidate

        if save:
            self.save()

    # =========================================================================
    # PROPERTY ACCESSORS
    # =========================================================================

    @property
    def storage_base_path(self) -> Path:
        """Directory holding the catalog database"""
        return Path(self._config["storage_base_path"]).expanduser().resolve()

    @property
    def metadata_db_name(self) -> str:
        return self._config["metadata_db_name"]

    @property
    def feed_page_limit(self) -> int:
        """Maximum records loaded per feed refresh"""
        return self._config["feed_page_limit"]
