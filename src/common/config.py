"""
icedb Configuration Loader

Loads pipeline settings from a YAML file, falls back to hardcoded defaults when
the file is missing or malformed, and applies environment variable overrides.
"""

import logging
import os
from typing import Any, Dict, Optional

import yaml

from common.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS: Dict[str, Any] = {
    'ISSUES_FILE_PATH': 'db/issues.jsonl',
    'FINGERPRINTS_FILE_PATH': 'db/fingerprints.jsonl',
    'DUPLICATES_FILE_PATH': '',
    'GITHUB_REPO': 'rust-lang/rust',
    'ISSUE_LABEL': 'I-ICE',
    'GITHUB_API_URL': 'https://api.github.com',
    'GITHUB_USER_AGENT': 'icedb',
    'GITHUB_PAGE_DELAY_SECONDS': 5.0,
    'GITHUB_REQUEST_TIMEOUT_SECONDS': 30.0,
    'EXTRACTION_WORKERS': 1,
    'MIN_LINKED_ISSUES': 2,
    'ACCEPT_PANIC_MESSAGE': False,
    'LOG_LEVEL': 'INFO',
}

TRUE_VALUES = {'1', 'true', 'yes', 'y', 'on'}
FALSE_VALUES = {'0', 'false', 'no', 'n', 'off', ''}


class Config:
    """Configuration for the fetch / fingerprint / duplicate stages."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to configuration file. If None, uses default path.
        """
        self.config_path = config_path or self._get_default_config_path()
        self.GITHUB_TOKEN = os.getenv('GITHUB_TOKEN', '')
        self.load_config()

    def _get_default_config_path(self) -> str:
        """Get default config path."""
        return os.path.join(os.path.dirname(__file__), "..", "..", "config", "icedb_config.yaml")

    def load_config(self):
        """Load configuration from YAML file with fallback to hardcoded defaults."""
        settings = dict(DEFAULT_SETTINGS)
        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
            if not isinstance(loaded, dict):
                raise ValueError(f"expected a mapping, got {type(loaded).__name__}")
            logger.debug(f"Loaded icedb config from: {self.config_path}")

        except FileNotFoundError:
            logger.warning(f"Config file not found: {self.config_path}. Using hardcoded defaults.")
            loaded = {}
        except (yaml.YAMLError, ValueError) as e:
            logger.warning(f"Error loading config file: {e}. Using hardcoded defaults.")
            loaded = {}

        for raw_key, value in loaded.items():
            key = str(raw_key).upper()
            if key not in DEFAULT_SETTINGS:
                # GITHUB_TOKEN lands here too: it is only read from the environment
                logger.warning(f"Ignoring unknown config key in {self.config_path}: {raw_key}")
                continue
            settings[key] = self._coerce(key, value, DEFAULT_SETTINGS[key])

        for key, default in DEFAULT_SETTINGS.items():
            env_value = os.getenv(key)
            if env_value is not None:
                settings[key] = self._coerce(key, env_value, default)

        for key, value in settings.items():
            setattr(self, key, value)

    @staticmethod
    def _coerce(key: str, value: Any, default: Any) -> Any:
        """
        Convert a YAML or environment value to the type of the default value.

        Raises:
            ConfigurationError: If the value cannot be read as that type
        """
        if isinstance(default, bool):
            if isinstance(value, bool):
                return value
            text = str(value).strip().lower()
            if text in TRUE_VALUES:
                return True
            if text in FALSE_VALUES:
                return False
            raise ConfigurationError(f"{key} must be a boolean, got {value!r}")
        if isinstance(default, int):
            if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")
            try:
                return int(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"{key} must be an integer, got {value!r}")
        if isinstance(default, float):
            if isinstance(value, bool):
                raise ConfigurationError(f"{key} must be a number, got {value!r}")
            try:
                return float(value)
            except (TypeError, ValueError):
                raise ConfigurationError(f"{key} must be a number, got {value!r}")
        return "" if value is None else str(value)

    def validate(self):
        """
        Check value ranges that the pipeline relies on.

        Raises:
            ConfigurationError: If a setting is out of range
        """
        # Attributes may have been reassigned after loading
        for key in ('EXTRACTION_WORKERS', 'MIN_LINKED_ISSUES', 'GITHUB_PAGE_DELAY_SECONDS'):
            setattr(self, key, self._coerce(key, getattr(self, key), DEFAULT_SETTINGS[key]))

        if self.EXTRACTION_WORKERS < 1:
            raise ConfigurationError(
                f"EXTRACTION_WORKERS must be at least 1, got {self.EXTRACTION_WORKERS}"
            )
        if self.MIN_LINKED_ISSUES < 2:
            raise ConfigurationError(
                f"MIN_LINKED_ISSUES must be at least 2, got {self.MIN_LINKED_ISSUES}"
            )
        if self.GITHUB_PAGE_DELAY_SECONDS < 0:
            raise ConfigurationError(
                f"GITHUB_PAGE_DELAY_SECONDS cannot be negative, got {self.GITHUB_PAGE_DELAY_SECONDS}"
            )

    def require_github_token(self) -> str:
        """Return the GitHub token or fail if it is not set."""
        if not self.GITHUB_TOKEN:
            raise ConfigurationError("GITHUB_TOKEN environment variable is not set")
        return self.GITHUB_TOKEN
