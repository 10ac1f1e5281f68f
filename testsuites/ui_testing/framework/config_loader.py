"""
================================================================================
Configuration Loader
================================================================================

YAML-based configuration management with environment variable override support.

Features:
    - Hierarchical YAML configuration loading
    - Environment variable override (UI_BASE_URL overrides ui.base_url)
    - Dot notation path access
    - Typed, validated UIConfig loaded once per process

Missing or invalid UI settings raise ConfigurationError at startup instead of
degrading silently mid-run.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from loguru import logger

from .exceptions import ConfigurationError
from .wait_policy import WaitPolicy


# Default configuration file path
DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"


class ConfigLoader:
    """
    Configuration loader with YAML and environment variable support.

    Configuration hierarchy (highest to lowest priority):
        1. Environment variables (UI_BASE_URL)
        2. YAML configuration file
        3. Default values

    Usage:
        >>> config = ConfigLoader()
        >>> config.get("ui.base_url")
        'https://demoqa.com'

    Environment Variable Mapping:
        - ui.base_url -> UI_BASE_URL
        - ui.implicit_wait_seconds -> UI_IMPLICIT_WAIT_SECONDS
        - logging.level -> LOGGING_LEVEL
    """

    _instance: Optional["ConfigLoader"] = None
    _config: Dict[str, Any] = {}

    def __new__(cls, config_path: Optional[Path] = None) -> "ConfigLoader":
        """Singleton: configuration is loaded once per process."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            config_path: Path to YAML configuration file.
                        Uses DEFAULT_CONFIG_PATH if not specified.
        """
        if getattr(self, "_initialized", False):
            if config_path is not None and Path(config_path) != self._config_path:
                raise ConfigurationError(
                    f"Configuration already loaded from {self._config_path}; "
                    f"call ConfigLoader.reset() before loading {config_path}"
                )
            return

        self._config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH
        self._load_config()
        self._initialized = True

    def _load_config(self) -> None:
        """Load configuration from YAML file."""
        if not self._config_path.exists():
            logger.warning(
                f"Configuration file not found: {self._config_path}. "
                f"Using environment variables only."
            )
            self._config = {}
            return

        try:
            with open(self._config_path, "r", encoding="utf-8") as f:
                self._config = yaml.safe_load(f) or {}
            logger.debug(f"Loaded configuration from: {self._config_path}")
        except yaml.YAMLError as e:
            raise ConfigurationError(
                f"Invalid YAML in configuration file: {e}"
            ) from e

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get configuration value by dot-notation path.

        First checks environment variables, then YAML config, then default.

        Args:
            key: Dot-notation path (e.g., "ui.base_url")
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        env_key = key.upper().replace(".", "_")
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return self._convert_type(env_value, default)

        value = self._config
        for part in key.split("."):
            if isinstance(value, dict):
                value = value.get(part)
            else:
                value = None

            if value is None:
                return default

        return value

    def reload(self) -> None:
        """Reload configuration from file."""
        self._load_config()
        logger.info(f"Configuration reloaded from: {self._config_path}")

    def _convert_type(self, value: str, reference: Any) -> Any:
        """
        Convert string value to match reference type.

        Used for environment variables which are always strings.
        """
        if reference is None:
            return value

        if isinstance(reference, bool):
            return value.lower() in ("true", "1", "yes", "on")
        if isinstance(reference, int):
            try:
                return int(value)
            except ValueError:
                return value
        if isinstance(reference, float):
            try:
                return float(value)
            except ValueError:
                return value

        return value

    @classmethod
    def reset(cls) -> None:
        """
        Reset singleton instance.

        Useful for testing when configuration needs to be reloaded
        with different settings.
        """
        cls._instance = None
        cls._config = {}
        load_ui_config.cache_clear()


# =============================================================================
# Typed UI configuration
# =============================================================================

@dataclass(frozen=True)
class UIConfig:
    """
    Read-only settings shared by every browser session of a process.

    Attributes:
        base_url: Application base URL
        implicit_wait_seconds: Default wait timeout for element synchronization
        page_load_timeout_seconds: Navigation timeout
        poll_interval_seconds: Poll interval of the default wait policy
        native_action_timeout_seconds: Budget for one native Playwright action
        overlay_close_timeout_seconds: Budget for the best-effort ad close
        screenshot_dir: Directory for failure screenshots
        browser: 'chromium', 'firefox' or 'webkit'
        headless: Run the browser headless
    """
    base_url: str
    implicit_wait_seconds: float
    page_load_timeout_seconds: float
    poll_interval_seconds: float = 0.5
    native_action_timeout_seconds: float = 5.0
    overlay_close_timeout_seconds: float = 3.0
    screenshot_dir: Path = Path("reports/screenshots")
    browser: str = "chromium"
    headless: bool = True

    def wait_policy(self) -> WaitPolicy:
        """Default wait policy derived from the implicit wait."""
        return WaitPolicy(
            timeout=self.implicit_wait_seconds,
            poll_interval=min(self.poll_interval_seconds, self.implicit_wait_seconds),
        )

    def overlay_close_policy(self) -> WaitPolicy:
        """Short policy bounding the best-effort ad close."""
        return WaitPolicy(
            timeout=self.overlay_close_timeout_seconds,
            poll_interval=min(self.poll_interval_seconds, self.overlay_close_timeout_seconds),
        )

    def url_for(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}" if path else self.base_url

    @classmethod
    def from_loader(cls, loader: ConfigLoader) -> "UIConfig":
        """
        Build and validate UI settings from a ConfigLoader.

        Raises:
            ConfigurationError: On missing or invalid values
        """
        base_url = loader.get("ui.base_url")
        if not base_url or not str(base_url).startswith(("http://", "https://")):
            raise ConfigurationError(
                f"ui.base_url must be an http(s) URL, got: {base_url!r}"
            )

        browser = str(loader.get("ui.browser", "chromium")).lower()
        if browser not in ("chromium", "firefox", "webkit"):
            raise ConfigurationError(f"ui.browser must be chromium, firefox or webkit, got: {browser!r}")

        config = cls(
            base_url=str(base_url).rstrip("/"),
            implicit_wait_seconds=_positive_number(loader, "ui.implicit_wait_seconds", required=True),
            page_load_timeout_seconds=_positive_number(loader, "ui.page_load_timeout_seconds", required=True),
            poll_interval_seconds=_positive_number(loader, "ui.poll_interval_seconds", 0.5),
            native_action_timeout_seconds=_positive_number(loader, "ui.native_action_timeout_seconds", 5.0),
            overlay_close_timeout_seconds=_positive_number(loader, "ui.overlay_close_timeout_seconds", 3.0),
            screenshot_dir=Path(loader.get("ui.screenshot_dir", "reports/screenshots")),
            browser=browser,
            headless=_boolean(loader, "ui.headless", True),
        )
        return config


def _positive_number(
    loader: ConfigLoader,
    key: str,
    default: Optional[float] = None,
    required: bool = False,
) -> float:
    raw = loader.get(key, None)
    if raw is None:
        if required:
            raise ConfigurationError(f"Missing required configuration value: {key}")
        return float(default)
    try:
        value = float(raw)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"{key} must be a number, got: {raw!r}") from e
    if value <= 0:
        raise ConfigurationError(f"{key} must be > 0, got: {value}")
    return value


_TRUE_STRINGS = ("true", "1", "yes", "on")
_FALSE_STRINGS = ("false", "0", "no", "off")


def _boolean(loader: ConfigLoader, key: str, default: bool) -> bool:
    raw = loader.get(key, None)
    if raw is None:
        return default
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE_STRINGS:
        return True
    if text in _FALSE_STRINGS:
        return False
    raise ConfigurationError(f"{key} must be true or false, got: {raw!r}")


@lru_cache(maxsize=None)
def load_ui_config(config_path: Optional[Path] = None) -> UIConfig:
    """
    Load the process-wide UI configuration (cached after the first call).

    Raises:
        ConfigurationError: On missing or invalid values
    """
    config = UIConfig.from_loader(ConfigLoader(config_path))
    logger.debug(
        f"UI config: base_url={config.base_url}, "
        f"implicit_wait={config.implicit_wait_seconds}s, "
        f"page_load_timeout={config.page_load_timeout_seconds}s"
    )
    return config


__all__ = [
    "ConfigLoader",
    "ConfigurationError",
    "UIConfig",
    "load_ui_config",
]
