"""
Configuration Management for the Onboard client

This module provides a centralized configuration system with a 3-tier
precedence hierarchy: environment → user file → packaged defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULTS_PATH = Path(__file__).resolve().parent.parent / "config" / "settings" / "defaults.yaml"
USER_CONFIG_FILENAME = "onboard.yaml"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class ConfigError(ValueError):
    """Raised when the merged configuration does not validate."""


class ApiConfig(BaseModel):
    """Authentication service endpoint configuration"""
    model_config = ConfigDict(extra='forbid')

    base_url: str = Field(default="http://localhost:8000/api/v1", description="Auth service base URL")
    login_path: str = Field(default="/login", description="Login endpoint path")
    signup_path: str = Field(default="/sign-up", description="Registration endpoint path")
    timeout: float = Field(default=10.0, gt=0.0, le=120.0, description="Request timeout (seconds)")


class UIConfig(BaseModel):
    """Screen timing and navigation configuration"""
    model_config = ConfigDict(extra='forbid')

    home_route: str = Field(default="/", description="Route opened after login")
    login_redirect_delay_ms: int = Field(default=1000, ge=0, le=60000)
    signup_redirect_delay_ms: int = Field(default=1500, ge=0, le=60000)

    # None disables auto-hide for that screen
    login_notification_auto_hide_ms: Optional[int] = Field(default=3000, ge=0)
    signup_notification_auto_hide_ms: Optional[int] = Field(default=None, ge=0)

    cancel_redirect_on_unmount: bool = Field(
        default=True, description="Drop a pending redirect when its screen unmounts"
    )


class SessionConfig(BaseModel):
    """Session persistence configuration"""
    model_config = ConfigDict(extra='forbid')

    backend: Literal["memory", "file"] = Field(default="memory", description="Session store backend")
    path: str = Field(default="data/session/session.json", description="File backend location")


class LoggingConfig(BaseModel):
    """Logging configuration"""
    model_config = ConfigDict(extra='forbid')

    level: str = Field(default="INFO", description="File log level")
    console_level: str = Field(default="WARNING", description="Console log level")
    log_dir: str = Field(default="data/logs", description="Directory for rotating log files")


class SystemConfig(BaseModel):
    """Complete client configuration"""
    model_config = ConfigDict(extra='forbid')

    api: ApiConfig = Field(default_factory=ApiConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    schema_version: int = Field(default=1, description="Configuration schema version")


# Environment variable → (section, key)
ENV_MAP: Dict[str, tuple[str, str]] = {
    'ONBOARD_API_BASE_URL': ('api', 'base_url'),
    'ONBOARD_API_TIMEOUT': ('api', 'timeout'),
    'ONBOARD_SESSION_BACKEND': ('session', 'backend'),
    'ONBOARD_SESSION_PATH': ('session', 'path'),
    'LOG_LEVEL': ('logging', 'level'),
}


class ConfigManager:
    """Centralized configuration manager with 3-tier precedence hierarchy"""

    def __init__(self, project_root: Optional[Path] = None, defaults_path: Optional[Path] = None):
        self.project_root = project_root or Path.cwd()
        self.defaults_path = defaults_path or DEFAULTS_PATH
        self.user_config_path = self.project_root / USER_CONFIG_FILENAME
        self._defaults: Optional[Dict[str, Any]] = None
        self._user_config: Optional[Dict[str, Any]] = None

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Ignoring {file_path}: top level must be a mapping")
            return {}
        return data

    def _load_defaults(self) -> Dict[str, Any]:
        if self._defaults is None:
            self._defaults = self._load_yaml_file(self.defaults_path)
        return self._defaults

    def _load_user_config(self) -> Dict[str, Any]:
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.user_config_path)
        return self._user_config

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables.

        Values are passed through as strings, pydantic converts them.
        """
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None or not value.strip():
                continue
            overrides.setdefault(section, {})[config_key] = value.strip()
        return overrides

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → user → defaults"""
        merged = SystemConfig().model_dump()
        self._deep_merge(merged, self._load_defaults())
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ConfigError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()

    def save_user_config(self, config_updates: Dict[str, Any]) -> bool:
        """Merge updates into the user configuration file"""
        existing = self._load_yaml_file(self.user_config_path)
        self._deep_merge(existing, config_updates)

        try:
            with open(self.user_config_path, 'w', encoding='utf-8') as f:
                yaml.safe_dump(existing, f, default_flow_style=False, sort_keys=False, indent=2)
        except OSError as e:
            logger.error(f"Failed to save {self.user_config_path}: {e}")
            return False

        self._user_config = None
        return True


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(project_root: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or project_root is not None:
        _config_manager = ConfigManager(project_root)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
