"""Config – 12-factor settings, loaders and validation errors."""

from mp_search.config.settings import EnvSettingsLoader, Settings, SettingsLoader
from mp_search.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    RepositoryConfigurationError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RepositoryConfigurationError",
    "Settings",
    "SettingsLoader",
]
