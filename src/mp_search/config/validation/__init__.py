"""Config validation errors."""
from mp_search.config.validation.errors import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
    RepositoryConfigurationError,
)

__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RepositoryConfigurationError",
]
