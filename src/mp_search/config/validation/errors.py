"""Config validation errors."""
from mp_search.kernel.errors import BaseError


class ConfigError(BaseError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting's value is present but semantically invalid."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        super().__init__(reason, detail={"setting": setting_name, "value": repr(value)})
        self.setting_name = setting_name
        self.value = value
        self.reason = reason


class RepositoryConfigurationError(ConfigError):
    """Index resolution, entity hooks or cursor settings of a repository are invalid."""
    default_code = "repository_configuration_error"


__all__ = [
    "ConfigError",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "RepositoryConfigurationError",
]
