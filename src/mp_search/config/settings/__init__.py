"""Config settings – 12-factor env-based configuration."""
from mp_search.config.settings.base import Settings
from mp_search.config.settings.loaders import EnvSettingsLoader, SettingsLoader

__all__ = ["EnvSettingsLoader", "Settings", "SettingsLoader"]
