"""Config – settings, loaders and validation errors."""

from service_tokens.config.settings import EnvSettingsLoader, Settings, SettingsLoader, TokenSettings
from service_tokens.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
    "TokenSettings",
]
