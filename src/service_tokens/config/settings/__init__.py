"""Config settings – immutable env-based configuration."""
from service_tokens.config.settings.base import Settings
from service_tokens.config.settings.loaders import DotenvSettingsLoader, EnvSettingsLoader, SettingsLoader
from service_tokens.config.settings.tokens import PRODUCTION_ENVIRONMENTS, TokenSettings

__all__ = [
    "PRODUCTION_ENVIRONMENTS",
    "DotenvSettingsLoader",
    "EnvSettingsLoader",
    "Settings",
    "SettingsLoader",
    "TokenSettings",
]
