"""Config validation errors.

All of these are usage errors: they are raised while settings are loaded or
a service is constructed, never returned through a ``Result``.
"""
from service_tokens.kernel.errors import ApplicationError


class ConfigError(ApplicationError):
    """Raised when configuration is invalid or loading failed."""
    default_code = "config_error"


class MissingRequiredSettingError(ConfigError):
    """A required environment variable / setting is absent."""
    default_code = "missing_required_setting"

    def __init__(self, setting_name: str) -> None:
        super().__init__(f"Required setting '{setting_name}' is missing")
        self.setting_name = setting_name


class InvalidSettingValueError(ConfigError):
    """A setting is present but cannot be used to issue or verify tokens."""
    default_code = "invalid_setting_value"

    def __init__(self, setting_name: str, value: object, reason: str) -> None:
        # key material must never end up in a message
        shown = "<redacted>" if setting_name == "key_definition" else repr(value)
        super().__init__(f"Setting '{setting_name}' has invalid value {shown}: {reason}")
        self.setting_name = setting_name
        self.reason = reason


__all__ = ["ConfigError", "InvalidSettingValueError", "MissingRequiredSettingError"]
