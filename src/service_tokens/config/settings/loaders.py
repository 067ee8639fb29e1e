"""Config settings – EnvSettingsLoader, DotenvSettingsLoader."""
from __future__ import annotations

import abc
import dataclasses
import json
import os
from typing import Any, TypeVar

from service_tokens.config.settings.base import Settings
from service_tokens.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

T = TypeVar("T", bound=Settings)

_COLLECTION_PREFIXES = ("list[", "frozenset[", "set[", "tuple[")
_MAPPING_PREFIXES = ("dict[", "Mapping[", "MappingProxyType[")


class SettingsLoader(abc.ABC):
    """Port: load settings from an external source."""

    @abc.abstractmethod
    def load(self, settings_class: type[T]) -> T: ...


class EnvSettingsLoader(SettingsLoader):
    """Load settings from OS environment variables.

    Variable names are ``{PREFIX}_{FIELD}`` upper-cased.  Collections are
    comma separated; mapping fields hold a JSON object.
    """

    def __init__(self, environ: dict[str, str] | None = None) -> None:
        self._environ = environ

    def load(self, settings_class: type[T]) -> T:
        environ = os.environ if self._environ is None else self._environ
        prefix = getattr(settings_class, "_prefix", "").upper()
        kwargs: dict[str, Any] = {}

        for field in dataclasses.fields(settings_class):  # type: ignore[arg-type]
            env_key = f"{prefix}_{field.name}".upper().lstrip("_")
            raw = environ.get(env_key)

            if raw is None:
                if (
                    field.default is dataclasses.MISSING
                    and field.default_factory is dataclasses.MISSING  # type: ignore[misc]
                ):
                    raise MissingRequiredSettingError(env_key)
                continue

            kwargs[field.name] = self._coerce(field.name, raw, field.type)

        try:
            return settings_class(**kwargs)
        except ConfigError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"Failed to load settings: {exc}") from exc

    def _coerce(self, name: str, value: str, type_hint: Any) -> Any:
        hint = _hint_name(type_hint)
        if hint == "int":
            try:
                return int(value)
            except ValueError as exc:
                raise InvalidSettingValueError(name, value, "expected an integer") from exc
        if hint.startswith(_COLLECTION_PREFIXES):
            items = [v.strip() for v in value.split(",") if v.strip()]
            return frozenset(items) if hint.startswith(("frozenset[", "set[")) else items
        if hint == "dict" or hint.startswith(_MAPPING_PREFIXES):
            try:
                return json.loads(value)
            except ValueError as exc:
                raise InvalidSettingValueError(name, "<json>", "expected a JSON object") from exc
        return value


class DotenvSettingsLoader(SettingsLoader):
    """Load settings from a ``.env`` file then fall back to ``EnvSettingsLoader``."""

    def __init__(self, env_file: str = ".env", override: bool = False) -> None:
        self._env_file = env_file
        self._override = override

    def load(self, settings_class: type[T]) -> T:
        try:
            from dotenv import load_dotenv  # type: ignore[import-untyped]
        except ImportError as exc:
            raise ImportError("Install 'service-tokens[dotenv]' to use DotenvSettingsLoader") from exc
        load_dotenv(self._env_file, override=self._override)
        return EnvSettingsLoader().load(settings_class)


def _hint_name(type_hint: Any) -> str:
    # field.type is a plain string under ``from __future__ import annotations``
    if isinstance(type_hint, str):
        name = type_hint
    elif isinstance(type_hint, type):
        name = type_hint.__name__
    else:
        name = str(type_hint)
    return name.replace(" ", "").replace("typing.", "")


__all__ = ["DotenvSettingsLoader", "EnvSettingsLoader", "SettingsLoader"]
