"""Observability – structured logging ports and helpers."""
from service_tokens.observability.logging.factory import JsonLoggerFactory, get_logger
from service_tokens.observability.logging.filters import DEFAULT_SENSITIVE_FIELDS, SensitiveFieldsFilter
from service_tokens.observability.logging.protocol import Logger

__all__ = [
    "DEFAULT_SENSITIVE_FIELDS",
    "JsonLoggerFactory",
    "Logger",
    "SensitiveFieldsFilter",
    "get_logger",
]
