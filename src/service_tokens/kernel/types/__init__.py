"""Kernel types."""
from service_tokens.kernel.types.result import Err, Ok, Result

__all__ = ["Err", "Ok", "Result"]
