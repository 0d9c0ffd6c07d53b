"""
Error taxonomy for indicator calculation, signal fusion and trade sizing.

All errors are local, synchronous and non-retryable. Each subclasses ValueError
so callers that only care about "bad input" can catch a single type.
"""
from typing import Any, Dict, Optional


class SignalBotError(ValueError):
    """Base class for all signalbot errors."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}


class ConfigurationError(SignalBotError):
    """Invalid constructor parameter or configuration value (raised at construction)."""

    def __init__(self, message: str, parameter: Optional[str] = None, value: Any = None, **kwargs):
        super().__init__(message, **kwargs)
        self.parameter = parameter
        self.value = value


class InsufficientDataError(SignalBotError):
    """Input is None/empty or shorter than the minimum an indicator requires."""

    def __init__(
        self,
        message: str,
        required_count: Optional[int] = None,
        available_count: Optional[int] = None,
        **kwargs,
    ):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count


class DegenerateInputError(SignalBotError):
    """Input that would make a price or size non-finite or meaningless."""


__all__ = [
    "SignalBotError",
    "ConfigurationError",
    "InsufficientDataError",
    "DegenerateInputError",
]
