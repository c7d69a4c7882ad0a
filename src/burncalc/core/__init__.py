"""Core modules for burncalc - centralized definitions and utilities."""

from burncalc.core.errors import (
    BurnCalcError,
    ConfigurationError,
    ExitCode,
    ValidationError,
    format_error_message,
    main_with_error_handling,
)

__all__ = [
    "ExitCode",
    "BurnCalcError",
    "ConfigurationError",
    "ValidationError",
    "main_with_error_handling",
    "format_error_message",
]
