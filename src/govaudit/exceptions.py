"""
Exception hierarchy for govaudit.

This module defines all custom exceptions used throughout the codebase.
"""
from pathlib import Path
from typing import Optional, Union


class GovAuditError(Exception):
    """Base exception for all govaudit-specific exceptions."""
    pass


class ConfigurationError(GovAuditError):
    """Raised for configuration-related errors."""
    pass


class ValidationError(GovAuditError):
    """Raised when data validation fails."""
    pass


class InputError(GovAuditError):
    """Base exception for errors reading an audit input document."""

    def __init__(self, label: str, message: str, path: Optional[Union[str, Path]] = None):
        self.label = label
        self.path = Path(path) if path is not None else None
        location = f" ({self.path})" if self.path is not None else ""
        super().__init__(f"Invalid {label} input{location}: {message}")


class InputNotFoundError(InputError):
    """Raised when an input document cannot be opened."""
    pass


class InputFormatError(InputError):
    """Raised when an input document is not parsable or has the wrong shape."""
    pass
