"""
govaudit Utils Package

This package contains utility functions and helper modules:
- Logging: Structured logging with JSON support
- File utilities: Loading audit inputs
- Report Generator: Rendering audit reports
"""

from ..exceptions import (
    GovAuditError,
    ConfigurationError,
    ValidationError,
    InputError,
    InputNotFoundError,
    InputFormatError,
)

from .logger import get_logger, setup_logger
from .file_utils import load_abi, load_calls, read_json
from .report_generator import generate_report

__all__ = [
    # Logging
    'get_logger',
    'setup_logger',

    # Inputs
    'load_abi',
    'load_calls',
    'read_json',

    # Reporting
    'generate_report',

    # Exceptions
    'GovAuditError',
    'ConfigurationError',
    'ValidationError',
    'InputError',
    'InputNotFoundError',
    'InputFormatError',
]
