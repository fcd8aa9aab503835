"""
Core utilities for webaudit.
"""
from webaudit.core.exceptions import (
    AuditError,
    InvalidInputError,
    BrowserLaunchError,
    ScanExecutionError,
    register_exception_handlers,
)

__all__ = [
    "AuditError",
    "InvalidInputError",
    "BrowserLaunchError",
    "ScanExecutionError",
    "register_exception_handlers",
]
