# npm_audit_sarif/exceptions.py

from typing import Any, Dict, Optional


class AuditSarifError(Exception):
    """Base exception for all npm-audit-sarif errors."""

    def __init__(self, message: str, code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ValidationError(AuditSarifError):
    """Raised when input data or arguments do not have the expected shape."""
    pass


class FileSystemError(AuditSarifError):
    """Raised when an input file cannot be read or an output file cannot be written."""
    pass


class ConfigurationError(AuditSarifError):
    """Raised for invalid command-line or environment configuration."""
    pass
