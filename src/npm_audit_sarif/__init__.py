# npm_audit_sarif/__init__.py
"""
npm audit to SARIF converter package
"""

from .utilities.audit_to_sarif import (
    TOOL_DRIVER_NAME,
    TOOL_DRIVER_VERSION,
    convert_audit_to_sarif_json,
    convert_audit_to_sarif_run,
)

__version__ = TOOL_DRIVER_VERSION

__all__ = [
    'convert_audit_to_sarif_json',
    'convert_audit_to_sarif_run',
    'TOOL_DRIVER_NAME',
    'TOOL_DRIVER_VERSION',
    '__version__',
]
