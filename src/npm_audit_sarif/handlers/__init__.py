# npm_audit_sarif/handlers/__init__.py

import logging

# Common logger for all handlers
logger = logging.getLogger("npm-audit-sarif")

# Import handlers
from .export_sarif import handle_export_sarif

__all__ = [
    'handle_export_sarif',
]
