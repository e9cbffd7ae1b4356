"""
Utilities package for npm-audit-sarif.

This package contains the audit report model, the audit to SARIF conversion,
the SARIF document builder, output helpers and error handling.
"""

from .error_handling import format_and_print_error, handler_error_wrapper
from .audit_report import load_audit_report
from .audit_to_sarif import (
    relative,
    map_severity_to_sarif_level,
    normalize_rule_id,
    compose_finding,
    convert_audit_to_sarif_run,
    convert_audit_to_sarif_json,
)
from .sarif_builder import SarifBuilder, SarifRunBuilder, SarifResultBuilder
from .report_output import write_sarif_output, format_duration

__all__ = [
    # Error handling
    'format_and_print_error',
    'handler_error_wrapper',
    # Audit report
    'load_audit_report',
    # Conversion
    'relative',
    'map_severity_to_sarif_level',
    'normalize_rule_id',
    'compose_finding',
    'convert_audit_to_sarif_run',
    'convert_audit_to_sarif_json',
    # SARIF builder
    'SarifBuilder',
    'SarifRunBuilder',
    'SarifResultBuilder',
    # Output
    'write_sarif_output',
    'format_duration',
]
