# npm_audit_sarif/handlers/export_sarif.py

import sys
import argparse

from ..utilities.error_handling import handler_error_wrapper
from ..utilities.audit_report import load_audit_report
from ..utilities.audit_to_sarif import convert_audit_to_sarif_json
from ..utilities.report_output import write_sarif_output

# Get logger from the handlers package
from . import logger


@handler_error_wrapper
def handle_export_sarif(params: argparse.Namespace) -> bool:
    """
    Handler for the 'export-sarif' command. Converts an npm audit report to SARIF.

    The document is fully built before anything is written, so a failure never
    leaves a partial file behind.

    Args:
        params: Command line parameters

    Returns:
        bool: True if the operation was successful
    """
    quiet = getattr(params, 'quiet', False)

    if not quiet:
        print(f"\nReading audit report from {params.filename}...", file=sys.stderr)
    vulnerabilities = load_audit_report(params.filename)
    logger.info(f"Audit report lists {len(vulnerabilities)} vulnerable packages")

    sarif_json = convert_audit_to_sarif_json(vulnerabilities, params.root)

    write_sarif_output(sarif_json, params.output)
    if not quiet and params.output:
        print(f"   • SARIF report saved to: {params.output}", file=sys.stderr)

    return True
