# npm_audit_sarif/cli.py

import argparse
import os
import logging
from argparse import RawTextHelpFormatter

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def parse_cmdline_args(argv=None):
    """
    Parse command line arguments.

    Args:
        argv: Argument list to parse instead of sys.argv[1:]

    Returns:
        argparse.Namespace: Parsed command line arguments

    Raises:
        ConfigurationError: If the arguments are inconsistent
    """
    parser = argparse.ArgumentParser(
        prog="npm-audit-sarif",
        usage="%(prog)s --filename <inputfile> [options]",
        description="Convert the JSON output of 'npm audit' into a SARIF 2.1.0 report.",
        formatter_class=RawTextHelpFormatter,
        epilog="""
Environment Variables:
  NPM_AUDIT_SARIF_ROOT    : Default for --root
  NPM_AUDIT_SARIF_OUTPUT  : Default for --output

Example Usage:
  # Write the SARIF report to a file
  npm audit --json > audit.json
  npm-audit-sarif --filename audit.json --output npm-audit.sarif

  # Print the SARIF report to stdout, paths relative to the checkout
  npm-audit-sarif --filename audit.json --root "$GITHUB_WORKSPACE/"
"""
    )

    io_args = parser.add_argument_group("Input / Output")
    io_args.add_argument("--filename", help="Input filename (JSON from 'npm audit --json').", required=True, metavar="FILE")
    io_args.add_argument(
        "--output",
        help="Output filename. Prints to stdout when omitted. Overrides NPM_AUDIT_SARIF_OUTPUT env var.",
        default=os.getenv("NPM_AUDIT_SARIF_OUTPUT"),
        metavar="FILE"
    )
    io_args.add_argument(
        "--root",
        help="Root directory stripped from reported paths. Overrides NPM_AUDIT_SARIF_ROOT env var.",
        default=os.getenv("NPM_AUDIT_SARIF_ROOT"),
        metavar="DIR"
    )

    log_args = parser.add_argument_group("Logging")
    log_args.add_argument(
        "--log",
        help="Logging level (Default: INFO)",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
    )
    log_args.add_argument("--log-file", help="Also write the log to this file (overwritten on each run).", metavar="FILE")
    log_args.add_argument("--quiet", help="Only print errors and the SARIF document.", action="store_true", default=False)

    parser.set_defaults(command="export-sarif")
    args = parser.parse_args(argv)

    if args.output and os.path.abspath(args.output) == os.path.abspath(args.filename):
        raise ConfigurationError(f"Output file must not overwrite the input file: {args.output}")

    return args
