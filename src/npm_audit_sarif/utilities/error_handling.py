"""
Error handling utilities for npm-audit-sarif.

Standardized formatting of user-facing error messages and a decorator that
applies it to command handlers. Messages go to stderr so that a SARIF
document written to stdout is never mixed with diagnostics.
"""

import sys
import logging
import argparse
import functools
from typing import Callable

from ..exceptions import (
    AuditSarifError,
    ValidationError,
    FileSystemError,
    ConfigurationError,
)

logger = logging.getLogger("npm-audit-sarif")


def _err(message: str = "") -> None:
    print(message, file=sys.stderr)


def format_and_print_error(error: Exception, handler_name: str, params: argparse.Namespace):
    """
    Formats and prints a standardized error message for CLI users.

    Args:
        error: The exception that occurred
        handler_name: Name of the handler where the error occurred
        params: Command line parameters
    """
    command = getattr(params, 'command', 'unknown')
    error_message = getattr(error, 'message', str(error))
    error_code = getattr(error, 'code', None)
    error_details = getattr(error, 'details', {})

    if isinstance(error, FileSystemError):
        _err("\n❌ File system error")
        _err(f"   {error_message}")
        _err("\n💡 Please check:")
        operation = (error_details or {}).get('operation')
        if operation != 'write':
            _err("   • The input file exists and is readable")
            _err(f"   • Input file: {getattr(params, 'filename', '<not specified>')}")
        if operation != 'read':
            _err("   • The output location is writable")
            _err(f"   • Output file: {getattr(params, 'output', None) or '<stdout>'}")

    elif isinstance(error, ValidationError):
        _err("\n❌ Invalid audit report")
        _err(f"   {error_message}")
        _err("\n💡 The input must be the JSON output of 'npm audit --json' (npm 7 or later)")

    elif isinstance(error, ConfigurationError):
        _err("\n❌ Configuration error")
        _err(f"   {error_message}")
        _err("\n💡 Please check your command-line arguments and environment variables")

    else:
        _err(f"\n❌ Error executing '{command}' command: {error_message}")

    if error_code:
        _err(f"\nError code: {error_code}")

    if getattr(params, 'log', 'INFO') == 'DEBUG' and error_details:
        _err("\nDetailed error information:")
        for key, value in error_details.items():
            _err(f"  • {key}: {value}")
    else:
        _err("\nFor more details, run with --log DEBUG for verbose output")


def handler_error_wrapper(handler_func: Callable) -> Callable:
    """
    A decorator that wraps handler functions with standardized error handling.

    Expected errors are printed and re-raised unchanged. Anything else is
    logged, wrapped in an AuditSarifError and raised so main() can map it to
    an exit code.

    Args:
        handler_func: The handler function to wrap

    Returns:
        The wrapped handler function with error handling
    """
    @functools.wraps(handler_func)
    def wrapper(params):
        try:
            handler_name = handler_func.__name__
            command_name = params.command if hasattr(params, 'command') else 'unknown'
            logger.debug(f"Starting {handler_name} for command '{command_name}'")

            return handler_func(params)

        except (ValidationError, FileSystemError, ConfigurationError) as e:
            logger.debug(f"Expected error in {handler_func.__name__}: {type(e).__name__}: {getattr(e, 'message', str(e))}")
            format_and_print_error(e, handler_func.__name__, params)
            raise

        except Exception as e:
            logger.error(f"Unexpected error in {handler_func.__name__}: {e}", exc_info=True)

            cli_error = AuditSarifError(
                f"Failed to execute {params.command if hasattr(params, 'command') else 'command'}: {str(e)}",
                details={"error": str(e), "handler": handler_func.__name__}
            )
            format_and_print_error(cli_error, handler_func.__name__, params)
            raise cli_error from e

    return wrapper
