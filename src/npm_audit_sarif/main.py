import sys
import time
import logging

from .cli import parse_cmdline_args
from .exceptions import (
    AuditSarifError,
    ConfigurationError,
    ValidationError,
    FileSystemError,
)
from .handlers import handle_export_sarif
from .utilities.report_output import format_duration


def _setup_logging(params) -> logging.Logger:
    log_level = getattr(logging, params.log.upper(), logging.INFO)
    if params.quiet:
        log_level = max(log_level, logging.ERROR)

    # Console output goes to stderr; stdout may carry the SARIF document
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers = [console_handler]

    if params.log_file:
        file_handler = logging.FileHandler(params.log_file, mode='w')
        file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        handlers.append(file_handler)

    # Use force=True to allow reconfiguration if run multiple times
    logging.basicConfig(level=log_level, handlers=handlers, force=True)
    return logging.getLogger("npm-audit-sarif")


def main(argv=None) -> int:
    """
    Main function to parse arguments, set up logging and run the conversion.
    Returns an exit code (0 for success, non-zero for failure).
    """
    start_time = time.monotonic()
    exit_code = 1 # Default to failure
    logger = None
    quiet = False

    try:
        params = parse_cmdline_args(argv)
        quiet = params.quiet
        logger = _setup_logging(params)

        if not quiet:
            print("--- npm-audit-sarif Configuration ---", file=sys.stderr)
            for k, v in sorted(params.__dict__.items()):
                if k == 'command': continue
                print(f"  {k:<12} = {v}", file=sys.stderr)
            print("-------------------------------------", file=sys.stderr)
        logger.debug("Parsed parameters: %s", params)

        handle_export_sarif(params) # Raises on failure
        exit_code = 0
        if not quiet:
            print("\nnpm-audit-sarif finished successfully.", file=sys.stderr)

    except (ConfigurationError, ValidationError) as e:
        # Input problems, a traceback adds nothing
        print(f"\nRuntime Error: {e.message}", file=sys.stderr)
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=False)
        return 1
    except FileSystemError as e:
        print(f"\nRuntime Error: {e.message}", file=sys.stderr)
        if logger: logger.error("%s: %s", type(e).__name__, e.message, exc_info=True)
        return 1
    except AuditSarifError as e:
        print(f"\nnpm-audit-sarif Error: {e.message}", file=sys.stderr)
        if logger: logger.error("Unhandled AuditSarifError: %s", e.message, exc_info=True)
        return 1
    except Exception as e:
        print(f"\nUnexpected Error: {e}", file=sys.stderr)
        if logger: logger.critical("Unexpected error occurred", exc_info=True)
        return 1
    finally:
        duration_str = format_duration(time.monotonic() - start_time)
        if not quiet:
            print(f"\nTotal Execution Time: {duration_str}", file=sys.stderr)
        if logger: logger.debug("Total execution time: %s", duration_str)

    return exit_code


def run():
    """Console script entry point."""
    sys.exit(main())


if __name__ == "__main__":
    run()
