"""
Output helpers for the generated SARIF document.
"""

import os
import sys
import logging
from typing import Optional, Union

from ..exceptions import FileSystemError

logger = logging.getLogger(__name__)


def _write_stdout_utf8(text: str) -> None:
    """Writes text to stdout as UTF-8 whatever the console encoding is."""
    sys.stdout.flush()
    buffer = getattr(sys.stdout, "buffer", None)
    if buffer is None:
        # Text-only stream (already decoded), nothing to encode
        sys.stdout.write(text)
        return
    buffer.write(text.encode("utf-8"))
    buffer.flush()


def write_sarif_output(sarif_json: str, filepath: Optional[str] = None) -> None:
    """
    Writes the SARIF text to a file, or to standard output when no path is given.

    Args:
        sarif_json: The serialized SARIF document
        filepath: Destination file; parent directories are created as needed

    Raises:
        FileSystemError: If the file cannot be written
    """
    if not filepath:
        logger.debug("No output file given, writing SARIF to stdout")
        _write_stdout_utf8(sarif_json + "\n")
        return

    output_dir = os.path.dirname(filepath) or "."
    try:
        os.makedirs(output_dir, exist_ok=True)
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(sarif_json)
    except (IOError, OSError) as e:
        raise FileSystemError(f"Failed to write SARIF output to {filepath}: {e}", details={"error": str(e), "operation": "write"}) from e

    logger.info(f"SARIF report saved to {filepath}")


def format_duration(duration_seconds: Optional[Union[int, float]]) -> str:
    """Formats a duration in seconds into a 'X minutes, Y seconds' string."""
    if duration_seconds is None: return "N/A"
    try:
        duration_seconds = round(float(duration_seconds))
    except (ValueError, TypeError):
        return "Invalid Duration"

    minutes, seconds = divmod(int(duration_seconds), 60)
    if minutes > 0 and seconds > 0: return f"{minutes} minutes, {seconds} seconds"
    elif minutes > 0: return f"{minutes} minutes"
    elif seconds == 1: return "1 second"
    else: return f"{seconds} seconds"
