"""
npm audit report model and loader.

The audit report produced by ``npm audit --json`` keeps a ``vulnerabilities``
object keyed by package name. Each vulnerability carries a ``via`` list whose
entries are either advisory objects or plain strings naming another
vulnerability in the same report. The classes here give those entries an
explicit shape so the converter can tell the two apart without guessing.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from ..exceptions import FileSystemError, ValidationError

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    """Renders an optional advisory field as text; absent values become ''."""
    if value is None:
        return ""
    return str(value)


@dataclass(frozen=True)
class ProvenanceRecord:
    """One concrete advisory affecting a dependency."""
    source: Optional[int]
    name: str
    dependency: str
    title: str
    url: str
    severity: str
    cwe: Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProvenanceRecord":
        cwe = data.get("cwe")
        if not isinstance(cwe, list):
            raise ValidationError(
                f"Advisory '{data.get('title', '<untitled>')}' has no 'cwe' list",
                details={"advisory": data},
            )
        return cls(
            source=data.get("source"),
            name=_text(data.get("name")),
            dependency=_text(data.get("dependency")),
            title=_text(data.get("title")),
            url=_text(data.get("url")),
            severity=_text(data.get("severity")),
            cwe=tuple(str(item) for item in cwe),
        )


@dataclass(frozen=True)
class Reference:
    """A ``via`` entry that only names another vulnerability in the report."""
    name: str


@dataclass(frozen=True)
class Advisory:
    """A ``via`` entry carrying a full advisory."""
    record: ProvenanceRecord


ViaEntry = Union[Reference, Advisory]


def parse_via_entry(entry: Any) -> ViaEntry:
    """
    Converts one raw ``via`` entry into its variant.

    Raises:
        ValidationError: If the entry is neither a string nor an object
    """
    if isinstance(entry, str):
        return Reference(entry)
    if isinstance(entry, dict):
        return Advisory(ProvenanceRecord.from_dict(entry))
    raise ValidationError(f"Unsupported 'via' entry of type {type(entry).__name__}: {entry!r}")


@dataclass
class Vulnerability:
    """A vulnerable package entry from the audit report."""
    name: str
    severity: str
    via: List[ViaEntry]
    is_direct: bool = False
    range: str = ""
    fix_available: Any = False

    @classmethod
    def from_dict(cls, key: str, data: Any) -> "Vulnerability":
        if not isinstance(data, dict):
            raise ValidationError(f"Vulnerability '{key}' is not an object")
        via = data.get("via")
        if not isinstance(via, list):
            raise ValidationError(f"Vulnerability '{key}' has no 'via' list")
        return cls(
            name=_text(data.get("name", key)),
            severity=_text(data.get("severity")),
            via=[parse_via_entry(entry) for entry in via],
            is_direct=bool(data.get("isDirect", False)),
            range=_text(data.get("range")),
            # npm reports either a boolean or an object describing the fix
            fix_available=data.get("fixAvailable", False),
        )


def load_audit_report(filepath: str) -> Dict[str, Any]:
    """
    Loads an ``npm audit --json`` report and returns its vulnerabilities mapping.

    The mapping keeps the key order of the file. Top-level fields other than
    ``vulnerabilities`` are ignored.

    Args:
        filepath: Path to the audit report

    Returns:
        Dict[str, Any]: The raw ``vulnerabilities`` object

    Raises:
        FileSystemError: If the file cannot be read
        ValidationError: If the file is not valid JSON or lacks a vulnerabilities object
    """
    logger.debug(f"Reading audit report from {filepath}")
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError as e:
        raise FileSystemError(f"Audit report not found: {filepath}", details={"error": str(e), "operation": "read"}) from e
    except (IOError, OSError) as e:
        raise FileSystemError(f"Failed to read audit report {filepath}: {e}", details={"error": str(e), "operation": "read"}) from e

    try:
        report = json.loads(content)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Audit report {filepath} is not valid JSON: {e}") from e

    if not isinstance(report, dict):
        raise ValidationError(f"Audit report {filepath} must contain a JSON object")
    if "vulnerabilities" not in report:
        raise ValidationError(f"Audit report {filepath} has no 'vulnerabilities' object")

    vulnerabilities = report["vulnerabilities"]
    if not isinstance(vulnerabilities, dict):
        raise ValidationError(f"'vulnerabilities' in {filepath} must be an object")

    logger.debug(f"Loaded {len(vulnerabilities)} vulnerabilities from {filepath}")
    return vulnerabilities
