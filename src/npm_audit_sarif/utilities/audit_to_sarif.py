"""
npm audit to SARIF conversion.

Walks the vulnerabilities of an ``npm audit --json`` report and turns every
advisory found in a ``via`` list into a SARIF result. Entries that merely
reference another vulnerability are skipped; they are reported on their own
key. All results point at the project manifest because the audit report does
not say where in the tree the dependency is declared.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .audit_report import Advisory, ProvenanceRecord, Reference, Vulnerability
from .sarif_builder import SarifBuilder, SarifResultBuilder, SarifRunBuilder

logger = logging.getLogger(__name__)

TOOL_DRIVER_NAME = "npm-audit-sarif"
TOOL_DRIVER_VERSION = "0.1.0"
RULE_ID_PREFIX = "npm-audit-"
MANIFEST_FILE = "package.json"

# npm audit severity -> SARIF level. Anything not listed maps to "note".
SEVERITY_LEVELS = {
    "low": "note",
    "moderate": "warning",
    "high": "warning",
    "critical": "error",
}


@dataclass(frozen=True)
class Finding:
    """A single SARIF result derived from one advisory."""
    rule_id: str
    level: str
    message_text: str
    file_uri: str
    start_line: int = 1
    start_column: int = 1
    end_line: int = 1
    end_column: int = 1

    def to_sarif_init(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "level": self.level,
            "message_text": self.message_text,
            "file_uri": self.file_uri,
            "start_line": self.start_line,
            "start_column": self.start_column,
            "end_line": self.end_line,
            "end_column": self.end_column,
        }


def relative(root_dir: Optional[str], full_path: str) -> str:
    """
    Strips root_dir from the front of full_path, ignoring case.

    The remainder keeps its original casing. Separators are not normalized,
    so a leading separator left behind by the root stays in place.
    """
    if root_dir:
        if full_path.lower().startswith(root_dir.lower()):
            return full_path[len(root_dir):]
    return full_path


def map_severity_to_sarif_level(severity: Optional[str]) -> str:
    """Maps an npm audit severity to a SARIF level."""
    return SEVERITY_LEVELS.get((severity or "").lower(), "note")


def normalize_rule_id(vulnerability_key: str) -> str:
    """
    Builds the rule id for a vulnerability key.

    Only underscores and spaces are replaced; any other character is kept.
    """
    return RULE_ID_PREFIX + vulnerability_key.lower().replace("_", "-").replace(" ", "-")


def build_message_text(record: ProvenanceRecord) -> str:
    lines = ["Audit: " + record.severity, record.name, record.title, record.url]
    lines.extend(record.cwe)
    return "\n".join(lines)


def compose_finding(record: ProvenanceRecord, vulnerability_key: str, root_dir: Optional[str] = None) -> Finding:
    """
    Builds the finding for one advisory.

    Args:
        record: The advisory from a ``via`` list
        vulnerability_key: Key of the vulnerability the advisory was listed under
        root_dir: Optional root directory stripped from the reported path

    Returns:
        Finding: Result descriptor anchored at line 1, column 1 of the manifest
    """
    return Finding(
        rule_id=normalize_rule_id(vulnerability_key),
        level=map_severity_to_sarif_level(record.severity),
        message_text=build_message_text(record),
        file_uri=relative(root_dir, MANIFEST_FILE),
    )


def convert_audit_to_sarif_run(vulnerabilities: Dict[str, Any], root_dir: Optional[str] = None) -> SarifRunBuilder:
    """
    Converts the vulnerabilities of an audit report into a SARIF run.

    Vulnerabilities are visited in the mapping's own order and advisories in
    ``via`` order, so the same report always yields the same run. Advisories
    sharing a vulnerability key share a rule id; nothing is deduplicated.

    Args:
        vulnerabilities: The ``vulnerabilities`` object of the audit report
        root_dir: Optional root directory used to relativize result paths

    Returns:
        SarifRunBuilder: Run with one result per advisory

    Raises:
        ValidationError: If a vulnerability or advisory is malformed
    """
    run_builder = SarifRunBuilder().init_simple(
        tool_driver_name=TOOL_DRIVER_NAME,
        tool_driver_version=TOOL_DRIVER_VERSION,
    )

    for key, value in vulnerabilities.items():
        vulnerability = Vulnerability.from_dict(key, value)

        for entry in vulnerability.via:
            if isinstance(entry, Reference):
                logger.debug(f"Skipping '{key}' reference to '{entry.name}'")
                continue
            if not isinstance(entry, Advisory):
                raise TypeError(f"Unknown via entry for '{key}': {entry!r}")

            finding = compose_finding(entry.record, key, root_dir)
            logger.debug(f"Adding {finding.level} result {finding.rule_id}: {entry.record.title}")
            run_builder.add_result(SarifResultBuilder().init_simple(**finding.to_sarif_init()))

    logger.info(f"Converted {len(vulnerabilities)} vulnerabilities into {run_builder.result_count} SARIF results")
    return run_builder


def convert_audit_to_sarif_json(vulnerabilities: Dict[str, Any], root_dir: Optional[str] = None) -> str:
    """Converts the vulnerabilities of an audit report into indented SARIF JSON text."""
    sarif_builder = SarifBuilder()
    sarif_builder.add_run(convert_audit_to_sarif_run(vulnerabilities, root_dir))
    return sarif_builder.build_sarif_json_string(indent=True)
