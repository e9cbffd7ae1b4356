"""
SARIF 2.1.0 document builder.

Small builder classes that assemble a SARIF log as plain dictionaries:
results are added to runs, runs are added to the document, and the document
is serialized once everything has been added.
"""

import json
import os
from typing import Any, Dict, List, Optional

SARIF_SCHEMA = "https://json.schemastore.org/sarif-2.1.0.json"
SARIF_VERSION = "2.1.0"
SARIF_LEVELS = ("none", "note", "warning", "error")

# Extension to SARIF sourceLanguage, used when completing run artifacts
SOURCE_LANGUAGES = {
    ".json": "json",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".yaml": "yaml",
    ".yml": "yaml",
}


def min_val(value: Optional[int]) -> int:
    """SARIF regions are 1-based; zero or missing positions become 1."""
    if value:
        return value
    return 1


class SarifResultBuilder:
    """Builds a single SARIF result."""

    def __init__(self):
        self.result: Dict[str, Any] = {}

    def init_simple(
        self,
        rule_id: str,
        level: str,
        message_text: str,
        file_uri: Optional[str] = None,
        start_line: Optional[int] = None,
        start_column: Optional[int] = None,
        end_line: Optional[int] = None,
        end_column: Optional[int] = None,
    ) -> "SarifResultBuilder":
        if level not in SARIF_LEVELS:
            raise ValueError(f"Invalid SARIF level '{level}', expected one of {', '.join(SARIF_LEVELS)}")

        self.result = {
            "ruleId": rule_id,
            "level": level,
            "message": {"text": message_text},
        }
        if file_uri is not None:
            self.result["locations"] = [
                {
                    "physicalLocation": {
                        "artifactLocation": {"uri": file_uri},
                        "region": {
                            "startLine": min_val(start_line),
                            "startColumn": min_val(start_column),
                            "endLine": min_val(end_line),
                            "endColumn": min_val(end_column),
                        },
                    }
                }
            ]
        return self


class SarifRunBuilder:
    """Builds a SARIF run: tool identity plus the results added to it."""

    def __init__(self):
        self.run: Dict[str, Any] = {
            "tool": {"driver": {"name": ""}},
            "results": [],
        }

    def init_simple(self, tool_driver_name: str, tool_driver_version: str, url: Optional[str] = None) -> "SarifRunBuilder":
        driver = {"name": tool_driver_name, "version": tool_driver_version}
        if url:
            driver["informationUri"] = url
        self.run["tool"]["driver"] = driver
        return self

    def add_result(self, result_builder: SarifResultBuilder) -> "SarifRunBuilder":
        self.run["results"].append(result_builder.result)
        return self

    @property
    def result_count(self) -> int:
        return len(self.run["results"])


class SarifBuilder:
    """Builds the SARIF log document."""

    def __init__(self):
        self.log: Dict[str, Any] = {
            "$schema": SARIF_SCHEMA,
            "version": SARIF_VERSION,
            "runs": [],
        }

    def add_run(self, run_builder: SarifRunBuilder) -> "SarifBuilder":
        self.log["runs"].append(run_builder.run)
        return self

    def build_sarif_output(self) -> Dict[str, Any]:
        """Returns the document with every run completed."""
        return {
            "$schema": self.log["$schema"],
            "version": self.log["version"],
            "runs": [_complete_run(run) for run in self.log["runs"]],
        }

    def build_sarif_json_string(self, indent: bool = True) -> str:
        return json.dumps(self.build_sarif_output(), indent=2 if indent else None, ensure_ascii=False)


def _complete_run(run: Dict[str, Any]) -> Dict[str, Any]:
    """
    Returns a copy of the run with an artifacts table built from its results.

    Each distinct artifact URI is listed once, in first-seen order, and every
    result location is given the index of its artifact.
    """
    artifacts: List[Dict[str, Any]] = []
    artifact_index: Dict[str, int] = {}
    results = []

    for result in run["results"]:
        completed = dict(result)
        locations = []
        for location in result.get("locations", []):
            physical = dict(location.get("physicalLocation", {}))
            artifact_location = dict(physical.get("artifactLocation", {}))
            uri = artifact_location.get("uri")
            if uri is not None:
                if uri not in artifact_index:
                    artifact_index[uri] = len(artifacts)
                    artifact = {"location": {"uri": uri}}
                    language = SOURCE_LANGUAGES.get(os.path.splitext(uri)[1].lower())
                    if language:
                        artifact["sourceLanguage"] = language
                    artifacts.append(artifact)
                artifact_location["index"] = artifact_index[uri]
            physical["artifactLocation"] = artifact_location
            locations.append(dict(location, physicalLocation=physical))
        if "locations" in result:
            completed["locations"] = locations
        results.append(completed)

    completed_run = {"tool": run["tool"]}
    if artifacts:
        completed_run["artifacts"] = artifacts
    completed_run["results"] = results
    return completed_run
