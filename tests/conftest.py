import json
import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


@pytest.fixture
def advisory():
    """Factory for a structured 'via' entry as npm audit writes it."""
    def _make(**overrides):
        entry = {
            "source": 1096366,
            "name": "lodash",
            "dependency": "lodash",
            "title": "Prototype Pollution",
            "url": "https://example/advisory/1",
            "severity": "critical",
            "cwe": ["CWE-1321"],
            "cvss": {"score": 9.1},
            "range": "<4.17.12",
        }
        entry.update(overrides)
        return entry
    return _make


@pytest.fixture
def sample_vulnerabilities(advisory):
    """A vulnerabilities object with direct advisories and a transitive reference."""
    return {
        "lodash": {
            "name": "lodash",
            "severity": "critical",
            "isDirect": True,
            "via": [
                advisory(),
                advisory(source=1096367, title="Command Injection", url="https://example/advisory/2",
                         severity="high", cwe=["CWE-77", "CWE-94"]),
            ],
            "effects": [],
            "range": "<=4.17.20",
            "nodes": ["node_modules/lodash"],
            "fixAvailable": True,
        },
        "grunt_legacy util": {
            "name": "grunt-legacy-util",
            "severity": "critical",
            "isDirect": False,
            "via": ["lodash"],
            "effects": [],
            "range": "*",
            "nodes": ["node_modules/grunt-legacy-util"],
            "fixAvailable": {"name": "grunt", "version": "1.6.1", "isSemVerMajor": True},
        },
        "minimist": {
            "name": "minimist",
            "severity": "moderate",
            "isDirect": False,
            "via": [
                "optimist",
                advisory(source=1096465, name="minimist", dependency="minimist",
                         title="Prototype Pollution in minimist", url="https://example/advisory/3",
                         severity="moderate", cwe=[]),
            ],
            "effects": [],
            "range": "<0.2.4",
            "nodes": ["node_modules/minimist"],
            "fixAvailable": False,
        },
    }


@pytest.fixture
def audit_report_file(tmp_path, sample_vulnerabilities):
    """Writes a complete npm audit report to disk and returns its path."""
    report = {
        "auditReportVersion": 2,
        "vulnerabilities": sample_vulnerabilities,
        "metadata": {"vulnerabilities": {"critical": 2, "moderate": 1, "total": 3}},
    }
    path = tmp_path / "audit.json"
    path.write_text(json.dumps(report), encoding="utf-8")
    return path
