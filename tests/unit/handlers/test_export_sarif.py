# tests/unit/handlers/test_export_sarif.py

import argparse
import json

import pytest

from npm_audit_sarif.handlers.export_sarif import handle_export_sarif
from npm_audit_sarif.exceptions import AuditSarifError, FileSystemError, ValidationError


class TestExportSarif:
    """Test cases for the export-sarif handler."""

    @pytest.fixture
    def params(self, audit_report_file, tmp_path):
        params = argparse.Namespace()
        params.command = "export-sarif"
        params.filename = str(audit_report_file)
        params.output = str(tmp_path / "out" / "npm-audit.sarif")
        params.root = None
        params.log = "INFO"
        params.quiet = False
        return params

    def test_successful_export_to_file(self, params, capsys):
        result = handle_export_sarif(params)

        assert result is True
        with open(params.output, encoding="utf-8") as f:
            text = f.read()
        assert not text.endswith("\n")

        document = json.loads(text)
        run = document["runs"][0]
        assert run["tool"]["driver"] == {"name": "npm-audit-sarif", "version": "0.1.0"}
        assert len(run["results"]) == 3
        assert run["artifacts"] == [{"location": {"uri": "package.json"}, "sourceLanguage": "json"}]

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "SARIF report saved to" in captured.err

    def test_export_to_stdout(self, params, capsys):
        params.output = None
        params.quiet = True

        handle_export_sarif(params)

        captured = capsys.readouterr()
        document = json.loads(captured.out)
        assert len(document["runs"][0]["results"]) == 3
        assert captured.err == ""

    def test_root_is_passed_to_conversion(self, params, mocker):
        mock_convert = mocker.patch(
            "npm_audit_sarif.handlers.export_sarif.convert_audit_to_sarif_json", return_value="{}"
        )
        params.root = "/workspace"

        handle_export_sarif(params)

        vulnerabilities, root = mock_convert.call_args.args
        assert list(vulnerabilities) == ["lodash", "grunt_legacy util", "minimist"]
        assert root == "/workspace"

    def test_same_input_gives_identical_output(self, params, tmp_path):
        handle_export_sarif(params)
        first = open(params.output, encoding="utf-8").read()

        params.output = str(tmp_path / "second.sarif")
        handle_export_sarif(params)
        second = open(params.output, encoding="utf-8").read()

        assert first == second

    def test_missing_input_file(self, params, tmp_path, capsys):
        params.filename = str(tmp_path / "missing.json")

        with pytest.raises(FileSystemError):
            handle_export_sarif(params)

        assert "File system error" in capsys.readouterr().err

    def test_malformed_advisory_writes_nothing(self, params, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"vulnerabilities": {"lodash": {"via": [{"title": "x"}]}}}), encoding="utf-8")
        params.filename = str(bad)

        with pytest.raises(ValidationError):
            handle_export_sarif(params)

        assert not (tmp_path / "out" / "npm-audit.sarif").exists()

    def test_unexpected_error_is_wrapped(self, params, mocker):
        mocker.patch(
            "npm_audit_sarif.handlers.export_sarif.convert_audit_to_sarif_json",
            side_effect=TypeError("unexpected")
        )

        with pytest.raises(AuditSarifError) as exc_info:
            handle_export_sarif(params)

        assert type(exc_info.value) is AuditSarifError
