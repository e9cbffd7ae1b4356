"""Test command line argument parsing."""

import pytest

from npm_audit_sarif.cli import parse_cmdline_args
from npm_audit_sarif.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    monkeypatch.delenv("NPM_AUDIT_SARIF_ROOT", raising=False)
    monkeypatch.delenv("NPM_AUDIT_SARIF_OUTPUT", raising=False)


class TestArgumentParsing:

    def test_defaults(self):
        parsed = parse_cmdline_args(["--filename", "audit.json"])

        assert parsed.command == "export-sarif"
        assert parsed.filename == "audit.json"
        assert parsed.output is None
        assert parsed.root is None
        assert parsed.log == "INFO"
        assert parsed.log_file is None
        assert parsed.quiet is False

    def test_all_options(self):
        parsed = parse_cmdline_args([
            "--filename", "audit.json",
            "--output", "npm-audit.sarif",
            "--root", "/workspace/",
            "--log", "DEBUG",
            "--log-file", "run.log",
            "--quiet",
        ])

        assert parsed.output == "npm-audit.sarif"
        assert parsed.root == "/workspace/"
        assert parsed.log == "DEBUG"
        assert parsed.log_file == "run.log"
        assert parsed.quiet is True

    def test_filename_is_required(self):
        with pytest.raises(SystemExit):
            parse_cmdline_args(["--output", "npm-audit.sarif"])

    def test_invalid_log_level(self):
        with pytest.raises(SystemExit):
            parse_cmdline_args(["--filename", "audit.json", "--log", "TRACE"])

    def test_environment_defaults(self, monkeypatch):
        monkeypatch.setenv("NPM_AUDIT_SARIF_ROOT", "/env/root")
        monkeypatch.setenv("NPM_AUDIT_SARIF_OUTPUT", "env.sarif")

        parsed = parse_cmdline_args(["--filename", "audit.json"])

        assert parsed.root == "/env/root"
        assert parsed.output == "env.sarif"

    def test_command_line_overrides_environment(self, monkeypatch):
        monkeypatch.setenv("NPM_AUDIT_SARIF_ROOT", "/env/root")

        parsed = parse_cmdline_args(["--filename", "audit.json", "--root", "/cli/root"])

        assert parsed.root == "/cli/root"

    def test_output_must_not_be_input(self):
        with pytest.raises(ConfigurationError):
            parse_cmdline_args(["--filename", "audit.json", "--output", "./audit.json"])
