"""
Tests for cli.validate

Covers CLI invocation on clean and broken trees, strict mode, the fallback
locale flag, report generation and error handling.
"""

import json
import pytest
from click.testing import CliRunner

from cli import main
from cli import shared_options


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def clean_tree(minimal_documents, write_tree):
    return write_tree(minimal_documents)


class TestValidateCLI:
    def test_content_dir_required(self, runner):
        result = runner.invoke(main, ["validate"])
        assert result.exit_code != 0
        assert "content-dir" in result.output

    def test_clean_tree(self, runner, clean_tree):
        result = runner.invoke(main, ["validate", "--content-dir", clean_tree])
        assert result.exit_code == 0
        assert "✅" in result.output
        assert "0 error(s), 0 warning(s)" in result.output

    def test_broken_chain_fails(self, runner, minimal_documents, write_tree):
        minimal_documents["/v1/workspaces/de/context/index.json"]["nextPage"] = (
            "/v1/workspaces/de/context/pages/2.json"
        )
        result = runner.invoke(main, ["validate", "--content-dir", write_tree(minimal_documents)])
        assert result.exit_code == 1
        assert "nextPage chain broken" in result.output
        assert "1 error(s)" in result.output

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(main, ["validate", "--content-dir", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_strict_mode(self, runner, minimal_documents, write_tree, pack_factory):
        minimal_documents["/v1/packs/pack-002.json"] = pack_factory("pack-002")
        tree = write_tree(minimal_documents)

        lenient = runner.invoke(main, ["validate", "--content-dir", tree])
        assert lenient.exit_code == 0
        assert "Orphan pack" in lenient.output

        strict = runner.invoke(main, ["validate", "--content-dir", tree, "--strict"])
        assert strict.exit_code == 1

    def test_require_fallback_locale(self, runner, minimal_documents, write_tree):
        minimal_documents["/v1/packs/pack-001.json"]["title_i18n"] = {"de": "Hallo"}
        tree = write_tree(minimal_documents)

        assert runner.invoke(main, ["validate", "-c", tree]).exit_code == 0
        result = runner.invoke(main, ["validate", "-c", tree, "--require-fallback-locale"])
        assert result.exit_code == 1
        assert "fallback locale" in result.output

    def test_report_written(self, runner, clean_tree, tmp_path):
        report_path = tmp_path / "out" / "report.json"
        result = runner.invoke(main, [
            "validate", "--content-dir", clean_tree, "--report", str(report_path)
        ])
        assert result.exit_code == 0
        data = json.loads(report_path.read_text(encoding="utf-8"))
        assert data["is_valid"] is True
        assert data["documents_checked"] == 3

    def test_with_bundles(self, runner, doctor_documents, write_tree, write_bundles, bundle_definition):
        bundle_definition["filters"] = {"scenario": "airport"}
        result = runner.invoke(main, [
            "validate",
            "--content-dir", write_tree(doctor_documents),
            "--bundles-dir", write_bundles(bundle_definition),
        ])
        assert result.exit_code == 1
        assert "match no items" in result.output

    def test_config_file(self, runner, minimal_documents, write_tree, tmp_path):
        minimal_documents["/v1/packs/pack-001.json"]["title_i18n"] = {"en": "Hello"}
        config = tmp_path / "config.yaml"
        config.write_text("fallback_locale: de\nrequire_fallback_locale: true\n", encoding="utf-8")
        result = runner.invoke(main, [
            "validate", "-c", write_tree(minimal_documents), "--config", str(config)
        ])
        assert result.exit_code == 1
        assert '"de"' in result.output

    def test_invalid_config_file(self, runner, clean_tree, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("unknown_key: 1\n", encoding="utf-8")
        result = runner.invoke(main, ["validate", "-c", clean_tree, "--config", str(config)])
        assert result.exit_code == 1
        assert "Configuration error" in result.output

    def test_log_file_option(self, runner, clean_tree, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(shared_options, "configure_logging", lambda *args: calls.append(args))
        log_file = str(tmp_path / "logs" / "validate.log")
        result = runner.invoke(main, ["validate", "-c", clean_tree, "--log-file", log_file])
        assert result.exit_code == 0
        assert calls == [("info", log_file)]

    def test_log_file_from_config(self, runner, clean_tree, tmp_path, monkeypatch):
        calls = []
        monkeypatch.setattr(shared_options, "configure_logging", lambda *args: calls.append(args))
        config = tmp_path / "config.yaml"
        config.write_text("log_file: catalog.log\nlog_level: debug\n", encoding="utf-8")
        result = runner.invoke(main, ["validate", "-c", clean_tree, "--config", str(config)])
        assert result.exit_code == 0
        assert calls == [("debug", "catalog.log")]

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "content-catalog" in result.output
