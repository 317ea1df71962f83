"""
Tests for the pkgdocs CLI — end to end through main()
"""

import json

import pytest

from pkgdocs.cli import EXIT_ERROR, EXIT_NOT_FOUND, EXIT_OK, main
from pkgdocs.commands import get_registered_commands


@pytest.fixture
def run(docs_env, tmp_path, capsys):
    """Run main() against the sample store; returns (status, stdout, stderr)."""
    def _run(*argv):
        status = main(["--project", str(tmp_path), "--store", str(docs_env.root)] + list(argv))
        captured = capsys.readouterr()
        return status, captured.out, captured.err
    return _run


class TestDocsCommands:

    def test_registered(self, run):
        run("search", "elm")
        assert get_registered_commands() == ["search", "latest", "versions", "overview", "module", "config"]

    def test_search_text(self, run):
        status, out, _ = run("--format", "text", "search", "elm")
        assert status == EXIT_OK
        assert out == "elm/core\nelm/json\n"

    def test_latest(self, run):
        status, out, _ = run("latest", "elm/core")
        assert status == EXIT_OK
        assert out.strip() == "2.0.0-beta.1"

    def test_latest_link(self, run):
        _, out, _ = run("latest", "elm/core", "--link")
        assert out.strip() == "/package/elm%2Fcore/version/2.0.0-beta.1/overview"

    def test_versions_structured_by_default(self, run):
        _, out, _ = run("versions", "elm/core")
        assert json.loads(out) == ["2.0.0-beta.1", "1.0.10", "1.0.5", "1.0.0"]

    def test_overview_defaults_to_latest(self, run):
        _, out, _ = run("--format", "structured", "overview", "elm/json")
        assert json.loads(out)["version"] == "1.1.3"

    def test_module_markup_printed_as_json(self, run):
        _, out, _ = run("--format", "markup", "module", "elm/core", "1.0.5", "Maybe")
        payload = json.loads(out)
        assert payload["template"] == "package_module"
        assert payload["context"]["module_name"] == "Maybe"

    def test_format_from_config(self, run, monkeypatch):
        monkeypatch.setenv("PKGDOCS_FORMAT", "text")
        _, out, _ = run("overview", "elm/json", "1.1.3")
        assert out.strip() == "# JSON\n\nEncode and decode."


class TestExitCodes:

    def test_unknown_package(self, run):
        status, out, err = run("latest", "elm/html")
        assert status == EXIT_NOT_FOUND
        assert out == ""
        assert "Not found: elm/html" in err

    def test_unknown_module(self, run):
        status, _, err = run("module", "elm/core", "1.0.5", "List")
        assert status == EXIT_NOT_FOUND
        assert "Module 'List' not found" in err

    def test_malformed_metadata(self, run, docs_env):
        docs_env.add_package("bad/meta", "1.0.0", metadata="{oops")
        status, _, err = run("overview", "bad/meta", "1.0.0")
        assert status == EXIT_ERROR
        assert err.startswith("Error:")

    def test_undecodable_docs(self, run, docs_env):
        version_dir = docs_env.add_package("bad/bytes", "1.0.0", modules=[])
        (version_dir / "docs.json").write_bytes(b"\xff")
        status, _, err = run("module", "bad/bytes", "1.0.0", "M")
        assert status == EXIT_ERROR
        assert err.startswith("Error:")

    def test_stray_directory_ignored(self, run, docs_env):
        (docs_env.root / "elm" / "json" / "tmp").mkdir()
        status, out, _ = run("latest", "elm/json")
        assert status == EXIT_OK
        assert out.strip() == "1.1.3"

    def test_invalid_config(self, run, monkeypatch):
        monkeypatch.setenv("PKGDOCS_UNRESOLVED", "sometimes")
        status, _, err = run("search", "elm")
        assert status == EXIT_ERROR
        assert "Unknown unresolved policy" in err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == EXIT_OK
        assert "usage" in capsys.readouterr().out


class TestConfigCommand:

    def test_set_and_show(self, run, tmp_path):
        status, out, _ = run("config", "--set", "docs.unresolved=placeholder")
        assert status == EXIT_OK
        assert "Set docs.unresolved = placeholder" in out
        assert (tmp_path / ".pkgdocs" / "config.yaml").exists()

        _, out, _ = run("config")
        assert "Unresolved symbols: placeholder" in out

    def test_set_without_equals(self, run):
        status, out, _ = run("config", "--set", "docs.unresolved")
        assert status == EXIT_ERROR
        assert "KEY=VALUE" in out

    def test_set_repairs_invalid_config(self, run, tmp_path):
        """An invalid project config does not block the config command."""
        (tmp_path / ".pkgdocs").mkdir()
        (tmp_path / ".pkgdocs" / "config.yaml").write_text("docs:\n  unresolved: sometimes\n")

        status, _, _ = run("search", "elm")
        assert status == EXIT_ERROR

        status, out, _ = run("config", "--set", "docs.unresolved=drop")
        assert status == EXIT_OK
        assert "Set docs.unresolved = drop" in out

        status, out, _ = run("--format", "text", "search", "elm")
        assert status == EXIT_OK
        assert out == "elm/core\nelm/json\n"
