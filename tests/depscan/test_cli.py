"""Tests for the depscan CLI."""

from __future__ import annotations

import json
import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from depscan.cli import _split_managers, main
from depscan.core.logging import setup_logging

SPEC_EXAMPLE = """\
source 'https://cdn.example/specs'
pod 'A', '1.2.3'
pod 'B', :git => 'https://github.com/acct/repo.git', :tag => 'v2.0'
pod 'C', :path => '../local'
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def _no_logging_setup():
    with patch("depscan.cli.setup_logging"):
        yield


@pytest.fixture
def repo(tmp_path):
    (tmp_path / "Podfile").write_text(SPEC_EXAMPLE)
    (tmp_path / "Podfile.lock").write_text("PODS:\n")
    (tmp_path / ".python-version").write_text("3.12.1\n")
    return tmp_path


class TestSplitManagers:
    def test_none(self):
        assert _split_managers(()) is None

    def test_repeated_and_comma_separated(self):
        assert _split_managers(("cocoapods,pyenv", "conan", " ,")) == [
            "cocoapods",
            "pyenv",
            "conan",
        ]


class TestScanCommand:
    def test_json_output(self, runner, repo):
        result = runner.invoke(main, ["scan", str(repo), "--json", "-m", "cocoapods"])
        assert result.exit_code == 0, result.output
        (podfile,) = json.loads(result.output)
        assert podfile["manager"] == "cocoapods"
        assert podfile["package_file"] == "Podfile"
        assert podfile["lock_files"] == ["Podfile.lock"]

        a, b, c = podfile["deps"]
        assert a == {
            "kind": "registry",
            "package_name": "A",
            "datasource": "pod",
            "current_value": "1.2.3",
            "group_name": "A",
            "registry_urls": ["https://cdn.example/specs"],
            "commit_message_topic": None,
            "line_number": 1,
        }
        assert b["kind"] == "git"
        assert b["package_name"] == "acct/repo"
        assert b["datasource"] == "github-tags"
        assert c["skip_reason"] == "path-dependency"

    def test_human_output(self, runner, repo):
        result = runner.invoke(main, ["scan", str(repo)])
        assert result.exit_code == 0, result.output
        assert "Found 4 dependencies in 2 manifest(s)" in result.output
        assert "Podfile  (cocoapods)" in result.output
        assert "A 1.2.3  [pod]" in result.output
        assert "B v2.0  [github-tags: acct/repo]" in result.output
        assert "C  (skipped: path-dependency)" in result.output
        assert "lock file: Podfile.lock" in result.output
        assert "python 3.12.1  [docker]" in result.output

    def test_managers_from_env(self, runner, repo):
        result = runner.invoke(
            main, ["scan", str(repo), "--json"], env={"DEPSCAN_MANAGERS": "pyenv"}
        )
        assert result.exit_code == 0, result.output
        assert [f["manager"] for f in json.loads(result.output)] == ["pyenv"]

    def test_identical_output_on_rerun(self, runner, repo):
        first = runner.invoke(main, ["scan", str(repo), "--json"])
        second = runner.invoke(main, ["scan", str(repo), "--json"])
        assert first.output == second.output

    def test_empty_repo(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path)])
        assert result.exit_code == 0
        assert "No dependencies found." in result.output

    def test_missing_directory(self, runner, tmp_path):
        result = runner.invoke(main, ["scan", str(tmp_path / "nope")])
        assert result.exit_code == 1
        assert "is not a directory" in result.output

    def test_unknown_manager(self, runner, repo):
        result = runner.invoke(main, ["scan", str(repo), "-m", "gradle"])
        assert result.exit_code == 2
        assert "Unknown manager 'gradle'" in result.output


class TestExtractCommand:
    def test_single_file(self, runner, repo):
        result = runner.invoke(
            main, ["extract", str(repo / "Podfile"), "-m", "cocoapods", "--json"]
        )
        assert result.exit_code == 0, result.output
        (podfile,) = json.loads(result.output)
        assert len(podfile["deps"]) == 3

    def test_nothing_recognizable(self, runner, tmp_path):
        f = tmp_path / "Podfile"
        f.write_text("platform :ios, '13.0'\n")
        result = runner.invoke(main, ["extract", str(f), "-m", "cocoapods"])
        assert result.exit_code == 0
        assert "No dependencies found." in result.output

    def test_unknown_manager(self, runner, repo):
        result = runner.invoke(main, ["extract", str(repo / "Podfile"), "-m", "nope"])
        assert result.exit_code == 2


class TestManagersCommand:
    def test_lists_managers(self, runner):
        result = runner.invoke(main, ["managers"])
        assert result.exit_code == 0
        assert "cocoapods: **/Podfile" in result.output
        assert "conan: **/conanfile.txt  (disabled by default)" in result.output


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore(self):
        yield
        logging.getLogger().handlers.clear()

    def test_level_from_env(self, monkeypatch):
        monkeypatch.setenv("DEPSCAN_LOG_LEVEL", "warning")
        monkeypatch.setenv("DEPSCAN_LOG_FORMAT", "json")
        setup_logging()
        assert logging.getLogger("depscan").level == logging.WARNING

    def test_explicit_level_overrides_env(self, monkeypatch):
        monkeypatch.setenv("DEPSCAN_LOG_LEVEL", "ERROR")
        setup_logging("DEBUG")
        assert logging.getLogger("depscan").level == logging.DEBUG
