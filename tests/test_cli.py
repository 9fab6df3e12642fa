"""Tests for the CLI commands."""

import json
from pathlib import Path

from typer.testing import CliRunner

from commitrules.cli import app

runner = CliRunner()


class TestVersion:
    def test_version_flag(self):
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "commitrules" in result.output


class TestCheck:
    def test_valid_message_option(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "-m", "feat(api): add x"])
        assert result.exit_code == 0

    def test_invalid_message_blocks(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "-m", "Feature: Added stuff."])
        assert result.exit_code == 1

    def test_message_file_with_comments(self, tmp_path: Path, monkeypatch, valid_message_text):
        monkeypatch.chdir(tmp_path)
        msg_file = tmp_path / "COMMIT_EDITMSG"
        msg_file.write_text(valid_message_text + "# Please enter the commit message\n")
        result = runner.invoke(app, ["check", str(msg_file)])
        assert result.exit_code == 0

    def test_stdin(self, tmp_path: Path, monkeypatch, invalid_message_text):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check"], input=invalid_message_text)
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", str(tmp_path / "nope")])
        assert result.exit_code == 2

    def test_json_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "--format", "json", "-m", "feat(web): add x"])
        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert [f["rule"] for f in data["findings"]] == ["scope-enum"]

    def test_bad_format(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "--format", "sarif", "-m", "feat: x"])
        assert result.exit_code == 2

    def test_warning_allowed_unless_fail_on_warnings(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".commitrules.toml").write_text('[rules.scope-enum]\nseverity = "warning"\n')
        result = runner.invoke(app, ["check", "-m", "feat(web): add x"])
        assert result.exit_code == 0
        result = runner.invoke(app, ["check", "--fail-on-warnings", "-m", "feat(web): add x"])
        assert result.exit_code == 1

    def test_config_error_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".commitrules.toml").write_text("[rules.header-max-length]\nlimit = 0\n")
        result = runner.invoke(app, ["check", "-m", "feat: x"])
        assert result.exit_code == 2

    def test_multiple_scopes_accepted(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["check", "-m", "feat(api,ui): add login form"])
        assert result.exit_code == 0

    def test_yaml_rule_with_numeric_name_exit_2(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        rules_dir = tmp_path / ".commitrules-rules"
        rules_dir.mkdir()
        (rules_dir / "bad.yaml").write_text("- name: 123\n  limit: 5\n")
        result = runner.invoke(app, ["check", "-m", "feat: x"])
        assert result.exit_code == 2


class TestRulesCommand:
    def test_lists_preset(self, tmp_path: Path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["rules"])
        assert result.exit_code == 0
        assert "type-enum" in result.output
        assert "body-max-line-length" in result.output
        assert "('feat'" not in result.output


class TestInit:
    def test_creates_config(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_git_repo / ".commitrules.toml").exists()

    def test_refuses_overwrite(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        (tmp_git_repo / ".commitrules.toml").write_text("existing")
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 1

    def test_generated_config_loads(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        runner.invoke(app, ["init", "--full"])
        result = runner.invoke(app, ["check", "-m", "fix(db): close pool"])
        assert result.exit_code == 0


class TestInstallUninstall:
    def test_install_creates_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        result = runner.invoke(app, ["install"])
        assert result.exit_code == 0
        hook = tmp_git_repo / ".git" / "hooks" / "commit-msg"
        assert hook.exists()
        assert "commitrules check" in hook.read_text()

    def test_uninstall_removes_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        runner.invoke(app, ["install"])
        result = runner.invoke(app, ["uninstall"])
        assert result.exit_code == 0
        assert not (tmp_git_repo / ".git" / "hooks" / "commit-msg").exists()

    def test_install_refuses_existing(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["install"])
        assert result.exit_code == 1

    def test_install_force(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["install", "--force"])
        assert result.exit_code == 0

    def test_uninstall_foreign_hook(self, tmp_git_repo: Path, monkeypatch):
        monkeypatch.chdir(tmp_git_repo)
        hooks_dir = tmp_git_repo / ".git" / "hooks"
        hooks_dir.mkdir(parents=True, exist_ok=True)
        (hooks_dir / "commit-msg").write_text("#!/bin/sh\necho existing\n")
        result = runner.invoke(app, ["uninstall"])
        assert result.exit_code == 1
