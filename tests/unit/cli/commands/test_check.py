"""Tests for check command."""

from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from sandboxkit.cli.commands.check import CheckCommand
from sandboxkit.cli.exit_codes import EXIT_CHECK_FAILED, EXIT_INVALID_USAGE, EXIT_SUCCESS
from sandboxkit.config.models import SandboxConfig, SandboxKitConfig

GIT_URL = "git@host.example:org/repo.git"


def _config(tmp_path: Path, secrets: Path) -> SandboxKitConfig:
    return SandboxKitConfig(
        project_root=tmp_path,
        properties={"SANDBOX_SECRET_REPO_GIT_URL": GIT_URL},
        sandbox=SandboxConfig(web_app_secrets=str(secrets)),
    )


class TestCheckCommand:
    """Tests for CheckCommand."""

    def test_command_name(self) -> None:
        assert CheckCommand().name == "check"

    def test_requires_config(self) -> None:
        assert CheckCommand().execute(Namespace()) == EXIT_INVALID_USAGE

    def test_online_success(self, tmp_path: Path, fake_runner, reporter) -> None:
        secrets = tmp_path / "app.conf"
        secrets.write_text("s")
        cmd = CheckCommand(runner=fake_runner, reporter=reporter, environ={})

        assert cmd.execute(Namespace(), _config(tmp_path, secrets)) == EXIT_SUCCESS
        assert fake_runner.ran("git clone")

    def test_ssh_failure_returns_check_failed(self, tmp_path: Path, fake_runner, reporter, status_stream) -> None:
        fake_runner.on("ssh -T", returncode=255)
        cmd = CheckCommand(runner=fake_runner, reporter=reporter, environ={})

        result = cmd.execute(Namespace(), _config(tmp_path, tmp_path / "app.conf"))

        assert result == EXIT_CHECK_FAILED
        assert "public key" in status_stream.getvalue()
        assert not fake_runner.ran("clone")

    def test_missing_source_returns_check_failed(self, tmp_path: Path, fake_runner, reporter) -> None:
        cmd = CheckCommand(runner=fake_runner, reporter=reporter, environ={})
        result = cmd.execute(Namespace(), _config(tmp_path, tmp_path / "missing.conf"))
        assert result == EXIT_CHECK_FAILED
