"""Tests for config generation and secrets deployment."""

from __future__ import annotations

from pathlib import Path

import pytest

from sandboxkit.core.subprocess_runner import SubprocessRunner
from sandboxkit.sandbox.deploy import (
    DeployOutcome,
    deploy_web_app_secrets,
    generate_config_files,
    materialize_and_deploy,
    playbook_command,
)
from sandboxkit.sandbox.environment import OfflineMode, OnlineMode
from sandboxkit.sandbox.errors import (
    ConfigGenFailedError,
    CopyIOError,
    CopySourceMissingError,
)

ONLINE = OnlineMode(git_url="git@host.example:org/repo.git", git_host="host.example")
OFFLINE = OfflineMode(folder="/opt")


@pytest.fixture
def secrets_file(tmp_path: Path) -> Path:
    source = tmp_path / "opt" / "my-app" / "conf" / "myApp.conf"
    source.parent.mkdir(parents=True)
    source.write_text("secret=1\n")
    return source


class TestGenerateConfigFiles:
    """Tests for generate_config_files."""

    def test_online_runs_playbook(self, tmp_path: Path, fake_runner, reporter) -> None:
        repo = tmp_path / "target" / "secretRepo"

        ran = generate_config_files(ONLINE, repo, fake_runner, reporter, cwd=tmp_path)

        assert ran is True
        assert fake_runner.calls == [playbook_command(repo)]
        assert fake_runner.cwds == [str(tmp_path)]

    def test_unstartable_playbook_is_config_gen_failure(self, tmp_path: Path, reporter) -> None:
        repo = tmp_path / "target" / "secretRepo"
        repo.mkdir(parents=True)
        gapply = repo / "gapply"
        gapply.write_bytes(b"\x7f\x00garbage")
        gapply.chmod(0o755)

        with pytest.raises(ConfigGenFailedError):
            generate_config_files(ONLINE, repo, SubprocessRunner(), reporter, cwd=tmp_path)

    def test_playbook_command_shape(self, tmp_path: Path) -> None:
        repo = tmp_path / "secretRepo"
        assert playbook_command(repo) == [
            str(repo / "gapply"),
            "-i", str(repo / "inventory" / "sandbox"),
            str(repo / "sandbox.yml"),
            "-t", "sandbox",
        ]

    def test_offline_skips(self, tmp_path: Path, fake_runner, reporter, status_stream) -> None:
        ran = generate_config_files(OFFLINE, tmp_path, fake_runner, reporter)

        assert ran is False
        assert fake_runner.calls == []
        assert "Skipping the generate config files step" in status_stream.getvalue()

    def test_playbook_failure(self, tmp_path: Path, fake_runner, reporter) -> None:
        fake_runner.on("gapply", returncode=2, stderr="ERROR! the playbook could not be found")

        with pytest.raises(ConfigGenFailedError) as exc_info:
            generate_config_files(ONLINE, tmp_path, fake_runner, reporter)

        assert "playbook could not be found" in exc_info.value.message


class TestDeployWebAppSecrets:
    """Tests for deploy_web_app_secrets."""

    def test_copies_when_absent(self, tmp_path: Path, secrets_file: Path, reporter) -> None:
        app = tmp_path / "app"

        outcome = deploy_web_app_secrets(str(secrets_file), app, reporter)

        assert outcome is DeployOutcome.COPIED
        assert (app / "conf" / "myApp.conf").read_text() == "secret=1\n"

    def test_never_overwrites_existing(self, tmp_path: Path, secrets_file: Path, reporter, status_stream) -> None:
        app = tmp_path / "app"
        target = app / "conf" / "myApp.conf"
        target.parent.mkdir(parents=True)
        target.write_text("local edits\n")

        for _ in range(3):
            outcome = deploy_web_app_secrets(str(secrets_file), app, reporter)
            assert outcome is DeployOutcome.SKIPPED

        assert target.read_text() == "local edits\n"
        assert "skipping deploy web app secrets step" in status_stream.getvalue()

    def test_existing_destination_skips_even_without_source(self, tmp_path: Path, reporter) -> None:
        app = tmp_path / "app"
        (app / "conf").mkdir(parents=True)
        (app / "conf" / "myApp.conf").write_text("x")

        outcome = deploy_web_app_secrets(str(tmp_path / "missing" / "myApp.conf"), app, reporter)

        assert outcome is DeployOutcome.SKIPPED

    def test_missing_source(self, tmp_path: Path, reporter, status_stream) -> None:
        with pytest.raises(CopySourceMissingError):
            deploy_web_app_secrets(str(tmp_path / "missing.conf"), tmp_path / "app", reporter)
        assert "FAILED." in status_stream.getvalue()
        assert not (tmp_path / "app" / "conf" / "missing.conf").exists()

    def test_copy_io_error(self, tmp_path: Path, secrets_file: Path, reporter) -> None:
        app = tmp_path / "app"
        # A file where the conf directory should be makes mkdir fail
        app.mkdir()
        (app / "conf").write_text("not a directory")

        with pytest.raises(CopyIOError):
            deploy_web_app_secrets(str(secrets_file), app, reporter)


class TestMaterializeAndDeploy:
    """Tests for materialize_and_deploy."""

    def test_online_generates_then_copies(self, tmp_path: Path, secrets_file: Path, fake_runner, reporter) -> None:
        outcome = materialize_and_deploy(
            ONLINE, tmp_path / "repo", str(secrets_file), tmp_path / "app", fake_runner, reporter
        )
        assert outcome is DeployOutcome.COPIED
        assert fake_runner.ran("gapply")

    def test_offline_only_copies(self, tmp_path: Path, secrets_file: Path, fake_runner, reporter) -> None:
        outcome = materialize_and_deploy(
            OFFLINE, tmp_path / "repo", str(secrets_file), tmp_path / "app", fake_runner, reporter
        )
        assert outcome is DeployOutcome.COPIED
        assert fake_runner.calls == []

    def test_config_failure_aborts_copy(self, tmp_path: Path, secrets_file: Path, fake_runner, reporter) -> None:
        fake_runner.on("gapply", returncode=1)
        with pytest.raises(ConfigGenFailedError):
            materialize_and_deploy(
                ONLINE, tmp_path / "repo", str(secrets_file), tmp_path / "app", fake_runner, reporter
            )
        assert not (tmp_path / "app" / "conf").exists()
