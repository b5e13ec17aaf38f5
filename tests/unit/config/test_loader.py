"""Tests for sandboxkit.config.loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from sandboxkit.config.loader import (
    ConfigError,
    dict_to_config,
    expand_env_vars,
    find_project_config,
    load_config,
    merge_configs,
    parse_property_assignments,
)
from sandboxkit.config.models import DEFAULT_ALLOWED_OFFLINE_FOLDER, DEFAULT_SECRET_REPO_DIR

CONFIG = """\
project:
  name: vehicles-online
  version: "1.2.0"
properties:
  SANDBOX_SECRET_REPO_GIT_URL: git@gitlab.example.com:team/secrets.git
sandbox:
  web_app_secrets: /opt/vehicles-online/conf/vehiclesOnline.conf
"""


class TestLoadConfig:
    """Tests for load_config."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.project.name == tmp_path.name
        assert config.sandbox.web_app_secrets is None
        assert config.sandbox.secret_repo_dir == DEFAULT_SECRET_REPO_DIR
        assert config.sandbox.allowed_offline_folder == DEFAULT_ALLOWED_OFFLINE_FOLDER
        assert config.secret_repo_path == tmp_path / "target" / "secretRepo"
        assert config._config_sources == []

    def test_loads_project_file(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text(CONFIG)

        config = load_config(tmp_path)

        assert config.project.name == "vehicles-online"
        assert config.project.version == "1.2.0"
        assert config.properties["SANDBOX_SECRET_REPO_GIT_URL"].startswith("git@gitlab")
        assert config.sandbox.web_app_secrets == "/opt/vehicles-online/conf/vehiclesOnline.conf"
        assert config._config_sources == [f"project:{tmp_path / 'sandboxkit.yml'}"]

    def test_cli_properties_override_file(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text(CONFIG)

        config = load_config(
            tmp_path,
            cli_overrides={"properties": {"SANDBOX_SECRET_REPO_GIT_URL": "git@other:x.git"}},
        )

        assert config.properties["SANDBOX_SECRET_REPO_GIT_URL"] == "git@other:x.git"
        assert "cli" in config._config_sources

    def test_custom_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom.yml"
        custom.write_text("project:\n  name: custom\n")

        config = load_config(tmp_path, cli_config_path=custom)

        assert config.project.name == "custom"

    def test_missing_custom_config(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path, cli_config_path=tmp_path / "nope.yml")

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text("project: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(tmp_path)

    def test_non_mapping_document(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="mapping"):
            load_config(tmp_path)

    def test_wrongly_typed_value_is_rejected(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text("sandbox:\n  web_app_secrets: [a, b]\n")
        with pytest.raises(ConfigError, match="sandbox.web_app_secrets"):
            load_config(tmp_path)

    def test_unknown_key_is_only_a_warning(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text("sandbox:\n  web_app_secret: x\n")

        config = load_config(tmp_path)

        assert config.sandbox.web_app_secrets is None

    def test_env_var_expansion(self, tmp_path: Path, monkeypatch) -> None:
        monkeypatch.setenv("APP_SECRETS", "/opt/app/conf/app.conf")
        (tmp_path / "sandboxkit.yml").write_text(
            "sandbox:\n  web_app_secrets: ${APP_SECRETS}\n  app_base_dir: ${APP_DIR:-web}\n"
        )

        config = load_config(tmp_path)

        assert config.sandbox.web_app_secrets == "/opt/app/conf/app.conf"
        assert config.app_base_path == tmp_path / "web"


class TestFindProjectConfig:
    """Tests for find_project_config."""

    def test_prefers_hidden_file(self, tmp_path: Path) -> None:
        (tmp_path / "sandboxkit.yml").write_text("")
        (tmp_path / ".sandboxkit.yml").write_text("")
        assert find_project_config(tmp_path) == tmp_path / ".sandboxkit.yml"

    def test_none_when_absent(self, tmp_path: Path) -> None:
        assert find_project_config(tmp_path) is None


class TestHelpers:
    """Tests for merge, expansion and property parsing helpers."""

    def test_merge_is_deep(self) -> None:
        base = {"sandbox": {"a": "1", "b": "2"}, "x": 1}
        merged = merge_configs(base, {"sandbox": {"b": "3"}})
        assert merged == {"sandbox": {"a": "1", "b": "3"}, "x": 1}
        assert base["sandbox"]["b"] == "2"

    def test_expand_unset_var_without_default(self, monkeypatch) -> None:
        monkeypatch.delenv("SANDBOXKIT_UNSET_VAR", raising=False)
        assert expand_env_vars({"k": ["${SANDBOXKIT_UNSET_VAR}"]}) == {"k": [""]}

    def test_parse_property_assignments(self) -> None:
        props = parse_property_assignments(["A=1", "B=git@host:repo.git", "C="])
        assert props == {"A": "1", "B": "git@host:repo.git", "C": ""}

    def test_parse_property_without_equals(self) -> None:
        with pytest.raises(ConfigError):
            parse_property_assignments(["NOVALUE"])

    def test_dict_to_config_rejects_non_mapping_section(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError):
            dict_to_config({"sandbox": "oops"}, tmp_path)

    def test_absolute_paths_are_kept(self, tmp_path: Path) -> None:
        config = dict_to_config({"sandbox": {"app_base_dir": "/srv/app"}}, tmp_path)
        assert config.app_base_path == Path("/srv/app")
