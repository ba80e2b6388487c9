from __future__ import annotations

import json
from pathlib import Path

import pytest

from pr_bot.config import DEFAULT_BUILD_COMMAND, load_config
from pr_bot.env import RepoDetails
from pr_bot.errors import ConfigError
from pr_bot_size.compare import SizePlugin
from pr_bot_size.inventory import GlobOptions


def _write_config(tmp_path: Path, payload: object) -> Path:
    path = tmp_path / "pr-bot.config.json"
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_config_builds_size_plugin(tmp_path: Path) -> None:
    path = _write_config(
        tmp_path,
        {
            "repo_details": {"owner": "org", "repo": "project"},
            "override_base_branch": "develop",
            "bot_username": "pr-bot",
            "plugins": [
                {
                    "type": "size",
                    "glob_pattern": "build/**/*.{js,css}",
                    "glob_options": {"dot": True, "ignore": ["**/*.map"]},
                    "path_transform": {"pattern": r"-[0-9a-f]{8}\.", "replacement": "."},
                }
            ],
        },
    )

    config = load_config(path)

    assert config.repo_details == RepoDetails(owner="org", repo="project")
    assert config.build_command == DEFAULT_BUILD_COMMAND
    assert config.override_base_branch == "develop"
    assert config.bot_username == "pr-bot"
    plugin = config.plugins[0]
    assert isinstance(plugin, SizePlugin)
    assert plugin.glob_pattern == "build/**/*.{js,css}"
    assert plugin.glob_options == GlobOptions(dot=True, ignore=("**/*.map",))
    assert plugin.path_transform is not None
    assert plugin.path_transform("build/app-0123abcd.js") == "build/app.js"


def test_load_config_defaults_to_working_directory(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    _write_config(tmp_path, {"build_command": "make", "plugins": [{"type": "size", "glob_pattern": "*"}]})
    monkeypatch.chdir(tmp_path)

    config = load_config()

    assert config.build_command == "make"
    assert config.repo_details is None


def test_load_config_rejects_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="Unable to find the config file"):
        load_config(tmp_path / "missing.json")


def test_load_config_rejects_invalid_json(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError, match="problem occurred"):
        load_config(path)


def test_load_config_rejects_unknown_plugin_type(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"plugins": [{"type": "lighthouse"}]})
    with pytest.raises(ConfigError, match="unknown plugin type"):
        load_config(path)


def test_load_config_requires_plugins(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"plugins": []})
    with pytest.raises(ConfigError, match="plugins"):
        load_config(path)


def test_size_plugin_config_requires_glob_pattern(tmp_path: Path) -> None:
    path = _write_config(tmp_path, {"plugins": [{"type": "size"}]})
    with pytest.raises(ConfigError, match="glob_pattern"):
        load_config(path)
