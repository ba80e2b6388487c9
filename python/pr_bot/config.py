from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from pr_bot_size.compare import SizePlugin
from pr_bot_size.inventory import GlobOptions, regex_path_transform

from .env import RepoDetails
from .errors import ConfigError
from .plugins import Plugin

DEFAULT_CONFIG_NAME = "pr-bot.config.json"
DEFAULT_BUILD_COMMAND = "npm install && npm run build"


@dataclass(frozen=True)
class BotConfig:
    plugins: list[Plugin]
    repo_details: RepoDetails | None = None
    build_command: str = DEFAULT_BUILD_COMMAND
    override_base_branch: str | None = None
    bot_username: str | None = None
    source_path: Path | None = field(default=None, compare=False)


def parse_glob_options(payload: Any, where: str) -> GlobOptions:
    if payload is None:
        return GlobOptions()
    if not isinstance(payload, dict):
        raise ConfigError(f"{where}: glob_options must be an object")
    ignore = payload.get("ignore") or []
    if isinstance(ignore, str):
        ignore = [ignore]
    if not isinstance(ignore, list) or not all(isinstance(item, str) for item in ignore):
        raise ConfigError(f"{where}: glob_options.ignore must be a list of strings")
    return GlobOptions(dot=bool(payload.get("dot", False)), ignore=tuple(ignore))


def _size_plugin(payload: dict[str, Any], where: str) -> Plugin:
    glob_pattern = payload.get("glob_pattern")
    if not isinstance(glob_pattern, str) or not glob_pattern:
        raise ConfigError(f"{where}: size plugin requires a 'glob_pattern' string")

    path_transform = None
    transform = payload.get("path_transform")
    if transform is not None:
        if not isinstance(transform, dict) or not isinstance(transform.get("pattern"), str):
            raise ConfigError(
                f"{where}: path_transform must be an object with a 'pattern' string"
            )
        path_transform = regex_path_transform(
            transform["pattern"], str(transform.get("replacement", ""))
        )

    return SizePlugin(
        glob_pattern=glob_pattern,
        glob_options=parse_glob_options(payload.get("glob_options"), where),
        path_transform=path_transform,
    )


PLUGIN_FACTORIES: dict[str, Callable[[dict[str, Any], str], Plugin]] = {
    "size": _size_plugin,
}


def build_plugin(payload: Any, where: str) -> Plugin:
    if not isinstance(payload, dict):
        raise ConfigError(f"{where}: each plugin entry must be an object")
    plugin_type = payload.get("type")
    factory = PLUGIN_FACTORIES.get(plugin_type) if isinstance(plugin_type, str) else None
    if factory is None:
        raise ConfigError(
            f"{where}: unknown plugin type {plugin_type!r}; "
            f"expected one of: {', '.join(sorted(PLUGIN_FACTORIES))}"
        )
    return factory(payload, where)


def _optional_str(payload: dict[str, Any], key: str, path: Path) -> str | None:
    value = payload.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"{path}: {key} must be a string")
    return value


def parse_config(payload: Any, path: Path) -> BotConfig:
    if not isinstance(payload, dict):
        raise ConfigError(f"{path}: configuration must be an object")

    plugins = payload.get("plugins")
    if not isinstance(plugins, list) or not plugins:
        raise ConfigError(f"{path}: plugins must be a non-empty array")

    repo_details = None
    raw_repo = payload.get("repo_details")
    if raw_repo is not None:
        if (
            not isinstance(raw_repo, dict)
            or not isinstance(raw_repo.get("owner"), str)
            or not isinstance(raw_repo.get("repo"), str)
        ):
            raise ConfigError(f"{path}: repo_details must have 'owner' and 'repo' strings")
        repo_details = RepoDetails(owner=raw_repo["owner"], repo=raw_repo["repo"])

    return BotConfig(
        plugins=[
            build_plugin(entry, f"{path}: plugins[{idx}]")
            for idx, entry in enumerate(plugins)
        ],
        repo_details=repo_details,
        build_command=_optional_str(payload, "build_command", path) or DEFAULT_BUILD_COMMAND,
        override_base_branch=_optional_str(payload, "override_base_branch", path),
        bot_username=_optional_str(payload, "bot_username", path),
        source_path=path,
    )


def load_config(path: Path | str | None = None) -> BotConfig:
    config_path = Path(path) if path is not None else Path.cwd() / DEFAULT_CONFIG_NAME
    if not config_path.is_file():
        raise ConfigError(f"Unable to find the config file: '{config_path}'.")
    try:
        payload = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ConfigError(
            f"A problem occurred reading the config file '{config_path}': {exc}"
        ) from exc
    return parse_config(payload, config_path)
