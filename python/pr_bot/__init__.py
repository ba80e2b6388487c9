"""Pull-request bot that runs comparison plugins on before/after builds."""

from .errors import ConfigError, GithubApiError, GlobError, PluginError
from .plugins import Plugin, PluginResult, SnapshotPaths, run_plugins

__all__ = [
    "ConfigError",
    "GithubApiError",
    "GlobError",
    "Plugin",
    "PluginError",
    "PluginResult",
    "SnapshotPaths",
    "run_plugins",
]
