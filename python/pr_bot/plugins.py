from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Protocol

from .errors import ConfigError, PluginError

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class SnapshotPaths:
    before_path: Path
    after_path: Path


@dataclass(frozen=True)
class PluginResult:
    pretty_log: str | None = None
    markdown_log: str | None = None


class Plugin(Protocol):
    name: str

    def run(self, snapshots: SnapshotPaths) -> PluginResult: ...


def run_plugins(
    plugins: Iterable[Plugin], snapshots: SnapshotPaths
) -> dict[str, PluginResult]:
    """Run plugins in order, keyed by name; the first failure aborts the run."""
    results: dict[str, PluginResult] = {}
    LOGGER.info("Running Plugins....")
    for plugin in plugins:
        name = getattr(plugin, "name", None)
        if not name:
            raise ConfigError(
                "One of the plugins has failed to define a name property. "
                "This is required for reporting."
            )
        LOGGER.info("  %s", name)
        try:
            result = plugin.run(snapshots)
        except Exception as exc:
            raise PluginError(name, exc) from exc
        results[name] = result
    return results
