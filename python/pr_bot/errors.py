from __future__ import annotations


class ConfigError(ValueError):
    """Required configuration is missing or invalid."""


class GlobError(OSError):
    """A snapshot directory could not be enumerated."""


class PluginError(RuntimeError):
    def __init__(self, plugin_name: str, cause: BaseException) -> None:
        super().__init__(
            f"The '{plugin_name}' threw an error while running: '{cause}'"
        )
        self.plugin_name = plugin_name


class GithubApiError(RuntimeError):
    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status
