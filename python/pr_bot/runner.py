from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Callable, Mapping, Protocol

from .config import BotConfig
from .env import TravisEnv
from .errors import ConfigError
from .github import GithubController, IssueCommentSink
from .plugins import PluginResult, SnapshotPaths, run_plugins
from .snapshots import prepare_snapshots

LOGGER = logging.getLogger(__name__)

NO_LOG_OUTPUT = "This plugin provided no log output."
NO_MARKDOWN_OUTPUT = "This plugin provided no markdown output."


class ReportSink(Protocol):
    def post_comment(self, text: str) -> None: ...

    def delete_prior_comments(self, filter_by: str) -> int: ...


ControllerFactory = Callable[[str, str], Any]
SnapshotFn = Callable[..., SnapshotPaths]


def render_github_comment(results: Mapping[str, PluginResult]) -> str:
    comment = ""
    for name, result in results.items():
        comment += f"### {name}\n\n"
        comment += result.markdown_log or NO_MARKDOWN_OUTPUT
        comment += "\n\n"
    return comment


def log_debug_info(results: Mapping[str, PluginResult]) -> None:
    LOGGER.info("Results from plugins")
    for name, result in results.items():
        LOGGER.info("  %s", name)
        if result.pretty_log:
            print("")
            print(result.pretty_log)
            print("")
        else:
            LOGGER.info("    %s", NO_LOG_OUTPUT)


def publish_results(
    results: Mapping[str, PluginResult],
    sink: ReportSink,
    bot_username: str | None = None,
) -> None:
    comment = render_github_comment(results)
    if bot_username:
        sink.delete_prior_comments(bot_username)
    sink.post_comment(comment)


def run_bot(
    config: BotConfig,
    env: TravisEnv,
    *,
    controller_factory: ControllerFactory | None = None,
    snapshot_fn: SnapshotFn = prepare_snapshots,
    workdir: Path | str | None = None,
) -> dict[str, PluginResult]:
    repo_details = env.repo_details or config.repo_details
    if repo_details is None:
        raise ConfigError(
            "Unable to get the Github 'repo_details' from Travis environment "
            "variable or the configuration file."
        )

    make_controller = controller_factory or (
        lambda owner, repo: GithubController(owner=owner, repo=repo, token=env.github_token)
    )
    controller = make_controller(repo_details.owner, repo_details.repo)
    clone_url = controller.get_repo_details()["clone_url"]

    with tempfile.TemporaryDirectory(prefix="pr-bot-", dir=workdir) as td:
        snapshots = snapshot_fn(clone_url=clone_url, config=config, env=env, workdir=Path(td))
        results = run_plugins(config.plugins, snapshots)

    if not env.is_travis or not env.is_pull_request:
        log_debug_info(results)
        return results

    if env.pull_request_number is None:
        raise ConfigError("Pull request builds require a 'TRAVIS_PULL_REQUEST' number.")
    publish_results(
        results,
        IssueCommentSink(controller, env.pull_request_number),
        config.bot_username,
    )
    return results
