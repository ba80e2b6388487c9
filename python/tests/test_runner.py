from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from pr_bot.config import BotConfig
from pr_bot.env import RepoDetails, TravisEnv
from pr_bot.errors import ConfigError
from pr_bot.plugins import PluginResult, SnapshotPaths
from pr_bot.runner import (
    NO_MARKDOWN_OUTPUT,
    publish_results,
    render_github_comment,
    run_bot,
)
from pr_bot_size.compare import SizePlugin


class _FakeController:
    def __init__(self, owner: str, repo: str) -> None:
        self.owner = owner
        self.repo = repo
        self.comments: list[tuple[Any, str]] = []
        self.deleted_for: list[tuple[Any, str]] = []

    def get_repo_details(self) -> dict[str, str]:
        return {"clone_url": f"https://example.invalid/{self.owner}/{self.repo}.git"}

    def post_issue_comment(self, number: Any, comment: str) -> None:
        self.comments.append((number, comment))

    def delete_previous_issue_comments(self, number: Any, bot_name: str) -> int:
        self.deleted_for.append((number, bot_name))
        return 0


class _RecordingSink:
    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def post_comment(self, text: str) -> None:
        self.events.append(("post", text))

    def delete_prior_comments(self, filter_by: str) -> int:
        self.events.append(("delete", filter_by))
        return 1


def _fake_snapshots(*, clone_url: str, config: BotConfig, env: TravisEnv, workdir: Path) -> SnapshotPaths:
    before = workdir / "before"
    after = workdir / "after"
    before.mkdir()
    after.mkdir()
    (before / "app.js").write_bytes(b"x" * 100)
    (after / "app.js").write_bytes(b"x" * 150)
    (after / "new.js").write_bytes(b"x" * 10)
    return SnapshotPaths(before_path=before, after_path=after)


def _config(**kwargs: Any) -> BotConfig:
    return BotConfig(plugins=[SizePlugin(glob_pattern="**/*.js")], **kwargs)


def test_render_github_comment_sections_per_plugin() -> None:
    comment = render_github_comment(
        {"Size": PluginResult(markdown_log="table"), "Quiet": PluginResult()}
    )
    assert comment == f"### Size\n\ntable\n\n### Quiet\n\n{NO_MARKDOWN_OUTPUT}\n\n"


def test_publish_results_deletes_bot_comments_first() -> None:
    sink = _RecordingSink()
    publish_results({"Size": PluginResult(markdown_log="table")}, sink, "pr-bot")
    assert [event for event, _ in sink.events] == ["delete", "post"]
    assert sink.events[0] == ("delete", "pr-bot")


def test_publish_results_without_bot_username_only_posts() -> None:
    sink = _RecordingSink()
    publish_results({"Size": PluginResult(markdown_log="table")}, sink)
    assert [event for event, _ in sink.events] == ["post"]


def test_run_bot_requires_repo_details(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="repo_details"):
        run_bot(_config(), TravisEnv(), controller_factory=_FakeController, snapshot_fn=_fake_snapshots)


def test_run_bot_prints_results_outside_pull_requests(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    controllers: list[_FakeController] = []

    def factory(owner: str, repo: str) -> _FakeController:
        controllers.append(_FakeController(owner, repo))
        return controllers[-1]

    results = run_bot(
        _config(repo_details=RepoDetails(owner="org", repo="project")),
        TravisEnv(),
        controller_factory=factory,
        snapshot_fn=_fake_snapshots,
        workdir=tmp_path,
    )

    out = capsys.readouterr().out
    assert "Changed File Sizes" in out
    assert "app.js" in out
    assert "+50%" in out
    assert "new.js" in out
    assert controllers[0].comments == []
    assert list(results) == ["PR-Bot Size Plugin"]
    assert list(tmp_path.iterdir()) == []


def test_run_bot_posts_comment_for_pull_requests(tmp_path: Path) -> None:
    controllers: list[_FakeController] = []

    def factory(owner: str, repo: str) -> _FakeController:
        controllers.append(_FakeController(owner, repo))
        return controllers[-1]

    env = TravisEnv(
        is_travis=True,
        is_pull_request=True,
        repo_details=RepoDetails(owner="env-org", repo="env-project"),
        pull_request_number="42",
    )

    run_bot(
        _config(
            repo_details=RepoDetails(owner="org", repo="project"),
            bot_username="pr-bot",
        ),
        env,
        controller_factory=factory,
        snapshot_fn=_fake_snapshots,
        workdir=tmp_path,
    )

    controller = controllers[0]
    assert (controller.owner, controller.repo) == ("env-org", "env-project")
    assert controller.deleted_for == [("42", "pr-bot")]
    number, comment = controller.comments[0]
    assert number == "42"
    assert comment.startswith("### PR-Bot Size Plugin\n\n#### Changed File Sizes")
    assert "| app.js | 100 B | 150 B | +50.00% |" in comment
