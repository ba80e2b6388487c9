from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True)
class RepoDetails:
    owner: str
    repo: str


def parse_repo_slug(slug: str | None) -> RepoDetails | None:
    if not slug:
        return None
    parts = slug.split("/")
    if len(parts) != 2 or not all(parts):
        return None
    return RepoDetails(owner=parts[0], repo=parts[1])


@dataclass(frozen=True)
class TravisEnv:
    is_travis: bool = False
    is_pull_request: bool = False
    repo_details: RepoDetails | None = None
    # Target branch of the pull request, or the branch that was pushed.
    git_branch: str | None = None
    pull_request_sha: str | None = None
    pull_request_number: str | None = None
    is_successful_run: bool | None = None
    github_token: str | None = None

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> TravisEnv:
        env = os.environ if environ is None else environ
        pull_request = env.get("TRAVIS_PULL_REQUEST")
        test_result = env.get("TRAVIS_TEST_RESULT")
        return cls(
            is_travis=env.get("TRAVIS") == "true",
            is_pull_request=env.get("TRAVIS_EVENT_TYPE") == "pull_request",
            repo_details=parse_repo_slug(env.get("TRAVIS_REPO_SLUG")),
            git_branch=env.get("TRAVIS_BRANCH") or None,
            pull_request_sha=env.get("TRAVIS_PULL_REQUEST_SHA") or None,
            pull_request_number=(
                None if not pull_request or pull_request == "false" else pull_request
            ),
            is_successful_run=None if test_result is None else test_result == "0",
            github_token=env.get("GITHUB_TOKEN") or None,
        )

    def describe(self) -> dict[str, str]:
        slug = (
            f"{self.repo_details.owner}/{self.repo_details.repo}"
            if self.repo_details
            else None
        )
        return {
            "is_travis": str(self.is_travis),
            "is_pull_request": str(self.is_pull_request),
            "repo_details": str(slug),
            "git_branch": str(self.git_branch),
            "pull_request_sha": str(self.pull_request_sha),
            "pull_request_number": str(self.pull_request_number),
            "github_token": "set" if self.github_token else "unset",
        }
