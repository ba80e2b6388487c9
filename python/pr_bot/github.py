from __future__ import annotations

import json
import logging
import urllib.error
import urllib.request
from typing import Any

from .errors import ConfigError, GithubApiError

LOGGER = logging.getLogger(__name__)

GITHUB_API_BASE = "https://api.github.com"
STATUS_CONTEXT = "PR-Bot"
COMMENTS_PAGE_SIZE = 100


class GithubController:
    def __init__(
        self,
        *,
        owner: str,
        repo: str,
        token: str | None,
        api_base: str = GITHUB_API_BASE,
        timeout: float = 60.0,
    ) -> None:
        if not token:
            raise ConfigError("No 'GITHUB_TOKEN' environment variable defined.")
        self.owner = owner
        self.repo = repo
        self._token = token
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _request(self, endpoint: str, method: str = "GET", data: dict | None = None) -> Any:
        url = f"{self._api_base}{endpoint}"
        headers = {
            "Authorization": f"token {self._token}",
            "Accept": "application/vnd.github+json",
            "Content-Type": "application/json",
        }
        body = json.dumps(data).encode() if data is not None else None
        req = urllib.request.Request(url, data=body, headers=headers, method=method)

        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                raw = resp.read().decode()
        except urllib.error.HTTPError as e:
            error_body = e.read().decode() if e.fp else str(e)
            try:
                msg = json.loads(error_body).get("message", error_body)
            except (json.JSONDecodeError, AttributeError):
                msg = error_body
            raise GithubApiError(
                f"GitHub API error ({e.code}) on {method} {endpoint}: {msg}", status=e.code
            ) from e
        except urllib.error.URLError as e:
            raise GithubApiError(f"Network error on {method} {endpoint}: {e.reason}") from e
        return json.loads(raw) if raw.strip() else {}

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def get_repo_details(self) -> dict[str, Any]:
        return self._request(self._repo_path)

    def get_pr_details(self, number: int | str) -> dict[str, Any]:
        return self._request(f"{self._repo_path}/pulls/{number}")

    def get_branch_details(self, branch: str) -> dict[str, Any]:
        return self._request(f"{self._repo_path}/branches/{branch}")

    def post_issue_comment(self, number: int | str, comment: str) -> dict[str, Any]:
        # Pull requests are issues as far as comments are concerned.
        return self._request(
            f"{self._repo_path}/issues/{number}/comments",
            method="POST",
            data={"body": comment},
        )

    def post_state(self, sha: str, state: str) -> dict[str, Any]:
        return self._request(
            f"{self._repo_path}/statuses/{sha}",
            method="POST",
            data={
                "state": state,
                "context": STATUS_CONTEXT,
                "description": "All PR-Bot plugins passed the build.",
            },
        )

    def list_issue_comments(self, number: int | str) -> list[dict[str, Any]]:
        comments: list[dict[str, Any]] = []
        page = 1
        while True:
            batch = self._request(
                f"{self._repo_path}/issues/{number}/comments"
                f"?per_page={COMMENTS_PAGE_SIZE}&page={page}"
            )
            if not isinstance(batch, list):
                break
            comments.extend(batch)
            if len(batch) < COMMENTS_PAGE_SIZE:
                break
            page += 1
        return comments

    def delete_previous_issue_comments(self, number: int | str, bot_name: str) -> int:
        deleted = 0
        for comment in self.list_issue_comments(number):
            if (comment.get("user") or {}).get("login") != bot_name:
                continue
            self._request(
                f"{self._repo_path}/issues/comments/{comment['id']}", method="DELETE"
            )
            deleted += 1
        LOGGER.info("Deleted %d previous comments from '%s'.", deleted, bot_name)
        return deleted


class IssueCommentSink:
    def __init__(self, controller: GithubController, number: int | str) -> None:
        self._controller = controller
        self._number = number

    def post_comment(self, text: str) -> None:
        self._controller.post_issue_comment(self._number, text)

    def delete_prior_comments(self, filter_by: str) -> int:
        return self._controller.delete_previous_issue_comments(self._number, filter_by)
