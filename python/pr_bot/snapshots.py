from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .config import BotConfig
from .env import TravisEnv
from .plugins import SnapshotPaths

LOGGER = logging.getLogger(__name__)


def clone_revision(
    clone_url: str, destination: Path | str, revision: str | None = None
) -> Path:
    checkout = Path(destination)
    LOGGER.info("Cloning default branch into: '%s'.", checkout)
    _run(["git", "clone", clone_url, str(checkout)])
    if revision:
        _run(["git", "-C", str(checkout), "checkout", revision])
    return checkout


def run_build(build_command: str, cwd: Path | str) -> None:
    proc = subprocess.run(
        build_command,
        cwd=Path(cwd),
        shell=True,
        check=False,
        capture_output=True,
        text=True,
    )
    if proc.returncode != 0:
        detail = _truncate_err(proc.stderr or proc.stdout)
        raise RuntimeError(
            f"build command failed in {cwd}: {build_command}: exit code {proc.returncode}: {detail}"
        )


def prepare_snapshots(
    *,
    clone_url: str,
    config: BotConfig,
    env: TravisEnv,
    workdir: Path | str,
) -> SnapshotPaths:
    root = Path(workdir)
    root.mkdir(parents=True, exist_ok=True)
    before_path = clone_revision(clone_url, root / "before", config.override_base_branch)

    if not env.pull_request_sha:
        LOGGER.warning(
            "No 'TRAVIS_PULL_REQUEST_SHA' environment variable, "
            "so using the current directory for further testing."
        )
        after_path = Path.cwd()
    else:
        after_path = clone_revision(clone_url, root / "after", env.pull_request_sha)

    LOGGER.info("Building before and after versions with: '%s'.", config.build_command)
    try:
        run_build(config.build_command, before_path)
    except RuntimeError as exc:
        LOGGER.error(
            "Unable to run '%s' in the \"before\" version: %s", config.build_command, exc
        )

    try:
        run_build(config.build_command, after_path)
    except RuntimeError:
        LOGGER.error('Unable to run \'%s\' in the "after" version.', config.build_command)
        raise

    return SnapshotPaths(before_path=before_path, after_path=after_path)


def _run(command: Sequence[str]) -> None:
    proc = subprocess.run(command, check=False, capture_output=True, text=True)
    if proc.returncode != 0:
        detail = _truncate_err(proc.stderr or proc.stdout)
        raise RuntimeError(f"command failed: {' '.join(command)}: {detail}")


def _truncate_err(value: str, limit: int = 4000) -> str:
    trimmed = value.strip()
    if len(trimmed) <= limit:
        return trimmed
    return trimmed[-limit:]
