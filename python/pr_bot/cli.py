from __future__ import annotations

import argparse
import logging
from pathlib import Path

from pr_bot_size.compare import compare_snapshots
from pr_bot_size.formatting import render_markdown, render_plain_text
from pr_bot_size.inventory import GlobOptions, regex_path_transform

from .config import load_config
from .env import TravisEnv
from .errors import ConfigError, GlobError
from .logs import configure_logging, log_key_values
from .runner import run_bot

LOGGER = logging.getLogger("pr_bot")


def _compare(args: argparse.Namespace) -> int:
    if (args.path_pattern is None) != (args.path_replacement is None):
        raise ConfigError("--path-pattern and --path-replacement must be given together")
    path_transform = (
        regex_path_transform(args.path_pattern, args.path_replacement)
        if args.path_pattern is not None
        else None
    )
    records = compare_snapshots(
        args.before,
        args.after,
        args.glob_pattern,
        glob_options=GlobOptions(dot=args.dot, ignore=tuple(args.ignore or ())),
        path_transform=path_transform,
    )
    output = (
        render_markdown(records) if args.format == "markdown" else render_plain_text(records)
    )
    print(output)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Pull request build comparison bot")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    run_cmd = sub.add_parser("run", help="Build before/after revisions and report plugin results")
    run_cmd.add_argument("--config", type=Path, default=None)

    compare_cmd = sub.add_parser("compare", help="Compare file sizes of two built directories")
    compare_cmd.add_argument("before", type=Path)
    compare_cmd.add_argument("after", type=Path)
    compare_cmd.add_argument("--glob-pattern", required=True)
    compare_cmd.add_argument("--dot", action="store_true")
    compare_cmd.add_argument("--ignore", action="append")
    compare_cmd.add_argument("--path-pattern", default=None)
    compare_cmd.add_argument("--path-replacement", default=None)
    compare_cmd.add_argument("--format", choices=["text", "markdown"], default="text")

    sub.add_parser("env", help="Show the detected CI environment")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)
    env = TravisEnv.from_environ()

    try:
        if args.command == "run":
            log_key_values(LOGGER, env.describe())
            run_bot(load_config(args.config), env)
            return 0

        if args.command == "compare":
            return _compare(args)

        if args.command == "env":
            log_key_values(LOGGER, env.describe())
            return 0
    except (ConfigError, GlobError, RuntimeError) as exc:
        LOGGER.error("%s", exc)
        return 1

    raise AssertionError(f"unexpected command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
