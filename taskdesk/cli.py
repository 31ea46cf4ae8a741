from __future__ import annotations

import argparse
import sys
from collections.abc import Iterable
from typing import TextIO

from taskdesk.config import AppConfig, load_config
from taskdesk.console import TaskConsole
from taskdesk.events import ChangeNotifier
from taskdesk.observability import get_json_logger, set_log_level
from taskdesk.store import InMemoryTaskStore


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("taskdesk")
    sub = parser.add_subparsers(dest="cmd")

    p_console = sub.add_parser("console", help="Run the interactive task console (default)")
    for p in (parser, p_console):
        p.add_argument(
            "--color",
            dest="color",
            action=argparse.BooleanOptionalAction,
            default=argparse.SUPPRESS,
            help="Colour console output with ANSI escapes",
        )
        p.add_argument(
            "--log-level",
            choices=["debug", "info", "warning", "error"],
            default=argparse.SUPPRESS,
        )
        p.add_argument("--first-id", type=int, default=argparse.SUPPRESS)
        p.add_argument(
            "--strict-observers",
            action="store_true",
            default=argparse.SUPPRESS,
            help="Let observer exceptions propagate instead of logging and continuing",
        )
    return parser


def resolve_config(args: argparse.Namespace, base: AppConfig | None = None) -> AppConfig:
    """Apply CLI overrides on top of environment configuration."""
    cfg = base if base is not None else load_config()
    if hasattr(args, "color"):
        cfg.color = bool(args.color)
    if hasattr(args, "log_level"):
        cfg.log_level = str(args.log_level)
    if hasattr(args, "first_id"):
        if int(args.first_id) < 1:
            raise ValueError("--first-id must be >= 1")
        cfg.first_id = int(args.first_id)
    if getattr(args, "strict_observers", False):
        cfg.isolate_observers = False
    return cfg


def build_store(cfg: AppConfig) -> InMemoryTaskStore:
    notifier = ChangeNotifier(isolate_observers=cfg.isolate_observers)
    return InMemoryTaskStore(notifier=notifier, first_id=cfg.first_id)


def main(
    argv: list[str] | None = None,
    *,
    stdin: Iterable[str] | None = None,
    stdout: TextIO | None = None,
) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    cmd = str(getattr(args, "cmd", None) or "console")
    if cmd != "console":
        parser.print_help()
        raise SystemExit(2)

    try:
        cfg = resolve_config(args)
    except ValueError as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc

    store = build_store(cfg)
    logger = get_json_logger("taskdesk")
    # Only an explicit flag overrides LOG_LEVEL/LOG_MODULE_LEVELS; applied after the
    # store so its module loggers pick it up as well
    if hasattr(args, "log_level"):
        set_log_level(cfg.log_level)
    logger.debug(
        "console starting",
        extra={"event": "console_start", "metadata": {"first_id": cfg.first_id}},
    )

    out = stdout if stdout is not None else sys.stdout
    color = cfg.color and stdout is None and sys.stdout.isatty()
    console = TaskConsole(store, stdin=stdin, stdout=out, color=color)
    raise SystemExit(console.run())


if __name__ == "__main__":
    main()
