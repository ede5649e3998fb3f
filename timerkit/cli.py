"""timerkit CLI.

Drives a single timer whose snapshot lives in a JSON state file, so a timer
can be started in one shell command and paused or stopped in a later one.
"""
from __future__ import annotations

import argparse
import importlib
import json
import sys
from pathlib import Path
from typing import Any, Callable

from .config import load_settings
from .core.errors import InvalidArgument, TimerkitError
from .telemetry.logging import get_logger
from .timer import Timer

log = get_logger(__name__)


def _load_timer(path: Path, label: str | None = None) -> Timer:
    if not path.exists():
        return Timer(label=label or "")
    return Timer.deserialize(path.read_text(encoding="utf-8"))


def _save_timer(timer: Timer, path: Path) -> None:
    path.write_text(timer.serialize(), encoding="utf-8")


def _resolve_target(target: str) -> Callable[..., Any]:
    """Resolve ``package.module:attr.path`` to an object."""
    mod_name, sep, attr_path = target.partition(":")
    if not sep or not mod_name or not attr_path:
        raise InvalidArgument(f"benchmark target must look like 'module:callable', got {target!r}")
    try:
        obj: Any = importlib.import_module(mod_name)
        for part in attr_path.split("."):
            obj = getattr(obj, part)
    except (ImportError, AttributeError) as e:
        raise InvalidArgument(f"cannot resolve benchmark target {target!r}: {e}") from e
    return obj


def _transition(name: str) -> Callable[[argparse.Namespace], int]:
    def _cmd(args: argparse.Namespace) -> int:
        path = Path(args.state)
        timer = _load_timer(path, label=getattr(args, "label", None))
        getattr(timer, name)()
        _save_timer(timer, path)
        log.debug("%s -> %s (%s)", name, timer.state.value, path)
        print(timer.format())
        return 0

    return _cmd


def _cmd_show(args: argparse.Namespace) -> int:
    timer = _load_timer(Path(args.state))
    if args.json:
        out = dict(timer.to_snapshot())
        out["state"] = timer.state.value
        out["ms"] = timer.ms()
        out["pauseMs"] = timer.pause_ms()
        print(json.dumps(out, indent=2))
    else:
        print(timer.format(args.template))
    return 0


def _cmd_bench(args: argparse.Namespace) -> int:
    fn = _resolve_target(args.target)
    for _ in range(args.repeat):
        timer = Timer.benchmark(fn)
        log.info("benchmark %s: %d ms", args.target, timer.ms())
        print(timer.format(args.template))
    return 0


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    p = argparse.ArgumentParser(prog="timerkit")
    p.add_argument(
        "--state",
        default=settings.state_file,
        help="Timer snapshot file (default: TIMERKIT_STATE or .timerkit.json)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("start", help="Start the timer (restarts a stopped one)")
    sp.add_argument("--label", default=None, help="Label for a new timer")
    sp.set_defaults(func=_transition("start"))

    for name, desc in (
        ("pause", "Pause a running timer"),
        ("resume", "Resume a paused timer"),
        ("stop", "Stop the timer"),
        ("clear", "Reset the timer to unstarted"),
    ):
        sp = sub.add_parser(name, help=desc)
        sp.set_defaults(func=_transition(name))

    sp = sub.add_parser("show", help="Print the elapsed time")
    sp.add_argument("--template", default=None, help="Format template, e.g. '%%s s %%ms ms'")
    sp.add_argument("--json", action="store_true", help="Print the snapshot and derived fields")
    sp.set_defaults(func=_cmd_show)

    sp = sub.add_parser("bench", help="Benchmark a zero-argument callable")
    sp.add_argument("target", help="module:callable")
    sp.add_argument("--repeat", type=int, default=settings.bench_repeat)
    sp.add_argument("--template", default=None)
    sp.set_defaults(func=_cmd_bench)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        return int(args.func(args))
    except (TimerkitError, OSError) as e:
        print(f"timerkit: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
