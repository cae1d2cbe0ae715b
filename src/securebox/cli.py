from __future__ import annotations

import argparse
import sys
import time

import yaml

from securebox.box import SecureBox
from securebox.solver import run
from securebox.strategies import STRATEGIES, make_strategy


def load_config(path: str | None) -> dict:
    """Read the optional YAML run config (seed, strategy, params, ...)."""
    if path is None:
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {path} must be a mapping, got {type(cfg).__name__}")
    params = cfg.get("params", {})
    if params is not None and not isinstance(params, dict):
        raise ValueError(f"Config 'params' must be a mapping, got {params!r}")
    return cfg


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="open-box", description="Shuffle a secure box and unlock it."
    )
    ap.add_argument("y", type=int, help="Box height (rows)")
    ap.add_argument("x", type=int, help="Box width (columns)")
    ap.add_argument("--seed", type=int, default=None, help="Shuffle seed")
    ap.add_argument(
        "--strategy", choices=STRATEGIES, default=None, help="Plan builder"
    )
    ap.add_argument("--config", default=None, help="YAML run config")
    ap.add_argument(
        "--show", action="store_true", help="Print the box before and after"
    )
    ap.add_argument("--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    ap = build_parser()
    args = ap.parse_args(argv)
    if args.y < 0 or args.x < 0:
        ap.error(f"box dimensions must be non-negative, got {args.y} {args.x}")

    try:
        cfg = load_config(args.config)
    except (OSError, ValueError, yaml.YAMLError) as e:
        ap.error(str(e))

    seed = args.seed if args.seed is not None else cfg.get("seed")
    strategy_name = args.strategy or cfg.get("strategy", "reduced")
    params = cfg.get("params") or {}

    try:
        strategy = make_strategy(strategy_name, params=params)
        strategy.reset(args.y, args.x, params=params)
    except ValueError as e:
        ap.error(str(e))

    box = SecureBox(
        args.y, args.x, seed=seed, shuffle_iterations=cfg.get("shuffle_iterations")
    )
    if args.show:
        print(box)
        print()

    start_time = time.perf_counter()
    locked, plan = run(box, strategy)
    time_ms = (time.perf_counter() - start_time) * 1000

    if args.verbose:
        print(
            f"[solve] {args.y}x{args.x} strategy={strategy_name} "
            f"presses={len(plan)} time={time_ms:.2f}ms"
        )
    if args.show:
        print(box)
        print()

    print("BOX: LOCKED!" if locked else "BOX: OPENED!")
    return int(locked)


if __name__ == "__main__":
    sys.exit(main())
