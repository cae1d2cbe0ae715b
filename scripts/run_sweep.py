import argparse
import csv
import multiprocessing as mp
import os
import sys
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import numpy as np
import yaml

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from securebox.box import SecureBox  # noqa: E402
from securebox.evaluation.metrics import presses_used, solved, success_rate  # noqa: E402
from securebox.solver import run  # noqa: E402
from securebox.strategies import make_strategy  # noqa: E402

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"
mp.freeze_support()

FIELDNAMES = [
    "y",
    "x",
    "strategy",
    "seed",
    "box_id",
    "initial_locked",
    "presses",
    "solved",
    "time_ms",
]


def parse_strategies(cfg_strats):
    """Parse strategy configs from YAML."""
    parsed = []
    for item in cfg_strats:
        if isinstance(item, str):
            parsed.append({"name": item, "params": {}})
        elif isinstance(item, dict) and "name" in item:
            parsed.append({"name": item["name"], "params": item.get("params") or {}})
        else:
            raise ValueError(f"Invalid strategy spec: {item}")
    return parsed


def parse_sizes(cfg_sizes):
    sizes = []
    for item in cfg_sizes:
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Invalid size spec (want [y, x]): {item}")
        sizes.append((int(item[0]), int(item[1])))
    return sizes


def _task_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each task."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def make_jobs(sizes, strat_specs, samples, base_seed):
    """One job per (size, strategy); boards are shared across strategies."""
    for y, x in sizes:
        for spec in strat_specs:
            yield {
                "y": y,
                "x": x,
                "strategy_spec": spec,
                "samples": samples,
                "base_seed": base_seed,
            }


def _run_job(job):
    """Shuffle and open ``samples`` boxes of one size with one strategy."""
    y, x = job["y"], job["x"]
    base_seed = job["base_seed"]
    strat_name = job["strategy_spec"]["name"]
    strat_params = job["strategy_spec"]["params"]

    strat = make_strategy(strat_name, params=strat_params)
    try:
        strat.reset(y, x, params=strat_params)
    except ValueError as e:
        print(f"\n[skip] {strat_name} on {y}x{x}: {e}")
        return []

    rows = []
    for box_id in range(job["samples"]):
        seed = _task_seed(base_seed, y, x, box_id)
        box = SecureBox(y, x, seed=seed)
        initial_locked = box.count_locked()

        start_time = time.perf_counter()
        locked, plan = run(box, strat)
        time_ms = (time.perf_counter() - start_time) * 1000

        rows.append(
            {
                "y": y,
                "x": x,
                "strategy": strat_name,
                "seed": seed,
                "box_id": box_id,
                "initial_locked": initial_locked,
                "presses": presses_used(plan),
                "solved": solved(locked),
                "time_ms": time_ms,
            }
        )
    return rows


def run_pool(jobs, writer, workers, total_jobs):
    """Run jobs in parallel and write results as they complete."""
    ctx = mp.get_context("spawn")
    done = 0
    total_rows = 0
    start_time = time.time()

    with ProcessPoolExecutor(max_workers=workers, mp_context=ctx) as ex:
        futures = {ex.submit(_run_job, j): j for j in jobs}
        for fut in as_completed(futures):
            job = futures[fut]
            try:
                rows = fut.result()
            except Exception:
                import traceback

                print("\n[ERROR] Worker failed:")
                traceback.print_exc()
                raise
            writer.writerows(rows)
            done += 1
            total_rows += len(rows)

            elapsed = time.time() - start_time
            eta_seconds = (elapsed / done) * (total_jobs - done)
            progress_line = (
                f"\r[progress] {done}/{total_jobs} jobs ({done / total_jobs:>6.1%}) | "
                f"{total_rows:>7,} boxes | "
                f"last: {job['strategy_spec']['name']} {job['y']}x{job['x']} "
                f"solved {success_rate(rows):.0%} | "
                f"ETA: {int(eta_seconds // 60)}m {int(eta_seconds % 60)}s"
            )
            print(progress_line, end="", flush=True)
    print()


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "experiments" / "configs" / "sweep.yaml"),
    )
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument(
        "--workers", type=int, default=default_workers, help="Number of workers"
    )
    args = ap.parse_args()

    with open(args.config, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f)["experiment"]

    sizes = parse_sizes(cfg["sizes"])
    strat_specs = parse_strategies(cfg["strategies"])
    samples = int(cfg["samples"])
    base_seed = int(cfg.get("seed", 0))
    out_dir = Path(cfg.get("output_dir", "results/runs"))
    out_dir.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(out_dir / "sweep.csv")

    jobs = list(make_jobs(sizes, strat_specs, samples, base_seed))
    print(
        f"\nStarting {len(jobs):,} jobs ({len(jobs) * samples:,} boxes) "
        f"with {args.workers} workers...\n"
    )

    start_time = time.time()
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=FIELDNAMES)
        writer.writeheader()
        if jobs:
            run_pool(jobs, writer, workers=args.workers, total_jobs=len(jobs))

    elapsed = time.time() - start_time
    print(f"\nDone in {int(elapsed/60)}m {int(elapsed%60)}s")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
