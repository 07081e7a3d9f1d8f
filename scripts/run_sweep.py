import argparse
import csv
import logging
import multiprocessing as mp
import os
import time
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path

import numpy as np

from securebox.box import SecureBox
from securebox.config import load_config
from securebox.evaluation.metrics import (
    scaling_exponent,
    toggles_used,
    unlock_rate,
)
from securebox.opener import solve_box
from securebox.planner import TogglePlanner

# Limit threads per worker
os.environ["OMP_NUM_THREADS"] = "1"
os.environ["OPENBLAS_NUM_THREADS"] = "1"
os.environ["MKL_NUM_THREADS"] = "1"
mp.freeze_support()

ROOT = Path(__file__).resolve().parents[1]


def _task_seed(base_seed: int, *coords: int) -> int:
    """Generate deterministic seed for each task."""
    ss = np.random.SeedSequence([int(base_seed)] + [int(c) for c in coords])

    return int(
        ss.generate_state(1, dtype=np.uint64)[0] & np.uint64((1 << 63) - 1)
    )


def make_jobs(sizes, n_boxes, base_seed):
    """One job per grid size."""
    for rows, columns in sizes:
        yield {
            "rows": rows,
            "columns": columns,
            "n_boxes": n_boxes,
            "base_seed": base_seed,
        }


def _run_job(job):
    """Shuffle and unlock ``n_boxes`` boxes of one size."""
    rows, columns = job["rows"], job["columns"]
    planner = TogglePlanner()
    out = []
    for box_id in range(job["n_boxes"]):
        rng = np.random.default_rng(
            _task_seed(job["base_seed"], rows, columns, box_id)
        )
        box = SecureBox(rows, columns, rng=rng)
        initial_on = int(box.get_state().sum())

        start_time = time.perf_counter()
        outcome = solve_box(box, rows, columns, planner=planner)
        time_ms = (time.perf_counter() - start_time) * 1000

        out.append(
            {
                "rows": rows,
                "columns": columns,
                "seed": job["base_seed"],
                "box_id": box_id,
                "initial_on": initial_on,
                "outcome": outcome.value,
                "locked": int(outcome.locked),
                "toggles": toggles_used(planner.last_plan),
                "time_ms": time_ms,
            }
        )
    return out


def summarize(rows_out):
    """Print per-size unlock rate and the empirical scaling exponent."""
    by_size = {}
    for row in rows_out:
        by_size.setdefault((row["rows"], row["columns"]), []).append(row)

    square_n, square_t = [], []
    for (r, c), items in sorted(by_size.items()):
        rate = unlock_rate(bool(it["locked"]) for it in items)
        median_ms = float(np.median([it["time_ms"] for it in items]))
        print(f"{r:>3}x{c:<3} unlocked {rate:>6.1%}  median {median_ms:9.3f} ms")
        if r == c:
            square_n.append(r)
            square_t.append(median_ms / 1000)

    if len(square_n) >= 2:
        exp = scaling_exponent(square_n, square_t)
        print(f"\nEmpirical scaling: time ~ n^{exp:.2f} (model: n^6)")


def main():
    n_cpus = os.cpu_count() or 1
    default_workers = max(n_cpus - 1, 1)

    ap = argparse.ArgumentParser()
    ap.add_argument(
        "--config",
        default=str(ROOT / "experiments" / "configs" / "sweep_square.yaml"),
    )
    ap.add_argument("--out", default=None, help="Output CSV path")
    ap.add_argument(
        "--workers", type=int, default=default_workers, help="Number of workers"
    )
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = load_config(args.config)
    cfg.out_path.mkdir(parents=True, exist_ok=True)
    out_csv = args.out or str(cfg.out_path / "sweep.csv")

    jobs = list(make_jobs(cfg.grid.sizes, cfg.n_boxes, cfg.seed))
    total_jobs = len(jobs)

    fieldnames = [
        "rows",
        "columns",
        "seed",
        "box_id",
        "initial_on",
        "outcome",
        "locked",
        "toggles",
        "time_ms",
    ]

    print(
        f"\nStarting {total_jobs} grid sizes x {cfg.n_boxes} boxes with {args.workers} workers...\n"
    )

    start_time = time.time()
    all_rows = []
    ctx = mp.get_context("spawn")
    with open(out_csv, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        with ProcessPoolExecutor(max_workers=args.workers, mp_context=ctx) as ex:
            futures = [ex.submit(_run_job, j) for j in jobs]
            for done, fut in enumerate(as_completed(futures), start=1):
                rows_out = fut.result()
                writer.writerows(rows_out)
                all_rows.extend(rows_out)
                elapsed = time.time() - start_time
                print(
                    f"\r[progress] {done}/{total_jobs} sizes ({done / total_jobs:>6.1%}) | "
                    f"{len(all_rows):>7,} boxes | "
                    f"elapsed: {int(elapsed // 60)}m {int(elapsed % 60)}s",
                    end="",
                    flush=True,
                )
    print()

    summarize(all_rows)

    elapsed = time.time() - start_time
    print(f"\nDone in {int(elapsed/60)}m {int(elapsed%60)}s")
    print(f"Output: {out_csv}\n")


if __name__ == "__main__":
    main()
