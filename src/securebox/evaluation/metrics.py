from __future__ import annotations


def solved(locked: bool) -> int:
    return int(not locked)


def presses_used(plan) -> int:
    return len(plan)


def success_rate(rows) -> float:
    # fraction of rows with solved == 1
    if not rows:
        return 0.0
    return sum(int(r["solved"]) for r in rows) / len(rows)
