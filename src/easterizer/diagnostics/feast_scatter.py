#!/usr/bin/env python3
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import argparse

import easterizer
from easterizer.core.time import UTCDateTime
from easterizer.reference.seasons import season_instant


def _need_numpy():
    try:
        import numpy as np
        return np
    except ImportError as e:
        raise RuntimeError('Need numpy. Install: pip install "easterizer[diagnostics]"') from e


def _need_matplotlib():
    try:
        import matplotlib.pyplot as plt
        return plt
    except ImportError as e:
        raise RuntimeError('Need matplotlib. Install: pip install "easterizer[diagnostics]"') from e


def day_of_year(ts: UTCDateTime) -> int:
    return int(ts.jd - UTCDateTime(ts.year, 1, 1).jd) + 1


def days_since_solar_event(ts: UTCDateTime, quarter: int) -> float:
    """Days from the latest event of `quarter` at or before ts."""
    event = season_instant(quarter, ts.year)
    if event > ts.jd:
        event = season_instant(quarter, ts.year - 1)
    return ts.jd - event


@dataclass(frozen=True)
class Style:
    color: str
    marker: str
    size: float = 14.0


PALETTE = (
    Style("tab:blue", "o"),
    Style("tab:red", "s"),
    Style("0.45", "^"),
    Style("tab:green", "D"),
    Style("tab:purple", "v"),
)


def build_series(np, rule: easterizer.Rule, start_year: int, end_year: int, *, metric: str) -> Tuple["np.ndarray", "np.ndarray"]:
    xs: List[float] = []
    ys: List[float] = []

    current = UTCDateTime(start_year, 1, 1)
    while True:
        current = easterizer.project(current, rule, forward=True)
        if current.year > end_year:
            break
        xs.append(float(current.year))
        if metric == "doy":
            ys.append(float(day_of_year(current)))
        elif metric == "since-solar":
            ys.append(days_since_solar_event(current, rule.solar.index))
        else:
            raise ValueError("metric must be 'doy' or 'since-solar'")

    return np.asarray(xs, dtype=float), np.asarray(ys, dtype=float)


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(description="Scatter plot of the dates observing the rules of given reference dates.")
    p.add_argument("dates", nargs="+", help="Reference dates YYYY-MM-DD, one rule each.")
    p.add_argument("--from-year", type=int, default=1900)
    p.add_argument("--to-year", type=int, default=2100)
    p.add_argument("--outbase", default="feast_scatter", help="Output base name (writes .png)")
    p.add_argument(
        "--metric",
        choices=("doy", "since-solar"),
        default="doy",
        help="Y-axis metric (default: day of year).",
    )
    args = p.parse_args(argv)

    np = _need_numpy()
    plt = _need_matplotlib()

    plt.rcParams.update({
        "font.size": 10,
        "axes.labelsize": 11,
        "axes.titlesize": 12,
        "legend.fontsize": 9,
        "axes.linewidth": 0.8,
    })

    fig, ax = plt.subplots(figsize=(9.2, 4.8), constrained_layout=True)
    ax.set_axisbelow(True)
    ax.grid(True, which="major", color="0.88", linewidth=0.7)

    ax.set_xlabel("Year")
    if args.metric == "doy":
        ax.set_ylabel("Day-of-year (Jan 1 = 1)")
    else:
        ax.set_ylabel("Days since the solar reference event")
    ax.set_title("Moveable feast dates")

    for i, d in enumerate(args.dates):
        st = PALETTE[i % len(PALETTE)]
        rule = easterizer.derive_rule(d)
        x, y = build_series(np, rule, args.from_year, args.to_year, metric=args.metric)
        ax.scatter(x, y, s=st.size, marker=st.marker, c=st.color, linewidths=0.0, alpha=0.5,
                   label=f"{d}: {easterizer.describe_rule(rule)}")

    ax.legend(loc="upper center", bbox_to_anchor=(0.5, -0.15), frameon=False)

    fig.savefig(args.outbase + ".png", dpi=300)
    print(f"Saved: {args.outbase}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
