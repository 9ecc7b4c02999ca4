#!/usr/bin/env python3
from __future__ import annotations

import argparse

from lunaris.diagnostics.validate_reference import _need_matplotlib, _need_numpy


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Plot Delta T (TT-UT1) using lunaris.reference.time_scales.")
    p.add_argument("--y0", type=int, default=1600, help="start year")
    p.add_argument("--y1", type=int, default=2100, help="end year")
    p.add_argument("--step", type=float, default=0.25, help="sampling step in years (e.g., 0.1, 0.25, 1.0)")
    p.add_argument("--out", default="deltat.png", help="output image filename")
    p.add_argument("--show-poly", action="store_true", help="also plot the polynomial-only fallback")
    p.add_argument("--show-table", action="store_true", help="scatter the tabulated points")
    args = p.parse_args(argv)

    if args.y1 < args.y0:
        raise SystemExit("--y1 must be >= --y0")

    np = _need_numpy()
    plt = _need_matplotlib()

    from lunaris.reference import time_scales as ts
    from lunaris.reference.calendar import J2000

    def year_to_jd(y: float) -> float:
        return J2000 + (y - 2000.0) * 365.25

    ys = np.arange(float(args.y0), float(args.y1) + 1e-12, float(args.step), dtype=float)
    best = np.array([ts.delta_t(year_to_jd(float(y))) for y in ys], dtype=float)

    fig, ax = plt.subplots(figsize=(10, 5))
    ax.plot(ys, best, linewidth=2, label="table + polynomial")

    if args.show_poly:
        poly = np.array([ts.delta_t_polynomial(float(y)) for y in ys], dtype=float)
        ax.plot(ys, poly, linewidth=1.5, linestyle="--", label="polynomial only (Espenak–Meeus)")

        fig2, ax2 = plt.subplots(figsize=(10, 3))
        ax2.plot(ys, best - poly, linewidth=2)
        ax2.set_title("table - polynomial (seconds)")
        ax2.set_xlabel("Year")
        ax2.set_ylabel("ΔT_table - ΔT_poly")
        ax2.grid(True, alpha=0.3)
        fig2.tight_layout()
        fig2.savefig("deltat_diff.png", dpi=200)
        print("Saved: deltat_diff.png")

    if args.show_table:
        tbl = ts.delta_t_table()
        y_tbl = np.array([2000.0 + (r.jd - J2000) / 365.25 for r in tbl], dtype=float)
        dt_tbl = np.array([r.delta_t for r in tbl], dtype=float)
        ax.scatter(y_tbl, dt_tbl, s=8, alpha=0.6, label="ΔT table")

    ax.set_title("Delta T = TT − UT1 (seconds)")
    ax.set_xlabel("Year")
    ax.set_ylabel("ΔT (s)")
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    fig.savefig(args.out, dpi=200)
    print(f"Saved: {args.out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
