#!/usr/bin/env python3
from __future__ import annotations

import argparse
import csv
import logging
import sys
import urllib.request
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from lunaris.reference.calendar import mjd_to_jd
from lunaris.reference.time_scales import DELTAT_ENV, TT_MINUS_TAI, cumulative_leap_seconds, user_cache_path

logger = logging.getLogger(__name__)

FINALS_URL = "https://datacenter.iers.org/data/9/finals2000A.all"
PREDS_URL = "https://maia.usno.navy.mil/ser7/deltat.preds"


@dataclass(frozen=True)
class DeltaTRow:
    jd: float
    delta_t: float


def _fetch(url: str) -> str:
    with urllib.request.urlopen(url) as r:
        return r.read().decode("utf-8", errors="replace")


def _read(source: str) -> str:
    if source.startswith(("http://", "https://")):
        logger.info("downloading %s", source)
        return _fetch(source)
    return Path(source).expanduser().read_text(encoding="utf-8", errors="replace")


# -----------------------------
# finals2000A.all (IERS Bulletin A, fixed width)
# -----------------------------
def parse_finals(text: str) -> List[DeltaTRow]:
    """
    Observed/predicted UT1-UTC, one line per day:
      MJD      columns [7:15]
      UT1-UTC  columns [58:68] (seconds; blank beyond the prediction span)

    ΔT = TT - UT1 = (TAI - UTC) + 32.184 - (UT1 - UTC)
    """
    rows: List[DeltaTRow] = []
    for line in text.splitlines():
        line = line.rstrip()
        if len(line) < 68:
            continue
        s_mjd = line[7:15].strip()
        s_dut = line[58:68].strip()
        if not s_mjd or not s_dut:
            continue
        try:
            mjd = float(s_mjd)
            dut = float(s_dut)
        except ValueError:
            logger.debug("skipping unparsable finals line: %r", line[:20])
            continue
        jd = mjd_to_jd(mjd)
        rows.append(DeltaTRow(jd, cumulative_leap_seconds(jd) + TT_MINUS_TAI - dut))
    if not rows:
        raise RuntimeError("Parsed 0 rows from finals2000A.all (wrong file?)")
    return rows


# -----------------------------
# deltat.preds (USNO predictions, fixed width)
# -----------------------------
def parse_preds(text: str) -> List[DeltaTRow]:
    """
    Predicted ΔT after one header line:
      MJD  columns [3:12]
      ΔT   columns [24:29] (seconds)
    """
    rows: List[DeltaTRow] = []
    lines = text.splitlines()[1:]
    for line in lines:
        line = line.rstrip()
        if not line:
            continue
        try:
            mjd = float(line[3:12])
            dt = float(line[24:29])
        except ValueError:
            logger.debug("skipping unparsable preds line: %r", line[:20])
            continue
        rows.append(DeltaTRow(mjd_to_jd(mjd), dt))
    if not rows:
        raise RuntimeError("Parsed 0 rows from deltat.preds (wrong file?)")
    return rows


def merge(observed: Iterable[DeltaTRow], predicted: Iterable[DeltaTRow], *, every: int = 1) -> List[DeltaTRow]:
    """
    Observed values win; predictions only extend past the last observed JD.
    `every` keeps one observed row in N (the last observed row is always kept).
    """
    obs = sorted(observed, key=lambda r: r.jd)
    if every > 1 and obs:
        obs = obs[::every] + ([obs[-1]] if (len(obs) - 1) % every else [])
    by_jd: Dict[float, DeltaTRow] = {r.jd: r for r in obs}
    last = obs[-1].jd if obs else float("-inf")
    for r in predicted:
        if r.jd > last and r.jd not in by_jd:
            by_jd[r.jd] = r
    return [by_jd[k] for k in sorted(by_jd)]


def write_csv(rows: List[DeltaTRow], out: Path) -> None:
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        w.writerow(["jd", "delta_t"])
        for r in rows:
            w.writerow([f"{r.jd:.2f}", f"{r.delta_t:.7f}"])


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="lunaris update-deltat",
        description="Build the ΔT table (jd,delta_t) from IERS finals2000A.all and USNO deltat.preds.",
    )
    p.add_argument("--finals", default=FINALS_URL, help="finals2000A.all path or URL")
    p.add_argument("--preds", default=PREDS_URL, help="deltat.preds path or URL ('' to skip)")
    p.add_argument("--every", type=int, default=1, help="keep one observed day in N (default: all)")
    p.add_argument("--out", default=None, help="Output CSV path (default: user cache)")
    args = p.parse_args(argv)

    observed = parse_finals(_read(args.finals))
    predicted = parse_preds(_read(args.preds)) if args.preds else []
    rows = merge(observed, predicted, every=max(1, args.every))

    out = Path(args.out) if args.out else user_cache_path()
    write_csv(rows, out)

    print(f"Observed rows: {len(observed)}  predicted rows: {len(predicted)}  written: {len(rows)}")
    print(f"JD range: {rows[0].jd:.2f} .. {rows[-1].jd:.2f}")
    print(f"Wrote: {out}")
    if args.out:
        print("\nTo make lunaris use this file, set:")
        print(f'  export {DELTAT_ENV}="{out}"')
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(main())
