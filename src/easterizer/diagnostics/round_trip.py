from __future__ import annotations

import argparse
import random

from easterizer.core.errors import InvalidDateError
from easterizer.core.time import MAX_YEAR, MIN_YEAR, UTCDateTime, days_in_month, from_day, to_day


def random_instant(start_year: int, end_year: int) -> UTCDateTime:
    while True:
        year = random.randint(start_year, end_year)
        month = random.randint(1, 12)
        day = random.randint(1, days_in_month(year, month))
        try:
            return UTCDateTime(
                year, month, day,
                random.randint(0, 23), random.randint(0, 59), random.randint(0, 59),
                random.randint(0, 999) * 1000,
            )
        except InvalidDateError:
            continue  # days dropped by the Gregorian reform


def roundtrip_test(N: int, start_year: int, end_year: int, seed: int, *, max_failures: int) -> int:
    random.seed(seed)
    failures = 0
    worst = 0.0

    for _ in range(N):
        t0 = random_instant(start_year, end_year)
        jd = to_day(t0)
        t1 = from_day(jd)
        err_s = abs(to_day(t1) - jd) * 86400.0
        worst = max(worst, err_s)

        if t1 != t0:
            failures += 1
            print("\nFAIL")
            print("t0:", t0)
            print("jd:", repr(jd))
            print("t1:", t1)
            print(f"error: {err_s:.6f} s")
            if failures >= max_failures:
                break

    print(f"worst error: {worst * 1000.0:.3f} ms")
    return failures


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Random round-trip tests: UTC date-time -> Julian Day -> UTC date-time.")
    p.add_argument("--N", type=int, default=20000, help="Trials.")
    p.add_argument("--start-year", type=int, default=MIN_YEAR)
    p.add_argument("--end-year", type=int, default=MAX_YEAR)
    p.add_argument("--seed", type=int, default=123, help="RNG seed.")
    p.add_argument("--max-failures", type=int, default=5, help="Stop after this many failures.")
    args = p.parse_args(argv)

    if args.end_year < args.start_year:
        raise SystemExit("--end-year must be >= --start-year")

    failures = roundtrip_test(args.N, args.start_year, args.end_year, args.seed, max_failures=args.max_failures)
    if failures == 0:
        print("All round-trip tests passed.")
        return 0

    print(f"Round-trip failures: {failures}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
