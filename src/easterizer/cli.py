from __future__ import annotations

import argparse
import importlib
import inspect
import json
import logging
import re
import sys

from .config import get_settings
from .core.errors import EasterizerError


_DATE_RE = re.compile(r"^[+-]?\d{4,6}-\d{2}-\d{2}$")


def _run_module_main(modpath: str, argv: list[str]) -> int:
    """
    Import module and run its main().

    Supports:
      - main(argv: list[str] | None = None) -> int|None
      - main() -> int|None
    """
    mod = importlib.import_module(modpath)
    if not hasattr(mod, "main"):
        raise SystemExit(f"Module {modpath} has no main()")
    fn = getattr(mod, "main")

    sig = inspect.signature(fn)
    if len(sig.parameters) == 0:
        rv = fn()
    else:
        rv = fn(argv)
    return int(rv or 0)


def cmd_rule(argv: list[str]) -> int:
    import easterizer
    from easterizer.text import format_date

    p = argparse.ArgumentParser(prog="easterizer rule", description="Describe a date as a moveable feast")
    p.add_argument("date", help="YYYY-MM-DD (UTC)")
    p.add_argument("--json", action="store_true", help="print the rule as JSON")
    args = p.parse_args(argv)

    if args.json:
        print(json.dumps(easterizer.explain(args.date), indent=2))
        return 0

    d = easterizer.UTCDateTime.parse(args.date)
    rule = easterizer.derive_rule(d)
    print(f"{format_date(d)} is {easterizer.describe_rule(rule)}")
    print(f"  solar reference   : {rule.solar.label:<13} {rule.solar.instant}")
    print(f"  lunar reference   : {rule.lunar.label:<13} {rule.lunar.instant}")
    for i, jd in enumerate(rule.lunar_occurrences, start=1):
        print(f"  {rule.lunar.label} #{i:<10}: {easterizer.from_day(jd)}")
    return 0


def cmd_observe(argv: list[str]) -> int:
    import easterizer
    from easterizer.text import format_date

    p = argparse.ArgumentParser(prog="easterizer observe", description="List dates observing the rule of a date")
    p.add_argument("date", help="YYYY-MM-DD defining the rule")
    p.add_argument("--from", dest="start", default=None,
                   help="YYYY-MM-DD to start from (default: January 1, two years before DATE)")
    p.add_argument("--count", type=int, default=None,
                   help=f"number of dates (default: {get_settings().observations})")
    p.add_argument("--backward", action="store_true", help="list dates before the start")
    args = p.parse_args(argv)

    d = easterizer.UTCDateTime.parse(args.date)
    start = easterizer.UTCDateTime.parse(args.start) if args.start else easterizer.UTCDateTime(d.year - 2, 1, 1)

    rule = easterizer.derive_rule(d)
    print(f"Observed on {easterizer.describe_rule(rule)}:")
    for ts in easterizer.observations(rule, start, count=args.count, forward=not args.backward):
        print(f"  {format_date(ts)}")
    return 0


def cmd_next(argv: list[str]) -> int:
    import easterizer
    from easterizer.text import format_date

    p = argparse.ArgumentParser(prog="easterizer next", description="Next (or previous) date with the same rule")
    p.add_argument("date", help="YYYY-MM-DD")
    p.add_argument("--backward", action="store_true")
    args = p.parse_args(argv)

    d = easterizer.UTCDateTime.parse(args.date)
    rule = easterizer.derive_rule(d)
    print(format_date(easterizer.project(d, rule, forward=not args.backward)))
    return 0


def cmd_seasons(argv: list[str]) -> int:
    import easterizer
    from easterizer.text import SEASON_LABELS

    p = argparse.ArgumentParser(prog="easterizer seasons", description="Equinoxes and solstices of a year (UTC)")
    p.add_argument("year", type=int)
    args = p.parse_args(argv)

    for ev in easterizer.seasons(args.year):
        print(f"  {SEASON_LABELS[ev.season]:<18} {ev.instant}  JD {ev.jd:.5f}")
    return 0


def cmd_phases(argv: list[str]) -> int:
    import easterizer
    from easterizer.text import PHASE_LABELS

    p = argparse.ArgumentParser(prog="easterizer phases", description="Lunar phases around a date (UTC)")
    p.add_argument("date", help="YYYY-MM-DD[THH:MM[:SS]]")
    args = p.parse_args(argv)

    ps = easterizer.phase_set(args.date)
    rows = list(zip(PHASE_LABELS.values(), ps.phases())) + [("Next New Moon", ps.next_new)]
    for label, jd in rows:
        print(f"  {label:<19} {easterizer.from_day(jd)}  JD {jd:.5f}")
    return 0


def cmd_jd(argv: list[str]) -> int:
    import easterizer

    p = argparse.ArgumentParser(prog="easterizer jd", description="Convert between ISO date-time and Julian Day")
    p.add_argument("value", help="Julian Day number or YYYY-MM-DD[THH:MM[:SS]]")
    args = p.parse_args(argv)

    try:
        jd = float(args.value)
    except ValueError:
        print(f"{easterizer.UTCDateTime.parse(args.value).jd:.6f}")
    else:
        print(easterizer.from_day(jd))
    return 0


def main(argv: list[str] | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]

    # Shortcut: `easterizer YYYY-MM-DD ...`
    if argv and _DATE_RE.match(argv[0]):
        argv = ["rule"] + argv

    p = argparse.ArgumentParser(prog="easterizer", description="Turn any date into a moveable feast like Easter.")
    p.add_argument("--log-level", default=None, help="logging level (default: EASTERIZER_LOG_LEVEL or WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("rule", help="Describe a date as a moveable-feast rule")
    sub.add_parser("observe", help="List dates observing the rule of a date")
    sub.add_parser("next", help="Next (or previous) date with the same rule")
    sub.add_parser("seasons", help="Equinoxes and solstices of a year")
    sub.add_parser("phases", help="Lunar phases around a date")
    sub.add_parser("jd", help="Convert between ISO date-time and Julian Day")

    p_diag = sub.add_parser("diag", help="Diagnostics tools")
    p_diag.add_argument(
        "tool",
        choices=["round-trip", "feast-scatter"],
        help="Which diagnostic to run",
    )

    args, rest = p.parse_known_args(argv)

    level = (args.log_level or get_settings().log_level).upper()
    logging.basicConfig(level=getattr(logging, level, logging.WARNING), format="%(levelname)s %(name)s: %(message)s")

    commands = {
        "rule": cmd_rule,
        "observe": cmd_observe,
        "next": cmd_next,
        "seasons": cmd_seasons,
        "phases": cmd_phases,
        "jd": cmd_jd,
    }

    try:
        if args.cmd == "diag":
            tool_map = {
                "round-trip": "easterizer.diagnostics.round_trip",
                "feast-scatter": "easterizer.diagnostics.feast_scatter",
            }
            return _run_module_main(tool_map[args.tool], rest)
        return commands[args.cmd](rest)
    except EasterizerError as e:
        print(f"easterizer: error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
