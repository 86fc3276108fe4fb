import argparse
import logging

from dateutil.parser import isoparse

import datemath


def _fixed_clock(value):
    anchor = isoparse(value)
    return lambda: anchor


def entrance(argv=None):
    datemath_argparse = argparse.ArgumentParser(
        prog="datemath",
        description="Evaluate date-math expressions such as now-1d or now-1y/y.",
    )
    datemath_argparse.add_argument(
        "expression",
        nargs="?",
        help='Expression to evaluate, e.g. "now-4d-4h"',
    )
    datemath_argparse.add_argument(
        "--stringify",
        metavar="ISO8601",
        help="Print the expression that denotes this ISO 8601 instant instead",
    )
    datemath_argparse.add_argument(
        "--now",
        metavar="ISO8601",
        help="Use this ISO 8601 instant as the anchor instead of the system clock",
    )
    datemath_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log every evaluation step",
        action="store_true",
    )

    args = datemath_argparse.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not (args.expression or args.stringify):
        datemath_argparse.error(
            "datemath: You need to give an expression or --stringify"
        )

    try:
        clock = _fixed_clock(args.now) if args.now else None
        if args.stringify:
            print(datemath.stringify(isoparse(args.stringify), clock=clock))
        else:
            result = datemath.parse(args.expression, clock=clock)
            print(result.isoformat(timespec="milliseconds"))
    except ValueError as e:
        datemath_argparse.error(str(e))


if __name__ == "__main__":
    entrance()
