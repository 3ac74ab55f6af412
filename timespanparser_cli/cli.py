import argparse
import logging

from dateutil import parser as dateutil_parser

from timespanparser import parse, ParseError, SettingValidationError


def entrance(argv=None):
    timespan_argparse = argparse.ArgumentParser(
        prog="timespanparser",
        description="Resolve a phrase like 'last week' or 'april to yesterday' into a time span.",
    )
    timespan_argparse.add_argument(
        "phrase",
        nargs="*",
        help='The phrase to resolve, e.g. "this month"',
    )
    timespan_argparse.add_argument(
        "--now",
        type=str,
        help="ISO 8601 timestamp to resolve the phrase against instead of the current time",
    )
    timespan_argparse.add_argument(
        "--timezone",
        "--tz",
        type=str,
        help='Time zone for the current time, e.g. "local", "UTC", "+02:00" or "Europe/Berlin"',
    )
    timespan_argparse.add_argument(
        "-v",
        "--verbose",
        help="Log how the phrase was resolved",
        action="store_true",
    )

    args = timespan_argparse.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    settings = {}
    if args.timezone:
        settings["TIMEZONE"] = args.timezone
    if args.now:
        try:
            settings["RELATIVE_BASE"] = dateutil_parser.isoparse(args.now)
        except ValueError:
            timespan_argparse.error("--now is not an ISO 8601 timestamp: %r" % args.now)

    try:
        span = parse(" ".join(args.phrase), settings=settings)
    except (ParseError, SettingValidationError) as error:
        timespan_argparse.error(str(error))

    logging.info("timespanparser: %s resolved to %r", " ".join(args.phrase), span)
    print(span.isoformat())
