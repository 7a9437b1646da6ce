#!/usr/bin/env python3
"""Ensemble scheduler command line.

Reads a roster snapshot (activities, availability windows and recurrence
requests) from a JSON file and runs the scheduling engine on it: expands
recurrences, reports conflicts, lists free slots or exports an .ics file.
"""

import argparse
import sys
from datetime import date
from typing import Optional, Sequence

from loguru import logger

from config import get_settings, setup_logger
from roster import Roster, RosterLoader
from scheduling import (
    ResourceRole,
    SchedulingError,
    analyze_load,
    check_recurrence,
    occurrence_dates,
    parse_date,
    synthesize,
)
from scheduling.timeutils import format_duration
from transformer import ICalTransformer


def _date_arg(date_str: str) -> date:
    """Parse date string in YYYY-MM-DD format."""
    try:
        return parse_date(date_str)
    except SchedulingError:
        raise argparse.ArgumentTypeError(
            f"Invalid date format: '{date_str}'. Expected YYYY-MM-DD."
        )


def _load(path: str) -> Roster:
    return RosterLoader(path).load()


def cmd_occurrences(args: argparse.Namespace) -> int:
    roster = _load(args.roster)
    if not roster.requests:
        print("No recurrence requests in roster.")
    for request in roster.requests:
        dates = occurrence_dates(request)
        print(f"{request.group_id} ({request.day.label} {request.interval.start}-{request.interval.end}): "
              f"{len(dates)} occurrences")
        for day in dates:
            print(f"  {day.isoformat()}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    settings = get_settings()
    roster = _load(args.roster)
    include_time_only = settings.report_time_only_overlaps and not args.ignore_time_only

    blocked = False
    for request in roster.requests:
        result = check_recurrence(request, roster.activities, include_time_only)
        print(f"{request.group_id}: {len(result.occurrences)} occurrences, "
              f"{len(result.blocked_dates)} blocked")
        for check in result.occurrences:
            if check.report.is_clear:
                print(f"  {check.date.isoformat()}  ok")
                continue
            for finding in check.report:
                print(f"  {check.date.isoformat()}  {finding.severity.value.upper():<8} "
                      f"{finding.dimension.value:<12} {finding.describe()}")
        blocked = blocked or result.has_critical

    if blocked:
        print("Critical conflicts found; resolve them before saving.", file=sys.stderr)
        return 1
    return 0


def cmd_slots(args: argparse.Namespace) -> int:
    settings = get_settings()
    roster = _load(args.roster)
    windows = roster.windows_for(args.resource)
    if not windows:
        print(f"No availability windows declared for '{args.resource}'.")
        return 0

    durations = args.durations if args.durations is not None else settings.supported_durations
    stride = args.stride if args.stride is not None else settings.slot_stride_minutes
    slots = synthesize(windows, roster.occupied_for(args.resource, args.role), (), durations, stride)

    print(f"{len(slots)} free slots for {args.resource}:")
    for slot in slots:
        where = f" @ {slot.location}" if slot.location else ""
        print(f"  {slot}{where}")
    return 0


def cmd_load(args: argparse.Namespace) -> int:
    roster = _load(args.roster)
    summary = analyze_load(roster.windows_for(args.resource), roster.occupied_for(args.resource, args.role))
    print(f"Load for {args.resource}:")
    print(f"  Available:    {format_duration(summary.available_minutes)}")
    print(f"  Booked:       {format_duration(summary.booked_minutes)}")
    print(f"  Utilization:  {summary.utilization:.1f}%")
    print(f"  Back-to-back: {summary.back_to_back_ratio:.1f}%")
    print(f"  Peak hours:   {', '.join(summary.peak_hours) or '-'}")
    for advice in summary.recommendations:
        print(f"  * {advice}")
    return 0


def cmd_export(args: argparse.Namespace) -> int:
    settings = get_settings()

    # Ensure output file has .ics extension
    output_path = args.output
    if not output_path.lower().endswith(".ics"):
        output_path = f"{output_path}.ics"

    if args.start_date >= args.end_date:
        print("Error: Start date must be before end date.", file=sys.stderr)
        return 1

    roster = _load(args.roster)
    if not roster.activities:
        print("Warning: No activities found. The output file will be empty.")

    transformer = ICalTransformer(settings.calendar_timezone, settings.calendar_name)
    transformer.transform(roster.activities, args.start_date, args.end_date)
    transformer.save(output_path)

    print(f"Schedule saved to: {output_path}")
    print(f"Period: {args.start_date} to {args.end_date}")
    return 0


def _add_role_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--role",
        type=ResourceRole,
        choices=list(ResourceRole),
        default=None,
        metavar="{" + ",".join(role.value for role in ResourceRole) + "}",
        help="Only count bookings where the resource plays this part (default: any)"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Check rehearsal and lesson schedules for conflicts and free slots.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 ensemble_schedule.py occurrences roster.json
  python3 ensemble_schedule.py check roster.json
  python3 ensemble_schedule.py slots roster.json --resource teacher-1 --durations 30 45
  python3 ensemble_schedule.py export roster.json --start-date 2024-09-01 --end-date 2025-06-20
        """
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    occurrences = subparsers.add_parser("occurrences", help="List the dates each recurrence request expands to")
    occurrences.add_argument("roster", help="Path to the roster JSON file")
    occurrences.set_defaults(handler=cmd_occurrences)

    check = subparsers.add_parser("check", help="Classify every recurrence request against existing activities")
    check.add_argument("roster", help="Path to the roster JSON file")
    check.add_argument(
        "--ignore-time-only",
        action="store_true",
        help="Do not report overlaps that share no room, supervisor or participant"
    )
    check.set_defaults(handler=cmd_check)

    slots = subparsers.add_parser("slots", help="List bookable slots for a teacher or room")
    slots.add_argument("roster", help="Path to the roster JSON file")
    slots.add_argument("--resource", required=True, help="Teacher or room id")
    slots.add_argument("--durations", type=int, nargs="+", default=None, help="Slot lengths in minutes")
    slots.add_argument("--stride", type=int, default=None, help="Minutes between candidate start times")
    _add_role_argument(slots)
    slots.set_defaults(handler=cmd_slots)

    load = subparsers.add_parser("load", help="Summarize utilization of a teacher or room")
    load.add_argument("roster", help="Path to the roster JSON file")
    load.add_argument("--resource", required=True, help="Teacher or room id")
    _add_role_argument(load)
    load.set_defaults(handler=cmd_load)

    export = subparsers.add_parser("export", help="Export the roster's activities to iCalendar")
    export.add_argument("roster", help="Path to the roster JSON file")
    export.add_argument(
        "--start-date",
        type=_date_arg,
        required=True,
        help="First day of the exported period (format: YYYY-MM-DD)"
    )
    export.add_argument(
        "--end-date",
        type=_date_arg,
        required=True,
        help="Last day of the exported period (format: YYYY-MM-DD)"
    )
    export.add_argument(
        "-o", "--output",
        default="schedule.ics",
        help="Output file path (default: schedule.ics)"
    )
    export.set_defaults(handler=cmd_export)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the command line."""
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        setup_logger(level=settings.log_level, log_file=settings.log_file)
        return args.handler(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except (SchedulingError, ValueError, OSError) as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
