"""burncalc command-line entry point."""

from __future__ import annotations

import argparse
import sys
from typing import Sequence

from burncalc.config.settings import get_settings
from burncalc.logging import configure_logging
from burncalc.slos.session import SLO_PRESETS, WINDOW_PRESETS


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="burncalc",
        description="SLO error budget and multi-window burn-rate alert calculator",
    )
    parser.add_argument("--log-level", help="Log level (default: BURNCALC_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command")

    report_parser = subparsers.add_parser(
        "report",
        help="Show error budget and burn-rate alert thresholds",
    )
    report_parser.add_argument("--config", dest="config_path", help="Path to YAML preset file")
    report_parser.add_argument(
        "--slo",
        type=float,
        help=f"SLO target percentage (common: {', '.join(map(str, SLO_PRESETS))})",
    )
    report_parser.add_argument(
        "--window-days",
        type=int,
        help=f"Aggregation window in days (common: {', '.join(map(str, WINDOW_PRESETS))})",
    )
    report_parser.add_argument(
        "--events", dest="total_events", help="Estimated total events (commas allowed)"
    )
    report_parser.add_argument("--sli", dest="sli_description", help="SLI description")
    report_parser.add_argument(
        "--set",
        dest="edits",
        action="append",
        default=[],
        metavar="ID.FIELD=VALUE",
        help="Edit an alert field, e.g. p1.budgetConsumed=5 (repeatable)",
    )
    report_parser.add_argument(
        "--output", choices=["text", "json"], default="text", help="Output format"
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(args.log_level or settings.log_level, json_output=settings.log_json)

    if args.command == "report":
        from burncalc.cli.report import report_command

        sys.exit(
            report_command(
                config_path=args.config_path,
                slo=args.slo,
                window_days=args.window_days,
                total_events=args.total_events,
                sli_description=args.sli_description,
                edits=args.edits,
                output_format=args.output,
            )
        )

    parser.print_help()


if __name__ == "__main__":  # pragma: no cover
    main()
