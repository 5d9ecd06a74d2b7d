#!/usr/bin/env python3
"""Command line entry point for bp-insights.

Loads readings from a CSV/JSON export and prints classifications and
summaries computed by the engine.

Usage:
    # Classify a single reading
    bp-insights --guideline esc_esh classify 135 85 --pulse 72

    # Report statistics for an export
    bp-insights report readings.csv

    # Circadian breakdown, time-in-range, morning surge and tag correlations
    bp-insights --json insights readings.csv
"""

from __future__ import annotations

import argparse
import copy
import json
import logging
import sys
from datetime import tzinfo
from pathlib import Path
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml

from bp_insights.circadian import breakdown
from bp_insights.classifier import classify
from bp_insights.correlation import correlate
from bp_insights.guidelines import resolve_guideline
from bp_insights.loader import load_export, load_readings
from bp_insights.metrics import (
    interpret_map,
    interpret_pulse_pressure,
    mean_arterial_pressure,
    pulse_pressure,
)
from bp_insights.models import DAY_PARTS, Category, Guideline
from bp_insights.report import aggregate
from bp_insights.surge import detect_surge
from bp_insights.time_in_range import time_in_range
from bp_insights.validator import validate

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG: dict[str, Any] = {
    "analysis": {
        "guideline": Guideline.AHA_ACC.value,
        "timezone": None,
        "min_tag_delta": 3,
    },
    "logging": {
        "level": "INFO",
        "file": None,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    },
}


def load_config(config_path: str | None = None) -> dict:
    """Load configuration from file or use defaults.

    Args:
        config_path: Path to YAML config file

    Returns:
        Configuration dictionary
    """
    config = copy.deepcopy(DEFAULT_CONFIG)

    if config_path and Path(config_path).exists():
        with open(config_path) as f:
            user_config = yaml.safe_load(f)
            if user_config and isinstance(user_config, dict):
                # Deep merge user config into defaults
                for section, values in user_config.items():
                    section_config = config.get(section)
                    if (
                        section_config is not None
                        and isinstance(section_config, dict)
                        and isinstance(values, dict)
                    ):
                        section_config.update(values)
                    else:
                        config[section] = values

    return config


def setup_logging(config: dict) -> None:
    """Setup logging based on configuration.

    Args:
        config: Configuration dictionary
    """
    log_config = config.get("logging", {})
    level = getattr(logging, log_config.get("level", "INFO").upper())
    format_str = log_config.get("format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler()]

    log_file = log_config.get("file")
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(level=level, format=format_str, handlers=handlers)


def get_timezone(config: dict) -> tzinfo | None:
    """Configured analysis zone, None for the host's local zone."""
    name = config.get("analysis", {}).get("timezone")
    if not name:
        return None
    try:
        return ZoneInfo(name)
    except ZoneInfoNotFoundError as e:
        raise ValueError(f"Unknown timezone in config: {name}") from e


def get_guideline(args: argparse.Namespace, config: dict) -> Guideline:
    """Guideline from the command line, falling back to the config file."""
    token = args.guideline or config.get("analysis", {}).get("guideline")
    guideline, _ = resolve_guideline(token)
    return guideline


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _print_banner(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(title)
    print(f"{'=' * 60}")


def cmd_classify(args: argparse.Namespace, config: dict) -> int:
    """Handle classify command.

    Args:
        args: Parsed command line arguments
        config: Configuration dictionary

    Returns:
        Exit code
    """
    guideline = get_guideline(args, config)
    validation = validate(args.systolic, args.diastolic, args.pulse)
    category = classify(args.systolic, args.diastolic, guideline)
    pp = pulse_pressure(args.systolic, args.diastolic)
    map_value = mean_arterial_pressure(args.systolic, args.diastolic)

    result = {
        "guideline": guideline.value,
        "category": category.value,
        "validation": validation.to_dict(),
        "pulse_pressure": {"value": pp, "band": interpret_pulse_pressure(pp).value},
        "mean_arterial_pressure": {"value": map_value, "band": interpret_map(map_value).value},
    }

    if args.json:
        _print_json(result)
    else:
        _print_banner(f"Reading {args.systolic}/{args.diastolic} mmHg ({guideline.value})")
        print(f"Category:       {category.value}")
        print(f"Valid:          {'yes' if validation.is_valid else 'no'}")
        if validation.errors:
            print(f"Errors:         {', '.join(validation.errors)}")
        print(f"Pulse pressure: {pp} mmHg ({interpret_pulse_pressure(pp).value})")
        print(f"MAP:            {map_value} mmHg ({interpret_map(map_value).value})")
        print(f"{'=' * 60}\n")

    return 0 if validation.is_valid else 1


def cmd_report(args: argparse.Namespace, config: dict) -> int:
    """Handle report command."""
    guideline = get_guideline(args, config)
    readings = load_readings(args.file)
    stats = aggregate(readings, guideline)

    if args.json:
        _print_json({"guideline": guideline.value, **stats.to_dict()})
        return 0

    _print_banner(f"Report ({guideline.value})")
    print(f"Readings:       {stats.total}")
    print(f"Average:        {stats.avg_systolic}/{stats.avg_diastolic} mmHg")
    print(f"Systolic:       {stats.min_systolic} - {stats.max_systolic} mmHg")
    print(f"Diastolic:      {stats.min_diastolic} - {stats.max_diastolic} mmHg")
    print(f"Pulse:          {stats.avg_pulse} bpm")
    print(f"Pulse pressure: {stats.avg_pulse_pressure} mmHg")
    print(f"MAP:            {stats.avg_map} mmHg")
    for stat in stats.category_breakdown:
        print(f"  {stat.category.value:<10} {stat.count:>4} ({stat.percent}%)  {stat.range}")
    print(f"{'=' * 60}\n")
    return 0


def cmd_insights(args: argparse.Namespace, config: dict) -> int:
    """Handle insights command."""
    guideline = get_guideline(args, config)
    tz = get_timezone(config)
    min_delta = config.get("analysis", {}).get("min_tag_delta", 3)

    readings, tags = load_export(args.file)

    circadian = breakdown(readings, tz)
    tir = time_in_range(readings, guideline, tz)
    surge = detect_surge(readings, tz=tz)
    correlations = [c for c in correlate(readings, tags) if abs(c.avg_systolic_delta) >= min_delta]

    if args.json:
        _print_json(
            {
                "guideline": guideline.value,
                "circadian": circadian.to_dict(),
                "time_in_range": tir.to_dict(),
                "morning_surge": surge.to_dict(),
                "tag_correlations": [c.to_dict() for c in correlations],
            }
        )
        return 0

    _print_banner(f"Insights ({guideline.value}, {len(readings)} readings)")
    for part in DAY_PARTS:
        avg = circadian.average(part)
        summary = f"{avg.systolic}/{avg.diastolic} mmHg (n={avg.count})" if avg else "no data"
        in_range = tir.window(part)
        print(f"{part.value:<8} {summary:<26} normal {in_range[Category.NORMAL]}%")
    print(
        f"Morning surge:  {'yes' if surge.has_surge else 'no'}"
        f"{f' (+{surge.delta} mmHg)' if surge.has_surge else ''}"
    )
    if correlations:
        print("Tag correlations:")
        for c in correlations:
            print(
                f"  {c.tag:<12} {c.avg_systolic_delta:+d}/{c.avg_diastolic_delta:+d} mmHg "
                f"({c.tagged_count} tagged, {c.untagged_count} untagged)"
            )
    print(f"{'=' * 60}\n")
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Blood pressure classification and insights",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default="config/config.yaml",
        help="Path to config file (default: config/config.yaml)",
    )
    parser.add_argument(
        "--debug",
        "-d",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--guideline",
        "-g",
        type=str,
        choices=[g.value for g in Guideline],
        help="Classification guideline (overrides config)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print results as JSON",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    classify_parser = subparsers.add_parser("classify", help="Classify a single reading")
    classify_parser.add_argument("systolic", type=int, help="Systolic pressure (mmHg)")
    classify_parser.add_argument("diastolic", type=int, help="Diastolic pressure (mmHg)")
    classify_parser.add_argument("--pulse", "-p", type=int, help="Pulse (bpm)")

    report_parser = subparsers.add_parser("report", help="Summary statistics for an export")
    report_parser.add_argument("file", type=str, help="CSV or JSON readings export")

    insights_parser = subparsers.add_parser("insights", help="Time-of-day and tag insights")
    insights_parser.add_argument("file", type=str, help="CSV or JSON readings export")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Load config
    config = load_config(args.config)

    # Setup logging
    if args.debug:
        config["logging"]["level"] = "DEBUG"
    setup_logging(config)

    commands = {
        "classify": cmd_classify,
        "report": cmd_report,
        "insights": cmd_insights,
    }

    try:
        sys.exit(commands[args.command](args, config))

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(130)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"{e}")
        if args.debug:
            raise
        sys.exit(1)


if __name__ == "__main__":
    main()
