"""Command line interface for comparing shipping bids."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

import numpy as np
import pandas as pd
import yaml

from .comparison import ComparisonResult, compare_bids
from .config import OUTPUT_FORMATS, AppConfig, load_config
from .io import load_bids
from .models import Bid
from .reporting import bid_labels, comparison_frame, result_to_dict, summary_frame

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("config/config.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Compare itemized shipping bids side by side")
    parser.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to YAML configuration")
    parser.add_argument("--bids", type=Path, help="Override path to the YAML/JSON bid file")
    optional_group = parser.add_mutually_exclusive_group()
    optional_group.add_argument(
        "--include-optional",
        dest="include_optional",
        action="store_true",
        default=None,
        help="Show rows that every bid marks as optional",
    )
    optional_group.add_argument(
        "--exclude-optional",
        dest="include_optional",
        action="store_false",
        help="Hide rows that every bid marks as optional",
    )
    parser.add_argument(
        "--only-differences",
        action="store_true",
        default=None,
        help="Show only rows where the bids disagree",
    )
    parser.add_argument("--flat", action="store_true", default=None, help="Do not group rows by category")
    parser.add_argument(
        "--estimate-active",
        action="store_true",
        default=None,
        help="Treat the estimate as still open when describing hidden breakdowns",
    )
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="Output format")
    parser.add_argument("--no-summary", action="store_true", help="Omit the per-bid summary table")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING)")
    return parser


def main(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.WARNING),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )

    try:
        config = _load_or_default(args)
        _apply_overrides(config, args)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 1

    try:
        bids = load_bids(config.bids)
    except (FileNotFoundError, ValueError, yaml.YAMLError) as exc:
        logger.exception("Failed to load bids: %s", exc)
        return 1

    if not bids:
        logger.warning("No bids found in %s", config.bids)
        return 0

    result = compare_bids(
        bids,
        config.comparison.options(),
        estimate_active=config.comparison.estimate_active,
    )

    if config.output.format == "json":
        print(json.dumps(result_to_dict(result), ensure_ascii=False, indent=2, default=str))
    else:
        _print_tables(result, bids, show_summary=config.output.show_summary)
    return 0


def _load_or_default(args: argparse.Namespace) -> AppConfig:
    config_path = Path(args.config).expanduser()
    if not config_path.exists() and args.bids:
        return AppConfig(bids=_resolve_override_path(args.bids))
    return load_config(config_path)


def _apply_overrides(config: AppConfig, args: argparse.Namespace) -> None:
    if args.bids:
        config.bids = _resolve_override_path(args.bids)

    if args.include_optional is not None:
        config.comparison.include_optional = args.include_optional

    if args.only_differences:
        config.comparison.only_differences = True

    if args.flat:
        config.comparison.group_by_category = False

    if args.estimate_active:
        config.comparison.estimate_active = True

    if args.format:
        config.output.format = args.format

    if args.no_summary:
        config.output.show_summary = False


def _resolve_override_path(path: Path) -> Path:
    path = Path(path).expanduser()
    if path.is_absolute():
        return path
    return (Path.cwd() / path).resolve()


def _print_tables(result: ComparisonResult, bids: List[Bid], show_summary: bool) -> None:
    if show_summary:
        summary = summary_frame(result.summaries, bids)
        for column in ("price", "derived_total"):
            summary[column] = summary[column].apply(_format_float)
        print("Bid summary:")
        print(summary.to_string(index=False))
        print()

    frame = comparison_frame(result.display, bids)
    if frame.empty:
        print("No services match the current filters.")
        return

    markers = frame["kind"] == "category"
    printable = pd.DataFrame(
        {
            "category": frame["category"].where(markers, "") if markers.any() else frame["category"],
            "description": frame["description"],
        }
    )
    for label in bid_labels(bids):
        printable[label] = [
            _format_cell(kind, amount, optional)
            for kind, amount, optional in zip(frame["kind"], frame[label], frame[f"{label} optional"])
        ]
    print("Line item comparison:")
    print(printable.to_string(index=False))


def _format_cell(kind: str, amount: float, optional: bool) -> str:
    if kind == "category":
        return ""
    text = _format_float(amount)
    if optional and text != "-":
        text += " (optional)"
    return text


def _format_float(value: float) -> str:
    try:
        if value is None or (isinstance(value, float) and np.isnan(value)):
            return "-"
        return f"{float(value):,.2f}"
    except (TypeError, ValueError):  # pragma: no cover - formatting fallback
        return str(value)


if __name__ == "__main__":  # pragma: no cover - manual execution entry point
    raise SystemExit(main())
