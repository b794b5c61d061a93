"""Configuration loading utilities for the bid comparison CLI."""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping

import yaml

from .models import ReconcileOptions

OUTPUT_FORMATS = ("table", "json")


@dataclass
class ComparisonConfig:
    """View toggles applied to the comparison matrix."""

    include_optional: bool = True
    only_differences: bool = False
    group_by_category: bool = True
    estimate_active: bool = False

    def options(self) -> ReconcileOptions:
        return ReconcileOptions(
            include_optional=self.include_optional,
            only_differences=self.only_differences,
            group_by_category=self.group_by_category,
        )


@dataclass
class OutputConfig:
    """How comparison results are written to the console."""

    format: str = "table"
    show_summary: bool = True


@dataclass
class AppConfig:
    """Container for all configuration required by the CLI."""

    bids: Path
    comparison: ComparisonConfig = field(default_factory=ComparisonConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def resolved(self, base_path: Path) -> "AppConfig":
        return AppConfig(
            bids=_resolve_path(self.bids, base_path),
            comparison=self.comparison,
            output=self.output,
        )


def load_config(path: Path) -> AppConfig:
    """Load :class:`AppConfig` from a YAML file."""

    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file '{config_path}' does not exist")

    with config_path.open("r", encoding="utf-8") as stream:
        raw_config: Mapping[str, Any] = yaml.safe_load(stream) or {}

    paths_section = raw_config.get("paths") or {}
    if "bids" not in paths_section:
        raise ValueError("Configuration must define 'paths.bids'")

    comparison = ComparisonConfig(**_parse_flags(ComparisonConfig, raw_config.get("comparison") or {}))
    output = _parse_output_section(raw_config.get("output") or {})

    config = AppConfig(
        bids=Path(paths_section["bids"]),
        comparison=comparison,
        output=output,
    )
    return config.resolved(config_path.parent)


def _parse_flags(cls: type, section: Mapping[str, Any]) -> Dict[str, bool]:
    known = {info.name for info in fields(cls)}
    unknown = set(section) - known
    if unknown:
        raise ValueError(f"Unknown comparison settings: {', '.join(sorted(unknown))}")
    return {key: _parse_bool(key, value) for key, value in section.items()}


def _parse_bool(key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"Setting '{key}' must be true or false, got {value!r}")
    return value


def _parse_output_section(section: Mapping[str, Any]) -> OutputConfig:
    output = OutputConfig()
    if "format" in section:
        fmt = str(section["format"]).strip().lower()
        if fmt not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format '{section['format']}'")
        output.format = fmt
    if "show_summary" in section:
        output.show_summary = _parse_bool("show_summary", section["show_summary"])
    return output


def _resolve_path(path: Path, base_path: Path) -> Path:
    expanded = Path(path).expanduser()
    if expanded.is_absolute():
        return expanded
    return (base_path / expanded).resolve()


__all__ = [
    "OUTPUT_FORMATS",
    "AppConfig",
    "ComparisonConfig",
    "OutputConfig",
    "load_config",
]
