"""Loading default :class:`~safedecimal.format.FormatOptions` from TOML files.

A configuration file holds a single ``[format]`` table::

    [format]
    radix = 10
    rounding = "half-even"
    max_decimals = 8
"""
from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any, Mapping, Union

from .format import DEFAULT_OPTIONS, FormatOptions

FORMAT_KEYS = ("radix", "rounding", "max_decimals")


def format_options_from_mapping(mapping: Mapping[str, Any]) -> FormatOptions:
    """Validate *mapping* and build :class:`FormatOptions` from it."""
    unknown = sorted(set(mapping) - set(FORMAT_KEYS))
    if unknown:
        raise ValueError(f"Unknown format option(s): {', '.join(unknown)}")
    if not mapping:
        return DEFAULT_OPTIONS
    return FormatOptions(**mapping)


def load_format_options(path: Union[str, Path]) -> FormatOptions:
    """Read the ``[format]`` table of the TOML file at *path*."""
    config_path = Path(path).expanduser()
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open("rb") as fh:
        params = tomllib.load(fh)

    table = params.get("format", {})
    if not isinstance(table, dict):
        raise ValueError(f"[format] in {config_path} must be a table")
    return format_options_from_mapping(table)


__all__ = ["FORMAT_KEYS", "format_options_from_mapping", "load_format_options"]
