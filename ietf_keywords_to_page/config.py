"""
Run options: command-line flags merged over an optional YAML config file.

The config file is called ``config.yaml`` (or ``config.yml``) and is looked
for in ``~/.ietf_keywords_to_page/``, then in the current directory. The
first one found wins. Example:

    infile: keywords.csv
    overview: true
    verbose: false

A flag given on the command line always beats the config file; anything set
in neither falls back to the defaults below.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

logger = logging.getLogger(__name__)

PROGRAM_NAME = "ietf_keywords_to_page"
CONFIG_NAMES = ("config.yaml", "config.yml")

BOOL_KEYS = ("overview", "verbose", "debug")
KNOWN_KEYS = ("infile",) + BOOL_KEYS


@dataclass(frozen=True)
class Options:
    infile: Optional[Path] = None
    overview: bool = False
    verbose: bool = False
    debug: bool = False


def default_search_paths() -> List[Path]:
    return [Path.home() / f".{PROGRAM_NAME}", Path.cwd()]


def find_config_file(search_paths: Sequence[Path]) -> Optional[Path]:
    for directory in search_paths:
        for name in CONFIG_NAMES:
            candidate = Path(directory) / name
            if candidate.is_file():
                return candidate
    return None


def read_config_file(path: Path) -> Dict[str, Any]:
    """Load and check one YAML config file. Empty files give ``{}``."""
    try:
        raw_text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Unable to read config file {path}: {exc}") from exc

    try:
        parsed = yaml.safe_load(raw_text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse config YAML at {path}: {exc}") from exc

    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ConfigError(f"{path}: top level must be a mapping, got {type(parsed).__name__}")

    unknown = sorted(str(k) for k in parsed if k not in KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{path}: unknown config keys: {', '.join(unknown)}")

    for key in BOOL_KEYS:
        if key in parsed and not isinstance(parsed[key], bool):
            raise ConfigError(f"{path}: '{key}' must be true or false, got {parsed[key]!r}")

    infile = parsed.get("infile")
    if infile is not None and not isinstance(infile, str):
        raise ConfigError(f"{path}: 'infile' must be a path string, got {infile!r}")

    return parsed


def load_options(args: argparse.Namespace, search_paths: Optional[Sequence[Path]] = None) -> Options:
    """
    Merge parsed flags with the config file into an ``Options`` value.

    ``args`` attributes are ``None`` when the flag was not given, so only
    explicit flags override the file.
    """
    if search_paths is None:
        search_paths = default_search_paths()

    config_path = find_config_file(search_paths)
    if config_path is None:
        logger.debug("No config file (%s) found.", " / ".join(CONFIG_NAMES))
        file_values: Dict[str, Any] = {}
    else:
        logger.debug("Using config file %s", config_path)
        file_values = read_config_file(config_path)

    merged: Dict[str, Any] = {}
    for key in KNOWN_KEYS:
        flag_value = getattr(args, key, None)
        if flag_value is not None:
            merged[key] = flag_value
        elif key in file_values:
            merged[key] = file_values[key]

    infile = merged.get("infile")
    return Options(
        infile=Path(infile) if infile else None,
        overview=bool(merged.get("overview", False)),
        verbose=bool(merged.get("verbose", False)),
        debug=bool(merged.get("debug", False)),
    )
