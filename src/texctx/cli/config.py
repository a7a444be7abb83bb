#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the texctx CLI.

This module handles automatic discovery of configuration files, loading
configs from TOML, YAML or JSON, and turning the loaded mapping into the
options objects the library functions take.

A configuration file has one table per options class::

    [context]
    max_hops = 500
    extra_math_environments = ["dmath"]

    [latex]
    strict_mode = true

    [math_toggle]
    indent_unit = "  "

    [inspections]
    missing_label_minimum_level = "section"

"""

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Optional

import yaml

from texctx.constants import CONFIG_FILENAMES, PYPROJECT_TOOL_SECTION
from texctx.options import ContextOptions, InspectionOptions, LatexOptions, MathToggleOptions, options_from_mapping

logger = logging.getLogger(__name__)

CONFIG_SECTIONS = {
    "context": ContextOptions,
    "latex": LatexOptions,
    "math_toggle": MathToggleOptions,
    "inspections": InspectionOptions,
}


@dataclass(frozen=True)
class ResolvedOptions:
    """Options for every library component, resolved from a configuration mapping."""

    context: ContextOptions = field(default_factory=ContextOptions)
    latex: LatexOptions = field(default_factory=LatexOptions)
    math_toggle: MathToggleOptions = field(default_factory=MathToggleOptions)
    inspections: InspectionOptions = field(default_factory=InspectionOptions)


def _load_pyproject_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load the [tool.texctx] section from a pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.texctx], or empty dict if not found

    Raises
    ------
    argparse.ArgumentTypeError
        If pyproject.toml cannot be parsed

    """
    try:
        with open(pyproject_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in pyproject.toml {pyproject_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading pyproject.toml {pyproject_path}: {e}") from e

    config = data.get("tool", {}).get(PYPROJECT_TOOL_SECTION)
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.{PYPROJECT_TOOL_SECTION}] section in {pyproject_path} must be a table, "
            f"got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find a configuration file by searching parent directories.

    Walks up from ``start_dir`` to the filesystem root. In each directory
    the dedicated files (``.texctx.toml``, ``.texctx.yaml``, ``.texctx.yml``,
    ``.texctx.json``) are checked first, then ``pyproject.toml`` with a
    ``[tool.texctx]`` section.

    Parameters
    ----------
    start_dir : Path, optional
        Starting directory for search, defaults to current working directory

    Returns
    -------
    Path or None
        Path to first config file found, or None if not found

    """
    current = (start_dir or Path.cwd()).resolve()

    while True:
        for filename in CONFIG_FILENAMES:
            config_path = current / filename
            if config_path.is_file():
                return config_path

        pyproject_path = current / "pyproject.toml"
        if pyproject_path.is_file():
            try:
                if _load_pyproject_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError as e:
                logger.debug(f"Skipping unreadable {pyproject_path}: {e}")

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Discover a configuration file in the standard locations.

    The parent directories of ``start_dir`` (default: the working directory)
    are searched first, then the user's home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from a JSON, TOML, YAML or pyproject.toml file.

    The format is chosen from the file name and extension.

    Parameters
    ----------
    config_path : Path or str
        Path to the configuration file

    Returns
    -------
    dict
        Configuration dictionary loaded from file

    Raises
    ------
    argparse.ArgumentTypeError
        If the file cannot be read, parsed, or has invalid format

    Examples
    --------
    >>> config = load_config_file(".texctx.toml")
    >>> config.get("math_toggle", {}).get("indent_unit")
    '  '

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_section(config_path)
    elif ext == ".toml":
        return _load_toml_config(config_path)
    elif ext in (".yaml", ".yml"):
        return _load_yaml_config(config_path)
    elif ext == ".json":
        return _load_json_config(config_path)
    else:
        raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")


def _load_toml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid TOML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading TOML config {config_path}: {e}") from e


def _load_json_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = json.load(f)
    except json.JSONDecodeError as e:
        raise argparse.ArgumentTypeError(f"Invalid JSON in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading JSON config {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"JSON config file must contain an object, got {type(config).__name__}")
    return config


def _load_yaml_config(config_path: Path) -> Dict[str, Any]:
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise argparse.ArgumentTypeError(f"Invalid YAML in config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading YAML config {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(f"YAML config file must contain a mapping, got {type(config).__name__}")
    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None, env_var_path: Optional[str] = None
) -> Dict[str, Any]:
    """Load configuration with proper priority handling.

    Priority order (highest to lowest):

    1. Explicit config file path (--config flag)
    2. Environment variable config path (TEXCTX_CONFIG)
    3. Auto-discovered config file

    Parameters
    ----------
    explicit_path : str, optional
        Explicit config file path from --config flag
    env_var_path : str, optional
        Config file path from the TEXCTX_CONFIG environment variable

    Returns
    -------
    dict
        Loaded configuration dictionary (empty dict if no config found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    if explicit_path:
        return load_config_file(explicit_path)

    if env_var_path:
        return load_config_file(env_var_path)

    discovered_path = discover_config_file()
    if discovered_path:
        logger.debug(f"Using configuration file {discovered_path}")
        return load_config_file(discovered_path)

    return {}


def resolve_options(config: Dict[str, Any]) -> ResolvedOptions:
    """Build the options objects from a loaded configuration mapping.

    Section names may use hyphens or underscores. Unknown sections are
    logged and ignored.

    Raises
    ------
    argparse.ArgumentTypeError
        If a section is not a table
    ValidationError
        If a value is rejected by its options class

    """
    sections: Dict[str, Any] = {}
    for raw_name, values in config.items():
        name = str(raw_name).replace("-", "_")
        if name not in CONFIG_SECTIONS:
            logger.warning(f"Ignoring unknown configuration section: {raw_name}")
            continue
        if not isinstance(values, dict):
            raise argparse.ArgumentTypeError(
                f"Configuration section [{raw_name}] must be a table, got {type(values).__name__}"
            )
        sections[name] = options_from_mapping(CONFIG_SECTIONS[name], values)
    return ResolvedOptions(**sections)


__all__ = [
    "ResolvedOptions",
    "discover_config_file",
    "find_config_in_parents",
    "load_config_file",
    "load_config_with_priority",
    "resolve_options",
]
