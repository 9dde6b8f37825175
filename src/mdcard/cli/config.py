#  Copyright (c) 2025 Tom Villani, Ph.D.

"""Configuration file discovery and loading for the mdcard CLI.

This module handles automatic discovery of configuration files, loading
configs from JSON, TOML or YAML format, reading ``MDCARD_*`` environment
variables, and merging everything into option objects with proper priority
handling (defaults < config file < environment < command line).

Config files use the ``RenderOptions`` field names at the top level and an
optional ``markdown`` table for ``MarkdownParserOptions``::

    template = "book"
    watermark = true
    width = 420

    [font_paths]
    sans-serif = "/usr/share/fonts/noto/NotoSansCJK-Regular.ttc"

    [markdown]
    preserve_soft_breaks = false

"""

import argparse
import json
import logging
import os
import sys
from dataclasses import fields
from pathlib import Path

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib  # type: ignore[import-not-found,unused-ignore]
from typing import Any, Dict, Mapping, Optional

import yaml

from mdcard.constants import CONFIG_FILENAMES, ENV_PREFIX
from mdcard.options.markdown import MarkdownParserOptions
from mdcard.options.render import RenderOptions

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MDCARD_CONFIG"
MARKDOWN_SECTION = "markdown"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def _load_pyproject_mdcard_section(pyproject_path: Path) -> Dict[str, Any]:
    """Load [tool.mdcard] section from pyproject.toml file.

    Parameters
    ----------
    pyproject_path : Path
        Path to pyproject.toml file

    Returns
    -------
    dict
        Configuration dictionary from [tool.mdcard] section, or empty dict if not found

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

    config = data.get("tool", {}).get("mdcard")
    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"[tool.mdcard] section in {pyproject_path} must be a table, got {type(config).__name__}"
        )
    return config


def find_config_in_parents(start_dir: Optional[Path] = None) -> Optional[Path]:
    """Find configuration file by searching parent directories.

    Walks up the directory tree from start_dir to the filesystem root,
    checking each directory for ``.mdcard.toml``, ``.mdcard.yaml``,
    ``.mdcard.yml``, ``.mdcard.json`` and finally a ``pyproject.toml``
    with a ``[tool.mdcard]`` section.

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
                if _load_pyproject_mdcard_section(pyproject_path):
                    return pyproject_path
            except argparse.ArgumentTypeError:
                logger.debug("Skipping unreadable %s", pyproject_path)

        parent = current.parent
        if parent == current:
            break
        current = parent

    return None


def discover_config_file(start_dir: Optional[Path] = None, home: Optional[Path] = None) -> Optional[Path]:
    """Discover configuration file in standard locations.

    Searches parent directories from ``start_dir`` (default cwd) up to the
    filesystem root, then the user home directory.

    Returns
    -------
    Path or None
        Path to discovered config file, or None if not found

    """
    config_in_parents = find_config_in_parents(start_dir)
    if config_in_parents:
        return config_in_parents

    home = home or Path.home()
    for filename in CONFIG_FILENAMES:
        config_path = home / filename
        if config_path.is_file():
            return config_path

    return None


def load_config_file(config_path: Path | str) -> Dict[str, Any]:
    """Load configuration from JSON, TOML, YAML, or pyproject.toml file.

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
    >>> config = load_config_file(".mdcard.toml")
    >>> print(config.get("template"))
    book

    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise argparse.ArgumentTypeError(f"Configuration file does not exist: {config_path}")

    if not config_path.is_file():
        raise argparse.ArgumentTypeError(f"Configuration path is not a file: {config_path}")

    filename = config_path.name.lower()
    ext = config_path.suffix.lower()

    if filename == "pyproject.toml":
        return _load_pyproject_mdcard_section(config_path)

    try:
        if ext == ".toml":
            with open(config_path, "rb") as f:
                config = tomllib.load(f)
        elif ext in (".yaml", ".yml"):
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        elif ext == ".json":
            with open(config_path, "r", encoding="utf-8") as f:
                config = json.load(f)
        else:
            raise argparse.ArgumentTypeError(f"Unsupported config file format: {ext}. Use .json, .toml, or .yaml")
    except (tomllib.TOMLDecodeError, yaml.YAMLError, json.JSONDecodeError) as e:
        raise argparse.ArgumentTypeError(f"Invalid config file {config_path}: {e}") from e
    except OSError as e:
        raise argparse.ArgumentTypeError(f"Error reading config file {config_path}: {e}") from e

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise argparse.ArgumentTypeError(
            f"Config file {config_path} must contain a mapping, got {type(config).__name__}"
        )
    return config


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Merge two configuration dictionaries with deep merging.

    The override dictionary takes precedence over base for conflicting keys.
    Nested dictionaries are merged recursively, not replaced entirely.

    Examples
    --------
    >>> merge_configs({"markdown": {"a": 1}, "width": 300}, {"markdown": {"b": 2}, "width": 400})
    {'markdown': {'a': 1, 'b': 2}, 'width': 400}

    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def _coerce_env_value(name: str, raw: str, target: Any) -> Any:
    if target is bool:
        lowered = raw.strip().lower()
        if lowered in _TRUE_VALUES:
            return True
        if lowered in _FALSE_VALUES:
            return False
        raise argparse.ArgumentTypeError(f"Environment variable {name} must be a boolean, got {raw!r}")
    if target in (int, float):
        try:
            return target(raw)
        except ValueError as e:
            raise argparse.ArgumentTypeError(
                f"Environment variable {name} must be {target.__name__}, got {raw!r}"
            ) from e
    return raw


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Read option overrides from ``MDCARD_<OPTION>`` environment variables.

    Option names are upper-cased (``MDCARD_PIXEL_RATIO``). Parser options
    use the ``MDCARD_MARKDOWN_`` prefix. ``MDCARD_FONT_PATHS`` is not read;
    font overrides belong in a config file.

    Parameters
    ----------
    environ : mapping, optional
        Environment to read, defaults to ``os.environ``

    Returns
    -------
    dict
        Configuration dictionary shaped like a config file

    Raises
    ------
    argparse.ArgumentTypeError
        If a value cannot be converted to the option's type

    """
    environ = os.environ if environ is None else environ
    config: Dict[str, Any] = {}

    for option in fields(RenderOptions):
        if option.name == "font_paths":
            continue
        name = f"{ENV_PREFIX}{option.name.upper()}"
        if name in environ:
            config[option.name] = _coerce_env_value(name, environ[name], option.metadata.get("type", str))

    markdown: Dict[str, Any] = {}
    for option in fields(MarkdownParserOptions):
        name = f"{ENV_PREFIX}{MARKDOWN_SECTION.upper()}_{option.name.upper()}"
        if name in environ:
            markdown[option.name] = _coerce_env_value(name, environ[name], option.metadata.get("type", str))
    if markdown:
        config[MARKDOWN_SECTION] = markdown

    return config


def load_config_with_priority(
    explicit_path: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    start_dir: Optional[Path] = None,
) -> Dict[str, Any]:
    """Load the file configuration and environment overrides.

    File priority (highest to lowest):
    1. Explicit config file path (--config flag)
    2. Environment variable config path (MDCARD_CONFIG)
    3. Auto-discovered config file

    Environment option variables are merged over the file configuration.

    Returns
    -------
    dict
        Merged configuration dictionary (empty if nothing was found)

    Raises
    ------
    argparse.ArgumentTypeError
        If a config file is specified but cannot be loaded

    """
    environ = os.environ if environ is None else environ

    config_path: Optional[Path | str] = explicit_path or environ.get(CONFIG_ENV_VAR) or discover_config_file(start_dir)
    file_config: Dict[str, Any] = {}
    if config_path:
        logger.debug("Loading configuration from %s", config_path)
        file_config = load_config_file(config_path)

    return merge_configs(file_config, load_env_config(environ))


def build_options(
    config: Mapping[str, Any], overrides: Optional[Mapping[str, Any]] = None
) -> tuple[RenderOptions, MarkdownParserOptions]:
    """Create option objects from a merged configuration.

    Parameters
    ----------
    config : mapping
        Configuration from ``load_config_with_priority``
    overrides : mapping, optional
        Command-line values; ``None`` entries are ignored

    Returns
    -------
    tuple of (RenderOptions, MarkdownParserOptions)

    Raises
    ------
    argparse.ArgumentTypeError
        If a value is invalid for its option

    """
    render_names = set(RenderOptions.field_names())
    render_values: Dict[str, Any] = {}
    markdown_values: Dict[str, Any] = {}

    for key, value in config.items():
        normalized = key.replace("-", "_")
        if normalized == MARKDOWN_SECTION and isinstance(value, dict):
            markdown_values.update({k.replace("-", "_"): v for k, v in value.items()})
        elif normalized in render_names:
            render_values[normalized] = value
        else:
            logger.warning("Ignoring unknown configuration key: %s", key)

    for key, value in (overrides or {}).items():
        if value is not None:
            render_values[key] = value

    unknown_markdown = set(markdown_values) - set(MarkdownParserOptions.field_names())
    if unknown_markdown:
        logger.warning("Ignoring unknown markdown configuration keys: %s", ", ".join(sorted(unknown_markdown)))
        markdown_values = {k: v for k, v in markdown_values.items() if k not in unknown_markdown}

    if "font_paths" in render_values and not isinstance(render_values["font_paths"], dict):
        raise argparse.ArgumentTypeError("font_paths must be a table of family = path entries")

    try:
        return RenderOptions(**render_values), MarkdownParserOptions(**markdown_values)
    except (TypeError, ValueError) as e:
        raise argparse.ArgumentTypeError(f"Invalid configuration: {e}") from e
