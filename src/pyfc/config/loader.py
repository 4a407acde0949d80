"""Load and merge configuration from .pyfc.toml / .pyfc.yaml, env vars, and CLI flags."""

from __future__ import annotations

import dataclasses
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import yaml

from pyfc.config.schema import CompareConfig, CompareOptions, OutputConfig, PyfcConfig
from pyfc.text.encoding import narrow

CONFIG_NAMES = (".pyfc.toml", ".pyfc.yaml", ".pyfc.yml")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


class ConfigError(Exception):
    """Raised when config is malformed or unreadable."""


def find_config_file(base_dir: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    for name in CONFIG_NAMES:
        candidate = base_dir / name
        if candidate.is_file():
            return candidate
    return None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _parse_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Failed to parse {path}: top level must be a mapping")
    return data


def _parse_file(path: Path) -> Dict[str, Any]:
    if path.suffix in (".yaml", ".yml"):
        return _parse_yaml(path)
    return _parse_toml(path)


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a config section dict, ignoring unknown keys."""
    raw = data.get(section) or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _env_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in _TRUE:
        return True
    if lowered in _FALSE:
        return False
    return None


def _env_int(value: str) -> Optional[int]:
    try:
        number = int(value)
    except ValueError:
        return None
    return number if number > 0 else None


def _merge_env_overrides(cfg: PyfcConfig) -> None:
    """Apply PYFC_* environment variable overrides. Invalid values are ignored."""
    if val := os.environ.get("PYFC_RESYNC_WINDOW"):
        if (number := _env_int(val)) is not None:
            cfg.compare.resync_window = number
    if val := os.environ.get("PYFC_CHUNK_SIZE"):
        if (number := _env_int(val)) is not None:
            cfg.compare.chunk_size = number
    if val := os.environ.get("PYFC_FORMAT"):
        if val in ("terminal", "json"):
            cfg.output.format = val  # type: ignore[assignment]
    if val := os.environ.get("PYFC_ENCODING"):
        cfg.compare.encoding = val
    if val := os.environ.get("PYFC_IGNORE_CASE"):
        if (flag := _env_bool(val)) is not None:
            cfg.compare.ignore_case = flag


def _check_encoding(codec: str) -> None:
    """Reject codecs that cannot be split into lines a byte at a time."""
    try:
        narrow(codec)
    except LookupError as exc:
        raise ConfigError(f"Unknown encoding: {codec}") from exc
    except ValueError as exc:
        raise ConfigError(f"Unsupported encoding: {exc}; use --unicode (-u) for UTF-16LE files") from exc


def _validate(cfg: PyfcConfig) -> None:
    cmp = cfg.compare
    for name in ("resync_window", "min_resync_run", "chunk_size"):
        value = getattr(cmp, name)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"compare.{name} must be a positive integer, got {value!r}")
    _check_encoding(cmp.encoding)
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"Invalid output format: {cfg.output.format}")


def load_config(
    base_dir: Path,
    config_override: Optional[str] = None,
) -> PyfcConfig:
    """Load, validate, and return a PyfcConfig."""
    config_path = find_config_file(base_dir, config_override)

    if config_path is None:
        cfg = PyfcConfig()
    else:
        raw = _parse_file(config_path)
        try:
            cfg = PyfcConfig(
                version=str(raw.get("version", "1.0")),
                compare=_build_section(raw, CompareConfig, "compare"),
                output=_build_section(raw, OutputConfig, "output"),
            )
        except TypeError as exc:
            raise ConfigError(f"Invalid config in {config_path}: {exc}") from exc

    _merge_env_overrides(cfg)
    _validate(cfg)
    return cfg


def build_options(
    cfg: PyfcConfig,
    *,
    binary_forced: bool = False,
    force_text: bool = False,
    ignore_case: bool = False,
    compress_whitespace: bool = False,
    literal_tabs: bool = False,
    wide_text: bool = False,
    abbreviate: bool = False,
    line_numbers: bool = False,
    offline: bool = False,
    resync_window: Optional[int] = None,
    min_resync_run: Optional[int] = None,
    encoding: Optional[str] = None,
) -> CompareOptions:
    """Freeze config values plus CLI switches into CompareOptions.

    Switches can only turn behaviour on; numeric flags replace config values
    when given.
    """
    cmp = cfg.compare
    if encoding:
        _check_encoding(encoding)
    try:
        return CompareOptions(
            binary_forced=binary_forced,
            force_text=force_text,
            ignore_case=ignore_case or cmp.ignore_case,
            compress_whitespace=compress_whitespace or cmp.compress_whitespace,
            literal_tabs=literal_tabs or cmp.literal_tabs,
            wide_text=wide_text or cmp.unicode,
            abbreviate=abbreviate or cmp.abbreviate,
            line_numbers=line_numbers or cmp.line_numbers,
            resync_window=resync_window if resync_window is not None else cmp.resync_window,
            min_resync_run=min_resync_run if min_resync_run is not None else cmp.min_resync_run,
            offline=offline,
            encoding=encoding or cmp.encoding,
            chunk_size=cmp.chunk_size,
        )
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
