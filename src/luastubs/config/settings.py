# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the luastubs export configuration file."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

CONFIG_FILE_NAME = ".luastubs.yaml"

DEFAULT_FILE_PREFIX = "xlua_dump_"
DEFAULT_FALLBACK_FILE = "xlua_noexport_types.lua"
DEFAULT_CHUNK_SIZE = 500 * 1024
# Must stay well above the size of the chunk preamble.
MIN_CHUNK_SIZE = 1024


class ConfigError(Exception):
    """Raised when a configuration file is invalid or cannot be loaded."""


@dataclass
class ExportConfig:
    """Settings for one export run.

    Attributes:
        output_directory: Directory receiving the generated files, or None
            when it has to be given on the command line.
        file_prefix: Name prefix of the numbered definition files.
        fallback_file: Name of the file holding aliases for unexported types.
        chunk_size: Size in bytes after which a definition file is closed and
            a new one is started.
        merge_generics: Whether closed generic instantiations are merged into
            one declaration before export.
    """

    output_directory: str | None = None
    file_prefix: str = DEFAULT_FILE_PREFIX
    fallback_file: str = DEFAULT_FALLBACK_FILE
    chunk_size: int = DEFAULT_CHUNK_SIZE
    merge_generics: bool = True


def load_config(path: Path) -> ExportConfig:
    """Load and parse a luastubs configuration file.

    Args:
        path: Path to the ``.luastubs.yaml`` file.

    Returns:
        An ExportConfig populated from the file; absent keys keep their defaults.

    Raises:
        ConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}") from None
    except OSError as exc:
        raise ConfigError(f"Cannot read config file: {exc}") from exc

    return _parse_config(text, source_label=str(path))


def default_config_text() -> str:
    """Return the content written by ``luastubs init``."""
    return (
        "# luastubs export configuration\n"
        "\n"
        "output-directory: lua-types\n"
        f"file-prefix: {DEFAULT_FILE_PREFIX}\n"
        f"fallback-file: {DEFAULT_FALLBACK_FILE}\n"
        f"chunk-size: {DEFAULT_CHUNK_SIZE}\n"
        "merge-generics: true\n"
    )


# ################
# Implementation
# ################

_KNOWN_KEYS = frozenset({"output-directory", "file-prefix", "fallback-file", "chunk-size", "merge-generics"})


def _parse_config(text: str, source_label: str = "<string>") -> ExportConfig:
    """Parse configuration YAML text into an ExportConfig.

    An empty document yields the default configuration.

    Raises:
        ConfigError: If the YAML is invalid, a key is unknown, or a value has
            the wrong type.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if data is None:
        return ExportConfig()

    if not isinstance(data, dict):
        raise ConfigError(f"{source_label}: configuration must be a YAML mapping")

    unknown = sorted(str(key) for key in data if key not in _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{source_label}: unknown field(s): {', '.join(unknown)}")

    config = ExportConfig()
    if "output-directory" in data:
        config.output_directory = _require_string(data, "output-directory", source_label)
    if "file-prefix" in data:
        config.file_prefix = _require_string(data, "file-prefix", source_label)
    if "fallback-file" in data:
        config.fallback_file = _require_string(data, "fallback-file", source_label)
    if "chunk-size" in data:
        config.chunk_size = _require_positive_int(data, "chunk-size", source_label)
        if config.chunk_size < MIN_CHUNK_SIZE:
            raise ConfigError(f"{source_label}: 'chunk-size' must be at least {MIN_CHUNK_SIZE} bytes")
    if "merge-generics" in data:
        value = data["merge-generics"]
        if not isinstance(value, bool):
            raise ConfigError(f"{source_label}: 'merge-generics' must be a boolean")
        config.merge_generics = value
    return config


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    value = mapping[key]
    if not isinstance(value, str) or not value:
        raise ConfigError(f"{source_label}: '{key}' must be a non-empty string")
    return value


def _require_positive_int(mapping: dict[str, object], key: str, source_label: str) -> int:
    value = mapping[key]
    # bool is a subclass of int and must not pass as a size.
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ConfigError(f"{source_label}: '{key}' must be a positive integer")
    return value
