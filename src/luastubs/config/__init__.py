# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Export configuration for luastubs."""

from luastubs.config.settings import (
    CONFIG_FILE_NAME,
    DEFAULT_CHUNK_SIZE,
    DEFAULT_FALLBACK_FILE,
    DEFAULT_FILE_PREFIX,
    MIN_CHUNK_SIZE,
    ConfigError,
    ExportConfig,
    default_config_text,
    load_config,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CHUNK_SIZE",
    "DEFAULT_FALLBACK_FILE",
    "DEFAULT_FILE_PREFIX",
    "MIN_CHUNK_SIZE",
    "ConfigError",
    "ExportConfig",
    "default_config_text",
    "load_config",
]
