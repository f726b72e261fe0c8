# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for type models (empty names, malformed namespaces, duplicates)."""

from luastubs.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

__all__ = [
    "ValidationError",
    "ValidationResult",
    "ValidationWarning",
    "validate",
]
