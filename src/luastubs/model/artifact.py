# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Reading and writing the JSON type model handed over by the symbol provider.

The document is versioned so that a provider emitting a newer schema is
detected instead of being half understood.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, ValidationError
from pydantic import Field as _Field

from luastubs.model.declarations import TypeDeclaration

# ###############
# Public Interface
# ###############

TYPE_MODEL_FORMAT_VERSION = "1"


class TypeModelError(Exception):
    """Raised when a type model document cannot be read or is invalid."""


def serialize(declarations: Sequence[TypeDeclaration]) -> str:
    """Serialize declarations to a compact JSON string."""
    document = _TypeModelDocument(v=TYPE_MODEL_FORMAT_VERSION, types=list(declarations))
    return json.dumps(document.model_dump(mode="json", by_alias=True), separators=(",", ":"))


def deserialize(data: str) -> list[TypeDeclaration]:
    """Deserialize declarations from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize` or by the provider.

    Returns:
        The declarations in document order.

    Raises:
        TypeModelError: If the JSON is malformed, the format version is not
            recognised, or a declaration does not match the schema.
    """
    try:
        obj = json.loads(data)
    except json.JSONDecodeError as exc:
        raise TypeModelError(f"Invalid JSON in type model: {exc}") from exc

    if not isinstance(obj, dict):
        raise TypeModelError("Type model must be a JSON object")

    version = obj.get("v")
    if version != TYPE_MODEL_FORMAT_VERSION:
        raise TypeModelError(f"Unsupported type model format version: {version!r}")

    try:
        document = _TypeModelDocument.model_validate(obj)
    except ValidationError as exc:
        raise TypeModelError(f"Invalid type model: {exc}") from exc
    return document.types


def write_type_model(declarations: Sequence[TypeDeclaration], path: Path) -> None:
    """Write a type model to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(declarations), encoding="utf-8")


def read_type_model(path: Path) -> list[TypeDeclaration]:
    """Read and deserialize a type model from *path*.

    Raises:
        TypeModelError: If the file cannot be read or its content is invalid.
    """
    try:
        data = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise TypeModelError(f"Cannot read type model '{path}': {exc}") from exc
    return deserialize(data)


# ################
# Implementation
# ################


class _TypeModelDocument(BaseModel):
    v: str
    types: list[TypeDeclaration] = _Field(default_factory=list)
