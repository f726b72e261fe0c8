# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type model (classes, interfaces, enums, delegates) and its JSON form."""

from luastubs.model.artifact import (
    TYPE_MODEL_FORMAT_VERSION,
    TypeModelError,
    deserialize,
    read_type_model,
    serialize,
    write_type_model,
)
from luastubs.model.declarations import (
    CONSTRUCTOR_NAME,
    ClassType,
    DelegateType,
    EnumType,
    InterfaceType,
    Member,
    Method,
    Parameter,
    PassingMode,
    TypeDeclaration,
)

__all__ = [
    # Declarations
    "CONSTRUCTOR_NAME",
    "PassingMode",
    "Parameter",
    "Member",
    "Method",
    "ClassType",
    "InterfaceType",
    "EnumType",
    "DelegateType",
    "TypeDeclaration",
    # Serialization
    "TYPE_MODEL_FORMAT_VERSION",
    "TypeModelError",
    "serialize",
    "deserialize",
    "read_type_model",
    "write_type_model",
]
