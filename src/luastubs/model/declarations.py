# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Type declarations consumed by the Lua annotation exporter.

The model is produced upstream by a symbol-table provider and treated as
read-only input by the export pipeline.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############

CONSTRUCTOR_NAME = ".ctor"


class PassingMode(Enum):
    """How an argument is handed to a method."""

    NORMAL = "Normal"
    REF = "Ref"
    OUT = "Out"


class Parameter(BaseModel):
    """A single method or delegate parameter."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type_name: str = _Field(alias="typeName")
    passing_mode: PassingMode = _Field(alias="passingMode", default=PassingMode.NORMAL)
    nullable: bool = False
    comment: str | None = None

    @property
    def is_out(self) -> bool:
        return self.passing_mode is PassingMode.OUT

    @property
    def is_extra_return(self) -> bool:
        """Return True if the argument is also handed back to the caller (``out`` or ``ref``)."""
        return self.passing_mode in (PassingMode.OUT, PassingMode.REF)


class Member(BaseModel):
    """A field, property or event of a type; also an enum entry."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    type_name: str = _Field(alias="typeName", default="")
    comment: str | None = None
    source_location: str | None = _Field(alias="sourceLocation", default=None)
    is_event: bool = _Field(alias="isEvent", default=False)
    constant_value: int | None = _Field(alias="constantValue", default=None)


class Method(BaseModel):
    """A method, constructor or delegate invoke signature."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    parameters: list[Parameter] = _Field(default_factory=list)
    return_type_name: str = _Field(alias="returnTypeName", default="void")
    is_static: bool = _Field(alias="isStatic", default=False)
    comment: str | None = None
    source_location: str | None = _Field(alias="sourceLocation", default=None)

    @property
    def is_constructor(self) -> bool:
        return self.name == CONSTRUCTOR_NAME


class _Declaration(BaseModel):
    """Attributes shared by every declaration kind."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    namespace: str = ""
    comment: str | None = None
    source_location: str | None = _Field(alias="sourceLocation", default=None)
    generic_parameters: list[str] = _Field(alias="genericParameters", default_factory=list)

    @property
    def qualified_name(self) -> str:
        """Return ``namespace.name``, or the bare name in the global namespace."""
        return f"{self.namespace}.{self.name}" if self.namespace else self.name


class ClassType(_Declaration):
    """A class or struct."""

    kind: Literal["class"] = "class"
    base_type: str | None = _Field(alias="baseType", default=None)
    implemented_interfaces: list[str] = _Field(alias="implementedInterfaces", default_factory=list)
    is_static: bool = _Field(alias="isStatic", default=False)
    fields: list[Member] = _Field(default_factory=list)
    methods: list[Method] = _Field(default_factory=list)

    @property
    def constructors(self) -> list[Method]:
        return [m for m in self.methods if m.is_constructor]


class InterfaceType(_Declaration):
    """An interface."""

    kind: Literal["interface"] = "interface"
    implemented_interfaces: list[str] = _Field(alias="implementedInterfaces", default_factory=list)
    fields: list[Member] = _Field(default_factory=list)
    methods: list[Method] = _Field(default_factory=list)


class EnumType(_Declaration):
    """An enumeration; each field may carry its integral constant."""

    kind: Literal["enum"] = "enum"
    fields: list[Member] = _Field(default_factory=list)


class DelegateType(_Declaration):
    """A delegate, described by the signature of its ``Invoke`` method."""

    kind: Literal["delegate"] = "delegate"
    invoke_signature: Method = _Field(alias="invokeSignature", default_factory=lambda: Method(name="Invoke"))


# One exportable type-level unit. The `kind` discriminator makes the union
# closed, so dispatch over it can be checked for exhaustiveness.
TypeDeclaration = Annotated[
    ClassType | InterfaceType | EnumType | DelegateType,
    _Field(discriminator="kind"),
]
