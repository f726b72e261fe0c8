# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Consistency checks for a type model before it is exported.

The exporter is best effort and renders whatever it is given; these checks
catch models that would produce unusable annotations (errors) or surprising
ones (warnings).
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field

from luastubs.model.declarations import (
    ClassType,
    DelegateType,
    EnumType,
    InterfaceType,
    Member,
    Method,
    TypeDeclaration,
)

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class ValidationWarning:
    """A non-fatal issue; the model can still be exported.

    Attributes:
        message: Human-readable description of the warning.
    """

    message: str


@dataclass(frozen=True)
class ValidationError:
    """A fatal issue; exporting the model would produce broken annotations.

    Attributes:
        message: Human-readable description of the error.
    """

    message: str


@dataclass
class ValidationResult:
    """Result of running the model checks.

    Attributes:
        warnings: Non-fatal issues found during validation.
        errors: Fatal errors that should stop the export.
    """

    warnings: list[ValidationWarning] = field(default_factory=list)
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        """Return True if any fatal validation errors were found."""
        return len(self.errors) > 0


def validate(declarations: Sequence[TypeDeclaration]) -> ValidationResult:
    """Run all checks on a type model.

    Checks performed:

    1. **Empty names** (error): declarations, members, methods and parameters
       must be named.

    2. **Malformed namespaces** (error): a namespace must not contain empty
       segments (``"A..B"``, ``".A"``, ``"A."``).

    3. **Duplicate declarations** (warning): two declarations with the same
       qualified name both assign ``CS.<name>``; the later one wins.

    4. **Self inheritance** (warning): a class or interface listing itself as
       base type or interface.

    Args:
        declarations: The type model to check.

    Returns:
        A :class:`ValidationResult`; an empty result means the model is clean.
    """
    warnings: list[ValidationWarning] = []
    errors: list[ValidationError] = []

    errors.extend(_check_empty_names(declarations))
    errors.extend(_check_namespaces(declarations))
    warnings.extend(_check_duplicates(declarations))
    warnings.extend(_check_self_inheritance(declarations))

    return ValidationResult(warnings=warnings, errors=errors)


# ################
# Implementation
# ################


def _label(decl: TypeDeclaration) -> str:
    return decl.qualified_name or f"<unnamed {decl.kind}>"


def _members_and_methods(decl: TypeDeclaration) -> tuple[list[Member], list[Method]]:
    if isinstance(decl, (ClassType, InterfaceType)):
        return decl.fields, decl.methods
    if isinstance(decl, EnumType):
        return decl.fields, []
    assert isinstance(decl, DelegateType)
    return [], [decl.invoke_signature]


def _check_empty_names(declarations: Sequence[TypeDeclaration]) -> Iterator[ValidationError]:
    for decl in declarations:
        if not decl.name.strip():
            yield ValidationError(message=f"Declaration in namespace '{decl.namespace}' has an empty name")
        fields, methods = _members_and_methods(decl)
        for member in fields:
            if not member.name.strip():
                yield ValidationError(message=f"'{_label(decl)}' has a member with an empty name")
        for method in methods:
            if not method.name.strip():
                yield ValidationError(message=f"'{_label(decl)}' has a method with an empty name")
            for param in method.parameters:
                if not param.name.strip():
                    yield ValidationError(
                        message=f"'{_label(decl)}.{method.name}' has a parameter with an empty name"
                    )


def _check_namespaces(declarations: Sequence[TypeDeclaration]) -> Iterator[ValidationError]:
    reported: set[str] = set()
    for decl in declarations:
        namespace = decl.namespace
        if not namespace or namespace in reported:
            continue
        if any(not segment.strip() for segment in namespace.split(".")):
            reported.add(namespace)
            yield ValidationError(message=f"Malformed namespace '{namespace}' (empty segment)")


def _check_duplicates(declarations: Sequence[TypeDeclaration]) -> Iterator[ValidationWarning]:
    seen: set[str] = set()
    reported: set[str] = set()
    for decl in declarations:
        name = decl.qualified_name
        if name in seen and name not in reported:
            reported.add(name)
            yield ValidationWarning(message=f"'{name}' is declared more than once; the last declaration wins")
        seen.add(name)


def _check_self_inheritance(declarations: Sequence[TypeDeclaration]) -> Iterator[ValidationWarning]:
    for decl in declarations:
        if isinstance(decl, ClassType):
            supertypes = [decl.base_type or "", *decl.implemented_interfaces]
        elif isinstance(decl, InterfaceType):
            supertypes = list(decl.implemented_interfaces)
        else:
            continue
        if decl.qualified_name in supertypes or decl.name in supertypes:
            yield ValidationWarning(message=f"'{decl.qualified_name}' lists itself as a supertype")
