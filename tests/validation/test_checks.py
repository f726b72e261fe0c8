# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Unit tests for the type model consistency checks."""

import pytest

from luastubs.model.declarations import (
    ClassType,
    DelegateType,
    EnumType,
    InterfaceType,
    Member,
    Method,
    Parameter,
)
from luastubs.validation.checks import (
    ValidationError,
    ValidationResult,
    ValidationWarning,
    validate,
)

# ###############
# Test Helpers
# ###############


def _messages(items: list) -> list[str]:
    return [item.message for item in items]


# ###############
# Clean Models
# ###############


def test_empty_model_is_clean() -> None:
    result = validate([])
    assert isinstance(result, ValidationResult)
    assert result.errors == []
    assert result.warnings == []
    assert not result.has_errors


def test_well_formed_model_is_clean() -> None:
    decls = [
        ClassType(
            name="Player",
            namespace="Game",
            base_type="Game.Actor",
            fields=[Member(name="health", type_name="int")],
            methods=[Method(name="Move", parameters=[Parameter(name="dx", type_name="float")])],
        ),
        InterfaceType(name="IActor", namespace="Game"),
        EnumType(name="Team", namespace="Game", fields=[Member(name="Red")]),
        DelegateType(name="Callback"),
    ]
    result = validate(decls)
    assert result.errors == []
    assert result.warnings == []


# ###############
# Errors
# ###############


def test_empty_declaration_name() -> None:
    result = validate([ClassType(name=" ", namespace="Game")])
    assert result.has_errors
    assert _messages(result.errors) == ["Declaration in namespace 'Game' has an empty name"]


def test_empty_member_name() -> None:
    result = validate([EnumType(name="Team", namespace="Game", fields=[Member(name="")])])
    assert _messages(result.errors) == ["'Game.Team' has a member with an empty name"]


def test_empty_method_name() -> None:
    result = validate([InterfaceType(name="IPool", methods=[Method(name="")])])
    assert _messages(result.errors) == ["'IPool' has a method with an empty name"]


def test_empty_delegate_parameter_name() -> None:
    invoke = Method(name="Invoke", parameters=[Parameter(name="", type_name="int")])
    result = validate([DelegateType(name="Handler", namespace="Game", invoke_signature=invoke)])
    assert _messages(result.errors) == ["'Game.Handler.Invoke' has a parameter with an empty name"]


@pytest.mark.parametrize("namespace", ["A..B", ".A", "A."])
def test_malformed_namespace(namespace: str) -> None:
    result = validate([ClassType(name="Foo", namespace=namespace)])
    assert result.has_errors
    assert _messages(result.errors) == [f"Malformed namespace '{namespace}' (empty segment)"]


def test_malformed_namespace_reported_once() -> None:
    decls = [ClassType(name="Foo", namespace="A..B"), EnumType(name="Bar", namespace="A..B")]
    assert len(validate(decls).errors) == 1


# ###############
# Warnings
# ###############


def test_duplicate_declaration_warns_once() -> None:
    decls = [
        ClassType(name="Foo", namespace="Game"),
        InterfaceType(name="Foo", namespace="Game"),
        EnumType(name="Foo", namespace="Game"),
    ]
    result = validate(decls)
    assert not result.has_errors
    assert _messages(result.warnings) == ["'Game.Foo' is declared more than once; the last declaration wins"]
    assert all(isinstance(w, ValidationWarning) for w in result.warnings)


def test_same_name_in_other_namespace_is_not_a_duplicate() -> None:
    result = validate([ClassType(name="Foo", namespace="A"), ClassType(name="Foo", namespace="B")])
    assert result.warnings == []


@pytest.mark.parametrize(
    "decl",
    [
        ClassType(name="Node", namespace="Tree", base_type="Tree.Node"),
        ClassType(name="Node", namespace="Tree", implemented_interfaces=["Node"]),
        InterfaceType(name="INode", namespace="Tree", implemented_interfaces=["Tree.INode"]),
    ],
)
def test_self_inheritance_warns(decl: ClassType | InterfaceType) -> None:
    result = validate([decl])
    assert not result.has_errors
    assert _messages(result.warnings) == [f"'{decl.qualified_name}' lists itself as a supertype"]


def test_results_are_immutable_values() -> None:
    assert ValidationError(message="x") == ValidationError(message="x")
    with pytest.raises(AttributeError):
        ValidationWarning(message="x").message = "y"  # type: ignore[misc]
