# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Rendering of EmmyLua annotation fragments.

Every function appends to an :class:`~luastubs.export.buffer.OutputBuffer`
and never reads back what was written. Type names are mapped through
:func:`~luastubs.export.names.to_lua_type`; reference tracking is left to
the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

from luastubs.export.buffer import OutputBuffer
from luastubs.export.names import is_lua_keyword, qualify, to_lua_identifier, to_lua_type
from luastubs.model.declarations import Member, Method, Parameter

# ###############
# Public Interface
# ###############

SOURCE_SCHEMES = ("file://",)


def write_comment_and_location(
    out: OutputBuffer,
    comment: str | None,
    location: str | None,
    indent: int = 0,
) -> None:
    """Write a doc comment followed by a ``---@source`` directive.

    Line breaks in *comment* start a new ``---`` line. The source directive
    is only written for locations using a known URI scheme.
    """
    prefix = " " * indent
    if comment:
        out.line(f"{prefix}---{_continue_comment(comment, prefix)}")

    if location and location.startswith(SOURCE_SCHEMES):
        escaped = location.replace('"', "'")
        out.line(f'{prefix}---@source "{escaped}"')


def write_type_annotation(
    out: OutputBuffer,
    tag: str,
    full_name: str,
    base_type: str | None = None,
    interfaces: Sequence[str] = (),
    generic_parameters: Sequence[str] = (),
) -> None:
    """Write a type header such as ``---@class CS.A.Foo<T>: CS.A.Base, CS.A.IBar``."""
    header = f"---@{tag} {full_name}"
    if generic_parameters:
        header += f"<{', '.join(generic_parameters)}>"

    supertypes = [qualify(base_type)] if base_type else []
    supertypes.extend(qualify(iface) for iface in interfaces if iface)
    if supertypes:
        header += f": {', '.join(supertypes)}"

    out.line(header)


def write_field_annotation(out: OutputBuffer, type_name: str, owner: str, field_name: str) -> None:
    out.line(f"---@type {to_lua_type(type_name)}")
    out.line(f"{_member_path(owner, field_name)} = nil")
    out.line()


def write_event_annotation(out: OutputBuffer, type_name: str, owner: str, event_name: str) -> None:
    """Write an event; xLua exposes events as delegate-typed fields."""
    # TODO: annotate the `+`/`-` listener operators once EmmyLua can express them on fields.
    out.line(f"---@type {to_lua_type(type_name)}")
    out.line(f"{_member_path(owner, event_name)} = nil")
    out.line()


def write_parameter_annotations(out: OutputBuffer, parameters: Sequence[Parameter]) -> list[Parameter]:
    """Write one ``---@param`` line per parameter.

    ``out`` parameters are not written since Lua callers never pass them.

    Returns:
        The ``out`` and ``ref`` parameters, in declaration order; their
        values come back to Lua as extra return values.
    """
    extra_returns: list[Parameter] = []
    for param in parameters:
        if param.is_extra_return:
            extra_returns.append(param)
        if param.is_out:
            continue

        line = f"---@param {to_lua_identifier(param.name)} {to_lua_type(param.type_name)}"
        if param.comment:
            line += f" {_continue_comment(param.comment)}"
        out.line(line)
    return extra_returns


def write_return_annotation(
    out: OutputBuffer,
    return_type_name: str | None,
    extra_returns: Sequence[Parameter] = (),
) -> None:
    """Write ``---@return`` with the return type followed by out/ref parameter types."""
    return_types = [to_lua_type(return_type_name)]
    return_types.extend(to_lua_type(param.type_name) for param in extra_returns)
    out.line(f"---@return {', '.join(return_types)}")


def write_method_declaration(
    out: OutputBuffer,
    owner: str,
    method_name: str,
    parameters: Sequence[Parameter],
    is_static: bool,
) -> None:
    """Write an empty function stub.

    Instance methods use the ``Owner:Name`` form with the implicit ``self``
    receiver, static methods the plain ``Owner.Name`` form. A method named
    after a Lua keyword is assigned as ``Owner["end"] = function(self, ...)``.
    """
    names = _parameter_names(parameters)
    if is_lua_keyword(method_name):
        if not is_static:
            names = f"self, {names}" if names else "self"
        out.line(f"{_member_path(owner, method_name)} = function({names})")
    else:
        separator = "." if is_static else ":"
        out.line(f"function {owner}{separator}{method_name}({names})")
    out.line("end")
    out.line()


def write_constructor_overload(out: OutputBuffer, ctor: Method, full_name: str) -> None:
    """Write a ``---@overload`` line that calls the type like a constructor."""
    params = ", ".join(
        f"{to_lua_identifier(p.name)}: {to_lua_type(p.type_name)}" for p in ctor.parameters if not p.is_out
    )
    out.line(f"---@overload fun({params}): {full_name}")


def write_default_constructor_overload(out: OutputBuffer, full_name: str) -> None:
    out.line(f"---@overload fun(): {full_name}")


def write_delegate_alias(out: OutputBuffer, full_name: str, invoke: Method) -> None:
    """Write a delegate as a function type alias.

    ``out`` parameters move from the parameter list to the return list;
    ``ref`` parameters appear in both. A ``void`` return contributes nothing,
    so a delegate with no return values renders ``void``.
    """
    params = ", ".join(_delegate_parameter(p) for p in invoke.parameters if not p.is_out)

    return_types: list[str] = []
    main_return = to_lua_type(invoke.return_type_name)
    if main_return != "void":
        return_types.append(main_return)
    return_types.extend(to_lua_type(p.type_name) for p in invoke.parameters if p.is_extra_return)

    returns = ", ".join(return_types) if return_types else "void"
    out.line(f"---@alias {full_name} fun({params}): {returns}")


def write_enum_field(out: OutputBuffer, field: Member, indent: int = 4) -> None:
    """Write one ``Name = value,`` entry of an enum table; a missing value renders as ``0``."""
    prefix = " " * indent
    write_comment_and_location(out, field.comment, field.source_location, indent)
    value = field.constant_value if field.constant_value is not None else 0
    out.line(f"{prefix}{_table_key(field.name)} = {value},")
    out.line()


# ################
# Implementation
# ################


def _continue_comment(comment: str, prefix: str = "") -> str:
    """Turn the line breaks of *comment* into ``---`` continuation lines."""
    lines = comment.replace("\r\n", "\n").split("\n")
    return f"\n{prefix}---".join(lines)


def _member_path(owner: str, name: str) -> str:
    # Keywords cannot follow a dot in Lua.
    return f'{owner}["{name}"]' if is_lua_keyword(name) else f"{owner}.{name}"


def _table_key(name: str) -> str:
    return f'["{name}"]' if is_lua_keyword(name) else name


def _parameter_names(parameters: Sequence[Parameter]) -> str:
    return ", ".join(to_lua_identifier(p.name) for p in parameters if not p.is_out)


def _delegate_parameter(param: Parameter) -> str:
    marker = "?" if param.nullable else ""
    return f"{to_lua_identifier(param.name)}{marker}: {to_lua_type(param.type_name)}"
