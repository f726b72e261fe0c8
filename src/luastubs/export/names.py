# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Mapping of .NET type names to EmmyLua annotation type names."""

from __future__ import annotations

import re

# ###############
# Public Interface
# ###############

ROOT_SYMBOL = "CS"

LUA_KEYWORDS = frozenset(
    {
        "and",
        "break",
        "do",
        "else",
        "elseif",
        "end",
        "false",
        "for",
        "function",
        "goto",
        "if",
        "in",
        "local",
        "nil",
        "not",
        "or",
        "repeat",
        "return",
        "then",
        "true",
        "until",
        "while",
    }
)

# Type names understood natively by the annotation language.
LUA_BUILTIN_TYPES = frozenset(
    {"any", "boolean", "function", "integer", "nil", "number", "string", "table", "thread", "userdata", "void"}
)


def to_lua_type(type_name: str | None) -> str:
    """Map a .NET type name to the annotation type used in generated stubs.

    Primitives map to their Lua counterparts, ``List<T>`` becomes ``T[]``,
    ``Dictionary<K, V>`` becomes ``table`` and any other type is qualified
    with the ``CS.`` prefix unless it already carries a known prefix.

    The mapping is total and idempotent on its own output.
    """
    if not type_name:
        return "any"

    lua_type = _PRIMITIVE_TYPES.get(type_name)
    if lua_type is not None:
        return lua_type

    array_match = _ARRAY_SUFFIX.search(type_name)
    if array_match is not None:
        return to_lua_type(type_name[: array_match.start()]) + "[]"

    if "<" in type_name:
        return _generic_to_lua_type(type_name)

    return qualify(type_name)


def qualify(name: str) -> str:
    """Prefix *name* with ``CS.`` unless it is already qualified or a Lua built-in."""
    if name.startswith(_QUALIFIED_PREFIXES) or name in LUA_BUILTIN_TYPES:
        return name
    return f"{ROOT_SYMBOL}.{name}"


def is_lua_keyword(name: str) -> bool:
    return bool(name) and name in LUA_KEYWORDS


def to_lua_identifier(name: str) -> str:
    """Escape a Lua keyword (``end`` -> ``_end``) so it can be used as an identifier."""
    return f"_{name}" if is_lua_keyword(name) else name


def strip_array_suffixes(type_name: str) -> str:
    """Remove every trailing array rank specifier (``Foo[]``, ``Foo[,]``, ``Foo[][]``)."""
    array_match = _ARRAY_SUFFIX.search(type_name)
    while array_match is not None:
        type_name = type_name[: array_match.start()]
        array_match = _ARRAY_SUFFIX.search(type_name)
    return type_name


def generic_head(type_name: str) -> str:
    """Return the type name without its generic argument list."""
    start = type_name.find("<")
    return type_name if start == -1 else type_name[:start]


def generic_arguments(type_name: str) -> list[str]:
    """Return the top-level generic arguments of *type_name* (empty for non-generic names)."""
    start = type_name.find("<")
    end = type_name.rfind(">")
    if start == -1 or end <= start:
        return []
    return split_generic_arguments(type_name[start + 1 : end])


def split_generic_arguments(text: str) -> list[str]:
    """Split a generic argument list on top-level commas.

    Commas nested inside another argument list are kept, so
    ``"Dictionary<int, string>, Foo"`` yields two arguments.
    """
    result: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        elif ch == "," and depth == 0:
            argument = "".join(current).strip()
            if argument:
                result.append(argument)
            current = []
            continue
        current.append(ch)
    argument = "".join(current).strip()
    if argument:
        result.append(argument)
    return result


# ################
# Implementation
# ################

_QUALIFIED_PREFIXES = (f"{ROOT_SYMBOL}.", "System.")

# One rank specifier; multi-dimensional arrays carry commas.
_ARRAY_SUFFIX = re.compile(r"\[,*\]$")

_LIST_PREFIXES = ("System.Collections.Generic.List<",)
_MAP_PREFIXES = ("System.Collections.Generic.Dictionary<",)

_PRIMITIVE_TYPES: dict[str, str] = {
    "System.Int32": "integer",
    "System.Int64": "integer",
    "System.Int16": "integer",
    "System.Byte": "integer",
    "System.SByte": "integer",
    "System.UInt32": "integer",
    "System.UInt64": "integer",
    "System.UInt16": "integer",
    "int": "integer",
    "long": "integer",
    "short": "integer",
    "byte": "integer",
    "sbyte": "integer",
    "uint": "integer",
    "ulong": "integer",
    "ushort": "integer",
    "System.Single": "number",
    "System.Double": "number",
    "System.Decimal": "number",
    "float": "number",
    "double": "number",
    "decimal": "number",
    "System.Boolean": "boolean",
    "bool": "boolean",
    "System.String": "string",
    "string": "string",
    "System.Object": "any",
    "object": "any",
    "System.Void": "void",
    "void": "void",
}


def _generic_to_lua_type(type_name: str) -> str:
    if type_name.startswith(_LIST_PREFIXES):
        arguments = generic_arguments(type_name)
        element = arguments[0] if len(arguments) == 1 else None
        return f"{to_lua_type(element)}[]"

    if type_name.startswith(_MAP_PREFIXES):
        return "table"

    # The argument list is kept verbatim; its names are only tracked for
    # the fallback alias file.
    return qualify(type_name)
