# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Bookkeeping of exported versus merely referenced type names.

Every type name that shows up in a generated signature must resolve to
something for the language server. Names that were never exported are
collected here and written out as ``any`` aliases after the main export.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from luastubs.export.names import ROOT_SYMBOL, generic_arguments, generic_head, qualify, strip_array_suffixes
from luastubs.model.declarations import TypeDeclaration

# ###############
# Public Interface
# ###############

FALLBACK_HEADER = (
    "---@meta\n"
    "\n"
    "--- Unexported types referenced in exported types\n"
    "--- These types are defined as aliases to 'any' for type safety\n"
    "\n"
)

BUILTIN_TYPE_NAMES = frozenset(
    {
        "void",
        "bool",
        "byte",
        "sbyte",
        "short",
        "ushort",
        "int",
        "uint",
        "long",
        "ulong",
        "float",
        "double",
        "decimal",
        "char",
        "string",
        "object",
        "System.Void",
        "System.Boolean",
        "System.Byte",
        "System.SByte",
        "System.Int16",
        "System.UInt16",
        "System.Int32",
        "System.UInt32",
        "System.Int64",
        "System.UInt64",
        "System.Single",
        "System.Double",
        "System.Decimal",
        "System.Char",
        "System.String",
        "System.Object",
        "boolean",
        "integer",
        "number",
        "any",
        "table",
    }
)


class TypeReferenceTracker:
    """Registry of exported type names and of referenced-but-unexported ones.

    Unexported names are stored in their qualified form (see
    :func:`~luastubs.export.names.qualify`), so ``Bar`` and ``CS.Bar`` count
    once and the count equals the number of aliases written. A name is only
    added when neither its spelling nor its qualified form is exported, and
    it is never removed afterwards.
    """

    def __init__(self) -> None:
        self._exported: set[str] = set(BUILTIN_TYPE_NAMES)
        self._unexported: set[str] = set()

    def seed(self, declarations: Iterable[TypeDeclaration]) -> None:
        """Register every declaration as exported.

        Each declaration is known under its qualified name, its ``CS.``
        prefixed qualified name and its simple name. Closed generic names
        are also registered without their argument list, since references
        are checked by head name. Must run before the first :meth:`check`.
        """
        for decl in declarations:
            for name in {decl.qualified_name, generic_head(decl.qualified_name)}:
                self._exported.add(name)
                self._exported.add(f"{ROOT_SYMBOL}.{name}")
            self._exported.add(decl.name)
            self._exported.add(generic_head(decl.name))

    def check(self, type_name: str | None) -> None:
        """Record *type_name* (and its generic arguments) when it is not exported."""
        if not type_name:
            return

        name = strip_array_suffixes(type_name.strip())
        if "<" in name:
            for argument in generic_arguments(name):
                self.check(argument)
            name = generic_head(name)

        name = name.strip()
        if not name or self.is_exported(name):
            return
        self._unexported.add(qualify(name))

    def check_all(self, type_names: Iterable[str | None]) -> None:
        for type_name in type_names:
            self.check(type_name)

    def is_exported(self, name: str) -> bool:
        return name in self._exported or qualify(name) in self._exported

    def count_unexported(self) -> int:
        return len(self._unexported)

    @property
    def unexported_count(self) -> int:
        return len(self._unexported)

    @property
    def unexported_names(self) -> tuple[str, ...]:
        """Qualified unexported names in lexicographic order."""
        return tuple(sorted(self._unexported))

    def render_fallback(self) -> str:
        """Return the fallback file content: one ``any`` alias per unexported name."""
        return FALLBACK_HEADER + "".join(f"---@alias {name} any\n" for name in self.unexported_names)

    def flush_fallback_file(self, path: Path) -> Path | None:
        """Write the fallback alias file to *path*.

        Nothing is written when every referenced type was exported.

        Returns:
            *path* when the file was written, otherwise ``None``.

        Raises:
            OSError: If the file cannot be written.
        """
        if not self._unexported:
            return None
        path.write_text(self.render_fallback(), encoding="utf-8")
        return path
