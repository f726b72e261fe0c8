# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Export driver writing xLua annotation files for a whole type model.

The export runs in three passes:

1. **Seed**: generic instantiations are merged, every declaration is
   registered with the reference tracker and its namespace chain recorded.
2. **Emit**: each declaration is rendered into an in-memory buffer. When the
   buffer grows past the chunk size it is written to the next numbered file
   (``xlua_dump_0.lua``, ``xlua_dump_1.lua``, ...) and restarted with the
   file preamble.
3. **Fallback**: every referenced type that was never exported is written as
   an ``any`` alias so that all generated signatures resolve.

A declaration that fails to render is recorded in the result and skipped;
only filesystem failures abort the run.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import assert_never

from luastubs.config.settings import MIN_CHUNK_SIZE, ExportConfig
from luastubs.export.buffer import OutputBuffer
from luastubs.export.formatter import (
    write_comment_and_location,
    write_constructor_overload,
    write_default_constructor_overload,
    write_delegate_alias,
    write_enum_field,
    write_event_annotation,
    write_field_annotation,
    write_method_declaration,
    write_parameter_annotations,
    write_return_annotation,
    write_type_annotation,
)
from luastubs.export.generics import GenericNormalizer, normalize_generics
from luastubs.export.names import ROOT_SYMBOL, generic_head, to_lua_identifier
from luastubs.export.namespaces import NamespaceRegistry, ensure_namespace
from luastubs.export.tracker import TypeReferenceTracker
from luastubs.model.declarations import (
    ClassType,
    DelegateType,
    EnumType,
    InterfaceType,
    Member,
    Method,
    TypeDeclaration,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############

PREAMBLE = (
    "---@meta\n"
    "\n"
    f"{ROOT_SYMBOL} = {{}}\n"
    "\n"
    "---xLua typeof, returns the System.Type of a CS type table\n"
    "---@param type any\n"
    "---@return System.Type\n"
    "function typeof(type) end\n"
    "\n"
)


class ExportError(Exception):
    """Raised when the export cannot continue (output directory or file I/O failure)."""


@dataclass(frozen=True)
class DeclarationFailure:
    """A declaration whose rendering raised; its output may be incomplete.

    Attributes:
        name: Qualified name of the declaration.
        message: The error message.
    """

    name: str
    message: str


@dataclass
class ExportResult:
    """Outcome of one export run.

    Attributes:
        files: The numbered definition files, in the order written.
        fallback_file: The alias file for unexported types, or None when every
            referenced type was exported.
        unexported_count: Number of referenced-but-unexported type names.
        failures: Declarations that could not be rendered.
        namespaces: Every namespace path seen in the type model, sorted.
    """

    files: list[Path] = field(default_factory=list)
    fallback_file: Path | None = None
    unexported_count: int = 0
    failures: list[DeclarationFailure] = field(default_factory=list)
    namespaces: list[str] = field(default_factory=list)

    @property
    def files_written(self) -> int:
        return len(self.files)

    @property
    def has_failures(self) -> bool:
        return len(self.failures) > 0


class XLuaDumper:
    """Writes EmmyLua definitions for xLua's ``CS`` bridge.

    All run state (buffer, tracker, namespaces, file counter) belongs to the
    instance and is reset at the start of every :meth:`dump`.
    """

    name = "XLuaDumper"

    def __init__(
        self,
        config: ExportConfig | None = None,
        normalizer: GenericNormalizer = normalize_generics,
    ) -> None:
        self._config = config if config is not None else ExportConfig()
        if self._config.chunk_size < MIN_CHUNK_SIZE:
            raise ValueError(f"chunk_size must be at least {MIN_CHUNK_SIZE} bytes, got {self._config.chunk_size}")
        self._normalizer = normalizer
        self._buffer = OutputBuffer()
        self._tracker = TypeReferenceTracker()
        self._namespaces = NamespaceRegistry()
        self._files: list[Path] = []
        self._pending = False

    @property
    def tracker(self) -> TypeReferenceTracker:
        """Reference tracker of the current (or last) run."""
        return self._tracker

    def dump(self, declarations: Iterable[TypeDeclaration], out_dir: Path) -> ExportResult:
        """Export *declarations* as annotation files into *out_dir*.

        Args:
            declarations: The type model, in output order.
            out_dir: Target directory; created (with parents) when missing.

        Returns:
            An :class:`ExportResult` listing the written files and any
            declarations that failed to render.

        Raises:
            ExportError: If the directory cannot be created or a file cannot be
                written.
        """
        self._reset()

        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ExportError(f"Cannot create output directory '{out_dir}': {exc}") from exc

        decls = list(declarations)
        if self._config.merge_generics:
            decls = self._normalizer(decls)

        self._tracker.seed(decls)
        for decl in decls:
            self._namespaces.register(decl.namespace, decl.name)

        failures: list[DeclarationFailure] = []
        for decl in decls:
            failure = self._export_declaration(decl)
            if failure is not None:
                failures.append(failure)
            self._buffer.line()
            self._pending = True
            if self._buffer.size > self._config.chunk_size:
                self._flush(out_dir)

        if self._pending:
            self._flush(out_dir)

        fallback_path = out_dir / self._config.fallback_file
        try:
            fallback_file = self._tracker.flush_fallback_file(fallback_path)
        except OSError as exc:
            raise ExportError(f"Cannot write '{fallback_path}': {exc}") from exc

        return ExportResult(
            files=list(self._files),
            fallback_file=fallback_file,
            unexported_count=self._tracker.count_unexported(),
            failures=failures,
            namespaces=self._namespaces.namespaces,
        )

    # ################
    # Implementation
    # ################

    def _reset(self) -> None:
        self._tracker = TypeReferenceTracker()
        self._namespaces = NamespaceRegistry()
        self._files = []
        self._reset_buffer()

    def _reset_buffer(self) -> None:
        self._buffer.clear()
        self._buffer.write(PREAMBLE)
        self._pending = False

    def _flush(self, out_dir: Path) -> None:
        """Write the buffer to the next numbered file and start a new chunk."""
        path = out_dir / f"{self._config.file_prefix}{len(self._files)}.lua"
        try:
            path.write_text(self._buffer.getvalue(), encoding="utf-8")
        except OSError as exc:
            raise ExportError(f"Cannot write '{path}': {exc}") from exc
        logger.debug("Wrote %s (%d bytes)", path, self._buffer.size)
        self._files.append(path)
        self._reset_buffer()

    def _export_declaration(self, decl: TypeDeclaration) -> DeclarationFailure | None:
        try:
            self._write_declaration(decl)
        except Exception as exc:  # noqa: BLE001 - rendering errors stay local to one declaration
            logger.debug("Failed to export '%s'", decl.qualified_name, exc_info=True)
            return DeclarationFailure(name=decl.qualified_name, message=str(exc) or type(exc).__name__)
        return None

    def _write_declaration(self, decl: TypeDeclaration) -> None:
        match decl:
            case ClassType():
                self._write_class(decl)
            case InterfaceType():
                self._write_interface(decl)
            case EnumType():
                self._write_enum(decl)
            case DelegateType():
                self._write_delegate(decl)
            case _:
                assert_never(decl)

    def _write_class(self, decl: ClassType) -> None:
        out = self._buffer
        full_name = _full_type_name(decl)
        local_name = _local_name(decl)

        self._tracker.check(decl.base_type)
        self._tracker.check_all(decl.implemented_interfaces)

        write_comment_and_location(out, decl.comment, decl.source_location)
        write_type_annotation(
            out, "class", full_name, decl.base_type, decl.implemented_interfaces, decl.generic_parameters
        )

        # Static classes cannot be instantiated from Lua.
        if not decl.is_static:
            ctors = decl.constructors
            for ctor in ctors:
                self._tracker.check_all(p.type_name for p in ctor.parameters)
                write_constructor_overload(out, ctor, full_name)
            if not ctors:
                write_default_constructor_overload(out, full_name)

        out.line(f"local {local_name} = {{}}")
        self._write_fields(decl.fields, local_name)
        self._write_methods(decl.methods, local_name)
        self._write_binding(decl, local_name)

    def _write_interface(self, decl: InterfaceType) -> None:
        out = self._buffer
        full_name = _full_type_name(decl)
        local_name = _local_name(decl)

        self._tracker.check_all(decl.implemented_interfaces)

        write_comment_and_location(out, decl.comment, decl.source_location)
        write_type_annotation(
            out, "interface", full_name, None, decl.implemented_interfaces, decl.generic_parameters
        )
        out.line(f"local {local_name} = {{}}")
        self._write_fields(decl.fields, local_name)
        self._write_methods(decl.methods, local_name)
        self._write_binding(decl, local_name)

    def _write_enum(self, decl: EnumType) -> None:
        out = self._buffer
        local_name = _local_name(decl)

        write_comment_and_location(out, decl.comment, decl.source_location)
        write_type_annotation(out, "enum", _full_type_name(decl))
        out.line(f"local {local_name} = {{")
        for member in decl.fields:
            write_enum_field(out, member)
        out.line("}")
        self._write_binding(decl, local_name)

    def _write_delegate(self, decl: DelegateType) -> None:
        invoke = decl.invoke_signature
        self._tracker.check(invoke.return_type_name)
        self._tracker.check_all(p.type_name for p in invoke.parameters)

        write_comment_and_location(self._buffer, decl.comment, decl.source_location)
        write_delegate_alias(self._buffer, _full_type_name(decl), invoke)

    def _write_fields(self, fields: Sequence[Member], owner: str) -> None:
        out = self._buffer
        for member in fields:
            self._tracker.check(member.type_name)
            write_comment_and_location(out, member.comment, member.source_location)
            if member.is_event:
                write_event_annotation(out, member.type_name, owner, member.name)
            else:
                write_field_annotation(out, member.type_name, owner, member.name)

    def _write_methods(self, methods: Sequence[Method], owner: str) -> None:
        out = self._buffer
        for method in methods:
            if method.is_constructor:
                continue

            self._tracker.check(method.return_type_name)
            self._tracker.check_all(p.type_name for p in method.parameters)

            write_comment_and_location(out, method.comment, method.source_location)
            extra_returns = write_parameter_annotations(out, method.parameters)
            write_return_annotation(out, method.return_type_name, extra_returns)
            write_method_declaration(out, owner, method.name, method.parameters, method.is_static)

    def _write_binding(self, decl: ClassType | InterfaceType | EnumType, local_name: str) -> None:
        """Create the namespace tables, then publish the local table under its ``CS`` path."""
        ensure_namespace(self._buffer, decl.namespace)
        self._buffer.line(f"{_binding_path(decl)} = {local_name}")


def _full_type_name(decl: TypeDeclaration) -> str:
    return f"{ROOT_SYMBOL}.{decl.qualified_name}"


# A closed generic (``Pool<Bullet>``) left unmerged still binds the plain
# ``Pool`` table; xLua has no per-instantiation tables.
def _local_name(decl: TypeDeclaration) -> str:
    return to_lua_identifier(generic_head(decl.name).strip())


def _binding_path(decl: ClassType | InterfaceType | EnumType) -> str:
    head = generic_head(decl.name).strip()
    if decl.namespace:
        return f"{ROOT_SYMBOL}.{decl.namespace}.{head}"
    return f"{ROOT_SYMBOL}.{head}"
