# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Export pipeline: name mapping, reference tracking, formatting and chunked output."""

from luastubs.export.buffer import OutputBuffer
from luastubs.export.dumper import PREAMBLE, DeclarationFailure, ExportError, ExportResult, XLuaDumper
from luastubs.export.generics import GenericNormalizer, normalize_generics
from luastubs.export.names import (
    ROOT_SYMBOL,
    is_lua_keyword,
    qualify,
    split_generic_arguments,
    strip_array_suffixes,
    to_lua_identifier,
    to_lua_type,
)
from luastubs.export.namespaces import NamespaceRegistry, ensure_namespace
from luastubs.export.tracker import TypeReferenceTracker

__all__ = [
    # Names
    "ROOT_SYMBOL",
    "to_lua_type",
    "qualify",
    "to_lua_identifier",
    "is_lua_keyword",
    "split_generic_arguments",
    "strip_array_suffixes",
    # Tracking
    "TypeReferenceTracker",
    # Rendering
    "OutputBuffer",
    "NamespaceRegistry",
    "ensure_namespace",
    "GenericNormalizer",
    "normalize_generics",
    # Driver
    "PREAMBLE",
    "XLuaDumper",
    "ExportResult",
    "ExportError",
    "DeclarationFailure",
]
