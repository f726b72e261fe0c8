# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Collapsing of closed generic instantiations into one exportable declaration.

The symbol provider may hand over ``Pool<Bullet>`` and ``Pool<Enemy>`` as
separate declarations. Lua only sees one ``CS.Pool`` table, so they are
merged into a single open declaration before export.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence

from luastubs.export.names import generic_arguments, generic_head
from luastubs.model.declarations import TypeDeclaration

# ###############
# Public Interface
# ###############

GenericNormalizer = Callable[[Sequence[TypeDeclaration]], list[TypeDeclaration]]


def normalize_generics(declarations: Sequence[TypeDeclaration]) -> list[TypeDeclaration]:
    """Return the declarations with closed generic instantiations merged.

    Declarations are grouped by namespace and open name (the name without its
    ``<...>`` argument list). A group is represented by its first open
    definition when there is one, otherwise by its first instantiation
    renamed to the open name. Group order follows first appearance.

    The input is not modified, and normalizing an already normalized list
    returns an equal list.
    """
    groups: dict[tuple[str, str], list[TypeDeclaration]] = {}
    for decl in declarations:
        key = (decl.namespace, generic_head(decl.name).strip())
        groups.setdefault(key, []).append(decl)

    return [_merge_group(members) for members in groups.values()]


# ################
# Implementation
# ################


def _merge_group(members: list[TypeDeclaration]) -> TypeDeclaration:
    for decl in members:
        if "<" not in decl.name:
            return decl

    first = members[0]
    open_name = generic_head(first.name).strip()
    parameters = list(first.generic_parameters) or _placeholder_parameters(len(generic_arguments(first.name)))
    return first.model_copy(update={"name": open_name, "generic_parameters": parameters})


def _placeholder_parameters(count: int) -> list[str]:
    """Return ``["T"]``, ``["T1", "T2"]``, ... for *count* generic arguments."""
    if count <= 1:
        return ["T"] if count == 1 else []
    return [f"T{i}" for i in range(1, count + 1)]
