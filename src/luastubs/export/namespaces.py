# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Namespace tables under the ``CS`` root container."""

from __future__ import annotations

from luastubs.export.buffer import OutputBuffer
from luastubs.export.names import ROOT_SYMBOL

# ###############
# Public Interface
# ###############


def namespace_prefixes(namespace: str) -> list[str]:
    """Return every cumulative prefix of *namespace* (``"A.B"`` -> ``["A", "A.B"]``)."""
    if not namespace:
        return []
    segments = namespace.split(".")
    return [".".join(segments[: i + 1]) for i in range(len(segments))]


def ensure_namespace(out: OutputBuffer, namespace: str) -> None:
    """Write ``CS.A = CS.A or {}`` style statements for each level of *namespace*.

    The statements are idempotent, so emitting them again for a sibling type
    in the same namespace is harmless.
    """
    prefixes = namespace_prefixes(namespace)
    if not prefixes:
        return
    for prefix in prefixes:
        path = f"{ROOT_SYMBOL}.{prefix}"
        out.line(f"{path} = {path} or {{}}")
    out.line()


class NamespaceRegistry:
    """Namespaces (and global-namespace types) seen during one export run."""

    def __init__(self) -> None:
        self._entries: dict[str, bool] = {}

    def register(self, namespace: str, type_name: str) -> None:
        """Record every level of *namespace*; types without one are recorded by name."""
        if namespace:
            for prefix in namespace_prefixes(namespace):
                self._entries.setdefault(prefix, True)
        else:
            self._entries.setdefault(type_name, False)

    @property
    def namespaces(self) -> list[str]:
        """Registered namespace paths, sorted."""
        return sorted(name for name, is_namespace in self._entries.items() if is_namespace)

    @property
    def global_types(self) -> list[str]:
        return sorted(name for name, is_namespace in self._entries.items() if not is_namespace)

    def __contains__(self, namespace: object) -> bool:
        return self._entries.get(namespace, False) if isinstance(namespace, str) else False

    def __len__(self) -> int:
        return len(self.namespaces)
