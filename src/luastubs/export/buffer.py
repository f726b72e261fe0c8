# Copyright 2026 luastubs Contributors
# SPDX-License-Identifier: Apache-2.0

"""Append-only text buffer for generated annotation files."""

from __future__ import annotations

# ###############
# Public Interface
# ###############


class OutputBuffer:
    """Accumulates generated text and keeps a running UTF-8 size.

    The size is maintained incrementally so the flush check after every
    declaration does not re-encode the whole buffer.
    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._size = 0

    def write(self, text: str) -> None:
        if not text:
            return
        self._parts.append(text)
        self._size += len(text.encode("utf-8"))

    def line(self, text: str = "") -> None:
        """Append *text* followed by a newline."""
        self.write(text + "\n")

    def getvalue(self) -> str:
        return "".join(self._parts)

    def clear(self) -> None:
        self._parts = []
        self._size = 0

    @property
    def size(self) -> int:
        """Size of the buffered text in bytes once encoded as UTF-8."""
        return self._size

    def __len__(self) -> int:
        return self._size
