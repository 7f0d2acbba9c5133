"""Managed-section merging for generated ignore files."""

from __future__ import annotations

from typing import Optional, Tuple

from .models import MergeMode
from .templates.compositor import HEADER_PREFIX

DELIMITER = "# ----"


class ManagedSectionMerger:
    """Splices a generated block into existing file contents.

    The block owned by ignr starts at its header line and runs until the next
    line opening with the generic ``# ----`` delimiter that is not another
    ignr header, or until end of file. Blank lines separating the block from
    that boundary are left in place. Everything outside the span is kept
    byte-for-byte.
    """

    header_prefix = HEADER_PREFIX
    delimiter = DELIMITER

    def merge(self, existing: Optional[str], block: str, mode: MergeMode = MergeMode.REPLACE) -> str:
        if existing is None:
            return block
        if mode is MergeMode.APPEND:
            return self.append(existing, block)

        span = self.find_block(existing)
        if span is None:
            return self.append(existing, block)
        start, end = span
        return f"{existing[:start]}{block}{existing[end:]}"

    def append(self, existing: str, block: str) -> str:
        return f"{existing}\n{block}"

    def find_block(self, existing: str) -> Optional[Tuple[int, int]]:
        """Return the ``(start, end)`` span of the managed block, if present."""
        start = existing.find(self.header_prefix)
        if start == -1:
            return None

        token = f"\n{self.delimiter}"
        position = start
        while True:
            newline = existing.find(token, position)
            if newline == -1:
                return start, len(existing)
            line_start = newline + 1
            if not existing.startswith(self.header_prefix, line_start):
                return start, self._trim_separators(existing, start, line_start)
            position = line_start

    @staticmethod
    def _trim_separators(existing: str, start: int, end: int) -> int:
        # Blank lines in front of the boundary belong to the suffix.
        while end - 2 > start and existing[end - 1] == "\n" and existing[end - 2] == "\n":
            end -= 1
        return end


def merge(existing: Optional[str], block: str, mode: MergeMode = MergeMode.REPLACE) -> str:
    """Module-level shortcut for :meth:`ManagedSectionMerger.merge`."""
    return ManagedSectionMerger().merge(existing, block, mode)


__all__ = ["DELIMITER", "ManagedSectionMerger", "merge"]
