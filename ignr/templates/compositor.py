"""Composes per-tag templates into one deduplicated, sectioned block."""

from __future__ import annotations

from datetime import UTC, date, datetime
from typing import Iterable, List, Sequence, Set

from ..logging import get_logger
from ..models import ComposedOutput, ComposedSection
from .sources import TemplateSource, lookup

HEADER_PREFIX = "# ---- ignr (detected:"

logger = get_logger("templates.compositor")


def compose(tags: Iterable[str], sources: Sequence[TemplateSource]) -> ComposedOutput:
    """Merge templates for ``tags`` in the given order.

    Lines are compared after trimming surrounding whitespace. The first tag to
    contribute a line keeps it; later tags that only repeat earlier lines
    shrink or disappear from the output. Blank lines are dropped.
    """
    ordered = list(tags)
    seen: Set[str] = set()
    sections: List[ComposedSection] = []
    missing: List[str] = []

    for tag in ordered:
        template = lookup(tag, sources)
        if template is None:
            logger.warning("Template '%s' not found", tag)
            missing.append(tag)
            continue

        section = ComposedSection(tag=tag)
        for line in template.text.splitlines():
            trimmed = line.strip()
            if not trimmed or trimmed in seen:
                continue
            seen.add(trimmed)
            section.lines.append(line)

        if section.lines:
            sections.append(section)
        else:
            logger.debug("Template '%s' from %s contributed no new lines", tag, template.source)

    return ComposedOutput(tags=ordered, sections=sections, missing=missing)


def build_header(tags: Sequence[str], today: date | None = None) -> str:
    """Return the managed block header line, newline included."""
    stamp = (today or datetime.now(UTC).date()).strftime("%Y-%m-%d")
    return f"{HEADER_PREFIX} {','.join(tags)}) @ {stamp} ----\n"


def build_block(
    tags: Sequence[str],
    sources: Sequence[TemplateSource],
    today: date | None = None,
) -> tuple[str, ComposedOutput]:
    """Compose ``tags`` and prefix the result with the managed header."""
    composed = compose(tags, sources)
    block = f"{build_header(tags, today)}\n{composed.text}"
    return block, composed


__all__ = ["HEADER_PREFIX", "build_block", "build_header", "compose"]
