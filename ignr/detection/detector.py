"""Infers technology tags from the contents of a directory tree."""

from __future__ import annotations

import os
import sys
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Set, Tuple

from ..config import DetectionConfig
from ..logging import get_logger
from .ignore_rules import (
    RuleScope,
    compile_rules,
    load_directory_rules,
    load_inherited_scopes,
    should_ignore,
)
from .tables import (
    EXTENSION_TAGS,
    IDE_DIRECTORY_TAGS,
    MANIFEST_TAGS,
    OS_TAGS,
    PATH_HINT_TAGS,
)

_SKIPPED_DIRS = {".git"}


@lru_cache(maxsize=1)
def host_os_tag() -> Optional[str]:
    """Return the tag naming the operating system this process runs on."""
    for prefix, tag in OS_TAGS.items():
        if sys.platform.startswith(prefix):
            return tag
    return None


def tags_for_entry(path: Path, is_dir: bool, *, detect_ide: bool = True) -> Set[str]:
    """Return the tags implied by a single file or directory."""
    tags: Set[str] = set()
    name = path.name

    tags.update(MANIFEST_TAGS.get(name, ()))
    full_path = str(path)
    for hint, tag in PATH_HINT_TAGS.get(name, ()):
        if hint in full_path:
            tags.add(tag)

    suffix = path.suffix
    if suffix:
        tag = EXTENSION_TAGS.get(suffix[1:])
        if tag is not None:
            tags.add(tag)

    if detect_ide and is_dir:
        ide_tag = IDE_DIRECTORY_TAGS.get(name)
        if ide_tag is not None:
            tags.add(ide_tag)

    return tags


class TechnologyDetector:
    """Walks a directory tree and reports the technologies it uses."""

    def __init__(self, config: DetectionConfig | None = None) -> None:
        self.config = config or DetectionConfig()
        self.logger = get_logger("detection")

    def detect(self, root: str | Path, max_depth: int | None = None) -> Set[str]:
        """Return the set of tags detected beneath ``root``."""
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Directory not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Path is not a directory: {root}")

        # Surface permission problems on the root itself instead of yielding nothing.
        with os.scandir(root_path):
            pass

        limit = self._effective_depth(max_depth)
        detected: Set[str] = set()
        visited = 0
        for path, is_dir in self._iter_entries(root_path, limit):
            visited += 1
            detected.update(tags_for_entry(path, is_dir, detect_ide=self.config.detect_ide))

        if self.config.detect_os:
            os_tag = host_os_tag()
            if os_tag is not None:
                detected.add(os_tag)

        self.logger.debug(
            "Scanned %d entries under %s (depth %d): %s",
            visited,
            root_path,
            limit,
            ", ".join(sorted(detected)) or "nothing",
        )
        return detected

    def _effective_depth(self, requested: int | None) -> int:
        ceiling = max(self.config.max_depth, 0)
        if requested is None:
            return ceiling
        return max(min(requested, ceiling), 0)

    def _iter_entries(self, root: Path, limit: int) -> Iterator[Tuple[Path, bool]]:
        if limit <= 0:
            return

        scopes_by_dir: Dict[str, List[RuleScope]] = {}
        root_scopes = load_inherited_scopes(root)

        def _on_error(exc: OSError) -> None:
            self.logger.debug("Skipping unreadable entry %s: %s", exc.filename, exc)

        for dirpath, dirnames, filenames in os.walk(root, onerror=_on_error):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""
            parent_rel = rel_dir.rpartition("/")[0] if rel_dir else None

            if parent_rel is None:
                scopes = list(root_scopes)
            else:
                scopes = list(scopes_by_dir.get(parent_rel, []))
            own_rules = compile_rules(load_directory_rules(current_dir))
            if own_rules is not None:
                scopes.append(RuleScope(base=rel_dir, spec=own_rules))
            scopes_by_dir[rel_dir] = scopes

            depth = rel_dir.count("/") + 1 if rel_dir else 0
            child_depth = depth + 1

            kept_dirs = []
            for name in sorted(dirnames):
                if name in _SKIPPED_DIRS:
                    continue
                rel_path = f"{rel_dir}/{name}" if rel_dir else name
                if should_ignore(rel_path, True, scopes):
                    continue
                yield current_dir / name, True
                if child_depth < limit:
                    kept_dirs.append(name)
            dirnames[:] = kept_dirs

            for filename in sorted(filenames):
                rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
                if should_ignore(rel_path, False, scopes):
                    continue
                yield current_dir / filename, False


def detect_technologies(
    root: str | Path,
    max_depth: int | None = None,
    config: DetectionConfig | None = None,
) -> Set[str]:
    """Convenience wrapper around :class:`TechnologyDetector`."""
    return TechnologyDetector(config).detect(root, max_depth)


__all__ = ["TechnologyDetector", "detect_technologies", "host_os_tag", "tags_for_entry"]
