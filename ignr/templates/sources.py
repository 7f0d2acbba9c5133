"""Template sources and the priority-ordered lookup across them."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Set

from ..logging import get_logger
from ..models import Template

TEMPLATE_SUFFIX = ".gitignore"
BUILTIN_DIR = Path(__file__).with_name("builtin")

logger = get_logger("templates.sources")


class TemplateSource(ABC):
    """Contract for a location that can supply template text by tag."""

    name: str = "source"

    @abstractmethod
    def resolve(self, tag: str) -> Optional[str]:
        """Return the template text for ``tag`` or None when this source lacks it."""

    @abstractmethod
    def available(self) -> Set[str]:
        """Return every tag this source can supply."""


class DirectorySource(TemplateSource):
    """Reads ``<tag>.gitignore`` files from a directory."""

    def __init__(self, name: str, directory: Path) -> None:
        self.name = name
        self.directory = directory

    def resolve(self, tag: str) -> Optional[str]:
        path = self._find(tag)
        if path is None:
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug("Unable to read template %s from %s: %s", tag, self.name, exc)
            return None

    def available(self) -> Set[str]:
        return set(self._index())

    def _find(self, tag: str) -> Optional[Path]:
        wanted = tag.lower()
        exact = self.directory / f"{wanted}{TEMPLATE_SUFFIX}"
        if exact.is_file():
            return exact
        return self._index().get(wanted)

    def _index(self) -> Dict[str, Path]:
        entries: Dict[str, Path] = {}
        try:
            children = sorted(self.directory.iterdir())
        except OSError:
            return entries
        for child in children:
            if child.suffix != TEMPLATE_SUFFIX or not child.is_file():
                continue
            entries.setdefault(child.stem.lower(), child)
        return entries

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, {str(self.directory)!r})"


class BuiltinSource(DirectorySource):
    """Read-only templates shipped inside the ignr package."""

    def __init__(self, directory: Path | None = None) -> None:
        super().__init__("builtin", directory or BUILTIN_DIR)

    def items(self) -> Iterable[tuple[str, str]]:
        for tag, path in sorted(self._index().items()):
            yield tag, path.read_text(encoding="utf-8")


class ManagedDataSource(DirectorySource):
    """Templates under the data directory, populated by sync or first-run seeding."""

    def __init__(self, directory: Path) -> None:
        super().__init__("data", directory)

    def is_empty(self) -> bool:
        try:
            return next(self.directory.iterdir(), None) is None
        except OSError:
            return True

    def seed(self, builtin: BuiltinSource, *, dry_run: bool = False) -> int:
        """Copy the built-in templates into an empty data directory."""
        if not self.is_empty():
            return 0
        if dry_run:
            logger.info("dry-run: would write embedded templates to %s", self.directory)
            return 0

        self.directory.mkdir(parents=True, exist_ok=True)
        written = 0
        for tag, text in builtin.items():
            path = self.directory / f"{tag}{TEMPLATE_SUFFIX}"
            path.write_text(text, encoding="utf-8")
            logger.debug("Wrote embedded template: %s", tag)
            written += 1
        logger.info("Initialized %d embedded templates in %s", written, self.directory)
        return written


def build_sources(
    data_dir: Path,
    *,
    custom_dir: Path | None = None,
    prefer_local: bool = True,
    builtin: BuiltinSource | None = None,
) -> List[TemplateSource]:
    """Return sources in lookup order for the given preference."""
    data = ManagedDataSource(data_dir)
    fallback = builtin or BuiltinSource()
    custom = DirectorySource("custom", custom_dir) if custom_dir is not None else None

    if prefer_local:
        ordered: List[Optional[TemplateSource]] = [custom, data, fallback]
    else:
        ordered = [data, fallback, custom]
    return [source for source in ordered if source is not None]


def lookup(tag: str, sources: Sequence[TemplateSource]) -> Optional[Template]:
    """Return the first template any source provides for ``tag``, with its origin."""
    for source in sources:
        text = source.resolve(tag)
        if text is not None:
            logger.debug("Resolved template %s from %s", tag, source.name)
            return Template(tag=tag, text=text, source=source.name)
    return None


def resolve(tag: str, sources: Sequence[TemplateSource]) -> Optional[str]:
    template = lookup(tag, sources)
    return template.text if template is not None else None


def list_available(sources: Iterable[TemplateSource]) -> Set[str]:
    """Return the union of tags across every source."""
    tags: Set[str] = set()
    for source in sources:
        tags.update(source.available())
    return tags


__all__ = [
    "BUILTIN_DIR",
    "BuiltinSource",
    "DirectorySource",
    "ManagedDataSource",
    "TEMPLATE_SUFFIX",
    "TemplateSource",
    "build_sources",
    "lookup",
    "list_available",
    "resolve",
]
