"""Core data models shared across ignr components."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional


class MergeMode(Enum):
    """How a composed block is combined with an existing ignore file."""

    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class Template:
    """Raw template text resolved for a single tag."""

    tag: str
    text: str
    source: str


@dataclass
class ComposedSection:
    """Lines a single template contributes after cross-template deduplication."""

    tag: str
    lines: List[str] = field(default_factory=list)

    def render(self) -> str:
        body = "".join(f"{line}\n" for line in self.lines)
        return f"# === {self.tag} ===\n{body}"


@dataclass
class ComposedOutput:
    """Result of composing an ordered list of tags."""

    tags: List[str]
    sections: List[ComposedSection]
    missing: List[str]

    @property
    def text(self) -> str:
        return "\n".join(section.render() for section in self.sections)


@dataclass
class GenerateRequest:
    """Options for a single generate run."""

    directory: Path = field(default_factory=lambda: Path("."))
    add: List[str] = field(default_factory=list)
    no_detect: bool = False
    depth: int = 10
    append: bool = False
    print_only: bool = False
    force: bool = False


@dataclass
class GenerateOutcome:
    """Result of a generate run."""

    tags: List[str]
    content: str
    missing: List[str] = field(default_factory=list)
    path: Optional[Path] = None
    written: bool = False
    message: Optional[str] = None
