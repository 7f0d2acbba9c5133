"""Loading and matching of .gitignore style rules during detection walks."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

import pathspec

from ..logging import get_logger

IGNORE_FILENAMES = (".gitignore", ".ignore")
EXCLUDE_FILE = Path(".git") / "info" / "exclude"

logger = get_logger("detection.ignore")


@dataclass
class RuleScope:
    """Compiled rules from one ignore file location.

    ``base`` is the directory, relative to the scan root, whose rules these
    are. Rules from directories above the scan root use ``lead`` instead: the
    path from that directory down to the scan root, prepended before matching.
    """

    base: str
    spec: pathspec.GitIgnoreSpec
    lead: str = ""

    def localize(self, rel_path: str) -> str | None:
        """Return ``rel_path`` relative to this scope, or None when outside it."""
        if self.lead:
            return f"{self.lead}/{rel_path}"
        if not self.base:
            return rel_path
        prefix = f"{self.base}/"
        if not rel_path.startswith(prefix):
            return None
        return rel_path[len(prefix):]

    def check(self, rel_path: str, is_dir: bool) -> Optional[bool]:
        """True when ignored, False when re-included, None when no rule matched."""
        local = self.localize(rel_path)
        if local is None:
            return None
        if is_dir:
            local = f"{local}/"
        return self.spec.check_file(local).include


def parse_ignore_text(text: str) -> List[str]:
    """Return the pattern lines of an ignore file, without comments or blanks."""
    patterns: List[str] = []
    for raw_line in text.splitlines():
        if not raw_line.strip() or raw_line.startswith("#"):
            continue
        patterns.append(raw_line)
    return patterns


def compile_rules(patterns: Sequence[str]) -> pathspec.GitIgnoreSpec | None:
    if not patterns:
        return None
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def read_ignore_file(path: Path) -> List[str]:
    if not path.is_file():
        return []
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("Skipping unreadable ignore file %s: %s", path, exc)
        return []
    return parse_ignore_text(text)


def load_directory_rules(directory: Path) -> List[str]:
    """Collect patterns from every ignore file present in ``directory``."""
    patterns: List[str] = []
    for filename in IGNORE_FILENAMES:
        patterns.extend(read_ignore_file(directory / filename))
    return patterns


def find_git_root(start: Path) -> Optional[Path]:
    """Return the nearest directory at or above ``start`` containing ``.git``."""
    current = start
    while True:
        if (current / ".git").exists():
            return current
        if current.parent == current:
            return None
        current = current.parent


def load_inherited_scopes(root: Path) -> List[RuleScope]:
    """Rules that reach ``root`` from its git repository.

    Covers ``.git/info/exclude`` and the ignore files of every directory
    between the repository root and ``root`` (exclusive), outermost first.
    Outside a git work tree nothing is inherited.
    """
    git_root = find_git_root(root)
    if git_root is None:
        return []

    scopes: List[RuleScope] = []
    exclude = compile_rules(read_ignore_file(git_root / EXCLUDE_FILE))
    if exclude is not None:
        scopes.append(RuleScope(base="", spec=exclude, lead=_lead(git_root, root)))

    ancestors = [
        parent for parent in root.parents if parent == git_root or git_root in parent.parents
    ]
    for ancestor in reversed(ancestors):
        spec = compile_rules(load_directory_rules(ancestor))
        if spec is not None:
            scopes.append(RuleScope(base="", spec=spec, lead=_lead(ancestor, root)))
    return scopes


def _lead(directory: Path, root: Path) -> str:
    lead = root.relative_to(directory).as_posix()
    return "" if lead == "." else lead


def should_ignore(rel_path: str, is_dir: bool, scopes: Sequence[RuleScope]) -> bool:
    """Apply scopes in order; the last one with a matching rule decides."""
    ignored = False
    for scope in scopes:
        verdict = scope.check(rel_path, is_dir)
        if verdict is not None:
            ignored = verdict
    return ignored


__all__ = [
    "EXCLUDE_FILE",
    "IGNORE_FILENAMES",
    "RuleScope",
    "compile_rules",
    "find_git_root",
    "load_directory_rules",
    "load_inherited_scopes",
    "parse_ignore_text",
    "read_ignore_file",
    "should_ignore",
]
