"""Technology detection from directory contents."""

from __future__ import annotations

from .detector import TechnologyDetector, detect_technologies, host_os_tag, tags_for_entry
from .ignore_rules import find_git_root
from .tables import EXTENSION_TAGS, IDE_DIRECTORY_TAGS, MANIFEST_TAGS

__all__ = [
    "EXTENSION_TAGS",
    "IDE_DIRECTORY_TAGS",
    "MANIFEST_TAGS",
    "TechnologyDetector",
    "detect_technologies",
    "find_git_root",
    "host_os_tag",
    "tags_for_entry",
]
