"""Template lookup and composition."""

from __future__ import annotations

from .compositor import HEADER_PREFIX, build_block, build_header, compose
from .sources import (
    BuiltinSource,
    DirectorySource,
    ManagedDataSource,
    TEMPLATE_SUFFIX,
    TemplateSource,
    build_sources,
    list_available,
    lookup,
    resolve,
)

__all__ = [
    "BuiltinSource",
    "DirectorySource",
    "HEADER_PREFIX",
    "ManagedDataSource",
    "TEMPLATE_SUFFIX",
    "TemplateSource",
    "build_block",
    "build_header",
    "build_sources",
    "compose",
    "list_available",
    "lookup",
    "resolve",
]
