from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Mapping

import pytest

from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable project builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def template_dir(tmp_path: Path) -> Callable[[str, Mapping[str, str]], Path]:
    """Return a factory that writes `<tag>.gitignore` files into a named directory."""

    def _make(name: str, templates: Mapping[str, str]) -> Path:
        directory = tmp_path / name
        directory.mkdir(parents=True, exist_ok=True)
        for tag, text in templates.items():
            (directory / f"{tag}.gitignore").write_text(text, encoding="utf-8")
        return directory

    return _make


@pytest.fixture(autouse=True)
def _reset_ignr_logger():
    """Undo handler and propagation changes made by configure_logging."""
    yield
    logger = logging.getLogger("ignr")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
