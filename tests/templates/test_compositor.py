"""Tests for ignr.templates.compositor."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, Optional, Set

from ignr.templates.compositor import HEADER_PREFIX, build_block, build_header, compose
from ignr.templates.sources import TemplateSource


class DictSource(TemplateSource):
    """In-memory template source for composition tests."""

    def __init__(self, templates: Dict[str, str], name: str = "memory") -> None:
        self.name = name
        self.templates = templates

    def resolve(self, tag: str) -> Optional[str]:
        return self.templates.get(tag)

    def available(self) -> Set[str]:
        return set(self.templates)


def test_earlier_tag_wins_line_collisions() -> None:
    sources = [DictSource({"a": "X\n", "b": "X\nY\n"})]

    forward = compose(["a", "b"], sources)
    assert [(s.tag, s.lines) for s in forward.sections] == [("a", ["X"]), ("b", ["Y"])]

    backward = compose(["b", "a"], sources)
    assert [(s.tag, s.lines) for s in backward.sections] == [("b", ["X", "Y"])]


def test_rendered_sections_are_separated_by_one_blank_line() -> None:
    sources = [DictSource({"a": "X\n", "b": "X\nY\n"})]

    assert compose(["a", "b"], sources).text == "# === a ===\nX\n\n# === b ===\nY\n"


def test_dedup_compares_trimmed_lines_but_keeps_original_text() -> None:
    sources = [DictSource({"a": "  build/  \n*.log\n", "b": "build/\n\t*.log\nnew\n"})]

    composed = compose(["a", "b"], sources)

    assert composed.sections[0].lines == ["  build/  ", "*.log"]
    assert composed.sections[1].lines == ["new"]


def test_blank_lines_are_dropped() -> None:
    sources = [DictSource({"a": "one\n\n   \ntwo\n"})]

    assert compose(["a"], sources).text == "# === a ===\none\ntwo\n"


def test_whitespace_only_template_contributes_no_section() -> None:
    sources = [DictSource({"blank": "  \n\n\t\n", "a": "X\n"})]

    composed = compose(["blank", "a"], sources)

    assert [section.tag for section in composed.sections] == ["a"]
    assert "# === blank ===" not in composed.text


def test_missing_tag_is_recorded_and_composition_continues(caplog) -> None:
    sources = [DictSource({"known": "keep\n"})]

    with caplog.at_level(logging.WARNING, logger="ignr"):
        composed = compose(["known", "unknown-tag-xyz"], sources)

    assert composed.missing == ["unknown-tag-xyz"]
    assert composed.text == "# === known ===\nkeep\n"
    warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "unknown-tag-xyz" in warnings[0].getMessage()


def test_all_missing_tags_give_empty_output() -> None:
    composed = compose(["nope", "nada"], [DictSource({})])

    assert composed.sections == []
    assert composed.text == ""
    assert composed.missing == ["nope", "nada"]


def test_no_trimmed_line_appears_twice() -> None:
    sources = [
        DictSource(
            {
                "a": "x\ny\n z\n",
                "b": "y \nz\nw\nx\n",
                "c": "w\nw\nv\n",
            }
        )
    ]

    composed = compose(["c", "a", "b"], sources)
    emitted = [line.strip() for section in composed.sections for line in section.lines]

    assert len(emitted) == len(set(emitted))
    assert sorted(emitted) == ["v", "w", "x", "y", "z"]


def test_composition_is_deterministic() -> None:
    sources = [DictSource({"a": "1\n2\n", "b": "2\n3\n", "c": "3\n4\n"})]

    assert compose(["b", "c", "a"], sources).text == compose(["b", "c", "a"], sources).text


def test_compositor_does_not_reorder_tags() -> None:
    sources = [DictSource({"z": "z\n", "a": "a\n"})]

    assert [section.tag for section in compose(["z", "a"], sources).sections] == ["z", "a"]


def test_first_source_wins() -> None:
    sources = [DictSource({"a": "first\n"}), DictSource({"a": "second\n"})]

    assert compose(["a"], sources).sections[0].lines == ["first"]


def test_header_format() -> None:
    header = build_header(["node", "rust"], date(2024, 3, 9))

    assert header == "# ---- ignr (detected: node,rust) @ 2024-03-09 ----\n"
    assert header.startswith(HEADER_PREFIX)


def test_build_block_prefixes_header_and_blank_line() -> None:
    sources = [DictSource({"a": "X\n"})]

    block, composed = build_block(["a"], sources, date(2024, 1, 2))

    assert block == (
        "# ---- ignr (detected: a) @ 2024-01-02 ----\n"
        "\n"
        "# === a ===\n"
        "X\n"
    )
    assert composed.tags == ["a"]
