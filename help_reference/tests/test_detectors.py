from __future__ import annotations

from pathlib import Path

import pytest

from help_reference.help_parser import detectors
from help_reference.help_parser.compiler import split_lines
from help_reference.help_parser.normalize import normalize_text

SAMPLE_DIR = Path(__file__).resolve().parents[1] / "help_texts" / "_samples"


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (["Usage: mycli [opts]"], "Usage"),
        (["Alias: mycli a"], "Alias"),
        (["Options:"], "Options"),
        (["My Custom Header:"], "My Custom Header"),
        (["DESCRIPTION"], "DESCRIPTION"),
        (["Note: This is just a note."], None),
        (["-V"], None),
        (["AB"], None),
        (["   "], None),
    ],
)
def test_detect_header_single_line(lines: list[str], expected: str | None) -> None:
    assert detectors.detect_header(lines, 0) == expected


@pytest.mark.parametrize(
    ("lines", "expected"),
    [
        (["A" + "b" * 48 + ":"], "A" + "b" * 48),
        (["A" + "b" * 49 + ":"], None),
        (["A" * 49], "A" * 49),
        (["A" * 50], None),
        (["a" * 79, "   child"], "a" * 79),
        (["a" * 80, "   child"], None),
    ],
    ids=["colon-49", "colon-50", "caps-49", "caps-50", "implicit-79", "implicit-80"],
)
def test_detect_header_length_limits(lines: list[str], expected: str | None) -> None:
    assert detectors.detect_header(lines, 0) == expected


def test_rejected_colon_line_can_still_be_implicit() -> None:
    assert detectors.detect_header(["Note: see below", "   child"], 0) == "Note: see below"
    assert detectors.detect_header(["Note: see below"], 0) is None


def test_detect_header_implicit_from_indented_child() -> None:
    lines = [
        "start a working area (see also: git help tutorial)",
        "   clone     Clone a repository into a new directory",
    ]
    assert detectors.detect_header(lines, 0) == lines[0]
    assert detectors.detect_header(["x", "", "\tchild"], 0) == "x"


def test_detect_header_implicit_rejections() -> None:
    assert detectors.detect_header(["same level", "sibling"], 0) is None
    assert detectors.detect_header(["A sentence.", "   child"], 0) is None
    assert detectors.detect_header(["  indented", "      child"], 0) is None


def test_long_colon_label_is_not_a_header() -> None:
    lines = [
        "These are common Git commands used in various situations:",
        "",
        "start a working area (see also: git help tutorial)",
    ]
    assert detectors.detect_header(lines, 0) is None


def test_single_chunk_header_consumes_blank_line() -> None:
    lines = split_lines("Usage: a\n  more usage\n\nText here.")
    blocks = detectors.group_lines_into_blocks(lines)
    assert [block.header for block in blocks] == ["Usage", None]
    assert len(blocks[0].lines) == 2
    assert blocks[1].start_line == 4
    assert blocks[1].lines[0].text == "Text here."


def test_other_headers_keep_blank_lines() -> None:
    lines = split_lines("Options:\n  --a  A\n\n  --b  B")
    blocks = detectors.group_lines_into_blocks(lines)
    assert len(blocks) == 1
    assert blocks[0].header == "Options"
    assert len(blocks[0].lines) == 4
    assert blocks[0].body_lines[0].text == "  --a  A"


def test_git_lines_land_in_exactly_one_block() -> None:
    text = normalize_text((SAMPLE_DIR / "git.txt").read_text(encoding="utf-8"))
    lines = split_lines(text)
    blocks = detectors.group_lines_into_blocks(lines)
    numbers = [line.number for block in blocks for line in block.lines]
    assert numbers == sorted(set(numbers))
    # Only the blank line closing the usage section is consumed.
    assert len(numbers) == len(lines) - 1
    headers = [block.header for block in blocks]
    assert headers[0] == "usage"
    assert "collaborate (see also: git help workflows)" in headers


def test_empty_input_yields_one_headerless_block() -> None:
    blocks = detectors.group_lines_into_blocks(split_lines(""))
    assert len(blocks) == 1
    assert blocks[0].header is None
    assert blocks[0].start_line == 1
