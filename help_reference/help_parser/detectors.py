"""Header detection and block segmentation."""
from __future__ import annotations

import logging
from collections.abc import Sequence

from .constants import (
    ALL_CAPS_HEADER_MIN_LENGTH,
    ALL_CAPS_HEADER_RE,
    COLON_HEADER_RE,
    HEADER_MAX_LENGTH,
    IMPLICIT_HEADER_MAX_LENGTH,
    INLINE_HEADERS,
    MIN_INDENT_STEP,
    SINGLE_CHUNK_HEADERS,
)
from .models import RawBlock, RawLine
from .normalize import get_indent

logger = logging.getLogger(__name__)


def _colon_header(trimmed: str) -> str | None:
    match = COLON_HEADER_RE.match(trimmed)
    if not match:
        return None
    label = match.group(1).strip()
    has_content = bool(match.group(3))
    if label.lower() in INLINE_HEADERS:
        return label
    if not has_content and len(label) < HEADER_MAX_LENGTH:
        return label
    return None


def _all_caps_header(trimmed: str) -> str | None:
    if trimmed.startswith("-"):
        return None
    if not ALL_CAPS_HEADER_RE.match(trimmed):
        return None
    if ALL_CAPS_HEADER_MIN_LENGTH < len(trimmed) < HEADER_MAX_LENGTH:
        return trimmed
    return None


def _implicit_header(lines: Sequence[str], index: int) -> str | None:
    line = lines[index]
    trimmed = line.strip()
    if not trimmed or len(trimmed) >= IMPLICIT_HEADER_MAX_LENGTH:
        return None
    if trimmed.endswith((".", ",")):
        return None
    indent = get_indent(line)
    if indent >= MIN_INDENT_STEP:
        return None
    for next_line in lines[index + 1 :]:
        if not next_line.strip():
            continue
        if get_indent(next_line) >= indent + MIN_INDENT_STEP:
            return trimmed
        return None
    return None


def detect_header(lines: Sequence[str], index: int) -> str | None:
    """Decide whether ``lines[index]`` opens a new section and return its label.

    Colon headers win over all-caps headers, which win over implicit
    headers recognized by a deeper-indented following line. A colon line
    rejected for carrying trailing text may still be an implicit header.
    """
    trimmed = lines[index].strip()
    if not trimmed:
        return None
    return (
        _colon_header(trimmed)
        or _all_caps_header(trimmed)
        or _implicit_header(lines, index)
    )


def group_lines_into_blocks(lines: Sequence[RawLine]) -> list[RawBlock]:
    texts = [line.text for line in lines]
    blocks: list[RawBlock] = []
    current_header: str | None = None
    current_lines: list[RawLine] = []

    def flush() -> None:
        if current_lines or current_header is not None:
            start = current_lines[0].number if current_lines else 1
            blocks.append(RawBlock(current_header, tuple(current_lines), start))

    for index, line in enumerate(lines):
        if not line.text.strip():
            if current_header is not None and current_header.lower() in SINGLE_CHUNK_HEADERS:
                flush()
                current_header = None
                current_lines = []
                continue
            current_lines.append(line)
            continue
        header = detect_header(texts, index)
        if header:
            flush()
            current_header = header
            current_lines = [line]
        else:
            current_lines.append(line)
    flush()
    logger.debug("Segmented %d lines into %d blocks", len(lines), len(blocks))
    return blocks
