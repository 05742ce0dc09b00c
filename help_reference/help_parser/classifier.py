"""Block classification.

A block's kind is decided by an ordered tuple of strategies. Each strategy
returns a kind or None; the first kind wins and ``description`` is the
fallback.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from .constants import (
    BLOCK_COMMANDS,
    BLOCK_DESCRIPTION,
    BLOCK_OPTIONS,
    BLOCK_USAGE,
    COMMAND_HEADER_KEYWORDS,
    COMMAND_SHAPE_RE,
    CONTENT_RATIO_THRESHOLD,
    HEADER_SYNONYMS,
    OPTION_SHAPE_RE,
)
from .models import BlockKind, RawBlock

logger = logging.getLogger(__name__)

Strategy = Callable[[RawBlock], BlockKind | None]


def is_option_line(line: str) -> bool:
    return bool(OPTION_SHAPE_RE.match(line))


def is_command_line(line: str) -> bool:
    if is_option_line(line):
        return False
    return bool(COMMAND_SHAPE_RE.match(line))


def by_header(block: RawBlock) -> BlockKind | None:
    if block.header is None:
        return None
    header = block.header.lower()
    mapped = HEADER_SYNONYMS.get(header)
    if mapped:
        return mapped
    if any(keyword in header for keyword in COMMAND_HEADER_KEYWORDS):
        return BLOCK_COMMANDS
    return None


def content_ratios(lines: Sequence[str]) -> tuple[float, float]:
    """Fractions of non-blank lines shaped like options and like commands."""
    non_empty = [line for line in lines if line.strip()]
    if not non_empty:
        return 0.0, 0.0
    option_lines = sum(1 for line in non_empty if is_option_line(line))
    command_lines = sum(1 for line in non_empty if is_command_line(line))
    total = len(non_empty)
    return option_lines / total, command_lines / total


def by_content_shape(block: RawBlock) -> BlockKind | None:
    option_ratio, command_ratio = content_ratios([line.text for line in block.body_lines])
    if option_ratio and option_ratio >= CONTENT_RATIO_THRESHOLD:
        return BLOCK_OPTIONS
    if command_ratio and command_ratio >= CONTENT_RATIO_THRESHOLD:
        return BLOCK_COMMANDS
    return None


def by_usage_label(block: RawBlock) -> BlockKind | None:
    if block.header is not None and block.header.lower() == BLOCK_USAGE:
        return BLOCK_USAGE
    return None


STRATEGIES: tuple[Strategy, ...] = (by_header, by_content_shape, by_usage_label)


def classify_block(
    block: RawBlock, strategies: Sequence[Strategy] = STRATEGIES
) -> BlockKind:
    for strategy in strategies:
        kind = strategy(block)
        if kind is not None:
            logger.debug(
                "Block %r at line %d classified as %s by %s",
                block.header,
                block.start_line,
                kind,
                strategy.__name__,
            )
            return kind
    return BLOCK_DESCRIPTION
