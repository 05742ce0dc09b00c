"""Line folds that turn classified block lines into options, commands and text.

Each fold threads an explicit ``OpenItem`` accumulator through a step
function: ``step(open_item, line) -> (open_item, emitted)``. The open item
collects continuation lines until something closes it.
"""
from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from .constants import (
    BLOCK_COMMANDS,
    BLOCK_OPTIONS,
    COLUMN_SPLIT_RE,
    COMMAND_MAX_WORDS,
    COMMAND_MIN_INDENT,
    DEFAULT_VALUE_RE,
    OPTION_RE,
    VALUE_BOOLEAN,
    VALUE_STRING,
)
from .models import (
    BlockKind,
    CommandContent,
    CommandRecord,
    Content,
    OptionContent,
    OptionRecord,
    RawBlock,
    RawLine,
    TextContent,
)
from .normalize import ensure_description, extract_names, normalize_name

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", OptionRecord, CommandRecord)


@dataclass(frozen=True)
class OpenItem(Generic[RecordT]):
    """An option or command still collecting description lines."""

    record: RecordT
    line_number: int
    raw: str

    def extend(self, line: RawLine) -> OpenItem[RecordT]:
        description = f"{self.record.description} {line.text.strip()}"
        return OpenItem(
            record=replace(self.record, description=description),
            line_number=self.line_number,
            raw=f"{self.raw}\n{line.text}",
        )


Emitted = tuple[Content, ...]
StepResult = tuple[OpenItem | None, Emitted]


def _is_indented(text: str) -> bool:
    return text[:1] in (" ", "\t")


def _text(line: RawLine) -> TextContent:
    return TextContent(text=line.text.strip(), line_number=line.number, raw=line.text)


def extract_default(description: str) -> str | None:
    match = DEFAULT_VALUE_RE.search(description)
    if not match:
        return None
    value = match.group(1).strip().strip("\"'`")
    return value or None


def close_option(open_item: OpenItem[OptionRecord] | None) -> Emitted:
    if open_item is None:
        return ()
    description = ensure_description(open_item.record.description)
    option = replace(
        open_item.record,
        description=description,
        default=extract_default(description),
    )
    return (OptionContent(option=option, line_number=open_item.line_number, raw=open_item.raw),)


def close_command(open_item: OpenItem[CommandRecord] | None) -> Emitted:
    if open_item is None:
        return ()
    command = replace(
        open_item.record,
        description=ensure_description(open_item.record.description),
    )
    return (
        CommandContent(command=command, line_number=open_item.line_number, raw=open_item.raw),
    )


def match_option(line: RawLine) -> OpenItem[OptionRecord] | None:
    match = OPTION_RE.match(line.text)
    if not match:
        return None
    short, long_flag, assigned, spaced = match.groups()
    placeholder = assigned or spaced
    long_name = long_flag[2:]
    option = OptionRecord(
        name=normalize_name(long_name),
        description=line.text[match.end() :].strip(),
        type=VALUE_STRING if placeholder else VALUE_BOOLEAN,
        short=short[1:] if short else None,
        long=long_name,
    )
    return OpenItem(record=option, line_number=line.number, raw=line.text)


def match_command(line: RawLine) -> OpenItem[CommandRecord] | None:
    text = line.text
    if not text.startswith(" " * COMMAND_MIN_INDENT):
        return None
    parts = COLUMN_SPLIT_RE.split(text.strip())
    if len(parts) < 2:
        return None
    first = parts[0].strip()
    if "." in first or len(first.split()) > COMMAND_MAX_WORDS:
        return None
    name, aliases = extract_names(first)
    command = CommandRecord(
        name=name,
        aliases=aliases,
        description="  ".join(parts[1:]).strip(),
    )
    return OpenItem(record=command, line_number=line.number, raw=text)


def step_option(open_item: OpenItem[OptionRecord] | None, line: RawLine) -> StepResult:
    if not line.text.strip():
        # Option descriptions carry over blank separators.
        return open_item, ()
    opened = match_option(line)
    if opened is not None:
        return opened, close_option(open_item)
    if open_item is not None and _is_indented(line.text):
        return open_item.extend(line), ()
    return None, (*close_option(open_item), _text(line))


def step_command(open_item: OpenItem[CommandRecord] | None, line: RawLine) -> StepResult:
    if not line.text.strip():
        return None, close_command(open_item)
    opened = match_command(line)
    if opened is not None:
        return opened, close_command(open_item)
    if open_item is not None and _is_indented(line.text):
        return open_item.extend(line), ()
    return None, (*close_command(open_item), _text(line))


def fold_lines(
    lines: Iterable[RawLine],
    step: Callable[[OpenItem | None, RawLine], StepResult],
    close: Callable[[OpenItem | None], Emitted],
) -> tuple[Content, ...]:
    content: list[Content] = []
    open_item: OpenItem | None = None
    for line in lines:
        open_item, emitted = step(open_item, line)
        content.extend(emitted)
    content.extend(close(open_item))
    return tuple(content)


def extract_options(lines: Iterable[RawLine]) -> tuple[Content, ...]:
    return fold_lines(lines, step_option, close_option)


def extract_commands(lines: Iterable[RawLine]) -> tuple[Content, ...]:
    return fold_lines(lines, step_command, close_command)


def extract_text(lines: Iterable[RawLine]) -> tuple[Content, ...]:
    return tuple(_text(line) for line in lines if line.text.strip())


def strip_header_line(block: RawBlock) -> list[RawLine]:
    """Drop the header label from the first line, keeping any inline content."""
    lines = list(block.lines)
    if block.header is None or not lines:
        return lines
    first = lines[0]
    header_re = re.compile(rf"^\s*{re.escape(block.header)}(?:\s*:)?", re.IGNORECASE)
    match = header_re.match(first.text)
    if match:
        remaining = first.text[match.end() :].strip()
        if remaining:
            lines[0] = replace(first, text=remaining)
        else:
            lines.pop(0)
    return lines


def extract_content(block: RawBlock, kind: BlockKind) -> tuple[Content, ...]:
    lines = strip_header_line(block)
    if kind == BLOCK_OPTIONS:
        content = extract_options(lines)
    elif kind == BLOCK_COMMANDS:
        content = extract_commands(lines)
    else:
        content = extract_text(lines)
    logger.debug(
        "Extracted %d items from %s block at line %d", len(content), kind, block.start_line
    )
    return content