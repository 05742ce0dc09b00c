"""Pipeline entry points and the block-to-program compiler."""
from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from .classifier import classify_block
from .constants import (
    BLOCK_META,
    BLOCK_USAGE,
    DEFAULT_HEADER,
    NAME_SPLIT_RE,
    PROGRAM_DESCRIPTION_MIN_LENGTH,
    UNKNOWN_NAME,
    USAGE_NAME_RE,
    USAGE_PREFIX_RE,
    VERSION_RE,
)
from .detectors import group_lines_into_blocks
from .extractors import extract_content
from .models import (
    Block,
    CommandContent,
    CommandRecord,
    OptionContent,
    OptionRecord,
    Program,
    RawBlock,
    RawLine,
    TextContent,
)
from .normalize import ensure_description, normalize_program_name, normalize_text

logger = logging.getLogger(__name__)


@dataclass
class _ProgramState:
    """Fields accumulated while folding blocks into one Program."""

    name: str | None = None
    version: str | None = None
    usage_lines: list[str] = field(default_factory=list)
    description_parts: list[str] = field(default_factory=list)
    options: list[OptionRecord] = field(default_factory=list)
    commands: list[CommandRecord] = field(default_factory=list)

    @property
    def has_name(self) -> bool:
        return self.name is not None and self.name != UNKNOWN_NAME


def split_lines(text: str) -> list[RawLine]:
    return [
        RawLine(text=line, number=index)
        for index, line in enumerate(text.split("\n"), start=1)
    ]


def build_block(raw_block: RawBlock) -> Block:
    kind = classify_block(raw_block)
    return Block(
        kind=kind,
        content=extract_content(raw_block, kind),
        start_line=raw_block.start_line,
        raw="\n".join(line.text for line in raw_block.lines),
        header=raw_block.header or DEFAULT_HEADER,
    )


def parse_blocks(text: str) -> list[Block]:
    """Run the pipeline up to classified, extracted blocks (for diagnostics)."""
    lines = split_lines(normalize_text(text))
    return [build_block(raw_block) for raw_block in group_lines_into_blocks(lines)]


def parse(text: str) -> Program:
    return compile_program(parse_blocks(text))


def _record_usage(state: _ProgramState, text: str) -> None:
    clean = USAGE_PREFIX_RE.sub("", text).strip()
    if not clean:
        return
    state.usage_lines.append(clean)
    if not state.has_name:
        match = USAGE_NAME_RE.match(clean)
        if match:
            state.name = match.group(1)


def _split_name(state: _ProgramState, block_text: list[str]) -> list[str]:
    """Take the program name from "name - summary" style first lines."""
    if state.has_name or state.description_parts:
        return block_text
    if any(":" in text for text in block_text):
        return block_text
    parts = NAME_SPLIT_RE.split(block_text[0])
    if len(parts) < 2:
        return block_text
    state.name = normalize_program_name(parts[0])
    return [" ".join(parts[1:]), *block_text[1:]]


def _compile_block(state: _ProgramState, block: Block) -> None:
    is_usage = block.kind == BLOCK_USAGE
    collects_description = block.kind not in (BLOCK_USAGE, BLOCK_META) and not block.has_items
    block_text: list[str] = []

    for item in block.content:
        if isinstance(item, OptionContent):
            state.options.append(item.option)
        elif isinstance(item, CommandContent):
            state.commands.append(item.command)
        elif isinstance(item, TextContent):
            text = item.text
            if state.version is None:
                version_match = VERSION_RE.search(text)
                if version_match:
                    state.version = version_match.group(1)
            if is_usage or text.lower().startswith("usage:"):
                _record_usage(state, text)
                continue
            block_text.append(text)

    if not block_text or not collects_description:
        return
    block_text = _split_name(state, block_text)
    fragment = "\n".join(block_text)
    if block.header.lower() != DEFAULT_HEADER.lower():
        fragment = f"{block.header}:\n{fragment}"
    state.description_parts.append(fragment)


def compile_program(blocks: Iterable[Block]) -> Program:
    state = _ProgramState()
    for block in blocks:
        _compile_block(state, block)
    program = Program(
        name=normalize_program_name(state.name or UNKNOWN_NAME),
        description=ensure_description(
            "\n\n".join(state.description_parts), PROGRAM_DESCRIPTION_MIN_LENGTH
        ),
        version=state.version,
        usage="\n".join(state.usage_lines) or None,
        options=tuple(state.options),
        commands=tuple(state.commands),
    )
    logger.debug(
        "Compiled program %s: %d options, %d commands",
        program.name,
        len(program.options),
        len(program.commands),
    )
    return program
