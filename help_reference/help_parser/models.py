"""Value types produced by the help-text pipeline."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, Union

from .constants import DEFAULT_HEADER

BlockKind = Literal["usage", "options", "commands", "meta", "description"]
ValueType = Literal["string", "number", "boolean", "array"]


def _without_empty(data: dict[str, Any]) -> dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None and value != ()}


@dataclass(frozen=True)
class RawLine:
    """One source line, untrimmed, with its 1-based line number."""

    text: str
    number: int


@dataclass(frozen=True)
class RawBlock:
    """Lines grouped under one (possibly missing) header by the segmenter."""

    header: str | None
    lines: tuple[RawLine, ...]
    start_line: int

    @property
    def body_lines(self) -> tuple[RawLine, ...]:
        # The header line itself opens every header-bearing block.
        if self.header is not None:
            return self.lines[1:]
        return self.lines


@dataclass(frozen=True)
class OptionRecord:
    name: str
    description: str
    type: ValueType
    short: str | None = None
    long: str | None = None
    default: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return _without_empty(
            {
                "name": self.name,
                "short": self.short,
                "long": self.long,
                "description": self.description,
                "type": self.type,
                "default": self.default,
            }
        )


@dataclass(frozen=True)
class CommandRecord:
    name: str
    description: str
    aliases: tuple[str, ...] = ()
    usage: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = _without_empty(
            {
                "name": self.name,
                "description": self.description,
                "usage": self.usage,
            }
        )
        if self.aliases:
            data["aliases"] = list(self.aliases)
        return data


@dataclass(frozen=True)
class TextContent:
    text: str
    line_number: int
    raw: str
    kind: Literal["text"] = field(default="text", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.kind, "data": self.text, "line": self.line_number, "raw": self.raw}


@dataclass(frozen=True)
class OptionContent:
    option: OptionRecord
    line_number: int
    raw: str
    kind: Literal["option"] = field(default="option", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "data": self.option.to_dict(),
            "line": self.line_number,
            "raw": self.raw,
        }


@dataclass(frozen=True)
class CommandContent:
    command: CommandRecord
    line_number: int
    raw: str
    kind: Literal["command"] = field(default="command", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "data": self.command.to_dict(),
            "line": self.line_number,
            "raw": self.raw,
        }


Content = Union[TextContent, OptionContent, CommandContent]


@dataclass(frozen=True)
class Block:
    """A classified block with its extracted content."""

    kind: BlockKind
    content: tuple[Content, ...]
    start_line: int
    raw: str
    header: str = DEFAULT_HEADER

    @property
    def has_items(self) -> bool:
        return any(not isinstance(item, TextContent) for item in self.content)

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header,
            "kind": self.kind,
            "line": self.start_line,
            "content": [item.to_dict() for item in self.content],
            "raw": self.raw,
        }


@dataclass(frozen=True)
class Program:
    name: str
    description: str
    version: str | None = None
    usage: str | None = None
    options: tuple[OptionRecord, ...] = ()
    commands: tuple[CommandRecord, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data = _without_empty(
            {
                "name": self.name,
                "description": self.description,
                "version": self.version,
                "usage": self.usage,
            }
        )
        data["options"] = [option.to_dict() for option in self.options]
        data["commands"] = [command.to_dict() for command in self.commands]
        return data
