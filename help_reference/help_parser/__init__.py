"""Help-text parser package."""
from __future__ import annotations

from . import classifier, compiler, detectors, extractors, normalize, sources, validation
from .compiler import compile_program, parse, parse_blocks
from .errors import EmptyHelpTextError, HelpParserError, InvalidProgramError
from .models import (
    Block,
    CommandContent,
    CommandRecord,
    Content,
    OptionContent,
    OptionRecord,
    Program,
    TextContent,
)
from .normalize import normalize_text, strip_ansi

__all__ = [
    "classifier",
    "compiler",
    "detectors",
    "extractors",
    "normalize",
    "sources",
    "validation",
    "parse",
    "parse_blocks",
    "compile_program",
    "strip_ansi",
    "normalize_text",
    "Block",
    "Content",
    "TextContent",
    "OptionContent",
    "CommandContent",
    "OptionRecord",
    "CommandRecord",
    "Program",
    "HelpParserError",
    "EmptyHelpTextError",
    "InvalidProgramError",
]
