"""Normalization helpers."""
from __future__ import annotations

import re

from .constants import (
    DESCRIPTION_MAX_LENGTH,
    ITEM_DESCRIPTION_MIN_LENGTH,
    NAME_MAX_LENGTH,
    PLACEHOLDER_DESCRIPTION,
    TAB_WIDTH,
    UNKNOWN_NAME,
)

# CSI (7-bit and 8-bit), OSC terminated by BEL or ST, and charset selection.
ANSI_RE = re.compile(
    r"\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|[\x1b\x9b][\[()#;?]*(?:[0-9]{1,4}(?:;[0-9]{0,4})*)?[0-9A-ORZcf-nqry=><]"
    r"|\x1b[()][AB012]"
)
NAME_INVALID_RE = re.compile(r"[^a-z0-9\- ]")
PROGRAM_NAME_INVALID_RE = re.compile(r"[^a-z0-9-]")
HYPHEN_RUN_RE = re.compile(r"-+")


def strip_ansi(text: str) -> str:
    return ANSI_RE.sub("", text)


def apply_backspaces(text: str) -> str:
    """Resolve man-page overstrike: every backspace deletes the previous character."""
    if "\b" not in text:
        return text
    result: list[str] = []
    for char in text:
        if char == "\b":
            if result and result[-1] != "\n":
                result.pop()
        else:
            result.append(char)
    return "".join(result)


def normalize_text(text: str) -> str:
    text = strip_ansi(text)
    text = apply_backspaces(text)
    return text.replace("\r\n", "\n").replace("\r", "\n")


def get_indent(line: str) -> int:
    indent = 0
    for char in line:
        if char == " ":
            indent += 1
        elif char == "\t":
            indent += TAB_WIDTH
        else:
            break
    return indent


def collapse_whitespace(value: str) -> str:
    return " ".join(value.split())


def limit_length(value: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    if len(value) <= max_length:
        return value
    return value[: max_length - 3] + "..."


def ensure_description(value: str, min_length: int = ITEM_DESCRIPTION_MIN_LENGTH) -> str:
    cleaned = collapse_whitespace(value)
    if not cleaned:
        return PLACEHOLDER_DESCRIPTION
    if len(cleaned) < min_length:
        return cleaned + "." * (min_length - len(cleaned))
    return limit_length(cleaned)


def normalize_name(value: str) -> str:
    """Normalize a command or option name; single spaces survive ("store add")."""
    normalized = NAME_INVALID_RE.sub("-", value.lower())
    normalized = HYPHEN_RUN_RE.sub("-", normalized)
    normalized = normalized.strip("- ")
    return normalized or UNKNOWN_NAME


def normalize_program_name(value: str) -> str:
    normalized = PROGRAM_NAME_INVALID_RE.sub("-", value.lower())
    normalized = HYPHEN_RUN_RE.sub("-", normalized).strip("-")
    normalized = normalized[:NAME_MAX_LENGTH].rstrip("-")
    return normalized or UNKNOWN_NAME


def extract_names(value: str) -> tuple[str, tuple[str, ...]]:
    """Split ``"i, install"`` into the canonical name and its aliases."""
    if "," not in value:
        return normalize_name(value), ()
    parts = [part.strip() for part in value.split(",")]
    main_name = parts[-1] or value
    aliases: list[str] = []
    for part in parts[:-1]:
        alias = normalize_name(part)
        if alias != UNKNOWN_NAME:
            aliases.append(alias)
    return normalize_name(main_name), tuple(aliases)
