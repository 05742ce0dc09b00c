"""Fixed lookup tables and tuned thresholds for help-text parsing."""
from __future__ import annotations

import re
from types import MappingProxyType

# These values are tuned against the git, pnpm and generic fixtures in
# help_texts/_samples; changing any of them changes those programs' output.
CONTENT_RATIO_THRESHOLD = 0.30
HEADER_MAX_LENGTH = 50
ALL_CAPS_HEADER_MIN_LENGTH = 2
IMPLICIT_HEADER_MAX_LENGTH = 80
MIN_INDENT_STEP = 2
TAB_WIDTH = 2
COMMAND_MIN_INDENT = 2
COMMAND_MAX_WORDS = 3

DESCRIPTION_MAX_LENGTH = 1024
ITEM_DESCRIPTION_MIN_LENGTH = 1
PROGRAM_DESCRIPTION_MIN_LENGTH = 10
NAME_MAX_LENGTH = 64

UNKNOWN_NAME = "unknown"
DEFAULT_HEADER = "Description"
PLACEHOLDER_DESCRIPTION = "No description available for this item."

BLOCK_USAGE = "usage"
BLOCK_OPTIONS = "options"
BLOCK_COMMANDS = "commands"
BLOCK_META = "meta"
BLOCK_DESCRIPTION = "description"

VALUE_STRING = "string"
VALUE_BOOLEAN = "boolean"
# "number" and "array" are reserved for records built outside this package.
VALUE_TYPES = frozenset({VALUE_STRING, "number", VALUE_BOOLEAN, "array"})

# Headers that may carry content on the same line ("Usage: myapp [opts]").
INLINE_HEADERS = frozenset({"usage", "alias", "aliases"})

# Sections that end at the first blank line.
SINGLE_CHUNK_HEADERS = frozenset(
    {
        "usage",
        "alias",
        "aliases",
        "examples",
        "arguments",
        "environment",
        "notes",
    }
)

HEADER_SYNONYMS = MappingProxyType(
    {
        "usage": BLOCK_USAGE,
        "options": BLOCK_OPTIONS,
        "flags": BLOCK_OPTIONS,
        "configuration": BLOCK_OPTIONS,
        "commands": BLOCK_COMMANDS,
        "subcommands": BLOCK_COMMANDS,
        "alias": BLOCK_META,
        "aliases": BLOCK_META,
        "examples": BLOCK_META,
        "arguments": BLOCK_META,
        "environment": BLOCK_META,
        "notes": BLOCK_META,
    }
)

# Category headings such as "Manage your dependencies:" list commands.
COMMAND_HEADER_KEYWORDS = ("dependencies", "scripts", "review", "manage", "commands")

COLON_HEADER_RE = re.compile(r"^([A-Za-z][A-Za-z0-9 -]+):(\s+(.*))?$")
ALL_CAPS_HEADER_RE = re.compile(r"^[A-Z0-9 -]+$")

# -s, --long <arg>, --long=ARG. A bare uppercase word after a space is a
# placeholder only when a column gap or the line end follows it.
OPTION_RE = re.compile(
    r"^\s*(?:(-[a-zA-Z0-9]),?\s+)?(--[a-zA-Z0-9-]+)"
    r"(?:=(<[^>]+>|\[[^\]]+\]|[A-Z0-9_]+)"
    r"|\s*(<[^>]+>|\[[^\]]+\]|[A-Z0-9_]+(?=\s{2,}|\s*$)))?\s*"
)
OPTION_SHAPE_RE = re.compile(r"^\s*(?:-[a-zA-Z0-9],?\s+)?--[a-zA-Z0-9]")
COMMAND_SHAPE_RE = re.compile(
    r"^\s{2,}[a-zA-Z0-9](?:[a-zA-Z0-9_,-]|\s(?!\s))*(?:\s{2,}|\s*$)"
)
COLUMN_SPLIT_RE = re.compile(r"\s{2,}")

VERSION_RE = re.compile(r"v?(\d+\.\d+\.\d+)")
USAGE_PREFIX_RE = re.compile(r"^\s*usage:\s*", re.IGNORECASE)
USAGE_NAME_RE = re.compile(r"^([a-zA-Z0-9-]+)")
NAME_SPLIT_RE = re.compile(r"\s+-\s+|\s{2,}")
DEFAULT_VALUE_RE = re.compile(
    r"[\[(]default(?::\s*|\s+)([^\])]+)[\])]", re.IGNORECASE
)
