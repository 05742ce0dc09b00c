"""Reading captured help text from files and scanning directories of them."""
from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator
from dataclasses import dataclass
from hashlib import sha256
from pathlib import Path

from bs4 import BeautifulSoup

from .compiler import parse
from .constants import UNKNOWN_NAME
from .errors import EmptyHelpTextError
from .models import Program
from .normalize import normalize_text

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {
    ".txt",
    ".help",
    ".out",
    ".html",
    ".htm",
}

HTML_EXTENSIONS = {".html", ".htm"}

DEFAULT_MIN_TEXT_CHARS = 1
DEFAULT_ENCODING = "utf-8"

USAGE_MARKER_RE = re.compile(r"usage:", re.IGNORECASE)

STATUS_OK = "ok"
STATUS_NOT_HELP = "not-help"
STATUS_EMPTY = "empty"
STATUS_ERROR = "error"


@dataclass
class ParseOutcome:
    """A parsed help file: the program plus the cleaned text it came from."""

    program: Program
    text: str
    is_help: bool
    source_file: str | None = None


@dataclass
class FileScanResult:
    """Metadata captured while scanning a single help file."""

    file: str
    sha256: str
    chars: int
    status: str = "pending"
    program_name: str | None = None
    option_count: int = 0
    command_count: int = 0
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.file,
            "sha256": self.sha256,
            "chars": self.chars,
            "status": self.status,
            "program_name": self.program_name,
            "option_count": self.option_count,
            "command_count": self.command_count,
            "error": self.error,
        }


def resolve_min_text_chars(value: int | None) -> int:
    if value is not None:
        return max(value, 0)
    env_value = os.environ.get("HELP_MIN_TEXT_CHARS")
    if env_value:
        try:
            return max(int(env_value), 0)
        except ValueError:
            logger.debug("Invalid HELP_MIN_TEXT_CHARS value: %s", env_value)
    return DEFAULT_MIN_TEXT_CHARS


def resolve_encoding(value: str | None) -> str:
    if value:
        return value
    return os.environ.get("HELP_TEXT_ENCODING") or DEFAULT_ENCODING


def html_to_text(markup: str) -> str:
    soup = BeautifulSoup(markup, "lxml")
    preformatted = [block.get_text() for block in soup.find_all("pre")]
    if preformatted:
        return "\n\n".join(preformatted)
    for tag in soup(["script", "style"]):
        tag.decompose()
    return soup.get_text("\n")


def read_help_text(path: Path, encoding: str | None = None) -> str:
    raw = path.read_text(encoding=resolve_encoding(encoding), errors="ignore")
    if path.suffix.lower() in HTML_EXTENSIONS:
        return html_to_text(raw)
    return raw


def count_text_chars(text: str) -> int:
    return sum(1 for char in text if not char.isspace())


def looks_like_help(program: Program, text: str) -> bool:
    """False for output that parsed to nothing and never mentions a usage line."""
    if program.name != UNKNOWN_NAME or program.options or program.commands:
        return True
    return bool(USAGE_MARKER_RE.search(text))


def parse_text(text: str, *, min_chars: int | None = None) -> ParseOutcome:
    cleaned = normalize_text(text)
    required = max(resolve_min_text_chars(min_chars), 1)
    chars = count_text_chars(cleaned)
    if chars < required:
        raise EmptyHelpTextError(
            f"help text has {chars} characters, expected at least {required}"
        )
    program = parse(cleaned)
    return ParseOutcome(program=program, text=cleaned, is_help=looks_like_help(program, cleaned))


def load_program(
    path: Path,
    *,
    min_chars: int | None = None,
    encoding: str | None = None,
) -> ParseOutcome:
    try:
        text = read_help_text(path, encoding)
    except (OSError, LookupError) as exc:
        raise EmptyHelpTextError(f"cannot read {path}: {exc}") from exc
    outcome = parse_text(text, min_chars=min_chars)
    outcome.source_file = str(path)
    return outcome


def iter_supported_files(root: Path) -> Iterator[Path]:
    for path in sorted(root.rglob("*")):
        if not path.is_file():
            continue
        if path.suffix.lower() in SUPPORTED_EXTENSIONS:
            yield path


def scan_directory(
    target_dir: Path,
    base_path: Path,
    *,
    min_chars: int | None = None,
    encoding: str | None = None,
) -> tuple[list[ParseOutcome], dict[str, FileScanResult]]:
    outcomes: list[ParseOutcome] = []
    files: dict[str, FileScanResult] = {}
    resolved_min = resolve_min_text_chars(min_chars)
    resolved_encoding = resolve_encoding(encoding)
    for file_path in iter_supported_files(target_dir):
        rel_file = str(file_path.relative_to(base_path).as_posix())
        try:
            raw_bytes = file_path.read_bytes()
        except OSError as exc:
            logger.error("Failed to read %s: %s", file_path, exc)
            files[rel_file] = FileScanResult(
                file=rel_file, sha256="", chars=0, status=STATUS_ERROR, error=str(exc)
            )
            continue
        file_sha = sha256(raw_bytes).hexdigest()
        try:
            outcome = load_program(file_path, min_chars=resolved_min, encoding=resolved_encoding)
        except EmptyHelpTextError as exc:
            logger.info("Skipping %s: %s", rel_file, exc)
            files[rel_file] = FileScanResult(
                file=rel_file, sha256=file_sha, chars=0, status=STATUS_EMPTY, error=str(exc)
            )
            continue
        except Exception as exc:  # pragma: no cover
            logger.exception("Failed to parse %s", file_path)
            files[rel_file] = FileScanResult(
                file=rel_file, sha256=file_sha, chars=0, status=STATUS_ERROR, error=str(exc)
            )
            continue
        outcome.source_file = rel_file
        outcomes.append(outcome)
        program = outcome.program
        files[rel_file] = FileScanResult(
            file=rel_file,
            sha256=file_sha,
            chars=count_text_chars(outcome.text),
            status=STATUS_OK if outcome.is_help else STATUS_NOT_HELP,
            program_name=program.name,
            option_count=len(program.options),
            command_count=len(program.commands),
        )
    return outcomes, files
