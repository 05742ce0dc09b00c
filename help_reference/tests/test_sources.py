from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from help_reference.help_parser import parse, sources, validation
from help_reference.help_parser.errors import (
    EmptyHelpTextError,
    HelpParserError,
    InvalidProgramError,
)
from help_reference.help_parser.models import OptionRecord, Program

SAMPLE_DIR = Path(__file__).resolve().parents[1] / "help_texts" / "_samples"


@pytest.fixture()
def sandbox(tmp_path: Path) -> Path:
    root = tmp_path / "repo"
    target = root / "help_texts"
    target.mkdir(parents=True)
    for sample_file in SAMPLE_DIR.iterdir():
        shutil.copy(sample_file, target / sample_file.name)
    (target / "notes.md").write_text("Usage: ignored\n", encoding="utf-8")
    return root


def test_html_help_reads_preformatted_text() -> None:
    text = sources.read_help_text(SAMPLE_DIR / "grep.html")
    assert "Usage: grep" in text
    assert "<pre>" not in text
    assert "color: #333" not in text


def test_html_to_text_without_pre() -> None:
    markup = "<html><body><script>var x = 1;</script><p>Usage: tool</p></body></html>"
    text = sources.html_to_text(markup)
    assert "Usage: tool" in text
    assert "var x" not in text


def test_load_program_from_html() -> None:
    outcome = sources.load_program(SAMPLE_DIR / "grep.html")
    program = outcome.program
    assert outcome.is_help
    assert outcome.source_file == str(SAMPLE_DIR / "grep.html")
    assert program.name == "grep"
    options = {option.name: option for option in program.options}
    assert list(options) == ["extended-regexp", "ignore-case", "max-count"]
    assert options["ignore-case"].type == "boolean"
    assert options["max-count"].type == "string"
    assert options["max-count"].default == "0"


def test_looks_like_help() -> None:
    not_help = (SAMPLE_DIR / "not_help.txt").read_text(encoding="utf-8")
    assert not sources.looks_like_help(parse(not_help), not_help)
    generic = (SAMPLE_DIR / "generic.txt").read_text(encoding="utf-8")
    assert sources.looks_like_help(parse(generic), generic)
    assert sources.looks_like_help(parse("usage:"), "usage:")


def test_parse_text_rejects_empty_input() -> None:
    with pytest.raises(EmptyHelpTextError):
        sources.parse_text("")
    with pytest.raises(ValueError):
        sources.parse_text(" \n\x1b[0m\n")


def test_min_chars_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    generic = (SAMPLE_DIR / "generic.txt").read_text(encoding="utf-8")
    monkeypatch.setenv("HELP_MIN_TEXT_CHARS", "1000")
    with pytest.raises(EmptyHelpTextError):
        sources.parse_text(generic)
    assert sources.parse_text(generic, min_chars=5).program.name == "myprogram"
    monkeypatch.setenv("HELP_MIN_TEXT_CHARS", "not-a-number")
    assert sources.resolve_min_text_chars(None) == sources.DEFAULT_MIN_TEXT_CHARS


def test_encoding_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("HELP_TEXT_ENCODING", raising=False)
    assert sources.resolve_encoding(None) == "utf-8"
    monkeypatch.setenv("HELP_TEXT_ENCODING", "latin-1")
    assert sources.resolve_encoding(None) == "latin-1"
    assert sources.resolve_encoding("cp1252") == "cp1252"


def test_load_program_missing_file(tmp_path: Path) -> None:
    with pytest.raises(EmptyHelpTextError):
        sources.load_program(tmp_path / "missing.txt")


def test_scan_directory_statuses(sandbox: Path) -> None:
    target = sandbox / "help_texts"
    outcomes, files = sources.scan_directory(target, sandbox)
    assert sorted(files) == [
        "help_texts/bun.txt",
        "help_texts/empty.txt",
        "help_texts/generic.txt",
        "help_texts/git.txt",
        "help_texts/grep.html",
        "help_texts/not_help.txt",
        "help_texts/pnpm.txt",
    ]
    assert len(outcomes) == 6
    assert files["help_texts/empty.txt"].status == "empty"
    assert files["help_texts/not_help.txt"].status == "not-help"
    assert files["help_texts/pnpm.txt"].status == "ok"
    assert files["help_texts/pnpm.txt"].command_count == 7
    assert files["help_texts/generic.txt"].option_count == 3
    assert all(result.sha256 for result in files.values())
    assert outcomes[0].source_file == "help_texts/bun.txt"
    assert files["help_texts/git.txt"].to_dict()["program_name"] == "git"


def test_scan_directory_includes_nested_folders(tmp_path: Path) -> None:
    captures = tmp_path / "captures"
    for folder in ("_index", "tools/pnpm"):
        (captures / folder).mkdir(parents=True)
    (captures / "_index" / "git.txt").write_text("Usage: git <command>\n", encoding="utf-8")
    (captures / "tools" / "pnpm" / "help.out").write_text(
        "Usage: pnpm [command]\n", encoding="utf-8"
    )
    outcomes, files = sources.scan_directory(captures, tmp_path)
    assert sorted(files) == ["captures/_index/git.txt", "captures/tools/pnpm/help.out"]
    assert [outcome.program.name for outcome in outcomes] == ["git", "pnpm"]
    assert files["captures/_index/git.txt"].status == "ok"


def test_validate_program_accepts_parsed_output() -> None:
    program = parse((SAMPLE_DIR / "generic.txt").read_text(encoding="utf-8"))
    assert validation.validate_program(program) is program
    assert validation.program_problems(parse("")) == []


def test_validate_program_lists_every_problem() -> None:
    program = Program(
        name="Bad--Name",
        description="short",
        options=(OptionRecord(name="x", description="d", type="float"),),  # type: ignore[arg-type]
    )
    with pytest.raises(InvalidProgramError) as excinfo:
        validation.validate_program(program)
    assert len(excinfo.value.problems) == 4
    assert isinstance(excinfo.value, HelpParserError)
    assert str(excinfo.value).startswith("Invalid program: ")
