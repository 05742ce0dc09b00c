from __future__ import annotations

from help_reference.help_parser import classifier
from help_reference.help_parser.models import RawBlock, RawLine


def make_block(header: str | None, *texts: str) -> RawBlock:
    lines = tuple(RawLine(text=text, number=index) for index, text in enumerate(texts, start=1))
    return RawBlock(header=header, lines=lines, start_line=1)


def test_line_shapes() -> None:
    assert classifier.is_option_line("  -v, --verbose   Verbose")
    assert classifier.is_option_line("--output <path>")
    assert not classifier.is_option_line("  -v   Short only")
    assert classifier.is_command_line("  build    Build the project")
    assert classifier.is_command_line("  store add")
    assert not classifier.is_command_line("build    Build the project")
    assert not classifier.is_command_line("  --build    Build")
    assert not classifier.is_command_line("  v1.2    Release")


def test_by_header_synonyms_and_keywords() -> None:
    assert classifier.by_header(make_block("Options", "Options:")) == "options"
    assert classifier.by_header(make_block("FLAGS", "FLAGS")) == "options"
    assert classifier.by_header(make_block("Examples", "Examples:")) == "meta"
    assert classifier.by_header(make_block("Manage your dependencies", "x")) == "commands"
    assert classifier.by_header(make_block("Custom", "Custom:")) is None
    assert classifier.by_header(make_block(None, "text")) is None


def test_by_content_shape_options() -> None:
    block = make_block(
        "Custom Parameters",
        "Custom Parameters:",
        "  --foo      Do foo",
        "  --bar      Do bar",
    )
    assert classifier.by_content_shape(block) == "options"
    assert classifier.classify_block(block) == "options"


def test_by_content_shape_commands() -> None:
    block = make_block(
        "Extra Actions",
        "Extra Actions:",
        "  start    Start the service",
        "  stop     Stop the service",
    )
    assert classifier.classify_block(block) == "commands"


def test_content_ratio_threshold_is_inclusive() -> None:
    options = ["  --a  A", "  --b  B", "  --c  C"]
    at_threshold = make_block(None, *options, *["plain text line"] * 7)
    below_threshold = make_block(None, *options[:2], *["plain text line"] * 8)
    assert classifier.content_ratios([line.text for line in at_threshold.lines]) == (0.3, 0.0)
    assert classifier.classify_block(at_threshold) == "options"
    assert classifier.classify_block(below_threshold) == "description"


def test_usage_and_fallback() -> None:
    assert classifier.by_usage_label(make_block("USAGE", "USAGE")) == "usage"
    assert classifier.classify_block(make_block("Usage", "Usage: tool")) == "usage"
    note = make_block("Important Note", "Important Note:", "Read the docs first.")
    assert classifier.classify_block(note) == "description"
    assert classifier.classify_block(make_block(None)) == "description"


def test_strategies_are_ordered_and_replaceable() -> None:
    assert classifier.STRATEGIES == (
        classifier.by_header,
        classifier.by_content_shape,
        classifier.by_usage_label,
    )
    block = make_block("Options", "Options:", "  --a  A")
    assert classifier.classify_block(block, strategies=()) == "description"
    assert classifier.classify_block(block, strategies=[lambda _: "meta"]) == "meta"
