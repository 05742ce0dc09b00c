#!/usr/bin/env python3
"""CLI entrypoint for the help-text parser."""
from __future__ import annotations

import argparse
import json
import logging
import sys
from collections import Counter
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from help_reference.help_parser import parse_blocks, sources, validation
from help_reference.help_parser.errors import HelpParserError
from help_reference.help_parser.sources import FileScanResult, ParseOutcome

logger = logging.getLogger("help_reference.help_parser.cli")


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )


def read_input(path: str | None, encoding: str | None = None) -> str:
    if not path or path == "-":
        return sys.stdin.read()
    source = Path(path).expanduser()
    if not source.is_file():
        raise SystemExit(f"Input file not found: {source}")
    return sources.read_help_text(source, encoding)


def load_outcome(args: argparse.Namespace) -> ParseOutcome:
    text = read_input(args.path, args.encoding)
    try:
        return sources.parse_text(text, min_chars=args.min_chars)
    except HelpParserError as exc:
        raise SystemExit(f"Error: {exc}") from exc


def write_json(data: Any) -> None:
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


def command_parse(args: argparse.Namespace) -> None:
    outcome = load_outcome(args)
    program = outcome.program
    if not outcome.is_help:
        logger.warning("Input does not look like help output")
    if args.strict:
        try:
            validation.validate_program(program)
        except HelpParserError as exc:
            raise SystemExit(f"Error: {exc}") from exc
    data = program.to_dict()
    if args.raw:
        data["raw"] = outcome.text
    logger.debug(
        "Parsed %s: %d options, %d commands",
        program.name,
        len(program.options),
        len(program.commands),
    )
    write_json(data)


def command_blocks(args: argparse.Namespace) -> None:
    outcome = load_outcome(args)
    blocks = parse_blocks(outcome.text)
    write_json([block.to_dict() for block in blocks])


def command_scan(args: argparse.Namespace) -> None:
    target = Path(args.target).expanduser().resolve()
    if not target.is_dir():
        raise SystemExit(f"Target directory not found: {target}")
    logger.info("Scanning %s", target)
    outcomes, files = sources.scan_directory(
        target,
        target,
        min_chars=args.min_chars,
        encoding=args.encoding,
    )
    logger.info("Parsed %d programs from %d files", len(outcomes), len(files))
    if args.json:
        write_json(build_scan_report(target, files))
        return
    print_status_table(files)


def build_scan_report(target: Path, files: Mapping[str, FileScanResult]) -> dict[str, Any]:
    statuses = Counter(result.status for result in files.values())
    return {
        "target": str(target),
        "files": {file: result.to_dict() for file, result in files.items()},
        "counts": {
            "files": len(files),
            "options": sum(result.option_count for result in files.values()),
            "commands": sum(result.command_count for result in files.values()),
            "by_status": dict(sorted(statuses.items())),
        },
    }


def print_status_table(files: Mapping[str, FileScanResult]) -> None:
    print("File".ljust(50), "Status".ljust(10), "Name".ljust(20), "Options", "Commands")
    print("-" * 100)
    for file_path, result in sorted(files.items()):
        print(
            file_path.ljust(50),
            result.status.ljust(10),
            (result.program_name or "-").ljust(20),
            str(result.option_count).ljust(7),
            str(result.command_count),
        )
    statuses = Counter(result.status for result in files.values())
    summary = ", ".join(f"{status}: {count}" for status, count in sorted(statuses.items()))
    print(f"\nFiles: {len(files)} | {summary or 'none'}")


def add_input_arguments(parser_obj: argparse.ArgumentParser) -> None:
    parser_obj.add_argument(
        "--encoding",
        help="Encoding for help files (overrides HELP_TEXT_ENCODING)",
    )
    parser_obj.add_argument(
        "--min-chars",
        type=int,
        help="Minimum non-whitespace characters for usable input (overrides HELP_MIN_TEXT_CHARS)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser_obj = argparse.ArgumentParser(description="Parse command-line help text")
    parser_obj.add_argument("--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser_obj.add_subparsers(dest="command")

    parse_parser = subparsers.add_parser("parse", help="Print the parsed program as JSON")
    parse_parser.add_argument("path", nargs="?", default="-", help="Help text file, or - for stdin")
    parse_parser.add_argument(
        "--strict", action="store_true", help="Fail when the program record is invalid"
    )
    parse_parser.add_argument(
        "--raw", action="store_true", help="Include the cleaned help text in the output"
    )
    add_input_arguments(parse_parser)
    parse_parser.set_defaults(func=command_parse)

    blocks_parser = subparsers.add_parser("blocks", help="Print the intermediate blocks as JSON")
    blocks_parser.add_argument(
        "path", nargs="?", default="-", help="Help text file, or - for stdin"
    )
    add_input_arguments(blocks_parser)
    blocks_parser.set_defaults(func=command_blocks)

    scan_parser = subparsers.add_parser("scan", help="Parse every help file in a directory")
    scan_parser.add_argument("target", help="Directory of captured help output")
    scan_parser.add_argument("--json", action="store_true", help="Print a JSON scan report")
    add_input_arguments(scan_parser)
    scan_parser.set_defaults(func=command_scan)

    return parser_obj


def main(argv: list[str] | None = None) -> None:
    parser_obj = build_parser()
    args = parser_obj.parse_args(argv)
    if not getattr(args, "command", None):
        parser_obj.print_help()
        return
    configure_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
