"""Validation of compiled program records."""
from __future__ import annotations

import re

from .constants import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PROGRAM_DESCRIPTION_MIN_LENGTH,
    VALUE_TYPES,
)
from .errors import InvalidProgramError
from .models import Program

PROGRAM_NAME_RE = re.compile(r"^[a-z0-9-]+$")


def program_problems(program: Program) -> list[str]:
    problems: list[str] = []
    name = program.name
    if not name:
        problems.append("name is empty")
    elif len(name) > NAME_MAX_LENGTH:
        problems.append(f"name longer than {NAME_MAX_LENGTH} characters")
    if name and not PROGRAM_NAME_RE.match(name):
        problems.append(f"name {name!r} must use lowercase letters, digits and hyphens")
    if name.startswith("-") or name.endswith("-"):
        problems.append(f"name {name!r} must not start or end with a hyphen")
    if "--" in name:
        problems.append(f"name {name!r} must not contain consecutive hyphens")
    length = len(program.description)
    if not PROGRAM_DESCRIPTION_MIN_LENGTH <= length <= DESCRIPTION_MAX_LENGTH:
        problems.append(
            f"description length {length} outside "
            f"{PROGRAM_DESCRIPTION_MIN_LENGTH}..{DESCRIPTION_MAX_LENGTH}"
        )
    for option in program.options:
        if option.type not in VALUE_TYPES:
            problems.append(f"option {option.name!r} has unknown type {option.type!r}")
    return problems


def validate_program(program: Program) -> Program:
    """Return ``program`` unchanged, or raise InvalidProgramError listing every problem."""
    problems = program_problems(program)
    if problems:
        raise InvalidProgramError(problems)
    return program
