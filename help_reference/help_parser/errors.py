"""Exceptions raised by callers wrapping the parser.

The parsing pipeline itself never raises; these mark the two conditions a
caller has to tell apart.
"""


class HelpParserError(Exception):
    """Base exception for help-parser failures."""


class EmptyHelpTextError(ValueError, HelpParserError):
    """No usable help text: empty input, too little text, or an unreadable source."""


class InvalidProgramError(ValueError, HelpParserError):
    """A compiled program does not satisfy the program record rules."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = problems
        super().__init__("Invalid program: " + "; ".join(problems))
