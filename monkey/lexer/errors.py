"""
Error handling for the Monkey lexer.

Provides error reporting with source location information and the
shared Diagnostic record also used by the parser.
"""

from typing import Optional, List
from dataclasses import dataclass, field
from .tokens import SourceLocation


@dataclass
class Diagnostic:
    """One reported problem, tied to the location it was found at."""
    message: str
    location: SourceLocation
    severity: str = "error"
    code: Optional[str] = None
    help_text: Optional[str] = None
    suggestions: List[str] = field(default_factory=list)

    @property
    def header(self) -> str:
        """``file:line:col: error[CODE]: message``"""
        tag = f"{self.severity}[{self.code}]" if self.code else self.severity
        return f"{self.location}: {tag}: {self.message}"

    def __str__(self) -> str:
        lines = [self.header]
        if self.help_text:
            lines.append(f"  = help: {self.help_text}")
        lines.extend(f"  = try: {suggestion}" for suggestion in self.suggestions)
        return "\n".join(lines)


class LexerError(Exception):
    """
    Error raised (or recorded) when the lexer meets text it cannot tokenize.

    The ``diagnostic`` attribute holds the location, code and help text.
    """

    def __init__(
        self,
        message: str,
        location: SourceLocation,
        code: Optional[str] = None,
        help_text: Optional[str] = None,
        suggestions: Optional[List[str]] = None
    ):
        super().__init__(message)
        self.message = message
        self.diagnostic = Diagnostic(
            message,
            location,
            code=code,
            help_text=help_text,
            suggestions=list(suggestions or []),
        )

    @property
    def location(self) -> SourceLocation:
        return self.diagnostic.location

    def __str__(self) -> str:
        return str(self.diagnostic)


# Common error codes for categorization
ERROR_CODES = {
    "L001": "Invalid character",
}


def create_invalid_character_error(char: str, location: SourceLocation) -> LexerError:
    """Create an error for an invalid character."""
    if char.isprintable():
        help_text = f"The character '{char}' is not valid in Monkey source code."
    else:
        help_text = f"Non-printable character (Unicode: U+{ord(char):04X}) is not allowed."

    return LexerError(
        message=f"Invalid character: '{char}'",
        location=location,
        code="L001",
        help_text=help_text,
    )
