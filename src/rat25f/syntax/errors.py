"""
Rat25F Syntax Analyzer Error Hierarchy
======================================

This module defines the exceptions raised by the Rat25F parser. All of
them inherit from AnalyzerError, which itself inherits from the base
Rat25FError for consistent error handling across the tools.

Exception Hierarchy
-------------------
AnalyzerError (base for all analyzer errors)
└── RatSyntaxError - the lookahead token does not fit the grammar
    ├── MissingTokenError - a specific terminal was expected
    └── UnexpectedTokenError - no alternative of a nonterminal applies

Error Message Format
--------------------
Syntax errors render as a single line naming what was expected, where the
parser stood and the offending lexeme:

    Syntax error: separator ';' expected at line 1, col 12 (near 'x')

The scanner never raises. Characters that match no scanning rule come
through as Unknown tokens and are rejected here, in whatever grammatical
context they appear.
"""

from typing import Optional

from rat25f.errors import Rat25FError, SourceLocation


# =============================================================================
# Base Analyzer Exception
# =============================================================================

class AnalyzerError(Rat25FError):
    """
    Base exception for all syntax analyzer errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
    ):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with its location when known."""
        if self.location:
            return f"{self.location}: error: {self.message}"
        return f"error: {self.message}"


# =============================================================================
# Syntax Errors
# =============================================================================

class RatSyntaxError(AnalyzerError):
    """
    Syntax error in Rat25F source.

    Raised by the parser when the lookahead token does not satisfy the
    terminal or nonterminal expected at a decision point. Fatal to the
    current parse: there is no recovery or resynchronization.

    Attributes:
        expected: Description of what the grammar required
        lexeme: The offending token's lexeme (empty at end of input)
    """

    def __init__(
        self,
        expected: str,
        lexeme: str,
        location: SourceLocation,
    ):
        self.expected = expected
        self.lexeme = lexeme
        super().__init__(f"{expected} expected", location)

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def _format_message(self) -> str:
        return (
            f"Syntax error: {self.message}"
            f" at line {self.location.line}, col {self.location.column}"
            f" (near '{self.lexeme}')"
        )


class MissingTokenError(RatSyntaxError):
    """
    Required terminal is missing.

    Raised by the parser's expect helpers when a specific identifier,
    keyword, operator or separator is not found where the grammar needs it.

    Example:
        integer x x = 1;    // separator ';' expected (near 'x')
    """
    pass


class UnexpectedTokenError(RatSyntaxError):
    """
    No grammar alternative starts with the current token.

    Raised when a nonterminal with several alternatives (Statement,
    Primary, Qualifier, Relop) cannot choose one from the lookahead.

    Example:
        x = * 2;            // primary expected (near '*')
    """
    pass
