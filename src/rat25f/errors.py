"""
Rat25F Tools Error Hierarchy
============================

This module defines the root of the exception hierarchy for the Rat25F
tools. All exceptions inherit from Rat25FError, allowing callers to catch
every toolchain error with a single except clause if desired.

Exception Hierarchy
-------------------
Rat25FError (base)
└── AnalyzerError (syntax analyzer, see rat25f.syntax.errors)
    └── RatSyntaxError - lookahead does not fit the grammar
        ├── MissingTokenError - a specific terminal was expected
        └── UnexpectedTokenError - no alternative of a nonterminal applies

Each exception carries source location information (filename, line,
column) so that messages point straight at the offending token.
"""

from dataclasses import dataclass


# =============================================================================
# Base Exception Class
# =============================================================================

class Rat25FError(Exception):
    """
    Base exception for all Rat25F tools errors.

        try:
            analyzer.analyze_file("prog.rat25f", "prog.txt")
        except Rat25FError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    The scanner reports positions *after* a token has been consumed, so a
    location built from a token points just past its last character.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
        column: Column number (1-indexed, 0 right after a newline)
    """
    filename: str
    line: int
    column: int

    def __str__(self) -> str:
        """Format as 'filename:line:column' for log messages."""
        return f"{self.filename}:{self.line}:{self.column}"
