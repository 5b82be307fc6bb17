"""
Production Trace Configuration and Output Sinks
===============================================

The parser's only product is a line-oriented stream: one line per traced
production (``<Assign> -> <Identifier> = <Expression> ;``) interleaved with
one line per echoed token (``Token: Identifier Lexeme: x``). This module
holds everything that decides which of those lines appear and where they
go:

- Rule: one tag per grammar nonterminal, used to filter the trace
- TraceConfig: which productions are traced
- ParserPolicy: token echo and grammar leniency switches
- ProductionSink: the output channel, with a stream and an in-memory
  implementation

Both configuration classes are frozen. Build them once, hand them to the
Parser, and they stay the same for the whole parse.
"""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, TextIO


# =============================================================================
# Markers
# =============================================================================

EPSILON = "ε"

# Substring that identifies optional-nonterminal productions
OPTIONAL_MARKER = "Opt "

# Substrings that identify the top-level scaffolding productions
SCAFFOLDING_MARKERS = ("Rat25F", "Statement List")


# =============================================================================
# Grammar Rule Tags
# =============================================================================

class Rule(Enum):
    """One tag per Rat25F nonterminal. Carries no semantic payload."""

    # Top level
    RAT25F = auto()
    OPT_FUNCTION_DEFINITIONS = auto()
    FUNCTION_DEFINITIONS = auto()
    FUNCTION_DEFINITIONS_PRIME = auto()
    FUNCTION = auto()
    OPT_PARAMETER_LIST = auto()
    PARAMETER_LIST = auto()
    PARAMETER_LIST_PRIME = auto()
    PARAMETER = auto()
    QUALIFIER = auto()
    BODY = auto()
    OPT_DECLARATION_LIST = auto()
    DECLARATION_LIST = auto()
    DECLARATION_LIST_PRIME = auto()
    DECLARATION = auto()
    IDS = auto()
    IDS_PRIME = auto()

    # Statements
    STATEMENT_LIST = auto()
    STATEMENT_LIST_PRIME = auto()
    STATEMENT = auto()
    COMPOUND = auto()
    ASSIGN = auto()
    IF = auto()
    OPT_ELSE = auto()
    RETURN = auto()
    PRINT = auto()
    SCAN = auto()
    WHILE = auto()

    # Expressions
    CONDITION = auto()
    RELOP = auto()
    EXPRESSION = auto()
    EXPRESSION_PRIME = auto()
    TERM = auto()
    TERM_PRIME = auto()
    FACTOR = auto()
    PRIMARY = auto()
    PRIMARY_PRIME = auto()

    @classmethod
    def from_name(cls, name: str) -> "Rule":
        """
        Look up a rule by name, ignoring case and any non-alphanumeric
        characters, so "statement_list", "StatementList" and
        "Statement List" all name Rule.STATEMENT_LIST.
        """
        key = "".join(char for char in name if char.isalnum()).upper()
        for rule in cls:
            if rule.name.replace("_", "") == key:
                return rule
        raise ValueError(f"unknown grammar rule '{name}'")


STATEMENT_RULES: frozenset[Rule] = frozenset({
    Rule.STATEMENT,
    Rule.ASSIGN,
    Rule.IF,
    Rule.RETURN,
    Rule.PRINT,
    Rule.SCAN,
    Rule.WHILE,
})


# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class TraceConfig:
    """
    Production trace settings.

    A production line is dropped when any of these say so:

    Attributes:
        enabled: Master switch for the whole trace
        rules: Rules to trace; an empty set traces every rule
        hide_epsilon: Drop productions containing ε
        hide_optional: Drop productions of the <Opt ...> nonterminals
        hide_scaffolding: Drop <Rat25F> and <Statement List ...> productions
    """
    enabled: bool = True
    rules: frozenset[Rule] = field(default=STATEMENT_RULES)
    hide_epsilon: bool = True
    hide_optional: bool = True
    hide_scaffolding: bool = True

    @classmethod
    def full(cls) -> "TraceConfig":
        """Trace every production of every rule."""
        return cls(
            rules=frozenset(),
            hide_epsilon=False,
            hide_optional=False,
            hide_scaffolding=False,
        )

    @classmethod
    def silent(cls) -> "TraceConfig":
        """Trace nothing."""
        return cls(enabled=False)

    def allows(self, rule: Rule, text: str) -> bool:
        """Return True if the production ``text`` of ``rule`` should be emitted."""
        if not self.enabled:
            return False
        if self.rules and rule not in self.rules:
            return False
        if self.hide_epsilon and EPSILON in text:
            return False
        if self.hide_optional and OPTIONAL_MARKER in text:
            return False
        if self.hide_scaffolding and any(m in text for m in SCAFFOLDING_MARKERS):
            return False
        return True


@dataclass(frozen=True)
class ParserPolicy:
    """
    Parser behavior switches.

    Attributes:
        echo_tokens: Emit a "Token: <Kind> Lexeme: <text>" line per consumed terminal
        lenient_keywords: Keyword tests also accept an Identifier with the same spelling
        allow_string_primary: A string literal may stand in for a Primary
    """
    echo_tokens: bool = True
    lenient_keywords: bool = True
    allow_string_primary: bool = True


# =============================================================================
# Output Sinks
# =============================================================================

class ProductionSink(ABC):
    """
    Ordered, append-only, line-oriented output channel.

    Receives trace lines, token echo lines and the final status line, in
    the order they are produced.
    """

    @abstractmethod
    def emit(self, line: str) -> None:
        """Append one line (without trailing newline)."""


class StreamSink(ProductionSink):
    """
    Writes each line straight to a text stream.

    With no stream given, writes to whatever ``sys.stdout`` is at the time
    of each call.
    """

    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream

    def emit(self, line: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        stream.write(line + "\n")


class ListSink(ProductionSink):
    """Collects lines in memory."""

    def __init__(self) -> None:
        self.lines: list[str] = []

    def emit(self, line: str) -> None:
        self.lines.append(line)

    def getvalue(self) -> str:
        """Return the collected output as text, one line per entry."""
        return "".join(line + "\n" for line in self.lines)
