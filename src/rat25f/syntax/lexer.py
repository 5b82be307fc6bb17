"""
Rat25F Scanner (Tokenizer)
==========================

This module implements the lexical scanner for Rat25F. It converts a
character stream into a lazy sequence of tokens for the parser, one token
per call to ``next_token()``.

Token Categories
----------------
- Keywords: integer, int, real, if, else, fi, while, return, get, put
- Identifiers: letter followed by letters, digits, '$' or '_'
- Integers: 123
- Reals: 1.5 and .5 (a trailing '.' is never consumed: '123.' is an
  Integer followed by an Unknown '.')
- Strings: "double quoted", no escapes; an unterminated string runs to the
  end of input
- Operators: + - * / = < > ! & | and <= >= == != && ||
- Separators: ( ) { } [ ] , ;
- Unknown: any other single character

Keywords are matched case-insensitively while the lexeme keeps its
original spelling. The scanner never raises: characters that match no rule
become Unknown tokens and the parser decides what to do with them.

Positions
---------
A token's line and column are the scanner position *after* the token has
been consumed, i.e. the column of the character that follows it (or of its
last character at end of input). Columns restart at 0 on every newline.
Syntax error messages report these positions unchanged.

Example Usage
-------------
>>> from rat25f.syntax.lexer import Scanner
>>> for token in Scanner("x = 3;").tokenize():
...     print(token)
Token(Identifier, 'x', 1:2)
Token(Operator, '=', 1:4)
Token(Integer, '3', 1:6)
Token(Separator, ';', 1:6)
Token(EOF, '', 1:6)
"""

import io
import logging
import string
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, TextIO, Union

logger = logging.getLogger(__name__)


# =============================================================================
# Token Kind Enumeration
# =============================================================================

class TokenKind(Enum):
    """
    Lexical categories of Rat25F.

    The value of each member is the display name used when the parser
    echoes a consumed token ("Token: Integer Lexeme: 3").
    """

    KEYWORD = "Keyword"
    IDENTIFIER = "Identifier"
    INTEGER = "Integer"
    REAL = "Real"
    OPERATOR = "Operator"
    SEPARATOR = "Separator"
    STRING = "String"
    UNKNOWN = "Unknown"
    EOF = "EOF"


# =============================================================================
# Keyword and Symbol Tables
# =============================================================================

# Default keyword table, lowercase. Scanners take their own copy.
KEYWORDS: frozenset[str] = frozenset({
    "integer", "int", "real",
    "if", "else", "fi", "while",
    "return", "get", "put",
})

SEPARATORS = frozenset("(){}[],;")

OPERATOR_CHARS = frozenset("+-*/=<>!&|")

TWO_CHAR_OPERATORS = frozenset({"<=", ">=", "==", "!=", "&&", "||"})

WHITESPACE = " \t\n\r\v\f"


# =============================================================================
# Token Data Class
# =============================================================================

@dataclass(frozen=True)
class Token:
    """
    A single token from Rat25F source.

    Attributes:
        kind: The TokenKind classification
        lexeme: The source text of the token (string literals without quotes)
        line: Line number after the token was consumed (1-indexed)
        column: Column number after the token was consumed
    """
    kind: TokenKind
    lexeme: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"Token({self.kind.value}, {self.lexeme!r}, {self.line}:{self.column})"

    def is_keyword(self, word: str, lenient: bool = False) -> bool:
        """
        Return True if this token spells the keyword ``word``.

        With ``lenient`` an Identifier with the same spelling also matches;
        the token's kind is not changed.
        """
        if self.kind is TokenKind.KEYWORD or (
            lenient and self.kind is TokenKind.IDENTIFIER
        ):
            return self.lexeme.lower() == word
        return False

    def is_operator(self, symbol: str) -> bool:
        return self.kind is TokenKind.OPERATOR and self.lexeme == symbol

    def is_separator(self, symbol: str) -> bool:
        return self.kind is TokenKind.SEPARATOR and self.lexeme == symbol


# =============================================================================
# Scanner Implementation
# =============================================================================

class Scanner:
    """
    Finite-state scanner for Rat25F.

    Reads its source lazily, one character at a time, keeping one character
    of lookahead for the two-character operators and for reals.

    Usage:
        scanner = Scanner(source_text)
        token = scanner.next_token()

    Attributes:
        keywords: The keyword table used for classification (lowercase)
    """

    # Identifiers start with an ASCII letter
    IDENT_START = frozenset(string.ascii_letters)

    # ... and continue with letters, digits, '$' or '_'
    IDENT_CHARS = frozenset(string.ascii_letters + string.digits + "$_")

    DIGITS = frozenset(string.digits)

    def __init__(
        self,
        source: Union[str, TextIO],
        keywords: frozenset[str] = KEYWORDS,
    ):
        """
        Initialize the scanner and load the first character.

        Args:
            source: Rat25F source text, or a text stream to read from
            keywords: Keyword table (matched case-insensitively)
        """
        if isinstance(source, str):
            source = io.StringIO(source)
        self._stream = source
        self.keywords = frozenset(word.lower() for word in keywords)

        self._current = ""
        self._lookahead = None
        self._eof = False
        self.line = 1
        self.column = 0

        logger.debug(f"Scanner ready with {len(self.keywords)} keywords")
        self._advance()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _read_char(self) -> str:
        if self._lookahead is not None:
            char, self._lookahead = self._lookahead, None
            return char
        return self._stream.read(1)

    def _peek(self) -> str:
        """Return the character after the current one without consuming it."""
        if self._lookahead is None:
            self._lookahead = self._stream.read(1)
        return self._lookahead

    def _advance(self) -> None:
        """
        Move to the next character, updating line and column.

        At end of input the current character becomes empty and the
        position stops moving.
        """
        char = self._read_char()
        if not char:
            self._eof = True
            self._current = ""
            return

        self._current = char
        if char == "\n":
            self.line += 1
            self.column = 0
        else:
            self.column += 1

    def _make_token(self, kind: TokenKind, lexeme: str) -> Token:
        return Token(kind, lexeme, self.line, self.column)

    # =========================================================================
    # Token Scanning
    # =========================================================================

    def next_token(self) -> Token:
        """
        Scan and return the next token.

        Returns an EOF token (empty lexeme) once the input is exhausted,
        on this and every later call.
        """
        self._skip_whitespace()

        if self._eof:
            return self._make_token(TokenKind.EOF, "")

        char = self._current

        if char == '"':
            return self._scan_string()

        if char == "." and self._peek() in self.DIGITS:
            return self._scan_fraction()

        if char in self.IDENT_START:
            return self._scan_identifier()

        if char in self.DIGITS:
            return self._scan_number()

        if char in SEPARATORS or char in OPERATOR_CHARS:
            return self._scan_operator()

        # Unknown character, left for the parser to reject
        self._advance()
        return self._make_token(TokenKind.UNKNOWN, char)

    def tokenize(self) -> Iterator[Token]:
        """
        Generate tokens until end of input.

        Yields:
            Each token in order, ending with a single EOF token
        """
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()

    def _skip_whitespace(self) -> None:
        while not self._eof and self._current in WHITESPACE:
            self._advance()

    def _scan_string(self) -> Token:
        """Scan a double-quoted string; the quotes are not part of the lexeme."""
        self._advance()  # opening "

        chars = []
        while not self._eof and self._current != '"':
            chars.append(self._current)
            self._advance()

        if not self._eof:
            self._advance()  # closing "
        return self._make_token(TokenKind.STRING, "".join(chars))

    def _scan_fraction(self) -> Token:
        """Scan a real with no integer part, such as .001"""
        chars = [self._current]
        self._advance()
        chars.extend(self._scan_digits())
        return self._make_token(TokenKind.REAL, "".join(chars))

    def _scan_identifier(self) -> Token:
        """
        Scan an identifier or keyword.

        The keyword lookup ignores case; the lexeme keeps the spelling
        found in the source.
        """
        chars = [self._current]
        self._advance()
        while not self._eof and self._current in self.IDENT_CHARS:
            chars.append(self._current)
            self._advance()

        name = "".join(chars)
        if name.lower() in self.keywords:
            return self._make_token(TokenKind.KEYWORD, name)
        return self._make_token(TokenKind.IDENTIFIER, name)

    def _scan_number(self) -> Token:
        """
        Scan an integer, or a real of the form digits.digits

        A '.' is only consumed when a digit follows it.
        """
        chars = self._scan_digits()

        if self._current == "." and self._peek() in self.DIGITS:
            chars.append(self._current)
            self._advance()
            chars.extend(self._scan_digits())
            return self._make_token(TokenKind.REAL, "".join(chars))

        return self._make_token(TokenKind.INTEGER, "".join(chars))

    def _scan_digits(self) -> list[str]:
        chars = []
        while not self._eof and self._current in self.DIGITS:
            chars.append(self._current)
            self._advance()
        return chars

    def _scan_operator(self) -> Token:
        """
        Scan an operator or separator.

        Two-character operators are tried first using the one character
        lookahead.
        """
        char = self._current
        pair = char + self._peek()
        if pair in TWO_CHAR_OPERATORS:
            self._advance()
            self._advance()
            return self._make_token(TokenKind.OPERATOR, pair)

        self._advance()
        if char in SEPARATORS:
            return self._make_token(TokenKind.SEPARATOR, char)
        return self._make_token(TokenKind.OPERATOR, char)
