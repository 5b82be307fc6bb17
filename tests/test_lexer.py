# =============================================================================
# test_lexer.py - Scanner Unit Tests
# =============================================================================
# Tests for the Rat25F finite-state scanner.
#
# Test coverage includes:
#   - Identifiers and case-insensitive keywords
#   - Integer and real literals, including the '123.' and '.5' boundaries
#   - String literals, terminated and unterminated
#   - Two-character and single-character operators, separators
#   - Unknown characters
#   - Token positions (reported after the token is consumed)
#   - End of input behavior
# =============================================================================

import io

import pytest
from rat25f.syntax.lexer import KEYWORDS, Scanner, Token, TokenKind


# =============================================================================
# Helper Function
# =============================================================================

def tokenize(source: str, **kwargs) -> list[Token]:
    """
    Helper to tokenize and drop the trailing EOF token.
    Tests are focused on meaningful tokens, not the terminator.
    """
    return [t for t in Scanner(source, **kwargs).tokenize() if t.kind is not TokenKind.EOF]


def kinds_and_lexemes(source: str) -> list[tuple[TokenKind, str]]:
    return [(t.kind, t.lexeme) for t in tokenize(source)]


# =============================================================================
# Identifier and Keyword Tests
# =============================================================================

class TestIdentifiersAndKeywords:
    """Test identifier scanning and keyword classification."""

    def test_empty_source(self):
        """Empty source should produce no meaningful tokens."""
        assert tokenize("") == []

    def test_whitespace_only(self):
        """Spaces, tabs and newlines are skipped."""
        assert tokenize("   \t \n\r\n  ") == []

    def test_identifier(self):
        tokens = tokenize("count")
        assert len(tokens) == 1
        assert tokens[0].kind is TokenKind.IDENTIFIER
        assert tokens[0].lexeme == "count"

    def test_identifier_with_dollar_underscore_and_digits(self):
        """After the first letter, '$', '_' and digits are allowed."""
        assert kinds_and_lexemes("a$b_c1") == [(TokenKind.IDENTIFIER, "a$b_c1")]

    def test_identifier_cannot_start_with_underscore(self):
        """'_' is not a letter, so it is an Unknown token on its own."""
        assert kinds_and_lexemes("_x") == [
            (TokenKind.UNKNOWN, "_"),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_all_default_keywords(self):
        source = "integer int real if else fi while return get put"
        tokens = tokenize(source)
        assert [t.kind for t in tokens] == [TokenKind.KEYWORD] * 10
        assert {t.lexeme for t in tokens} == KEYWORDS

    def test_keywords_are_case_insensitive(self):
        """Keyword lookup ignores case but the lexeme keeps its spelling."""
        assert kinds_and_lexemes("IF While rEtUrN") == [
            (TokenKind.KEYWORD, "IF"),
            (TokenKind.KEYWORD, "While"),
            (TokenKind.KEYWORD, "rEtUrN"),
        ]

    def test_function_and_boolean_are_identifiers(self):
        """'function', 'boolean', 'true' and 'false' are not scanner keywords."""
        tokens = tokenize("function boolean true false")
        assert all(t.kind is TokenKind.IDENTIFIER for t in tokens)

    def test_custom_keyword_table(self):
        """Each scanner takes its own keyword table."""
        tokens = tokenize("function if", keywords=KEYWORDS | {"Function"})
        assert tokens[0].kind is TokenKind.KEYWORD
        assert tokens[1].kind is TokenKind.KEYWORD

    def test_keyword_table_without_if(self):
        tokens = tokenize("if", keywords=KEYWORDS - {"if"})
        assert tokens[0].kind is TokenKind.IDENTIFIER

    def test_default_table_unchanged_by_custom_scanner(self):
        Scanner("x", keywords={"x"})
        assert "x" not in KEYWORDS
        assert tokenize("x")[0].kind is TokenKind.IDENTIFIER


# =============================================================================
# Number Tests
# =============================================================================

class TestNumbers:
    """Test integer and real literal recognition."""

    def test_integer(self):
        assert kinds_and_lexemes("123") == [(TokenKind.INTEGER, "123")]

    def test_real(self):
        assert kinds_and_lexemes("1.25") == [(TokenKind.REAL, "1.25")]

    def test_real_without_integer_part(self):
        assert kinds_and_lexemes(".5") == [(TokenKind.REAL, ".5")]

    def test_trailing_dot_is_not_consumed(self):
        """'123.' is an Integer followed by an Unknown '.'."""
        assert kinds_and_lexemes("123.") == [
            (TokenKind.INTEGER, "123"),
            (TokenKind.UNKNOWN, "."),
        ]

    def test_dot_followed_by_letter(self):
        assert kinds_and_lexemes("12.x") == [
            (TokenKind.INTEGER, "12"),
            (TokenKind.UNKNOWN, "."),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_second_dot_starts_new_token(self):
        assert kinds_and_lexemes("1.2.3") == [
            (TokenKind.REAL, "1.2"),
            (TokenKind.REAL, ".3"),
        ]

    def test_number_then_identifier(self):
        assert kinds_and_lexemes("3abc") == [
            (TokenKind.INTEGER, "3"),
            (TokenKind.IDENTIFIER, "abc"),
        ]


# =============================================================================
# String Tests
# =============================================================================

class TestStrings:
    """Test string literal scanning."""

    def test_string_without_quotes_in_lexeme(self):
        assert kinds_and_lexemes('"hello world"') == [(TokenKind.STRING, "hello world")]

    def test_empty_string(self):
        assert kinds_and_lexemes('""') == [(TokenKind.STRING, "")]

    def test_string_spans_lines(self):
        assert kinds_and_lexemes('"a\nb" x') == [
            (TokenKind.STRING, "a\nb"),
            (TokenKind.IDENTIFIER, "x"),
        ]

    def test_unterminated_string_takes_rest_of_input(self):
        """No error: the literal is whatever was left."""
        scanner = Scanner('x "never closed ; y')
        assert scanner.next_token().lexeme == "x"
        token = scanner.next_token()
        assert token.kind is TokenKind.STRING
        assert token.lexeme == "never closed ; y"
        assert scanner.next_token().kind is TokenKind.EOF


# =============================================================================
# Operator and Separator Tests
# =============================================================================

class TestOperatorsAndSeparators:
    """Test operator and separator recognition."""

    def test_two_character_operators(self):
        tokens = tokenize("<= >= == != && ||")
        assert [t.lexeme for t in tokens] == ["<=", ">=", "==", "!=", "&&", "||"]
        assert all(t.kind is TokenKind.OPERATOR for t in tokens)

    def test_single_character_operators(self):
        tokens = tokenize("+ - * / = < > ! & |")
        assert [t.lexeme for t in tokens] == list("+-*/=<>!&|")
        assert all(t.kind is TokenKind.OPERATOR for t in tokens)

    def test_separators(self):
        tokens = tokenize("( ) { } [ ] , ;")
        assert [t.lexeme for t in tokens] == list("(){}[],;")
        assert all(t.kind is TokenKind.SEPARATOR for t in tokens)

    def test_operators_without_spaces(self):
        assert kinds_and_lexemes("a<=b") == [
            (TokenKind.IDENTIFIER, "a"),
            (TokenKind.OPERATOR, "<="),
            (TokenKind.IDENTIFIER, "b"),
        ]

    def test_longest_match_only_for_known_pairs(self):
        """'=-' is not an operator, so it splits into '=' and '-'."""
        assert kinds_and_lexemes("x=-1") == [
            (TokenKind.IDENTIFIER, "x"),
            (TokenKind.OPERATOR, "="),
            (TokenKind.OPERATOR, "-"),
            (TokenKind.INTEGER, "1"),
        ]

    def test_triple_equals(self):
        assert [t.lexeme for t in tokenize("===")] == ["==", "="]

    @pytest.mark.parametrize("char", ["@", "#", "%", "^", "~", ":", "'", "?"])
    def test_unknown_characters(self, char):
        """Characters with no scanning rule become single Unknown tokens."""
        assert kinds_and_lexemes(char) == [(TokenKind.UNKNOWN, char)]


# =============================================================================
# Position Tracking Tests
# =============================================================================

class TestPositions:
    """Token positions are the scanner position after the token."""

    def test_positions_on_one_line(self):
        tokens = list(Scanner("integer x x = 1;").tokenize())
        assert [(t.lexeme, t.line, t.column) for t in tokens] == [
            ("integer", 1, 8),
            ("x", 1, 10),
            ("x", 1, 12),
            ("=", 1, 14),
            ("1", 1, 16),
            (";", 1, 16),
            ("", 1, 16),
        ]

    def test_token_before_newline_reports_next_line(self):
        """The newline has already been read when the token is made."""
        tokens = tokenize("x\ny")
        assert (tokens[0].line, tokens[0].column) == (2, 0)
        assert (tokens[1].line, tokens[1].column) == (2, 1)

    def test_line_counting(self):
        tokens = tokenize("a\n\n  bb \n")
        assert tokens[1].lexeme == "bb"
        assert (tokens[1].line, tokens[1].column) == (3, 5)


# =============================================================================
# End of Input and Stream Tests
# =============================================================================

class TestEndOfInput:
    """Test behavior at and after end of input."""

    def test_eof_token(self):
        token = Scanner("").next_token()
        assert token.kind is TokenKind.EOF
        assert token.lexeme == ""

    def test_eof_repeats(self):
        """Calling next_token() after exhaustion keeps returning EOF."""
        scanner = Scanner("x")
        scanner.next_token()
        for _ in range(3):
            assert scanner.next_token().kind is TokenKind.EOF

    def test_tokenize_ends_with_single_eof(self):
        tokens = list(Scanner("a b").tokenize())
        assert [t.kind for t in tokens].count(TokenKind.EOF) == 1
        assert tokens[-1].kind is TokenKind.EOF

    def test_reads_from_stream(self):
        stream = io.StringIO("put(x);")
        lexemes = [t.lexeme for t in Scanner(stream)]
        assert lexemes == ["put", "(", "x", ")", ";", ""]

    def test_token_is_immutable(self):
        token = Scanner("x").next_token()
        with pytest.raises(AttributeError):
            token.lexeme = "y"

    def test_token_repr(self):
        assert repr(Scanner("x = 3;").next_token()) == "Token(Identifier, 'x', 1:2)"


# =============================================================================
# Token Predicate Tests
# =============================================================================

class TestTokenPredicates:
    """Test the matching helpers the parser relies on."""

    def test_keyword_match_is_case_insensitive(self):
        token = Token(TokenKind.KEYWORD, "WHILE", 1, 5)
        assert token.is_keyword("while")

    def test_identifier_matches_keyword_only_when_lenient(self):
        token = Token(TokenKind.IDENTIFIER, "function", 1, 8)
        assert not token.is_keyword("function")
        assert token.is_keyword("function", lenient=True)

    def test_operator_and_separator_checks_kind(self):
        assert Token(TokenKind.OPERATOR, "=", 1, 1).is_operator("=")
        assert not Token(TokenKind.UNKNOWN, "=", 1, 1).is_operator("=")
        assert Token(TokenKind.SEPARATOR, ";", 1, 1).is_separator(";")
        assert not Token(TokenKind.STRING, ";", 1, 1).is_separator(";")
