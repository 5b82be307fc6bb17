"""
Rat25F Predictive Recursive Descent Parser
==========================================

This module implements an LL(1) recognizer for Rat25F. It pulls tokens from
a Scanner one at a time and runs one method per grammar nonterminal. It
builds no tree: its output is the production trace and the token echo,
both written to a ProductionSink as it goes.

Grammar
-------
Rat25F          ::= OptFunctionDefinitions OptDeclarationList StatementList
FunctionDefs    ::= Function FunctionDefs'
Function        ::= 'function' Identifier '(' ParameterList? ')'
                    DeclarationList? Body
Parameter       ::= IDs Qualifier
Qualifier       ::= 'integer' | 'boolean' | 'real'
Body            ::= '{' StatementList? '}'
DeclarationList ::= Declaration ';' DeclarationList'
Declaration     ::= Qualifier IDs
IDs             ::= Identifier (',' IDs)?
StatementList   ::= Statement StatementList' | ε (before '}' or end of input)
Statement       ::= Compound | Assign | If | Return | Print | Scan | While
Compound        ::= '{' StatementList '}'
Assign          ::= Identifier '=' Expression ';'
If              ::= 'if' '(' Condition ')' Statement ('else' Statement)? 'fi'
Return          ::= 'return' ';' | 'return' Expression ';'
Print           ::= 'put' '(' Expression ')' ';'
Scan            ::= 'get' '(' IDs ')' ';'
While           ::= 'while' '(' Condition ')' Statement
Condition       ::= Expression Relop Expression
Relop           ::= '==' | '!=' | '>' | '<' | '<=' | '>='
Expression      ::= Term (('+' | '-') Term)*
Term            ::= Factor (('*' | '/') Factor)*
Factor          ::= '-'? Primary
Primary         ::= Identifier ('(' IDs ')')? | Integer | Real
                  | '(' Expression ')' | 'true' | 'false' | String

Leniency
--------
- Banner strings: runs of string literals before the program, around
  function definitions, before the declaration list and at the start of
  every statement list are dropped silently. A string where a statement is
  expected is a no-op statement traced as ``<Statement> -> ε``.
- Lenient keywords: with the policy on, a keyword test also accepts an
  Identifier spelled the same way. ``function`` and ``boolean`` are not
  scanner keywords, so this is what lets them through by default.
- String primaries: with the policy on, a string literal is a Primary.

Example Usage
-------------
>>> from rat25f.syntax.lexer import Scanner
>>> from rat25f.syntax.parser import Parser
>>> from rat25f.syntax.trace import ListSink, TraceConfig
>>> sink = ListSink()
>>> Parser(Scanner("x = 1;"), TraceConfig(), sink=sink).parse()
>>> sink.lines[:3]
['<Statement> -> <Assign>', '<Assign> -> <Identifier> = <Expression> ;', 'Token: Identifier Lexeme: x']
"""

import logging
from enum import Enum
from typing import Optional

from rat25f.errors import SourceLocation
from rat25f.syntax.errors import MissingTokenError, UnexpectedTokenError
from rat25f.syntax.lexer import Scanner, Token, TokenKind
from rat25f.syntax.trace import (
    ParserPolicy,
    ProductionSink,
    Rule,
    StreamSink,
    TraceConfig,
)

logger = logging.getLogger(__name__)


QUALIFIERS = ("integer", "boolean", "real")

RELATIONAL_OPERATORS = ("==", "!=", ">", "<", "<=", ">=")

BOOLEAN_LITERALS = ("true", "false")

# Keywords that open a statement, in dispatch order
STATEMENT_KEYWORDS = ("if", "return", "put", "get", "while")


class StartSymbol(Enum):
    """Nonterminal the parse starts from."""

    PROGRAM = "program"
    STATEMENT = "statement"
    EXPRESSION = "expression"


class Parser:
    """
    Predictive recursive descent parser for Rat25F.

    All parse state lives on the instance: the lookahead token, the trace
    configuration, the policy and the sink. A parser handles exactly one
    input; create a new one (with a new Scanner) for every parse.

    Attributes:
        filename: Source name used in error locations
        tokens_consumed: Number of terminals matched so far
        productions_emitted: Number of trace lines written to the sink
    """

    def __init__(
        self,
        scanner: Scanner,
        trace: Optional[TraceConfig] = None,
        policy: Optional[ParserPolicy] = None,
        sink: Optional[ProductionSink] = None,
        filename: str = "<input>",
    ):
        """
        Initialize the parser and read the first lookahead token.

        Args:
            scanner: Token source
            trace: Production trace settings (defaults to TraceConfig())
            policy: Echo and leniency switches (defaults to ParserPolicy())
            sink: Output channel (defaults to a StreamSink on stdout)
            filename: Source name for error locations
        """
        self.scanner = scanner
        self.trace = trace or TraceConfig()
        self.policy = policy or ParserPolicy()
        self.sink = sink if sink is not None else StreamSink()
        self.filename = filename

        self.tokens_consumed = 0
        self.productions_emitted = 0

        self._token: Token = scanner.next_token()

    def parse(self, start: StartSymbol = StartSymbol.PROGRAM) -> None:
        """
        Parse the input from the given start symbol.

        A program must use up the whole input. Statement and expression
        parses stop after one complete phrase.

        Raises:
            RatSyntaxError: On the first token that does not fit the grammar
        """
        logger.debug(f"Parsing {self.filename} from <{start.value}>")
        if start is StartSymbol.STATEMENT:
            self._statement()
        elif start is StartSymbol.EXPRESSION:
            self._expression()
        else:
            self._rat25f()
            # The top-level statement list also stops at '}'
            if not self._at_end():
                raise self._unexpected("end of input")
        logger.debug(
            f"Parsed {self.filename}: {self.tokens_consumed} tokens, "
            f"{self.productions_emitted} productions"
        )

    # =========================================================================
    # Token Access Methods
    # =========================================================================

    @property
    def current(self) -> Token:
        """The lookahead token."""
        return self._token

    def _advance(self) -> None:
        self._token = self.scanner.next_token()

    def _at_end(self) -> bool:
        return self._token.kind is TokenKind.EOF

    def _is_keyword(self, word: str) -> bool:
        return self._token.is_keyword(word, lenient=self.policy.lenient_keywords)

    def _is_operator(self, symbol: str) -> bool:
        return self._token.is_operator(symbol)

    def _is_separator(self, symbol: str) -> bool:
        return self._token.is_separator(symbol)

    def _is_qualifier(self) -> bool:
        return any(self._is_keyword(word) for word in QUALIFIERS)

    def _starts_statement(self) -> bool:
        """First-set test for <Statement>."""
        return (
            self._is_separator("{")
            or self._token.kind is TokenKind.IDENTIFIER
            or any(self._is_keyword(word) for word in STATEMENT_KEYWORDS)
        )

    def _closes_statement_list(self) -> bool:
        return self._at_end() or self._is_separator("}")

    # =========================================================================
    # Output
    # =========================================================================

    def _production(self, rule: Rule, text: str) -> None:
        """Trace a production if the trace configuration lets it through."""
        if self.trace.allows(rule, text):
            self.sink.emit(text)
            self.productions_emitted += 1

    def _consume(self) -> None:
        """Echo the current terminal and move past it."""
        if self.policy.echo_tokens and not self._at_end():
            self.sink.emit(
                f"Token: {self._token.kind.value} Lexeme: {self._token.lexeme}"
            )
        self.tokens_consumed += 1
        self._advance()

    def _skip_banner_strings(self) -> None:
        """Drop free-standing string literals without echo or trace."""
        while self._token.kind is TokenKind.STRING:
            self._advance()

    # =========================================================================
    # Expect Helpers
    # =========================================================================

    def _location(self) -> SourceLocation:
        return SourceLocation(self.filename, self._token.line, self._token.column)

    def _missing(self, expected: str) -> MissingTokenError:
        return MissingTokenError(expected, self._token.lexeme, self._location())

    def _unexpected(self, expected: str) -> UnexpectedTokenError:
        return UnexpectedTokenError(expected, self._token.lexeme, self._location())

    def _expect_identifier(self) -> None:
        if self._token.kind is not TokenKind.IDENTIFIER:
            raise self._missing("identifier")
        self._consume()

    def _expect_keyword(self, word: str) -> None:
        if not self._is_keyword(word):
            raise self._missing(f"'{word}'")
        self._consume()

    def _expect_operator(self, symbol: str) -> None:
        if not self._is_operator(symbol):
            raise self._missing(f"operator '{symbol}'")
        self._consume()

    def _expect_separator(self, symbol: str) -> None:
        if not self._is_separator(symbol):
            raise self._missing(f"separator '{symbol}'")
        self._consume()

    # =========================================================================
    # Program and Function Definitions
    # =========================================================================

    def _rat25f(self) -> None:
        self._production(
            Rule.RAT25F,
            "<Rat25F> -> <Opt Function Definitions> <Opt Declaration List> <Statement List>",
        )
        self._skip_banner_strings()
        self._opt_function_definitions()
        self._skip_banner_strings()
        self._opt_declaration_list()
        self._skip_banner_strings()
        self._statement_list()

    def _opt_function_definitions(self) -> None:
        self._skip_banner_strings()
        if self._is_keyword("function"):
            self._production(
                Rule.OPT_FUNCTION_DEFINITIONS,
                "<Opt Function Definitions> -> <Function Definitions>",
            )
            self._function_definitions()
        else:
            self._production(
                Rule.OPT_FUNCTION_DEFINITIONS, "<Opt Function Definitions> -> ε"
            )

    def _function_definitions(self) -> None:
        self._production(
            Rule.FUNCTION_DEFINITIONS,
            "<Function Definitions> -> <Function> <Function Definitions Prime>",
        )
        self._function()
        self._function_definitions_prime()

    def _function_definitions_prime(self) -> None:
        # Loop form of the right-recursive tail; one production per step
        while True:
            self._skip_banner_strings()
            if not self._is_keyword("function"):
                break
            self._production(
                Rule.FUNCTION_DEFINITIONS_PRIME,
                "<Function Definitions Prime> -> <Function> <Function Definitions Prime>",
            )
            self._function()
        self._production(
            Rule.FUNCTION_DEFINITIONS_PRIME, "<Function Definitions Prime> -> ε"
        )

    def _function(self) -> None:
        self._production(
            Rule.FUNCTION,
            "<Function> -> function <Identifier> ( <Opt Parameter List> ) "
            "<Opt Declaration List> <Body>",
        )
        self._expect_keyword("function")
        self._expect_identifier()
        self._expect_separator("(")
        self._opt_parameter_list()
        self._expect_separator(")")
        self._opt_declaration_list()
        self._body()

    def _opt_parameter_list(self) -> None:
        # Parameters open with their identifiers, not the qualifier
        if self._token.kind is TokenKind.IDENTIFIER:
            self._production(
                Rule.OPT_PARAMETER_LIST, "<Opt Parameter List> -> <Parameter List>"
            )
            self._parameter_list()
        else:
            self._production(Rule.OPT_PARAMETER_LIST, "<Opt Parameter List> -> ε")

    def _parameter_list(self) -> None:
        self._production(
            Rule.PARAMETER_LIST, "<Parameter List> -> <Parameter> <Parameter List Prime>"
        )
        self._parameter()
        while self._is_separator(","):
            self._production(
                Rule.PARAMETER_LIST_PRIME,
                "<Parameter List Prime> -> , <Parameter> <Parameter List Prime>",
            )
            self._expect_separator(",")
            self._parameter()
        self._production(Rule.PARAMETER_LIST_PRIME, "<Parameter List Prime> -> ε")

    def _parameter(self) -> None:
        self._production(Rule.PARAMETER, "<Parameter> -> <IDs> <Qualifier>")
        self._ids()
        self._qualifier()

    def _qualifier(self) -> None:
        if not self._is_qualifier():
            raise self._unexpected("qualifier (integer|boolean|real)")
        self._production(Rule.QUALIFIER, "<Qualifier> -> integer | boolean | real")
        self._consume()

    def _body(self) -> None:
        self._production(Rule.BODY, "<Body> -> { <Opt Statement List> }")
        self._expect_separator("{")
        if self._closes_statement_list():
            self._production(Rule.STATEMENT_LIST, "<Statement List> -> ε")
        else:
            self._statement_list()
        self._expect_separator("}")

    # =========================================================================
    # Declarations
    # =========================================================================

    def _opt_declaration_list(self) -> None:
        if self._is_qualifier():
            self._production(
                Rule.OPT_DECLARATION_LIST, "<Opt Declaration List> -> <Declaration List>"
            )
            self._declaration_list()
        else:
            self._production(Rule.OPT_DECLARATION_LIST, "<Opt Declaration List> -> ε")

    def _declaration_list(self) -> None:
        self._production(
            Rule.DECLARATION_LIST,
            "<Declaration List> -> <Declaration> ; <Declaration List Prime>",
        )
        self._declaration()
        self._expect_separator(";")
        while self._is_qualifier():
            self._production(
                Rule.DECLARATION_LIST_PRIME,
                "<Declaration List Prime> -> <Declaration> ; <Declaration List Prime>",
            )
            self._declaration()
            self._expect_separator(";")
        self._production(Rule.DECLARATION_LIST_PRIME, "<Declaration List Prime> -> ε")

    def _declaration(self) -> None:
        self._production(Rule.DECLARATION, "<Declaration> -> <Qualifier> <IDs>")
        self._qualifier()
        self._ids()

    def _ids(self) -> None:
        # Loop form of <IDs Prime> -> , <IDs>; only the last step derives ε
        self._production(Rule.IDS, "<IDs> -> <Identifier> <IDs Prime>")
        self._expect_identifier()
        while self._is_separator(","):
            self._production(Rule.IDS_PRIME, "<IDs Prime> -> , <IDs>")
            self._expect_separator(",")
            self._production(Rule.IDS, "<IDs> -> <Identifier> <IDs Prime>")
            self._expect_identifier()
        self._production(Rule.IDS_PRIME, "<IDs Prime> -> ε")

    # =========================================================================
    # Statements
    # =========================================================================

    def _statement_list(self) -> None:
        self._skip_banner_strings()
        if self._closes_statement_list():
            self._production(Rule.STATEMENT_LIST, "<Statement List> -> ε")
            return
        if not self._starts_statement():
            raise self._unexpected("statement")

        self._production(
            Rule.STATEMENT_LIST,
            "<Statement List> -> <Statement> <Statement List Prime>",
        )
        self._statement()
        self._statement_list_prime()

    def _statement_list_prime(self) -> None:
        while True:
            self._skip_banner_strings()
            if self._closes_statement_list():
                break
            if not self._starts_statement():
                raise self._unexpected("statement")
            self._production(
                Rule.STATEMENT_LIST_PRIME,
                "<Statement List Prime> -> <Statement> <Statement List Prime>",
            )
            self._statement()
        self._production(Rule.STATEMENT_LIST_PRIME, "<Statement List Prime> -> ε")

    def _statement(self) -> None:
        if self._token.kind is TokenKind.STRING:
            # Banner in statement position: a no-op, never echoed
            self._advance()
            self._production(Rule.STATEMENT, "<Statement> -> ε")
            return

        if self._is_keyword("if"):
            self._production(Rule.STATEMENT, "<Statement> -> <If>")
            self._if()
        elif self._is_keyword("return"):
            self._production(Rule.STATEMENT, "<Statement> -> <Return>")
            self._return()
        elif self._is_keyword("put"):
            self._production(Rule.STATEMENT, "<Statement> -> <Print>")
            self._print()
        elif self._is_keyword("get"):
            self._production(Rule.STATEMENT, "<Statement> -> <Scan>")
            self._scan()
        elif self._is_keyword("while"):
            self._production(Rule.STATEMENT, "<Statement> -> <While>")
            self._while()
        elif self._is_separator("{"):
            self._production(Rule.STATEMENT, "<Statement> -> <Compound>")
            self._compound()
        elif self._token.kind is TokenKind.IDENTIFIER:
            self._production(Rule.STATEMENT, "<Statement> -> <Assign>")
            self._assign()
        else:
            raise self._unexpected("statement")

    def _compound(self) -> None:
        self._production(Rule.COMPOUND, "<Compound> -> { <Statement List> }")
        self._expect_separator("{")
        self._statement_list()
        self._expect_separator("}")

    def _assign(self) -> None:
        self._production(Rule.ASSIGN, "<Assign> -> <Identifier> = <Expression> ;")
        self._expect_identifier()
        self._expect_operator("=")
        self._expression()
        self._expect_separator(";")

    def _if(self) -> None:
        self._production(
            Rule.IF, "<If> -> if ( <Condition> ) <Statement> <OptElse> fi"
        )
        self._expect_keyword("if")
        self._expect_separator("(")
        self._condition()
        self._expect_separator(")")
        self._statement()
        if self._is_keyword("else"):
            self._production(Rule.OPT_ELSE, "<OptElse> -> else <Statement>")
            self._expect_keyword("else")
            self._statement()
        else:
            self._production(Rule.OPT_ELSE, "<OptElse> -> ε")
        self._expect_keyword("fi")

    def _return(self) -> None:
        self._production(Rule.RETURN, "<Return> -> return ; | return <Expression> ;")
        self._expect_keyword("return")
        if not self._is_separator(";"):
            self._expression()
        self._expect_separator(";")

    def _print(self) -> None:
        self._production(Rule.PRINT, "<Print> -> put ( <Expression> ) ;")
        self._expect_keyword("put")
        self._expect_separator("(")
        self._expression()
        self._expect_separator(")")
        self._expect_separator(";")

    def _scan(self) -> None:
        self._production(Rule.SCAN, "<Scan> -> get ( <IDs> ) ;")
        self._expect_keyword("get")
        self._expect_separator("(")
        self._ids()
        self._expect_separator(")")
        self._expect_separator(";")

    def _while(self) -> None:
        self._production(
            Rule.WHILE, "<While> -> while ( <Condition> ) <Statement>"
        )
        self._expect_keyword("while")
        self._expect_separator("(")
        self._condition()
        self._expect_separator(")")
        self._statement()

    # =========================================================================
    # Expressions
    # =========================================================================

    def _condition(self) -> None:
        self._production(
            Rule.CONDITION, "<Condition> -> <Expression> <Relop> <Expression>"
        )
        self._expression()
        self._relop()
        self._expression()

    def _relop(self) -> None:
        if not any(self._is_operator(op) for op in RELATIONAL_OPERATORS):
            raise self._unexpected("relational operator")
        self._production(Rule.RELOP, f"<Relop> -> {self._token.lexeme}")
        self._consume()

    def _expression(self) -> None:
        self._production(Rule.EXPRESSION, "<Expression> -> <Term> <Expression Prime>")
        self._term()
        while self._is_operator("+") or self._is_operator("-"):
            op = self._token.lexeme
            self._production(
                Rule.EXPRESSION_PRIME,
                f"<Expression Prime> -> {op} <Term> <Expression Prime>",
            )
            self._expect_operator(op)
            self._term()
        self._production(Rule.EXPRESSION_PRIME, "<Expression Prime> -> ε")

    def _term(self) -> None:
        self._production(Rule.TERM, "<Term> -> <Factor> <Term Prime>")
        self._factor()
        while self._is_operator("*") or self._is_operator("/"):
            op = self._token.lexeme
            self._production(
                Rule.TERM_PRIME, f"<Term Prime> -> {op} <Factor> <Term Prime>"
            )
            self._expect_operator(op)
            self._factor()
        self._production(Rule.TERM_PRIME, "<Term Prime> -> ε")

    def _factor(self) -> None:
        if self._is_operator("-"):
            self._production(Rule.FACTOR, "<Factor> -> - <Primary>")
            self._expect_operator("-")
        else:
            self._production(Rule.FACTOR, "<Factor> -> <Primary>")
        self._primary()

    def _primary(self) -> None:
        token = self._token

        # true/false only take their own alternative when scanned as keywords
        if token.kind is TokenKind.IDENTIFIER:
            self._production(
                Rule.PRIMARY, "<Primary> -> <Identifier> <Primary Prime>"
            )
            self._expect_identifier()
            self._primary_prime()
        elif token.kind is TokenKind.KEYWORD and (
            token.lexeme.lower() in BOOLEAN_LITERALS
        ):
            self._production(Rule.PRIMARY, "<Primary> -> true | false")
            self._consume()
        elif token.kind is TokenKind.INTEGER:
            self._production(Rule.PRIMARY, "<Primary> -> <Integer>")
            self._consume()
        elif token.kind is TokenKind.REAL:
            self._production(Rule.PRIMARY, "<Primary> -> <Real>")
            self._consume()
        elif self._is_separator("("):
            self._production(Rule.PRIMARY, "<Primary> -> ( <Expression> )")
            self._expect_separator("(")
            self._expression()
            self._expect_separator(")")
        elif token.kind is TokenKind.STRING and self.policy.allow_string_primary:
            self._production(Rule.PRIMARY, "<Primary> -> <String>")
            self._consume()
        else:
            raise self._unexpected("primary")

    def _primary_prime(self) -> None:
        if self._is_separator("("):
            self._production(Rule.PRIMARY_PRIME, "<Primary Prime> -> ( <IDs> )")
            self._expect_separator("(")
            self._ids()
            self._expect_separator(")")
        else:
            self._production(Rule.PRIMARY_PRIME, "<Primary Prime> -> ε")
