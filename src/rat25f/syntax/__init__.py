"""
Rat25F Syntax Analyzer
======================

This package implements the front end of the Rat25F tools: a finite-state
scanner and a predictive recursive descent parser that reports the grammar
productions used to derive a program, together with an echo of every
token it consumes.

Pipeline
--------
    Source → Scanner → Parser → Production trace + token echo

Nothing else is built: there is no syntax tree, symbol table or code
generation. The first syntax error ends the parse.

Usage
-----
>>> from rat25f.syntax import analyze, AnalyzerOptions, TraceConfig
>>> result, lines = analyze("x = 1;", AnalyzerOptions(trace=TraceConfig.full()))
>>> lines[0]
'<Rat25F> -> <Opt Function Definitions> <Opt Declaration List> <Statement List>'
"""

from rat25f.syntax.analyzer import (
    SAMPLE_JOBS,
    SUCCESS_LINE,
    AnalysisResult,
    AnalyzerOptions,
    SyntaxAnalyzer,
    analyze,
)
from rat25f.syntax.errors import (
    AnalyzerError,
    MissingTokenError,
    RatSyntaxError,
    UnexpectedTokenError,
)
from rat25f.syntax.lexer import KEYWORDS, Scanner, Token, TokenKind
from rat25f.syntax.parser import Parser, StartSymbol
from rat25f.syntax.trace import (
    ListSink,
    ParserPolicy,
    ProductionSink,
    Rule,
    StreamSink,
    TraceConfig,
)

__all__ = [
    # Driver
    "SyntaxAnalyzer",
    "AnalyzerOptions",
    "AnalysisResult",
    "analyze",
    "SAMPLE_JOBS",
    "SUCCESS_LINE",
    # Errors
    "AnalyzerError",
    "RatSyntaxError",
    "MissingTokenError",
    "UnexpectedTokenError",
    # Scanner
    "Scanner",
    "Token",
    "TokenKind",
    "KEYWORDS",
    # Parser
    "Parser",
    "StartSymbol",
    # Trace
    "Rule",
    "TraceConfig",
    "ParserPolicy",
    "ProductionSink",
    "StreamSink",
    "ListSink",
]
