"""
Rat25F Syntax Analyzer Driver
=============================

This module runs one complete analysis: it wires a Scanner to a Parser,
sends the production trace and token echo to a sink, and finishes with a
status line.

    Source → Scanner → Parser → Sink (trace + echo + status)

Usage
-----
Command line:
    $ ratc prog.rat25f prog.txt

Programmatic:
    >>> from rat25f.syntax import analyze
    >>> result, lines = analyze("integer x; x = 3 + 4; put(x);")
    >>> result.success
    True
    >>> lines[-1]
    'Parsing finished successfully.'

Output
------
A successful run ends with ``Parsing finished successfully.``. A failed
run ends with exactly one error line:

    Syntax error: separator ';' expected at line 1, col 12 (near 'x')

Everything emitted before the error stays in the output. Each analysis is
independent; nothing is carried over from one input to the next.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, TextIO, Union

from rat25f.syntax.errors import RatSyntaxError
from rat25f.syntax.lexer import KEYWORDS, Scanner
from rat25f.syntax.parser import Parser, StartSymbol
from rat25f.syntax.trace import (
    ListSink,
    ParserPolicy,
    ProductionSink,
    StreamSink,
    TraceConfig,
)

logger = logging.getLogger(__name__)


SUCCESS_LINE = "Parsing finished successfully."

# Default batch run: sample programs and where their traces go
SAMPLE_JOBS: tuple[tuple[str, str], ...] = tuple(
    (f"tests/test{n}.rat25f", f"tests/output{n}.txt") for n in range(4)
)


@dataclass
class AnalyzerOptions:
    """
    Analyzer configuration.

    Attributes:
        trace: Which productions are traced
        policy: Token echo and grammar leniency switches
        keywords: Scanner keyword table
        start: Nonterminal to start parsing from
    """
    trace: TraceConfig = field(default_factory=TraceConfig)
    policy: ParserPolicy = field(default_factory=ParserPolicy)
    keywords: frozenset[str] = KEYWORDS
    start: StartSymbol = StartSymbol.PROGRAM


@dataclass
class AnalysisResult:
    """
    Result of analyzing one input.

    Attributes:
        filename: Source name
        success: True if the parse completed
        error: The syntax error that stopped the parse, if any
        tokens_consumed: Terminals matched before the parse ended
        productions_emitted: Trace lines written
    """
    filename: str = "<input>"
    success: bool = False
    error: Optional[RatSyntaxError] = None
    tokens_consumed: int = 0
    productions_emitted: int = 0


class SyntaxAnalyzer:
    """
    Runs the Rat25F scanner and parser over one input at a time.

    Example:
        analyzer = SyntaxAnalyzer()
        result = analyzer.analyze_file("test0.rat25f", "output0.txt")
        print(result.success)

    Attributes:
        options: Analyzer configuration, shared by every run
    """

    def __init__(self, options: Optional[AnalyzerOptions] = None):
        self.options = options or AnalyzerOptions()

    def analyze_source(
        self,
        source: Union[str, TextIO],
        sink: Optional[ProductionSink] = None,
        filename: str = "<input>",
    ) -> AnalysisResult:
        """
        Analyze source text or a text stream.

        Syntax errors do not propagate: they end the run with one error
        line in the sink and a failed result.

        Args:
            source: Rat25F source text or stream
            sink: Output channel (defaults to a StreamSink on stdout)
            filename: Source name for error locations and logs

        Returns:
            AnalysisResult describing the run
        """
        sink = sink if sink is not None else StreamSink()
        scanner = Scanner(source, keywords=self.options.keywords)
        parser = Parser(
            scanner,
            trace=self.options.trace,
            policy=self.options.policy,
            sink=sink,
            filename=filename,
        )
        result = AnalysisResult(filename=filename)

        try:
            parser.parse(self.options.start)
        except RatSyntaxError as e:
            logger.debug(f"{e.location}: {e.message}")
            sink.emit(str(e))
            result.error = e
        else:
            sink.emit(SUCCESS_LINE)
            result.success = True

        result.tokens_consumed = parser.tokens_consumed
        result.productions_emitted = parser.productions_emitted
        return result

    def analyze_file(
        self,
        input_path: Union[str, Path],
        output_path: Union[str, Path],
    ) -> AnalysisResult:
        """
        Analyze a source file and write its trace to an output file.

        Both files are closed on every exit path. Bytes that are not valid
        UTF-8 are read as U+FFFD rather than stopping the parse; Rat25F
        itself is pure ASCII, so they can only appear inside strings or as
        Unknown tokens.

        Raises:
            FileNotFoundError: If the input file does not exist
            OSError: If either file cannot be opened
        """
        input_path = Path(input_path)
        output_path = Path(output_path)
        logger.debug(f"Analyzing {input_path} -> {output_path}")

        with input_path.open(encoding="utf-8", errors="replace") as source:
            with output_path.open("w", encoding="utf-8") as out:
                return self.analyze_source(
                    source, StreamSink(out), filename=str(input_path)
                )


def analyze(
    source: str,
    options: Optional[AnalyzerOptions] = None,
    filename: str = "<input>",
) -> tuple[AnalysisResult, list[str]]:
    """
    Convenience function: analyze source text and collect the output.

    Args:
        source: Rat25F source text
        options: Analyzer configuration (defaults if None)
        filename: Source name for error locations

    Returns:
        The AnalysisResult and the output lines, in order
    """
    sink = ListSink()
    result = SyntaxAnalyzer(options).analyze_source(source, sink, filename)
    return result, sink.lines
