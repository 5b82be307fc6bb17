"""
Rat25F Tools - Syntax Analyzer for the Rat25F Teaching Language
===============================================================

Rat25F is a small instructional language with functions, declarations,
if/while control flow, get/put I/O and arithmetic expressions. This
package checks Rat25F programs against the language grammar and reports,
line by line, which productions were used and which tokens were read.

Main Components
---------------
- **syntax**: scanner, parser and analyzer driver
- **cli**: the ``ratc`` command-line tool

Quick Start
-----------
    >>> from rat25f import analyze
    >>> result, lines = analyze("integer x; get(x); put(x * 2);")
    >>> result.success
    True

Or from the terminal:
    $ ratc prog.rat25f prog.txt
"""

__version__ = "1.0.0"

from rat25f.errors import Rat25FError, SourceLocation
from rat25f.syntax import (
    AnalysisResult,
    AnalyzerOptions,
    ParserPolicy,
    RatSyntaxError,
    SyntaxAnalyzer,
    TraceConfig,
    analyze,
)

__all__ = [
    "__version__",
    "Rat25FError",
    "SourceLocation",
    "RatSyntaxError",
    "SyntaxAnalyzer",
    "AnalyzerOptions",
    "AnalysisResult",
    "TraceConfig",
    "ParserPolicy",
    "analyze",
]
