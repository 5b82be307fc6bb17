"""
ratc - Rat25F Syntax Analyzer Command-Line Interface
====================================================

This module implements the command-line interface for the Rat25F syntax
analyzer. Every input file is parsed independently and its production
trace, token echo and final status line are written to the paired output
file.

Usage Examples
--------------
Explicit input/output pairs:
    $ ratc test0.rat25f output0.txt test1.rat25f output1.txt

Sample batch (tests/test0..3.rat25f -> tests/output0..3.txt):
    $ ratc

Trace every production, nothing hidden:
    $ ratc --all-rules --show-optional --show-scaffolding prog.rat25f out.txt

Only trace assignments and expressions:
    $ ratc --rule assign --rule expression prog.rat25f out.txt

Exit Codes
----------
0 - Every input parsed successfully
1 - At least one input failed (syntax error or unreadable file)
2 - Invalid arguments
3 - An input hit an unexpected internal error (the other inputs still run)
"""

import logging
import sys
from pathlib import Path

import click

from rat25f import __version__
from rat25f.cli.errors import ExitCode
from rat25f.syntax import (
    SAMPLE_JOBS,
    AnalyzerOptions,
    ParserPolicy,
    Rule,
    StartSymbol,
    SyntaxAnalyzer,
    TraceConfig,
)
from rat25f.syntax.trace import STATEMENT_RULES

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s" if verbose else "%(message)s",
    )


def build_options(
    rules: tuple[str, ...],
    all_rules: bool,
    show_epsilon: bool,
    show_optional: bool,
    show_scaffolding: bool,
    no_trace: bool,
    no_echo: bool,
    strict_keywords: bool,
    no_string_primary: bool,
    start: str,
) -> AnalyzerOptions:
    """Turn command-line switches into AnalyzerOptions."""
    if all_rules:
        selected = frozenset()
    elif rules:
        selected = frozenset(Rule.from_name(name) for name in rules)
    else:
        selected = STATEMENT_RULES

    trace = TraceConfig(
        enabled=not no_trace,
        rules=selected,
        hide_epsilon=not show_epsilon,
        hide_optional=not show_optional,
        hide_scaffolding=not show_scaffolding,
    )
    policy = ParserPolicy(
        echo_tokens=not no_echo,
        lenient_keywords=not strict_keywords,
        allow_string_primary=not no_string_primary,
    )
    return AnalyzerOptions(trace=trace, policy=policy, start=StartSymbol(start))


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "files",
    nargs=-1,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-r", "--rule",
    "rules",
    multiple=True,
    type=click.Choice([rule.name.lower() for rule in Rule], case_sensitive=False),
    help="Trace only this rule (can be repeated). Default: statement rules.",
)
@click.option(
    "--all-rules",
    is_flag=True,
    help="Trace every rule",
)
@click.option(
    "--show-epsilon/--hide-epsilon",
    default=True,
    help="Show or hide ε productions (default: show)",
)
@click.option(
    "--show-optional/--hide-optional",
    default=False,
    help="Show or hide <Opt ...> productions (default: hide)",
)
@click.option(
    "--show-scaffolding/--hide-scaffolding",
    default=False,
    help="Show or hide <Rat25F> and <Statement List> productions (default: hide)",
)
@click.option(
    "--no-trace",
    is_flag=True,
    help="Disable the production trace",
)
@click.option(
    "--no-echo",
    is_flag=True,
    help="Do not echo consumed tokens",
)
@click.option(
    "--strict-keywords",
    is_flag=True,
    help="Keywords must be scanned as keywords (no identifier look-alikes)",
)
@click.option(
    "--no-string-primary",
    is_flag=True,
    help="Reject string literals inside expressions",
)
@click.option(
    "--start",
    type=click.Choice([s.value for s in StartSymbol], case_sensitive=False),
    default=StartSymbol.PROGRAM.value,
    help="Nonterminal to start parsing from (default: program)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output",
)
@click.version_option(version=__version__, prog_name="ratc")
def main(
    files: tuple[Path, ...],
    rules: tuple[str, ...],
    all_rules: bool,
    show_epsilon: bool,
    show_optional: bool,
    show_scaffolding: bool,
    no_trace: bool,
    no_echo: bool,
    strict_keywords: bool,
    no_string_primary: bool,
    start: str,
    verbose: bool,
) -> None:
    """
    Check Rat25F programs and write their production traces.

    FILES are INPUT OUTPUT pairs. Each input is parsed on its own and its
    trace goes to the output file that follows it; a failing input does not
    stop the others.

    \b
    With no FILES, the sample batch is run:
        tests/test0.rat25f -> tests/output0.txt
        ...
        tests/test3.rat25f -> tests/output3.txt
    """
    setup_logging(verbose)

    if len(files) % 2:
        click.echo(
            "Error: expected INPUT OUTPUT pairs (odd number of files given)",
            err=True,
        )
        sys.exit(ExitCode.INVALID_ARGS)

    batch = not files
    if batch:
        jobs = [(Path(src), Path(dst)) for src, dst in SAMPLE_JOBS]
    else:
        jobs = list(zip(files[::2], files[1::2]))

    options = build_options(
        rules,
        all_rules,
        show_epsilon,
        show_optional,
        show_scaffolding,
        no_trace,
        no_echo,
        strict_keywords,
        no_string_primary,
        start.lower(),
    )
    analyzer = SyntaxAnalyzer(options)

    failed = 0
    exit_code = ExitCode.SUCCESS
    for input_file, output_file in jobs:
        if batch:
            click.echo(f"==> {input_file} -> {output_file}", err=True)

        try:
            result = analyzer.analyze_file(input_file, output_file)
        except FileNotFoundError as e:
            click.echo(f"Error: cannot open file: {e.filename}", err=True)
            failed += 1
            continue
        except OSError as e:
            click.echo(f"Error: {e}", err=True)
            failed += 1
            continue
        except Exception as e:
            click.echo(f"{input_file}: Internal error: {e}", err=True)
            if verbose:
                import traceback
                traceback.print_exc()
            failed += 1
            exit_code = ExitCode.INTERNAL_ERROR
            continue

        if result.success:
            if verbose:
                click.echo(
                    f"{input_file} -> {output_file}: "
                    f"{result.tokens_consumed} tokens, "
                    f"{result.productions_emitted} productions"
                )
        else:
            failed += 1
            click.echo(f"{input_file}: {result.error}", err=True)

    if failed:
        logger.debug(f"{failed} of {len(jobs)} inputs failed")
        if exit_code is ExitCode.SUCCESS:
            exit_code = ExitCode.PARSE_ERROR
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
