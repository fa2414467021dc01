"""
kaleido-parse - Kaleido Parser Command-Line Interface
=====================================================

Parses Kaleido source from a file or stdin and prints one line per
top-level form. Diagnostics go to stderr, one line per failure.

Usage Examples
--------------
Parse a file:
    $ kaleido-parse program.kal

Parse stdin:
    $ echo "def f(x) x*2; f(3)" | kaleido-parse

Dump the token stream:
    $ kaleido-parse --tokens program.kal

Dump AST trees:
    $ kaleido-parse --ast program.kal

Exit Codes
----------
0 all forms parsed, 1 at least one parse failure, 2 bad arguments or
configuration, 3 internal error.
"""

import logging
import sys
from typing import Optional, TextIO

import click

from kaleido import __version__
from kaleido.cli.errors import ExitCode, handle_cli_exception
from kaleido.frontend.ast import ASTPrinter, format_form
from kaleido.frontend.diagnostics import DiagnosticReporter
from kaleido.frontend.driver import TopLevelDriver
from kaleido.frontend.lexer import Lexer
from kaleido.frontend.options import ParserOptions
from kaleido.frontend.parser import Parser


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument("input_file", type=click.File("r"), default="-")
@click.option(
    "--tokens",
    is_flag=True,
    help="Print the token stream and exit",
)
@click.option(
    "--ast", "show_ast",
    is_flag=True,
    help="Print each form as an indented AST tree",
)
@click.option(
    "--anon-name",
    default=None,
    help="Name for wrapped top-level expressions (default: __anon_expr)",
)
@click.option(
    "--max-errors",
    type=click.IntRange(min=1),
    default=None,
    help="Stop after this many parse failures",
)
@click.option(
    "-q", "--quiet",
    is_flag=True,
    help="Do not print diagnostics",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Verbose output (debug logging on stderr)",
)
@click.version_option(version=__version__, prog_name="kaleido-parse")
def main(
    input_file: TextIO,
    tokens: bool,
    show_ast: bool,
    anon_name: Optional[str],
    max_errors: Optional[int],
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Parse Kaleido source and print its top-level forms.

    INPUT_FILE is the source file to read ('-' or omitted for stdin).

    \b
    Examples:
        kaleido-parse prog.kal            # One line per form
        kaleido-parse --ast prog.kal      # AST trees
        kaleido-parse --tokens prog.kal   # Token stream
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(name)s: %(message)s",
            stream=sys.stderr,
        )

    try:
        options = ParserOptions.from_env()
        if anon_name:
            options.anonymous_name = anon_name
        if max_errors is not None:
            options.max_errors = max_errors
        if quiet:
            options.echo_diagnostics = False

        if tokens:
            for token in Lexer(input_file).tokenize():
                click.echo(repr(token))
            return

        reporter = DiagnosticReporter(sys.stderr if options.echo_diagnostics else None)
        parser = Parser(Lexer(input_file), reporter, options)
        printer = ASTPrinter()

        for result in TopLevelDriver(parser, options).forms():
            if not result.ok:
                continue
            if show_ast:
                click.echo(printer.print(result.node))
            else:
                click.echo(format_form(result.node))

    except Exception as e:
        handle_cli_exception(e, verbose)

    if verbose:
        click.echo(f"{reporter.error_count()} parse errors", err=True)

    if reporter.has_errors():
        sys.exit(ExitCode.PARSE_ERROR)


if __name__ == "__main__":
    main()
