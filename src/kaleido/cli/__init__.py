"""
Kaleido Command-Line Interface
==============================

- **kaleido-parse**: lex and parse Kaleido source, print the forms

Each tool is a Click application with unified exit codes (see
kaleido.cli.errors).
"""

__all__ = ["kparse"]
