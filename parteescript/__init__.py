"""Lexer, Pratt parser, syntax tree and script loader for the Partee scripting language."""

__version__ = "0.1.0"
__all__ = ["lexer", "syntax_tree", "parser", "loader", "cli"]