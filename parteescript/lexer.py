"""Tokenizer for the script language."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

__all__ = ["TokenType", "Token", "Lexer", "token_type_name"]


class TokenType(Enum):
    """Kinds of token; each value is the token kind's display name."""

    # Literals
    IDENTIFIER = "Identifier"
    NUMBER = "Number"
    STRING = "String"

    # Keywords
    KW_USE = "KW_Use"
    KW_FOR = "KW_For"
    KW_IN = "KW_In"
    KW_IF = "KW_If"
    KW_ELSE = "KW_Else"
    KW_ELSE_IF = "KW_Elif"
    KW_END = "KW_End"
    KW_FUNCTION = "KW_Function"
    KW_WHILE = "KW_While"
    KW_CONTINUE = "KW_Continue"
    KW_BREAK = "KW_Break"
    KW_RETURN = "KW_Return"
    KW_SWITCH = "KW_Switch"
    KW_CASE = "KW_Case"
    KW_DEFAULT = "KW_Default"
    KW_ON = "KW_On"
    KW_AND = "KW_And"
    KW_OR = "KW_Or"
    KW_NOT = "KW_Not"
    KW_TRUE = "KW_True"
    KW_FALSE = "KW_False"
    KW_NULL = "KW_Null"

    # Operators
    OP_ASSIGN = "OP_Assign"
    OP_PLUS = "OP_Plus"
    OP_MINUS = "OP_Minus"
    OP_STAR = "OP_Star"
    OP_POWER = "OP_Power"
    OP_SLASH = "OP_Slash"
    OP_PERCENT = "OP_Percent"
    OP_PLUS_ASSIGN = "OP_Plus_Assign"
    OP_MINUS_ASSIGN = "OP_Minus_Assign"
    OP_PERCENT_ASSIGN = "OP_Percent_Assign"
    OP_INCREMENT = "OP_Increment"
    OP_DECREMENT = "OP_Decrement"
    OP_EQUAL = "OP_Equal"
    OP_NOT_EQUAL = "OP_Not_Equal"
    OP_LESS = "OP_Less"
    OP_LESS_EQUAL = "OP_Less_Equal"
    OP_GREATER = "OP_Greater"
    OP_GREATER_EQUAL = "OP_Greater_Equal"
    OP_BITWISE_AND = "OP_Bitwise_And"
    OP_BITWISE_OR = "OP_Bitwise_Or"
    OP_BITWISE_XOR = "OP_Bitwise_Xor"
    OP_BITWISE_NOT = "OP_Bitwise_Not"
    OP_LEFT_SHIFT = "OP_Left_Shift"
    OP_RIGHT_SHIFT = "OP_Right_Shift"
    OP_DOT = "OP_Dot"
    OP_COMMA = "OP_Comma"
    OP_COLON = "OP_Colon"
    OP_QUESTION = "OP_Question"

    # Delimiters
    DEL_LPAREN = "DEL_LParen"
    DEL_RPAREN = "DEL_RParen"
    DEL_LBRACE = "DEL_LBrace"
    DEL_RBRACE = "DEL_RBrace"
    DEL_LBRACKET = "DEL_LBracket"
    DEL_RBRACKET = "DEL_RBracket"

    # Special
    END_OF_FILE = "EndOfFile"
    UNKNOWN = "Unknown"


def token_type_name(token_type: TokenType) -> str:
    """Return the readable name of a token kind, for logs and diagnostics."""
    return token_type.value


@dataclass(frozen=True)
class Token:
    """A lexeme with its kind and 1-based source position."""

    type: TokenType
    value: str
    line: int
    column: int


_END = "\0"
_WHITESPACE = frozenset(" \t\n\v\f\r")
_DIGITS = frozenset("0123456789")
_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ")
_IDENT_START = _LETTERS | {"_"}
_IDENT_CHARS = _IDENT_START | _DIGITS

_KEYWORDS = {
    "use": TokenType.KW_USE,
    "for": TokenType.KW_FOR,
    "in": TokenType.KW_IN,
    "if": TokenType.KW_IF,
    "else": TokenType.KW_ELSE,
    "elif": TokenType.KW_ELSE_IF,
    "end": TokenType.KW_END,
    "function": TokenType.KW_FUNCTION,
    "while": TokenType.KW_WHILE,
    "continue": TokenType.KW_CONTINUE,
    "break": TokenType.KW_BREAK,
    "return": TokenType.KW_RETURN,
    "match": TokenType.KW_SWITCH,
    "case": TokenType.KW_CASE,
    "default": TokenType.KW_DEFAULT,
    "on": TokenType.KW_ON,
    "and": TokenType.KW_AND,
    "or": TokenType.KW_OR,
    "not": TokenType.KW_NOT,
    "true": TokenType.KW_TRUE,
    "false": TokenType.KW_FALSE,
    "null": TokenType.KW_NULL,
}

# Operators made of two characters, keyed by their first character.
_COMPOUND_OPERATORS = {
    "=": {"=": TokenType.OP_EQUAL},
    "!": {"=": TokenType.OP_NOT_EQUAL},
    "<": {"=": TokenType.OP_LESS_EQUAL},
    ">": {"=": TokenType.OP_GREATER_EQUAL},
    "+": {"=": TokenType.OP_PLUS_ASSIGN, "+": TokenType.OP_INCREMENT},
    "-": {"=": TokenType.OP_MINUS_ASSIGN, "-": TokenType.OP_DECREMENT},
    "*": {"*": TokenType.OP_POWER},
    "%": {"=": TokenType.OP_PERCENT_ASSIGN},
}

_SINGLE_OPERATORS = {
    "=": TokenType.OP_ASSIGN,
    "!": TokenType.UNKNOWN,
    "<": TokenType.OP_LESS,
    ">": TokenType.OP_GREATER,
    "+": TokenType.OP_PLUS,
    "-": TokenType.OP_MINUS,
    "*": TokenType.OP_STAR,
    "/": TokenType.OP_SLASH,
    "%": TokenType.OP_PERCENT,
    ".": TokenType.OP_DOT,
    ",": TokenType.OP_COMMA,
    ":": TokenType.OP_COLON,
    "?": TokenType.OP_QUESTION,
    "&": TokenType.OP_BITWISE_AND,
    "|": TokenType.OP_BITWISE_OR,
    "^": TokenType.OP_BITWISE_XOR,
    "~": TokenType.OP_BITWISE_NOT,
    "(": TokenType.DEL_LPAREN,
    ")": TokenType.DEL_RPAREN,
    "{": TokenType.DEL_LBRACE,
    "}": TokenType.DEL_RBRACE,
    "[": TokenType.DEL_LBRACKET,
    "]": TokenType.DEL_RBRACKET,
}

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", '"': '"'}


class Lexer:
    """Turns script source text into a stream of tokens."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._position = 0
        self._line = 1
        self._column = 1

    def _peek(self, offset: int = 0) -> str:
        index = self._position + offset
        if index >= len(self._source):
            return _END
        return self._source[index]

    def _get(self) -> str:
        if self._position >= len(self._source):
            return _END
        char = self._source[self._position]
        self._position += 1
        if char == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return char

    def _skip_whitespace(self) -> None:
        while self._peek() in _WHITESPACE:
            self._get()

    def _skip_comment(self) -> None:
        if self._peek() == "#":
            while self._peek() not in ("\n", _END):
                self._get()

    def _scan_string(self) -> Token:
        line, column = self._line, self._column
        quote = self._get()
        parts: list[str] = []
        while self._peek() not in (quote, _END):
            if self._peek() == "\\":
                self._get()
                escaped = self._peek()
                if escaped in _ESCAPES:
                    parts.append(_ESCAPES[escaped])
                    self._get()
                else:
                    parts.append(self._get())
            else:
                parts.append(self._get())
        if self._peek() == quote:
            self._get()
        return Token(TokenType.STRING, "".join(parts), line, column)

    def _take_digits(self, parts: list[str]) -> None:
        while self._peek() in _DIGITS:
            parts.append(self._get())

    def _scan_number(self) -> Token:
        line, column = self._line, self._column
        parts: list[str] = []
        if self._peek() == "-":
            parts.append(self._get())
        self._take_digits(parts)
        if self._peek() == "." and self._peek(1) in _DIGITS:
            parts.append(self._get())
            self._take_digits(parts)
        return Token(TokenType.NUMBER, "".join(parts), line, column)

    def _scan_identifier_or_keyword(self) -> Token:
        line, column = self._line, self._column
        parts: list[str] = []
        while self._peek() in _IDENT_CHARS:
            parts.append(self._get())
        value = "".join(parts)
        return Token(_KEYWORDS.get(value, TokenType.IDENTIFIER), value, line, column)

    def _scan_operator(self) -> Token:
        line, column = self._line, self._column
        char = self._get()
        followers = _COMPOUND_OPERATORS.get(char, {})
        if self._peek() in followers:
            second = self._get()
            return Token(followers[second], char + second, line, column)
        return Token(_SINGLE_OPERATORS.get(char, TokenType.UNKNOWN), char, line, column)

    def next_token(self) -> Token:
        """Scan and return the next token; at the end, an end-of-file token."""
        self._skip_whitespace()
        while self._peek() == "#":
            self._skip_comment()
            self._skip_whitespace()

        char = self._peek()
        if char == _END:
            return Token(TokenType.END_OF_FILE, "", self._line, self._column)
        if char in ("'", '"'):
            return self._scan_string()
        if char in _DIGITS or (char == "-" and self._peek(1) in _DIGITS):
            return self._scan_number()
        if char in _IDENT_START:
            return self._scan_identifier_or_keyword()
        return self._scan_operator()

    def __iter__(self) -> Iterator[Token]:
        """Yield the remaining tokens, ending with the end-of-file token."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.END_OF_FILE:
                return

    def tokenize(self) -> list[Token]:
        """Return all remaining tokens, the end-of-file token last."""
        return list(self)