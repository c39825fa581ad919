"""Pratt parser that builds a syntax tree from a token stream."""

from __future__ import annotations

import sys
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import TextIO

from parteescript.lexer import Token, TokenType
from parteescript.syntax_tree import (
    GREY,
    RED,
    RESET,
    ArrayLiteral,
    BinaryExpr,
    BodyExpr,
    BooleanLiteral,
    BreakExpr,
    CallExpr,
    ContinueExpr,
    ErrorExpr,
    EventLiteral,
    Expr,
    ForExpr,
    FunctionExpr,
    Identifier,
    IfExpr,
    IndexExpr,
    NumberLiteral,
    OnExpr,
    Program,
    ReturnExpr,
    StringLiteral,
    UnaryExpr,
    UseExpr,
    WhileExpr,
    infix_binding_power,
)

__all__ = ["ParseResult", "ParsingContext", "Parser"]


class ParsingContext(Enum):
    """Syntactic context that decides whether return, break and continue are allowed."""

    GLOBAL = auto()
    FUNCTION = auto()
    LOOP = auto()
    CONDITIONAL = auto()
    SWITCH = auto()


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a parse: the program, whether it parsed cleanly, and a failure message."""

    program: Program | None
    ok: bool
    message: str | None = None


class _Cursor:
    """Position within a token sequence."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self.pos = 0

    def peek(self) -> Token:
        if self.pos < len(self._tokens):
            return self._tokens[self.pos]
        if self._tokens:
            last = self._tokens[-1]
            return Token(TokenType.END_OF_FILE, "", last.line, last.column)
        return Token(TokenType.END_OF_FILE, "", 1, 1)

    def advance(self) -> Token:
        token = self.peek()
        self.pos += 1
        return token

    def match(self, token_type: TokenType) -> bool:
        if self.at_end():
            return False
        if self.peek().type is token_type:
            self.advance()
            return True
        return False

    def at_end(self) -> bool:
        return self.pos >= len(self._tokens) or self.peek().type is TokenType.END_OF_FILE


class Parser:
    """Parses tokens into a :class:`Program`, reporting errors to a text stream."""

    def __init__(self, error_stream: TextIO | None = None) -> None:
        self._error_stream = error_stream
        self._contexts: list[ParsingContext] = []
        self._error_reported = False
        self._cursor = _Cursor(())

    # Diagnostics -----------------------------------------------------------

    def _write_error(self, text: str) -> None:
        token = self._cursor.peek()
        stream = self._error_stream if self._error_stream is not None else sys.stderr
        stream.write(
            f"{RED}{text}{GREY} at line {token.line}, column {token.column}{RESET}\n"
        )

    def _synchronize(self) -> None:
        cursor = self._cursor
        while not cursor.at_end():
            cursor.advance()
            if not cursor.at_end() and cursor.match(TokenType.KW_END):
                return

    def _report_error(self, message: str) -> ErrorExpr:
        self._error_reported = True
        current = self._cursor.peek()
        self._write_error(f"Parse Error: {message}")
        self._synchronize()
        return ErrorExpr(message, current.line, current.column)

    # Contexts --------------------------------------------------------------

    def _enter_context(self, context: ParsingContext) -> None:
        self._contexts.append(context)

    def _in_context(self, context: ParsingContext) -> bool:
        return context in self._contexts

    # Expressions -----------------------------------------------------------

    def _parse_expr(self, min_bp: int) -> Expr:
        cursor = self._cursor
        token = cursor.advance()
        left: Expr

        match token.type:
            case TokenType.OP_BITWISE_NOT | TokenType.KW_NOT:
                return UnaryExpr(token.type, self._parse_expr(0))
            case TokenType.KW_USE:
                if cursor.peek().type is not TokenType.STRING:
                    return self._report_error(
                        "Expected module name (string) after 'use' keyword"
                    )
                return UseExpr(StringLiteral(cursor.advance().value))
            case TokenType.KW_ON:
                return self._parse_on()
            case TokenType.KW_IF:
                return self._parse_if()
            case TokenType.KW_FOR:
                return self._parse_for()
            case TokenType.KW_WHILE:
                return self._parse_while()
            case TokenType.KW_FUNCTION:
                return self._parse_function()
            case TokenType.KW_SWITCH:
                return self._report_error("Switch statements are not supported")
            case TokenType.KW_RETURN:
                if not self._in_context(ParsingContext.FUNCTION):
                    return self._report_error("Return statement outside of function context")
                return ReturnExpr(self._parse_expr(0))
            case TokenType.KW_BREAK:
                if not self._in_context(ParsingContext.LOOP):
                    return self._report_error("Break statement outside of loop context")
                return BreakExpr()
            case TokenType.KW_CONTINUE:
                if not self._in_context(ParsingContext.LOOP):
                    return self._report_error("Continue statement outside of loop context")
                return ContinueExpr()
            case TokenType.NUMBER:
                left = NumberLiteral(token.value)
            case TokenType.STRING:
                left = StringLiteral(token.value)
            case TokenType.DEL_LBRACKET:
                left = self._parse_array_literal()
            case TokenType.KW_TRUE:
                left = BooleanLiteral(True)
            case TokenType.KW_FALSE:
                left = BooleanLiteral(False)
            case TokenType.IDENTIFIER:
                left = Identifier(token.value)
            case TokenType.DEL_LPAREN:
                left = self._parse_expr(0)
                if not cursor.match(TokenType.DEL_RPAREN):
                    return self._report_error("Expected ')' after expression")
            case _:
                return self._report_error(
                    f"Unexpected token in primary expression: {token.value}"
                )

        while not cursor.at_end():
            left = self._parse_index(left)
            left = self._parse_call(left)
            left_bp, _ = infix_binding_power(cursor.peek().type)
            if left_bp == 0 or left_bp < min_bp:
                break
            left = self._parse_binary(left, min_bp)
        return left

    def _parse_binary(self, left: Expr, min_bp: int) -> Expr:
        cursor = self._cursor
        while not cursor.at_end():
            operator = cursor.peek()
            left_bp, right_bp = infix_binding_power(operator.type)
            if left_bp == 0 or left_bp < min_bp:
                return left
            cursor.advance()
            right = self._parse_expr(right_bp)
            left = BinaryExpr(operator.type, left, right)
        return left

    def _parse_arguments(self) -> list[Expr]:
        cursor = self._cursor
        arguments: list[Expr] = []
        if cursor.match(TokenType.DEL_RPAREN):
            return arguments
        while not cursor.at_end():
            arguments.append(self._parse_expr(0))
            if cursor.match(TokenType.DEL_RPAREN):
                break
            if not cursor.match(TokenType.OP_COMMA):
                self._write_error("Expected ',' or ')' in argument list")
                self._synchronize()
                return []
        return arguments

    def _parse_call(self, left: Expr) -> Expr:
        if not self._cursor.match(TokenType.DEL_LPAREN):
            return left
        return CallExpr(left, self._parse_arguments())

    def _parse_index(self, left: Expr) -> Expr:
        cursor = self._cursor
        if not cursor.match(TokenType.DEL_LBRACKET):
            return left
        index = self._parse_expr(0)
        if not cursor.match(TokenType.DEL_RBRACKET):
            return self._report_error("Expected ']' after index expression")
        return IndexExpr(left, index)

    def _parse_body(self) -> BodyExpr:
        cursor = self._cursor
        body = BodyExpr()
        while (
            not cursor.at_end()
            and not cursor.match(TokenType.KW_END)
            and cursor.peek().type is not TokenType.KW_ELSE
        ):
            body.statements.append(self._parse_expr(0))
        return body

    def _parse_array_literal(self) -> Expr:
        cursor = self._cursor
        array = ArrayLiteral()
        if cursor.match(TokenType.DEL_RBRACKET):
            return array
        while not cursor.at_end():
            array.elements.append(self._parse_expr(0))
            if cursor.match(TokenType.DEL_RBRACKET):
                break
            if not cursor.match(TokenType.OP_COMMA):
                return self._report_error("Expected ',' or ']' in array literal")
        return array

    def _parse_event_literal(self) -> Expr:
        cursor = self._cursor
        event = EventLiteral(event_name=self._parse_expr(0))
        if not cursor.match(TokenType.DEL_LBRACE):
            return self._report_error("Expected '{' after event name in event literal")
        if cursor.match(TokenType.DEL_RBRACE):
            return event
        while not cursor.at_end():
            event.parameters.append(self._parse_expr(0))
            if cursor.match(TokenType.DEL_RBRACE):
                break
            if not cursor.match(TokenType.OP_COMMA):
                return self._report_error(
                    "Expected ',' or '}' in event literal parameter list"
                )
        return event

    # Statements ------------------------------------------------------------

    def _parse_on(self) -> Expr:
        event = self._parse_event_literal()
        return OnExpr(event_literal=event, body=self._parse_body())

    def _parse_if(self) -> Expr:
        cursor = self._cursor
        self._enter_context(ParsingContext.CONDITIONAL)
        node = IfExpr(condition=self._parse_expr(0))
        node.then_branch = self._parse_body()
        if cursor.match(TokenType.KW_ELSE):
            if cursor.match(TokenType.KW_IF):
                node.else_branch = self._parse_if()
            else:
                node.else_branch = self._parse_body()
        return node

    def _parse_for(self) -> Expr:
        cursor = self._cursor
        self._enter_context(ParsingContext.LOOP)
        if cursor.peek().type is not TokenType.IDENTIFIER:
            return self._report_error(
                "Expected iterator name (identifier) after 'for' keyword"
            )
        iterator_name = Identifier(cursor.advance().value)
        if not cursor.match(TokenType.KW_IN):
            return self._report_error("Expected 'in' after iterator name in for loop")
        iterable = self._parse_expr(0)
        return ForExpr(iterator_name, iterable, self._parse_body())

    def _parse_while(self) -> Expr:
        self._enter_context(ParsingContext.LOOP)
        condition = self._parse_expr(0)
        return WhileExpr(condition, self._parse_body())

    def _parse_function(self) -> Expr:
        cursor = self._cursor
        self._enter_context(ParsingContext.FUNCTION)
        if cursor.peek().type is not TokenType.IDENTIFIER:
            return self._report_error(
                "Expected function name (identifier) after 'function' keyword"
            )
        name = Identifier(cursor.advance().value)
        if not cursor.match(TokenType.DEL_LPAREN):
            return self._report_error("Expected '(' after function name")
        parameters = self._parse_arguments()
        return FunctionExpr(name, parameters, self._parse_body())

    # Entry point -----------------------------------------------------------

    def parse(self, tokens: Iterable[Token]) -> ParseResult:
        """Parse a token stream (a list, or a lexer) into a program."""
        self._cursor = _Cursor(list(tokens))
        self._error_reported = False

        program = Program()
        while not self._cursor.at_end():
            program.statements.append(self._parse_expr(0))

        if not program.statements:
            return ParseResult(None, False, "Failed to parse program")
        return ParseResult(program, not self._error_reported, None)