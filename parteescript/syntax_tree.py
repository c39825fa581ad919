"""Syntax tree nodes, operator binding powers and a coloured tree printer."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import TextIO

from parteescript.lexer import TokenType, token_type_name

__all__ = [
    "Node",
    "Expr",
    "Program",
    "ErrorExpr",
    "NumberLiteral",
    "StringLiteral",
    "BooleanLiteral",
    "Identifier",
    "ArrayLiteral",
    "EventLiteral",
    "UnaryExpr",
    "BinaryExpr",
    "BodyExpr",
    "UseExpr",
    "OnExpr",
    "ReturnExpr",
    "ContinueExpr",
    "BreakExpr",
    "CaseExpr",
    "DefaultExpr",
    "SwitchExpr",
    "IfExpr",
    "WhileExpr",
    "ForExpr",
    "FunctionExpr",
    "CallExpr",
    "IndexExpr",
    "infix_binding_power",
    "format_ast",
    "print_ast",
]

RESET = "\033[0m"
RED = "\033[91m"
GREEN = "\033[92m"
YELLOW = "\033[93m"
PURPLE = "\033[94m"
MAGENTA = "\033[95m"
BLUE = "\033[96m"
GREY = "\033[37m"


class Node:
    """Base of every syntax tree node."""


class Expr(Node):
    """Base of every expression or statement node."""


@dataclass
class Program(Node):
    """Top-level node holding the parsed statements in order."""

    statements: list[Expr | None] = field(default_factory=list)


@dataclass
class ErrorExpr(Expr):
    """Placeholder for a piece of source that failed to parse."""

    message: str
    row: int = -1
    column: int = -1


@dataclass
class NumberLiteral(Expr):
    """Numeric constant, kept as its original lexeme."""

    value: str


@dataclass
class StringLiteral(Expr):
    value: str


@dataclass
class BooleanLiteral(Expr):
    value: bool


@dataclass
class Identifier(Expr):
    """Reference to a named variable, function or module."""

    name: str


@dataclass
class ArrayLiteral(Expr):
    elements: list[Expr] = field(default_factory=list)


@dataclass
class EventLiteral(Expr):
    event_name: Expr | None = None
    parameters: list[Expr] = field(default_factory=list)


@dataclass
class UnaryExpr(Expr):
    operator: TokenType
    operand: Expr | None = None


@dataclass
class BinaryExpr(Expr):
    """Infix operator applied to two operands."""

    operator: TokenType
    left: Expr | None = None
    right: Expr | None = None


@dataclass
class BodyExpr(Expr):
    statements: list[Expr] = field(default_factory=list)


@dataclass
class UseExpr(Expr):
    module_name: Expr | None = None


@dataclass
class OnExpr(Expr):
    event_literal: Expr | None = None
    body: Expr | None = None


@dataclass
class ReturnExpr(Expr):
    value: Expr | None = None


@dataclass
class ContinueExpr(Expr):
    pass


@dataclass
class BreakExpr(Expr):
    pass


@dataclass
class CaseExpr(Expr):
    case_value: Expr | None = None
    body: Expr | None = None


@dataclass
class DefaultExpr(Expr):
    body: Expr | None = None


@dataclass
class SwitchExpr(Expr):
    expression: Expr | None = None
    cases: list[CaseExpr] = field(default_factory=list)
    default_case: DefaultExpr | None = None


@dataclass
class IfExpr(Expr):
    condition: Expr | None = None
    then_branch: Expr | None = None
    else_branch: Expr | None = None


@dataclass
class WhileExpr(Expr):
    condition: Expr | None = None
    body: Expr | None = None


@dataclass
class ForExpr(Expr):
    iterator_name: Expr | None = None
    iterable: Expr | None = None
    body: Expr | None = None


@dataclass
class FunctionExpr(Expr):
    name: Expr | None = None
    parameters: list[Expr] = field(default_factory=list)
    body: Expr | None = None


@dataclass
class CallExpr(Expr):
    callee: Expr | None = None
    arguments: list[Expr] = field(default_factory=list)


@dataclass
class IndexExpr(Expr):
    base: Expr | None = None
    index: Expr | None = None


_BINDING_POWERS: dict[TokenType, tuple[int, int]] = {
    TokenType.OP_DOT: (260, 270),
    TokenType.OP_POWER: (160, 170),
    TokenType.KW_NOT: (150, 0),
    TokenType.OP_BITWISE_NOT: (150, 0),
    TokenType.OP_STAR: (140, 150),
    TokenType.OP_SLASH: (140, 150),
    TokenType.OP_PERCENT: (140, 150),
    TokenType.OP_PLUS: (120, 130),
    TokenType.OP_MINUS: (120, 130),
    TokenType.OP_LEFT_SHIFT: (110, 120),
    TokenType.OP_RIGHT_SHIFT: (110, 120),
    TokenType.OP_LESS: (100, 110),
    TokenType.OP_LESS_EQUAL: (100, 110),
    TokenType.OP_GREATER: (100, 110),
    TokenType.OP_GREATER_EQUAL: (100, 110),
    TokenType.OP_EQUAL: (100, 110),
    TokenType.OP_NOT_EQUAL: (100, 110),
    TokenType.OP_BITWISE_AND: (90, 100),
    TokenType.OP_BITWISE_XOR: (80, 90),
    TokenType.OP_BITWISE_OR: (70, 80),
    TokenType.KW_AND: (60, 70),
    TokenType.KW_OR: (50, 60),
    TokenType.OP_ASSIGN: (40, 41),
    TokenType.OP_PLUS_ASSIGN: (40, 41),
    TokenType.OP_MINUS_ASSIGN: (40, 41),
    TokenType.OP_PERCENT_ASSIGN: (40, 41),
}


def infix_binding_power(token_type: TokenType) -> tuple[int, int]:
    """Return (left, right) binding powers of an infix operator; (0, 0) if it is none."""
    return _BINDING_POWERS.get(token_type, (0, 0))


def _render_list(items: list, indent: int, pad: str, empty: str, out: list[str]) -> None:
    if items:
        for item in items:
            _render(item, indent + 2, out)
    else:
        out.append(f"{GREY}{pad} {empty}{RESET}\n")


def _render(node: Node | None, indent: int, out: list[str]) -> None:
    if node is None:
        return
    pad = " " * indent
    child = indent + 2

    match node:
        case Program(statements=statements):
            out.append(f"{PURPLE}{pad}Program:{RESET}\n")
            for statement in statements:
                _render(statement, indent, out)
        case ErrorExpr(message=message, row=row, column=column):
            out.append(f"{RED}{pad}ErrorExpr: {GREY}{message}")
            if row >= 0 and column >= 0:
                out.append(f" (at {row}:{column})")
            out.append(f"{RESET}\n")
        case NumberLiteral(value=value):
            out.append(f"{BLUE}{pad}NumberLiteral: {GREY}{value}\n")
        case Identifier(name=name):
            out.append(f"{YELLOW}{pad}IdentifierExpr: {GREY}{name}\n")
        case UnaryExpr(operator=operator, operand=operand):
            out.append(f"{MAGENTA}{pad}UnaryExpr: {GREY}{token_type_name(operator)}\n")
            out.append(f"{BLUE}{pad} Operand:\n")
            _render(operand, child, out)
        case BinaryExpr(operator=operator, left=left, right=right):
            out.append(f"{MAGENTA}{pad}BinaryExpr: {GREY}{token_type_name(operator)}\n")
            out.append(f"{BLUE}{pad} Left:\n")
            _render(left, child, out)
            out.append(f"{BLUE}{pad} Right:\n")
            _render(right, child, out)
        case CallExpr(callee=callee, arguments=arguments):
            out.append(f"{GREEN}{pad}CallExpr:{RESET}\n")
            out.append(f"{BLUE}{pad} Callee:\n")
            _render(callee, child, out)
            out.append(f"{BLUE}{pad} Arguments:\n")
            _render_list(arguments, indent, pad, "(none)", out)
        case IndexExpr(base=base, index=index):
            out.append(f"{PURPLE}{pad}IndexExpr:{RESET}\n")
            out.append(f"{BLUE}{pad} Base:\n")
            _render(base, child, out)
            out.append(f"{BLUE}{pad} Index:\n")
            _render(index, child, out)
        case ArrayLiteral(elements=elements):
            out.append(f"{BLUE}{pad}ArrayLiteral:{RESET}")
            if elements:
                out.append(f"\n{BLUE}{pad} Elements:\n")
                for element in elements:
                    _render(element, child, out)
            else:
                out.append(f"{GREY}{pad} (empty){RESET}\n")
        case EventLiteral(event_name=event_name, parameters=parameters):
            out.append(f"{MAGENTA}{pad}EventLiteral:{RESET}\n")
            out.append(f"{BLUE}{pad} Event Name:\n")
            _render(event_name, child, out)
            out.append(f"{BLUE}{pad} Parameters:\n")
            _render_list(parameters, indent, pad, "(none)", out)
        case BodyExpr(statements=statements):
            out.append(f"{GREEN}{pad}BodyExpr:{RESET}\n")
            _render_list(statements, indent, pad, "(empty)", out)
        case StringLiteral(value=value):
            out.append(f'{YELLOW}{pad}StringLiteral: {GREY}"{value}"{RESET}\n')
        case BooleanLiteral(value=value):
            text = "true" if value else "false"
            out.append(f"{YELLOW}{pad}BooleanLiteral: {RESET}{BLUE}{text}{RESET}\n")
        case UseExpr(module_name=module_name):
            out.append(f"{GREEN}{pad}UseExpr:{RESET}\n")
            out.append(f"{PURPLE}{pad} Module Name:{RESET}\n")
            _render(module_name, child, out)
        case OnExpr(event_literal=event_literal, body=body):
            out.append(f"{GREEN}{pad}OnExpr:{RESET}\n")
            out.append(f"{MAGENTA}{pad} Event:{RESET}\n")
            _render(event_literal, child, out)
            out.append(f"{MAGENTA}{pad} Body:{RESET}\n")
            _render(body, child, out)
        case ReturnExpr(value=value):
            out.append(f"{GREEN}{pad}ReturnExpr:{RESET}\n")
            if value is not None:
                out.append(f"{MAGENTA}{pad} Value:{RESET}\n")
                _render(value, child, out)
            else:
                out.append(f"{MAGENTA}{pad} (no value){RESET}\n")
        case ContinueExpr():
            out.append(f"{GREEN}{pad}ContinueExpr{RESET}\n")
        case BreakExpr():
            out.append(f"{GREEN}{pad}BreakExpr{RESET}\n")
        case IfExpr(condition=condition, then_branch=then_branch, else_branch=else_branch):
            out.append(f"{PURPLE}{pad}IfExpr:{RESET}\n")
            out.append(f"{BLUE}{pad} Condition:{RESET}\n")
            _render(condition, child, out)
            out.append(f"{MAGENTA}{pad} Then Branch:{RESET}\n")
            _render(then_branch, child, out)
            if else_branch is not None:
                out.append(f"{MAGENTA}{pad} Else Branch:{RESET}\n")
                _render(else_branch, child, out)
        case WhileExpr(condition=condition, body=body):
            out.append(f"{PURPLE}{pad}WhileExpr:{RESET}\n")
            out.append(f"{MAGENTA}{pad} Condition:{RESET}\n")
            _render(condition, child, out)
            out.append(f"{MAGENTA}{pad} Body:{RESET}\n")
            _render(body, child, out)
        case ForExpr(iterator_name=iterator_name, iterable=iterable, body=body):
            out.append(f"{PURPLE}{pad}ForExpr:{RESET}\n")
            out.append(f"{MAGENTA}{pad} Iterator Name:{RESET}\n")
            _render(iterator_name, child, out)
            out.append(f"{MAGENTA}{pad} Iterable:{RESET}\n")
            _render(iterable, child, out)
            out.append(f"{MAGENTA}{pad} Body:{RESET}\n")
            _render(body, child, out)
        case FunctionExpr(name=name, parameters=parameters, body=body):
            out.append(f"{GREEN}{pad}FunctionExpr:{RESET}\n")
            out.append(f"{MAGENTA}{pad} Name:{RESET}\n")
            _render(name, child, out)
            out.append(f"{MAGENTA}{pad} Parameters:{RESET}\n")
            _render_list(parameters, indent, pad, "(none)", out)
            out.append(f"{BLUE}{pad} Body:\n")
            _render(body, child, out)
        case _:
            out.append(f"{RED}{pad}Unknown ASTNode type\n")


def format_ast(node: Node | None, indent: int = 0) -> str:
    """Render a tree as coloured, indented text; an absent node renders as ''."""
    out: list[str] = []
    _render(node, indent, out)
    return "".join(out)


def print_ast(node: Node | None, indent: int = 0, file: TextIO | None = None) -> None:
    """Write the rendering of a tree to ``file`` (standard output by default)."""
    stream = file if file is not None else sys.stdout
    stream.write(format_ast(node, indent))