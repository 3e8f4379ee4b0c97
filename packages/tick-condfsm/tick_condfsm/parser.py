"""Recursive-descent parser for guard expressions.

Grammar::

    primary := CONDITION
             | '(' expr
             | '!' primary
    expr    := primary [ ('&' | '|') expr ]

AND and OR share one binding level and an operator takes everything after
it as its right operand, so ``A & B | C`` is ``AND(A, OR(B, C))``.

A parenthesized ``expr`` stops at the first token that is not an operator;
that token is skipped unchecked and is normally the closing ``)``.
Parentheses are never matched, so an unbalanced guard still parses, and
tokens left over after the top-level ``expr`` are ignored.

Every parse function takes the token position and returns the position
after what it consumed; there is no cursor shared between calls.
"""
from __future__ import annotations

from typing import Sequence

from tick_condfsm.conditions import ConditionTable
from tick_condfsm.expressions import AndExpr, ConditionExpr, Expr, NotExpr, OrExpr
from tick_condfsm.lexer import tokenize
from tick_condfsm.types import ParseError, Token, TokenType

_BINARY = (TokenType.AND, TokenType.OR)

# Deepest run of nested '(' and '!' accepted in one guard.
MAX_NESTING = 200


def parse(tokens: Sequence[Token], pool: list[Expr] | None = None) -> Expr | None:
    """Build the guard tree for ``tokens``.

    Returns None for an empty token sequence. On success every node created
    is appended to ``pool``; on failure ``pool`` is left untouched.

    Raises:
        ParseError: If a condition, ``(`` or ``!`` is expected where the
            tokens run out or hold an operator or ``)``, or when '(' and
            '!' nest deeper than ``MAX_NESTING``.
    """
    if not tokens:
        return None
    created: list[Expr] = []
    root, _ = _parse_expr(tokens, 0, created)
    if pool is not None:
        pool.extend(created)
    return root


def compile_guard(
    text: str, conditions: ConditionTable, pool: list[Expr] | None = None,
) -> Expr | None:
    """Tokenize and parse a guard string in one step."""
    return parse(tokenize(text, conditions), pool)


def _parse_expr(
    tokens: Sequence[Token], pos: int, created: list[Expr], depth: int = 0,
) -> tuple[Expr, int]:
    # Collect the operand/operator chain, then fold it from the right.
    operands: list[Expr] = []
    operators: list[TokenType] = []
    node, pos = _parse_primary(tokens, pos, created, depth)
    operands.append(node)
    while pos < len(tokens) and tokens[pos].type in _BINARY:
        operators.append(tokens[pos].type)
        node, pos = _parse_primary(tokens, pos + 1, created, depth)
        operands.append(node)

    node = operands.pop()
    while operators:
        op = operators.pop()
        left = operands.pop()
        node = AndExpr(left, node) if op is TokenType.AND else OrExpr(left, node)
        created.append(node)
    return node, pos


def _parse_primary(
    tokens: Sequence[Token], pos: int, created: list[Expr], depth: int = 0,
) -> tuple[Expr, int]:
    if pos >= len(tokens):
        last = tokens[-1]
        raise ParseError(
            last.position + len(last.text),
            "Guard ends where a condition, '(' or '!' is expected",
        )

    token = tokens[pos]
    if token.type in (TokenType.OPEN, TokenType.NOT) and depth >= MAX_NESTING:
        raise ParseError(
            token.position,
            f"Guard nests deeper than {MAX_NESTING} levels at column {token.position}",
        )
    if token.type is TokenType.CONDITION:
        node: Expr = ConditionExpr(token.index)
        created.append(node)
        return node, pos + 1
    if token.type is TokenType.OPEN:
        node, pos = _parse_expr(tokens, pos + 1, created, depth + 1)
        if pos < len(tokens):
            pos += 1
        return node, pos
    if token.type is TokenType.NOT:
        child, pos = _parse_primary(tokens, pos + 1, created, depth + 1)
        node = NotExpr(child)
        created.append(node)
        return node, pos
    raise ParseError(
        token.position,
        f"Unexpected {token.text!r} at column {token.position}; "
        "expected a condition, '(' or '!'",
    )
