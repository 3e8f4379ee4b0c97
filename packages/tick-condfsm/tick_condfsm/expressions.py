"""Guard expression nodes and their evaluator."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tick_condfsm.conditions import ConditionTable


@dataclass(frozen=True)
class TrueExpr:
    """Always true. Guard of unconditional transitions."""


@dataclass(frozen=True)
class NotExpr:
    child: Expr


@dataclass(frozen=True)
class ConditionExpr:
    """True while the referenced condition is set or pulsed."""

    index: int


@dataclass(frozen=True)
class AndExpr:
    left: Expr
    right: Expr


@dataclass(frozen=True)
class OrExpr:
    left: Expr
    right: Expr


Expr = TrueExpr | NotExpr | ConditionExpr | AndExpr | OrExpr


def evaluate(node: Expr, conditions: ConditionTable) -> bool:
    """Evaluate a guard tree against the current condition values.

    Right operands and negations are followed in a loop, so the long
    right-nested chains the parser builds do not grow the stack.
    """
    negate = False
    while True:
        if isinstance(node, ConditionExpr):
            return conditions.is_true(node.index) is not negate
        if isinstance(node, AndExpr):
            if not evaluate(node.left, conditions):
                return negate
            node = node.right
        elif isinstance(node, OrExpr):
            if evaluate(node.left, conditions):
                return not negate
            node = node.right
        elif isinstance(node, NotExpr):
            negate = not negate
            node = node.child
        elif isinstance(node, TrueExpr):
            return not negate
        else:
            raise TypeError(f"Not a guard expression: {node!r}")


def render(node: Expr, conditions: ConditionTable) -> str:
    """Fully parenthesized text of a guard tree, e.g. ``(A & (B | C))``."""
    parts: list[str] = []
    closers = 0
    while True:
        if isinstance(node, ConditionExpr):
            parts.append(conditions[node.index].name)
            break
        if isinstance(node, AndExpr):
            parts.append(f"({render(node.left, conditions)} & ")
            closers += 1
            node = node.right
        elif isinstance(node, OrExpr):
            parts.append(f"({render(node.left, conditions)} | ")
            closers += 1
            node = node.right
        elif isinstance(node, NotExpr):
            parts.append("!")
            node = node.child
        elif isinstance(node, TrueExpr):
            parts.append("true")
            break
        else:
            raise TypeError(f"Not a guard expression: {node!r}")
    return "".join(parts) + ")" * closers
