"""tick-condfsm - State machines with condition-expression guards for the tick engine."""
from __future__ import annotations

from tick_condfsm.conditions import Condition, ConditionTable
from tick_condfsm.config import MachineConfig
from tick_condfsm.expressions import (
    AndExpr,
    ConditionExpr,
    Expr,
    NotExpr,
    OrExpr,
    TrueExpr,
    evaluate,
    render,
)
from tick_condfsm.lexer import tokenize
from tick_condfsm.machine import ANY_STATE, Machine
from tick_condfsm.parser import compile_guard, parse
from tick_condfsm.state import State, Transition
from tick_condfsm.systems import make_machine_system
from tick_condfsm.types import (
    LexError,
    LifecycleError,
    MachineError,
    ParseError,
    Phase,
    Token,
    TokenType,
    UnknownNameError,
)

__all__ = [
    "ANY_STATE",
    "AndExpr",
    "Condition",
    "ConditionExpr",
    "ConditionTable",
    "Expr",
    "LexError",
    "LifecycleError",
    "Machine",
    "MachineConfig",
    "MachineError",
    "NotExpr",
    "OrExpr",
    "ParseError",
    "Phase",
    "State",
    "Token",
    "TokenType",
    "Transition",
    "TrueExpr",
    "UnknownNameError",
    "compile_guard",
    "evaluate",
    "make_machine_system",
    "parse",
    "render",
    "tokenize",
]
