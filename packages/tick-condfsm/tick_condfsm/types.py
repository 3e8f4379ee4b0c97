"""Shared token types, lifecycle phases, and errors for tick-condfsm."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Lexical token kinds of the guard language."""

    CONDITION = "condition"
    AND = "&"
    OR = "|"
    OPEN = "("
    CLOSE = ")"
    NOT = "!"


@dataclass(frozen=True, slots=True)
class Token:
    type: TokenType
    text: str
    position: int
    index: int = -1


class Phase(Enum):
    """Lifecycle of a Machine: UNSTARTED -> RUNNING -> ENDED."""

    UNSTARTED = "unstarted"
    RUNNING = "running"
    ENDED = "ended"


class MachineError(Exception):
    """Base class for all tick-condfsm errors."""


class LexError(MachineError, ValueError):
    """Raised on a character the guard language does not recognize."""

    def __init__(self, text: str, position: int) -> None:
        self.text = text
        self.position = position
        self.char = text[position]
        super().__init__(
            f"Unexpected character {self.char!r} at column {position} in guard {text!r}"
        )


class ParseError(MachineError, ValueError):
    """Raised when a token sequence does not form a guard expression."""

    def __init__(self, position: int, message: str) -> None:
        self.position = position
        super().__init__(message)


class UnknownNameError(MachineError, KeyError):
    """Raised when a state or condition name was never registered."""

    def __init__(self, kind: str, name: str) -> None:
        self.kind = kind
        self.name = name
        super().__init__(f"Unknown {kind} {name!r}")

    def __str__(self) -> str:
        return str(self.args[0])


class LifecycleError(MachineError, RuntimeError):
    """Raised when an operation is called in the wrong lifecycle phase."""
