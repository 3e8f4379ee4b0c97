"""Guard tokenizer."""
from __future__ import annotations

import re

from tick_condfsm.conditions import ConditionTable
from tick_condfsm.types import LexError, Token, TokenType

# Condition names: maximal runs of ASCII letters, digits and underscore.
_NAME_RE = re.compile(r"[A-Za-z0-9_]+")

_PUNCTUATION: dict[str, TokenType] = {
    "&": TokenType.AND,
    "|": TokenType.OR,
    "(": TokenType.OPEN,
    ")": TokenType.CLOSE,
    "!": TokenType.NOT,
}


def tokenize(text: str, conditions: ConditionTable) -> list[Token]:
    """Split a guard string into tokens.

    Every condition name is interned into ``conditions`` as it is scanned,
    so names seen before a failing character stay registered.

    Raises:
        LexError: On any character that is not whitespace, punctuation of the
            guard language, or part of a condition name.
    """
    tokens: list[Token] = []
    pos = 0
    end = len(text)
    while pos < end:
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue
        kind = _PUNCTUATION.get(ch)
        if kind is not None:
            tokens.append(Token(kind, ch, pos))
            pos += 1
            continue
        match = _NAME_RE.match(text, pos)
        if match is None:
            raise LexError(text, pos)
        name = match.group()
        tokens.append(
            Token(TokenType.CONDITION, name, pos, conditions.intern(name))
        )
        pos = match.end()
    return tokens
