"""Condition table - named flags with persistent and one-shot truth."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from tick_condfsm.types import UnknownNameError


@dataclass(slots=True)
class Condition:
    """A named flag. True for guards while ``set`` or ``pulse`` is True."""

    name: str
    set: bool = False
    pulse: bool = False

    @property
    def active(self) -> bool:
        return self.set or self.pulse


class ConditionTable:
    """Interns condition names to stable indices.

    Indices are handed out in first-seen order and never reused; guards
    reference conditions by index.
    """

    def __init__(self) -> None:
        self._conditions: list[Condition] = []
        self._index: dict[str, int] = {}

    def intern(self, name: str) -> int:
        """Return the index for ``name``, creating the condition on first sight."""
        idx = self._index.get(name)
        if idx is None:
            idx = len(self._conditions)
            self._conditions.append(Condition(name))
            self._index[name] = idx
        return idx

    def index(self, name: str) -> int:
        """Index of an interned name. Raises UnknownNameError otherwise."""
        try:
            return self._index[name]
        except KeyError:
            raise UnknownNameError("condition", name) from None

    def get(self, name: str) -> Condition:
        return self._conditions[self.index(name)]

    def is_true(self, index: int) -> bool:
        return self._conditions[index].active

    def set(self, name: str, value: bool) -> None:
        self.get(name).set = value

    def pulse(self, name: str) -> None:
        self.get(name).pulse = True

    def clear_pulses(self) -> None:
        for cond in self._conditions:
            cond.pulse = False

    def clear_all(self) -> None:
        """Reset both the persistent and the one-shot value of every condition."""
        for cond in self._conditions:
            cond.pulse = False
            cond.set = False

    def names(self) -> list[str]:
        return [cond.name for cond in self._conditions]

    def __getitem__(self, index: int) -> Condition:
        return self._conditions[index]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __iter__(self) -> Iterator[Condition]:
        return iter(self._conditions)

    def __len__(self) -> int:
        return len(self._conditions)
