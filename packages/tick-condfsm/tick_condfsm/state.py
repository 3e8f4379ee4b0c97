"""State and Transition definitions."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from tick_condfsm.expressions import Expr

Action = Callable[[], None]
TickAction = Callable[[float], None]


@dataclass(frozen=True)
class Transition:
    """Guarded edge to the state at index ``target`` in the machine."""

    guard: Expr
    target: int


class State:
    """A named state with ordered transitions and optional callbacks.

    ``decision`` states are routing nodes: ``Machine.evaluate()`` passes
    straight through them within the same call instead of waiting a tick.
    """

    def __init__(
        self,
        name: str,
        *,
        enter: Action | None = None,
        exit: Action | None = None,
        tick: TickAction | None = None,
        draw: Action | None = None,
        decision: bool = False,
    ) -> None:
        self._name = name
        self._transitions: list[Transition] = []
        self._enter = enter
        self._exit = exit
        self._tick = tick
        self._draw = draw
        self._decision = decision

    def __repr__(self) -> str:
        return f"State({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def transitions(self) -> tuple[Transition, ...]:
        return tuple(self._transitions)

    @property
    def decision(self) -> bool:
        return self._decision

    def set_enter(self, fn: Action | None) -> State:
        self._enter = fn
        return self

    def set_exit(self, fn: Action | None) -> State:
        self._exit = fn
        return self

    def set_tick(self, fn: TickAction | None) -> State:
        self._tick = fn
        return self

    def set_draw(self, fn: Action | None) -> State:
        self._draw = fn
        return self

    def mark_decision(self) -> State:
        """Flag this state as a decision state."""
        self._decision = True
        return self

    # -- Called by Machine --

    def _add_transition(self, transition: Transition) -> None:
        self._transitions.append(transition)

    def _on_enter(self) -> None:
        if self._enter is not None:
            self._enter()

    def _on_exit(self) -> None:
        if self._exit is not None:
            self._exit()

    def _on_tick(self, dt: float) -> None:
        if self._tick is not None:
            self._tick(dt)

    def _on_draw(self) -> None:
        if self._draw is not None:
            self._draw()
