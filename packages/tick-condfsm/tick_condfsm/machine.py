"""Machine - condition-guarded state machine driver."""
from __future__ import annotations

import logging
from typing import Callable

from tick_condfsm.conditions import ConditionTable
from tick_condfsm.config import MachineConfig
from tick_condfsm.expressions import Expr, TrueExpr, evaluate
from tick_condfsm.parser import compile_guard
from tick_condfsm.state import Action, State, TickAction, Transition
from tick_condfsm.types import (
    LexError,
    LifecycleError,
    ParseError,
    Phase,
    UnknownNameError,
)

logger = logging.getLogger(__name__)

# Source name for add_transition() that targets every state defined so far.
ANY_STATE = "*"

TransitionHook = Callable[["Machine", State, State], None]


class Machine:
    """Finite state machine whose transitions are guarded by boolean
    expressions over named conditions.

    Build it with ``add_state()`` and ``add_transition()``, then drive it
    once per frame with ``evaluate()`` and ``tick(dt)``. Conditions are
    changed between frames with ``set_condition()`` (persistent) or
    ``pulse_condition()`` (seen by one ``evaluate()`` call only).
    """

    def __init__(self, config: MachineConfig | None = None) -> None:
        self._config = config if config is not None else MachineConfig()
        self._conditions = ConditionTable()
        self._expressions: list[Expr] = []
        self._true: TrueExpr | None = None
        self._states: list[State] = []
        self._state_index: dict[str, int] = {}
        self._current: State | None = None
        self._previous: State | None = None
        self._next: State | None = None
        self._time_in_state: float = 0.0
        self._phase = Phase.UNSTARTED
        self._transition_hooks: list[TransitionHook] = []

    @property
    def config(self) -> MachineConfig:
        return self._config

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def current(self) -> State | None:
        return self._current

    @property
    def previous(self) -> State | None:
        """State left by the most recent transition."""
        return self._previous

    @property
    def next(self) -> State | None:
        """Target of the most recent transition."""
        return self._next

    @property
    def time_in_state(self) -> float:
        return self._time_in_state

    @property
    def states(self) -> tuple[State, ...]:
        return tuple(self._states)

    @property
    def conditions(self) -> ConditionTable:
        return self._conditions

    @property
    def expressions(self) -> tuple[Expr, ...]:
        return tuple(self._expressions)

    # -- Definition --

    def add_state(
        self,
        name: str,
        *,
        enter: Action | None = None,
        exit: Action | None = None,
        tick: TickAction | None = None,
        draw: Action | None = None,
        decision: bool = False,
    ) -> State:
        """Register a state. The first state added is the initial state."""
        if self._phase is not Phase.UNSTARTED:
            raise LifecycleError(f"Cannot add state {name!r} after begin()")
        if name == ANY_STATE:
            raise ValueError(f"{ANY_STATE!r} is reserved and cannot name a state")
        if name in self._state_index:
            raise ValueError(f"Duplicate state {name!r}")
        state = State(
            name, enter=enter, exit=exit, tick=tick, draw=draw, decision=decision,
        )
        self._state_index[name] = len(self._states)
        self._states.append(state)
        if self._current is None:
            self._current = state
        return state

    def add_transition(
        self, from_name: str, to_name: str, guard: str = "",
    ) -> Expr | None:
        """Append a guarded transition and return its compiled guard.

        An empty guard makes the transition unconditional. With
        ``from_name == ANY_STATE`` the transition is appended to every state
        defined so far. Unknown state names and malformed guards drop the
        transition and return None, or raise when the machine is strict.
        """
        try:
            target = self._index_of(to_name)
            if from_name == ANY_STATE:
                sources = list(self._states)
            else:
                sources = [self._states[self._index_of(from_name)]]
            expr = self._compile(guard)
        except (UnknownNameError, LexError, ParseError) as exc:
            if self._config.strict:
                raise
            logger.warning(
                "%s: dropped transition %s -> %s: %s",
                self._config.name, from_name, to_name, exc,
            )
            return None

        for state in sources:
            state._add_transition(Transition(expr, target))
        logger.debug(
            "%s: transition %s -> %s on %r added to %d state(s)",
            self._config.name, from_name, to_name, guard, len(sources),
        )
        return expr

    def state(self, name: str) -> State:
        """Look up a state by name. Raises UnknownNameError."""
        return self._states[self._index_of(name)]

    def on_transition(self, hook: TransitionHook) -> None:
        """Call ``hook(machine, old, new)`` after every committed transition."""
        self._transition_hooks.append(hook)

    def off_transition(self, hook: TransitionHook) -> None:
        try:
            self._transition_hooks.remove(hook)
        except ValueError:
            pass

    # -- Conditions --

    def set_condition(self, name: str, value: bool) -> None:
        try:
            self._conditions.set(name, value)
        except UnknownNameError:
            if self._config.strict:
                raise
            self._log_ignored(name)

    def pulse_condition(self, name: str) -> None:
        """Make ``name`` true for the next ``evaluate()`` call only."""
        try:
            self._conditions.pulse(name)
        except UnknownNameError:
            if self._config.strict:
                raise
            self._log_ignored(name)

    def clear_all_conditions(self) -> None:
        self._conditions.clear_all()

    def condition(self, name: str) -> bool:
        """Current guard truth of ``name``. Raises UnknownNameError."""
        return self._conditions.get(name).active

    # -- Runtime --

    def begin(self) -> None:
        """Enter the first defined state and start running.

        Calling it on a running machine restarts it, exiting the current
        state first.
        """
        if not self._states:
            raise LifecycleError("Cannot begin a machine with no states")
        if self._phase is Phase.RUNNING and self._current is not None:
            self._current._on_exit()
        self._current = self._states[0]
        self._previous = None
        self._next = None
        self._time_in_state = 0.0
        self._phase = Phase.RUNNING
        self._current._on_enter()

    def end(self) -> None:
        """Exit the current state. Calling it again re-runs the exit callback."""
        current = self._require_current("end")
        self._phase = Phase.ENDED
        current._on_exit()

    def tick(self, dt: float) -> None:
        current = self._require_current("tick")
        current._on_tick(dt)
        self._time_in_state += dt

    def draw(self) -> None:
        self._require_current("draw")._on_draw()

    def evaluate(self) -> bool:
        """Resolve transitions for this frame.

        Decision-state targets are committed and re-evaluated immediately, up
        to ``config.max_decision_depth`` times. Pulses are then cleared once,
        and any candidate still pending is committed. Returns True if at
        least one transition was committed.
        """
        current = self._require_current("evaluate")
        committed = False
        depth = 0
        target = self._find_candidate(current)
        while (
            target is not None
            and self._states[target].decision
            and depth < self._config.max_decision_depth
        ):
            current = self._commit(current, target)
            committed = True
            depth += 1
            target = self._find_candidate(current)

        self._conditions.clear_pulses()

        if target is not None:
            self._commit(current, target)
            committed = True
        return committed

    # -- Internal --

    def _index_of(self, name: str) -> int:
        try:
            return self._state_index[name]
        except KeyError:
            raise UnknownNameError("state", name) from None

    def _compile(self, guard: str) -> Expr:
        root = compile_guard(guard, self._conditions, self._expressions)
        if root is not None:
            return root
        if self._true is None:
            self._true = TrueExpr()
            self._expressions.append(self._true)
        return self._true

    def _log_ignored(self, name: str) -> None:
        logger.debug(
            "%s: ignoring update of unknown condition %r", self._config.name, name,
        )

    def _require_current(self, op: str) -> State:
        if self._phase is Phase.UNSTARTED or self._current is None:
            raise LifecycleError(f"{op}() called before begin()")
        return self._current

    def _find_candidate(self, state: State) -> int | None:
        for transition in state._transitions:
            if evaluate(transition.guard, self._conditions):
                return transition.target
        return None

    def _commit(self, old: State, target: int) -> State:
        new = self._states[target]
        self._previous = old
        self._next = new
        old._on_exit()
        self._current = new
        new._on_enter()
        self._time_in_state = 0.0
        logger.debug(
            "%s: transition - %s->%s", self._config.name, old.name, new.name,
        )
        for hook in list(self._transition_hooks):
            hook(self, old, new)
        return new
