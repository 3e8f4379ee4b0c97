"""System factory that drives a Machine from a tick loop."""
from __future__ import annotations

from typing import Any, Callable, Protocol

from tick_condfsm.machine import Machine
from tick_condfsm.types import Phase


class FrameContext(Protocol):
    """Anything carrying the frame's delta time, e.g. a tick ``TickContext``."""

    @property
    def dt(self) -> float: ...


def make_machine_system(machine: Machine) -> Callable[[Any, FrameContext], None]:
    """Return a ``(world, ctx)`` system that advances ``machine`` each tick.

    The first call begins the machine if it has not been started. Every call
    then runs ``evaluate()`` followed by ``tick(ctx.dt)``. ``world`` is not
    used.
    """

    def machine_system(world: Any, ctx: FrameContext) -> None:
        if machine.phase is Phase.UNSTARTED:
            machine.begin()
        machine.evaluate()
        machine.tick(ctx.dt)

    return machine_system
