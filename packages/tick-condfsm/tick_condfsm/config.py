"""Machine configuration dataclass."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MachineConfig:
    """Immutable configuration for a Machine.

    Attributes:
        name: Label used in log messages.
        max_decision_depth: Upper bound on decision-state commits chased
            within a single ``evaluate()`` call.
        strict: Re-raise definition-time errors (bad guards, unknown names)
            instead of logging and dropping them.
    """

    name: str = "fsm"
    max_decision_depth: int = 10
    strict: bool = False

    def __post_init__(self) -> None:
        if self.max_decision_depth < 0:
            raise ValueError("max_decision_depth must be non-negative")
