"""Door -- a condition-guarded state machine driven frame by frame.

Demonstrates:
- Defining states with enter/exit/tick callbacks
- Guards combining conditions with '&', '|', '!' and parentheses
- A decision state that routes without costing a frame
- Pulsed (one-shot) versus set (persistent) conditions
- Driving the machine with a (world, ctx) system

Run: python -m examples.door
"""

import logging
from dataclasses import dataclass

from tick_condfsm import Machine, MachineConfig, make_machine_system


@dataclass(frozen=True)
class Frame:
    tick_number: int
    dt: float


def build_door() -> Machine:
    door = Machine(MachineConfig(name="door"))

    door.add_state("closed", enter=lambda: print("    [door] closed"))
    door.add_state("check").mark_decision()
    door.add_state("opening", tick=lambda dt: print(f"    [door] opening... +{dt:.2f}s"))
    door.add_state("open", enter=lambda: print("    [door] open"))
    door.add_state("buzz", enter=lambda: print("    [door] bzzzt, locked"))

    # Pressing the button asks the decision state what to do.
    door.add_transition("closed", "check", "Button")
    door.add_transition("check", "buzz", "Locked & !(Key | Override)")
    door.add_transition("check", "opening")
    door.add_transition("opening", "open", "FullyOpen")
    door.add_transition("open", "closed", "Timeout")
    door.add_transition("buzz", "closed")
    return door


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    print("=== Door ===\n")

    door = build_door()
    system = make_machine_system(door)
    door.set_condition("Locked", True)

    script = {
        1: lambda: door.pulse_condition("Button"),
        3: lambda: door.set_condition("Key", True),
        4: lambda: door.pulse_condition("Button"),
        6: lambda: door.pulse_condition("FullyOpen"),
        8: lambda: door.pulse_condition("Timeout"),
    }

    for n in range(10):
        print(f"  frame {n}  state={door.current.name if door.current else None}")
        action = script.get(n)
        if action is not None:
            action()
        system(None, Frame(tick_number=n, dt=0.1))

    door.end()
    print("\nDone.")


if __name__ == "__main__":
    main()
