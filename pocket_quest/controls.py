from enum import Enum
from typing import Dict, Hashable, Iterable, Optional, Set


class Control(Enum):
    LEFT = "left"
    RIGHT = "right"
    UP = "up"
    DOWN = "down"
    INTERACT = "interact"
    ATTACK_1 = "attack_1"
    ATTACK_2 = "attack_2"
    HEAL = "heal"
    RUN = "run"


# Held directions resolve in this order; diagonals are never produced.
DIRECTION_PRIORITY = (
    (Control.LEFT, (-1, 0)),
    (Control.RIGHT, (1, 0)),
    (Control.UP, (0, -1)),
    (Control.DOWN, (0, 1)),
)

BATTLE_CONTROLS = (Control.ATTACK_1, Control.ATTACK_2, Control.HEAL, Control.RUN)


class InputState:
    """Held keys plus the presses seen since the last tick.

    Raw key codes are translated through `bindings`; codes that are not bound
    to a control are ignored.
    """

    def __init__(self, bindings: Optional[Dict[Hashable, Control]] = None):
        self.bindings: Dict[Hashable, Control] = dict(bindings or {})
        self._held_keys: Set[Hashable] = set()
        self._held: Dict[Control, int] = {}
        self._pressed: Set[Control] = set()

    # Raw key events -------------------------------------------------------

    def key_down(self, key: Hashable) -> None:
        control = self.bindings.get(key)
        if control is None or key in self._held_keys:
            return
        self._held_keys.add(key)
        self.press(control)

    def key_up(self, key: Hashable) -> None:
        control = self.bindings.get(key)
        if control is None or key not in self._held_keys:
            return
        self._held_keys.discard(key)
        self.release(control)

    # Logical controls ------------------------------------------------------

    def press(self, control: Control) -> None:
        # Several keys can map to one control (arrows and WASD), so count holders.
        self._held[control] = self._held.get(control, 0) + 1
        self._pressed.add(control)

    def release(self, control: Control) -> None:
        count = self._held.get(control, 0) - 1
        if count > 0:
            self._held[control] = count
        else:
            self._held.pop(control, None)

    def is_held(self, control: Control) -> bool:
        return control in self._held

    def was_pressed(self, control: Control) -> bool:
        return control in self._pressed

    def first_pressed(self, controls: Iterable[Control]) -> Optional[Control]:
        for control in controls:
            if control in self._pressed:
                return control
        return None

    def held_direction(self) -> tuple[int, int]:
        for control, delta in DIRECTION_PRIORITY:
            if self.is_held(control):
                return delta
        return 0, 0

    def end_tick(self) -> None:
        """Forget this tick's presses; held keys stay held."""
        self._pressed.clear()

    def clear(self) -> None:
        self._held_keys.clear()
        self._held.clear()
        self._pressed.clear()
