"""Keyboard, mouse and gamepad input with per-frame edge detection.

The handler keeps the state of every key, mouse button and gamepad.  Backends
feed it raw events through :meth:`Input.set_keys`,
:meth:`Input.set_mouse_buttons`, :meth:`Input.set_gamepad_button` and
:meth:`Input.set_gamepad_axis`.  :meth:`Input.update` closes a frame, so that
"pressed" and "released" mean a change since the previous frame.

Keys and gamepad buttons are identified by name (``"a"``, ``"left"``,
``"space"``, ``"south"``, ``"dpad_left"`` and so on); gamepad axes are
``"left_x"``, ``"left_y"``, ``"right_x"``, ``"right_y"``, ``"left_trigger"``
and ``"right_trigger"``.
"""

from __future__ import annotations

import enum
from collections.abc import Hashable, Iterable
from dataclasses import dataclass, field
from typing import Optional

DEADZONE = 8000
JOYSTICK_COOLDOWN = 0.10
AXIS_MIN = -32768
AXIS_MAX = 32767
_AXIS_SCALE = 32768.0


class InputType(enum.Enum):
    """The kind of device an :class:`InputDevice` reads from."""

    GAMEPAD = enum.auto()
    MOUSE_KB = enum.auto()


class Buttons(enum.Enum):
    """Logical game buttons, mapped onto physical keys and gamepad buttons."""

    LEFT = enum.auto()
    RIGHT = enum.auto()
    UP = enum.auto()
    DOWN = enum.auto()
    ACCEPT = enum.auto()
    BACK = enum.auto()
    SHOOT = enum.auto()
    SWITCH_NEXT = enum.auto()
    SWITCH_PREV = enum.auto()
    RUN = enum.auto()


class Action(enum.Enum):
    """Whether a button is checked for being held or newly pressed."""

    HELD = enum.auto()
    PRESSED = enum.auto()


class MouseButton(enum.IntEnum):
    """Mouse buttons, numbered from 1 as in their bit mask."""

    LEFT = 1
    MIDDLE = 2
    RIGHT = 3
    X1 = 4
    X2 = 5

    @property
    def mask(self) -> int:
        return 1 << (self.value - 1)


_KEYBOARD_MAPPING: dict[Buttons, tuple[Hashable, ...]] = {
    Buttons.LEFT: ("a", "left"),
    Buttons.RIGHT: ("d", "right"),
    Buttons.UP: ("w", "up"),
    Buttons.DOWN: ("s", "down"),
    Buttons.ACCEPT: ("space", "keypad_enter", "return"),
    Buttons.BACK: ("escape", "backspace"),
    Buttons.SWITCH_NEXT: ("tab",),
    Buttons.SWITCH_PREV: ("grave",),
    Buttons.RUN: ("left_shift",),
    Buttons.SHOOT: ("left_shift",),
}

_GAMEPAD_MAPPING: dict[Buttons, tuple[Hashable, ...]] = {
    Buttons.ACCEPT: ("south",),
    Buttons.BACK: ("east",),
    Buttons.LEFT: ("dpad_left",),
    Buttons.RIGHT: ("dpad_right",),
    Buttons.UP: ("dpad_up",),
    Buttons.DOWN: ("dpad_down",),
    Buttons.SWITCH_NEXT: ("right_shoulder",),
    Buttons.SWITCH_PREV: ("left_shoulder",),
    Buttons.RUN: ("right_trigger",),
}

# Stick directions: the axis and the sign that counts as the direction.
_STICK_DIRECTIONS: dict[Buttons, tuple[str, int]] = {
    Buttons.LEFT: ("left_x", -1),
    Buttons.RIGHT: ("left_x", 1),
    Buttons.UP: ("left_y", -1),
    Buttons.DOWN: ("left_y", 1),
}


class InputDevice:
    """One player's input source: the keyboard and mouse, or a gamepad."""

    def __init__(
        self,
        handler: "Input",
        input_type: InputType,
        gamepad_id: int = -1,
    ) -> None:
        self._handler = handler
        self.input_type = input_type
        self.gamepad_id = gamepad_id
        self.keyboard_mapping = {b: list(k) for b, k in _KEYBOARD_MAPPING.items()}
        self.gamepad_mapping = {b: list(k) for b, k in _GAMEPAD_MAPPING.items()}
        self.joystick_cooldown = JOYSTICK_COOLDOWN
        self._pressed_timings = {button: 0.0 for button in _STICK_DIRECTIONS}

    def __repr__(self) -> str:
        return f"InputDevice({self.input_type.name}, gamepad_id={self.gamepad_id})"

    def update_timings(self, frame_time: float) -> None:
        """Run down the stick repeat cooldowns by *frame_time* seconds."""
        for button, timing in self._pressed_timings.items():
            self._pressed_timings[button] = timing - frame_time if timing > 0.0 else 0.0

    def check(self, button: Buttons, action: Action) -> bool:
        """Whether *button* is held or was just pressed, per *action*."""
        if action is Action.HELD:
            return self._is_held(button)
        if action is Action.PRESSED:
            return self._is_pressed(button)
        raise ValueError(f"unknown action: {action!r}")

    def _stick_pressed(self, button: Buttons) -> bool:
        direction = _STICK_DIRECTIONS.get(button)
        if direction is None or self._pressed_timings[button] != 0.0:
            return False
        axis, sign = direction
        movement = self._handler.gamepad_axis_movement(self.gamepad_id, axis)
        if movement == 0.0:
            return False
        self._pressed_timings[button] = self.joystick_cooldown
        return movement * sign > 0.0

    def _is_pressed(self, button: Buttons) -> bool:
        handler = self._handler
        if self.input_type is InputType.GAMEPAD:
            stick = self._stick_pressed(button)
            mapped = [
                handler.gamepad_button_pressed(self.gamepad_id, key)
                for key in self.gamepad_mapping.get(button, ())
            ]
            return stick or any(mapped)
        return any(handler.key_pressed(key) for key in self.keyboard_mapping.get(button, ()))

    def _is_held(self, button: Buttons) -> bool:
        handler = self._handler
        if self.input_type is InputType.GAMEPAD:
            return any(
                handler.gamepad_button_down(self.gamepad_id, key)
                for key in self.gamepad_mapping.get(button, ())
            )
        if button is Buttons.SHOOT and handler.mouse_button_down(MouseButton.LEFT):
            return True
        return any(handler.key_down(key) for key in self.keyboard_mapping.get(button, ()))


@dataclass
class _Gamepad:
    joystick_id: int
    live: set = field(default_factory=set)
    current: set = field(default_factory=set)
    previous: set = field(default_factory=set)
    axes: dict = field(default_factory=dict)


class Input:
    """Tracks raw input state and the devices built on it.

    A new handler has one keyboard-and-mouse device; gamepads are added
    with :meth:`add_gamepad`.
    """

    def __init__(self) -> None:
        self._inputs: list[InputDevice] = [InputDevice(self, InputType.MOUSE_KB)]
        self._gamepads: list[_Gamepad] = []
        self._current_keys: set = set()
        self._previous_keys: set = set()
        self._pending_mouse = 0
        self._current_mouse = 0
        self._previous_mouse = 0

    @property
    def inputs(self) -> list[InputDevice]:
        return list(self._inputs)

    @property
    def gamepads(self) -> list[int]:
        """Joystick ids of the connected gamepads, in gamepad-id order."""
        return [pad.joystick_id for pad in self._gamepads]

    def controller(self, index: int) -> InputDevice:
        return self._inputs[index]

    def clear(self) -> None:
        """Forget every input device."""
        self._inputs.clear()

    def update(self, frame_time: float = 0.0) -> None:
        """Close a frame: run down cooldowns and snapshot the current state."""
        for device in self._inputs:
            device.update_timings(frame_time)
        self._previous_keys = set(self._current_keys)
        self._previous_mouse = self._current_mouse
        self._current_mouse = self._pending_mouse
        for pad in self._gamepads:
            pad.previous = pad.current
            pad.current = set(pad.live)

    # Feeding raw state

    def set_keys(self, keys: Iterable[Hashable], held: bool) -> None:
        """Mark *keys* as down or up, effective immediately."""
        if held:
            self._current_keys.update(keys)
        else:
            self._current_keys.difference_update(keys)

    def set_mouse_buttons(self, buttons: Iterable[MouseButton]) -> None:
        """Set which mouse buttons are down; read at the next :meth:`update`."""
        mask = 0
        for button in buttons:
            mask |= MouseButton(button).mask
        self._pending_mouse = mask

    def set_gamepad_button(self, gamepad_id: int, button: Hashable, down: bool) -> None:
        pad = self._gamepads[gamepad_id]
        if down:
            pad.live.add(button)
        else:
            pad.live.discard(button)

    def set_gamepad_axis(self, gamepad_id: int, axis: str, value: int) -> None:
        """Set a raw axis value between -32768 and 32767."""
        if not AXIS_MIN <= value <= AXIS_MAX:
            raise ValueError(f"axis value {value} out of range")
        self._gamepads[gamepad_id].axes[axis] = int(value)

    # Queries

    def gamepad_axis_movement(self, gamepad_id: int, axis: str) -> float:
        """The axis position from -1 to 1, zero inside the dead zone."""
        raw = self._gamepads[gamepad_id].axes.get(axis, 0)
        if abs(raw) < DEADZONE:
            raw = 0
        return raw / _AXIS_SCALE

    def gamepad_button_pressed(self, gamepad_id: int, button: Hashable) -> bool:
        pad = self._gamepads[gamepad_id]
        return button in pad.current and button not in pad.previous

    def gamepad_button_down(self, gamepad_id: int, button: Hashable) -> bool:
        return button in self._gamepads[gamepad_id].live

    def key_pressed(self, key: Hashable) -> bool:
        return key in self._current_keys and key not in self._previous_keys

    def key_released(self, key: Hashable) -> bool:
        return key not in self._current_keys and key in self._previous_keys

    def key_down(self, key: Hashable) -> bool:
        return key in self._current_keys

    def mouse_button_pressed(self, button: MouseButton) -> bool:
        mask = MouseButton(button).mask
        return bool(self._current_mouse & mask) and not self._previous_mouse & mask

    def mouse_button_released(self, button: MouseButton) -> bool:
        mask = MouseButton(button).mask
        return not self._current_mouse & mask and bool(self._previous_mouse & mask)

    def mouse_button_down(self, button: MouseButton) -> bool:
        return bool(self._current_mouse & MouseButton(button).mask)

    # Gamepads

    def add_gamepad(self, joystick_id: int) -> Optional[InputDevice]:
        """Connect a gamepad and return its new device.

        A joystick that is already connected is ignored and ``None`` returned.
        """
        if any(pad.joystick_id == joystick_id for pad in self._gamepads):
            return None
        gamepad_id = len(self._gamepads)
        self._gamepads.append(_Gamepad(joystick_id))
        device = InputDevice(self, InputType.GAMEPAD, gamepad_id)
        self._inputs.append(device)
        return device

    def remove_gamepad(self, joystick_id: int) -> None:
        """Disconnect every gamepad with *joystick_id*."""
        self._gamepads = [pad for pad in self._gamepads if pad.joystick_id != joystick_id]