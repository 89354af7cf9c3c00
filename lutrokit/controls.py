"""Keyboard and joypad state with name lookups and change events."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

_log = logging.getLogger(__name__)

JOYSTICK_COUNT = 8
BUTTON_COUNT = 16
AXIS_COUNT = 4
REPORTED_JOYSTICK_COUNT = 6
KEY_LAST = 324

_AXIS_SCALE = 32767.0

ANALOG_LEFT = 0
ANALOG_RIGHT = 1
ANALOG_X = 0
ANALOG_Y = 1

# Joypad button ids, in the order the buttons are numbered.
_BUTTONS: tuple[tuple[int, str], ...] = (
    (0, "b"),
    (1, "y"),
    (2, "select"),
    (3, "start"),
    (4, "up"),
    (5, "down"),
    (6, "left"),
    (7, "right"),
    (8, "a"),
    (9, "x"),
    (10, "l1"),
    (11, "r1"),
    (12, "l2"),
    (13, "r2"),
    (14, "l3"),
    (15, "r3"),
)


def _build_keys() -> tuple[tuple[int, str], ...]:
    keys: list[tuple[int, str]] = [
        (8, "backspace"),
        (9, "tab"),
        (12, "clear"),
        (13, "return"),
        (19, "pause"),
        (27, "escape"),
        (32, "space"),
        (33, "!"),
        (34, '"'),
        (35, "#"),
        (36, "$"),
        (38, "&"),
        (39, "'"),
        (40, "("),
        (41, ")"),
        (42, "*"),
        (43, "+"),
        (44, ","),
        (45, "-"),
        (46, "."),
        (47, "/"),
    ]
    keys += [(48 + digit, str(digit)) for digit in range(10)]
    keys += [
        (58, ":"),
        (59, ";"),
        (60, "<"),
        (61, "="),
        (62, ">"),
        (63, "?"),
        (64, "@"),
        (91, "["),
        (92, "\\"),
        (93, "]"),
        (94, "^"),
        (95, "_"),
        (96, '"'),
    ]
    keys += [(97 + offset, chr(ord("a") + offset)) for offset in range(26)]
    keys.append((127, "kpdelete"))
    keys += [(256 + digit, f"kp{digit}") for digit in range(10)]
    keys += [
        (266, "kp."),
        (267, "kp/"),
        (268, "kp*"),
        (269, "kp-"),
        (270, "kp+"),
        (271, "kpenter"),
        (272, "kp="),
        (273, "up"),
        (274, "down"),
        (275, "right"),
        (276, "left"),
        (277, "insert"),
        (278, "home"),
        (279, "end"),
        (280, "pageup"),
        (281, "pagedown"),
    ]
    keys += [(282 + number - 1, f"f{number}") for number in range(1, 16)]
    keys += [
        (300, "numlock"),
        (301, "capslock"),
        (302, "scrolllock"),
        (303, "rshift"),
        (304, "lshift"),
        (305, "rctrl"),
        (306, "lctrl"),
        (307, "ralt"),
        (308, "lalt"),
        (309, "rmeta"),
        (310, "lmeta"),
        (311, "lgui"),
        (312, "rgui"),
        (313, "mode"),
        (314, "application"),
        (315, "help"),
        (316, "printscreen"),
        (317, "sysreq"),
        (318, "pause"),
        (319, "menu"),
        (320, "power"),
        (321, "currencyunit"),
        (322, "undo"),
    ]
    return tuple(keys)


_KEYS = _build_keys()


def _first_by_name(table: tuple[tuple[int, str], ...]) -> dict[str, int]:
    lookup: dict[str, int] = {}
    for value, name in table:
        lookup.setdefault(name, value)
    return lookup


def _first_by_value(table: tuple[tuple[int, str], ...]) -> dict[int, str]:
    lookup: dict[int, str] = {}
    for value, name in table:
        lookup.setdefault(value, name)
    return lookup


_KEY_BY_NAME = _first_by_name(_KEYS)
_KEY_BY_CODE = _first_by_value(_KEYS)
_BUTTON_BY_NAME = _first_by_name(_BUTTONS)
_BUTTON_BY_ID = _first_by_value(_BUTTONS)


def key_to_scancode(name: str) -> int:
    """Scancode of a key name; raises ValueError for unknown names."""
    try:
        return _KEY_BY_NAME[name]
    except KeyError:
        raise ValueError("invalid button") from None


def scancode_to_key(scancode: int) -> str:
    """Key name of a scancode, or an empty string if it has none."""
    return _KEY_BY_CODE.get(int(scancode), "")


def button_to_id(name: str) -> int:
    """Joypad button id of a button name; raises ValueError for unknown names."""
    try:
        return _BUTTON_BY_NAME[name]
    except KeyError:
        raise ValueError("invalid button") from None


def id_to_button(value: int) -> str:
    """Button name of a joypad button id, or an empty string if it has none."""
    return _BUTTON_BY_ID.get(int(value), "")


JoypadPoll = Callable[[int, int, int], int]


def joypad(poll: JoypadPoll, button: str, port: int = 1, index: int = 1) -> bool:
    """Whether a named joypad button is held.

    ``port`` and ``index`` count from 1; ``poll(port, index, button_id)``
    receives them counted from 0.
    """
    button_id = button_to_id(button)
    return bool(poll(int(port) - 1, int(index) - 1, button_id))


def _notify(callback: Optional[Callable[..., object]], *args: object) -> None:
    if callback is None:
        return
    try:
        callback(*args)
    except Exception:
        _log.exception("input event handler failed")


class Keyboard:
    """Cached key state, refreshed by polling every scancode."""

    def __init__(self) -> None:
        self._state = [0] * KEY_LAST

    def update(
        self,
        poll: Callable[[int], int],
        on_pressed: Optional[Callable[[str, int, bool], object]] = None,
        on_released: Optional[Callable[[str, int, bool], object]] = None,
    ) -> None:
        """Poll each scancode and report keys whose state changed.

        Handlers receive (key name, scancode, is_repeat); errors they raise
        are logged and do not stop the update.
        """
        for scancode in range(KEY_LAST):
            is_down = poll(scancode)
            if is_down != self._state[scancode]:
                handler = on_pressed if is_down else on_released
                _notify(handler, scancode_to_key(scancode), scancode, False)
                self._state[scancode] = is_down

    def is_down(self, *args: str) -> bool:
        """True if any of the named keys is held."""
        if not args:
            raise TypeError("is_down requires 1 or more arguments, 0 given.")
        for name in args:
            if self._state[key_to_scancode(name)]:
                return True
        return False


class Joysticks:
    """Cached button and axis state of all joypads."""

    def __init__(self) -> None:
        self._buttons = [[0] * BUTTON_COUNT for _ in range(JOYSTICK_COUNT)]
        self._axes = [[0] * AXIS_COUNT for _ in range(JOYSTICK_COUNT)]

    def update(
        self,
        poll: Callable[[int, int], int],
        analog_poll: Callable[[int, int, int], int],
        on_pressed: Optional[Callable[[int, int], object]] = None,
        on_released: Optional[Callable[[int, int], object]] = None,
    ) -> None:
        """Poll buttons and sticks of every joypad.

        ``poll(joystick, button)`` and ``analog_poll(joystick, stick, axis)``
        count from 0, as do the (joystick, button) arguments of the handlers.
        """
        for joystick in range(JOYSTICK_COUNT):
            cached = self._buttons[joystick]
            for button in range(BUTTON_COUNT):
                state = poll(joystick, button)
                if cached[button] != state:
                    cached[button] = state
                    handler = on_pressed if state > 0 else on_released
                    _notify(handler, joystick, button)
            self._axes[joystick] = [
                analog_poll(joystick, ANALOG_LEFT, ANALOG_X),
                analog_poll(joystick, ANALOG_LEFT, ANALOG_Y),
                analog_poll(joystick, ANALOG_RIGHT, ANALOG_X),
                analog_poll(joystick, ANALOG_RIGHT, ANALOG_Y),
            ]

    def joystick_count(self) -> int:
        """Number of joysticks reported to games."""
        return REPORTED_JOYSTICK_COUNT

    def is_down(self, joystick: int, button: int) -> bool:
        """Whether a button is held; joystick and button count from 1."""
        joystick, button = int(joystick), int(button)
        if not 1 <= joystick <= JOYSTICK_COUNT:
            raise ValueError(
                f"invalid joystick number {joystick} must be between 1 and "
                f"{JOYSTICK_COUNT} included."
            )
        if not 1 <= button <= BUTTON_COUNT:
            raise ValueError(
                f"invalid joystick button {button} must be between 1 and "
                f"{BUTTON_COUNT} included."
            )
        return bool(self._buttons[joystick - 1][button - 1])

    def get_axis(self, joystick: int, axis: int) -> float:
        """Axis position scaled to about -1.0..1.0; joystick and axis count from 1."""
        joystick, axis = int(joystick), int(axis)
        if not 1 <= joystick <= JOYSTICK_COUNT:
            raise ValueError(f"invalid joystick number {joystick}")
        if not 1 <= axis <= AXIS_COUNT:
            raise ValueError(f"invalid axis {axis}")
        return self._axes[joystick - 1][axis - 1] / _AXIS_SCALE