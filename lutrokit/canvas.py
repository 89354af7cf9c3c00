"""Drawing surface with foreground/background colours and clipping."""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Real

from lutrokit.imagedata import ImageData, pack_color, unpack_color

Rect = tuple[int, int, int, int]


def _as_int(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{what} must be a number, not {type(value).__name__}")
    return int(value)


def _color_from_args(name: str, args: tuple[object, ...]) -> int:
    """Read colour components given as (r, g, b[, a]) or one sequence of them."""
    if len(args) not in (1, 3, 4):
        raise TypeError(f"{name} requires 1, 3 or 4 arguments, {len(args)} given.")
    if len(args) == 1:
        (components,) = args
        if isinstance(components, (str, bytes)) or not isinstance(components, Sequence):
            raise TypeError(f"{name} with one argument needs a sequence of components")
        if len(components) < 3:
            raise TypeError(f"{name} needs at least red, green and blue components")
        values: Sequence[object] = components
    else:
        values = args
    r, g, b = (_as_int(v, "colour component") for v in values[:3])
    a = _as_int(values[3], "colour component") if len(values) > 3 else 255
    return pack_color(r, g, b, a)


class Canvas:
    """A render target holding the current drawing state."""

    def __init__(self, width: int, height: int) -> None:
        self.target = ImageData(width, height)
        self.foreground = pack_color(255, 255, 255, 255)
        self.background = pack_color(0, 0, 0, 0)
        self.clip: Rect = (0, 0, self.target.width, self.target.height)
        self.font: object | None = None

    @property
    def width(self) -> int:
        return self.target.width

    @property
    def height(self) -> int:
        return self.target.height

    def set_color(self, *args: object) -> None:
        """Set the drawing colour from (r, g, b[, a]) or a sequence; alpha defaults to 255."""
        self.foreground = _color_from_args("set_color", args)

    def get_color(self) -> tuple[int, int, int, int]:
        """The drawing colour as (r, g, b, a)."""
        return unpack_color(self.foreground)

    def set_background_color(self, *args: object) -> None:
        """Set the clear colour from (r, g, b[, a]) or a sequence; alpha defaults to 255."""
        self.background = _color_from_args("set_background_color", args)

    def get_background_color(self) -> tuple[int, int, int, int]:
        """The clear colour as (r, g, b, a)."""
        return unpack_color(self.background)

    def clear(self) -> None:
        """Fill the whole target with the background colour."""
        pixels = self.target.pixels
        for index in range(len(pixels)):
            pixels[index] = self.background

    def _plot(self, x: object, y: object) -> None:
        px, py = _as_int(x, "x"), _as_int(y, "y")
        if 0 <= px < self.width and 0 <= py < self.height:
            self.target.pixels[py * self.width + px] = self.foreground

    def point(self, x: float, y: float) -> None:
        """Draw one pixel in the drawing colour; points off the canvas are skipped."""
        self._plot(x, y)

    def points(self, *args: float) -> None:
        """Draw pixels given as x1, y1, x2, y2, ..."""
        if len(args) == 1:
            raise TypeError("points does not currently support drawing points from a table.")
        if len(args) < 2:
            raise TypeError(f"points requires at least 2 arguments, {len(args)} given.")
        if len(args) % 2:
            raise TypeError(
                f"points requires an even amount of arguments, {len(args)} arguments given."
            )
        for x, y in zip(args[0::2], args[1::2]):
            self._plot(x, y)

    def set_scissor(self, *args: float) -> None:
        """Set the clip rectangle (x, y, w, h); with no arguments, clip to the whole canvas."""
        if len(args) not in (0, 4):
            raise TypeError(f"set_scissor requires 0 or 4 arguments, {len(args)} given.")
        if not args:
            self.clip = (0, 0, self.width, self.height)
            return
        x, y, w, h = (_as_int(v, "scissor value") for v in args)
        left = min(max(x, 0), self.width)
        top = min(max(y, 0), self.height)
        right = min(max(x + w, left), self.width)
        bottom = min(max(y + h, top), self.height)
        self.clip = (left, top, right - left, bottom - top)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """The target pixel at (x, y) as (r, g, b, a)."""
        return self.target.get_pixel(x, y)