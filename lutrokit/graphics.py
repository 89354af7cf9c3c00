"""Graphics state: canvases, quads and the current render target."""

from __future__ import annotations

from numbers import Real
from typing import Optional

from lutrokit.canvas import Canvas

MIN_SEGMENTS = 10


def _number(value: object, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise TypeError(f"{what} must be a number, not {type(value).__name__}")
    return int(value)


def segment_count(
    x_radius: float, y_radius: float, segments: Optional[int] = None
) -> int:
    """Segments used to draw an ellipse.

    A missing or non-positive count falls back to the larger radius,
    but never fewer than ten.
    """
    count = 0 if segments is None else _number(segments, "segments")
    if count <= 0:
        count = max(
            MIN_SEGMENTS,
            _number(x_radius, "x_radius"),
            _number(y_radius, "y_radius"),
        )
    return count


class Quad:
    """A viewport into a texture of size sw x sh."""

    def __init__(self, x: int, y: int, w: int, h: int, sw: int, sh: int) -> None:
        self.x, self.y, self.w, self.h = (
            _number(value, name)
            for value, name in ((x, "x"), (y, "y"), (w, "w"), (h, "h"))
        )
        self.sw = _number(sw, "sw")
        self.sh = _number(sh, "sh")

    def viewport(self) -> tuple[int, int, int, int]:
        """The viewport as (x, y, w, h)."""
        return self.x, self.y, self.w, self.h

    def set_viewport(self, x: int, y: int, w: int, h: int) -> None:
        """Replace the viewport rectangle."""
        self.x = _number(x, "x")
        self.y = _number(y, "y")
        self.w = _number(w, "w")
        self.h = _number(h, "h")


class Graphics:
    """The screen's default canvas and the canvas currently drawn to."""

    def __init__(self, width: int, height: int) -> None:
        self.width = _number(width, "width")
        self.height = _number(height, "height")
        self.default_canvas = Canvas(self.width, self.height)
        self._current = self.default_canvas

    def new_canvas(self, width: int, height: int) -> Canvas:
        """Create an off-screen canvas of the given size."""
        return Canvas(_number(width, "width"), _number(height, "height"))

    def set_canvas(self, *args: Canvas) -> None:
        """Draw to the given canvas, or back to the screen with no argument."""
        if len(args) > 1:
            raise TypeError(f"set_canvas requires 0 or 1 argument, {len(args)} given.")
        if not args:
            self._current = self.default_canvas
            return
        (canvas,) = args
        if not isinstance(canvas, Canvas):
            raise TypeError(f"set_canvas needs a Canvas, not {type(canvas).__name__}")
        self._current = canvas

    def get_canvas(self) -> Canvas:
        """The canvas currently drawn to."""
        return self._current

    def dimensions(self) -> tuple[int, int]:
        """The screen size as (width, height)."""
        return self.width, self.height