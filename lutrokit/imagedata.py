"""In-memory ARGB pixel buffers."""

from __future__ import annotations

from array import array

ALPHA_SHIFT = 24
RED_SHIFT = 16
GREEN_SHIFT = 8
BLUE_SHIFT = 0

ALPHA_MASK = 0xFF000000
RED_MASK = 0x00FF0000
GREEN_MASK = 0x0000FF00
BLUE_MASK = 0x000000FF


def pack_color(r: int, g: int, b: int, a: int = 255) -> int:
    """Pack components into a 32-bit ARGB value."""
    value = (a << ALPHA_SHIFT) | (r << RED_SHIFT) | (g << GREEN_SHIFT) | (b << BLUE_SHIFT)
    return value & 0xFFFFFFFF


def unpack_color(value: int) -> tuple[int, int, int, int]:
    """Split a 32-bit ARGB value into (r, g, b, a)."""
    return (
        (value & RED_MASK) >> RED_SHIFT,
        (value & GREEN_MASK) >> GREEN_SHIFT,
        (value & BLUE_MASK) >> BLUE_SHIFT,
        (value & ALPHA_MASK) >> ALPHA_SHIFT,
    )


class ImageData:
    """A width x height grid of packed ARGB pixels, initially transparent black."""

    def __init__(self, width: int, height: int) -> None:
        width, height = int(width), int(height)
        if width < 0 or height < 0:
            raise ValueError(f"invalid image size {width}x{height}")
        self.width = width
        self.height = height
        self.pixels = array("L", bytes(array("L").itemsize * width * height))

    @property
    def pitch(self) -> int:
        """Bytes per row of 32-bit pixels."""
        return self.width << 2

    def dimensions(self) -> tuple[int, int]:
        return self.width, self.height

    def _index(self, x: int, y: int) -> int:
        x, y = int(x), int(y)
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} image")
        return y * self.width + x

    def get_pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the pixel at (x, y) as (r, g, b, a)."""
        return unpack_color(self.pixels[self._index(x, y)])

    def set_pixel(self, x: int, y: int, r: int, g: int, b: int, a: int = 255) -> None:
        """Set the pixel at (x, y); alpha defaults to opaque."""
        self.pixels[self._index(x, y)] = pack_color(r, g, b, a)