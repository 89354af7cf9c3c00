"""WAV streaming, audio mixing, pixel canvases, game file access and input state for a small game runtime."""

__version__ = "0.1.0"

__all__ = [
    "canvas",
    "controls",
    "decoder",
    "filesystem",
    "graphics",
    "imagedata",
    "mixer",
    "source",
]