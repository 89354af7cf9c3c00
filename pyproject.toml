[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "lutrokit"
version = "0.1.0"
description = "Game runtime building blocks: WAV streaming, audio mixing, pixel canvases, image data, game-relative file access and input state"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "audio", "mixer", "wav", "canvas", "input", "joystick", "keyboard"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Sound/Audio",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["lutrokit"]

[tool.pytest.ini_options]
addopts = "-ra"
