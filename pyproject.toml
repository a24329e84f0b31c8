[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "termgfx"
version = "0.1.0"
description = "Tile grid, colour and vertex geometry for a GPU-rendered terminal emulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["terminal", "emulator", "graphics", "vertices", "glyphs", "grid"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Terminals :: Terminal Emulators/X Terminals",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["termgfx"]

[tool.pytest.ini_options]
addopts = "-ra"
