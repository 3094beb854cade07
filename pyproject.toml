[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gtecore"
version = "0.1.0"
description = "Core state and geometry of a small 2D/3D game engine: colours, camera maths, sprites, bitmap fonts, event dispatch, frame timing and MD3 model loading"
requires-python = ">=3.10"
dependencies = []
keywords = ["game", "engine", "sprite", "md3", "bitmap-font", "bmp", "camera", "projection"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Multimedia :: Graphics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["gtecore"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
