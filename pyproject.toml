[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "clockwise"
version = "1.2.2"
description = "Software for a 64x64 LED matrix wall clock: drawing helpers, settings store, settings web server and brightness control"
requires-python = ">=3.10"
dependencies = []
keywords = ["clock", "led-matrix", "rgb565", "home-automation", "wall-clock", "posix-tz"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Home Automation",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
clockwise = "clockwise.app:main"

[tool.setuptools.packages.find]
include = ["clockwise*"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
