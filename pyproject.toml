[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rotorctl"
version = "0.1.0"
description = "Antenna rotator controller support: buffered character display, LCD controller drivers and magnetometer drivers"
requires-python = ">=3.10"
dependencies = []
keywords = ["antenna", "rotator", "lcd", "hd44780", "pcf8574", "st7036", "magnetometer", "compass", "i2c", "ham radio"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Ham Radio",
    "Topic :: System :: Hardware",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["rotorctl"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
