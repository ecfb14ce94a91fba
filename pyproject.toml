[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pixnev"
version = "1.1.0"
description = "CAN frame encoding and decoding for PIX NEV instrument and diagnostic messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["can", "canbus", "vehicle", "chassis", "automotive", "instrument", "diagnostics"]
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
    "Topic :: Software Development :: Embedded Systems :: Controller Area Network (CAN)",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["pixnev"]

[tool.hatch.build.targets.sdist]
include = ["pixnev", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
