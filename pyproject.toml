[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "softfloat"
version = "0.1.0"
description = "Bit-exact software IEEE-754 binary32/binary64 arithmetic, comparison and conversion routines"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "ieee-754",
    "floating-point",
    "soft-float",
    "binary32",
    "binary64",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[tool.hatch.build.targets.wheel]
packages = ["softfloat"]

[tool.hatch.build.targets.sdist]
include = [
    "softfloat",
    "tests",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.10"
files = ["softfloat"]
