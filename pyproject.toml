[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fvekit"
version = "0.1.0"
description = "Sector-level access, BEK file reading and unlock-method selection for BitLocker volumes"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "bitlocker",
    "fve",
    "bek",
    "disk-encryption",
    "forensics",
    "sectors",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Topic :: System :: Filesystems",
    "Topic :: System :: Recovery Tools",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["fvekit"]

[tool.hatch.build.targets.sdist]
include = ["fvekit", "tests", "README.md", "pyproject.toml"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
