[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "duatool"
version = "2.32.0"
description = "Disk usage analysis: per-path size aggregation, byte formatting, and an in-memory directory tree with sorting, navigation and deletion."
requires-python = ">=3.10"
dependencies = [
    "regex",
]
keywords = ["disk usage", "du", "filesystem", "directory size", "storage"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Filesystems",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["duatool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
