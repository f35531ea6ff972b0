[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "minitools"
version = "0.1.0"
description = "Small command-line tools: a minimal content-addressed version store, an interactive shell and a laundry queue simulation."
requires-python = ">=3.10"
dependencies = []
keywords = ["git", "version-control", "shell", "simulation", "command-line"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Version Control :: Git",
    "Topic :: System :: Shells",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
minitools-git = "minitools.git.cli:main"
minitools-shell = "minitools.shell.main:main"
minitools-laundry = "minitools.laundry:main"

[tool.hatch.build.targets.wheel]
packages = ["minitools"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
