[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dsshell"
version = "0.1.0"
description = "Command interpreter for bitmaps, linked lists and hash tables, plus a small job-control shell"
requires-python = ">=3.11"
dependencies = []
keywords = ["shell", "job control", "pipeline", "bitmap", "linked list", "hash table"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Shells",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dsshell-testlib = "dsshell.testlib:main"
dsshell = "dsshell.shell:main"

[tool.hatch.build.targets.wheel]
packages = ["dsshell"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
