[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ssdshell"
version = "0.1.0"
description = "Interactive test shell and scenario runner for a command-line SSD simulator"
requires-python = ">=3.10"
dependencies = []
keywords = ["ssd", "test shell", "lba", "scenario", "aging test"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ssdshell = "ssdshell.runner:main"

[tool.hatch.build.targets.wheel]
packages = ["ssdshell"]

[tool.pytest.ini_options]
addopts = "-ra"
