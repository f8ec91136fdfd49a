[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "avalon"
version = "0.1.0"
description = "Game engine core: event channels, typed event payloads, frame timing and a layered input-action system"
requires-python = ">=3.10"
dependencies = []
keywords = ["game-engine", "input", "events", "actions", "controller"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["avalon"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
