[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "parchis"
version = "0.1.0"
description = "Game model for a two-player, four-colour Parchís variant with layered dice, power bars and move enumeration"
requires-python = ">=3.10"
dependencies = []
keywords = ["parchis", "parcheesi", "board game", "game tree", "search"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Games/Entertainment :: Board Games",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["parchis"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
