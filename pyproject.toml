[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "luminoveau"
version = "0.1.0"
description = "Small 2D game toolkit: INI files, event bus, state manager, settings, input tracking, assets, text and software drawing"
requires-python = ">=3.10"
keywords = ["game", "2d", "ini", "event-bus", "state-machine", "input", "rendering", "pillow"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Games/Entertainment",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "pillow>=10.1",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["luminoveau"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
