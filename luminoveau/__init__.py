"""Small 2D game toolkit: INI files, events, states, settings, logging, input, assets, text and drawing."""

__version__ = "0.1.0"

__all__ = [
    "assets",
    "canvas",
    "eventbus",
    "ini",
    "input",
    "log",
    "settings",
    "shapes",
    "state",
    "text",
]