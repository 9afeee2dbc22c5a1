"""Core modules for the Cash In & Out chart."""

from . import config, controller, logging_setup, models, provider, selection, state, synth, utils, viz

__all__ = [
    "config",
    "controller",
    "logging_setup",
    "models",
    "provider",
    "selection",
    "state",
    "synth",
    "utils",
    "viz",
]
