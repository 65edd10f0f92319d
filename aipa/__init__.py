"""AIPA - generate, build, run and interactively repair small programs."""

__version__ = "0.1.0"
