"""Discover, list and launch Bevy apps and examples, and interpret BRP format errors."""

__version__ = "0.1.0"