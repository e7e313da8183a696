"""Sombrero: post-processing and presentation of crowd simulation output."""

__version__ = "0.1.0"
