"""Archetype quiz and tailored crypto news summaries."""

__version__ = "0.1.0"
