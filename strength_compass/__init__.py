"""Strength Compass - powerlifting strength predictions with a local fallback."""

__version__ = "1.0.0"
