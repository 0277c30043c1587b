"""Shared tools for cleaning, shaping and scoring series."""
