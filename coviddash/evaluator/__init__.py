"""Aggregation and the full processing pass."""
