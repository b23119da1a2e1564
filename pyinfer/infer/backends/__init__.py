"""Computational backends for resampled distributions."""
