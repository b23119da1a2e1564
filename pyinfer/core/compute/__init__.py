"""Compute utilities shared by backends."""
