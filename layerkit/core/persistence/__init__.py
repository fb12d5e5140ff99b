"""Persistence — writing generated sources to disk."""
