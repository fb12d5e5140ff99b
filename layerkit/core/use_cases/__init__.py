"""Use cases — one entry point per command."""
