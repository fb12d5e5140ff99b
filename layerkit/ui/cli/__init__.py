"""CLI command groups registered by ``layerkit.main``."""
