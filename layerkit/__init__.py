"""layerkit — repository/service layering runtime and generators."""

__version__ = "0.1.0"
