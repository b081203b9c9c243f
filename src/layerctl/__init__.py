"""layerctl — layer definition registry and dependency safety checks."""

__version__ = "0.1.0"
