"""RouterNitro bridge/swap quote assistant."""

__version__ = "0.1.0"
