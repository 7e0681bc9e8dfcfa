"""Natural-language question answering over Azure infrastructure."""

__version__ = "0.1.0"
