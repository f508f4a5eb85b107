"""Sea level graphs served over HTTP in a binary encoding, with plotting geometry helpers."""

__version__ = "0.1.0"