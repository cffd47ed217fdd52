"""Text-buffer engine for a terminal editor."""

__all__ = [
    "adapters",
    "buffer",
    "runtime",
]

__version__ = "0.1.0"
