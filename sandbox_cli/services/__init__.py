"""Output formatting services for sandbox tool results."""

__all__ = [
    "branding",
    "output",
]
