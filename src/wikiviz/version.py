"""Version information for :mod:`wikiviz`."""

__all__ = [
    "VERSION",
]

VERSION = "0.1.0"
