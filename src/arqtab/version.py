"""Version information for :mod:`arqtab`."""

__all__ = [
    "VERSION",
]

VERSION = "0.1.0"
