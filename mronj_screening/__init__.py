"""MRONJ pre-procedure risk screening."""

__version__ = "1.0.0"
