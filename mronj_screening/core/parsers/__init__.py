"""Intake parsing modules."""

from .intake_parser import IntakeParser

__all__ = [
    "IntakeParser"
]
