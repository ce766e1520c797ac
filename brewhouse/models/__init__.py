"""Data models and domain objects."""

from .records import (
    ProcessSet,
    Measurement,
    Beer,
    ReviewSummary,
)

__all__ = [
    'ProcessSet',
    'Measurement',
    'Beer',
    'ReviewSummary',
]
