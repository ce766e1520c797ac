"""Sampling trigger strategies."""

from .base_trigger import TriggerStrategy
from .time_trigger import IntervalTrigger

__all__ = [
    'TriggerStrategy',
    'IntervalTrigger',
]
