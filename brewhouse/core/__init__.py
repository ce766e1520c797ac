# brewhouse/core/__init__.py
"""Core infrastructure components for the brewhouse monitor."""

from .exceptions import (
    BrewhouseError,
    ConfigurationError,
    UnknownProcess,
    InvalidDate,
    StorageUnavailable,
    ValidationError,
    NotFound,
)
from .patterns.state_machine import StateMachine, SamplerState


__all__ = [
    "BrewhouseError",
    "ConfigurationError",
    "UnknownProcess",
    "InvalidDate",
    "StorageUnavailable",
    "ValidationError",
    "NotFound",
    "StateMachine",
    "SamplerState",
]
