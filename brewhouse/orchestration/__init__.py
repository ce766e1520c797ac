# brewhouse/orchestration/__init__.py
"""Orchestration layer with command pattern and state management."""

from .orchestrator import BrewhouseOrchestrator
from .state_machine import OrchestrationStateMachine, OrchestrationState
from .commands import (
    OrchestrationCommand,
    StorageSetupCommand,
    CatalogSeedCommand,
    SamplerStartCommand,
)

__all__ = [
    'BrewhouseOrchestrator',
    'OrchestrationStateMachine',
    'OrchestrationState',
    'OrchestrationCommand',
    'StorageSetupCommand',
    'CatalogSeedCommand',
    'SamplerStartCommand',
]
