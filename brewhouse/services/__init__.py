"""Telemetry services: background sampler and read paths."""

from .sampler import SamplerLoop, TickReport
from .query_service import QueryService

__all__ = [
    'SamplerLoop',
    'TickReport',
    'QueryService',
]
