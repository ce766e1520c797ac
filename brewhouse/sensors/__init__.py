"""Synthetic sensor sources."""

from .generator import MeasurementGenerator, ChannelConfig, PROFILES, GENERIC_PROFILE

__all__ = ['MeasurementGenerator', 'ChannelConfig', 'PROFILES', 'GENERIC_PROFILE']
