"""Brewhouse Monitor - sensor telemetry and beer ratings backend"""

__version__ = '1.0.0'
__description__ = 'Synthetic brewery sensor sampling, time-series storage and dashboard API'
