"""Persistence: time series and catalog records."""

from .database import Database, Base
from .timeseries import TimeSeriesStore
from .catalog import CatalogStore, ReviewStore

__all__ = ['Database', 'Base', 'TimeSeriesStore', 'CatalogStore', 'ReviewStore']
