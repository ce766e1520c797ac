import asyncio
from datetime import datetime, timezone

import pytest

from config.app_config import BrewhouseConfig
from brewhouse.models import ProcessSet
from brewhouse.sensors import MeasurementGenerator
from brewhouse.storage import Database, TimeSeriesStore, CatalogStore, ReviewStore

PROCESSES = ("fermentation", "mashing", "boiling")

T0 = datetime(2024, 5, 17, 12, 0, 0, tzinfo=timezone.utc)


def run(coro):
    return asyncio.run(coro)


@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'brewhouse-test.db'}"


@pytest.fixture
def config(db_url):
    return BrewhouseConfig(
        database_url=db_url,
        sample_interval=3600,
        generator_seed=42,
        sampler_enabled=False,
        static_dir=None,
    )


@pytest.fixture
def processes():
    return ProcessSet(PROCESSES)


@pytest.fixture
def database(db_url):
    db = Database(db_url)
    run(db.create_schema())
    yield db
    db.dispose()


@pytest.fixture
def store(database, processes):
    return TimeSeriesStore(database, processes, read_timeout=5.0)


@pytest.fixture
def generator(processes):
    return MeasurementGenerator(processes, seed=7)


@pytest.fixture
def catalog(database):
    return CatalogStore(database)


@pytest.fixture
def reviews(database):
    return ReviewStore(database)
