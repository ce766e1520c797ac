"""
SQLAlchemy engine, session handling and table definitions.

Every call runs in a worker thread with its own session and transaction, so
a row becomes visible to readers only once its transaction commits.
"""
from __future__ import annotations
import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional, TypeVar

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text,
    create_engine,
)
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from brewhouse.core.exceptions import StorageUnavailable

T = TypeVar("T")

Base = declarative_base()


def utc_now() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SensorDataRow(Base):
    __tablename__ = "sensor_data"

    id = Column(Integer, primary_key=True, autoincrement=True)
    process = Column(String(64), nullable=False)
    values = Column(JSON, nullable=False)
    timestamp = Column(DateTime, nullable=False)    # naive UTC

    __table_args__ = (Index("ix_sensor_data_process_ts", "process", "timestamp"),)


class BeerRow(Base):
    __tablename__ = "beers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    type = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(1024), nullable=True)
    is_active = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=utc_now)
    updated_at = Column(DateTime, nullable=False, default=utc_now, onupdate=utc_now)


class ReviewRow(Base):
    __tablename__ = "reviews"

    id = Column(Integer, primary_key=True, autoincrement=True)
    beer_id = Column(Integer, ForeignKey("beers.id", ondelete="CASCADE"), nullable=False, index=True)
    sterne = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False, default=utc_now)


class Database:
    """Owns the engine; hands out one transaction per call."""

    def __init__(self, url: str):
        connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
        self.url = url
        self.engine = create_engine(url, connect_args=connect_args, pool_pre_ping=True)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, expire_on_commit=False)
        self.log = logging.getLogger(self.__class__.__name__)

    async def create_schema(self) -> None:
        def _create():
            try:
                Base.metadata.create_all(self.engine)
            except SQLAlchemyError as e:
                raise StorageUnavailable(f"schema setup failed: {e}") from e
        await asyncio.to_thread(_create)
        self.log.info("schema ready on %s", self.engine.url.render_as_string(hide_password=True))

    async def run(self, fn: Callable[[Session], T], *, timeout: Optional[float] = None) -> T:
        """Run ``fn(session)`` inside a transaction on a worker thread."""
        call = asyncio.to_thread(self._transaction, fn)
        if timeout is None:
            return await call
        try:
            return await asyncio.wait_for(call, timeout)
        except asyncio.TimeoutError as e:
            raise StorageUnavailable(f"database call exceeded {timeout:.1f}s") from e

    def _transaction(self, fn: Callable[[Session], T]) -> T:
        try:
            with self.Session() as session, session.begin():
                return fn(session)
        except SQLAlchemyError as e:
            raise StorageUnavailable(str(e)) from e

    def dispose(self) -> None:
        self.engine.dispose()
        self.log.info("engine disposed")
