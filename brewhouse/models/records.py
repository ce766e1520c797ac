from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, Mapping, Optional, Tuple

from brewhouse.core.exceptions import UnknownProcess


###############################################################################
# 1. PROCESS SET --------------------------------------------------------------
###############################################################################

class ProcessSet:
    """Closed set of monitored brewing processes, in configured order."""

    def __init__(self, names: Iterable[str]):
        self._names: Tuple[str, ...] = tuple(names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"ProcessSet({list(self._names)!r})"

    def require(self, name: str) -> str:
        if name not in self._names:
            raise UnknownProcess(name)
        return name


###############################################################################
# 2. MEASUREMENT --------------------------------------------------------------
###############################################################################

@dataclass(frozen=True, slots=True)
class Measurement:
    """Immutable projection of one *sensor_data* row."""
    id: int
    process: str
    values: Mapping[str, float]
    timestamp: datetime

    # ---------- factory --------------------------------------------------- #
    @classmethod
    def from_row(cls, row: Any) -> "Measurement":
        return cls(
            id        = row.id,
            process   = row.process,
            values    = MappingProxyType(dict(row.values or {})),
            timestamp = as_utc(row.timestamp),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "process": self.process,
            "values": dict(self.values),
            "timestamp": self.timestamp.isoformat(),
        }


###############################################################################
# 3. BEER & REVIEWS -----------------------------------------------------------
###############################################################################

@dataclass(frozen=True, slots=True)
class Beer:
    """Immutable projection of one *beers* row."""
    id: int
    name: str
    type: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: bool = False
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Any) -> "Beer":
        return cls(
            id          = row.id,
            name        = row.name,
            type        = row.type,
            description = row.description,
            image_url   = row.image_url,
            is_active   = bool(row.is_active),
            created_at  = as_utc(row.created_at),
            updated_at  = as_utc(row.updated_at),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "description": self.description,
            "imageUrl": self.image_url,
            "isActive": self.is_active,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


@dataclass(frozen=True, slots=True)
class ReviewSummary:
    anzahl: int = 0
    durchschnitt: float = 0

    def to_dict(self) -> Dict[str, Any]:
        return {"anzahl": self.anzahl, "durchschnitt": self.durchschnitt}


###############################################################################
# 4. HELPERS ------------------------------------------------------------------
###############################################################################

def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands back naive datetimes; everything stored is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
