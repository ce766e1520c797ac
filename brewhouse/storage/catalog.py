# catalog.py

from typing import Any, Dict, List, Optional
import logging

from sqlalchemy import func, select

from brewhouse.core.exceptions import NotFound, ValidationError
from brewhouse.models import Beer, ReviewSummary
from .database import BeerRow, Database, ReviewRow


logger = logging.getLogger(__name__)

DEFAULT_BEERS: List[Dict[str, Any]] = [
    {
        "name": "Weisse Bier",
        "type": "Weisse",
        "description": "Ein frisches, leichtes Weisse Bier mit einem leichten Hopfenaroma.",
        "is_active": True,
    },
    {
        "name": "Pilsner",
        "type": "Pils",
        "description": "Ein klassischer Pilsner mit einem ausgewogenen Hopfenaroma und einem sauberen Finish.",
        "is_active": False,
    },
]

EDITABLE_FIELDS = ("name", "type", "description", "image_url", "is_active")
REQUIRED_FIELDS = ("name", "type", "is_active")


def _beer_by_name(session, name: str) -> BeerRow:
    row = session.scalars(select(BeerRow).where(BeerRow.name == name).limit(1)).first()
    if row is None:
        raise NotFound(f"Beer not found: {name!r}")
    return row


class CatalogStore:
    """Beer records."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, name: str, type: str, description: Optional[str] = None,
                     image_url: Optional[str] = None, is_active: bool = False) -> Beer:
        def _create(session) -> Beer:
            row = BeerRow(name=name, type=type, description=description,
                          image_url=image_url, is_active=bool(is_active))
            session.add(row)
            session.flush()
            return Beer.from_row(row)

        beer = await self.db.run(_create)
        logger.info("beer created: %s (id=%d)", beer.name, beer.id)
        return beer

    async def list(self) -> List[Beer]:
        def _list(session):
            return [Beer.from_row(r) for r in session.scalars(select(BeerRow).order_by(BeerRow.id))]
        return await self.db.run(_list)

    async def get(self, beer_id: int) -> Beer:
        def _get(session):
            row = session.get(BeerRow, beer_id)
            if row is None:
                raise NotFound(f"Beer not found: {beer_id}")
            return Beer.from_row(row)
        return await self.db.run(_get)

    async def by_name(self, name: str) -> Beer:
        return await self.db.run(lambda session: Beer.from_row(_beer_by_name(session, name)))

    async def active(self) -> Beer:
        def _active(session):
            stmt = select(BeerRow).where(BeerRow.is_active.is_(True)).order_by(BeerRow.id).limit(1)
            row = session.scalars(stmt).first()
            if row is None:
                raise NotFound("No active beer found")
            return Beer.from_row(row)
        return await self.db.run(_active)

    async def update(self, beer_id: int, **fields: Any) -> Beer:
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Unknown beer fields: {sorted(unknown)}")
        missing = sorted(k for k in REQUIRED_FIELDS if k in fields and fields[k] is None)
        if missing:
            raise ValidationError(f"Beer fields cannot be null: {missing}")

        def _update(session):
            row = session.get(BeerRow, beer_id)
            if row is None:
                raise NotFound(f"Beer not found: {beer_id}")
            for key, value in fields.items():
                setattr(row, key, value)
            session.flush()
            return Beer.from_row(row)

        beer = await self.db.run(_update)
        logger.info("beer updated: id=%d fields=%s", beer_id, sorted(fields))
        return beer

    async def delete(self, beer_id: int) -> None:
        def _delete(session):
            row = session.get(BeerRow, beer_id)
            if row is None:
                raise NotFound(f"Beer not found: {beer_id}")
            session.query(ReviewRow).filter(ReviewRow.beer_id == beer_id).delete()
            session.delete(row)

        await self.db.run(_delete)
        logger.info("beer deleted: id=%d", beer_id)

    async def seed_defaults(self) -> int:
        """Insert the default beers when the catalog is empty."""
        def _seed(session) -> int:
            if session.scalar(select(func.count(BeerRow.id))):
                return 0
            session.add_all(BeerRow(**b) for b in DEFAULT_BEERS)
            return len(DEFAULT_BEERS)

        count = await self.db.run(_seed)
        if count:
            logger.info("seeded %d beers", count)
        return count


class ReviewStore:
    """Star ratings per beer and their aggregate."""

    def __init__(self, db: Database):
        self.db = db

    @staticmethod
    def validate(sterne: Any) -> int:
        if isinstance(sterne, bool) or not isinstance(sterne, int) or not 1 <= sterne <= 5:
            raise ValidationError("Invalid rating")
        return sterne

    async def submit(self, beer_name: str, sterne: Any) -> int:
        stars = self.validate(sterne)

        def _submit(session) -> int:
            beer = _beer_by_name(session, beer_name)
            row = ReviewRow(beer_id=beer.id, sterne=stars)
            session.add(row)
            session.flush()
            return row.id

        review_id = await self.db.run(_submit)
        logger.info("review %d stars for %s", stars, beer_name)
        return review_id

    async def summary(self, beer_name: str) -> ReviewSummary:
        def _summary(session) -> ReviewSummary:
            beer = _beer_by_name(session, beer_name)
            count, total = session.execute(
                select(func.count(ReviewRow.id), func.coalesce(func.sum(ReviewRow.sterne), 0))
                .where(ReviewRow.beer_id == beer.id)
            ).one()
            if not count:
                return ReviewSummary()
            return ReviewSummary(anzahl=count, durchschnitt=round(total / count, 2))

        return await self.db.run(_summary)
