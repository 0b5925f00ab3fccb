"""
Bed repository.

Read-only from the engine's point of view: the catalog of beds open for
allocation, ordered by availability date with the bed id breaking ties.
"""

from typing import Iterator, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from placement.core.logging import get_logger
from placement.models import Bed, BedStatus
from placement.repositories.base import BaseRepository

logger = get_logger(__name__)


class BedRepository(BaseRepository[Bed]):
    """Catalog queries over beds."""

    def __init__(self, db: Session):
        super().__init__(Bed, db)

    def _open_beds_query(self, room_type: Optional[str] = None):
        stmt = (
            select(Bed)
            .where(Bed.status == BedStatus.OPEN.value)
            .order_by(Bed.available_from.asc(), Bed.id.asc())
        )
        if room_type:
            stmt = stmt.where(Bed.room_type == room_type)
        return stmt

    def list_open(self, room_type: Optional[str] = None) -> List[Bed]:
        """
        List beds open for allocation.

        Args:
            room_type: Optional room type filter

        Returns:
            Open beds ordered by available_from, then id
        """
        try:
            beds = list(self.db.scalars(self._open_beds_query(room_type)))
        except SQLAlchemyError as e:
            raise self._store_error(e, "list_open") from e
        logger.debug(f"Listed {len(beds)} open beds")
        return beds

    def iter_open(self, batch_size: int = 100, room_type: Optional[str] = None) -> Iterator[Bed]:
        """
        Stream open beds in catalog order, fetching ``batch_size`` rows at a time.
        """
        stmt = self._open_beds_query(room_type).execution_options(yield_per=batch_size)
        try:
            for bed in self.db.scalars(stmt):
                yield bed
        except SQLAlchemyError as e:
            raise self._store_error(e, "iter_open") from e


__all__ = ["BedRepository"]
