"""
Unit catalog reader.

Read-only view over the beds currently open for allocation.
"""

from typing import Iterator, List, Optional

from placement.core.exceptions import BaseAppException
from placement.models import Bed
from placement.repositories.record_store import RecordStore
from placement.services.base import BaseService, ServiceResult


class UnitCatalog:
    """
    Lazy, restartable sequence of open beds.

    Nothing is read until iteration starts, and every new iteration runs
    a fresh query, so each pass is a snapshot of the store at that time.
    """

    def __init__(self, store: RecordStore, room_type: Optional[str] = None, batch_size: int = 100):
        self.store = store
        self.room_type = room_type
        self.batch_size = batch_size

    def __iter__(self) -> Iterator[Bed]:
        return self.store.beds.iter_open(batch_size=self.batch_size, room_type=self.room_type)

    def snapshot(self) -> List[Bed]:
        return self.store.list_open_units(self.room_type)


class CatalogService(BaseService):
    """Open-bed listing for presentation layers."""

    def catalog(self, room_type: Optional[str] = None) -> UnitCatalog:
        return UnitCatalog(self.store, room_type=room_type)

    def list_open_units(self, room_type: Optional[str] = None) -> ServiceResult[List[Bed]]:
        """
        Beds with status open, ordered by available_from then id.
        """
        try:
            beds = self.catalog(room_type).snapshot()
        except BaseAppException as e:
            return self._handle_exception(e, "list open beds", room_type)
        return ServiceResult.success(beds, metadata={"count": len(beds)})


__all__ = ["CatalogService", "UnitCatalog"]
