"""SQLAlchemy-backed region store.

Operates on an explicitly passed Session. Writes are grouped by
transaction(), reads by snapshot(); the session itself is owned (opened and
closed) by the caller, normally through inspection.database.db_session().
"""
import logging
from contextlib import contextmanager
from typing import Iterable, Iterator

from sqlalchemy import func, insert, select
from sqlalchemy.exc import DBAPIError, InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session

from inspection.errors import StoreReadError, StoreUnavailableError, StoreWriteError
from inspection.models.group import Group
from inspection.models.region import Region
from inspection.schemas.query import CropQuery
from inspection.schemas.region import RegionRecord
from inspection.services.region_store_base import GroupMember, RegionStore

logger = logging.getLogger(__name__)

# Rows per INSERT statement; keeps bound parameters under SQLite's limit
INSERT_BATCH_SIZE = 5000


class SqlRegionStore(RegionStore):
    """Region store on top of the inspection_group / inspection_region tables."""

    def __init__(self, session: Session, batch_size: int = INSERT_BATCH_SIZE):
        self.session = session
        self.batch_size = batch_size

    def _connect(self):
        """Acquire the session's connection, reporting transport failures."""
        try:
            return self.session.connection()
        except (OperationalError, InterfaceError) as e:
            raise StoreUnavailableError(f"Cannot connect to database: {e}") from e

    @staticmethod
    def _translate(e: SQLAlchemyError, error_cls, action: str):
        if isinstance(e, DBAPIError) and e.connection_invalidated:
            return StoreUnavailableError(f"Lost database connection while {action}: {e}")
        return error_cls(f"Database error while {action}: {e}")

    @contextmanager
    def transaction(self) -> Iterator["SqlRegionStore"]:
        self._connect()
        try:
            yield self
        except BaseException:
            self.session.rollback()
            raise
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise self._translate(e, StoreWriteError, "committing") from e

    @contextmanager
    def snapshot(self) -> Iterator["SqlRegionStore"]:
        if self.session.in_transaction():
            yield self
            return
        if self.session.get_bind().dialect.name == "postgresql":
            try:
                self.session.connection(
                    execution_options={"isolation_level": "REPEATABLE READ"}
                )
            except (OperationalError, InterfaceError) as e:
                raise StoreUnavailableError(f"Cannot connect to database: {e}") from e
        try:
            yield self
        finally:
            # Read-only; nothing to commit
            self.session.rollback()

    def insert_groups(self, ids: Iterable[int]) -> int:
        wanted = set(ids)
        if not wanted:
            return 0
        self._connect()
        try:
            existing = set(self.session.execute(select(Group.id)).scalars())
            missing = sorted(wanted - existing)
            for start in range(0, len(missing), self.batch_size):
                batch = missing[start:start + self.batch_size]
                self.session.execute(insert(Group), [{"id": gid} for gid in batch])
            self.session.flush()
        except SQLAlchemyError as e:
            raise self._translate(e, StoreWriteError, "inserting groups") from e
        logger.debug(f"Inserted {len(missing)} groups ({len(wanted) - len(missing)} already present)")
        return len(missing)

    def insert_regions(self, rows: Iterable[RegionRecord]) -> int:
        self._connect()
        count = 0
        batch: list[dict] = []
        try:
            for row in rows:
                batch.append(row.model_dump())
                if len(batch) >= self.batch_size:
                    self.session.execute(insert(Region), batch)
                    count += len(batch)
                    batch = []
            if batch:
                self.session.execute(insert(Region), batch)
                count += len(batch)
            self.session.flush()
        except SQLAlchemyError as e:
            raise self._translate(e, StoreWriteError, "inserting regions") from e
        logger.debug(f"Inserted {count} regions")
        return count

    def scan_regions(self, query: CropQuery) -> list[RegionRecord]:
        box = query.region
        stmt = select(
            Region.id,
            Region.group_id,
            Region.coord_x,
            Region.coord_y,
            Region.category,
        ).where(
            Region.coord_x.between(box.xmin, box.xmax),
            Region.coord_y.between(box.ymin, box.ymax),
        )
        if query.category is not None:
            stmt = stmt.where(Region.category == query.category)
        if query.one_of_groups is not None:
            stmt = stmt.where(Region.group_id.in_(sorted(query.one_of_groups)))

        self._connect()
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise self._translate(e, StoreReadError, "scanning regions") from e
        return [
            RegionRecord(
                id=row.id,
                group_id=row.group_id,
                coord_x=row.coord_x,
                coord_y=row.coord_y,
                category=row.category,
            )
            for row in rows
        ]

    def scan_all_regions(self) -> list[GroupMember]:
        stmt = select(Region.group_id, Region.coord_x, Region.coord_y)
        self._connect()
        try:
            rows = self.session.execute(stmt).all()
        except SQLAlchemyError as e:
            raise self._translate(e, StoreReadError, "scanning all regions") from e
        return [GroupMember(row.group_id, row.coord_x, row.coord_y) for row in rows]

    def count_regions(self) -> int:
        return self._count(Region.id, "counting regions")

    def count_groups(self) -> int:
        return self._count(Group.id, "counting groups")

    def _count(self, column, action: str) -> int:
        self._connect()
        try:
            return self.session.execute(select(func.count(column))).scalar_one()
        except SQLAlchemyError as e:
            raise self._translate(e, StoreReadError, action) from e
