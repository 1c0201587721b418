"""Shared plumbing for the SQLAlchemy repositories.

Subclasses name their ORM record class, the natural key column and the
columns ``update`` may write, and convert between aggregates and rows.
Every statement joins the caller's transaction when one is active.
"""

from __future__ import annotations

from sqlalchemy import insert, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError

from trading.domain.exceptions import IntegrityViolationError
from trading.infrastructure.persistence.database import Database
from trading.infrastructure.persistence.models import Base


class SqlTableRepository:

    record: type[Base]
    natural_key: str | None = None
    # Columns written by ``update``; everything else is fixed at insert.
    mutable_columns: tuple[str, ...] = ()

    def __init__(self, database: Database) -> None:
        self._db = database
        self._table = self.record.__table__

    # --- Common repository interface ------------------------------------------

    def find_by_id(self, row_id: int):
        with self._db.session() as session:
            record = session.get(self.record, row_id, populate_existing=True)
            return None if record is None else self._to_domain(record)

    def list_all(self) -> list:
        statement = select(self.record).order_by(self.record.id)
        with self._db.session() as session:
            records = session.scalars(
                statement.execution_options(populate_existing=True)
            ).all()
            return [self._to_domain(record) for record in records]

    def insert(self, aggregate) -> None:
        values = self._insert_values(aggregate)
        with self._db.session(write=True) as session:
            try:
                result = session.execute(insert(self._table).values(values))
            except IntegrityError as exc:
                raise IntegrityViolationError(
                    f"Cannot insert into {self._table.name}: {exc.orig}"
                ) from exc
            aggregate.id = result.inserted_primary_key[0]
        aggregate.version = 0

    def insert_if_absent(self, aggregate):
        """INSERT ... ON CONFLICT DO NOTHING, then re-select by natural key."""
        values = self._insert_values(aggregate)
        statement = (
            sqlite_insert(self._table)
            .values(values)
            .on_conflict_do_nothing(index_elements=[self.natural_key])
        )
        with self._db.session(write=True) as session:
            result = session.execute(statement)
            if result.rowcount:
                aggregate.id = result.inserted_primary_key[0]
                aggregate.version = 0
                return aggregate
            return self._find_by(self.natural_key, values[self.natural_key])

    def update(self, aggregate) -> int:
        """UPDATE ... WHERE id = :id AND version = :expected; returns rowcount."""
        raw = self._to_raw(aggregate)
        values = {column: raw[column] for column in self.mutable_columns}
        values["version"] = aggregate.version + 1
        statement = (
            update(self._table)
            .where(
                self._table.c.id == aggregate.id,
                self._table.c.version == aggregate.version,
            )
            .values(values)
        )
        with self._db.session(write=True) as session:
            affected = session.execute(statement).rowcount
        if affected:
            aggregate.version += 1
        return affected

    # --- Query helpers --------------------------------------------------------

    def _find_by(self, column: str, value: object):
        statement = select(self.record).where(getattr(self.record, column) == value)
        with self._db.session() as session:
            record = session.scalars(
                statement.execution_options(populate_existing=True)
            ).first()
            return None if record is None else self._to_domain(record)

    def _insert_values(self, aggregate) -> dict:
        raw = self._to_raw(aggregate)
        raw.pop("id", None)
        raw["version"] = 0
        return raw

    # --- Serialization (subclass hooks) ---------------------------------------

    @staticmethod
    def _to_raw(aggregate) -> dict:
        raise NotImplementedError

    @staticmethod
    def _to_domain(record):
        raise NotImplementedError
