"""SQLAlchemy implementation of the ``LocalStore`` port."""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError

from bibsync.domain.errors import FatalError, NotFoundError, TransientError
from bibsync.domain.ports.local_store import GroupRef

from .tables import group_publications_table, groups_table, publications_table

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Connection, Engine

    from bibsync.domain.ports.local_store import LocalStore, RecordId, RecordQuery
    from bibsync.domain.types import Record, RecordView

log = getLogger(__name__)

_LOCKED_MESSAGE = "database is locked"


@contextmanager
def _store_errors(command: str) -> Iterator[None]:
    try:
        yield
    except OperationalError as exc:
        if _LOCKED_MESSAGE in str(exc.orig):
            raise TransientError(f"Local store timed out: {exc.orig}", command=command) from exc
        raise FatalError(str(exc.orig), command=command) from exc
    except SQLAlchemyError as exc:
        raise FatalError(str(exc), command=command) from exc


class SqlAlchemyLocalStore:
    """Publications with free-form JSON properties, organised in named groups.

    Every call runs in its own transaction.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @contextmanager
    def _transaction(self, command: str) -> Iterator[Connection]:
        with _store_errors(command), self.engine.begin() as connection:
            yield connection

    def search(self, query: RecordQuery) -> list[Record]:
        command = f"search({query.field}={query.value!r})"
        properties = publications_table.c.properties
        stmt = (
            select(publications_table.c.id, properties)
            .where(properties[query.field].as_string() == query.value)
            .order_by(publications_table.c.id)
        )
        with self._transaction(command) as connection:
            rows = connection.execute(stmt).all()
        return [_to_record(row.id, row.properties) for row in rows]

    def insert(self, record: RecordView, group: GroupRef) -> RecordId:
        command = f"insert(group={group.id})"
        with self._transaction(command) as connection:
            self._require_group(connection, group.id, command)
            result = connection.execute(
                insert(publications_table).values(properties=dict(record))
            )
            record_id = cast(int, result.inserted_primary_key[0])
            connection.execute(
                insert(group_publications_table).values(
                    group_id=group.id, publication_id=record_id
                )
            )
        log.debug("Inserted publication %s into group %s", record_id, group.id)
        return record_id

    def update(self, record_id: RecordId, changes: RecordView) -> None:
        command = f"update({record_id}, {sorted(changes)})"
        with self._transaction(command) as connection:
            current = connection.execute(
                select(publications_table.c.properties).where(publications_table.c.id == record_id)
            ).scalar_one_or_none()
            if current is None:
                raise NotFoundError(f"Publication {record_id} does not exist", command=command)
            merged = {**cast(dict[str, Any], current), **changes}
            connection.execute(
                update(publications_table)
                .where(publications_table.c.id == record_id)
                .values(properties=merged)
            )

    def delete(self, record_id: RecordId) -> None:
        command = f"delete({record_id})"
        with self._transaction(command) as connection:
            connection.execute(
                delete(group_publications_table).where(
                    group_publications_table.c.publication_id == record_id
                )
            )
            result = connection.execute(
                delete(publications_table).where(publications_table.c.id == record_id)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Publication {record_id} does not exist", command=command)

    def find_group(self, pattern: str) -> GroupRef | None:
        command = f"find_group({pattern!r})"
        stmt = (
            select(groups_table.c.id, groups_table.c.name)
            .where(groups_table.c.name.contains(pattern, autoescape=True))
            .order_by(groups_table.c.id)
            .limit(1)
        )
        with self._transaction(command) as connection:
            row = connection.execute(stmt).first()
        if row is None:
            return None
        return GroupRef(id=row.id, name=row.name)

    def create_group(self, name: str) -> GroupRef:
        command = f"create_group({name!r})"
        with self._transaction(command) as connection:
            result = connection.execute(insert(groups_table).values(name=name))
            group_id = cast(int, result.inserted_primary_key[0])
        return GroupRef(id=group_id, name=name)

    def rename_group(self, group: GroupRef, new_name: str) -> GroupRef:
        command = f"rename_group({group.id}, {new_name!r})"
        with self._transaction(command) as connection:
            result = connection.execute(
                update(groups_table).where(groups_table.c.id == group.id).values(name=new_name)
            )
            if result.rowcount == 0:
                raise NotFoundError(f"Group {group.id} does not exist", command=command)
        return GroupRef(id=group.id, name=new_name)

    def delete_group(self, group: GroupRef) -> None:
        """Delete the group; its publications stay in the store."""

        command = f"delete_group({group.id})"
        with self._transaction(command) as connection:
            connection.execute(
                delete(group_publications_table).where(
                    group_publications_table.c.group_id == group.id
                )
            )
            result = connection.execute(delete(groups_table).where(groups_table.c.id == group.id))
            if result.rowcount == 0:
                raise NotFoundError(f"Group {group.id} does not exist", command=command)

    def group_members(self, group: GroupRef) -> list[RecordId]:
        stmt = (
            select(group_publications_table.c.publication_id)
            .where(group_publications_table.c.group_id == group.id)
            .order_by(group_publications_table.c.publication_id)
        )
        with self._transaction(f"group_members({group.id})") as connection:
            return list(connection.execute(stmt).scalars())

    @staticmethod
    def _require_group(connection: Connection, group_id: int, command: str) -> None:
        found = connection.execute(
            select(groups_table.c.id).where(groups_table.c.id == group_id)
        ).first()
        if found is None:
            raise NotFoundError(f"Group {group_id} does not exist", command=command)


def _to_record(record_id: int, properties: object) -> Record:
    record = dict(cast(dict[str, Any], properties or {}))
    record["id"] = record_id
    return record


if TYPE_CHECKING:
    _store_check: LocalStore = SqlAlchemyLocalStore(cast("Engine", object()))
