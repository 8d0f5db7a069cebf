"""
SQLite-backed document store and its bootstrap.

Documents are stored as JSON text in a single ``documents`` table keyed
by ``(collection, id)``.  Field access, equality filters and ordering
are delegated to SQLite's JSON1 functions (``json_extract``,
``json_type``, ``json_set``), so queries, counts and increments each
run as one SQL statement.

``init_db`` creates the schema and applies pending migrations; it is
called by ``SqliteDocumentStore`` on construction.  Applied versions
are recorded in the ``migrations`` table.

The ``sqlite3`` module is blocking, so every operation runs in the
thread pool with its own connection.
"""

import json
import logging
import os
import sqlite3
from pathlib import Path
from typing import Any, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool

from .config import settings
from .store import (
    DESCENDING,
    Document,
    DocumentNotFoundError,
    DocumentQuery,
    DocumentRow,
    DocumentStore,
    StoreError,
    check_field_name,
    generate_document_id,
)


logger = logging.getLogger(__name__)

# Largest value SQLite accepts for LIMIT and OFFSET.
SQLITE_MAX_INTEGER = 2**63 - 1


MIGRATIONS: List[Tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS documents (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            data TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
            PRIMARY KEY (collection, id)
        );
        CREATE INDEX IF NOT EXISTS idx_documents_collection ON documents(collection);
        """,
    ),
]

# Cross-type ordering rank, matching ``store.type_rank``.
_TYPE_RANK_SQL = (
    "CASE json_type(data, ?) "
    "WHEN 'null' THEN 0 WHEN 'true' THEN 1 WHEN 'false' THEN 1 "
    "WHEN 'integer' THEN 2 WHEN 'real' THEN 2 WHEN 'text' THEN 3 ELSE 4 END"
)


def get_database_path(database_url: Optional[str] = None) -> str:
    """Compute the path to the SQLite database file.

    If the configured path is absolute (or the special ``:memory:``
    name), use it directly.  Otherwise resolve it relative to the
    project root.
    """
    db_url = database_url or settings.database_url
    if db_url == ":memory:" or os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # movie_rental_api/
    return str((base_dir / db_url).resolve())


def get_connection(db_path: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection with name-keyed rows."""
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    return conn


def init_db(db_path: str) -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new migrations defined in
    ``MIGRATIONS``.  Append new migrations with an incremented version.
    """
    conn = get_connection(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY, applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current = row["version"] or 0
        for version, sql in MIGRATIONS:
            if version <= current:
                continue
            cursor.executescript(sql)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            conn.commit()
            logger.info("Applied document store migration %s", version)
    finally:
        conn.close()


def _json_path(field: str) -> str:
    return f'$."{check_field_name(field)}"'


def _filter_clause(field: str, value: Any) -> Tuple[str, List[Any]]:
    """SQL condition and parameters for ``field == value``."""
    path = _json_path(field)
    if isinstance(value, bool):
        return "json_type(data, ?) = ?", [path, "true" if value else "false"]
    if value is None:
        return "json_type(data, ?) = 'null'", [path]
    if isinstance(value, (int, float)):
        return "json_type(data, ?) IN ('integer', 'real') AND json_extract(data, ?) = ?", [path, path, value]
    return "json_type(data, ?) = 'text' AND json_extract(data, ?) = ?", [path, path, value]


def _where(query: DocumentQuery) -> Tuple[str, List[Any]]:
    clauses = ["collection = ?"]
    params: List[Any] = [query.collection]
    for field, value in query.filters:
        clause, clause_params = _filter_clause(field, value)
        clauses.append(clause)
        params.extend(clause_params)
    # Ordered queries leave out documents that lack the ordering field.
    for field, _ in query.orders:
        clauses.append("json_type(data, ?) IS NOT NULL")
        params.append(_json_path(field))
    return " AND ".join(clauses), params


def _order_by(query: DocumentQuery) -> Tuple[str, List[Any]]:
    terms: List[str] = []
    params: List[Any] = []
    for field, direction in query.orders:
        sql_direction = "DESC" if direction == DESCENDING else "ASC"
        path = _json_path(field)
        terms.append(f"{_TYPE_RANK_SQL} {sql_direction}")
        terms.append(f"json_extract(data, ?) {sql_direction}")
        params.extend([path, path])
    terms.append("id DESC" if query.descending_ids else "id ASC")
    return ", ".join(terms), params


class SqliteDocumentStore(DocumentStore):
    """Document store persisting JSON documents in a SQLite file."""

    def __init__(self, database_url: Optional[str] = None) -> None:
        self.db_path = get_database_path(database_url)
        if self.db_path == ":memory:":
            # Every operation opens its own connection, so an in-memory
            # database would vanish between calls.
            raise ValueError("SqliteDocumentStore needs a file path; use InMemoryDocumentStore instead")
        init_db(self.db_path)

    def _run(self, operation, *args):
        conn = get_connection(self.db_path)
        try:
            result = operation(conn.cursor(), *args)
            conn.commit()
            return result
        except sqlite3.Error as exc:
            raise StoreError(f"SQLite error: {exc}") from exc
        finally:
            conn.close()

    async def _call(self, operation, *args):
        return await run_in_threadpool(self._run, operation, *args)

    @staticmethod
    def _dumps(fields: Document) -> str:
        try:
            return json.dumps(fields, allow_nan=False)
        except (TypeError, ValueError) as exc:
            raise StoreError(f"Document is not JSON serialisable: {exc}") from exc

    async def add_document(self, collection: str, fields: Document) -> str:
        data = self._dumps(fields)

        def insert(cursor: sqlite3.Cursor) -> str:
            while True:
                doc_id = generate_document_id()
                try:
                    cursor.execute(
                        "INSERT INTO documents (collection, id, data) VALUES (?, ?, ?)",
                        (collection, doc_id, data),
                    )
                    return doc_id
                except sqlite3.IntegrityError:
                    continue

        return await self._call(insert)

    async def get_document(self, collection: str, doc_id: str) -> Optional[Document]:
        def select(cursor: sqlite3.Cursor) -> Optional[Document]:
            row = cursor.execute(
                "SELECT data FROM documents WHERE collection = ? AND id = ?",
                (collection, doc_id),
            ).fetchone()
            return json.loads(row["data"]) if row else None

        return await self._call(select)

    async def update_document(self, collection: str, doc_id: str, fields: Document) -> None:
        assignments: List[str] = []
        params: List[Any] = []
        for field, value in fields.items():
            assignments.append("?, json(?)")
            params.extend([_json_path(field), self._dumps(value)])
        data_expr = f"json_set(data, {', '.join(assignments)})" if assignments else "data"

        def update(cursor: sqlite3.Cursor) -> None:
            cursor.execute(
                f"UPDATE documents SET data = {data_expr}, updated_at = CURRENT_TIMESTAMP "
                "WHERE collection = ? AND id = ?",
                (*params, collection, doc_id),
            )
            if cursor.rowcount == 0:
                raise DocumentNotFoundError(collection, doc_id)

        await self._call(update)

    async def delete_document(self, collection: str, doc_id: str) -> None:
        def delete(cursor: sqlite3.Cursor) -> None:
            cursor.execute("DELETE FROM documents WHERE collection = ? AND id = ?", (collection, doc_id))

        await self._call(delete)

    async def increment(self, collection: str, doc_id: str, field: str, amount: int = 1) -> None:
        path = _json_path(field)

        def increment(cursor: sqlite3.Cursor) -> None:
            cursor.execute(
                """
                UPDATE documents
                SET data = json_set(
                        data, ?,
                        CASE WHEN json_type(data, ?) IN ('integer', 'real')
                             THEN json_extract(data, ?) ELSE 0 END + ?
                    ),
                    updated_at = CURRENT_TIMESTAMP
                WHERE collection = ? AND id = ?
                """,
                (path, path, path, amount, collection, doc_id),
            )
            if cursor.rowcount == 0:
                raise DocumentNotFoundError(collection, doc_id)

        await self._call(increment)

    async def run_query(self, query: DocumentQuery) -> List[DocumentRow]:
        where, params = _where(query)
        order, order_params = _order_by(query)
        sql = f"SELECT id, data FROM documents WHERE {where} ORDER BY {order} LIMIT ? OFFSET ?"
        take = -1 if query.take is None else min(query.take, SQLITE_MAX_INTEGER)
        skip = min(query.skip, SQLITE_MAX_INTEGER)
        all_params = (*params, *order_params, take, skip)

        def select(cursor: sqlite3.Cursor) -> List[DocumentRow]:
            rows = cursor.execute(sql, all_params).fetchall()
            return [(row["id"], json.loads(row["data"])) for row in rows]

        return await self._call(select)

    async def count_query(self, query: DocumentQuery) -> int:
        where, params = _where(query)

        def count(cursor: sqlite3.Cursor) -> int:
            row = cursor.execute(f"SELECT COUNT(*) AS count FROM documents WHERE {where}", tuple(params)).fetchone()
            return row["count"]

        return await self._call(count)
