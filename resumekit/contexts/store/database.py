"""
Persistent SQLite store for profiles, resumes and templates.

The application talks to the store through a generic interface (select,
select_one, insert, update, delete) filtered by table, equality predicates
and sort order. Every call carries the caller Identity explicitly and is
checked against the table's access policy before any SQL runs. The store
also owns id generation and the created_at/updated_at columns.
"""

import os
import sqlite3
import uuid
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from dotenv import load_dotenv

from resumekit.contexts.store.access_control import Identity, caller_id, get_policy
from resumekit.contexts.store.exceptions import (
    AccessDeniedError,
    ImmutableColumnError,
    RecordNotFoundError,
    StoreError,
    StoreUnavailableError,
)
from resumekit.contexts.store.logger import _log_info, log_operation, log_rejection
from resumekit.contexts.store.schema import INDEXES, RESUME_TEMPLATES, TABLES, USERS, TableSchema
from resumekit.utils.timestamp import next_timestamp, now_exact

load_dotenv()
DB_PATH = Path(os.getenv("RESUMEKIT_DB_PATH", "outs/resumekit.db"))


class ResumeStore:
    """
    SQLite store with per-table access policies.

    The database is persistent - build once with create(), then load later
    by instantiating with the db_path.
    """

    def __init__(self, db_path: Path = DB_PATH):
        """
        Open an existing database.

        To create a new database, use ResumeStore.create() instead.

        Args:
            db_path: Path to existing SQLite database file

        Raises:
            FileNotFoundError: If database file doesn't exist
        """
        self.db_path = Path(db_path)

        if not self.db_path.exists():
            raise FileNotFoundError(
                f"Database not found: {self.db_path}\n"
                f"To create a new database, use ResumeStore.create()"
            )

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA foreign_keys = ON")

    @classmethod
    def create(
        cls,
        db_path: Path = DB_PATH,
        template_seeds: Iterable[Dict[str, Any]] = (),
        reset: bool = False,
    ) -> "ResumeStore":
        """
        Create the schema (if missing) and seed the template catalog.

        Seeding is idempotent: templates already present keep their stored values.

        Args:
            db_path: Path where the database lives
            template_seeds: Template rows to insert (see catalog.load_seed_templates)
            reset: Delete an existing database first

        Returns:
            ResumeStore connected to the database
        """
        db_path = Path(db_path)
        if reset and db_path.exists():
            db_path.unlink()

        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(db_path))
        for schema in TABLES.values():
            conn.execute(schema.ddl)
        for index in INDEXES:
            conn.execute(index)
        conn.commit()
        conn.close()

        store = cls(db_path)
        seeded = store._seed_templates(template_seeds)
        _log_info(f"Store ready at {db_path} ({seeded} template(s) seeded)")
        return store

    def close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "ResumeStore":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Generic policy-checked interface
    # ------------------------------------------------------------------

    def select(
        self,
        table: str,
        identity: Optional[Identity],
        filters: Optional[Dict[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Fetch rows visible to the caller.

        Args:
            table: Table name
            identity: Caller (None for anonymous)
            filters: Column -> value equality predicates
            order_by: Column to sort by
            descending: Sort direction

        Returns:
            List of decoded row dicts (invisible rows are silently absent)
        """
        schema = self._schema(table)
        predicate = self._predicate(schema, "select", identity)
        where, params = self._where(schema, predicate, filters, identity)

        sql = f"SELECT * FROM {table} WHERE {where}"
        if order_by:
            self._check_columns(schema, [order_by], "select")
            sql += f" ORDER BY {order_by} {'DESC' if descending else 'ASC'}"

        with self._transaction(table, "select"):
            rows = self.conn.execute(sql, params).fetchall()

        log_operation("select", table, caller_id(identity), len(rows))
        return [schema.decode(dict(row)) for row in rows]

    def select_one(
        self,
        table: str,
        identity: Optional[Identity],
        filters: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Fetch exactly one visible row.

        Raises:
            RecordNotFoundError: If no visible row matches
            StoreError: If more than one row matches
        """
        rows = self.select(table, identity, filters)
        if not rows:
            raise RecordNotFoundError(f"No row matching {filters}", table=table, operation="select")
        if len(rows) > 1:
            raise StoreError(
                f"Expected one row matching {filters}, found {len(rows)}",
                table=table,
                operation="select",
            )
        return rows[0]

    def insert(
        self,
        table: str,
        identity: Optional[Identity],
        row: Dict[str, Any],
    ) -> Dict[str, Any]:
        """
        Insert a row owned by the caller.

        The store assigns id, created_at and updated_at; missing columns get
        their table defaults. The owner column defaults to the caller.

        Returns:
            The stored row, decoded

        Raises:
            AccessDeniedError: If the table has no insert path or the row is owned by someone else
        """
        schema = self._schema(table)
        policy = get_policy(table)
        caller = caller_id(identity)

        if policy is None or not policy.insert_owned or caller is None:
            log_rejection("insert", table, caller, "no insert path for caller")
            raise AccessDeniedError("Insert not permitted", table=table, operation="insert")

        row = dict(row)
        owner = row.setdefault(schema.owner_column, caller)
        if owner != caller:
            log_rejection("insert", table, caller, f"row owned by {owner}")
            raise AccessDeniedError(
                "Cannot insert a row owned by another user", table=table, operation="insert"
            )

        self._check_columns(schema, row, "insert")
        return self._insert_row(schema, row, caller)

    def update(
        self,
        table: str,
        identity: Optional[Identity],
        values: Dict[str, Any],
        filters: Dict[str, Any],
    ) -> List[Dict[str, Any]]:
        """
        Update rows the caller may modify, refreshing updated_at.

        All matched rows are written in one transaction. Caller-supplied
        updated_at is ignored; updated_at becomes the current time and is
        always strictly greater than its previous value.

        Returns:
            The updated rows, decoded

        Raises:
            ImmutableColumnError: If values touch id, owner or created_at
            AccessDeniedError: If matching rows exist but the caller may not update them
            RecordNotFoundError: If no row matches the filters
        """
        schema = self._schema(table)
        predicate = self._predicate(schema, "update", identity)
        self._require_filters(schema, filters, "update")

        values = {k: v for k, v in values.items() if k != "updated_at"}
        touched = sorted(set(values) & set(schema.immutable_columns))
        if touched:
            log_rejection("update", table, caller_id(identity), f"immutable column(s) {touched}")
            raise ImmutableColumnError(
                f"Cannot change {', '.join(touched)}", table=table, operation="update"
            )
        self._check_columns(schema, values, "update")

        where, params = self._where(schema, predicate, filters, identity)
        encoded = schema.encode(values)

        with self._transaction(table, "update"):
            targets = self.conn.execute(
                f"SELECT * FROM {table} WHERE {where}", params
            ).fetchall()
            if not targets:
                self._raise_missing(schema, filters, identity, "update")

            for target in targets:
                assignments = dict(encoded)
                if schema.timestamped:
                    assignments["updated_at"] = next_timestamp(target["updated_at"])
                if not assignments:
                    continue
                set_clause = ", ".join(f"{column} = :v_{column}" for column in assignments)
                self.conn.execute(
                    f"UPDATE {table} SET {set_clause} WHERE id = :target_id",
                    {**{f"v_{k}": v for k, v in assignments.items()}, "target_id": target["id"]},
                )

            ids = [target["id"] for target in targets]
            placeholders = ",".join("?" * len(ids))
            rows = self.conn.execute(
                f"SELECT * FROM {table} WHERE id IN ({placeholders})", ids
            ).fetchall()

        log_operation("update", table, caller_id(identity), len(rows))
        return [schema.decode(dict(row)) for row in rows]

    def delete(
        self,
        table: str,
        identity: Optional[Identity],
        filters: Dict[str, Any],
    ) -> int:
        """
        Delete rows the caller may delete. Deletion is immediate and permanent.

        Returns:
            Number of deleted rows

        Raises:
            AccessDeniedError: If matching rows exist but the caller may not delete them
            RecordNotFoundError: If no row matches the filters
        """
        schema = self._schema(table)
        predicate = self._predicate(schema, "delete", identity)
        self._require_filters(schema, filters, "delete")
        where, params = self._where(schema, predicate, filters, identity)

        with self._transaction(table, "delete"):
            cursor = self.conn.execute(f"DELETE FROM {table} WHERE {where}", params)
            if cursor.rowcount == 0:
                self._raise_missing(schema, filters, identity, "delete")

        log_operation("delete", table, caller_id(identity), cursor.rowcount)
        return cursor.rowcount

    # ------------------------------------------------------------------
    # Identity table (used by accounts only; no application policy)
    # ------------------------------------------------------------------

    def create_user(self, email: str, password_hash: str, metadata: Dict[str, Any] = None) -> Dict[str, Any]:
        """Insert a new identity row. Raises StoreError if the email is taken."""
        row = {
            "id": str(uuid.uuid4()),
            "email": email,
            "password_hash": password_hash,
            "metadata": metadata or {},
            "created_at": now_exact(),
        }
        encoded = USERS.encode(row)
        columns = ", ".join(encoded)
        placeholders = ", ".join(f":{column}" for column in encoded)

        with self._transaction("users", "insert"):
            self.conn.execute(f"INSERT INTO users ({columns}) VALUES ({placeholders})", encoded)

        log_operation("insert", "users", row["id"], 1)
        return row

    def get_user_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        with self._transaction("users", "select"):
            row = self.conn.execute("SELECT * FROM users WHERE email = ?", (email,)).fetchone()
        return USERS.decode(dict(row)) if row else None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    @contextmanager
    def _transaction(self, table: str, operation: str):
        """Run a block in a transaction, translating sqlite3 errors into store errors."""
        try:
            with self.conn:
                yield
        except sqlite3.IntegrityError as e:
            raise StoreError(f"Constraint violated: {e}", table=table, operation=operation) from e
        except sqlite3.OperationalError as e:
            raise StoreUnavailableError(
                "Database unavailable", table=table, operation=operation, original_error=e
            ) from e
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}", table=table, operation=operation) from e

    def _schema(self, table: str) -> TableSchema:
        schema = TABLES.get(table)
        if schema is None:
            raise StoreError(f"Unknown table: {table}")
        return schema

    def _predicate(self, schema: TableSchema, operation: str, identity: Optional[Identity]) -> str:
        policy = get_policy(schema.name)
        predicate = policy.predicate(operation) if policy else None
        if predicate is None:
            log_rejection(operation, schema.name, caller_id(identity), "no access path")
            raise AccessDeniedError(
                f"{operation.capitalize()} not permitted", table=schema.name, operation=operation
            )
        return predicate

    def _check_columns(self, schema: TableSchema, columns: Iterable[str], operation: str) -> None:
        unknown = sorted(set(columns) - set(schema.columns))
        if unknown:
            raise StoreError(
                f"Unknown column(s) {', '.join(unknown)}", table=schema.name, operation=operation
            )

    def _require_filters(self, schema: TableSchema, filters: Dict[str, Any], operation: str) -> None:
        if not filters:
            raise StoreError(
                f"{operation.capitalize()} requires at least one filter",
                table=schema.name,
                operation=operation,
            )

    def _where(
        self,
        schema: TableSchema,
        predicate: str,
        filters: Optional[Dict[str, Any]],
        identity: Optional[Identity],
    ):
        """Combine the policy predicate with equality filters into a WHERE clause."""
        filters = filters or {}
        self._check_columns(schema, filters, "filter")

        clauses = [predicate]
        params = {"caller": caller_id(identity)}
        for column, value in schema.encode(filters).items():
            clauses.append(f"{column} = :f_{column}")
            params[f"f_{column}"] = value

        return " AND ".join(clauses), params

    def _raise_missing(
        self,
        schema: TableSchema,
        filters: Dict[str, Any],
        identity: Optional[Identity],
        operation: str,
    ) -> None:
        """Distinguish 'exists but not yours' from 'does not exist' for a failed write."""
        where, params = self._where(schema, "1 = 1", filters, identity)
        exists = self.conn.execute(
            f"SELECT 1 FROM {schema.name} WHERE {where} LIMIT 1", params
        ).fetchone()
        caller = caller_id(identity)

        if exists:
            log_rejection(operation, schema.name, caller, "row owned by another user")
            raise AccessDeniedError(
                f"{operation.capitalize()} not permitted on {filters}",
                table=schema.name,
                operation=operation,
            )
        raise RecordNotFoundError(f"No row matching {filters}", table=schema.name, operation=operation)

    def _insert_row(self, schema: TableSchema, row: Dict[str, Any], caller: Optional[str]) -> Dict[str, Any]:
        timestamp = now_exact()
        row = {column: value for column, value in row.items() if column not in ("created_at", "updated_at")}
        row.setdefault("id", str(uuid.uuid4()))
        for column, default in schema.defaults.items():
            if row.get(column) is None:
                row[column] = default()
        row["created_at"] = timestamp
        if schema.timestamped:
            row["updated_at"] = timestamp

        encoded = schema.encode(row)
        columns = ", ".join(encoded)
        placeholders = ", ".join(f":{column}" for column in encoded)

        with self._transaction(schema.name, "insert"):
            self.conn.execute(
                f"INSERT INTO {schema.name} ({columns}) VALUES ({placeholders})", encoded
            )
            stored = self.conn.execute(
                f"SELECT * FROM {schema.name} WHERE id = ?", (row["id"],)
            ).fetchone()

        log_operation("insert", schema.name, caller, 1)
        return schema.decode(dict(stored))

    def _seed_templates(self, template_seeds: Iterable[Dict[str, Any]]) -> int:
        """Insert catalog templates that are not already present."""
        seeded = 0
        with self._transaction(RESUME_TEMPLATES.name, "insert"):
            for seed in template_seeds:
                row = {column: seed.get(column) for column in RESUME_TEMPLATES.columns if column in seed}
                for column, default in RESUME_TEMPLATES.defaults.items():
                    if row.get(column) is None:
                        row[column] = default()
                row["created_at"] = now_exact()
                encoded = RESUME_TEMPLATES.encode(row)
                columns = ", ".join(encoded)
                placeholders = ", ".join(f":{column}" for column in encoded)
                cursor = self.conn.execute(
                    f"INSERT OR IGNORE INTO {RESUME_TEMPLATES.name} ({columns}) VALUES ({placeholders})",
                    encoded,
                )
                seeded += cursor.rowcount
        return seeded
