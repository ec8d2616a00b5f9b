"""SQLite-backed storage for the databases managed through the API."""

from __future__ import annotations

import logging
import sqlite3
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .models import ColumnInfo, DatabaseInfo, TableInfo

logger = logging.getLogger(__name__)

_NO_SELECTION = "no hay ninguna base de datos seleccionada"
_ROW_LIMIT = 100


class DatabaseError(Exception):
    """A database operation could not be carried out."""


@dataclass(frozen=True)
class DatabaseConfig:
    """Where database files live and how they are named."""

    driver: str = "sqlite3"
    database_dir: str | Path = "./databases"
    extension: str = ".db"


class DatabaseManager:
    """Creates, selects, queries and removes SQLite database files."""

    def __init__(self, config: DatabaseConfig | None = None) -> None:
        self.config = config if config is not None else DatabaseConfig()
        self._connection: sqlite3.Connection | None = None
        self._current = ""
        self._lock = threading.RLock()

    def __enter__(self) -> DatabaseManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def directory(self) -> Path:
        return Path(self.config.database_dir)

    @property
    def current_database(self) -> str:
        """Name of the selected database, or an empty string."""
        return self._current

    def init(self) -> None:
        """Make sure the directory holding the databases exists."""
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DatabaseError(
                f"error al crear directorio de bases de datos: {exc}"
            ) from exc

    def database_path(self, name: str) -> Path:
        """The file that holds the database called ``name``."""
        return self.directory / f"{name}{self.config.extension}"

    def _connect(self, path: Path) -> sqlite3.Connection:
        return sqlite3.connect(str(path), isolation_level=None, check_same_thread=False)

    def create_database(self, name: str) -> None:
        """Create a new, empty database file."""
        path = self.database_path(name)
        logger.info("[CreateDatabase] Intentando crear BD en ruta: %s", path)

        directory = path.parent
        if not directory.exists():
            logger.info("[CreateDatabase] Directorio no existe, intentando crear: %s", directory)
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                raise DatabaseError(f"error al crear directorio para BD: {exc}") from exc

        if path.exists():
            raise DatabaseError(f"la base de datos '{name}' ya existe")

        try:
            connection = self._connect(path)
        except sqlite3.Error as exc:
            raise DatabaseError(f"error al crear la base de datos: {exc}") from exc
        try:
            connection.execute("SELECT 1")
        except sqlite3.Error as exc:
            raise DatabaseError(f"error al conectar con la base de datos: {exc}") from exc
        finally:
            connection.close()

        logger.info("[CreateDatabase] Base de datos creada con éxito")

    def use_database(self, name: str) -> None:
        """Select an existing database for later queries."""
        path = self.database_path(name)
        if not path.exists():
            raise DatabaseError(f"la base de datos '{name}' no existe")

        with self._lock:
            self._close_connection()
            try:
                connection = self._connect(path)
            except sqlite3.Error as exc:
                raise DatabaseError(f"error al conectar con la base de datos: {exc}") from exc
            try:
                connection.execute("SELECT 1")
            except sqlite3.Error as exc:
                connection.close()
                raise DatabaseError(f"error al verificar conexión: {exc}") from exc
            self._connection = connection
            self._current = name

    def delete_database(self, name: str) -> None:
        """Remove a database file, deselecting it first if it is selected."""
        with self._lock:
            if self._current == name and self._connection is not None:
                self._close_connection()
        try:
            self.database_path(name).unlink()
        except OSError as exc:
            raise DatabaseError(f"error al eliminar la base de datos: {exc}") from exc

    def execute_query(self, query: str) -> None:
        """Run one or more SQL statements against the selected database."""
        with self._lock:
            if self._connection is None:
                raise DatabaseError(_NO_SELECTION)
            try:
                self._connection.executescript(query)
            except sqlite3.Error as exc:
                raise DatabaseError(f"error al ejecutar consulta: {exc}") from exc

    def get_database_info(self) -> DatabaseInfo:
        """Describe the selected database: its tables, columns and first rows."""
        with self._lock:
            if self._connection is None or not self._current:
                raise DatabaseError(_NO_SELECTION)
            try:
                names = [
                    row[0]
                    for row in self._connection.execute(
                        "SELECT name FROM sqlite_master "
                        "WHERE type='table' AND name NOT LIKE 'sqlite_%'"
                    )
                ]
            except sqlite3.Error as exc:
                raise DatabaseError(f"error al obtener tablas: {exc}") from exc

            info = DatabaseInfo(name=self._current, tables=[])
            for table_name in names:
                try:
                    info.tables.append(self._table_info(table_name))
                except sqlite3.Error:
                    continue
            return info

    def _table_info(self, table_name: str) -> TableInfo:
        assert self._connection is not None
        columns = [
            ColumnInfo(name=row[1], type=row[2])
            for row in self._connection.execute(f"PRAGMA table_info({table_name})")
        ]
        table = TableInfo(name=table_name, columns=columns, data=[])

        try:
            cursor = self._connection.execute(
                f"SELECT * FROM {table_name} LIMIT {_ROW_LIMIT}"
            )
            names = [description[0] for description in cursor.description or ()]
            table.data = [
                {column: _plain_value(value) for column, value in zip(names, row)}
                for row in cursor
            ]
        except sqlite3.Error:
            table.data = []
        return table

    def _close_connection(self) -> None:
        if self._connection is not None:
            self._connection.close()
        self._connection = None
        self._current = ""

    def close(self) -> None:
        """Close the connection to the selected database, if any."""
        with self._lock:
            self._close_connection()


def _plain_value(value: Any) -> Any:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    return value