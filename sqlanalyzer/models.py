"""Request and response shapes exchanged by the SQL analyzer API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _string_field(data: Mapping[str, Any], key: str) -> str:
    """Read a string field, matching the key exactly first, then case-insensitively."""
    if key in data:
        value = data[key]
    else:
        folded = key.casefold()
        value = next(
            (v for k, v in data.items() if isinstance(k, str) and k.casefold() == folded),
            None,
        )
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field '{key}' must be a string")
    return value


def _require_mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError("request body must be a JSON object")
    return data


def _to_plain(value: Any) -> Any:
    """Turn models (and containers of them) into JSON-ready values."""
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Mapping):
        return {k: _to_plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_plain(v) for v in value]
    return value


@dataclass
class LexicalRequest:
    """The set of SQL statements submitted for analysis."""

    create_db: str = ""
    use_db: str = ""
    create_table: str = ""
    insert_data: str = ""
    modify_data: str = ""
    delete_db: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> LexicalRequest:
        data = _require_mapping(data)
        return cls(
            create_db=_string_field(data, "createDB"),
            use_db=_string_field(data, "useDB"),
            create_table=_string_field(data, "createTable"),
            insert_data=_string_field(data, "insertData"),
            modify_data=_string_field(data, "modifyData"),
            delete_db=_string_field(data, "deleteDB"),
        )

    def statements(self) -> list[str]:
        """All statements in their processing order, blanks included."""
        return [
            self.create_db,
            self.use_db,
            self.create_table,
            self.insert_data,
            self.modify_data,
            self.delete_db,
        ]


@dataclass
class DatabaseRequest:
    """A request naming a database."""

    database: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> DatabaseRequest:
        data = _require_mapping(data)
        return cls(database=_string_field(data, "database"))


@dataclass
class QueryRequest:
    """A request carrying a raw SQL query."""

    query: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> QueryRequest:
        data = _require_mapping(data)
        return cls(query=_string_field(data, "query"))


@dataclass
class APIResponse:
    """The envelope every API endpoint answers with."""

    success: bool
    message: str
    data: Any = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "message": self.message,
            "data": _to_plain(self.data),
        }


@dataclass(frozen=True)
class Token:
    """A lexical token and its category."""

    value: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"value": self.value, "type": str(self.type.value if hasattr(self.type, "value") else self.type)}


@dataclass
class StatementAnalysis:
    """The tokens and keywords found in one statement."""

    statement: str
    tokens: list[Token] = field(default_factory=list)
    keywords: list[Token] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "statement": self.statement,
            "tokens": [t.to_dict() for t in self.tokens],
            "keywords": [t.to_dict() for t in self.keywords],
        }


@dataclass(frozen=True)
class ColumnInfo:
    """A column's name and declared type."""

    name: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type}


@dataclass
class TableInfo:
    """A table's columns and a sample of its rows."""

    name: str
    columns: list[ColumnInfo] = field(default_factory=list)
    data: list[dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "columns": [c.to_dict() for c in self.columns],
            "data": [dict(row) for row in self.data],
        }


@dataclass
class DatabaseInfo:
    """The selected database and its tables."""

    name: str
    tables: list[TableInfo] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "tables": [t.to_dict() for t in self.tables]}


@dataclass
class SyntacticResult:
    """Outcome of validating a set of statements."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    parse_tree: str = ""
    command_type: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": list(self.errors),
            "parseTree": self.parse_tree,
            "commandType": self.command_type,
        }