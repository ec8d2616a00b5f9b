"""Running the statements of an analysis request against the databases."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from .database import DatabaseError, DatabaseManager
from .models import LexicalRequest

_NAME_PATTERNS = tuple(
    re.compile(pattern, re.IGNORECASE | re.ASCII)
    for pattern in (
        r"CREATE\s+DATABASE\s+([a-zA-Z_][a-zA-Z0-9_]*)",
        r"USE\s+([a-zA-Z_][a-zA-Z0-9_]*)",
        r"DROP\s+DATABASE\s+([a-zA-Z_][a-zA-Z0-9_]*)",
    )
)


def extract_database_name(command: str) -> str:
    """Pull the database name out of a CREATE/USE/DROP command.

    Falls back to the last whitespace-separated word, or an empty string.
    """
    for pattern in _NAME_PATTERNS:
        match = pattern.search(command)
        if match:
            return match.group(1)
    words = command.split()
    return words[-1] if words else ""


def _outcome(action: Callable[[], None], success_message: str) -> dict[str, Any]:
    try:
        action()
    except DatabaseError as exc:
        return {"success": False, "message": str(exc)}
    return {"success": True, "message": success_message}


def execute_commands_sequentially(
    manager: DatabaseManager, request: LexicalRequest
) -> dict[str, dict[str, Any]]:
    """Run the request's statements in order and report each outcome."""
    results: dict[str, dict[str, Any]] = {}

    if request.create_db != "":
        name = extract_database_name(request.create_db)
        if name:
            results["createDB"] = _outcome(
                lambda: manager.create_database(name),
                f"Base de datos creada: {name}",
            )

    if request.use_db != "":
        name = extract_database_name(request.use_db)
        if name:
            results["useDB"] = _outcome(
                lambda: manager.use_database(name),
                f"Usando base de datos: {name}",
            )

    queries = (
        ("createTable", request.create_table, "Tabla creada exitosamente"),
        ("insertData", request.insert_data, "Datos insertados exitosamente"),
        ("modifyData", request.modify_data, "Datos modificados exitosamente"),
    )
    for key, query, message in queries:
        if query != "":
            results[key] = _outcome(lambda q=query: manager.execute_query(q), message)

    return results