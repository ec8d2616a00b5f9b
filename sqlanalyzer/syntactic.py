"""Syntactic validation of the supported SQL statements."""

from __future__ import annotations

import re

from .models import LexicalRequest, SyntacticResult

_WS = r"[\t\n\f\r ]"
_NAME = r"([a-zA-Z_][a-zA-Z0-9_]*)"


def _compile(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern.replace(r"\s", _WS), re.IGNORECASE)


_CREATE_DATABASE = _compile(rf"^\s*CREATE\s+DATABASE\s+{_NAME}\s*\Z")
_USE_DATABASE = _compile(rf"^\s*USE\s+DATABASE\s+{_NAME}\s*\Z")
_CREATE_TABLE = _compile(rf"^\s*CREATE\s+TABLE\s+{_NAME}\s*\((.*)\)\s*\Z")
_INSERT = _compile(rf"^\s*INSERT\s+INTO\s+{_NAME}\s*(\([^)]*\))?\s*VALUES\s*\(.*\)\s*\Z")
_UPDATE = _compile(rf"^\s*UPDATE\s+{_NAME}\s+SET\s+.+\s+WHERE\s+.+\Z")
_DELETE = _compile(rf"^\s*DELETE\s+FROM\s+{_NAME}\s+WHERE\s+.+\Z")
_DROP_DATABASE = _compile(rf"^\s*DROP\s+DATABASE\s+{_NAME}\s*\Z")


class SyntaxValidationError(ValueError):
    """A statement does not follow the expected syntax."""


def _require(pattern: re.Pattern[str], statement: str, message: str) -> None:
    if not pattern.match(statement):
        raise SyntaxValidationError(message)


def validate_create_database(statement: str) -> None:
    _require(
        _CREATE_DATABASE,
        statement,
        "sintaxis incorrecta. Formato esperado: CREATE DATABASE nombre_bd",
    )


def validate_use_database(statement: str) -> None:
    _require(
        _USE_DATABASE,
        statement,
        "sintaxis incorrecta. Formato esperado: USE DATABASE nombre_bd",
    )


def validate_create_table(statement: str) -> None:
    _require(
        _CREATE_TABLE,
        statement,
        "sintaxis incorrecta. Formato esperado: CREATE TABLE nombre_tabla (col1 tipo1, col2 tipo2)",
    )


def validate_insert(statement: str) -> None:
    _require(
        _INSERT,
        statement,
        "sintaxis incorrecta. Formato esperado: INSERT INTO tabla (cols) VALUES (vals)",
    )


def validate_modify(statement: str) -> None:
    """Accept either an UPDATE ... SET ... WHERE or a DELETE FROM ... WHERE."""
    if _UPDATE.match(statement) or _DELETE.match(statement):
        return
    raise SyntaxValidationError(
        "sintaxis incorrecta. Formato esperado: UPDATE tabla SET col=val WHERE condicion "
        "o DELETE FROM tabla WHERE condicion"
    )


def validate_drop_database(statement: str) -> None:
    _require(
        _DROP_DATABASE,
        statement,
        "sintaxis incorrecta. Formato esperado: DROP DATABASE nombre_bd",
    )


# (attribute, label for errors, command type, parse tree label, validator)
_CHECKS = (
    ("create_db", "CREATE DATABASE", "CREATE_DATABASE", "CREATE DATABASE", validate_create_database),
    ("use_db", "USE DATABASE", "USE_DATABASE", "USE DATABASE", validate_use_database),
    ("create_table", "CREATE TABLE", "CREATE_TABLE", "CREATE TABLE", validate_create_table),
    ("insert_data", "INSERT", "INSERT", "INSERT", validate_insert),
    ("modify_data", "MODIFY", "UPDATE_DELETE", "UPDATE/DELETE", validate_modify),
    ("delete_db", "DROP DATABASE", "DROP_DATABASE", "DROP DATABASE", validate_drop_database),
)


def analyze_syntactic(request: LexicalRequest) -> SyntacticResult:
    """Validate every non-empty statement of a request."""
    errors: list[str] = []
    tree_lines: list[str] = []
    command_types: list[str] = []

    for attribute, label, command_type, tree_label, validate in _CHECKS:
        statement = getattr(request, attribute)
        if statement == "":
            continue
        try:
            validate(statement)
        except SyntaxValidationError as exc:
            errors.append(f"{label}: {exc}")
        else:
            command_types.append(command_type)
            tree_lines.append(f"{tree_label} -> VALID\n")

    return SyntacticResult(
        valid=not errors,
        errors=errors,
        parse_tree="".join(tree_lines),
        command_type=", ".join(command_types),
    )