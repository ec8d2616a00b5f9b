"""Lexical analysis of simple SQL statements."""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum

from .models import LexicalRequest, StatementAnalysis, Token


class TokenType(str, Enum):
    """Categories a token can fall into."""

    KEYWORD = "KEYWORD"
    IDENTIFIER = "IDENTIFIER"
    NUMBER = "NUMBER"
    STRING = "STRING"
    OPERATOR = "OPERATOR"
    DELIMITER = "DELIMITER"
    SYMBOL = "SYMBOL"
    UNKNOWN = "UNKNOWN"


SQL_KEYWORDS = frozenset(
    {
        "CREATE", "DATABASE", "TABLE", "USE", "INSERT", "INTO", "VALUES",
        "UPDATE", "SET", "DELETE", "FROM", "WHERE", "SELECT", "DROP", "ALTER",
        "PRIMARY", "KEY", "FOREIGN", "NOT", "NULL", "UNIQUE", "INDEX", "AND",
        "OR", "IN", "LIKE", "BETWEEN", "ORDER", "BY", "GROUP", "HAVING", "JOIN",
        "INNER", "LEFT", "RIGHT", "OUTER", "ON", "AS", "DISTINCT", "COUNT",
        "SUM", "AVG", "MAX", "MIN", "INTEGER", "TEXT", "REAL", "BLOB",
        "NUMERIC", "VARCHAR", "CHAR", "BOOLEAN", "DATE", "TIME", "DATETIME",
        "TIMESTAMP",
    }
)

_NUMBER = re.compile(r"[0-9]+(\.[0-9]+)?")
_STRING = re.compile(r"'([^']*)'")
_IDENTIFIER = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")
_OPERATOR = re.compile(r"=|<>|!=|<=|>=|<|>|\+|-|\*|/")
_DELIMITER = re.compile(r"[(),;]")

# Checked in this order; the first full match decides the type.
_CLASSIFIERS = (
    (_STRING, TokenType.STRING),
    (_NUMBER, TokenType.NUMBER),
    (_OPERATOR, TokenType.OPERATOR),
    (_DELIMITER, TokenType.DELIMITER),
    (_IDENTIFIER, TokenType.IDENTIFIER),
)

_QUOTES = "'\""
_WHITESPACE = " \t\n\r"
_DELIMITERS = "(),;"
_OPERATOR_CHARS = "=<>!+-*/"


def create_token(value: str) -> Token:
    """Classify a single lexeme."""
    value = value.strip()
    if not value:
        return Token(value, TokenType.UNKNOWN.value)
    if value.upper() in SQL_KEYWORDS:
        return Token(value, TokenType.KEYWORD.value)
    for pattern, token_type in _CLASSIFIERS:
        if pattern.fullmatch(value):
            return Token(value, token_type.value)
    return Token(value, TokenType.SYMBOL.value)


def tokenize(statement: str) -> list[Token]:
    """Split a statement into tokens, keeping quoted text together."""
    text = statement.strip()
    tokens: list[Token] = []
    current: list[str] = []
    in_string = False
    quote = ""

    def flush() -> None:
        if current:
            tokens.append(create_token("".join(current)))
            current.clear()

    for index, char in enumerate(text):
        if char in _QUOTES:
            if not in_string:
                flush()
                in_string = True
                quote = char
                current.append(char)
            elif char == quote:
                current.append(char)
                flush()
                in_string = False
            else:
                current.append(char)
        elif in_string:
            current.append(char)
        elif char in _WHITESPACE:
            flush()
        elif char in _DELIMITERS:
            flush()
            tokens.append(create_token(char))
        elif char in _OPERATOR_CHARS:
            flush()
            # A two-character operator is emitted whole, but its second
            # character is still scanned on its own afterwards.
            pair = text[index:index + 2]
            if len(pair) == 2 and _OPERATOR.fullmatch(pair):
                tokens.append(create_token(pair))
            else:
                tokens.append(create_token(char))
        else:
            current.append(char)

    flush()
    return tokens


def extract_keywords(tokens: Iterable[Token]) -> list[Token]:
    """Keep only the keyword tokens."""
    return [token for token in tokens if token.type == TokenType.KEYWORD]


def analyze_lexical(statement: str) -> StatementAnalysis:
    """Tokenize one statement and pick out its keywords."""
    if not statement.strip():
        return StatementAnalysis(statement=statement, tokens=[], keywords=[])
    tokens = tokenize(statement)
    return StatementAnalysis(
        statement=statement,
        tokens=tokens,
        keywords=extract_keywords(tokens),
    )


def analyze_lexical_batch(request: LexicalRequest) -> list[StatementAnalysis]:
    """Analyze every non-blank statement of a request, in order."""
    return [
        analyze_lexical(statement)
        for statement in request.statements()
        if statement.strip()
    ]