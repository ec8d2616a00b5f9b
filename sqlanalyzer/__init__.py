"""Lexical and syntactic analysis of simple SQL statements, served over HTTP with SQLite storage."""

__version__ = "0.1.0"