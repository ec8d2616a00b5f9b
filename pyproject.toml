[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "sqlanalyzer"
version = "0.1.0"
description = "HTTP API for lexical and syntactic analysis of SQL statements, backed by SQLite databases"
requires-python = ">=3.10"
keywords = ["sql", "lexer", "parser", "sqlite", "http", "api", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Framework :: Flask",
    "Operating System :: OS Independent",
    "Topic :: Internet :: WWW/HTTP :: HTTP Servers",
    "Topic :: Database",
]
dependencies = [
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
sqlanalyzer = "sqlanalyzer.app:main"

[tool.hatch.build.targets.wheel]
packages = ["sqlanalyzer"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
