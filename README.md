# sqlanalyzer

A small Flask service that runs lexical and syntactic analysis on simple SQL statements
and runs them against SQLite databases kept as files in a local directory.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

## Running the server

```
sqlanalyzer
```

Options:

- `--host` — address to bind (default `0.0.0.0`)
- `--port` — port to listen on (default: the `PORT` environment variable, or 8080)
- `--database-dir` — directory holding the database files (default `./databases`)

Databases are stored as `<name>.db` files in that directory, which is created at
start-up if it is missing. The server uses Flask's built-in development server.

## Endpoints

Every API reply is a JSON object with `success`, `message` and `data` keys.

| Method | Path                       | Body                               |
|--------|----------------------------|------------------------------------|
| POST   | `/api/lexical-analysis`    | statement fields (see below)       |
| POST   | `/api/syntactic-analysis`  | statement fields (see below)       |
| POST   | `/api/create-database`     | `{"database": "name"}`             |
| POST   | `/api/use-database`        | `{"database": "name"}`             |
| POST   | `/api/create-table`        | `{"query": "CREATE TABLE ..."}`    |
| POST   | `/api/insert-data`         | `{"query": "INSERT INTO ..."}`     |
| POST   | `/api/modify-data`         | `{"query": "UPDATE/DELETE ..."}`   |
| POST   | `/api/delete-database`     | `{"database": "name"}`             |
| GET    | `/api/database-info`       | none                               |
| GET    | `/health`                  | none                               |

The analysis endpoints take any of these string fields:
`createDB`, `useDB`, `createTable`, `insertData`, `modifyData`, `deleteDB`.

- `/api/lexical-analysis` returns the tokens and keywords of each statement that is not
  blank. `data` is `null` when every field is blank.
- `/api/syntactic-analysis` checks every non-empty statement against its expected form
  (`CREATE DATABASE name`, `USE DATABASE name`, `CREATE TABLE name (...)`,
  `INSERT INTO name [(...)] VALUES (...)`, `UPDATE name SET ... WHERE ...` or
  `DELETE FROM name WHERE ...`, `DROP DATABASE name`). If any is invalid, it answers with
  `success: false` and the list of errors. Otherwise it runs, in order, the create-database,
  use-database, create-table, insert and modify steps and returns both the syntactic result
  and the outcome of each step. `deleteDB` is validated but never run.

  The database name for the create and use steps is taken from the statement by pattern:
  for `useDB` it is the word right after `USE`, so a statement written as
  `USE DATABASE shop` selects a database called `DATABASE`, which normally does not exist.
  To work with a database created this way, select it with `/api/use-database`.
- `/api/create-database` fails if the file already exists; `/api/use-database` fails if it
  does not. `/api/delete-database` closes the connection first if that database is selected.
- `/api/create-table`, `/api/insert-data` and `/api/modify-data` run the query (one or more
  statements) against the selected database. The first two reject an empty query with 400.
- `/api/database-info` lists the tables of the selected database, their columns and up to
  100 rows of each.

A body that is not valid JSON gets a 400 reply; database failures get a 500 reply with the
error text as `message`. Cross-origin requests are allowed from any origin.

Example:

```
curl -X POST localhost:8080/api/create-database \
  -H 'Content-Type: application/json' -d '{"database": "shop"}'
curl -X POST localhost:8080/api/use-database \
  -H 'Content-Type: application/json' -d '{"database": "shop"}'
curl -X POST localhost:8080/api/create-table \
  -H 'Content-Type: application/json' \
  -d '{"query": "CREATE TABLE items (id INTEGER, name TEXT)"}'
curl localhost:8080/api/database-info
```

## Using it from Python

```python
from sqlanalyzer.lexical import analyze_lexical
from sqlanalyzer.syntactic import validate_create_table, SyntaxValidationError

analysis = analyze_lexical("SELECT name FROM items WHERE id >= 2")
print([token.value for token in analysis.keywords])

try:
    validate_create_table("CREATE TABLE items")
except SyntaxValidationError as exc:
    print(exc)
```

- `sqlanalyzer.lexical` — `tokenize`, `create_token`, `extract_keywords`,
  `analyze_lexical`, `analyze_lexical_batch` and the `TokenType` enum.
- `sqlanalyzer.syntactic` — one `validate_*` function per statement form, raising
  `SyntaxValidationError`, and `analyze_syntactic` for a whole `LexicalRequest`.
- `sqlanalyzer.database` — `DatabaseManager` (configured by `DatabaseConfig`) creates,
  selects, queries, describes and deletes database files, raising `DatabaseError`.
  It can be used as a context manager that closes the connection on exit.
- `sqlanalyzer.commands` — `extract_database_name` and `execute_commands_sequentially`.
- `sqlanalyzer.app` — `create_app(manager)` builds the Flask application; `main` starts it.

## What it does not do

No endpoint returns the rows produced by a query: queries are only run, and table
contents can be seen only through `/api/database-info`. There is no authentication, and
only one database is selected at a time for the whole server.