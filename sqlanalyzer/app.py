"""HTTP API exposing the SQL analyzer and the database operations."""

from __future__ import annotations

import argparse
import json
import logging
import os
import time
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

from flask import Flask, Response, g, jsonify, request

from .commands import execute_commands_sequentially
from .database import DatabaseConfig, DatabaseError, DatabaseManager
from .lexical import analyze_lexical_batch
from .models import APIResponse, DatabaseRequest, LexicalRequest, QueryRequest
from .syntactic import analyze_syntactic

logger = logging.getLogger(__name__)

_INVALID_INPUT = "Datos de entrada inválidos"
_ALLOWED_METHODS = "GET, POST, PUT, DELETE, OPTIONS"

_Model = TypeVar("_Model")


class _BindError(ValueError):
    """The request body could not be read into the expected shape."""


def _bind(parse: Callable[[Any], _Model]) -> _Model:
    raw = request.get_data(cache=True, as_text=True)
    if not raw.strip():
        raise _BindError("EOF")
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise _BindError(str(exc)) from exc
    try:
        return parse(payload)
    except ValueError as exc:
        raise _BindError(str(exc)) from exc


def _respond(status: int, success: bool, message: str, data: Any = None) -> tuple[Response, int]:
    return jsonify(APIResponse(success=success, message=message, data=data).to_dict()), status


def _parse_error(exc: _BindError) -> tuple[Response, int]:
    logger.error("Error binding JSON: %s", exc)
    return _respond(400, False, f"Error al parsear JSON: {exc}")


def create_app(manager: DatabaseManager | None = None) -> Flask:
    """Build the Flask application serving the analyzer API."""
    if manager is None:
        manager = DatabaseManager()
    app = Flask(__name__)
    app.extensions["database_manager"] = manager

    @app.before_request
    def _start_request() -> Response | None:
        g.started = time.perf_counter()
        logger.info("[%s] %s %s", request.remote_addr, request.method, request.path)
        if (
            request.method == "OPTIONS"
            and "Origin" in request.headers
            and "Access-Control-Request-Method" in request.headers
        ):
            preflight = Response(status=204)
            preflight.headers["Access-Control-Allow-Origin"] = "*"
            preflight.headers["Access-Control-Allow-Methods"] = _ALLOWED_METHODS
            preflight.headers["Access-Control-Allow-Headers"] = "*"
            preflight.headers["Access-Control-Max-Age"] = "43200"
            return preflight
        return None

    @app.after_request
    def _finish_request(response: Response) -> Response:
        if "Origin" in request.headers:
            response.headers["Access-Control-Allow-Origin"] = "*"
            response.headers.setdefault("Access-Control-Expose-Headers", "*")
        started = g.get("started")
        duration = time.perf_counter() - started if started is not None else 0.0
        logger.info(
            "[%s] %s %s - Status: %d - Duration: %.6fs",
            request.remote_addr,
            request.method,
            request.path,
            response.status_code,
            duration,
        )
        return response

    @app.post("/api/lexical-analysis")
    def lexical_analysis() -> tuple[Response, int]:
        try:
            req = _bind(LexicalRequest.from_dict)
        except _BindError:
            return _respond(400, False, _INVALID_INPUT)
        results = analyze_lexical_batch(req)
        return _respond(
            200,
            True,
            "Análisis léxico completado exitosamente",
            results or None,
        )

    @app.post("/api/syntactic-analysis")
    def syntactic_analysis() -> tuple[Response, int]:
        try:
            req = _bind(LexicalRequest.from_dict)
        except _BindError:
            return _respond(400, False, _INVALID_INPUT)
        result = analyze_syntactic(req)
        if not result.valid:
            return _respond(200, False, "Errores sintácticos encontrados", result)
        execution = execute_commands_sequentially(manager, req)
        return _respond(
            200,
            True,
            "Análisis sintáctico completado y comandos ejecutados",
            {"syntactic": result, "execution": execution},
        )

    @app.post("/api/create-database")
    def create_database() -> tuple[Response, int]:
        try:
            req = _bind(DatabaseRequest.from_dict)
        except _BindError as exc:
            return _parse_error(exc)
        try:
            manager.create_database(req.database)
        except DatabaseError as exc:
            logger.error("CreateDatabase failed: %s", exc)
            return _respond(500, False, str(exc))
        return _respond(200, True, f"Base de datos creada exitosamente: {req.database}")

    @app.post("/api/use-database")
    def use_database() -> tuple[Response, int]:
        try:
            req = _bind(DatabaseRequest.from_dict)
        except _BindError as exc:
            return _parse_error(exc)
        if req.database == "":
            return _respond(400, False, "Nombre de base de datos requerido")
        try:
            manager.use_database(req.database)
        except DatabaseError as exc:
            logger.error("UseDatabase failed: %s", exc)
            return _respond(500, False, str(exc))
        return _respond(200, True, f"Usando base de datos: {req.database}")

    def _run_query(success_message: str, require_query: bool) -> tuple[Response, int]:
        try:
            req = _bind(QueryRequest.from_dict)
        except _BindError as exc:
            return _parse_error(exc)
        if require_query and req.query == "":
            return _respond(400, False, "Query requerida")
        try:
            manager.execute_query(req.query)
        except DatabaseError as exc:
            logger.error("ExecuteQuery failed: %s", exc)
            return _respond(500, False, str(exc))
        return _respond(200, True, success_message)

    @app.post("/api/create-table")
    def create_table() -> tuple[Response, int]:
        return _run_query("Tabla creada exitosamente", require_query=True)

    @app.post("/api/insert-data")
    def insert_data() -> tuple[Response, int]:
        return _run_query("Datos insertados exitosamente", require_query=True)

    @app.post("/api/modify-data")
    def modify_data() -> tuple[Response, int]:
        return _run_query("Datos modificados exitosamente", require_query=False)

    @app.post("/api/delete-database")
    def delete_database() -> tuple[Response, int]:
        try:
            req = _bind(DatabaseRequest.from_dict)
        except _BindError as exc:
            return _parse_error(exc)
        try:
            manager.delete_database(req.database)
        except DatabaseError as exc:
            logger.error("DeleteDatabase failed: %s", exc)
            return _respond(500, False, str(exc))
        return _respond(200, True, f"Base de datos eliminada exitosamente: {req.database}")

    @app.get("/api/database-info")
    def database_info() -> tuple[Response, int]:
        try:
            info = manager.get_database_info()
        except DatabaseError as exc:
            logger.error("GetDatabaseInfo failed: %s", exc)
            return _respond(500, False, str(exc))
        return _respond(
            200, True, "Información de base de datos obtenida exitosamente", info
        )

    @app.get("/health")
    def health() -> tuple[Response, int]:
        return (
            jsonify(
                {
                    "status": "ok",
                    "time": datetime.now().astimezone().isoformat(timespec="seconds"),
                    "fixed": True,
                }
            ),
            200,
        )

    return app


def main(argv: list[str] | None = None) -> int:
    """Start the API server."""
    parser = argparse.ArgumentParser(description="SQL analyzer HTTP API")
    parser.add_argument("--host", default="0.0.0.0")
    parser.add_argument("--port", type=int, default=int(os.environ.get("PORT") or 8080))
    parser.add_argument("--database-dir", default=DatabaseConfig().database_dir)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO, format="%(asctime)s %(name)s:%(lineno)d %(message)s"
    )

    manager = DatabaseManager(DatabaseConfig(database_dir=args.database_dir))
    try:
        manager.init()
    except DatabaseError as exc:
        logger.critical("Error al inicializar la base de datos: %s", exc)
        raise SystemExit(1) from exc

    with manager:
        app = create_app(manager)
        logger.info("Server started on port %s", args.port)
        app.run(host=args.host, port=args.port)
    return 0