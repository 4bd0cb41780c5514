"""
============================================================
TARJETA CRC — infrastructure/repositories/postgres/base.py
============================================================
Class: PostgresRepository

Responsibilities:
  - Resolver el pool (inyectado o global) de forma lazy.
  - Ejecutar queries parametrizadas con manejo de errores consistente:
    loguear con contexto y levantar PersistenceError encadenado.
  - Tratar timeouts (statement_timeout / pool) como PersistenceError, sin
    reintentar.

Collaborators:
  - psycopg / psycopg_pool
  - crosscutting.exceptions.PersistenceError
  - crosscutting.logger.logger
============================================================
"""

from __future__ import annotations

from typing import Iterable, Optional

import psycopg
from psycopg_pool import ConnectionPool

from ....crosscutting.exceptions import PersistenceError
from ....crosscutting.logger import logger
from ...db.errors import DatabasePoolError

_DB_ERRORS = (psycopg.Error, DatabasePoolError)


def like_pattern(term: str) -> str:
    """Patrón ILIKE '%term%' con comodines escapados."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresRepository:
    """R: Base con helpers de ejecución (DRY + errores consistentes)."""

    def __init__(self, pool: Optional[ConnectionPool] = None):
        # R: Pool inyectable para tests; en producción se obtiene por factory global.
        self._pool = pool

    def _get_pool(self) -> ConnectionPool:
        if self._pool is not None:
            return self._pool

        from ...db.pool import get_pool

        return get_pool()

    def _fetchall(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> list[tuple]:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchall()
        except _DB_ERRORS as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise PersistenceError(
                f"{context_msg}: {exc}", original_error=exc
            ) from exc

    def _fetchone(
        self, *, query: str, params: Iterable[object], context_msg: str, extra: dict
    ) -> tuple | None:
        try:
            with self._get_pool().connection() as conn:
                return conn.execute(query, tuple(params)).fetchone()
        except _DB_ERRORS as exc:
            logger.exception(context_msg, extra={**extra, "error": str(exc)})
            raise PersistenceError(
                f"{context_msg}: {exc}", original_error=exc
            ) from exc
