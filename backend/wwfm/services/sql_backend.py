"""
SQL search backend.

Runs the same search functions directly against Postgres through SQLAlchemy,
for deployments that reach the database without PostgREST. Queries run in a
worker thread since the engine is synchronous.
"""
import asyncio
import logging
from typing import Callable

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from wwfm.services.search_backend import RpcSearchBackend, CollaboratorUnavailable, RPC_FUNCTIONS

logger = logging.getLogger(__name__)


class SqlSearchBackend(RpcSearchBackend):
    """Calls `SELECT * FROM <function>(:arg)` with a fresh session per query."""

    def __init__(self, session_factory: Callable[[], Session]):
        self.session_factory = session_factory

    def _execute(self, operation: str, term: str) -> list[dict]:
        function, argument = RPC_FUNCTIONS[operation]
        # Function names come from the fixed RPC_FUNCTIONS table
        statement = text(f"SELECT * FROM {function}(:{argument})")

        logger.debug(f"SQL {function}({argument}={term!r})")
        db = self.session_factory()
        try:
            rows = db.execute(statement, {argument: term}).mappings().all()
            return [dict(row) for row in rows]
        except SQLAlchemyError as e:
            raise CollaboratorUnavailable(operation, str(e)) from e
        finally:
            db.close()

    async def _call(self, operation: str, term: str) -> list[dict]:
        return await asyncio.to_thread(self._execute, operation, term)
