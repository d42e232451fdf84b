"""DB-API 2.0 implementation of the prepared transaction catalog port."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from xa_xid.infrastructure.logging import get_logger
from xa_xid.ports.outbound.prepared_xacts import (
    PREPARED_XACTS_QUERY,
    RecoveryConnection,
    RecoveryCursor,
    RecoveryRow,
    ResourceError,
)


logger = get_logger(__name__)


class DBAPIPreparedXactSource:
    """Reads pending prepared transactions through a PEP 249 connection.

    Each call opens a fresh cursor, executes the statement, fetches all
    rows and closes the cursor before returning. Driver errors are
    re-raised as :class:`ResourceError`.

    Usage:
        source = DBAPIPreparedXactSource(psycopg2.connect(dsn))
        rows = source.fetch_prepared()
    """

    def __init__(self, connection: RecoveryConnection) -> None:
        self._connection = connection

    @property
    def connection(self) -> RecoveryConnection:
        return self._connection

    def fetch_prepared(self, statement: str = PREPARED_XACTS_QUERY) -> list[RecoveryRow]:
        with self._cursor() as cursor:
            try:
                cursor.execute(statement)
            except Exception as e:
                raise ResourceError(f"Recovery query failed: {e}") from e
            try:
                return list(cursor.fetchall())
            except Exception as e:
                raise ResourceError(f"Fetching prepared transactions failed: {e}") from e

    @contextmanager
    def _cursor(self) -> Iterator[RecoveryCursor]:
        try:
            cursor = self._connection.cursor()
        except Exception as e:
            raise ResourceError(f"Could not open cursor: {e}") from e

        try:
            yield cursor
        except BaseException:
            # Keep the original failure; a close error here is only logged.
            try:
                cursor.close()
            except Exception as close_error:
                logger.warning("recovery_cursor_close_failed", error=str(close_error))
            raise

        try:
            cursor.close()
        except Exception as e:
            raise ResourceError(f"Could not close cursor: {e}") from e
