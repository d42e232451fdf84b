"""Prepared transaction catalog port.

This outbound port defines what recovery needs from a transaction-capable
store: run one statement listing the transactions left in the prepared
state and return every row. The connection and cursor protocols describe
the DB-API 2.0 subset the bundled adapter relies on, so any PEP 249
driver connection can be plugged in.

Row shape:
    (gid, prepared, owner, database), as in PostgreSQL's
    ``pg_prepared_xacts`` view.
"""

from __future__ import annotations

from abc import abstractmethod
from typing import Any, Protocol, Sequence


PREPARED_XACTS_QUERY = "SELECT gid, prepared, owner, database FROM pg_prepared_xacts;"
"""Statement listing pending prepared transactions."""

RECOVERY_ROW_WIDTH = 4

RecoveryRow = Sequence[Any]


class RecoveryCursor(Protocol):
    """DB-API cursor subset used for recovery."""

    @abstractmethod
    def execute(self, operation: str) -> Any:
        ...

    @abstractmethod
    def fetchall(self) -> Sequence[RecoveryRow]:
        ...

    @abstractmethod
    def close(self) -> Any:
        ...


class RecoveryConnection(Protocol):
    """DB-API connection subset used for recovery."""

    @abstractmethod
    def cursor(self) -> RecoveryCursor:
        ...


class PreparedXactSource(Protocol):
    """Protocol for reading the prepared transaction catalog.

    One call is one synchronous round trip. Implementations own whatever
    server-side resource the round trip needs and must release it before
    returning, on error paths too.
    """

    @abstractmethod
    def fetch_prepared(self, statement: str = PREPARED_XACTS_QUERY) -> list[RecoveryRow]:
        """Run ``statement`` and return all rows.

        Args:
            statement: Query returning (gid, prepared, owner, database) rows.

        Returns:
            The fetched rows, in store order.

        Raises:
            ResourceError: If the store fails at any step.
        """
        ...


class ResourceError(Exception):
    """Raised when the external store fails during recovery.

    Fatal for the current operation; nothing is retried and no partial
    result is returned. The store's own exception is kept as ``__cause__``.
    """

    pass
