"""Recovery of pending two-phase-commit transactions.

After a crash, a transaction manager asks each participant which branches
are still sitting in the prepared state and decides whether to commit or
roll them back. The participant answers with rows of
``(gid, prepared, owner, database)``; this module turns them into
:class:`Xid` values carrying that metadata.

Identifiers written by an XA-aware client come back as structured
triples. Anything else (e.g. ``PREPARE TRANSACTION 'by-hand'``) comes back
unparsed, so it can still be passed to commit/rollback verbatim.
"""

from __future__ import annotations

import time
from typing import Iterable

from xa_xid.adapters.outbound.dbapi_source import DBAPIPreparedXactSource
from xa_xid.domain.services.xid_codec import decode
from xa_xid.domain.value_objects import Xid
from xa_xid.infrastructure.config import RecoveryConfig, get_config
from xa_xid.infrastructure.logging import get_logger
from xa_xid.infrastructure.metrics import XidMetrics, get_metrics
from xa_xid.infrastructure.tracing import trace_span
from xa_xid.ports.outbound.prepared_xacts import (
    RECOVERY_ROW_WIDTH,
    PreparedXactSource,
    RecoveryConnection,
    RecoveryRow,
    ResourceError,
)


logger = get_logger(__name__)


def _recovered_xid(row: RecoveryRow) -> Xid:
    try:
        gid, prepared, owner, database = row
    except (TypeError, ValueError) as e:
        raise ResourceError(
            f"Recovery row must have {RECOVERY_ROW_WIDTH} columns "
            f"(gid, prepared, owner, database), got {row!r}"
        ) from e
    if not isinstance(gid, str):
        raise ResourceError(f"Recovery gid must be a string, got {type(gid).__name__}")

    form = decode(gid).form
    return Xid._from_form(form, prepared=prepared, owner=owner, database=database)


def recover_pending(rows: Iterable[RecoveryRow]) -> list[Xid]:
    """Build identifiers from prepared transaction catalog rows.

    Output order matches input order. Decoding a gid cannot fail, so the
    only failures come from ``rows`` itself: an error raised while
    iterating it, or a row of the wrong width, aborts the whole batch.

    Args:
        rows: (gid, prepared, owner, database) rows, e.g. from fetchall().

    Returns:
        One Xid per row, with prepared/owner/database attached.

    Raises:
        ResourceError: If iterating ``rows`` fails or a row is malformed.
    """
    xids: list[Xid] = []
    iterator = iter(rows)
    while True:
        try:
            row = next(iterator)
        except StopIteration:
            break
        except ResourceError:
            raise
        except Exception as e:
            raise ResourceError(f"Reading recovery rows failed: {e}") from e
        xids.append(_recovered_xid(row))
    return xids


class RecoveryService:
    """Lists the transactions a store holds in the prepared state.

    One :meth:`recover` call is one round trip to the store: run the
    catalog query, fetch every row, release the cursor, then decode.
    Store failures surface as :class:`ResourceError` and no partial list
    is returned. Nothing is retried.

    Usage:
        service = RecoveryService(DBAPIPreparedXactSource(conn))
        for xid in service.recover():
            print(xid.format_id, xid.gtrid, xid.bqual, xid.prepared)
    """

    def __init__(
        self,
        source: PreparedXactSource,
        config: RecoveryConfig | None = None,
        metrics: XidMetrics | None = None,
    ) -> None:
        """Initialize the recovery service.

        Args:
            source: Port used to read the prepared transaction catalog.
            config: Recovery settings; defaults to the process configuration.
            metrics: Metrics registry; defaults to the global one.
        """
        self._source = source
        self._config = config or get_config().recovery
        self._metrics = metrics or get_metrics()

    @property
    def statement(self) -> str:
        return self._config.statement

    def recover(self) -> list[Xid]:
        """Return the pending prepared transactions, in store order.

        Raises:
            ResourceError: If the store fails at any step of the round trip.
        """
        start_time = time.perf_counter()
        logger.debug("xid_recovery_started", statement=self.statement)

        with trace_span("xid.recover", {"db.statement": self.statement}) as span:
            try:
                rows = self._source.fetch_prepared(self.statement)
                xids = recover_pending(rows)
            except ResourceError as e:
                self._metrics.recoveries_total.labels(status="error").inc()
                logger.error("xid_recovery_failed", error=str(e))
                raise

            unparsed = sum(1 for xid in xids if xid.is_unparsed)
            span.set_attribute("xid.count", len(xids))
            span.set_attribute("xid.unparsed", unparsed)

        self._metrics.recoveries_total.labels(status="success").inc()
        self._metrics.recovered_total.labels(form="structured").inc(len(xids) - unparsed)
        self._metrics.recovered_total.labels(form="unparsed").inc(unparsed)
        self._metrics.recovery_duration_seconds.observe(time.perf_counter() - start_time)

        logger.info(
            "xid_recovery_completed",
            count=len(xids),
            unparsed=unparsed,
        )
        return xids


def tpc_recover(
    connection: RecoveryConnection,
    config: RecoveryConfig | None = None,
    metrics: XidMetrics | None = None,
) -> list[Xid]:
    """Return the pending prepared transactions visible through ``connection``.

    Convenience wrapper building a :class:`RecoveryService` around a
    DB-API connection.
    """
    service = RecoveryService(DBAPIPreparedXactSource(connection), config, metrics)
    return service.recover()
