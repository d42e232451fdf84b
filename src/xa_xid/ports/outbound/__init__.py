"""Outbound ports - interfaces for external dependencies."""

from xa_xid.ports.outbound.prepared_xacts import (
    PREPARED_XACTS_QUERY,
    RECOVERY_ROW_WIDTH,
    PreparedXactSource,
    RecoveryConnection,
    RecoveryCursor,
    RecoveryRow,
    ResourceError,
)

__all__ = [
    "PREPARED_XACTS_QUERY",
    "RECOVERY_ROW_WIDTH",
    "PreparedXactSource",
    "RecoveryConnection",
    "RecoveryCursor",
    "RecoveryRow",
    "ResourceError",
]
