"""Ports layer - interface definitions following Hexagonal Architecture.

Outbound ports describe what this package needs from the outside world;
here that is a store able to list its prepared transactions.
"""

from xa_xid.ports.outbound import (
    PREPARED_XACTS_QUERY,
    PreparedXactSource,
    RecoveryConnection,
    RecoveryCursor,
    ResourceError,
)

__all__ = [
    "PREPARED_XACTS_QUERY",
    "PreparedXactSource",
    "RecoveryConnection",
    "RecoveryCursor",
    "ResourceError",
]
