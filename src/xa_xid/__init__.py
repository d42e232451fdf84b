"""
xa_xid - XA transaction identifiers for two-phase commit

Value type, flat string codec and recovery helpers for distributed
transaction branch identifiers, interoperable with the pgjdbc encoding.
"""

__version__ = "0.1.0"
__author__ = "Systems Engineering Portfolio"

from xa_xid.domain.value_objects import ValidationError, Xid
from xa_xid.domain.services import (
    RecoveryService,
    decode,
    encode,
    ensure_xid,
    recover_pending,
    tpc_recover,
)
from xa_xid.ports.outbound import ResourceError

__all__ = [
    "Xid",
    "ValidationError",
    "ResourceError",
    "encode",
    "decode",
    "ensure_xid",
    "recover_pending",
    "tpc_recover",
    "RecoveryService",
]
