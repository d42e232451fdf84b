"""Domain services.

The codec folds an Xid into the flat string a store keeps and back; the
recovery service turns a store's prepared transaction catalog into Xids.
"""

from xa_xid.domain.services.recovery import (
    RecoveryService,
    recover_pending,
    tpc_recover,
)
from xa_xid.domain.services.xid_codec import XID_PATTERN, decode, encode, ensure_xid

__all__ = [
    "XID_PATTERN",
    "encode",
    "decode",
    "ensure_xid",
    "recover_pending",
    "tpc_recover",
    "RecoveryService",
]
