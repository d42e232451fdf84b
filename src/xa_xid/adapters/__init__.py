"""Adapters layer - concrete implementations of port interfaces."""

from xa_xid.adapters.outbound import DBAPIPreparedXactSource

__all__ = [
    "DBAPIPreparedXactSource",
]
