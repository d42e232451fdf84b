"""Outbound adapters - implementations of outbound ports."""

from xa_xid.adapters.outbound.dbapi_source import DBAPIPreparedXactSource

__all__ = [
    "DBAPIPreparedXactSource",
]
