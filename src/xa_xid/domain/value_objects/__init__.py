"""Value objects for the transaction identifier domain.

Value objects are immutable; two identifiers with the same form and
recovery metadata are equal.

Exports:
    - Xid: Transaction branch identifier (format_id, gtrid, bqual)
    - StructuredXid, UnparsedXid: The two internal forms an Xid can take
    - ValidationError: Raised when a triple violates XA constraints
    - MAX_FORMAT_ID, MAX_PART_LENGTH: XA limits
"""

from xa_xid.domain.value_objects.xid import (
    MAX_FORMAT_ID,
    MAX_PART_LENGTH,
    StructuredXid,
    UnparsedXid,
    ValidationError,
    Xid,
    XidForm,
)

__all__ = [
    "Xid",
    "XidForm",
    "StructuredXid",
    "UnparsedXid",
    "ValidationError",
    "MAX_FORMAT_ID",
    "MAX_PART_LENGTH",
]
