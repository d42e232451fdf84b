"""Flat string codec for XA transaction identifiers.

Stores such as PostgreSQL identify a prepared transaction by a single
string, while XA works with a (format_id, gtrid, bqual) triple. The triple
is folded into one string using the pgjdbc convention so that identifiers
written by one client can be recovered by another:

    <format_id>_<base64(gtrid)>_<base64(bqual)>

Standard base64 never produces ``_``, so the separator is unambiguous.
Strings that do not decode into a valid triple, or that are not the exact
string :func:`encode` would produce for it, are kept verbatim as unparsed
identifiers; decoding never fails and always re-encodes to its input.
"""

from __future__ import annotations

import base64
import re

from xa_xid.domain.value_objects.xid import StructuredXid, UnparsedXid, Xid


XID_PATTERN = re.compile(r"^(\d+)_([^_]*)_([^_]*)$", re.ASCII)
"""Shape of a structured flat identifier: digits, then two base64 segments."""


def _b64encode(text: str) -> str:
    return base64.b64encode(text.encode("ascii")).decode("ascii")


def _b64decode(segment: str) -> str:
    """Strictly decode a base64 segment into ASCII text.

    Raises:
        ValueError: If the segment is not valid base64 or not ASCII.
    """
    return base64.b64decode(segment, validate=True).decode("ascii")


def encode(xid: Xid) -> str:
    """Return the flat string a store uses to identify ``xid``.

    Unparsed identifiers are returned verbatim.
    """
    form = xid.form
    if isinstance(form, UnparsedXid):
        return form.raw
    return _flatten(form)


def _flatten(form: StructuredXid) -> str:
    return f"{form.format_id:d}_{_b64encode(form.gtrid)}_{_b64encode(form.bqual)}"


def _parse_structured(tid: str) -> StructuredXid | None:
    match = XID_PATTERN.fullmatch(tid)
    if match is None:
        return None

    try:
        gtrid = _b64decode(match.group(2))
        bqual = _b64decode(match.group(3))
        form = StructuredXid(int(match.group(1)), gtrid, bqual)
    except ValueError:
        # not base64, or the decoded triple is not a valid XA id
        return None

    # Non-canonical spellings (leading zeros, stray padding bits) would
    # re-encode to a different gid than the one the store holds.
    if _flatten(form) != tid:
        return None
    return form


def decode(tid: str) -> Xid:
    """Build an identifier from its flat string form.

    If ``tid`` was produced by :func:`encode` (or by any client following
    the same convention) the XA triple is recovered. Otherwise, e.g. for a
    transaction prepared by hand, the result is an unparsed identifier with
    ``format_id`` and ``bqual`` set to None and ``gtrid`` set to ``tid``.

    Args:
        tid: Transaction id as stored, e.g. a ``gid`` from pg_prepared_xacts.

    Returns:
        The decoded identifier. This function does not raise for strings.
    """
    form = _parse_structured(tid)
    if form is None:
        return Xid._from_form(UnparsedXid(tid))
    return Xid._from_form(form)


def ensure_xid(value: Xid | str) -> Xid:
    """Coerce ``value`` into an identifier.

    Accepts either an :class:`Xid` (returned unchanged) or a string found
    in a store's recovery catalog (decoded).

    Raises:
        TypeError: If ``value`` is neither an Xid nor a string.
    """
    if isinstance(value, Xid):
        return value
    if isinstance(value, str):
        return decode(value)
    raise TypeError("not a valid transaction id")
