"""Transaction branch identifiers for two-phase commit.

An XA identifier is a triple (format_id, gtrid, bqual). Identifiers read
back from a store's recovery catalog may not follow that shape; those are
kept verbatim as *unparsed* identifiers so they can still be handed back
to the store.

References:
    - X/Open XA specification, section 4.2 (the XID structure)
    - pgjdbc RecoveredXid (flat string convention)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterator, Union


MAX_FORMAT_ID = 0x7FFFFFFF
"""Largest accepted format id (non-negative signed 32-bit integer)."""

MAX_PART_LENGTH = 64
"""Maximum length of gtrid and bqual."""

PRINTABLE_MIN = 0x20
PRINTABLE_MAX = 0x7E


class ValidationError(ValueError):
    """Raised when a (format_id, gtrid, bqual) triple violates XA constraints."""


def _check_part(name: str, value: str) -> None:
    if not isinstance(value, str):
        raise TypeError(f"{name} must be a string, got {type(value).__name__}")
    if len(value) > MAX_PART_LENGTH:
        raise ValidationError(
            f"{name} too long: at most {MAX_PART_LENGTH} characters allowed, "
            f"got {len(value)}"
        )
    for char in value:
        if not PRINTABLE_MIN <= ord(char) <= PRINTABLE_MAX:
            raise ValidationError(
                f"{name} not printable: character {ord(char):#04x} is outside "
                f"{PRINTABLE_MIN:#04x}-{PRINTABLE_MAX:#04x}"
            )


@dataclass(frozen=True, slots=True)
class StructuredXid:
    """A validated XA triple."""

    format_id: int
    gtrid: str
    bqual: str

    def __post_init__(self) -> None:
        if isinstance(self.format_id, bool) or not isinstance(self.format_id, int):
            raise TypeError(
                f"format_id must be an integer, got {type(self.format_id).__name__}"
            )
        if not 0 <= self.format_id <= MAX_FORMAT_ID:
            raise ValidationError(
                f"format_id out of range: must be a non-negative 32-bit integer, "
                f"got {self.format_id}"
            )
        _check_part("gtrid", self.gtrid)
        _check_part("bqual", self.bqual)


@dataclass(frozen=True, slots=True)
class UnparsedXid:
    """An identifier string that does not follow the XA flat encoding."""

    raw: str


XidForm = Union[StructuredXid, UnparsedXid]


@dataclass(frozen=True, slots=True, init=False, repr=False)
class Xid:
    """A transaction identifier used for two-phase commit.

    Build one from its XA components; the triple is validated on
    construction and the value is immutable afterwards. The object also
    behaves as a 3-item sequence ``(format_id, gtrid, bqual)``.

    ``prepared``, ``owner`` and ``database`` are only filled in for
    identifiers returned by recovery. They are opaque and take no part in
    equality or hashing: two ids naming the same transaction are equal.

    Example:
        >>> xid = Xid(42, "gtrid", "bqual")
        >>> str(xid)
        '42_Z3RyaWQ=_YnF1YWw='
        >>> format_id, gtrid, bqual = xid
        >>> format_id
        42
    """

    form: XidForm
    prepared: Any = field(compare=False)
    owner: Any = field(compare=False)
    database: Any = field(compare=False)

    def __init__(self, format_id: int, gtrid: str, bqual: str) -> None:
        object.__setattr__(self, "form", StructuredXid(format_id, gtrid, bqual))
        object.__setattr__(self, "prepared", None)
        object.__setattr__(self, "owner", None)
        object.__setattr__(self, "database", None)

    @classmethod
    def _from_form(
        cls,
        form: XidForm,
        prepared: Any = None,
        owner: Any = None,
        database: Any = None,
    ) -> Xid:
        """Build an instance around an existing form, bypassing validation.

        Used by the codec for unparsed strings and by recovery to attach
        catalog metadata.
        """
        self = cls.__new__(cls)
        object.__setattr__(self, "form", form)
        object.__setattr__(self, "prepared", prepared)
        object.__setattr__(self, "owner", owner)
        object.__setattr__(self, "database", database)
        return self

    @classmethod
    def from_string(cls, tid: str) -> Xid:
        """Parse a flat transaction id; see :func:`xa_xid.decode`."""
        from xa_xid.domain.services.xid_codec import decode

        return decode(tid)

    @property
    def is_unparsed(self) -> bool:
        """True if the identifier did not follow the XA flat encoding."""
        return isinstance(self.form, UnparsedXid)

    @property
    def format_id(self) -> int | None:
        if isinstance(self.form, UnparsedXid):
            return None
        return self.form.format_id

    @property
    def gtrid(self) -> str:
        if isinstance(self.form, UnparsedXid):
            return self.form.raw
        return self.form.gtrid

    @property
    def bqual(self) -> str | None:
        if isinstance(self.form, UnparsedXid):
            return None
        return self.form.bqual

    def __len__(self) -> int:
        return 3

    def __getitem__(self, index: int) -> Any:
        if index < 0:
            index += 3
        if index == 0:
            return self.format_id
        if index == 1:
            return self.gtrid
        if index == 2:
            return self.bqual
        raise IndexError("index out of range")

    def __iter__(self) -> Iterator[Any]:
        yield self.format_id
        yield self.gtrid
        yield self.bqual

    def __str__(self) -> str:
        from xa_xid.domain.services.xid_codec import encode

        return encode(self)

    def __repr__(self) -> str:
        parts = f"{self.format_id!r}, {self.gtrid!r}, {self.bqual!r}"
        for name in ("prepared", "owner", "database"):
            value = getattr(self, name)
            if value is not None:
                parts += f", {name}={value!r}"
        return f"Xid({parts})"
