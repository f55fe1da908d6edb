"""Big-endian integer and fixed-width record helpers for the zone index."""

from __future__ import annotations

import struct
from functools import lru_cache

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MAX = 2**32 - 1

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")


def fits_int32(value: int) -> bool:
    return INT32_MIN <= value <= INT32_MAX


def fits_uint32(value: int) -> bool:
    return 0 <= value <= UINT32_MAX


def pack_int32(value: int) -> bytes:
    """Two's complement, network byte order."""
    return _INT32.pack(value)


def pack_uint32(value: int) -> bytes:
    return _UINT32.pack(value)


def unpack_int32(buffer: bytes, offset: int = 0) -> int:
    return _INT32.unpack_from(buffer, offset)[0]


def unpack_uint32(buffer: bytes, offset: int = 0) -> int:
    return _UINT32.unpack_from(buffer, offset)[0]


@lru_cache(maxsize=None)
def record_struct(name_width: int) -> struct.Struct:
    """Layout of one index record: name field, start, length, raw offset."""
    return struct.Struct(f">{name_width}sIIi")


def pack_record(
    name_field: bytes,
    start: int,
    length: int,
    raw_offset_seconds: int,
    *,
    name_width: int,
) -> bytes:
    # struct pads short names with NUL and would silently cut long ones.
    if len(name_field) >= name_width:
        raise ValueError(f"name field of {len(name_field)} bytes leaves no terminator in {name_width}")
    return record_struct(name_width).pack(name_field, start, length, raw_offset_seconds)


def unpack_record(buffer: bytes, offset: int, *, name_width: int) -> tuple[bytes, int, int, int]:
    name_field, start, length, raw_offset = record_struct(name_width).unpack_from(buffer, offset)
    return name_field.split(b"\x00", 1)[0], start, length, raw_offset
