"""Byte-level primitives for the zone compactor."""

from .binary import (
    INT32_MAX,
    INT32_MIN,
    UINT32_MAX,
    fits_int32,
    fits_uint32,
    pack_int32,
    pack_record,
    pack_uint32,
    record_struct,
    unpack_int32,
    unpack_record,
    unpack_uint32,
)
from .tzif import raw_offset_seconds

__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "UINT32_MAX",
    "fits_int32",
    "fits_uint32",
    "pack_int32",
    "pack_record",
    "pack_uint32",
    "raw_offset_seconds",
    "record_struct",
    "unpack_int32",
    "unpack_record",
    "unpack_uint32",
]
