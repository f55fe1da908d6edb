"""Blob compactor: concatenates canonical zone files and records their spans."""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath
from typing import BinaryIO, Callable, Sequence

from zone_compactor.core.errors import CompactorError, err

from ..l0.binary import fits_int32, fits_uint32
from ..l0.tzif import raw_offset_seconds
from .records import ZoneRecord

logger = logging.getLogger(__name__)

OffsetReader = Callable[[bytes], int]


def resolve_zone_path(data_dir: Path, zone: str) -> Path:
    """Map a zone id such as ``Africa/Dakar`` onto a file under ``data_dir``."""
    parts = PurePosixPath(zone).parts
    if PurePosixPath(zone).is_absolute() or ".." in parts or "\\" in zone:
        raise err("E_ZONE_OUT_OF_SCOPE", f"zone '{zone}' escapes data directory '{data_dir}'")
    return data_dir.joinpath(*parts)


def read_zone_bytes(path: Path, zone: str) -> bytes:
    if not path.is_file():
        raise err("E_ZONE_MISSING", f"zone '{zone}' has no source file at '{path}'")
    try:
        return path.read_bytes()
    except OSError as exc:
        raise err("E_ZONE_UNREADABLE", f"zone '{zone}' could not be read from '{path}': {exc}") from exc


def compact_zones(
    zones: Sequence[str],
    data_dir: Path,
    blob: BinaryIO,
    offset_reader: OffsetReader = raw_offset_seconds,
) -> dict[str, ZoneRecord]:
    """Append each zone's bytes to ``blob`` in order and return its record by name.

    ``start`` of each record is the number of bytes written before it, so the
    records tile the blob exactly in ``zones`` order.
    """
    records: dict[str, ZoneRecord] = {}
    cursor = 0
    for zone in zones:
        if zone in records:
            continue
        path = resolve_zone_path(data_dir, zone)
        data = read_zone_bytes(path, zone)
        start = cursor
        cursor += len(data)
        if not fits_uint32(cursor):
            raise err(
                "E_BLOB_TOO_LARGE",
                f"blob exceeds {2**32 - 1} bytes while appending zone '{zone}'",
            )
        try:
            blob.write(data)
        except OSError as exc:
            raise err("E_OUTPUT_IO", f"failed appending zone '{zone}' to blob: {exc}") from exc
        offset = _read_offset(offset_reader, data, zone)
        records[zone] = ZoneRecord(name=zone, start=start, length=len(data), raw_offset_seconds=offset)
        logger.debug(
            "Compacted zone %s (start=%s, length=%s, raw_offset=%s)",
            zone,
            start,
            len(data),
            offset,
        )
    try:
        blob.flush()
    except OSError as exc:
        raise err("E_OUTPUT_IO", f"failed flushing blob: {exc}") from exc
    return records


def _read_offset(offset_reader: OffsetReader, data: bytes, zone: str) -> int:
    try:
        offset = int(offset_reader(data))
    except CompactorError as exc:
        raise err("E_ZONE_DATA_INVALID", f"zone '{zone}': {exc.detail}") from exc
    if not fits_int32(offset):
        raise err("E_OFFSET_RANGE", f"zone '{zone}' raw offset {offset}s does not fit int32")
    return offset
