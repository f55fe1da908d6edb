"""Index writer and reader.

Each record is ``name_width + 12`` bytes, big-endian:

    [0, W)      zone name, ASCII, NUL padded (at least one NUL)
    [W, W+4)    start offset in the blob (u32)
    [W+4, W+8)  length in bytes (u32)
    [W+8, W+12) raw UTC offset in seconds (i32)

Records are sorted by zone name so readers can binary search.
"""

from __future__ import annotations

import logging
import warnings
from pathlib import Path
from typing import Iterable, Literal, Mapping, Optional

from zone_compactor.core.errors import NameTooLongWarning, err

from ..l0.binary import pack_record, unpack_record
from .records import IndexEntry, ZoneRecord

logger = logging.getLogger(__name__)

LongNamePolicy = Literal["error", "truncate"]


def resolve_aliases(
    records: Mapping[str, ZoneRecord],
    aliases: Mapping[str, str],
) -> dict[str, ZoneRecord]:
    """Merge canonical records with one record per alias, copied from its target."""
    merged = dict(records)
    for alias in sorted(aliases):
        target = aliases[alias]
        record = records.get(target)
        if record is None:
            if target in aliases:
                detail = f"link '{alias}' targets '{target}', which is itself a link"
            else:
                detail = f"link '{alias}' targets '{target}', which is not a listed zone"
            raise err("E_LINK_UNRESOLVED", detail)
        merged[alias] = record.renamed(alias)
    return merged


def build_index_entries(
    records: Mapping[str, ZoneRecord],
    aliases: Mapping[str, str],
) -> list[ZoneRecord]:
    merged = resolve_aliases(records, aliases)
    return [merged[name] for name in sorted(merged)]


def encode_name(
    name: str,
    name_width: int,
    *,
    long_names: LongNamePolicy = "error",
    warnings_out: Optional[list[str]] = None,
) -> bytes:
    try:
        encoded = name.encode("ascii")
    except UnicodeEncodeError as exc:
        raise err("E_NAME_NOT_ASCII", f"zone name {name!r} is not ASCII") from exc
    if len(encoded) < name_width:
        return encoded
    limit = name_width - 1
    if long_names == "error":
        raise err(
            "E_NAME_TOO_LONG",
            f"zone name '{name}' is {len(encoded)} bytes; the index allows {limit}",
        )
    message = f"zone name '{name}' exceeds {limit} characters; truncated in index"
    logger.warning(message)
    if warnings_out is None:
        warnings.warn(message, NameTooLongWarning, stacklevel=2)
    else:
        warnings_out.append(message)
    return encoded[:limit]


def encode_index(
    entries: Iterable[ZoneRecord],
    name_width: int,
    *,
    long_names: LongNamePolicy = "error",
    warnings_out: Optional[list[str]] = None,
) -> bytes:
    buffer = bytearray()
    seen: dict[bytes, str] = {}
    for entry in entries:
        name_field = encode_name(
            entry.name, name_width, long_names=long_names, warnings_out=warnings_out
        )
        if name_field in seen:
            raise err(
                "E_NAME_TOO_LONG",
                f"zone names '{seen[name_field]}' and '{entry.name}' both map to index name "
                f"'{name_field.decode('ascii')}'",
            )
        seen[name_field] = entry.name
        buffer.extend(
            pack_record(
                name_field,
                entry.start,
                entry.length,
                entry.raw_offset_seconds,
                name_width=name_width,
            )
        )
    return bytes(buffer)


def write_index(
    path: Path,
    entries: Iterable[ZoneRecord],
    name_width: int,
    *,
    long_names: LongNamePolicy = "error",
    warnings_out: Optional[list[str]] = None,
) -> int:
    """Write the index file and return the number of records written."""
    payload = encode_index(
        entries, name_width, long_names=long_names, warnings_out=warnings_out
    )
    try:
        with path.open("wb") as handle:
            handle.write(payload)
    except OSError as exc:
        raise err("E_OUTPUT_IO", f"failed writing index '{path}': {exc}") from exc
    return len(payload) // (name_width + 12)


def decode_index(data: bytes, name_width: int) -> list[IndexEntry]:
    record_size = name_width + 12
    if len(data) % record_size:
        raise err(
            "E_INDEX_SIZE",
            f"index of {len(data)} bytes is not a whole number of {record_size}-byte records",
        )
    entries: list[IndexEntry] = []
    for offset in range(0, len(data), record_size):
        name, start, length, raw_offset = unpack_record(data, offset, name_width=name_width)
        entries.append(IndexEntry(name.decode("ascii", errors="replace"), start, length, raw_offset))
    return entries


def read_index(path: Path, name_width: int) -> list[IndexEntry]:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise err("E_OUTPUT_IO", f"cannot read index '{path}': {exc}") from exc
    return decode_index(data, name_width)
