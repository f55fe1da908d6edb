"""Compaction stages: manifest parsing, blob compaction, index and version writing."""

from .blob import OffsetReader, compact_zones, read_zone_bytes, resolve_zone_path
from .index import (
    build_index_entries,
    decode_index,
    encode_index,
    encode_name,
    read_index,
    resolve_aliases,
    write_index,
)
from .manifest import parse_manifest, read_manifest
from .records import IndexEntry, SetupManifest, ZoneRecord
from .version import write_version

__all__ = [
    "IndexEntry",
    "OffsetReader",
    "SetupManifest",
    "ZoneRecord",
    "build_index_entries",
    "compact_zones",
    "decode_index",
    "encode_index",
    "encode_name",
    "parse_manifest",
    "read_index",
    "read_manifest",
    "read_zone_bytes",
    "resolve_aliases",
    "resolve_zone_path",
    "write_index",
    "write_version",
]
