"""Dataclasses passed between the compaction stages."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import NamedTuple


@dataclass(frozen=True)
class SetupManifest:
    """Parsed setup file: link aliases and canonical zones in encounter order."""

    aliases: dict[str, str] = field(default_factory=dict)
    zones: list[str] = field(default_factory=list)
    ignored_links: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ZoneRecord:
    """Location of one zone's bytes inside the blob plus its raw UTC offset."""

    name: str
    start: int
    length: int
    raw_offset_seconds: int

    @property
    def end(self) -> int:
        return self.start + self.length

    def renamed(self, name: str) -> "ZoneRecord":
        return replace(self, name=name)


class IndexEntry(NamedTuple):
    """One record decoded from an index file."""

    name: str
    start: int
    length: int
    raw_offset_seconds: int
