"""Digest helpers for published artifacts."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from pathlib import Path

from zone_compactor.core.errors import err


@dataclass(frozen=True)
class FileDigest:
    path: Path
    size_bytes: int
    sha256_hex: str

    def as_dict(self) -> dict[str, object]:
        return {
            "path": str(self.path),
            "size_bytes": self.size_bytes,
            "sha256": self.sha256_hex,
        }


def sha256_file(path: Path, chunk_size: int = 1024 * 1024) -> FileDigest:
    if not path.is_file():
        raise err("E_OUTPUT_IO", f"missing file for hashing: {path}")
    h = hashlib.sha256()
    size = 0
    with path.open("rb") as handle:
        while True:
            chunk = handle.read(chunk_size)
            if not chunk:
                break
            size += len(chunk)
            h.update(chunk)
    return FileDigest(path=path, size_bytes=size, sha256_hex=h.hexdigest())
