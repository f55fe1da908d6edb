"""Version marker writer."""

from __future__ import annotations

from pathlib import Path

from zone_compactor.core.errors import err


def write_version(path: Path, version: str) -> None:
    """Write ``version`` exactly as given; no newline is appended."""
    try:
        path.write_bytes(version.encode("utf-8"))
    except OSError as exc:
        raise err("E_OUTPUT_IO", f"failed writing version marker '{path}': {exc}") from exc
