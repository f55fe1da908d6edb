"""Error types used across the compactor."""

from __future__ import annotations


class CompactorError(RuntimeError):
    """Base error for compaction failures.

    Every failure carries a canonical ``code`` (``ZC-<area>-<nnn>``) and a
    human readable ``detail`` so the CLI and the run report can record it
    without parsing messages.
    """

    def __init__(self, code: str, detail: str) -> None:
        super().__init__(f"{code}: {detail}")
        self.code = code
        self.detail = detail


class ManifestError(CompactorError):
    """Raised when the setup manifest cannot be used."""


class ManifestReadError(ManifestError):
    """Raised when the setup manifest cannot be read."""


class ManifestParseError(ManifestError):
    """Raised for a malformed manifest line."""


MalformedManifestError = ManifestParseError


class UnresolvedLinkError(ManifestParseError):
    """Raised when a link target is not a compacted zone."""


class ZoneFileIOError(CompactorError):
    """Raised when a zone source file is missing or unreadable."""


MissingZoneFileError = ZoneFileIOError


class ZoneDataError(CompactorError):
    """Raised when zone bytes cannot yield a raw offset."""


class CompactionError(CompactorError):
    """Raised when the blob or a record exceeds the index field ranges."""


class NameTooLongError(CompactorError):
    """Raised when a zone name does not fit the fixed-width name field."""


class IndexFormatError(CompactorError):
    """Raised when an index file does not decode into whole records."""


class OutputIOError(CompactorError):
    """Raised when an output artifact cannot be created, written or replaced."""


class NameTooLongWarning(UserWarning):
    """Issued when a zone name is truncated to fit the index name field."""


_CODES: dict[str, tuple[str, type[CompactorError]]] = {
    # ------------------------------------------------------------------ manifest
    "E_MANIFEST_UNREADABLE": ("ZC-M-001", ManifestReadError),
    "E_LINK_MALFORMED": ("ZC-M-010", ManifestParseError),
    "E_BLANK_LINE": ("ZC-M-011", ManifestParseError),
    "E_NAME_NOT_ASCII": ("ZC-M-012", ManifestParseError),
    "E_LINK_UNRESOLVED": ("ZC-M-020", UnresolvedLinkError),
    # ------------------------------------------------------------------ zones
    "E_ZONE_MISSING": ("ZC-Z-001", ZoneFileIOError),
    "E_ZONE_UNREADABLE": ("ZC-Z-002", ZoneFileIOError),
    "E_ZONE_OUT_OF_SCOPE": ("ZC-Z-003", ZoneFileIOError),
    "E_ZONE_DATA_INVALID": ("ZC-Z-010", ZoneDataError),
    # ------------------------------------------------------------------ blob
    "E_BLOB_TOO_LARGE": ("ZC-C-001", CompactionError),
    "E_OFFSET_RANGE": ("ZC-C-002", CompactionError),
    # ------------------------------------------------------------------ index
    "E_NAME_TOO_LONG": ("ZC-I-001", NameTooLongError),
    "E_INDEX_SIZE": ("ZC-I-010", IndexFormatError),
    # ------------------------------------------------------------------ outputs
    "E_OUTPUT_IO": ("ZC-O-001", OutputIOError),
}


def err(code: str, detail: str) -> CompactorError:
    """Build the error registered for ``code`` with its canonical code."""

    canonical, error_cls = _CODES.get(code, (code, CompactorError))
    return error_cls(canonical, detail)


__all__ = [
    "CompactionError",
    "CompactorError",
    "IndexFormatError",
    "MalformedManifestError",
    "ManifestError",
    "ManifestParseError",
    "ManifestReadError",
    "MissingZoneFileError",
    "NameTooLongError",
    "NameTooLongWarning",
    "OutputIOError",
    "UnresolvedLinkError",
    "ZoneDataError",
    "ZoneFileIOError",
    "err",
]
