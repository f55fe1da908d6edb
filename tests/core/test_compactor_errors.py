from pathlib import Path

import pytest

from zone_compactor.core.errors import (
    CompactorError,
    MalformedManifestError,
    ManifestParseError,
    MissingZoneFileError,
    NameTooLongError,
    UnresolvedLinkError,
    ZoneFileIOError,
    err,
)
from zone_compactor.core.hashing import sha256_file


@pytest.mark.parametrize(
    "code, canonical, error_cls",
    [
        ("E_LINK_MALFORMED", "ZC-M-010", ManifestParseError),
        ("E_LINK_UNRESOLVED", "ZC-M-020", UnresolvedLinkError),
        ("E_ZONE_MISSING", "ZC-Z-001", ZoneFileIOError),
        ("E_NAME_TOO_LONG", "ZC-I-001", NameTooLongError),
    ],
)
def test_err_maps_codes_to_classes(code, canonical, error_cls):
    error = err(code, "detail text")
    assert isinstance(error, error_cls)
    assert isinstance(error, CompactorError)
    assert error.code == canonical
    assert error.detail == "detail text"
    assert str(error) == f"{canonical}: detail text"


def test_err_unknown_code_passes_through():
    error = err("ZC-X-999", "odd")
    assert type(error) is CompactorError
    assert error.code == "ZC-X-999"


def test_legacy_aliases():
    assert MalformedManifestError is ManifestParseError
    assert MissingZoneFileError is ZoneFileIOError
    assert issubclass(UnresolvedLinkError, ManifestParseError)


def test_sha256_file(tmp_path: Path):
    path = tmp_path / "blob"
    path.write_bytes(b"abc")
    digest = sha256_file(path)
    assert digest.size_bytes == 3
    assert digest.sha256_hex == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert digest.as_dict()["sha256"] == digest.sha256_hex


def test_sha256_missing_file(tmp_path: Path):
    with pytest.raises(CompactorError):
        sha256_file(tmp_path / "absent")
