import pytest
from pathlib import Path
import yaml  # type: ignore

from zone_compactor.core.config import CompactorSettings, DEFAULT_NAME_WIDTH, load_settings


def test_defaults_match_legacy_layout():
    settings = CompactorSettings()
    assert settings.name_width == DEFAULT_NAME_WIDTH == 40
    assert settings.record_size == 52
    assert settings.output_filenames == ("zoneinfo.dat", "zoneinfo.idx", "zoneinfo.version")
    assert settings.blank_lines == "skip"
    assert settings.long_names == "error"


def test_load_valid_settings(tmp_path):
    path = tmp_path / "settings.yaml"
    path.write_text(
        yaml.safe_dump({"name_width": 24, "long_names": "truncate", "index_filename": "tz.idx"}),
        encoding="utf-8",
    )
    settings = load_settings(path)
    assert settings.name_width == 24
    assert settings.record_size == 36
    assert settings.long_names == "truncate"
    assert settings.index_filename == "tz.idx"
    assert settings.data_filename == "zoneinfo.dat"


def test_empty_settings_file_yields_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_settings(path) == CompactorSettings()


def test_missing_settings_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_invalid_yaml_syntax(tmp_path):
    bad = tmp_path / "bad.yaml"
    bad.write_text("name_width: [1, 2", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(bad)


def test_extra_fields_forbidden(tmp_path):
    path = tmp_path / "extra.yaml"
    path.write_text(yaml.safe_dump({"unexpected": "oops"}), encoding="utf-8")
    with pytest.raises(ValueError) as exc:
        load_settings(path)
    assert "unexpected" in str(exc.value)


@pytest.mark.parametrize(
    "payload",
    [
        {"name_width": 1},
        {"blank_lines": "ignore"},
        {"long_names": "wrap"},
        {"data_filename": "same", "index_filename": "same"},
        {"version_filename": "nested/zoneinfo.version"},
    ],
)
def test_invalid_values_rejected(tmp_path: Path, payload):
    path = tmp_path / "invalid.yaml"
    path.write_text(yaml.safe_dump(payload), encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)


def test_top_level_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- 1\n- 2\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings(path)
