import json
import struct
from pathlib import Path

import pytest

from zone_compactor.cli import run_compact, run_inspect


def _tzif(utoff: int, abbr: str) -> bytes:
    abbr_chars = abbr.encode("ascii") + b"\x00"
    counts = struct.pack(">6l", 0, 0, 0, 0, 1, len(abbr_chars))
    return b"TZif" + b"\x00" * 16 + counts + struct.pack(">lbB", utoff, 0, 0) + abbr_chars


def _write_inputs(base: Path) -> tuple[Path, Path]:
    data_dir = base / "data"
    (data_dir / "Africa").mkdir(parents=True)
    (data_dir / "Africa" / "Dakar").write_bytes(_tzif(0, "GMT"))
    (data_dir / "Asia").mkdir()
    (data_dir / "Asia" / "Kolkata").write_bytes(_tzif(19800, "IST"))
    setup = base / "setup"
    setup.write_text("Link Asia/Kolkata Asia/Calcutta\nAfrica/Dakar\nAsia/Kolkata\n", encoding="utf-8")
    return setup, data_dir


def test_compact_cli_writes_artifacts(tmp_path: Path, capsys):
    setup, data_dir = _write_inputs(tmp_path)
    output_dir = tmp_path / "out"
    report = tmp_path / "report.json"

    code = run_compact([str(setup), str(data_dir), str(output_dir), "2024a", "--run-report", str(report)])

    assert code == 0
    summary = json.loads(capsys.readouterr().out)
    assert summary["index_records"] == 3
    assert summary["zones"] == 2
    assert (output_dir / "zoneinfo.version").read_text(encoding="utf-8") == "2024a"
    assert json.loads(report.read_text(encoding="utf-8"))["status"] == "pass"


@pytest.mark.parametrize("argv", [[], ["setup", "data", "out"], ["a", "b", "c", "d", "e"]])
def test_compact_cli_usage_error_exits_two(argv, capsys):
    with pytest.raises(SystemExit) as exc:
        run_compact(argv)
    assert exc.value.code == 2
    assert "usage:" in capsys.readouterr().err


def test_compact_cli_reports_processing_error(tmp_path: Path, capsys):
    setup, data_dir = _write_inputs(tmp_path)
    setup.write_text("Link\n", encoding="utf-8")
    code = run_compact([str(setup), str(data_dir), str(tmp_path / "out"), "2024a"])
    assert code == 1
    assert "ZC-M-010" in capsys.readouterr().err


def test_compact_cli_config_and_long_name_flag(tmp_path: Path):
    setup, data_dir = _write_inputs(tmp_path)
    config = tmp_path / "settings.yaml"
    config.write_text("name_width: 12\n", encoding="utf-8")
    strict = run_compact(
        [str(setup), str(data_dir), str(tmp_path / "strict"), "v1", "--config", str(config)]
    )
    assert strict == 1

    lenient = run_compact(
        [
            str(setup),
            str(data_dir),
            str(tmp_path / "lenient"),
            "v1",
            "--config",
            str(config),
            "--allow-long-names",
        ]
    )
    assert lenient == 0
    assert (tmp_path / "lenient" / "zoneinfo.idx").stat().st_size == 3 * 24


def test_compact_cli_bad_config_is_usage_error(tmp_path: Path):
    setup, data_dir = _write_inputs(tmp_path)
    config = tmp_path / "settings.yaml"
    config.write_text("bogus: 1\n", encoding="utf-8")
    with pytest.raises(SystemExit) as exc:
        run_compact([str(setup), str(data_dir), str(tmp_path / "out"), "v1", "--config", str(config)])
    assert exc.value.code == 2


def test_inspect_cli_prints_records(tmp_path: Path, capsys):
    setup, data_dir = _write_inputs(tmp_path)
    output_dir = tmp_path / "out"
    assert run_compact([str(setup), str(data_dir), str(output_dir), "2024a"]) == 0
    capsys.readouterr()

    assert run_inspect([str(output_dir / "zoneinfo.idx"), "--name", "Asia/Calcutta"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert [json.loads(line) for line in lines] == [
        {"name": "Asia/Calcutta", "start": 54, "length": 54, "raw_offset_seconds": 19800}
    ]


def test_inspect_cli_rejects_wrong_width(tmp_path: Path, capsys):
    setup, data_dir = _write_inputs(tmp_path)
    output_dir = tmp_path / "out"
    assert run_compact([str(setup), str(data_dir), str(output_dir), "2024a"]) == 0
    capsys.readouterr()
    assert run_inspect([str(output_dir / "zoneinfo.idx"), "--name-width", "41"]) == 1
    assert "ZC-I-010" in capsys.readouterr().err
