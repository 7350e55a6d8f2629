import importlib.util
import struct
from pathlib import Path

import pandas as pd

from oven_thermo_analyzer.tests.gbd_samples import build_gbd


def _load_cli():
    path = Path(__file__).resolve().parents[1] / "scripts" / "inspect_gbd.py"
    mod_spec = importlib.util.spec_from_file_location("inspect_gbd", path)
    mod = importlib.util.module_from_spec(mod_spec)
    assert mod_spec.loader is not None
    mod_spec.loader.exec_module(mod)
    return mod


def _write_three_records(tmp_path: Path) -> Path:
    header = b"Trigger=2024-01-01 08:00:00\nSample=2s\nMaxCH=2\nHeaderSiz=64\n"
    header += b" " * (64 - len(header))
    body = b"".join(struct.pack(">hhhh", a, b, 0, 0) for a, b in [(100, 200), (150, -50), (999, 999)])
    p = tmp_path / "OVEN_A.GBD"
    p.write_bytes(header + body)
    return p


def test_cli_prints_readings(tmp_path: Path, capsys) -> None:
    cli = _load_cli()
    p = _write_three_records(tmp_path)
    rc = cli.main([str(p), "--offset", "2", "--channels", "1,2,3,11"])
    out = capsys.readouterr().out
    assert rc == 0
    assert "records:   3" in out
    assert "target:    2024-01-01 08:00:02.0" in out
    assert "ch 1 [ 1-10]: 15.0°C" in out
    assert "ch 2 [ 1-10]: -5.0°C" in out
    assert "ch 3 [ 1-10]: N/A" in out
    assert "ch11 [11-20]: N/A" in out


def test_cli_writes_csv(tmp_path: Path) -> None:
    cli = _load_cli()
    p = tmp_path / "run.gbd"
    p.write_bytes(build_gbd([[250, 260], [251, 261]]))
    out_csv = tmp_path / "run.csv"
    assert cli.main([str(p), "--csv", str(out_csv)]) == 0
    df = pd.read_csv(out_csv)
    assert list(df.columns) == ["timestamp", "ch1", "ch2", "alarm1", "alarm_out"]
    assert len(df) == 2


def test_cli_reports_errors(tmp_path: Path, capsys) -> None:
    cli = _load_cli()
    p = tmp_path / "bad.gbd"
    p.write_bytes(build_gbd([[1]], omit=["Trigger"]))
    assert cli.main([str(p)]) == 1
    assert "[error]" in capsys.readouterr().out
    assert cli.main([str(tmp_path / "missing.gbd")]) == 1
