from __future__ import annotations

import importlib.util
from pathlib import Path

import pandas as pd
import pytest

SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "data_prep.py"


@pytest.fixture
def data_prep():
    spec = importlib.util.spec_from_file_location("data_prep_script", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    assert spec.loader is not None
    spec.loader.exec_module(module)
    return module


def test_cli_writes_output_and_confirms(data_prep, raw_frame, write_csv, tmp_path: Path, clean_env, capsys) -> None:
    source = write_csv(raw_frame)
    output = tmp_path / "cleaned.parquet"

    code = data_prep.main(["--source", str(source), "--output", str(output), "--in-place"])

    assert code == 0
    assert capsys.readouterr().out.strip().endswith(f"Cleaned data saved to {output}")
    assert len(pd.read_parquet(output)) == 7


def test_cli_reports_skipped_steps(data_prep, raw_frame, write_csv, tmp_path: Path, clean_env, capsys) -> None:
    source = write_csv(raw_frame[["id", "category"]])
    output = tmp_path / "cleaned.parquet"

    code = data_prep.main(["--source", str(source), "--output", str(output), "--steps", "drop_missing"])

    assert code == 0
    assert "skipped drop_missing: missing RelevantColumn" in capsys.readouterr().out
    assert len(pd.read_parquet(output)) == 10


def test_cli_rejects_unknown_step(data_prep, raw_frame, write_csv, tmp_path: Path, clean_env, capsys) -> None:
    source = write_csv(raw_frame)

    code = data_prep.main(["--source", str(source), "--output", str(tmp_path / "o.parquet"), "--steps", "bogus"])

    assert code == 2
    assert "Unknown preparation step 'bogus'" in capsys.readouterr().err


def test_cli_missing_source_propagates(data_prep, tmp_path: Path, clean_env) -> None:
    with pytest.raises(FileNotFoundError):
        data_prep.main(["--source", str(tmp_path / "absent.csv"), "--output", str(tmp_path / "o.parquet")])


def test_cli_configures_logging_before_loading_settings(
    data_prep, raw_frame, write_csv, tmp_path: Path, clean_env
) -> None:
    calls = []
    real_load = data_prep.Settings.load

    def _record_logging(level=None) -> None:
        calls.append("configure_logging")

    def _record_load():
        calls.append("settings")
        return real_load()

    clean_env.setattr(data_prep, "configure_logging", _record_logging)
    clean_env.setattr(data_prep.Settings, "load", staticmethod(_record_load))
    source = write_csv(raw_frame)

    data_prep.main(["--source", str(source), "--output", str(tmp_path / "o.parquet")])

    assert calls == ["configure_logging", "settings"]
