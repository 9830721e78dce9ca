"""Tests for the galleyops command line."""

import pandas as pd
import pytest

from galleyops.replanning.cli import main


class TestProcessCommand:
    """Tests for `galleyops process`."""

    def test_demo_run(self, capsys) -> None:
        main(["process", "--demo", "--stats"])
        out, err = capsys.readouterr()
        assert "Processed 3 affected flights" in err
        assert "AM245" in out and "AM651" in out
        assert "no_flight" in out

    def test_writes_csv(self, tmp_path, capsys) -> None:
        output = tmp_path / "out.csv"
        main(["process", "--demo", "-o", str(output)])
        df = pd.read_csv(output)
        assert len(df) == 3
        assert set(df["status"]) == {"success", "no_flight"}

    def test_missing_csv_exits_nonzero(self, tmp_path, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            main(["process", "--flights", str(tmp_path / "missing.csv")])
        assert exc.value.code == 1
        assert "Error" in capsys.readouterr().err


def test_metrics_command(capsys) -> None:
    main(["metrics"])
    out = capsys.readouterr().out
    assert "total_flights: 7" in out
    assert "food_saved: 480" in out
