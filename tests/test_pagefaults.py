"""Tests for the command line driver and the sweep configuration."""

import pytest

from config import REPORT_FILENAME, SweepConfig, UsageError
from engine import SweepResult
from pagefaults import format_report, main, run


# -- Configuration ------------------------------------------------------------


class TestSweepConfig:
    """Verify bounds checking and derived settings."""

    def test_validate_returns_config(self) -> None:
        config = SweepConfig(trace_length=16, page_count=8)
        assert config.validate() is config

    @pytest.mark.parametrize("n, p, message", [
        (15, 8, "n must be >= 16."),
        (16, 7, "p must be >= 8."),
        (0, 0, "n must be >= 16."),
    ])
    def test_validate_rejects_small_values(self, n: int, p: int, message: str) -> None:
        with pytest.raises(UsageError, match=message):
            SweepConfig(trace_length=n, page_count=p).validate()

    def test_usage_error_is_a_value_error(self) -> None:
        assert issubclass(UsageError, ValueError)

    def test_frame_counts_start_at_four(self) -> None:
        assert list(SweepConfig(trace_length=16, page_count=8).frame_counts) == [4, 5, 6, 7, 8]

    def test_seeded_rng_is_reproducible(self) -> None:
        config = SweepConfig(trace_length=16, page_count=8, seed=3)
        assert config.make_rng().random() == config.make_rng().random()

    def test_default_output_path(self) -> None:
        assert SweepConfig(trace_length=16, page_count=8).output_path == REPORT_FILENAME


# -- Report -------------------------------------------------------------------


class TestReport:
    """Verify the CSV layout."""

    def test_format_report(self) -> None:
        results = [SweepResult(4, 10), SweepResult(5, 8)]
        assert format_report(results) == "Frames,Page Faults\n4,10\n5,8\n"

    def test_run_writes_report(self, tmp_path) -> None:
        out = tmp_path / "report.csv"
        results = run(SweepConfig(trace_length=32, page_count=9, seed=1, output_path=str(out)))
        lines = out.read_text().splitlines()
        assert lines[0] == "Frames,Page Faults"
        assert lines[1:] == [f"{r.frames},{r.page_faults}" for r in results]


# -- Command Line -------------------------------------------------------------


class TestMain:
    """Verify argument handling and exit statuses."""

    def test_valid_run(self, tmp_path, capsys) -> None:
        out = tmp_path / "pageFaults.csv"
        assert main(["32", "10", "--seed", "7", "--output", str(out)]) == 0

        lines = out.read_text().splitlines()
        assert lines[0] == "Frames,Page Faults"
        rows = [line.split(",") for line in lines[1:]]
        assert [int(frames) for frames, _ in rows] == list(range(4, 11))
        assert all(0 < int(faults) <= 32 for _, faults in rows)
        assert "Wrote 7 rows" in capsys.readouterr().out

    def test_same_seed_same_report(self, tmp_path) -> None:
        first, second = tmp_path / "a.csv", tmp_path / "b.csv"
        main(["100", "16", "--seed", "5", "--output", str(first)])
        main(["100", "16", "--seed", "5", "--output", str(second)])
        assert first.read_text() == second.read_text()

    def test_legacy_clock_flag(self, tmp_path) -> None:
        out = tmp_path / "legacy.csv"
        assert main(["64", "8", "--seed", "2", "--legacy-clock", "--output", str(out)]) == 0
        assert len(out.read_text().splitlines()) == 1 + 5

    def test_default_output_file(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert main(["16", "8", "--seed", "0"]) == 0
        assert (tmp_path / REPORT_FILENAME).exists()

    @pytest.mark.parametrize("n, p, message", [
        ("15", "8", "ERROR: n must be >= 16."),
        ("16", "7", "ERROR: p must be >= 8."),
    ])
    def test_out_of_bounds(self, tmp_path, capsys, n: str, p: str, message: str) -> None:
        out = tmp_path / "pageFaults.csv"
        assert main([n, p, "--output", str(out)]) == 1
        assert message in capsys.readouterr().err
        assert not out.exists()

    @pytest.mark.parametrize("argv", [[], ["16"], ["16", "8", "4"], ["sixteen", "8"]])
    def test_bad_arguments_exit_one(self, tmp_path, monkeypatch, capsys, argv) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit) as exc:
            main(argv)
        assert exc.value.code == 1
        assert "ERROR:" in capsys.readouterr().err
        assert not (tmp_path / REPORT_FILENAME).exists()
