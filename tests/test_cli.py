#!/usr/bin/env python3
"""
Tests for the gpxsimplifier command line.
"""

import csv
import logging
import shutil
from pathlib import Path

import pytest

from gpxsimplifier.cli import create_argument_parser, main, positive_float

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() adds a console handler to the root logger; remove it afterwards."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)


@pytest.fixture
def gpx_file(tmp_path):
    path = tmp_path / "equator_run.gpx"
    shutil.copy(FIXTURES / "equator_run.gpx", path)
    return path


def read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestArguments:
    def test_defaults(self):
        args = create_argument_parser().parse_args(["track.gpx"])
        assert args.filename == "track.gpx"
        assert args.output == "output.csv"
        assert args.interval == 200.0
        assert args.log_level == "WARNING"
        assert args.metrics is False

    def test_positive_float(self):
        assert positive_float("12.5") == 12.5
        for value in ["0", "-3", "abc", "nan", "inf"]:
            with pytest.raises(Exception):
                positive_float(value)

    def test_non_positive_interval_is_rejected(self, gpx_file, tmp_path):
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as excinfo:
            main([str(gpx_file), "--output", str(output), "--interval", "0"])
        assert excinfo.value.code == 2
        assert not output.exists()


class TestMain:
    def test_writes_report(self, gpx_file, tmp_path, capsys):
        output = tmp_path / "out.csv"
        main([str(gpx_file), "--output", str(output)])

        assert read_rows(output) == [
            ["distance_m", "timestamp", "ele", "hr", "pace_min_per_km"],
            ["222.4", "2024-05-01T08:01:00Z", "5.0", "102", "4.50"],
            ["444.8", "2024-05-01T08:02:00Z", "5.0", "104", "4.50"],
        ]
        assert f"Output written to {output}" in capsys.readouterr().out

    def test_custom_interval(self, gpx_file, tmp_path):
        output = tmp_path / "out.csv"
        main([str(gpx_file), "-o", str(output), "--interval", "100"])

        rows = read_rows(output)
        assert len(rows) == 6
        assert [row[0] for row in rows[1:]] == ["111.2", "222.4", "333.6", "444.8", "556.0"]
        assert rows[1][4] == "4.50"

    def test_default_output_name(self, gpx_file, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        main([str(gpx_file)])
        assert (tmp_path / "output.csv").exists()

    def test_stdout_output(self, gpx_file, capsys):
        main([str(gpx_file), "--output", "-"])
        out = capsys.readouterr().out
        assert out.splitlines()[0] == "distance_m,timestamp,ele,hr,pace_min_per_km"
        assert "Output written" not in out

    def test_metrics(self, gpx_file, tmp_path, caplog):
        output = tmp_path / "out.csv"
        with caplog.at_level(logging.DEBUG):
            main([str(gpx_file), "-o", str(output), "--metrics", "--log-level", "DEBUG"])
        assert "records_written=2" in caplog.text

    def test_missing_input_prints_help(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main([])
        assert excinfo.value.code == 1
        assert "usage:" in capsys.readouterr().out


class TestFatalErrors:
    def test_missing_file(self, tmp_path, caplog):
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path / "missing.gpx"), "-o", str(output)])
        assert excinfo.value.code == 1
        assert not output.exists()
        assert "GPX file not found" in caplog.text

    def test_malformed_file(self, tmp_path, caplog):
        source = tmp_path / "broken.gpx"
        source.write_text("<gpx><trk>", encoding="utf-8")
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as excinfo:
            main([str(source), "-o", str(output)])
        assert excinfo.value.code == 1
        assert not output.exists()
        assert "Invalid GPX file" in caplog.text

    def test_missing_timestamps(self, tmp_path, caplog):
        source = tmp_path / "untimed.gpx"
        source.write_text(
            '<gpx version="1.1" creator="test"><trk><trkseg>'
            '<trkpt lat="1.0" lon="2.0"></trkpt>'
            "</trkseg></trk></gpx>",
            encoding="utf-8",
        )
        output = tmp_path / "out.csv"
        with pytest.raises(SystemExit) as excinfo:
            main([str(source), "-o", str(output)])
        assert excinfo.value.code == 1
        assert not output.exists()
        assert "Unusable GPX track" in caplog.text

    def test_input_is_directory(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main([str(tmp_path), "-o", str(tmp_path / "out.csv")])
        assert excinfo.value.code == 1

    def test_unwritable_output(self, gpx_file, tmp_path, caplog):
        output = tmp_path / "missing" / "out.csv"
        with pytest.raises(SystemExit) as excinfo:
            main([str(gpx_file), "-o", str(output)])
        assert excinfo.value.code == 1
        assert "Cannot write CSV file" in caplog.text


def test_mixed_timestamp_offsets(tmp_path):
    source = tmp_path / "mixed.gpx"
    source.write_text(
        '<gpx version="1.1" creator="test"><trk><trkseg>'
        '<trkpt lat="0.0" lon="0.0"><time>2024-05-01T08:00:00Z</time></trkpt>'
        '<trkpt lat="0.0" lon="0.002"><time>2024-05-01T08:01:00</time></trkpt>'
        "</trkseg></trk></gpx>",
        encoding="utf-8",
    )
    output = tmp_path / "out.csv"
    main([str(source), "-o", str(output)])

    rows = read_rows(output)
    assert len(rows) == 2
    assert rows[1][1] == "2024-05-01T08:01:00Z"
    assert rows[1][4] == "4.50"
