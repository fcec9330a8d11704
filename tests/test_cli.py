#!/usr/bin/env python3
"""
Tests for the crosstrack command line interface.
"""

import argparse
import json
import pytest
from unittest.mock import patch

from crosstrack import cli
from crosstrack.geometry import GeoCoordinate
from crosstrack.scene import DEFAULT_PLANE, PointType
from crosstrack.track import Side

GPX_SCENE = """<?xml version="1.0" encoding="UTF-8"?>
<gpx version="1.1" creator="test" xmlns="http://www.topografix.com/GPX/1/1">
  <wpt lat="0.01" lon="0.5"><name>plane</name></wpt>
  <wpt lat="0.0" lon="0.0"><name>trackStart</name></wpt>
  <wpt lat="0.0" lon="1.0"><name>trackEnd</name></wpt>
</gpx>
"""


def run_cli(argv):
    args = cli.create_argument_parser().parse_args(argv)
    return cli.run(args)


class TestParsing:

    def test_parse_coordinate(self):
        assert cli.parse_coordinate("39.5,-105.25") == GeoCoordinate(39.5, -105.25)
        assert cli.parse_coordinate(" -90 , 180 ") == GeoCoordinate(-90.0, 180.0)

    @pytest.mark.parametrize("text", ["39.5", "a,b", "91,0", "0,-180.5", "1,2,3"])
    def test_parse_coordinate_rejects(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_coordinate(text)

    def test_parse_move(self):
        assert cli.parse_move("trackStart=1,2") == (PointType.TRACK_START, GeoCoordinate(1.0, 2.0))

    @pytest.mark.parametrize("text", ["plane", "tower=1,2", "plane=1"])
    def test_parse_move_rejects(self, text):
        with pytest.raises(argparse.ArgumentTypeError):
            cli.parse_move(text)

    def test_invalid_coordinate_exits(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.create_argument_parser().parse_args(["--plane", "100,0"])
        assert exc_info.value.code == 2

    @pytest.mark.parametrize("digits", ["-1", "seven"])
    def test_invalid_fraction_digits_exits(self, digits, capsys):
        with pytest.raises(SystemExit) as exc_info:
            cli.create_argument_parser().parse_args(["--fraction-digits", digits])
        assert exc_info.value.code == 2

    def test_parse_fraction_digits(self):
        assert cli.parse_fraction_digits("0") == 0
        assert cli.parse_fraction_digits("3") == 3


class TestConfig:

    def test_defaults(self):
        args = cli.create_argument_parser().parse_args([])
        config = cli.config_from_args(args)

        assert config.plane == DEFAULT_PLANE
        assert config.strict is False
        assert config.fraction_digits == 7
        assert config.log_level == "WARNING"

    def test_command_line_overrides(self):
        args = cli.create_argument_parser().parse_args(
            ["--plane", "1,2", "--strict", "--fraction-digits", "3", "--metrics"]
        )
        config = cli.config_from_args(args)

        assert config.plane == GeoCoordinate(1.0, 2.0)
        assert config.strict is True
        assert config.fraction_digits == 3
        assert config.metrics is True


class TestRun:

    def test_default_scene_report(self, capsys):
        results = run_cli([])

        assert [r.side for r in results] == [Side.ON_LINE]
        output = capsys.readouterr().out
        assert "Plane: 39.574266, -105.0162023" in output
        assert "Answer: on line" in output
        assert "Cross track: 0m" in output

    def test_moves_are_replayed(self, capsys):
        results = run_cli(
            ["--move", "plane=39.57,-105.03", "--move", "plane=39.56,-105.016"]
        )

        assert [r.side for r in results] == [Side.ON_LINE, Side.LEFT, Side.RIGHT]
        output = capsys.readouterr().out
        assert output.count("--- Moved plane ---") == 2
        assert "Answer: left" in output
        assert "Answer: right" in output

    def test_gpx_input_with_override(self, tmp_path, capsys):
        path = tmp_path / "scene.gpx"
        path.write_text(GPX_SCENE, encoding="utf-8")

        results = run_cli([str(path)])
        assert results[0].side is Side.LEFT

        results = run_cli([str(path), "--plane=-0.01,0.5"])
        assert results[0].side is Side.RIGHT

    def test_missing_gpx_file_exits(self, tmp_path):
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(tmp_path / "missing.gpx")])
        assert exc_info.value.code == 1

    def test_gpx_without_waypoints_exits(self, tmp_path):
        path = tmp_path / "empty.gpx"
        path.write_text(GPX_SCENE.replace("plane", "other"), encoding="utf-8")
        with pytest.raises(SystemExit) as exc_info:
            run_cli([str(path)])
        assert exc_info.value.code == 1

    def test_degenerate_track_reports_nan(self, capsys):
        run_cli(["--track-start", "1,1", "--track-end", "1,1", "--plane", "2,2"])
        output = capsys.readouterr().out
        assert "Cross track: NaNm" in output
        assert "Track length: 0m" in output

    def test_degenerate_track_strict_exits(self):
        with pytest.raises(SystemExit) as exc_info:
            run_cli(["--track-start", "1,1", "--track-end", "1,1", "--strict"])
        assert exc_info.value.code == 1

    def test_geojson_output(self, capsys):
        run_cli(["--geojson", "--fraction-digits", "2"])
        output = capsys.readouterr().out
        geojson = json.loads(output[output.index("{"):])
        assert geojson["type"] == "FeatureCollection"

    def test_save_gpx(self, tmp_path):
        path = tmp_path / "out.gpx"
        run_cli(["--move", "plane=39.57,-105.03", "--save-gpx", str(path)])

        from crosstrack.scene import TrackScene

        scene = TrackScene.from_file(str(path))
        assert scene.plane.latitude == pytest.approx(39.57)

    @patch("crosstrack.cli.open_file_in_browser")
    @patch("crosstrack.cli.visualization.create_track_map")
    def test_map_with_explicit_name(self, mock_create_map, mock_open, tmp_path):
        output = str(tmp_path / "my map.html")
        results = run_cli(["--map", output])

        mock_create_map.assert_called_once()
        scene, result, filename, config = mock_create_map.call_args[0]
        assert filename == output
        assert result == results[-1]
        mock_open.assert_called_once_with(output)

    @patch("crosstrack.cli.open_file_in_browser")
    @patch("crosstrack.cli.visualization.create_track_map")
    def test_map_with_generated_name(self, mock_create_map, mock_open, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        run_cli(["--map", "--no-open"])

        assert mock_create_map.call_args[0][2] == "crosstrack map.html"
        mock_open.assert_not_called()

    def test_metrics_logged(self, caplog):
        import logging

        with caplog.at_level(logging.DEBUG, logger="crosstrack.metrics"):
            run_cli(["--metrics", "--move", "plane=39.57,-105.03"])
        assert "total_recomputations=2" in [r.getMessage() for r in caplog.records]


class TestSetupLogging:

    def test_reconfigures_non_utf8_stdout(self, monkeypatch):
        import io
        import logging
        import sys

        stdout = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
        stderr = io.TextIOWrapper(io.BytesIO(), encoding="ascii")
        monkeypatch.setattr(sys, "stdout", stdout)
        monkeypatch.setattr(sys, "stderr", stderr)
        root_logger = logging.getLogger()
        handlers = list(root_logger.handlers)
        level = root_logger.level
        try:
            cli.setup_logging(cli.create_argument_parser().parse_args([]))
        finally:
            root_logger.handlers = handlers
            root_logger.setLevel(level)

        assert stdout.encoding == "utf-8"
        assert stderr.encoding == "utf-8"
        print("45.0°", file=stdout)
