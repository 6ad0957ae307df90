"""Tests for the command-line interface and run report.

WHY: The CLI is what editors see. Wrong exit codes break wrapper
scripts; a missing guidance message leaves users guessing why nothing
happened.

HOW: main() is called with explicit argv against snapshot files in
tmp_path; stderr is captured with capsys.
"""

import json
import logging

import pytest

from overlay_sync.cli import build_parser, main, run
from overlay_sync.config import load_settings
from overlay_sync.core.models import RunSummary
from overlay_sync.hosts.snapshot import SnapshotHost
from overlay_sync.messages import format_closing, format_guidance

from conftest import sample_snapshot


def _write(tmp_path, data, name="timeline.json"):
    path = tmp_path / name
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_package_log_level():
    yield
    logging.getLogger("overlay_sync").setLevel(logging.NOTSET)


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.prefix is None
        assert args.debug is None
        assert args.snapshot is None
        assert not args.include_hidden

    def test_output_requires_snapshot(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--output", "out.json"])
        assert exc.value.code == 2


class TestSnapshotRun:
    def test_dry_run_reports_and_leaves_file(self, tmp_path, capsys):
        path = _write(tmp_path, sample_snapshot())
        before = path.read_text(encoding="utf-8")
        main(["--snapshot", str(path), "--prefix", "::"])
        err = capsys.readouterr().err
        assert "Timeline: Episode 01" in err
        assert "Finish: processed 1 markers" in err
        assert path.read_text(encoding="utf-8") == before

    def test_output_written(self, tmp_path, capsys):
        path = _write(tmp_path, sample_snapshot())
        out = tmp_path / "result.json"
        main(["--snapshot", str(path), "--prefix", "::", "--output", str(out)])
        result = json.loads(out.read_text(encoding="utf-8"))
        items = result["timeline"]["video_tracks"][1]["items"]
        assert [i["components"][0]["inputs"][0]["value"] for i in items] == [
            "Hello there",
            "General Kenobi",
        ]
        assert "Saved:" in capsys.readouterr().err

    def test_guidance_printed(self, tmp_path, capsys):
        data = sample_snapshot()
        data["timeline"]["markers"] = [{"frame": 100, "name": "Main-StyleA"}]
        main(["--snapshot", str(_write(tmp_path, data)), "--prefix", "::"])
        err = capsys.readouterr().err
        assert "[Guidance]" in err
        assert "Finish: processed 0 markers" in err

    def test_guidance_for_marker_without_template_part(self, tmp_path, capsys):
        data = sample_snapshot()
        data["timeline"]["markers"] = [{"frame": 100, "name": "::Main", "duration": 100}]
        main(["--snapshot", str(_write(tmp_path, data)), "--prefix", "::"])
        err = capsys.readouterr().err
        assert "[Guidance]" in err
        assert "Finish: processed 0 markers" in err

    def test_guidance_when_template_is_missing(self, tmp_path, capsys):
        data = sample_snapshot()
        data["timeline"]["markers"] = [{"frame": 100, "name": "::Main-StyleZ", "duration": 100}]
        main(["--snapshot", str(_write(tmp_path, data)), "--prefix", "::"])
        err = capsys.readouterr().err
        assert "[Guidance]" in err
        assert "3. Does the media pool contain the template clip?" in err

    def test_no_guidance_after_a_placed_marker(self, tmp_path, capsys):
        main(["--snapshot", str(_write(tmp_path, sample_snapshot())), "--prefix", "::"])
        assert "[Guidance]" not in capsys.readouterr().err

    def test_no_markers(self, tmp_path, capsys):
        data = sample_snapshot()
        data["timeline"]["markers"] = []
        main(["--snapshot", str(_write(tmp_path, data)), "--prefix", "::"])
        err = capsys.readouterr().err
        assert "has no markers" in err
        assert "Finish" not in err

    def test_invalid_snapshot_exits_1(self, tmp_path, capsys):
        data = sample_snapshot()
        del data["media_pool"]
        with pytest.raises(SystemExit) as exc:
            main(["--snapshot", str(_write(tmp_path, data))])
        assert exc.value.code == 1
        assert "Error:" in capsys.readouterr().err

    def test_missing_snapshot_file_exits_1(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--snapshot", str(tmp_path / "nope.json")])
        assert exc.value.code == 1

    def test_empty_prefix_exits_1(self, tmp_path):
        with pytest.raises(SystemExit) as exc:
            main(["--snapshot", str(_write(tmp_path, sample_snapshot())), "--prefix", ""])
        assert exc.value.code == 1


class TestMessages:
    def test_guidance_has_three_conditions(self):
        lines = format_guidance("::")
        assert sum(1 for line in lines if line[:2] in ("1.", "2.", "3.")) == 3
        assert any("::Main-StyleA" in line for line in lines)

    def test_closing_without_markers(self):
        assert format_closing(RunSummary("T"), "::") == ["Info: the timeline has no markers."]


class TestDirectRun:
    """run() is the entry point for scripts in Resolve's console."""

    def test_marker_lines_without_main(self, caplog, capsys):
        run(SnapshotHost(sample_snapshot()), load_settings(prefix="::"))
        assert "Marker: ::Main-StyleA -> Track: ::Main, Template: StyleA" in caplog.text
        assert "[Result] 2/2 overlays placed" in caplog.text
        err = capsys.readouterr().err
        assert "Timeline: Episode 01" in err
        assert "Finish: processed 1 markers" in err

    def test_debug_enables_diagnostics(self, caplog):
        run(SnapshotHost(sample_snapshot()), load_settings(prefix="::", debug=True))
        assert "Clearing existing clips" in caplog.text
