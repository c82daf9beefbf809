from __future__ import annotations

import json
import logging
from unittest.mock import patch

from click.testing import CliRunner

from file_collector.cli import main
from file_collector.models import CollectResult, CollectSummary, RunResult


def _make_tree(root):
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("1", encoding="utf-8")
    (root / "sub" / "a.txt").write_text("2", encoding="utf-8")
    (root / "sub" / "skip.jpg").write_text("3", encoding="utf-8")


class TestCollectCommand:
    def teardown_method(self):
        _logger = logging.getLogger("file_collector")
        for h in list(_logger.handlers):
            if isinstance(h, logging.FileHandler):
                h.close()
                _logger.removeHandler(h)

    def test_copy_success(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        runner = CliRunner()
        result = runner.invoke(main, ["-q", "collect", str(src), str(dst), "--ignore-ext", ".jpg"])
        assert result.exit_code == 0, result.output
        assert "Files processed:    2" in result.output
        assert "Files renamed:      1" in result.output
        assert sorted(p.name for p in dst.iterdir()) == ["a.txt", "a_(1).txt"]

    def test_move_with_report(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        report = tmp_path / "report.jsonl"
        runner = CliRunner()
        result = runner.invoke(main, [
            "-q", "collect", str(src), str(dst),
            "--operation", "move", "--report", str(report),
        ])
        assert result.exit_code == 0, result.output
        assert not (src / "a.txt").exists()
        records = [json.loads(line) for line in report.read_text(encoding="utf-8").splitlines()]
        assert [r["PATH"] for r in records] == [str(src), str(src / "sub")]

    def test_config_file_with_override(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        cfg = tmp_path / "collect.yml"
        cfg.write_text(
            f"SOURCE_ROOT_PATH: {json.dumps(str(src))}\n"
            f"DESTINATION_DIRECTORY_PATH: {json.dumps(str(tmp_path / 'ignored'))}\n"
            "EXTENSIONS_TO_IGNORE: ['.txt']\n",
            encoding="utf-8",
        )
        runner = CliRunner()
        result = runner.invoke(main, ["-q", "collect", "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert [p.name for p in (tmp_path / "ignored").iterdir()] == ["skip.jpg"]

        result = runner.invoke(main, ["-q", "collect", str(src), str(dst), "--config", str(cfg)])
        assert result.exit_code == 0, result.output
        assert [p.name for p in dst.iterdir()] == ["skip.jpg"]

    def test_per_item_failure_exits_1(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        runner = CliRunner()
        assert runner.invoke(main, ["-q", "collect", str(src), str(dst)]).exit_code == 0
        # second run without --overwrite hits existing destination files
        result = runner.invoke(main, ["-q", "collect", str(src), str(dst)])
        assert result.exit_code == 1
        assert "Failures:" in result.output

    def test_overwrite_rerun_succeeds(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        runner = CliRunner()
        runner.invoke(main, ["-q", "collect", str(src), str(dst)])
        result = runner.invoke(main, ["-q", "collect", str(src), str(dst), "--overwrite"])
        assert result.exit_code == 0, result.output

    def test_missing_source_exits_2(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["collect", str(tmp_path / "nope"), str(tmp_path / "dst")])
        assert result.exit_code == 2
        assert "not found" in result.output.lower()
        assert not (tmp_path / "dst").exists()

    def test_missing_paths_exits_2(self):
        runner = CliRunner()
        result = runner.invoke(main, ["collect"])
        assert result.exit_code == 2
        assert "null" in result.output.lower()

    def test_empty_extension_is_usage_error(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(main, ["collect", str(tmp_path), str(tmp_path / "d"), "--ignore-ext", ""])
        assert result.exit_code == 2
        assert "Invalid configuration" in result.output

    def test_log_dir(self, tmp_path):
        src, dst = tmp_path / "src", tmp_path / "dst"
        _make_tree(src)
        runner = CliRunner()
        result = runner.invoke(main, [
            "collect", str(src), str(dst), "--log-dir", str(tmp_path / "logs"),
        ])
        assert result.exit_code == 0, result.output
        for h in logging.getLogger("file_collector").handlers:
            h.flush()
        lines = (tmp_path / "logs" / "run.log").read_text(encoding="utf-8").splitlines()
        assert any("Collection finished" in json.loads(line)["message"] for line in lines)

    def test_run_collection_receives_overrides(self, tmp_path):
        with patch("file_collector.run.run_collection") as mock_run:
            mock_run.return_value = RunResult(
                results=[CollectResult("/src", is_succeeded=True)],
                summary=CollectSummary(directories=1),
            )
            runner = CliRunner()
            result = runner.invoke(main, [
                "collect", "/src", "/dst", "--operation", "move", "--overwrite",
                "--ignore-ext", ".jpg", "--ignore-ext", ".png", "--report-format", "csv",
            ])
        assert result.exit_code == 0, result.output
        cfg = mock_run.call_args.args[0]
        assert cfg.SOURCE_ROOT_PATH == "/src"
        assert cfg.DESTINATION_DIRECTORY_PATH == "/dst"
        assert cfg.COLLECT_OPERATION == "move"
        assert cfg.OVERWRITE is True
        assert cfg.EXTENSIONS_TO_IGNORE == [".jpg", ".png"]
        assert cfg.REPORT_FORMAT == "csv"

    def test_no_overwrite_beats_config(self, tmp_path):
        cfg_file = tmp_path / "collect.yml"
        cfg_file.write_text("OVERWRITE: true\n", encoding="utf-8")
        with patch("file_collector.run.run_collection") as mock_run:
            mock_run.return_value = RunResult(
                results=[CollectResult("/src", is_succeeded=True)],
                summary=CollectSummary(directories=1),
            )
            runner = CliRunner()
            result = runner.invoke(main, [
                "collect", "/src", "/dst", "--config", str(cfg_file), "--no-overwrite",
            ])
            assert result.exit_code == 0, result.output
            assert mock_run.call_args.args[0].OVERWRITE is False

            result = runner.invoke(main, ["collect", "/src", "/dst", "--config", str(cfg_file)])
            assert result.exit_code == 0, result.output
            assert mock_run.call_args.args[0].OVERWRITE is True

    def test_overwrite_flags_conflict(self):
        with patch("file_collector.run.run_collection") as mock_run:
            runner = CliRunner()
            result = runner.invoke(main, [
                "collect", "/src", "/dst", "--overwrite", "--no-overwrite",
            ])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.output
        mock_run.assert_not_called()
