"""Unit tests for the CLI entrypoint.

Tests cover: implicit and explicit summary, missing arguments, missing
file, verbose logging, min-weight forwarding, JSON and CSV export,
config errors and fatal transcript errors.
"""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from chat_graph.__main__ import main

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_transcript(tmp_path: Path, body: str | None = None) -> Path:
    """Create a small CSV transcript and return its path."""
    transcript = tmp_path / "chat.csv"
    transcript.write_text(
        body
        if body is not None
        else "speaker,turn_id,raw_annotation\nA,1,I\nB,2,1\nC,3,1+2\nB,4,3\nB,5,3\n"
    )
    return transcript


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestSummary:
    def test_implicit_summary(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(_make_transcript(tmp_path))])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "CHAT INTERACTION GRAPH" in out
        assert "B -> C: 2" in out

    def test_explicit_summary_with_min_weight(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main(["summary", str(_make_transcript(tmp_path)), "--min-weight", "2"])

        assert exit_code == 0
        out = capsys.readouterr().out
        assert "B -> C: 2" in out
        assert "B -> A: 1" not in out

    def test_min_weight_from_environment(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.setenv("CHAT_GRAPH_MIN_EDGE_WEIGHT", "3")
        transcript = _make_transcript(tmp_path)

        with patch("chat_graph.__main__.print_pipeline_result") as mock_print:
            exit_code = main([str(transcript)])

        assert exit_code == 0
        assert mock_print.call_args.args[1] == 3

    def test_missing_file_argument_shows_usage(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])

        assert exc_info.value.code == 2
        assert "usage" in capsys.readouterr().err.lower()

    def test_invalid_min_weight_rejected(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([str(_make_transcript(tmp_path)), "--min-weight", "0"])

        assert exc_info.value.code == 2

    def test_nonexistent_file(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(tmp_path / "nope.csv")])

        assert exit_code == 1
        assert "File not found" in capsys.readouterr().err

    def test_directory_is_not_a_file(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        exit_code = main([str(tmp_path)])

        assert exit_code == 1
        assert "Not a file" in capsys.readouterr().err

    def test_verbose_sets_debug_logging(self, tmp_path: Path, clean_env: None) -> None:
        transcript = _make_transcript(tmp_path)

        with (
            patch("chat_graph.__main__.setup_logging") as mock_logging,
            patch("chat_graph.__main__.print_pipeline_result"),
        ):
            main(["-v", str(transcript)])

        mock_logging.assert_called_once_with("DEBUG")

    def test_log_level_from_settings(
        self, tmp_path: Path, clean_env: None, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LOG_LEVEL", "warning")
        transcript = _make_transcript(tmp_path)

        with (
            patch("chat_graph.__main__.setup_logging") as mock_logging,
            patch("chat_graph.__main__.print_pipeline_result"),
        ):
            main([str(transcript)])

        mock_logging.assert_called_once_with("WARNING")


class TestErrors:
    def test_config_error(
        self,
        tmp_path: Path,
        clean_env: None,
        monkeypatch: pytest.MonkeyPatch,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        monkeypatch.setenv("CHAT_GRAPH_MIN_EDGE_WEIGHT", "lots")

        exit_code = main([str(_make_transcript(tmp_path))])

        assert exit_code == 1
        assert "CHAT_GRAPH_MIN_EDGE_WEIGHT" in capsys.readouterr().err

    def test_inconsistent_turn_group(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        transcript = _make_transcript(
            tmp_path, "speaker,turn_id,raw_annotation\nA,1,I\nB,1,I\n"
        )

        exit_code = main([str(transcript)])

        assert exit_code == 1
        assert "Turn group '1'" in capsys.readouterr().err

    def test_invalid_utf8(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        transcript = tmp_path / "chat.csv"
        transcript.write_bytes(b"speaker,turn_id,raw_annotation\nA,1,I\nB,2,1\nC,3,\xff\xfe\n")

        exit_code = main([str(transcript)])

        assert exit_code == 1
        assert "not valid UTF-8" in capsys.readouterr().err

    def test_invalid_utf8_in_first_byte(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        transcript = tmp_path / "chat.csv"
        transcript.write_bytes(b"\xffspeaker,turn_id,raw_annotation\nA,1,I\n")

        exit_code = main(["export", str(transcript), "-o", str(tmp_path / "out.json")])

        assert exit_code == 1
        assert "not valid UTF-8" in capsys.readouterr().err
        assert not (tmp_path / "out.json").exists()

    def test_missing_columns(
        self, tmp_path: Path, clean_env: None, capsys: pytest.CaptureFixture[str]
    ) -> None:
        transcript = _make_transcript(tmp_path, "who,when\nA,1\n")

        exit_code = main([str(transcript)])

        assert exit_code == 1
        assert "missing required column" in capsys.readouterr().err


class TestExport:
    def test_export_json(self, tmp_path: Path, clean_env: None) -> None:
        output = tmp_path / "graph.json"

        exit_code = main(["export", str(_make_transcript(tmp_path)), "-o", str(output)])

        assert exit_code == 0
        document = json.loads(output.read_text(encoding="utf-8"))
        assert [n["label"] for n in document["nodes"]] == ["A", "B", "C"]
        assert {"from": 1, "to": 2, "weight": 2} in document["edges"]

    def test_export_csv(self, tmp_path: Path, clean_env: None) -> None:
        out_dir = tmp_path / "tables"

        exit_code = main(
            ["export", str(_make_transcript(tmp_path)), "-o", str(out_dir), "--format", "csv"]
        )

        assert exit_code == 0
        assert (out_dir / "nodes.csv").exists()
        assert (out_dir / "edges.csv").read_text(encoding="utf-8").startswith("from,to,weight")

    def test_export_requires_output(self, tmp_path: Path) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["export", str(_make_transcript(tmp_path))])

        assert exc_info.value.code == 2
