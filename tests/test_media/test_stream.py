"""Tests for mpv streaming."""

import json
import subprocess
from unittest.mock import MagicMock

import pytest

from tunepick.config import Config
from tunepick.exceptions import MediaToolError
from tunepick.media.stream import build_mpv_command, choose_result, stream
from tunepick.models import SearchResult


def completed(stdout="", returncode=0):
    return subprocess.CompletedProcess([], returncode, stdout=stdout, stderr="")


class RecordingRunner:
    def __init__(self, search_output="", mpv_code=0):
        self.search_output = search_output
        self.mpv_code = mpv_code
        self.calls = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if cmd[0] == "yt-dlp":
            return completed(self.search_output)
        return completed(returncode=self.mpv_code)


RESULTS = [SearchResult("id1", "One"), SearchResult("id2", "Two", channel="Ch")]


def test_build_mpv_command():
    assert build_mpv_command("u") == ["mpv", "u"]
    cmd = build_mpv_command("u", mpv_path="/x/mpv", audio_only=True, extra_args=["--fs"])
    assert cmd == ["/x/mpv", "--no-video", "--ytdl-format=bestaudio/best", "--fs", "u"]


def test_choose_result_uses_menu_index():
    menu = MagicMock()
    menu.select.return_value = 1
    assert choose_result(RESULTS, menu, title="T") is RESULTS[1]
    menu.select.assert_called_once_with(["One", "Two (Ch)"], title="T")


def test_choose_result_cancel_and_empty():
    menu = MagicMock()
    menu.select.return_value = None
    assert choose_result(RESULTS, menu) is None
    assert choose_result([], menu) is None
    menu.select.assert_called_once()


def test_stream_url_plays_directly(tmp_path):
    runner = RecordingRunner()
    menu = MagicMock()
    code = stream("https://youtu.be/x", menu=menu, config=Config.load(tmp_path), runner=runner)
    assert code == 0
    assert runner.calls == [["mpv", "https://youtu.be/x"]]
    menu.select.assert_not_called()


def test_stream_search_pick_play(tmp_path):
    output = "\n".join(json.dumps({"id": i, "title": i}) for i in ("aa", "bb"))
    runner = RecordingRunner(search_output=output, mpv_code=3)
    menu = MagicMock()
    menu.select.return_value = 1

    code = stream("some song", menu=menu, config=Config.load(tmp_path), audio_only=True, runner=runner)

    assert code == 3
    assert runner.calls[0][1] == "ytsearch10:some song"
    assert runner.calls[1][-1] == "https://www.youtube.com/watch?v=bb"
    assert "--no-video" in runner.calls[1]


def test_stream_cancel_returns_none(tmp_path):
    runner = RecordingRunner(search_output=json.dumps({"id": "aa"}))
    menu = MagicMock()
    menu.select.return_value = None
    assert stream("q", menu=menu, config=Config.load(tmp_path), runner=runner) is None
    assert len(runner.calls) == 1


def test_stream_no_results(tmp_path):
    menu = MagicMock()
    assert stream("q", menu=menu, config=Config.load(tmp_path), runner=RecordingRunner()) is None
    menu.select.assert_not_called()


def test_missing_mpv(tmp_path):
    def runner(cmd, **kwargs):
        raise FileNotFoundError(cmd[0])

    with pytest.raises(MediaToolError, match="mpv"):
        stream("https://x", menu=MagicMock(), config=Config.load(tmp_path), runner=runner)
