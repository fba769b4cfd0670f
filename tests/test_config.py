"""Tests for configuration loading."""

from pathlib import Path

import pytest

from tunepick.config import Config, clear_config_cache, get_default_config_dir


def test_defaults(tmp_path: Path):
    cfg = Config.load(tmp_path)
    assert cfg.menu_title == "Select an option"
    assert cfg.search_limit == 10
    assert cfg.use_aria2c is True
    assert cfg.cookies_path is None


def test_default_dir_from_env(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TUNEPICK_CONFIG_DIR", str(tmp_path / "x"))
    assert get_default_config_dir() == tmp_path / "x"


def test_set_persists(tmp_path: Path):
    cfg = Config.load(tmp_path)
    cfg.set("mpv_path", "/opt/mpv")
    assert Config.load(tmp_path).mpv_path == "/opt/mpv"


def test_corrupted_config_loads_defaults(tmp_path: Path):
    (tmp_path / "config.json").write_text("{ invalid json }")
    assert Config.load(tmp_path).audio_format == "mp3"


def test_empty_config_file_loads_defaults(tmp_path: Path):
    (tmp_path / "config.json").write_text("")
    assert Config.load(tmp_path).ytdlp_path == "yt-dlp"


def test_env_overrides_are_coerced(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("TUNEPICK_SEARCH_LIMIT", "3")
    monkeypatch.setenv("TUNEPICK_USE_ARIA2C", "no")
    cfg = Config.load(tmp_path)
    assert cfg.search_limit == 3
    assert cfg.use_aria2c is False


def test_load_is_cached_for_default_dir():
    clear_config_cache()
    assert Config.load() is Config.load()


def test_paths_expand_user(tmp_path: Path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path))
    cfg = Config.load(tmp_path)
    cfg.set("cookies_file", "~/cookies.txt")
    assert cfg.download_path == tmp_path / "Music"
    assert cfg.cookies_path == tmp_path / "cookies.txt"


def test_unknown_attribute(tmp_path: Path):
    cfg = Config.load(tmp_path)
    try:
        cfg.nope
    except AttributeError as e:
        assert "nope" in str(e)
    else:
        raise AssertionError("expected AttributeError")


def test_invalid_env_override_is_ignored(tmp_path: Path, monkeypatch, caplog):
    monkeypatch.setenv("TUNEPICK_SEARCH_LIMIT", "abc")
    monkeypatch.setenv("TUNEPICK_USE_ARIA2C", "maybe")
    with caplog.at_level("WARNING", logger="tunepick.config"):
        cfg = Config.load(tmp_path)
    assert cfg.search_limit == 10
    assert cfg.use_aria2c is True
    assert "TUNEPICK_SEARCH_LIMIT" in caplog.text


def test_set_from_string(tmp_path: Path):
    cfg = Config.load(tmp_path)
    assert cfg.set_from_string("search_limit", "4") == 4
    assert cfg.set_from_string("use_aria2c", "no") is False
    assert Config.load(tmp_path).search_limit == 4


def test_set_from_string_rejects_bad_input(tmp_path: Path):
    cfg = Config.load(tmp_path)
    with pytest.raises(KeyError):
        cfg.set_from_string("nope", "1")
    with pytest.raises(ValueError):
        cfg.set_from_string("search_limit", "lots")
    assert not cfg.config_file.exists()


def test_items_lists_every_setting(tmp_path: Path):
    keys = [key for key, _ in Config.load(tmp_path).items()]
    assert keys == list(Config.DEFAULTS)
