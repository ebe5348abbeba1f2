import json
import logging

import pytest

from sandfall import config


def test_config_path_follows_xdg(config_home):
    assert config.get_config_path() == config_home / "config.json"


def test_missing_config_is_empty(config_home):
    assert config.load_config() == {}
    assert config.load_settings({}) == config.Settings()


@pytest.mark.parametrize("raw", [b"{not json", b"[1, 2]", b'"hello"', b'{"spawn_rate": "\xff\xfe"}'])
def test_unusable_config_is_empty(config_home, raw):
    config_home.mkdir(parents=True)
    (config_home / "config.json").write_bytes(raw)
    assert config.load_config() == {}


def test_config_path_that_is_a_directory_is_empty(config_home):
    (config_home / "config.json").mkdir(parents=True)
    assert config.load_config() == {}


def test_defaults():
    settings = config.Settings()
    assert settings.spawn_rate == 3
    assert settings.tick_interval == pytest.approx(0.05)
    assert settings.sand_char == "▪"
    assert settings.empty_char == " "


def test_valid_values_are_used():
    settings = config.load_settings({"spawn_rate": 7, "tick_ms": 120, "glyphs": {"sand": "#", "empty": "."}})
    assert settings.spawn_rate == 7
    assert settings.tick_interval == pytest.approx(0.12)
    assert (settings.sand_char, settings.empty_char) == ("#", ".")


@pytest.mark.parametrize("value", [-1, "3", 2.5, True, None])
def test_bad_spawn_rate_falls_back(value):
    assert config.get_spawn_rate({"spawn_rate": value}) == config.DEFAULT_SPAWN_RATE


@pytest.mark.parametrize("value", [0, -50, "50", False])
def test_bad_tick_falls_back(value):
    assert config.get_tick_interval({"tick_ms": value}) == pytest.approx(0.05)


def test_zero_spawn_rate_is_allowed():
    assert config.get_spawn_rate({"spawn_rate": 0}) == 0


def test_bad_glyphs_fall_back_per_field():
    assert config.get_glyphs({"glyphs": {"sand": "##", "empty": "-"}}) == ("▪", "-")
    assert config.get_glyphs({"glyphs": "x"}) == ("▪", " ")


def test_setters_persist(config_home):
    data = {}
    config.set_spawn_rate(data, 5)
    config.set_tick_ms(data, 80)
    saved = json.loads((config_home / "config.json").read_text(encoding="utf-8"))
    assert saved == {"spawn_rate": 5, "tick_ms": 80}
    assert config.load_settings(config.load_config()).tick_interval == pytest.approx(0.08)


def test_debug_logging_writes_beside_config(config_home, monkeypatch):
    monkeypatch.setenv("SANDFALL_DEBUG", "1")
    root = logging.getLogger("sandfall")
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        config.configure_logging()
        handlers = [h for h in root.handlers if isinstance(h, logging.FileHandler)]
        assert len(handlers) == 1
        logging.getLogger("sandfall.world").debug("hello")
        handlers[0].flush()
        assert "sandfall.world | hello" in (config_home / "debug.log").read_text(encoding="utf-8")
    finally:
        for handler in root.handlers:
            if handler not in saved_handlers:
                handler.close()
        root.handlers = saved_handlers
        root.setLevel(saved_level)
