"""Configuration tests: defaults, environment overrides, singleton reset."""

import dataclasses

import pytest

from economy.config import EconomyConfig, get_config, reset_config


@pytest.fixture(autouse=True)
def _fresh_config():
    reset_config()
    yield
    reset_config()


class TestEconomyConfig:
    def test_defaults(self, monkeypatch):
        for key in ("ECONOMY_STRICT", "ECONOMY_MAX_MODIFIER_DEPTH",
                    "ECONOMY_LOG_LEVEL", "ECONOMY_GAME_DATA"):
            monkeypatch.delenv(key, raising=False)
        cfg = EconomyConfig()
        assert cfg.strict is False
        assert cfg.max_modifier_depth == 16
        assert cfg.log_level == "INFO"
        assert cfg.game_data_path == ""

    @pytest.mark.parametrize("raw,expected", [
        ("true", True), ("1", True), ("ON", True),
        ("false", False), ("0", False), ("no", False),
    ])
    def test_strict_from_env(self, monkeypatch, raw, expected):
        monkeypatch.setenv("ECONOMY_STRICT", raw)
        assert EconomyConfig.from_env().strict is expected

    def test_unparseable_values_fall_back(self, monkeypatch):
        monkeypatch.setenv("ECONOMY_STRICT", "sometimes")
        monkeypatch.setenv("ECONOMY_MAX_MODIFIER_DEPTH", "deep")
        cfg = EconomyConfig.from_env()
        assert cfg.strict is False
        assert cfg.max_modifier_depth == 16

    def test_depth_and_paths_from_env(self, monkeypatch):
        monkeypatch.setenv("ECONOMY_MAX_MODIFIER_DEPTH", "4")
        monkeypatch.setenv("ECONOMY_GAME_DATA", "/tmp/data.json")
        monkeypatch.setenv("ECONOMY_LOG_LEVEL", "DEBUG")
        cfg = EconomyConfig.from_env()
        assert cfg.max_modifier_depth == 4
        assert cfg.game_data_path == "/tmp/data.json"
        assert cfg.log_level == "DEBUG"

    def test_frozen(self):
        cfg = EconomyConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            cfg.strict = True

    def test_singleton_and_reset(self, monkeypatch):
        monkeypatch.setenv("ECONOMY_STRICT", "true")
        first = get_config()
        assert first is get_config()
        assert first.strict is True

        monkeypatch.setenv("ECONOMY_STRICT", "false")
        assert get_config().strict is True
        reset_config()
        assert get_config().strict is False
