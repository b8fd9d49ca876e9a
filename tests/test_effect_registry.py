"""Tests for economy.effects.registry."""

import logging

import pytest

from economy.effects.registry import (
    IGNORED_EFFECTS,
    UNIMPLEMENTED_EFFECTS,
    EffectRegistry,
    create_default_registry,
    effect_handler,
    get_declared_handlers,
    get_default_registry,
)
from economy.enums import EffectType
from economy.exceptions import DuplicateEffectHandlerError, EffectRegistryError
from economy.modifier import ResolvedModifier
from economy.yields import YieldsDelta


def _noop(ctx, delta, subject, modifier):
    return None


def _modifier(effect_type):
    return ResolvedModifier.from_game_data({"EffectType": effect_type})


class TestDefaultRegistry:
    def test_every_effect_type_mapped(self):
        registry = create_default_registry()
        for effect_type in EffectType:
            assert registry.has(effect_type), effect_type
        assert len(registry) == len(EffectType)

    def test_at_least_forty_effect_types(self):
        assert len(EffectType) >= 40

    def test_categories_disjoint(self):
        get_default_registry()
        handlers = set(get_declared_handlers())
        assert not handlers & IGNORED_EFFECTS
        assert not handlers & set(UNIMPLEMENTED_EFFECTS)

    def test_singleton(self):
        assert get_default_registry() is get_default_registry()

    def test_implemented_and_ignored_queries(self):
        registry = get_default_registry()
        assert registry.is_implemented("EFFECT_CITY_ADJUST_YIELD")
        assert not registry.is_implemented("EFFECT_UNIT_ADJUST_MOVEMENT")
        assert registry.is_ignored("EFFECT_UNIT_ADJUST_MOVEMENT")
        assert not registry.is_ignored("EFFECT_SOMETHING_NEW")

    def test_decorator_rejects_duplicate(self):
        get_default_registry()
        with pytest.raises(DuplicateEffectHandlerError):
            effect_handler(EffectType.CITY_ADJUST_YIELD)(_noop)


class TestEffectRegistry:
    def test_register_duplicate(self):
        registry = EffectRegistry()
        registry.register(EffectType.CITY_ADJUST_YIELD, _noop)
        with pytest.raises(DuplicateEffectHandlerError):
            registry.register(EffectType.CITY_ADJUST_YIELD, _noop)

    def test_ignore_after_register_is_duplicate(self):
        registry = EffectRegistry()
        registry.register(EffectType.UNIT_ADJUST_SIGHT, _noop)
        with pytest.raises(DuplicateEffectHandlerError):
            registry.ignore(EffectType.UNIT_ADJUST_SIGHT)

    def test_validate_reports_missing(self):
        registry = EffectRegistry()
        registry.register(EffectType.CITY_ADJUST_YIELD, _noop)
        with pytest.raises(EffectRegistryError) as exc_info:
            registry.validate()
        assert "EFFECT_PLOT_ADJUST_YIELD" in exc_info.value.missing
        assert "EFFECT_CITY_ADJUST_YIELD" not in exc_info.value.missing

    def test_get_registered(self):
        registry = EffectRegistry()
        registry.register(EffectType.CITY_ADJUST_YIELD, _noop)
        assert registry.get("EFFECT_CITY_ADJUST_YIELD") is _noop

    def test_unknown_effect_warns(self, caplog):
        registry = EffectRegistry()
        handler = registry.get("EFFECT_FROM_A_FUTURE_PATCH")
        delta = YieldsDelta()
        with caplog.at_level(logging.WARNING, logger="economy.effects.registry"):
            handler(None, delta, None, _modifier("EFFECT_FROM_A_FUTURE_PATCH"))
        assert "Unhandled EffectType: EFFECT_FROM_A_FUTURE_PATCH" in caplog.text
        assert delta.is_empty()

    def test_ignored_effect_is_silent(self, caplog):
        registry = EffectRegistry()
        registry.ignore(EffectType.UNIT_ADJUST_MOVEMENT)
        handler = registry.get("EFFECT_UNIT_ADJUST_MOVEMENT")
        with caplog.at_level(logging.DEBUG):
            handler(None, YieldsDelta(), None, _modifier("EFFECT_UNIT_ADJUST_MOVEMENT"))
        assert caplog.records == []

    def test_unimplemented_effect_warns(self, caplog):
        registry = EffectRegistry()
        registry.mark_unimplemented(EffectType.MODIFY_PLAYER_TRADE_YIELD_CONVERSION, "later")
        handler = registry.get("EFFECT_MODIFY_PLAYER_TRADE_YIELD_CONVERSION")
        with caplog.at_level(logging.WARNING, logger="economy.effects.registry"):
            handler(None, YieldsDelta(), None,
                    _modifier("EFFECT_MODIFY_PLAYER_TRADE_YIELD_CONVERSION"))
        assert "not implemented" in caplog.text
        assert "later" in caplog.text
