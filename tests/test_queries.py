"""economy.queries 查询函数测试"""

import logging

import pytest

from economy.enums import YieldType
from economy.modifier import ResolvedModifier
from economy.queries.adjacency import (
    AdjacencyCache,
    adjacency_yield_for_plot_count,
    get_adjacency_granting_plots,
    plot_grants_adjacency,
)
from economy.queries.constructibles import (
    constructible_maintenance_reduction,
    get_city_constructibles_for_modifier,
    is_constructible_target_of_modifier,
)
from economy.queries.player import (
    get_active_traditions_count,
    get_player_city_states_suzerain,
    get_settlements_count,
    is_player_at_war_with_opposing_ideology,
)
from economy.queries.units import (
    UnitTypeInfo,
    get_player_units_types_maintenance,
    is_unit_type_info_target_of_modifier,
    maintenance_efficiency_to_reduction,
)
from economy.snapshot import ConstructibleSnapshot, PlayerSnapshot, PlotSnapshot


def _make_modifier(**arguments):
    return ResolvedModifier.from_game_data({
        "Modifier": {"ModifierId": "MOD_QUERY"},
        "EffectType": "EFFECT_TEST",
        "Arguments": {name: {"Value": value} for name, value in arguments.items()},
    })


class _CountingGameData:
    """记录 get_adjacency 调用次数"""

    def __init__(self, inner):
        self.inner = inner
        self.calls = 0

    def get_adjacency(self, adjacency_id):
        self.calls += 1
        return self.inner.get_adjacency(adjacency_id)


class TestAdjacencyCache:
    def test_read_through(self, game_data):
        source = _CountingGameData(game_data)
        cache = AdjacencyCache(source)
        first = cache.get("CoastalGold")
        second = cache.get("CoastalGold")
        assert first is second
        assert first.yield_type == YieldType.GOLD
        assert source.calls == 1
        assert cache.size == 1

    def test_miss_not_cached(self, game_data):
        source = _CountingGameData(game_data)
        cache = AdjacencyCache(source)
        assert cache.get("Nope") is None
        assert cache.get("Nope") is None
        assert source.calls == 2
        assert not cache.is_cached("Nope")

    def test_clear(self, game_data):
        cache = AdjacencyCache(game_data)
        cache.get("RiverScience")
        cache.clear()
        assert cache.size == 0


class TestAdjacencyPlots:
    def test_yield_for_plot_count(self):
        assert adjacency_yield_for_plot_count(5, 1.0, 1) == 5
        assert adjacency_yield_for_plot_count(5, 2.0, 2) == 4
        assert adjacency_yield_for_plot_count(1, 3.0, 2) == 0
        assert adjacency_yield_for_plot_count(0, 3.0, 1) == 0

    def test_granting_plots(self, host, game_data):
        market_plot = host.get_plot(0, 0)
        coastal = game_data.get_adjacency("CoastalGold")
        plots = get_adjacency_granting_plots(coastal, market_plot, game_data)
        assert sorted(p.id for p in plots) == [(-1, 0), (1, 0)]

    def test_constructible_tag_condition(self, host, game_data):
        science = game_data.get_adjacency("ScienceCulture")
        assert plot_grants_adjacency(host.get_plot(1, -1), science, game_data)
        assert not plot_grants_adjacency(host.get_plot(0, 0), science, game_data)

    def test_river_and_resource(self, host, game_data):
        assert plot_grants_adjacency(
            host.get_plot(0, -1), game_data.get_adjacency("RiverScience"), game_data
        )
        assert plot_grants_adjacency(
            host.get_plot(0, 1), game_data.get_adjacency("ResourceProduction"), game_data
        )

    def test_isolated_plot(self, game_data):
        lonely = PlotSnapshot(9, 9)
        assert get_adjacency_granting_plots(
            game_data.get_adjacency("CoastalGold"), lonely, game_data
        ) == []


class TestPlayerQueries:
    def test_city_states_suzerain(self, ctx, host):
        city_states = get_player_city_states_suzerain(ctx, host.get_player(0))
        assert [p.id for p in city_states] == [3, 4]
        assert [p.id for p in get_player_city_states_suzerain(ctx, host.get_player(1))] == [5]

    def test_other_major_players(self, ctx, host):
        assert [p.id for p in ctx.get_other_major_players()] == [1, 2]
        assert [p.id for p in ctx.get_other_major_players(host.get_player(1))] == [0, 2]

    def test_at_war_requires_both_ideologies(self, ctx, host):
        assert is_player_at_war_with_opposing_ideology(ctx, host.get_player(0))
        host.get_player(2).diplomacy.ideology = -1
        assert not is_player_at_war_with_opposing_ideology(ctx, host.get_player(0))

    def test_at_war_same_ideology(self, ctx, host):
        host.get_player(2).diplomacy.ideology = 1
        assert not is_player_at_war_with_opposing_ideology(ctx, host.get_player(0))

    def test_traditions_unknown_definition_not_tagged(self, ctx, host):
        player = host.get_player(0)
        assert get_active_traditions_count(ctx, player) == 3
        assert get_active_traditions_count(ctx, player, "SCIENTIFIC") == 1
        assert get_active_traditions_count(ctx, player, "MILITARISTIC") == 0

    def test_missing_capabilities_count_zero(self, ctx):
        bare = PlayerSnapshot(id=42)
        assert get_active_traditions_count(ctx, bare) == 0
        assert get_settlements_count(bare, True, True) == 0
        assert not is_player_at_war_with_opposing_ideology(ctx, bare)


class TestUnitQueries:
    def test_types_aggregated(self, ctx, host):
        infos = get_player_units_types_maintenance(ctx, host.get_player(0))
        assert infos["UNIT_WARRIOR"].count == 2
        assert infos["UNIT_WARRIOR"].maintenance_cost == 2
        assert infos["UNIT_WARRIOR"].unit_class == "UNIT_CLASS_MELEE"
        assert infos["UNIT_SETTLER"].maintenance_cost == 0
        assert len(infos) == 3

    def test_target_filters(self):
        info = UnitTypeInfo(
            "UNIT_WARRIOR", 2, 2.0, "UNIT_CLASS_MELEE", ["UNIT_CLASS_MILITARY"]
        )
        assert is_unit_type_info_target_of_modifier(info, _make_modifier())
        assert is_unit_type_info_target_of_modifier(
            info, _make_modifier(UnitClass="UNIT_CLASS_MELEE")
        )
        assert not is_unit_type_info_target_of_modifier(
            info, _make_modifier(UnitClass="UNIT_CLASS_RECON")
        )
        assert not is_unit_type_info_target_of_modifier(
            info, _make_modifier(UnitType="UNIT_SCOUT,UNIT_ARCHER")
        )
        assert not is_unit_type_info_target_of_modifier(
            info, _make_modifier(UnitTag="UNIT_CLASS_NAVAL")
        )

    @pytest.mark.parametrize("arguments,count,cost,expected", [
        ({"Percent": -50}, 2, 2.0, 2.0),
        ({"Percent": -150}, 2, 2.0, 4.0),
        ({"Amount": -1}, 3, 2.0, 3.0),
        ({"Amount": -5}, 1, 2.0, 2.0),
        ({"Amount": 1}, 2, 2.0, -2.0),
        ({"Percent": -50}, 0, 2.0, 0.0),
        ({"Percent": -50, "Amount": -100}, 1, 2.0, 1.0),
    ])
    def test_efficiency_to_reduction(self, arguments, count, cost, expected):
        modifier = _make_modifier(**arguments)
        assert maintenance_efficiency_to_reduction(modifier, count, cost) == \
            pytest.approx(expected)

    def test_efficiency_without_arguments_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="economy.queries.units"):
            assert maintenance_efficiency_to_reduction(_make_modifier(), 2, 2.0) == 0
        assert "Unhandled maintenance efficiency" in caplog.text


class TestConstructibleQueries:
    def test_damaged_not_target(self, ctx, host):
        plot = host.get_plot(0, 0)
        damaged = ConstructibleSnapshot("BUILDING_MARKET", plot, damaged=True)
        assert not is_constructible_target_of_modifier(ctx, damaged, _make_modifier())

    def test_incomplete_not_target(self, ctx, host):
        temple = next(
            c for c in host.get_city(10).constructibles if c.type == "BUILDING_TEMPLE"
        )
        assert not is_constructible_target_of_modifier(ctx, temple, _make_modifier())

    def test_tag_unknown_definition(self, ctx, host):
        mystery = ConstructibleSnapshot("BUILDING_MYSTERY", host.get_plot(0, 0))
        assert is_constructible_target_of_modifier(ctx, mystery, _make_modifier())
        assert not is_constructible_target_of_modifier(
            ctx, mystery, _make_modifier(Tag="ECONOMIC")
        )

    def test_city_constructibles(self, ctx, host):
        found = get_city_constructibles_for_modifier(
            ctx, host.get_city(10), _make_modifier(Tag="SCIENCE")
        )
        assert [c.type for c in found] == ["BUILDING_LIBRARY"]

    def test_maintenance_reduction(self, ctx, host):
        library = next(
            c for c in host.get_city(10).constructibles if c.type == "BUILDING_LIBRARY"
        )
        reductions = constructible_maintenance_reduction(ctx, _make_modifier(Percent=-50), library)
        assert reductions == {YieldType.GOLD: 1.5, YieldType.HAPPINESS: 1.0}

    def test_maintenance_reduction_no_definition(self, ctx, host):
        mystery = ConstructibleSnapshot("BUILDING_MYSTERY", host.get_plot(0, 0))
        assert constructible_maintenance_reduction(ctx, _make_modifier(Amount=-1), mystery) == {}
