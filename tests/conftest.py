"""共享测试夹具：基于快照宿主模型的小型对局

地块布局（轴向坐标），市场位于 (0, 0)::

    (1, 0)  海岸          (-1, 0) 海岸
    (0, 1)  盐（资源）+ 未完工神庙
    (0, -1) 河流草原
    (1, -1) 图书馆
    (-1, 1) 草原 + 农场

玩家 0 为评估玩家：与 1 结盟，与 2 交战（意识形态不同），3 / 4 号城邦以其为宗主。
"""

from __future__ import annotations

import copy

import pytest

from economy.config import EconomyConfig
from economy.context import EvaluationContext
from economy.game_data import StaticGameData
from economy.snapshot import HostSnapshot

GAME_DATA = {
    "Traditions": [
        {"TraditionType": "TRADITION_MERCHANTS", "Tags": ["ECONOMIC"]},
        {"TraditionType": "TRADITION_SCHOLARS", "Tags": ["SCIENTIFIC"]},
    ],
    "Adjacencies": [
        {"ID": "CoastalGold", "YieldType": "YIELD_GOLD", "YieldChange": 1,
         "AdjacentTerrain": "TERRAIN_COAST"},
        {"ID": "ResourceProduction", "YieldType": "YIELD_PRODUCTION", "YieldChange": 2,
         "AdjacentResource": True},
        {"ID": "RiverScience", "YieldType": "YIELD_SCIENCE", "YieldChange": 1,
         "AdjacentRiver": True},
        {"ID": "ScienceCulture", "YieldType": "YIELD_CULTURE", "YieldChange": 3,
         "TilesRequired": 2, "AdjacentConstructibleTag": "SCIENCE"},
    ],
    "Constructibles": [
        {"ConstructibleType": "BUILDING_MARKET", "Tags": ["ECONOMIC"],
         "Adjacencies": ["CoastalGold"],
         "Maintenance": {"YIELD_GOLD": 2, "YIELD_HAPPINESS": 1}},
        {"ConstructibleType": "BUILDING_LIBRARY", "Tags": ["SCIENCE"],
         "Adjacencies": ["RiverScience"],
         "Maintenance": {"YIELD_GOLD": 3, "YIELD_HAPPINESS": 2}},
        {"ConstructibleType": "BUILDING_TEMPLE", "Tags": ["HAPPINESS"],
         "Maintenance": {"YIELD_GOLD": 1}},
        {"ConstructibleType": "IMPROVEMENT_FARM", "ConstructibleClass": "IMPROVEMENT",
         "Tags": ["FOOD"]},
    ],
    "Units": [
        {"UnitType": "UNIT_WARRIOR", "UnitClass": "UNIT_CLASS_MELEE",
         "Tags": ["UNIT_CLASS_MILITARY"], "Maintenance": 2},
        {"UnitType": "UNIT_SCOUT", "UnitClass": "UNIT_CLASS_RECON",
         "Tags": ["UNIT_CLASS_MILITARY"], "Maintenance": 1},
        {"UnitType": "UNIT_SETTLER", "Maintenance": 0},
    ],
}

HOST = {
    "Plots": [
        {"x": 0, "y": 0, "terrain": "TERRAIN_GRASS", "constructibles": ["BUILDING_MARKET"]},
        {"x": 1, "y": 0, "terrain": "TERRAIN_COAST"},
        {"x": -1, "y": 0, "terrain": "TERRAIN_COAST"},
        {"x": 0, "y": 1, "terrain": "TERRAIN_PLAINS", "resource": "RESOURCE_SALT",
         "constructibles": ["BUILDING_TEMPLE"]},
        {"x": 0, "y": -1, "terrain": "TERRAIN_GRASS", "river": True},
        {"x": 1, "y": -1, "terrain": "TERRAIN_GRASS", "constructibles": ["BUILDING_LIBRARY"]},
        {"x": -1, "y": 1, "terrain": "TERRAIN_GRASS", "constructibles": ["IMPROVEMENT_FARM"]},
    ],
    "Players": [
        {
            "id": 0,
            "traditions": ["TRADITION_MERCHANTS", "TRADITION_SCHOLARS", "TRADITION_UNLISTED"],
            "attributes": {"ATTRIBUTE_ECONOMIC": 3},
            "diplomacy": {
                "ideology": 1,
                "allies": [1],
                "relationships": {"1": "DIPLO_RELATIONSHIP_FRIENDLY",
                                  "2": "DIPLO_RELATIONSHIP_HOSTILE"},
                "at_war_with": [2],
            },
            "resources": [
                {"type": "RESOURCE_SALT", "class": "RESOURCECLASS_BONUS"},
                {"type": "RESOURCE_SILK", "class": "RESOURCECLASS_EMPIRE"},
            ],
            "trade_routes": 2,
            "cities": [
                {
                    "id": 10,
                    "specialists": 2,
                    "laborers": 4,
                    "resources": [{"type": "RESOURCE_SALT", "class": "RESOURCECLASS_BONUS"}],
                    "constructibles": [
                        {"type": "BUILDING_MARKET", "x": 0, "y": 0},
                        {"type": "BUILDING_LIBRARY", "x": 1, "y": -1},
                        {"type": "BUILDING_TEMPLE", "x": 0, "y": 1, "complete": False},
                        {"type": "IMPROVEMENT_FARM", "x": -1, "y": 1},
                    ],
                },
                {
                    "id": 11,
                    "town": True,
                    "constructibles": [{"type": "BUILDING_MARKET", "x": 5, "y": 5}],
                },
            ],
            "units": [
                {"id": 100, "type": "UNIT_WARRIOR"},
                {"id": 101, "type": "UNIT_WARRIOR"},
                {"id": 102, "type": "UNIT_SCOUT"},
                {"id": 103, "type": "UNIT_SETTLER"},
            ],
        },
        {"id": 1, "diplomacy": {"ideology": 1, "allies": [0]}},
        {"id": 2, "diplomacy": {"ideology": 2, "at_war_with": [0]}},
        {"id": 3, "major": False, "suzerain": 0},
        {"id": 4, "major": False, "suzerain": 0},
        {"id": 5, "major": False, "suzerain": 1},
    ],
}


@pytest.fixture
def raw_game_data() -> dict:
    return copy.deepcopy(GAME_DATA)


@pytest.fixture
def raw_host() -> dict:
    return copy.deepcopy(HOST)


@pytest.fixture
def game_data() -> StaticGameData:
    return StaticGameData.from_dict(GAME_DATA)


@pytest.fixture
def host() -> HostSnapshot:
    return HostSnapshot.from_dict(HOST)


@pytest.fixture
def config() -> EconomyConfig:
    """测试构建默认使用严格模式"""
    return EconomyConfig(strict=True, max_modifier_depth=8)


@pytest.fixture
def ctx(host, game_data, config) -> EvaluationContext:
    return EvaluationContext(
        player=host.get_player(0),
        players=host.players,
        game_data=game_data,
        resolve_subjects_with_requirements=host.resolve_subjects,
        config=config,
    )


@pytest.fixture
def lenient_ctx(ctx) -> EvaluationContext:
    """非严格模式上下文：单个主体的错误被记录后跳过"""
    from dataclasses import replace

    return replace(ctx, config=EconomyConfig(strict=False, max_modifier_depth=8))
