"""产出 / 主体 / 效果类型枚举

从 effects 中独立出来，避免 modifier → effects → modifier 的循环导入。
"""

from enum import Enum


class YieldType(str, Enum):
    """产出类型（固定枚举集合）"""

    FOOD = "YIELD_FOOD"
    PRODUCTION = "YIELD_PRODUCTION"
    GOLD = "YIELD_GOLD"
    SCIENCE = "YIELD_SCIENCE"
    CULTURE = "YIELD_CULTURE"
    HAPPINESS = "YIELD_HAPPINESS"
    DIPLOMACY = "YIELD_DIPLOMACY"


class SubjectKind(str, Enum):
    """修正器作用主体的种类"""

    PLAYER = "player"
    CITY = "city"
    UNIT = "unit"
    PLOT = "plot"


class EffectType(str, Enum):
    """已知的效果类型

    未列出的字符串仍可出现在修正器数据中，由默认处理器记录警告后忽略。
    """

    # ==================== 玩家 ====================
    PLAYER_ADJUST_YIELD = "EFFECT_PLAYER_ADJUST_YIELD"
    PLAYER_ADJUST_YIELD_PER_ACTIVE_TRADITION = "EFFECT_PLAYER_ADJUST_YIELD_PER_ACTIVE_TRADITION"
    PLAYER_ADJUST_YIELD_PER_RESOURCE = "EFFECT_PLAYER_ADJUST_YIELD_PER_RESOURCE"
    PLAYER_ADJUST_YIELD_PER_NUM_CITIES = "EFFECT_PLAYER_ADJUST_YIELD_PER_NUM_CITIES"
    PLAYER_ADJUST_YIELD_PER_NUM_TRADE_ROUTES = "EFFECT_PLAYER_ADJUST_YIELD_PER_NUM_TRADE_ROUTES"
    PLAYER_ADJUST_YIELD_PER_SUZERAIN = "EFFECT_PLAYER_ADJUST_YIELD_PER_SUZERAIN"
    PLAYER_ADJUST_YIELD_PER_ATTRIBUTE = "EFFECT_PLAYER_ADJUST_YIELD_PER_ATTRIBUTE"
    PLAYER_ADJUST_YIELD_AT_WAR_WITH_OPPOSING_IDEOLOGY = (
        "EFFECT_PLAYER_ADJUST_YIELD_AT_WAR_WITH_OPPOSING_IDEOLOGY"
    )
    DIPLOMACY_ADJUST_YIELD_PER_PLAYER_RELATIONSHIP = (
        "EFFECT_DIPLOMACY_ADJUST_YIELD_PER_PLAYER_RELATIONSHIP"
    )
    PLAYER_ADJUST_CONSTRUCTIBLE_YIELD = "EFFECT_PLAYER_ADJUST_CONSTRUCTIBLE_YIELD"
    PLAYER_ADJUST_CONSTRUCTIBLE_YIELD_BY_ATTRIBUTE = (
        "EFFECT_PLAYER_ADJUST_CONSTRUCTIBLE_YIELD_BY_ATTRIBUTE"
    )
    PLAYER_ADJUST_UNIT_MAINTENANCE_EFFICIENCY = "EFFECT_PLAYER_ADJUST_UNIT_MAINTENANCE_EFFICIENCY"
    MODIFY_PLAYER_TRADE_YIELD_CONVERSION = "EFFECT_MODIFY_PLAYER_TRADE_YIELD_CONVERSION"
    PLAYER_ADJUST_YIELD_FROM_NATURAL_DISASTERS = "EFFECT_PLAYER_ADJUST_YIELD_FROM_NATURAL_DISASTERS"

    # ==================== 城市 ====================
    CITY_ADJUST_YIELD = "EFFECT_CITY_ADJUST_YIELD"
    CITY_ADJUST_YIELD_PER_ATTRIBUTE = "EFFECT_CITY_ADJUST_YIELD_PER_ATTRIBUTE"
    CITY_ADJUST_WORKER_YIELD = "EFFECT_CITY_ADJUST_WORKER_YIELD"
    CITY_ADJUST_YIELD_PER_RESOURCE = "EFFECT_CITY_ADJUST_YIELD_PER_RESOURCE"
    CITY_ACTIVATE_CONSTRUCTIBLE_ADJACENCY = "EFFECT_CITY_ACTIVATE_CONSTRUCTIBLE_ADJACENCY"
    CITY_ADJUST_ADJACENCY_FLAT_AMOUNT = "EFFECT_CITY_ADJUST_ADJACENCY_FLAT_AMOUNT"
    CITY_ADJUST_BUILDING_MAINTENANCE_EFFICIENCY = (
        "EFFECT_CITY_ADJUST_BUILDING_MAINTENANCE_EFFICIENCY"
    )

    # ==================== 地块 ====================
    PLOT_ADJUST_YIELD = "EFFECT_PLOT_ADJUST_YIELD"

    # ==================== 嵌套 ====================
    ATTACH_MODIFIERS = "EFFECT_ATTACH_MODIFIERS"

    # ==================== 已知但不计算产出 ====================
    CITY_ADJUST_UNIT_PRODUCTION = "EFFECT_CITY_ADJUST_UNIT_PRODUCTION"
    UNIT_ADJUST_MOVEMENT = "EFFECT_UNIT_ADJUST_MOVEMENT"
    ADJUST_PLAYER_OR_CITY_BUILDING_PURCHASE_EFFICIENCY = (
        "EFFECT_ADJUST_PLAYER_OR_CITY_BUILDING_PURCHASE_EFFICIENCY"
    )
    ADJUST_PLAYER_OR_CITY_UNIT_PURCHASE_EFFICIENCY = (
        "EFFECT_ADJUST_PLAYER_OR_CITY_UNIT_PURCHASE_EFFICIENCY"
    )
    ADJUST_PLAYER_UNITS_PILLAGE_BUILDING_MODIFIER = (
        "EFFECT_ADJUST_PLAYER_UNITS_PILLAGE_BUILDING_MODIFIER"
    )
    ADJUST_PLAYER_UNITS_PILLAGE_IMPROVEMENT_MODIFIER = (
        "EFFECT_ADJUST_PLAYER_UNITS_PILLAGE_IMPROVEMENT_MODIFIER"
    )
    DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY = (
        "EFFECT_DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY"
    )
    DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY_PER_GREAT_WORK = (
        "EFFECT_DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY_PER_GREAT_WORK"
    )
    DIPLOMACY_AGENDA_TIMED_UPDATE = "EFFECT_DIPLOMACY_AGENDA_TIMED_UPDATE"
    DISTRICT_ADJUST_FORTIFIED_COMBAT_STRENGTH = "EFFECT_DISTRICT_ADJUST_FORTIFIED_COMBAT_STRENGTH"
    PLAYER_ADJUST_SETTLEMENT_CAP = "EFFECT_PLAYER_ADJUST_SETTLEMENT_CAP"
    UNIT_ADJUST_COMBAT_STRENGTH = "EFFECT_UNIT_ADJUST_COMBAT_STRENGTH"
    UNIT_ADJUST_SIGHT = "EFFECT_UNIT_ADJUST_SIGHT"
    UNIT_ADJUST_HEAL_PER_TURN = "EFFECT_UNIT_ADJUST_HEAL_PER_TURN"
    UNIT_ADJUST_EXPERIENCE = "EFFECT_UNIT_ADJUST_EXPERIENCE"
    PLAYER_ADJUST_TRADE_ROUTE_RANGE = "EFFECT_PLAYER_ADJUST_TRADE_ROUTE_RANGE"
    DISTRICT_ADJUST_HIT_POINTS = "EFFECT_DISTRICT_ADJUST_HIT_POINTS"

    @classmethod
    def parse(cls, tag: str) -> "EffectType | None":
        """按字符串查找枚举值，未知标签返回 None"""
        try:
            return cls(tag)
        except ValueError:
            return None
