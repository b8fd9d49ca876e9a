"""玩家层面的效果处理器

主体为玩家；主体不是玩家时按缺失能力处理（零贡献）。
部分效果沿用游戏的语义，统计的是正在评估的玩家（ctx.player）而不是主体。
"""

from __future__ import annotations

import logging

from ..enums import EffectType, YieldType
from ..queries.constructibles import get_player_buildings_count_for_modifier
from ..queries.player import (
    get_active_traditions_count,
    get_player_city_states_suzerain,
    get_player_relationships_count_for_modifier,
    get_resources_count_for_modifier,
    get_settlements_count,
    get_spent_attribute_points,
    get_trade_routes_count,
    is_player_at_war_with_opposing_ideology,
)
from ..queries.units import (
    get_player_units_types_maintenance,
    is_unit_type_info_target_of_modifier,
    maintenance_efficiency_to_reduction,
)
from ..subjects import capability
from ..yields import add_yields_amount, add_yields_percent
from .registry import effect_handler

logger = logging.getLogger(__name__)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD)
def player_adjust_yield(ctx, delta, subject, modifier) -> None:
    if modifier.has_argument("Percent"):
        add_yields_percent(delta, modifier, modifier.number("Percent"))
    elif modifier.has_argument("Amount"):
        add_yields_amount(delta, modifier, modifier.number("Amount"))
    else:
        logger.warning("Unhandled ModifierArguments: %s", sorted(modifier.arguments))


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_ACTIVE_TRADITION)
def player_adjust_yield_per_active_tradition(ctx, delta, subject, modifier) -> None:
    tag = modifier.argument("TraditionTag")
    traditions = get_active_traditions_count(ctx, subject.player, tag.value if tag else None)
    add_yields_amount(delta, modifier, modifier.number("Amount") * traditions)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_RESOURCE)
def player_adjust_yield_per_resource(ctx, delta, subject, modifier) -> None:
    resources = get_resources_count_for_modifier(
        capability(subject.player, "resources"), modifier
    )
    add_yields_amount(delta, modifier, modifier.number("Amount") * resources)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_NUM_CITIES)
def player_adjust_yield_per_num_cities(ctx, delta, subject, modifier) -> None:
    # 两个开关都未给出时城市与城镇都计入
    both_absent = not modifier.has_argument("Cities") and not modifier.has_argument("Towns")
    settlements = get_settlements_count(
        subject.player,
        include_cities=both_absent or modifier.flag("Cities"),
        include_towns=both_absent or modifier.flag("Towns"),
    )
    add_yields_amount(delta, modifier, modifier.number("Amount") * settlements)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_NUM_TRADE_ROUTES)
def player_adjust_yield_per_num_trade_routes(ctx, delta, subject, modifier) -> None:
    routes = get_trade_routes_count(subject.player)
    add_yields_amount(delta, modifier, modifier.number("Amount") * routes)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_SUZERAIN)
def player_adjust_yield_per_suzerain(ctx, delta, subject, modifier) -> None:
    player = subject.player
    city_states = get_player_city_states_suzerain(ctx, player) if player is not None else []
    add_yields_amount(delta, modifier, modifier.number("Amount") * len(city_states))


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_PER_ATTRIBUTE)
def player_adjust_yield_per_attribute(ctx, delta, subject, modifier) -> None:
    attribute = modifier.argument("AttributeType")
    points = get_spent_attribute_points(subject.player, attribute.value if attribute else None)
    add_yields_amount(delta, modifier, modifier.number("Amount") * points)


@effect_handler(EffectType.PLAYER_ADJUST_YIELD_AT_WAR_WITH_OPPOSING_IDEOLOGY)
def player_adjust_yield_at_war_with_opposing_ideology(ctx, delta, subject, modifier) -> None:
    player = subject.player
    at_war = player is not None and is_player_at_war_with_opposing_ideology(ctx, player)
    add_yields_amount(delta, modifier, modifier.number("Amount") if at_war else 0.0)


@effect_handler(EffectType.DIPLOMACY_ADJUST_YIELD_PER_PLAYER_RELATIONSHIP)
def diplomacy_adjust_yield_per_player_relationship(ctx, delta, subject, modifier) -> None:
    relationships = get_player_relationships_count_for_modifier(ctx, ctx.player, modifier)
    add_yields_amount(delta, modifier, modifier.number("Amount") * relationships)


@effect_handler(EffectType.PLAYER_ADJUST_CONSTRUCTIBLE_YIELD)
def player_adjust_constructible_yield(ctx, delta, subject, modifier) -> None:
    buildings = get_player_buildings_count_for_modifier(ctx, ctx.player, modifier)
    add_yields_amount(delta, modifier, modifier.number("Amount") * buildings)


@effect_handler(EffectType.PLAYER_ADJUST_CONSTRUCTIBLE_YIELD_BY_ATTRIBUTE)
def player_adjust_constructible_yield_by_attribute(ctx, delta, subject, modifier) -> None:
    attribute = modifier.argument("AttributeType")
    points = get_spent_attribute_points(ctx.player, attribute.value if attribute else None)
    buildings = get_player_buildings_count_for_modifier(ctx, ctx.player, modifier)
    add_yields_amount(delta, modifier, modifier.number("Amount") * points * buildings)


# ==================== 单位 ====================


@effect_handler(EffectType.PLAYER_ADJUST_UNIT_MAINTENANCE_EFFICIENCY)
def player_adjust_unit_maintenance_efficiency(ctx, delta, subject, modifier) -> None:
    """维护费减免只写入金币，且不受任何产出倍率影响"""
    unit_types = get_player_units_types_maintenance(ctx, ctx.player)
    total_reduction = 0.0
    total_cost = 0.0
    for info in unit_types.values():
        if not is_unit_type_info_target_of_modifier(info, modifier):
            continue

        total_reduction += maintenance_efficiency_to_reduction(
            modifier, info.count, info.maintenance_cost
        )
        total_cost += info.count * info.maintenance_cost

    logger.debug(
        "Unit maintenance efficiency %s: reduction=%s of cost=%s",
        modifier.modifier_id, total_reduction, total_cost,
    )
    delta.add_amount_no_multiplier(YieldType.GOLD, total_reduction)
