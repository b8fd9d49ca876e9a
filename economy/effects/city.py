"""城市层面的效果处理器

主体为城市；主体不是城市时相关数量按 0 处理。
"""

from __future__ import annotations

import logging

from ..enums import EffectType
from ..exceptions import InvalidDivisorError, UnknownAdjacencyError
from ..queries.adjacency import adjacency_yield_for_plot_count, get_adjacency_granting_plots
from ..queries.constructibles import (
    constructible_maintenance_reduction,
    get_city_constructibles_for_modifier,
    is_constructible_target_of_modifier,
)
from ..queries.player import get_resources_count_for_modifier, get_spent_attribute_points
from ..subjects import capability
from ..yields import add_yields_amount, add_yields_percent
from .registry import effect_handler

logger = logging.getLogger(__name__)


@effect_handler(EffectType.CITY_ADJUST_YIELD)
def city_adjust_yield(ctx, delta, subject, modifier) -> None:
    # Percent 优先于 Amount
    if modifier.has_argument("Percent"):
        add_yields_percent(delta, modifier, modifier.number("Percent"))
    elif modifier.has_argument("Amount"):
        add_yields_amount(delta, modifier, modifier.number("Amount"))
    else:
        logger.warning("Unhandled ModifierArguments: %s", sorted(modifier.arguments))


@effect_handler(EffectType.CITY_ADJUST_YIELD_PER_ATTRIBUTE)
def city_adjust_yield_per_attribute(ctx, delta, subject, modifier) -> None:
    attribute = modifier.argument("AttributeType")
    points = get_spent_attribute_points(ctx.player, attribute.value if attribute else None)
    add_yields_amount(delta, modifier, modifier.number("Amount") * points)


@effect_handler(EffectType.CITY_ADJUST_WORKER_YIELD)
def city_adjust_worker_yield(ctx, delta, subject, modifier) -> None:
    workers = capability(subject.city, "workers")
    specialists = workers.get_num_workers(True) if workers is not None else 0
    add_yields_amount(delta, modifier, modifier.number("Amount") * (specialists or 0))


@effect_handler(EffectType.CITY_ADJUST_YIELD_PER_RESOURCE)
def city_adjust_yield_per_resource(ctx, delta, subject, modifier) -> None:
    resources = get_resources_count_for_modifier(capability(subject.city, "resources"), modifier)
    add_yields_amount(delta, modifier, modifier.number("Amount") * resources)


# ==================== 相邻加成 ====================


def _resolve_adjacencies(ctx, modifier):
    """解析 ConstructibleAdjacency 列表中的相邻加成定义

    未知 ID：严格模式下抛出 UnknownAdjacencyError，否则记录警告并跳过。
    """
    adjacencies = []
    for adjacency_id in modifier.values("ConstructibleAdjacency"):
        adjacency = ctx.adjacency_cache.get(adjacency_id)
        if adjacency is None:
            if ctx.config.strict:
                raise UnknownAdjacencyError(adjacency_id, modifier.modifier_id)
            logger.warning(
                "Unknown adjacency %s in modifier %s", adjacency_id, modifier.modifier_id
            )
            continue
        adjacencies.append(adjacency)
    return adjacencies


@effect_handler(EffectType.CITY_ACTIVATE_CONSTRUCTIBLE_ADJACENCY)
def city_activate_constructible_adjacency(ctx, delta, subject, modifier) -> None:
    """为命中过滤条件的建筑激活额外的相邻加成"""
    city = subject.city
    if city is None:
        return

    constructibles = get_city_constructibles_for_modifier(ctx, city, modifier)
    for adjacency in _resolve_adjacencies(ctx, modifier):
        for constructible in constructibles:
            plots = get_adjacency_granting_plots(adjacency, constructible.plot, ctx.game_data)
            amount = adjacency_yield_for_plot_count(
                len(plots), adjacency.yield_change, adjacency.tiles_required
            )
            delta.add_amount(adjacency.yield_type, amount)


@effect_handler(EffectType.CITY_ADJUST_ADJACENCY_FLAT_AMOUNT)
def city_adjust_adjacency_flat_amount(ctx, delta, subject, modifier) -> None:
    """已拥有该相邻加成的建筑，每满 Divisor 个相邻地块额外获得 Amount"""
    # Divisor 按整数处理，小于 1 视为数据错误
    divisor = modifier.number("Divisor", 1.0)
    if int(divisor) <= 0:
        raise InvalidDivisorError(divisor, modifier.modifier_id)

    city = subject.city
    if city is None:
        return

    amount = modifier.number("Amount")
    for adjacency in _resolve_adjacencies(ctx, modifier):
        for constructible in city.constructibles:
            if not is_constructible_target_of_modifier(ctx, constructible, modifier):
                continue
            definition = ctx.game_data.get_constructible(constructible.type)
            if definition is None or adjacency.id not in definition.adjacencies:
                continue
            plots = get_adjacency_granting_plots(adjacency, constructible.plot, ctx.game_data)
            delta.add_amount(
                adjacency.yield_type,
                adjacency_yield_for_plot_count(len(plots), amount, int(divisor)),
            )


# ==================== 维护费 ====================


@effect_handler(EffectType.CITY_ADJUST_BUILDING_MAINTENANCE_EFFICIENCY)
def city_adjust_building_maintenance_efficiency(ctx, delta, subject, modifier) -> None:
    """金币与幸福度维护费减免，同一遍历中写入，不受产出倍率影响"""
    city = subject.city
    if city is None:
        return

    for constructible in get_city_constructibles_for_modifier(ctx, city, modifier):
        for kind, reduction in constructible_maintenance_reduction(
            ctx, modifier, constructible
        ).items():
            delta.add_amount_no_multiplier(kind, reduction)
