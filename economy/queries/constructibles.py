"""建筑 / 改良设施查询"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..enums import YieldType
from .units import maintenance_efficiency_to_reduction

if TYPE_CHECKING:
    from ..context import EvaluationContext
    from ..host import CityLike, ConstructibleLike, PlayerLike
    from ..modifier import ResolvedModifier

MAINTENANCE_YIELDS = (YieldType.GOLD, YieldType.HAPPINESS)


def is_constructible_target_of_modifier(
    ctx: EvaluationContext, constructible: ConstructibleLike, modifier: ResolvedModifier
) -> bool:
    """建筑是否命中修正器的 ConstructibleType / Tag 过滤条件

    未完工或已损坏的建筑不计入。
    """
    if not constructible.complete or constructible.damaged:
        return False

    types = modifier.values("ConstructibleType")
    if types and constructible.type not in types:
        return False

    tag = modifier.argument("Tag")
    if tag:
        definition = ctx.game_data.get_constructible(constructible.type)
        if definition is None or tag.value not in definition.tags:
            return False

    return True


def get_city_constructibles_for_modifier(
    ctx: EvaluationContext, city: CityLike, modifier: ResolvedModifier
) -> list[ConstructibleLike]:
    return [
        c for c in city.constructibles
        if is_constructible_target_of_modifier(ctx, c, modifier)
    ]


def get_player_buildings_count_for_modifier(
    ctx: EvaluationContext, player: PlayerLike, modifier: ResolvedModifier
) -> int:
    """玩家所有城市中命中过滤条件的建筑数量"""
    return sum(
        len(get_city_constructibles_for_modifier(ctx, city, modifier))
        for city in player.cities
    )


def constructible_maintenance_reduction(
    ctx: EvaluationContext, modifier: ResolvedModifier, constructible: ConstructibleLike
) -> dict[YieldType, float]:
    """单个建筑的金币 / 幸福度维护费减免"""
    definition = ctx.game_data.get_constructible(constructible.type)
    if definition is None:
        return {}

    reductions: dict[YieldType, float] = {}
    for kind in MAINTENANCE_YIELDS:
        cost = definition.maintenance.get(kind, 0.0)
        if cost:
            reductions[kind] = maintenance_efficiency_to_reduction(modifier, 1, cost)
    return reductions
