"""玩家层面的派生数量查询"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..subjects import capability

if TYPE_CHECKING:
    from ..context import EvaluationContext
    from ..host import PlayerLike, ResourcesLike
    from ..modifier import ResolvedModifier

NO_IDEOLOGY = -1


def get_player_city_states_suzerain(
    ctx: EvaluationContext, player: PlayerLike
) -> list[PlayerLike]:
    """返回以 player 为宗主的存活城邦"""
    result = []
    for other in ctx.get_alive_players():
        if not other.is_minor:
            continue
        influence = capability(other, "influence")
        if influence is None or influence.suzerain is None:
            continue
        if influence.suzerain == player.id:
            result.append(other)
    return result


def get_player_relationships_count_for_modifier(
    ctx: EvaluationContext, player: PlayerLike, modifier: ResolvedModifier
) -> int:
    """统计满足修正器关系条件的主要文明数量

    - UseAlliances=true 时，每个同盟计 1
    - RelationshipType 存在时，关系类型相同的每个玩家计 1
    两个条件独立计数，同一玩家可被计两次。城邦与自身不计入。
    """
    diplomacy = capability(player, "diplomacy")
    if diplomacy is None:
        return 0

    use_alliances = modifier.flag("UseAlliances")
    relationship_arg = modifier.argument("RelationshipType")
    relationship_type = relationship_arg.value if relationship_arg else None

    count = 0
    for other in ctx.get_other_major_players(player):
        if use_alliances and diplomacy.has_allied(other.id):
            count += 1
        if relationship_type and diplomacy.get_relationship_type(other.id) == relationship_type:
            count += 1
    return count


def is_player_at_war_with_opposing_ideology(ctx: EvaluationContext, player: PlayerLike) -> bool:
    """player 是否正与意识形态不同的主要文明交战（任一方未选意识形态则不算）"""
    diplomacy = capability(player, "diplomacy")
    if diplomacy is None:
        return False

    for other in ctx.get_other_major_players(player):
        if not diplomacy.is_at_war_with(other.id):
            continue

        other_diplomacy = capability(other, "diplomacy")
        own_ideology = diplomacy.ideology
        other_ideology = other_diplomacy.ideology if other_diplomacy is not None else NO_IDEOLOGY
        if own_ideology == NO_IDEOLOGY or other_ideology == NO_IDEOLOGY:
            continue
        if own_ideology == other_ideology:
            continue
        return True

    return False


def get_active_traditions_count(
    ctx: EvaluationContext, player: PlayerLike, tag: str | None = None
) -> int:
    """生效传统数量；给定 tag 时只统计定义中带该标签的传统"""
    culture = capability(player, "culture")
    if culture is None:
        return 0
    traditions = culture.get_active_traditions()
    if not tag:
        return len(traditions)

    count = 0
    for tradition_type in traditions:
        definition = ctx.game_data.get_tradition(tradition_type)
        if definition is not None and tag in definition.tags:
            count += 1
    return count


def get_settlements_count(player: PlayerLike, include_cities: bool, include_towns: bool) -> int:
    stats = capability(player, "stats")
    if stats is None:
        return 0
    count = 0
    if include_cities:
        count += stats.num_cities
    if include_towns:
        count += stats.num_towns
    return count


def get_trade_routes_count(player: PlayerLike) -> int:
    trade = capability(player, "trade")
    return trade.count_trade_routes() if trade is not None else 0


def get_spent_attribute_points(player: PlayerLike | None, attribute: str | None) -> int:
    identity = capability(player, "identity")
    if identity is None or not attribute:
        return 0
    return identity.get_spent_attribute_points(attribute) or 0


def get_resources_count_for_modifier(
    resources: ResourcesLike | None, modifier: ResolvedModifier
) -> int:
    """资源数量，可按 ResourceType（列表）/ ResourceClass 过滤"""
    if resources is None:
        return 0
    types = set(modifier.values("ResourceType"))
    resource_class = modifier.argument("ResourceClass")

    count = 0
    for resource in resources.get_resources():
        if types and resource.resource_type not in types:
            continue
        if resource_class and resource.resource_class != resource_class.value:
            continue
        count += 1
    return count
