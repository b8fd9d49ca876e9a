"""单位维护费查询"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..context import EvaluationContext
    from ..host import PlayerLike
    from ..modifier import ResolvedModifier

logger = logging.getLogger(__name__)


@dataclass
class UnitTypeInfo:
    """同类型单位的聚合信息"""

    unit_type: str
    count: int = 0
    maintenance_cost: float = 0.0
    unit_class: str | None = None
    tags: list[str] = field(default_factory=list)


def get_player_units_types_maintenance(
    ctx: EvaluationContext, player: PlayerLike
) -> dict[str, UnitTypeInfo]:
    """按单位类型聚合玩家单位数量与单个单位的维护费

    维护费取自静态数据；数据表中没有的单位类型维护费视为 0。
    """
    result: dict[str, UnitTypeInfo] = {}
    for unit in player.units:
        info = result.get(unit.type)
        if info is None:
            definition = ctx.game_data.get_unit(unit.type)
            info = UnitTypeInfo(unit_type=unit.type)
            if definition is not None:
                info.maintenance_cost = definition.maintenance
                info.unit_class = definition.unit_class
                info.tags = list(definition.tags)
            result[unit.type] = info
        info.count += 1
    return result


def is_unit_type_info_target_of_modifier(info: UnitTypeInfo, modifier: ResolvedModifier) -> bool:
    """单位类型是否命中修正器的 UnitType / UnitTag / UnitClass 过滤条件（缺省全部命中）"""
    unit_types = modifier.values("UnitType")
    if unit_types and info.unit_type not in unit_types:
        return False

    unit_tag = modifier.argument("UnitTag")
    if unit_tag and unit_tag.value not in info.tags:
        return False

    unit_class = modifier.argument("UnitClass")
    if unit_class and unit_class.value != info.unit_class:
        return False

    return True


def maintenance_efficiency_to_reduction(
    modifier: ResolvedModifier, count: int, cost: float
) -> float:
    """把维护效率参数换算为产出增量（正数 = 节省的维护费）

    - Percent: 维护费按百分比变化
    - Amount: 每个单位的维护费变化量
    变化后的维护费不会低于 0。
    """
    if count <= 0:
        return 0.0

    if modifier.has_argument("Percent"):
        change = count * cost * modifier.number("Percent") / 100
    elif modifier.has_argument("Amount"):
        change = count * modifier.number("Amount")
    else:
        logger.warning(
            "Unhandled maintenance efficiency arguments on %s: %s",
            modifier.modifier_id,
            sorted(modifier.arguments),
        )
        return 0.0

    change = max(change, -count * cost)
    return -change
