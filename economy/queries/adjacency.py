"""相邻加成查询与缓存

相邻加成定义属于静态游戏数据，会话内不会变化，因此采用只读穿透缓存：
按 ID 懒加载，整个会话内不失效（clear() 仅供测试使用）。
未命中的 ID 不写入缓存，下次查询会重新访问数据表。

使用方式:
    cache = AdjacencyCache(game_data)
    adjacency = cache.get("MarketAdjacency")
    plots = get_adjacency_granting_plots(adjacency, constructible.plot, game_data)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..game_data import AdjacencyDefinition, GameData
    from ..host import PlotLike

logger = logging.getLogger(__name__)


class AdjacencyCache:
    """相邻加成定义的只读穿透缓存"""

    def __init__(self, game_data: GameData) -> None:
        self._game_data = game_data
        self._cache: dict[str, AdjacencyDefinition] = {}

    # ==================== 查询 ====================

    def get(self, adjacency_id: str) -> AdjacencyDefinition | None:
        """查询相邻加成定义，未命中时回源并写入缓存。"""
        cached = self._cache.get(adjacency_id)
        if cached is not None:
            return cached

        definition = self._game_data.get_adjacency(adjacency_id)
        if definition is not None:
            logger.debug("AdjacencyCache miss, loaded %s", adjacency_id)
            self._cache[adjacency_id] = definition
        return definition

    def is_cached(self, adjacency_id: str) -> bool:
        return adjacency_id in self._cache

    def clear(self) -> None:
        self._cache.clear()

    # ==================== 属性 ====================

    @property
    def size(self) -> int:
        return len(self._cache)


def _plot_constructible_tags(plot: PlotLike, game_data: GameData) -> set[str]:
    tags: set[str] = set()
    for constructible_type in plot.constructibles:
        definition = game_data.get_constructible(constructible_type)
        if definition is not None:
            tags.update(definition.tags)
    return tags


def plot_grants_adjacency(
    plot: PlotLike, adjacency: AdjacencyDefinition, game_data: GameData
) -> bool:
    """判断单个地块是否满足相邻加成的任一条件"""
    if adjacency.adjacent_terrain and plot.terrain == adjacency.adjacent_terrain:
        return True
    if adjacency.adjacent_feature and plot.feature == adjacency.adjacent_feature:
        return True
    if adjacency.adjacent_resource and plot.resource:
        return True
    if adjacency.adjacent_river and plot.is_river:
        return True
    if adjacency.adjacent_constructible and adjacency.adjacent_constructible in plot.constructibles:
        return True
    if adjacency.adjacent_constructible_tag:
        return adjacency.adjacent_constructible_tag in _plot_constructible_tags(plot, game_data)
    return False


def get_adjacency_granting_plots(
    adjacency: AdjacencyDefinition, plot: PlotLike, game_data: GameData
) -> list[PlotLike]:
    """返回 plot 周围提供该相邻加成的地块"""
    return [
        neighbor
        for neighbor in plot.adjacent_plots()
        if plot_grants_adjacency(neighbor, adjacency, game_data)
    ]


def adjacency_yield_for_plot_count(count: int, per_step: float, divisor: int) -> float:
    """每满 divisor 个相邻地块贡献一次 per_step（向下取整）"""
    return per_step * (count // divisor)
