"""EvaluationContext: 单次解析的显式上下文

替代宿主全局单例（当前玩家、存活玩家列表、静态数据表）。所有查询函数
与效果处理器都以此对象为参数，不读取任何全局状态。

嵌套修正器展开时通过 nested() 派生子上下文：chain 记录从根修正器到当前
修正器的 ID 链，用于环检测与深度限制；其余字段（包括相邻加成缓存）共享。
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from .config import EconomyConfig, get_config
from .queries.adjacency import AdjacencyCache

if TYPE_CHECKING:
    from .effects.registry import EffectRegistry
    from .game_data import GameData
    from .host import PlayerLike
    from .modifier import ResolvedModifier
    from .subjects import Subject

ModifierLookup = Callable[[str], "ResolvedModifier | None"]
SubjectResolver = Callable[["PlayerLike", "ResolvedModifier", "Subject"], "Sequence[Subject]"]


def _no_modifier(modifier_id: str) -> None:
    return None


def _no_subjects(player, modifier, subject) -> list:
    return []


@dataclass
class EvaluationContext:
    """单次解析上下文

    Attributes:
        player: 正在评估的玩家（原宿主中的本地玩家）
        players: 存活玩家名单（含城邦）
        game_data: 静态数据查询
        resolve_modifier_by_id: 外部修正器注册表查询
        resolve_subjects_with_requirements: 外部主体 / 需求解析
        chain: 当前嵌套链上的修正器 ID
    """

    player: PlayerLike
    players: Sequence[PlayerLike]
    game_data: GameData
    resolve_modifier_by_id: ModifierLookup = _no_modifier
    resolve_subjects_with_requirements: SubjectResolver = _no_subjects
    config: EconomyConfig = field(default_factory=get_config)
    registry: EffectRegistry | None = None
    adjacency_cache: AdjacencyCache | None = None
    chain: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.adjacency_cache is None:
            self.adjacency_cache = AdjacencyCache(self.game_data)

    @property
    def depth(self) -> int:
        return len(self.chain)

    def nested(self, modifier_id: str) -> EvaluationContext:
        """派生嵌套修正器的子上下文"""
        return replace(self, chain=self.chain + (modifier_id,))

    def get_registry(self) -> EffectRegistry:
        if self.registry is None:
            from .effects.registry import get_default_registry

            self.registry = get_default_registry()
        return self.registry

    # ==================== 玩家查询 ====================

    def get_alive_players(self) -> list[PlayerLike]:
        return list(self.players)

    def get_other_major_players(self, player: PlayerLike | None = None) -> list[PlayerLike]:
        """除 player（缺省为当前玩家）外的所有存活主要文明"""
        player = player if player is not None else self.player
        return [p for p in self.players if p.is_major and p.id != player.id]
