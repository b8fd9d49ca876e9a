"""产出增量累加器

YieldsDelta 由调用方创建，按引用穿过整个（可能递归的）解析过程，
最后由调用方读取。所有写入操作都是纯加法：不去重、不截断、不取整。

三个通道分别记录：
  - amount: 受产出倍率影响的固定值
  - percent: 百分比加成
  - amount_no_multiplier: 不受任何倍率影响的固定值（维护费减免）

通道之间的合成由下游消费者完成，compose() 仅作为便捷方法提供。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .enums import YieldType

if TYPE_CHECKING:
    from .modifier import ResolvedModifier

logger = logging.getLogger(__name__)


@dataclass
class YieldEntry:
    """单一产出类型的累加值"""

    amount: float = 0.0
    percent: float = 0.0
    amount_no_multiplier: float = 0.0

    def is_zero(self) -> bool:
        return self.amount == 0 and self.percent == 0 and self.amount_no_multiplier == 0


@dataclass
class YieldsDelta:
    """产出增量聚合

    Attributes:
        multipliers: 当前生效的产出倍率上下文（缺省为 1.0），只作用于 add_amount
    """

    multipliers: dict[YieldType, float] = field(default_factory=dict)
    entries: dict[YieldType, YieldEntry] = field(
        default_factory=lambda: {kind: YieldEntry() for kind in YieldType}
    )

    # ==================== 写入 ====================

    def add_amount(self, kind: YieldType, value: float) -> None:
        """累加受倍率影响的固定值"""
        kind = YieldType(kind)
        self.entries[kind].amount += value * self.multipliers.get(kind, 1.0)

    def add_percent(self, kind: YieldType, value: float) -> None:
        """累加百分比"""
        self.entries[YieldType(kind)].percent += value

    def add_amount_no_multiplier(self, kind: YieldType, value: float) -> None:
        """累加不受倍率影响的固定值"""
        self.entries[YieldType(kind)].amount_no_multiplier += value

    # ==================== 读取 ====================

    def __getitem__(self, kind: YieldType) -> YieldEntry:
        return self.entries[YieldType(kind)]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, YieldsDelta):
            return NotImplemented
        return self.entries == other.entries

    def is_empty(self) -> bool:
        return all(entry.is_zero() for entry in self.entries.values())

    def compose(self, kind: YieldType) -> float:
        """合成单一产出的净值：amount × (1 + percent/100) + amount_no_multiplier"""
        entry = self.entries[YieldType(kind)]
        return entry.amount * (1 + entry.percent / 100) + entry.amount_no_multiplier

    def as_dict(self) -> dict[str, dict[str, float]]:
        """导出非零条目（用于日志 / CLI 输出）"""
        return {
            kind.value: {
                "amount": entry.amount,
                "percent": entry.percent,
                "amount_no_multiplier": entry.amount_no_multiplier,
            }
            for kind, entry in self.entries.items()
            if not entry.is_zero()
        }


# ==================== 修正器级别的便捷写入 ====================


def _declared_yields(modifier: ResolvedModifier) -> list[YieldType]:
    kinds = modifier.yield_types()
    if not kinds:
        logger.warning(
            "Modifier %s (%s) has no YieldType argument",
            modifier.modifier_id,
            modifier.effect_type,
        )
    return kinds


def add_yields_amount(delta: YieldsDelta, modifier: ResolvedModifier, amount: float) -> None:
    """按修正器声明的每种产出类型累加固定值（走倍率通道）"""
    for kind in _declared_yields(modifier):
        delta.add_amount(kind, amount)


def add_yields_percent(delta: YieldsDelta, modifier: ResolvedModifier, percent: float) -> None:
    """按修正器声明的每种产出类型累加百分比"""
    for kind in _declared_yields(modifier):
        delta.add_percent(kind, percent)
