"""修正器作用主体

Subject 是按种类打标签的变体：处理器通过 .player / .city / .unit / .plot
视图访问实体，种类不匹配时视图为 None，处理器据此降级为零贡献。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .enums import SubjectKind
from .host import CityLike, PlayerLike, PlotLike, UnitLike


def capability(entity: Any, name: str) -> Any:
    """读取可选能力子对象，缺失时返回 None。"""
    if entity is None:
        return None
    return getattr(entity, name, None)


@dataclass(frozen=True)
class Subject:
    """修正器作用主体"""

    kind: SubjectKind
    entity: Any

    @classmethod
    def of_player(cls, player: PlayerLike) -> Subject:
        return cls(SubjectKind.PLAYER, player)

    @classmethod
    def of_city(cls, city: CityLike) -> Subject:
        return cls(SubjectKind.CITY, city)

    @classmethod
    def of_unit(cls, unit: UnitLike) -> Subject:
        return cls(SubjectKind.UNIT, unit)

    @classmethod
    def of_plot(cls, plot: PlotLike) -> Subject:
        return cls(SubjectKind.PLOT, plot)

    # ==================== 类型化视图 ====================

    @property
    def player(self) -> PlayerLike | None:
        return self.entity if self.kind is SubjectKind.PLAYER else None

    @property
    def city(self) -> CityLike | None:
        return self.entity if self.kind is SubjectKind.CITY else None

    @property
    def unit(self) -> UnitLike | None:
        return self.entity if self.kind is SubjectKind.UNIT else None

    @property
    def plot(self) -> PlotLike | None:
        return self.entity if self.kind is SubjectKind.PLOT else None

    def __repr__(self) -> str:
        ident = getattr(self.entity, "id", None)
        return f"Subject({self.kind.value}, id={ident})"
