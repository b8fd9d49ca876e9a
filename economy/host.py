"""宿主游戏状态协议

定义解析引擎读取宿主状态所需的最小接口。引擎只读不写；宿主对象无需
显式继承这些 Protocol（结构子类型化），测试时可替换为 snapshot 中的轻量实现。

能力划分:
- 玩家 / 城市 / 单位 / 地块 四类主体各自暴露必需属性
- culture / diplomacy / identity / resources / trade / stats / influence / workers
  为可选能力子对象，缺失时由调用方按中性值（0 / False / 空）处理
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable


# ==================== 能力子对象 ====================


class CultureLike(Protocol):
    def get_active_traditions(self) -> Sequence[str]:
        """当前生效的传统 ID 列表"""
        ...


class DiplomacyLike(Protocol):
    @property
    def ideology(self) -> int:
        """意识形态，-1 表示尚未选择"""
        ...

    def has_allied(self, player_id: int) -> bool: ...

    def get_relationship_type(self, player_id: int) -> str | None: ...

    def is_at_war_with(self, player_id: int) -> bool: ...


class IdentityLike(Protocol):
    def get_spent_attribute_points(self, attribute: str) -> int: ...


class ResourceLike(Protocol):
    @property
    def resource_type(self) -> str: ...

    @property
    def resource_class(self) -> str: ...


class ResourcesLike(Protocol):
    def get_resources(self) -> Sequence[ResourceLike]: ...


class TradeLike(Protocol):
    def count_trade_routes(self) -> int: ...


class StatsLike(Protocol):
    @property
    def num_cities(self) -> int: ...

    @property
    def num_towns(self) -> int: ...


class InfluenceLike(Protocol):
    @property
    def suzerain(self) -> int | None:
        """宗主玩家 ID，无宗主时为 None"""
        ...


class WorkersLike(Protocol):
    def get_num_workers(self, specialists: bool) -> int:
        """specialists=True 时只统计专家，否则统计全部城区工人"""
        ...


# ==================== 主体 ====================


@runtime_checkable
class PlotLike(Protocol):
    @property
    def x(self) -> int: ...

    @property
    def y(self) -> int: ...

    @property
    def terrain(self) -> str | None: ...

    @property
    def feature(self) -> str | None: ...

    @property
    def resource(self) -> str | None: ...

    @property
    def is_river(self) -> bool: ...

    @property
    def constructibles(self) -> Sequence[str]:
        """地块上建筑 / 改良设施的类型列表"""
        ...

    def adjacent_plots(self) -> Sequence[PlotLike]: ...


class ConstructibleLike(Protocol):
    @property
    def type(self) -> str: ...

    @property
    def complete(self) -> bool: ...

    @property
    def damaged(self) -> bool: ...

    @property
    def plot(self) -> PlotLike: ...


@runtime_checkable
class UnitLike(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def type(self) -> str: ...


@runtime_checkable
class CityLike(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def owner(self) -> int: ...

    @property
    def constructibles(self) -> Sequence[ConstructibleLike]: ...


@runtime_checkable
class PlayerLike(Protocol):
    @property
    def id(self) -> int: ...

    @property
    def is_major(self) -> bool: ...

    @property
    def is_minor(self) -> bool: ...

    @property
    def cities(self) -> Sequence[CityLike]: ...

    @property
    def units(self) -> Sequence[UnitLike]: ...
