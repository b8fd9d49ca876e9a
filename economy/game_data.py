"""静态游戏数据表

传统、相邻加成、建筑、单位的定义属于静态数据，按 ID 查询。
GameData 为引擎所依赖的协议；StaticGameData 是基于内存字典的实现，
可从 JSON 文件加载（键名沿用游戏数据库的 PascalCase 列名）。
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Protocol

from pydantic import BaseModel, ConfigDict, Field

from .enums import YieldType

logger = logging.getLogger(__name__)


class _Definition(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class TraditionDefinition(_Definition):
    tradition_type: str = Field(alias="TraditionType")
    tags: list[str] = Field(default_factory=list, alias="Tags")


class AdjacencyDefinition(_Definition):
    """相邻加成定义

    匹配条件之间是"或"关系：任一条件命中即视为提供加成的相邻地块。
    """

    id: str = Field(alias="ID")
    yield_type: YieldType = Field(alias="YieldType")
    yield_change: float = Field(default=1.0, alias="YieldChange")
    tiles_required: int = Field(default=1, ge=1, alias="TilesRequired")
    adjacent_terrain: str | None = Field(default=None, alias="AdjacentTerrain")
    adjacent_feature: str | None = Field(default=None, alias="AdjacentFeature")
    adjacent_resource: bool = Field(default=False, alias="AdjacentResource")
    adjacent_river: bool = Field(default=False, alias="AdjacentRiver")
    adjacent_constructible: str | None = Field(default=None, alias="AdjacentConstructible")
    adjacent_constructible_tag: str | None = Field(default=None, alias="AdjacentConstructibleTag")


class ConstructibleDefinition(_Definition):
    constructible_type: str = Field(alias="ConstructibleType")
    constructible_class: str = Field(default="BUILDING", alias="ConstructibleClass")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    adjacencies: list[str] = Field(default_factory=list, alias="Adjacencies")
    maintenance: dict[YieldType, float] = Field(default_factory=dict, alias="Maintenance")


class UnitDefinition(_Definition):
    unit_type: str = Field(alias="UnitType")
    unit_class: str | None = Field(default=None, alias="UnitClass")
    tags: list[str] = Field(default_factory=list, alias="Tags")
    maintenance: float = Field(default=0.0, alias="Maintenance")


class GameData(Protocol):
    """引擎使用的静态数据查询接口"""

    def get_tradition(self, tradition_type: str) -> TraditionDefinition | None: ...

    def get_adjacency(self, adjacency_id: str) -> AdjacencyDefinition | None: ...

    def get_constructible(self, constructible_type: str) -> ConstructibleDefinition | None: ...

    def get_unit(self, unit_type: str) -> UnitDefinition | None: ...


class StaticGameData:
    """内存字典实现的 GameData"""

    def __init__(
        self,
        traditions: list[TraditionDefinition] | None = None,
        adjacencies: list[AdjacencyDefinition] | None = None,
        constructibles: list[ConstructibleDefinition] | None = None,
        units: list[UnitDefinition] | None = None,
    ):
        self._traditions = {t.tradition_type: t for t in traditions or []}
        self._adjacencies = {a.id: a for a in adjacencies or []}
        self._constructibles = {c.constructible_type: c for c in constructibles or []}
        self._units = {u.unit_type: u for u in units or []}

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> StaticGameData:
        """从字典构建（键: Traditions / Adjacencies / Constructibles / Units）"""
        return cls(
            traditions=[TraditionDefinition.model_validate(r) for r in raw.get("Traditions", [])],
            adjacencies=[AdjacencyDefinition.model_validate(r) for r in raw.get("Adjacencies", [])],
            constructibles=[
                ConstructibleDefinition.model_validate(r) for r in raw.get("Constructibles", [])
            ],
            units=[UnitDefinition.model_validate(r) for r in raw.get("Units", [])],
        )

    def get_tradition(self, tradition_type: str) -> TraditionDefinition | None:
        return self._traditions.get(tradition_type)

    def get_adjacency(self, adjacency_id: str) -> AdjacencyDefinition | None:
        return self._adjacencies.get(adjacency_id)

    def get_constructible(self, constructible_type: str) -> ConstructibleDefinition | None:
        return self._constructibles.get(constructible_type)

    def get_unit(self, unit_type: str) -> UnitDefinition | None:
        return self._units.get(unit_type)

    def __len__(self) -> int:
        return (
            len(self._traditions)
            + len(self._adjacencies)
            + len(self._constructibles)
            + len(self._units)
        )


def load_game_data(path: str | Path) -> StaticGameData:
    """从 JSON 文件加载静态游戏数据

    文件读取或校验失败时异常直接抛出，由调用方（CLI）处理。
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    # 过滤注释键
    raw = {k: v for k, v in raw.items() if not k.startswith("_")}
    data = StaticGameData.from_dict(raw)
    logger.info("Loaded %d game data definitions from %s", len(data), path)
    return data
