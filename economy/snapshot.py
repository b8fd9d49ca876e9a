"""宿主状态快照

基于 dataclass 的内存宿主模型，实现 host.py 中的各个协议。用于离线评估
（CLI）与测试：从 JSON 字典构建，解析期间只读。

地块使用轴向六边形坐标 (x, y)，相邻关系在加载时一次性建立。

快照格式::

    {
        "Plots": [{"x": 0, "y": 0, "terrain": "...", "river": true, "constructibles": [...]}],
        "Players": [{
            "id": 0, "major": true, "traditions": [...], "attributes": {...},
            "diplomacy": {"ideology": 1, "allies": [1], "relationships": {"1": "..."},
                          "at_war_with": [2]},
            "resources": [{"type": "...", "class": "..."}], "trade_routes": 2,
            "suzerain": null,
            "cities": [{"id": 10, "town": false, "specialists": 2, "laborers": 3,
                        "resources": [...],
                        "constructibles": [{"type": "...", "x": 0, "y": 0}]}],
            "units": [{"id": 100, "type": "UNIT_WARRIOR"}]
        }]
    }
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .subjects import Subject

logger = logging.getLogger(__name__)

AXIAL_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1), (1, -1), (-1, 1))


# ==================== 能力子对象 ====================


@dataclass
class CultureSnapshot:
    traditions: list[str] = field(default_factory=list)

    def get_active_traditions(self) -> list[str]:
        return list(self.traditions)


@dataclass
class DiplomacySnapshot:
    ideology: int = -1
    allies: set[int] = field(default_factory=set)
    relationships: dict[int, str] = field(default_factory=dict)
    at_war_with: set[int] = field(default_factory=set)

    def has_allied(self, player_id: int) -> bool:
        return player_id in self.allies

    def get_relationship_type(self, player_id: int) -> str | None:
        return self.relationships.get(player_id)

    def is_at_war_with(self, player_id: int) -> bool:
        return player_id in self.at_war_with


@dataclass
class IdentitySnapshot:
    attribute_points: dict[str, int] = field(default_factory=dict)

    def get_spent_attribute_points(self, attribute: str) -> int:
        return self.attribute_points.get(attribute, 0)


@dataclass
class ResourceSnapshot:
    resource_type: str
    resource_class: str = "RESOURCECLASS_BONUS"


@dataclass
class ResourcesSnapshot:
    resources: list[ResourceSnapshot] = field(default_factory=list)

    def get_resources(self) -> list[ResourceSnapshot]:
        return list(self.resources)

    @classmethod
    def from_list(cls, raw: list[dict[str, Any]]) -> ResourcesSnapshot:
        return cls([
            ResourceSnapshot(r["type"], r.get("class", "RESOURCECLASS_BONUS")) for r in raw
        ])


@dataclass
class TradeSnapshot:
    trade_routes: int = 0

    def count_trade_routes(self) -> int:
        return self.trade_routes


@dataclass
class StatsSnapshot:
    num_cities: int = 0
    num_towns: int = 0


@dataclass
class InfluenceSnapshot:
    suzerain: int | None = None


@dataclass
class WorkersSnapshot:
    specialists: int = 0
    laborers: int = 0

    def get_num_workers(self, specialists: bool) -> int:
        if specialists:
            return self.specialists
        return self.specialists + self.laborers


# ==================== 主体 ====================


@dataclass(eq=False)
class PlotSnapshot:
    x: int
    y: int
    terrain: str | None = None
    feature: str | None = None
    resource: str | None = None
    is_river: bool = False
    constructibles: list[str] = field(default_factory=list)
    neighbors: list[PlotSnapshot] = field(default_factory=list, repr=False)

    @property
    def id(self) -> tuple[int, int]:
        return (self.x, self.y)

    def adjacent_plots(self) -> list[PlotSnapshot]:
        return list(self.neighbors)

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> PlotSnapshot:
        return cls(
            x=raw["x"],
            y=raw["y"],
            terrain=raw.get("terrain"),
            feature=raw.get("feature"),
            resource=raw.get("resource"),
            is_river=raw.get("river", False),
            constructibles=list(raw.get("constructibles", [])),
        )


@dataclass(eq=False)
class ConstructibleSnapshot:
    type: str
    plot: PlotSnapshot
    complete: bool = True
    damaged: bool = False


@dataclass(eq=False)
class UnitSnapshot:
    id: int
    type: str
    owner: int = -1


@dataclass(eq=False)
class CitySnapshot:
    id: int
    owner: int
    is_town: bool = False
    constructibles: list[ConstructibleSnapshot] = field(default_factory=list)
    workers: WorkersSnapshot | None = None
    resources: ResourcesSnapshot | None = None

    @property
    def plots(self) -> list[PlotSnapshot]:
        """城市建筑所在的地块（去重，保持顺序）"""
        seen: dict[int, PlotSnapshot] = {}
        for c in self.constructibles:
            seen.setdefault(id(c.plot), c.plot)
        return list(seen.values())


@dataclass(eq=False)
class PlayerSnapshot:
    id: int
    is_major: bool = True
    cities: list[CitySnapshot] = field(default_factory=list)
    units: list[UnitSnapshot] = field(default_factory=list)
    culture: CultureSnapshot | None = None
    diplomacy: DiplomacySnapshot | None = None
    identity: IdentitySnapshot | None = None
    resources: ResourcesSnapshot | None = None
    trade: TradeSnapshot | None = None
    stats: StatsSnapshot | None = None
    influence: InfluenceSnapshot | None = None

    @property
    def is_minor(self) -> bool:
        return not self.is_major


# ==================== 快照 ====================


class HostSnapshot:
    """完整的宿主状态快照"""

    def __init__(self, players: list[PlayerSnapshot], plots: list[PlotSnapshot] | None = None):
        self.players = players
        self.plots: dict[tuple[int, int], PlotSnapshot] = {p.id: p for p in plots or []}
        link_neighbors(self.plots)

    # ==================== 查询 ====================

    def get_player(self, player_id: int) -> PlayerSnapshot | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_city(self, city_id: int) -> CitySnapshot | None:
        for player in self.players:
            for city in player.cities:
                if city.id == city_id:
                    return city
        return None

    def get_plot(self, x: int, y: int) -> PlotSnapshot | None:
        return self.plots.get((x, y))

    def owner_of(self, subject: Subject) -> PlayerSnapshot | None:
        if subject.player is not None:
            return subject.player
        owner = getattr(subject.entity, "owner", None)
        return self.get_player(owner) if owner is not None else None

    # ==================== 主体解析 ====================

    def resolve_subjects(self, player, modifier, subject: Subject) -> list[Subject]:
        """按修正器的 Collection 相对 subject 展开主体集合（不评估需求条件）

        - COLLECTION_OWNER: subject 所属玩家
        - COLLECTION_PLAYER_CITIES: 所属玩家的全部城市
        - COLLECTION_PLAYER_UNITS: 所属玩家的全部单位
        - COLLECTION_CITY_PLOTS: 城市建筑所在地块
        - 其他 / 缺省: subject 本身
        """
        collection = modifier.info.collection
        if collection == "COLLECTION_OWNER":
            owner = self.owner_of(subject)
            return [Subject.of_player(owner)] if owner is not None else []
        if collection == "COLLECTION_PLAYER_CITIES":
            owner = self.owner_of(subject)
            return [Subject.of_city(c) for c in owner.cities] if owner is not None else []
        if collection == "COLLECTION_PLAYER_UNITS":
            owner = self.owner_of(subject)
            return [Subject.of_unit(u) for u in owner.units] if owner is not None else []
        if collection == "COLLECTION_CITY_PLOTS":
            city = subject.city
            return [Subject.of_plot(p) for p in city.plots] if city is not None else []
        if collection:
            logger.debug("Collection %s resolved to the context subject", collection)
        return [subject]

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> HostSnapshot:
        plots = [PlotSnapshot.from_dict(p) for p in raw.get("Plots", [])]
        by_coord = {p.id: p for p in plots}
        players = [_player_from_dict(p, by_coord) for p in raw.get("Players", [])]
        return cls(players, list(by_coord.values()))


def link_neighbors(plots: dict[tuple[int, int], PlotSnapshot]) -> None:
    """按轴向六边形坐标建立相邻关系"""
    for (x, y), plot in plots.items():
        plot.neighbors = [
            plots[(x + dx, y + dy)]
            for dx, dy in AXIAL_DIRECTIONS
            if (x + dx, y + dy) in plots
        ]


def _plot_at(raw: dict[str, Any], by_coord: dict[tuple[int, int], PlotSnapshot]) -> PlotSnapshot:
    coord = (raw["x"], raw["y"])
    plot = by_coord.get(coord)
    if plot is None:
        # 快照未列出的地块按空地处理
        plot = PlotSnapshot(*coord)
        by_coord[coord] = plot
    return plot


def _city_from_dict(
    raw: dict[str, Any], owner: int, by_coord: dict[tuple[int, int], PlotSnapshot]
) -> CitySnapshot:
    constructibles = [
        ConstructibleSnapshot(
            type=c["type"],
            plot=_plot_at(c, by_coord),
            complete=c.get("complete", True),
            damaged=c.get("damaged", False),
        )
        for c in raw.get("constructibles", [])
    ]
    return CitySnapshot(
        id=raw["id"],
        owner=owner,
        is_town=raw.get("town", False),
        constructibles=constructibles,
        workers=WorkersSnapshot(raw.get("specialists", 0), raw.get("laborers", 0)),
        resources=ResourcesSnapshot.from_list(raw.get("resources", [])),
    )


def _player_from_dict(
    raw: dict[str, Any], by_coord: dict[tuple[int, int], PlotSnapshot]
) -> PlayerSnapshot:
    player_id = raw["id"]
    cities = [_city_from_dict(c, player_id, by_coord) for c in raw.get("cities", [])]
    units = [UnitSnapshot(u["id"], u["type"], player_id) for u in raw.get("units", [])]

    diplomacy = None
    if "diplomacy" in raw:
        d = raw["diplomacy"]
        diplomacy = DiplomacySnapshot(
            ideology=d.get("ideology", -1),
            allies=set(d.get("allies", [])),
            relationships={int(k): v for k, v in d.get("relationships", {}).items()},
            at_war_with=set(d.get("at_war_with", [])),
        )

    return PlayerSnapshot(
        id=player_id,
        is_major=raw.get("major", True),
        cities=cities,
        units=units,
        culture=CultureSnapshot(list(raw.get("traditions", []))),
        diplomacy=diplomacy,
        identity=IdentitySnapshot(dict(raw.get("attributes", {}))),
        resources=ResourcesSnapshot.from_list(raw.get("resources", [])),
        trade=TradeSnapshot(raw.get("trade_routes", 0)),
        stats=StatsSnapshot(
            num_cities=sum(1 for c in cities if not c.is_town),
            num_towns=sum(1 for c in cities if c.is_town),
        ),
        influence=InfluenceSnapshot(raw.get("suzerain")),
    )
