"""离线产出解析工具
根据场景 JSON（宿主快照 + 修正器 + 作用主体）执行一次完整的解析，
用 rich 表格输出产出增量，便于开发调试与数据校验。

场景格式::

    {
        "Player": 0,
        "GameData": {...},                 # 可选，也可用 --game-data 指定
        "Host": {"Plots": [...], "Players": [...]},
        "Modifiers": [{"Modifier": {"ModifierId": "..."}, "EffectType": "...", ...}],
        "Apply": [{"ModifierId": "...", "Subjects": [{"kind": "city", "id": 10}]}],
        "Multipliers": {"YIELD_GOLD": 1.0}
    }

用法:
    python -m tools.resolve_cli scenario.json [--game-data data.json] [--strict] [--verbose]
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from economy import (
    EvaluationContext,
    ResolvedModifier,
    StaticGameData,
    Subject,
    YieldType,
    YieldsDelta,
    apply_yields_for_subjects,
    get_config,
    load_game_data,
)
from economy.exceptions import ModifierError
from economy.snapshot import HostSnapshot
from logging_config import setup_logging

logger = logging.getLogger(__name__)


@dataclass
class Scenario:
    """已加载的解析场景"""

    host: HostSnapshot
    player_id: int
    game_data: StaticGameData
    modifiers: dict[str, ResolvedModifier]
    applications: list[tuple[str, list[dict[str, Any]]]] = field(default_factory=list)
    multipliers: dict[YieldType, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, raw: dict[str, Any], game_data: StaticGameData | None = None) -> Scenario:
        if game_data is None:
            game_data = StaticGameData.from_dict(raw.get("GameData", {}))
        modifiers = {}
        for record in raw.get("Modifiers", []):
            modifier = ResolvedModifier.from_game_data(record)
            modifiers[modifier.modifier_id] = modifier
        return cls(
            host=HostSnapshot.from_dict(raw.get("Host", {})),
            player_id=raw.get("Player", 0),
            game_data=game_data,
            modifiers=modifiers,
            applications=[
                (a["ModifierId"], list(a.get("Subjects", []))) for a in raw.get("Apply", [])
            ],
            multipliers={YieldType(k): float(v) for k, v in raw.get("Multipliers", {}).items()},
        )

    def subject_from_ref(self, ref: dict[str, Any]) -> Subject:
        """把场景中的主体引用解析为 Subject，引用无效时抛出 KeyError"""
        kind = ref.get("kind", "player")
        entity: Any = None
        if kind == "player":
            entity = self.host.get_player(ref["id"])
            make = Subject.of_player
        elif kind == "city":
            entity = self.host.get_city(ref["id"])
            make = Subject.of_city
        elif kind == "plot":
            entity = self.host.get_plot(ref["x"], ref["y"])
            make = Subject.of_plot
        elif kind == "unit":
            entity = next(
                (u for p in self.host.players for u in p.units if u.id == ref["id"]), None
            )
            make = Subject.of_unit
        else:
            raise KeyError(f"unknown subject kind {kind}")
        if entity is None:
            raise KeyError(f"subject not found: {ref}")
        return make(entity)


def load_scenario(path: str | Path, game_data_path: str | None = None) -> Scenario:
    with open(path, encoding="utf-8") as f:
        raw = json.load(f)
    game_data = load_game_data(game_data_path) if game_data_path else None
    return Scenario.from_dict(raw, game_data)


def run_scenario(scenario: Scenario, strict: bool = False) -> YieldsDelta:
    """执行场景中列出的全部修正器应用，返回累加后的产出增量"""
    player = scenario.host.get_player(scenario.player_id)
    if player is None:
        raise KeyError(f"player {scenario.player_id} not in snapshot")

    config = get_config()
    if strict:
        config = replace(config, strict=True)

    ctx = EvaluationContext(
        player=player,
        players=scenario.host.players,
        game_data=scenario.game_data,
        resolve_modifier_by_id=scenario.modifiers.get,
        resolve_subjects_with_requirements=scenario.host.resolve_subjects,
        config=config,
    )
    delta = YieldsDelta(multipliers=dict(scenario.multipliers))

    for modifier_id, refs in scenario.applications:
        modifier = scenario.modifiers.get(modifier_id)
        if modifier is None:
            logger.warning("Skipping unknown modifier %s", modifier_id)
            continue
        subjects = [scenario.subject_from_ref(ref) for ref in refs]
        apply_yields_for_subjects(ctx, delta, subjects, modifier)

    return delta


def render_delta(delta: YieldsDelta) -> Table:
    table = Table(title="产出增量", expand=False, border_style="green")
    table.add_column("产出", style="cyan", no_wrap=True)
    table.add_column("固定值", justify="right")
    table.add_column("百分比", justify="right")
    table.add_column("无倍率", justify="right")
    table.add_column("合计", justify="right", style="bold")

    for kind in YieldType:
        entry = delta[kind]
        if entry.is_zero():
            continue
        table.add_row(
            kind.value,
            f"{entry.amount:+g}",
            f"{entry.percent:+g}%",
            f"{entry.amount_no_multiplier:+g}",
            f"{delta.compose(kind):+.2f}",
        )
    return table


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Resolve modifier yields for a scenario")
    parser.add_argument("scenario", help="scenario JSON path")
    parser.add_argument("--game-data", default=None, help="static game data JSON path")
    parser.add_argument("--strict", action="store_true", help="propagate resolution errors")
    parser.add_argument("--verbose", "-v", action="store_true", help="log to console")
    args = parser.parse_args(argv)

    config = get_config()
    setup_logging(
        config,
        enable_console=args.verbose,
        console_level="DEBUG" if args.verbose else "WARNING",
    )

    console = Console()
    game_data_path = args.game_data or config.game_data_path or None
    try:
        scenario = load_scenario(args.scenario, game_data_path)
        delta = run_scenario(scenario, strict=args.strict)
    except (OSError, ValueError, KeyError, ModifierError) as e:
        # pydantic.ValidationError 是 ValueError 的子类
        logger.error("Scenario failed: %s", e)
        console.print(f"[bold red]解析失败:[/bold red] {escape(str(e))}")
        return 1

    if delta.is_empty():
        console.print("[dim]没有产出变化[/dim]")
    else:
        console.print(render_delta(delta))
    return 0


if __name__ == "__main__":
    sys.exit(main())
