"""效果处理器注册表

将效果类型映射到计算规则：

- 使用 @effect_handler(EffectType.X) 将处理函数注册到模块级表
- create_default_registry() 汇总处理函数、忽略列表与未实现列表，
  启动时校验每个 EffectType 恰好有一个映射（重复或缺失都立即失败）
- 未知的效果类型字符串路由到默认处理器：记录警告，零贡献
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from ..enums import EffectType
from ..exceptions import DuplicateEffectHandlerError, EffectRegistryError

if TYPE_CHECKING:
    from ..context import EvaluationContext
    from ..modifier import ResolvedModifier
    from ..subjects import Subject
    from ..yields import YieldsDelta

logger = logging.getLogger(__name__)

EffectHandler = Callable[
    ["EvaluationContext", "YieldsDelta", "Subject", "ResolvedModifier"], None
]

# 运行期全局表：effect_type -> handler
_EFFECT_HANDLERS: dict[EffectType, EffectHandler] = {}


def effect_handler(effect_type: EffectType) -> Callable[[EffectHandler], EffectHandler]:
    """装饰器：注册效果处理函数。

    用法：
        @effect_handler(EffectType.CITY_ADJUST_YIELD)
        def city_adjust_yield(ctx, delta, subject, modifier): ...
    """
    def _decorator(fn: EffectHandler) -> EffectHandler:
        if effect_type in _EFFECT_HANDLERS:
            raise DuplicateEffectHandlerError(effect_type.value)
        _EFFECT_HANDLERS[effect_type] = fn
        return fn
    return _decorator


def get_declared_handlers() -> dict[EffectType, EffectHandler]:
    """获取通过装饰器声明的处理函数（浅拷贝，避免外部修改）。"""
    return dict(_EFFECT_HANDLERS)


# 已知但不影响产出的效果（移动力、战斗力等），静默忽略
IGNORED_EFFECTS: frozenset[EffectType] = frozenset({
    EffectType.CITY_ADJUST_UNIT_PRODUCTION,
    EffectType.UNIT_ADJUST_MOVEMENT,
    EffectType.ADJUST_PLAYER_OR_CITY_BUILDING_PURCHASE_EFFICIENCY,
    EffectType.ADJUST_PLAYER_OR_CITY_UNIT_PURCHASE_EFFICIENCY,
    EffectType.ADJUST_PLAYER_UNITS_PILLAGE_BUILDING_MODIFIER,
    EffectType.ADJUST_PLAYER_UNITS_PILLAGE_IMPROVEMENT_MODIFIER,
    EffectType.DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY,
    EffectType.DIPLOMACY_ADJUST_DIPLOMATIC_ACTION_TYPE_EFFICIENCY_PER_GREAT_WORK,
    EffectType.DIPLOMACY_AGENDA_TIMED_UPDATE,
    EffectType.DISTRICT_ADJUST_FORTIFIED_COMBAT_STRENGTH,
    EffectType.PLAYER_ADJUST_SETTLEMENT_CAP,
    EffectType.UNIT_ADJUST_COMBAT_STRENGTH,
    EffectType.UNIT_ADJUST_SIGHT,
    EffectType.UNIT_ADJUST_HEAL_PER_TURN,
    EffectType.UNIT_ADJUST_EXPERIENCE,
    EffectType.PLAYER_ADJUST_TRADE_ROUTE_RANGE,
    EffectType.DISTRICT_ADJUST_HIT_POINTS,
})

# 影响产出但尚未建模的效果：记录警告，零贡献
UNIMPLEMENTED_EFFECTS: dict[EffectType, str] = {
    EffectType.MODIFY_PLAYER_TRADE_YIELD_CONVERSION:
        "converts a share of trade route yields into another yield; needs trade route yield queries",
    EffectType.PLAYER_ADJUST_YIELD_FROM_NATURAL_DISASTERS:
        "needs per-turn disaster history from the host",
}


def _ignored_handler(ctx, delta, subject, modifier) -> None:
    return None


def _unknown_handler(ctx, delta, subject, modifier) -> None:
    logger.warning("Unhandled EffectType: %s", modifier.effect_type)


def _make_unimplemented_handler(effect_type: EffectType, reason: str) -> EffectHandler:
    def _handler(ctx, delta, subject, modifier) -> None:
        logger.warning("TODO EffectType %s is not implemented (%s)", effect_type.value, reason)
    return _handler


class EffectRegistry:
    """
    效果处理器注册表

    按效果类型映射到处理函数，resolve_effect() 通过此注册表路由。
    每个效果类型只能有一种映射：处理函数 / 忽略 / 未实现。
    """

    def __init__(self):
        self._handlers: dict[EffectType, EffectHandler] = {}
        self._ignored: set[EffectType] = set()
        self._unimplemented: dict[EffectType, str] = {}

    def _check_free(self, effect_type: EffectType) -> None:
        if self.has(effect_type):
            raise DuplicateEffectHandlerError(effect_type.value)

    def register(self, effect_type: EffectType, handler: EffectHandler) -> None:
        """注册效果处理函数"""
        self._check_free(effect_type)
        self._handlers[effect_type] = handler

    def ignore(self, effect_type: EffectType) -> None:
        """登记为已知但忽略的效果"""
        self._check_free(effect_type)
        self._ignored.add(effect_type)

    def mark_unimplemented(self, effect_type: EffectType, reason: str) -> None:
        self._check_free(effect_type)
        self._unimplemented[effect_type] = reason

    def has(self, effect_type: EffectType) -> bool:
        """检查是否已有任意映射"""
        return (
            effect_type in self._handlers
            or effect_type in self._ignored
            or effect_type in self._unimplemented
        )

    def is_ignored(self, effect_type: str) -> bool:
        parsed = EffectType.parse(effect_type)
        return parsed is not None and parsed in self._ignored

    def is_implemented(self, effect_type: str) -> bool:
        parsed = EffectType.parse(effect_type)
        return parsed is not None and parsed in self._handlers

    def get(self, effect_type: str) -> EffectHandler:
        """获取处理函数；未知类型返回默认的记录警告处理器"""
        parsed = EffectType.parse(effect_type)
        if parsed is None:
            return _unknown_handler
        if parsed in self._handlers:
            return self._handlers[parsed]
        if parsed in self._ignored:
            return _ignored_handler
        if parsed in self._unimplemented:
            return _make_unimplemented_handler(parsed, self._unimplemented[parsed])
        return _unknown_handler

    def validate(self) -> None:
        """校验所有 EffectType 均已映射"""
        missing = [e.value for e in EffectType if not self.has(e)]
        if missing:
            raise EffectRegistryError(
                f"{len(missing)} effect types have no mapping", missing=missing
            )

    def __len__(self) -> int:
        return len(self._handlers) + len(self._ignored) + len(self._unimplemented)


def create_default_registry() -> EffectRegistry:
    """
    创建并注册所有默认效果处理器

    Returns:
        已校验完整的注册表
    """
    # 导入即注册
    from . import attach, city, player, plot  # noqa: F401

    registry = EffectRegistry()
    for effect_type, handler in get_declared_handlers().items():
        registry.register(effect_type, handler)
    for effect_type in IGNORED_EFFECTS:
        registry.ignore(effect_type)
    for effect_type, reason in UNIMPLEMENTED_EFFECTS.items():
        registry.mark_unimplemented(effect_type, reason)

    registry.validate()
    logger.debug("Effect registry ready with %d effect types", len(registry))
    return registry


_default_registry: EffectRegistry | None = None


def get_default_registry() -> EffectRegistry:
    """获取默认注册表（懒加载）"""
    global _default_registry
    if _default_registry is None:
        _default_registry = create_default_registry()
    return _default_registry
