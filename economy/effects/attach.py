"""嵌套修正器解析

EFFECT_ATTACH_MODIFIERS 按 ModifierId 查找另一个修正器，以 *当前* 主体为
上下文重新解析其主体集合，再递归进入完整的主体遍历 + 分发流程。

展开不做缓存：同一解析树中重复出现的附加效果各自独立展开，
因为每次展开的上下文主体可能不同。ctx.chain 记录根到当前的修正器 ID 链，
出现环或超过 max_modifier_depth 时确定性地失败，而不是耗尽调用栈。
"""

from __future__ import annotations

import logging

from ..enums import EffectType
from ..exceptions import ModifierCycleError, ModifierDepthError, UnresolvedModifierError
from .registry import effect_handler
from .resolver import apply_yields_for_subjects

logger = logging.getLogger(__name__)


@effect_handler(EffectType.ATTACH_MODIFIERS)
def attach_modifiers(ctx, delta, subject, modifier) -> None:
    # 根修正器自身也计入链，A 直接附加 A 时在第一层即可发现
    if not ctx.chain and modifier.modifier_id:
        ctx = ctx.nested(modifier.modifier_id)

    for modifier_id in modifier.values("ModifierId"):
        expand_nested_modifier(ctx, delta, subject, modifier_id)


def expand_nested_modifier(ctx, delta, subject, modifier_id: str) -> None:
    """展开单个嵌套修正器"""
    if modifier_id in ctx.chain:
        raise ModifierCycleError(modifier_id, ctx.chain + (modifier_id,))
    if ctx.depth >= ctx.config.max_modifier_depth:
        raise ModifierDepthError(modifier_id, ctx.config.max_modifier_depth, ctx.chain)

    nested = ctx.resolve_modifier_by_id(modifier_id)
    if nested is None:
        raise UnresolvedModifierError(modifier_id, ctx.chain)

    nested_subjects = ctx.resolve_subjects_with_requirements(ctx.player, nested, subject)
    logger.debug(
        "Expanding %s (%s) over %d subjects, depth %d",
        modifier_id, nested.effect_type, len(nested_subjects), ctx.depth + 1,
    )
    apply_yields_for_subjects(ctx.nested(modifier_id), delta, nested_subjects, nested)
