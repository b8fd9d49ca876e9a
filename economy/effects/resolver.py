"""效果分发器与主体遍历驱动

resolve_effect() 处理单个 (主体, 修正器)；apply_yields_for_subjects()
按调用方给出的顺序遍历主体并累加到同一个 YieldsDelta。
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

from ..exceptions import ModifierError

if TYPE_CHECKING:
    from ..context import EvaluationContext
    from ..modifier import ResolvedModifier
    from ..subjects import Subject
    from ..yields import YieldsDelta

logger = logging.getLogger(__name__)


def resolve_effect(
    ctx: EvaluationContext,
    delta: YieldsDelta,
    subject: Subject,
    modifier: ResolvedModifier,
) -> None:
    """将单个修正器作用于单个主体"""
    # NewOnly 修正器只在触发条件满足的那一刻生效，常规重算中重复应用会重复计数
    if modifier.new_only:
        return

    handler = ctx.get_registry().get(modifier.effect_type)
    handler(ctx, delta, subject, modifier)


def apply_yields_for_subjects(
    ctx: EvaluationContext,
    delta: YieldsDelta,
    subjects: Iterable[Subject],
    modifier: ResolvedModifier,
) -> None:
    """对每个主体应用修正器，结果累加到 delta

    单个主体的 ModifierError 只影响该主体：记录日志后继续遍历。
    严格模式下异常直接抛出。其他异常（宿主状态故障）总是向上传播。
    """
    for subject in subjects:
        try:
            resolve_effect(ctx, delta, subject, modifier)
        except ModifierError as e:
            if ctx.config.strict:
                raise
            logger.error(
                "Failed to resolve %s (%s) for %r: %s",
                modifier.modifier_id or "<anonymous>",
                modifier.effect_type,
                subject,
                e,
            )
