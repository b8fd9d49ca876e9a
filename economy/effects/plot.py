"""地块层面的效果处理器"""

from __future__ import annotations

from ..enums import EffectType
from ..yields import add_yields_amount
from .registry import effect_handler


@effect_handler(EffectType.PLOT_ADJUST_YIELD)
def plot_adjust_yield(ctx, delta, subject, modifier) -> None:
    if subject.plot is None:
        return
    add_yields_amount(delta, modifier, modifier.number("Amount"))
