"""效果处理器模块

每种效果类型对应一个处理函数，通过 EffectRegistry 按效果类型路由。
"""

from .registry import (
    IGNORED_EFFECTS,
    UNIMPLEMENTED_EFFECTS,
    EffectRegistry,
    create_default_registry,
    effect_handler,
    get_default_registry,
)
from .resolver import apply_yields_for_subjects, resolve_effect

__all__ = [
    'IGNORED_EFFECTS',
    'UNIMPLEMENTED_EFFECTS',
    'EffectRegistry',
    'apply_yields_for_subjects',
    'create_default_registry',
    'effect_handler',
    'get_default_registry',
    'resolve_effect',
]
