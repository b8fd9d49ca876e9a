"""修正器产出解析引擎

将游戏实体上的声明式修正器解析为玩家经济的产出增量。

用法:
    from economy import EvaluationContext, YieldsDelta, apply_yields_for_subjects

    ctx = EvaluationContext(player=me, players=alive, game_data=data,
                            resolve_modifier_by_id=lookup,
                            resolve_subjects_with_requirements=resolver)
    delta = YieldsDelta()
    apply_yields_for_subjects(ctx, delta, subjects, modifier)
"""

from .config import EconomyConfig, get_config, reset_config
from .context import EvaluationContext
from .effects import apply_yields_for_subjects, create_default_registry, resolve_effect
from .enums import EffectType, SubjectKind, YieldType
from .exceptions import ModifierError
from .game_data import StaticGameData, load_game_data
from .modifier import ModifierArgument, ResolvedModifier
from .subjects import Subject
from .yields import YieldEntry, YieldsDelta

__version__ = "1.0.0"

__all__ = [
    'EconomyConfig',
    'EffectType',
    'EvaluationContext',
    'ModifierArgument',
    'ModifierError',
    'ResolvedModifier',
    'StaticGameData',
    'Subject',
    'SubjectKind',
    'YieldEntry',
    'YieldType',
    'YieldsDelta',
    'apply_yields_for_subjects',
    'create_default_registry',
    'get_config',
    'load_game_data',
    'reset_config',
    'resolve_effect',
]
