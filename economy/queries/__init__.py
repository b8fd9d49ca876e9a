"""领域查询函数

对宿主状态与静态数据的只读适配层。每次调用都重新计算，
仅相邻加成定义经由 AdjacencyCache 缓存。
"""

from .adjacency import AdjacencyCache, get_adjacency_granting_plots
from .constructibles import (
    constructible_maintenance_reduction,
    get_city_constructibles_for_modifier,
    get_player_buildings_count_for_modifier,
)
from .player import (
    get_player_city_states_suzerain,
    get_player_relationships_count_for_modifier,
    is_player_at_war_with_opposing_ideology,
)
from .units import (
    UnitTypeInfo,
    get_player_units_types_maintenance,
    is_unit_type_info_target_of_modifier,
    maintenance_efficiency_to_reduction,
)

__all__ = [
    'AdjacencyCache',
    'UnitTypeInfo',
    'constructible_maintenance_reduction',
    'get_adjacency_granting_plots',
    'get_city_constructibles_for_modifier',
    'get_player_buildings_count_for_modifier',
    'get_player_city_states_suzerain',
    'get_player_relationships_count_for_modifier',
    'get_player_units_types_maintenance',
    'is_player_at_war_with_opposing_ideology',
    'is_unit_type_info_target_of_modifier',
    'maintenance_efficiency_to_reduction',
]
