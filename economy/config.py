"""产出解析配置中心 (SSOT - 单一事实来源)

所有可配置的解析参数应在此定义，支持从环境变量覆盖。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field


def _get_env_int(key: str, default: int) -> int:
    """从环境变量获取整数配置"""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            pass
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """从环境变量获取布尔配置"""
    value = os.environ.get(key, "").lower()
    if value in ("true", "1", "yes", "on"):
        return True
    elif value in ("false", "0", "no", "off"):
        return False
    return default


@dataclass(frozen=True)
class EconomyConfig:
    """解析配置类 (不可变)

    所有配置项支持通过环境变量覆盖：
    - ECONOMY_STRICT: 严格模式，单个主体的解析错误不再被吞掉（测试构建使用）
    - ECONOMY_MAX_MODIFIER_DEPTH: 嵌套修正器最大层数
    - ECONOMY_LOG_LEVEL: 日志级别
    - ECONOMY_GAME_DATA: 静态游戏数据 JSON 路径
    """

    # ==================== 解析行为 ====================
    strict: bool = field(
        default_factory=lambda: _get_env_bool("ECONOMY_STRICT", False)
    )
    max_modifier_depth: int = field(
        default_factory=lambda: _get_env_int("ECONOMY_MAX_MODIFIER_DEPTH", 16)
    )

    # ==================== 日志与数据 ====================
    log_level: str = field(
        default_factory=lambda: os.environ.get("ECONOMY_LOG_LEVEL", "INFO")
    )
    game_data_path: str = field(
        default_factory=lambda: os.environ.get("ECONOMY_GAME_DATA", "")
    )

    @classmethod
    def from_env(cls) -> EconomyConfig:
        """从环境变量创建配置实例"""
        return cls()


# 全局配置单例
_config: EconomyConfig | None = None


def get_config() -> EconomyConfig:
    """获取全局配置实例（懒加载）"""
    global _config
    if _config is None:
        _config = EconomyConfig.from_env()
    return _config


def reset_config() -> None:
    """重置配置（用于测试）"""
    global _config
    _config = None
