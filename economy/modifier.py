"""修正器 Pydantic 数据模型

游戏数据中的修正器记录形如::

    {
        "Modifier": {"ModifierId": "...", "NewOnly": false, "Collection": "..."},
        "EffectType": "EFFECT_CITY_ADJUST_YIELD",
        "Arguments": {"YieldType": {"Value": "YIELD_GOLD"}, "Amount": {"Value": "2"}}
    }

设计原则:
  - 模型冻结，解析期间只读
  - 参数值统一保存为字符串（数字串 / 布尔串 / 数组编码），按需转换
  - 未知的效果类型照常接受，由分发器决定如何处理
"""

from __future__ import annotations

import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .enums import YieldType
from .exceptions import InvalidArgumentError

_TRUE_VALUES = ("true", "1", "yes")
_FALSE_VALUES = ("false", "0", "no", "")


class ModifierArgument(BaseModel):
    """单个修正器参数"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    value: str = Field(alias="Value")
    type: str | None = Field(default=None, alias="Type")
    extra: str | None = Field(default=None, alias="Extra")

    @field_validator("value", mode="before")
    @classmethod
    def _normalize_value(cls, v: Any) -> str:
        # 数组编码参数统一为逗号分隔字符串
        if isinstance(v, (list, tuple)):
            return ",".join(str(item) for item in v)
        if isinstance(v, bool):
            return "true" if v else "false"
        if isinstance(v, (int, float)):
            return str(v)
        return v

    def as_float(self) -> float:
        try:
            number = float(self.value)
        except ValueError as exc:
            raise InvalidArgumentError(
                f"Argument value is not numeric: {self.value!r}", value=self.value
            ) from exc
        if not math.isfinite(number):
            raise InvalidArgumentError(
                f"Argument value is not finite: {self.value!r}", value=self.value
            )
        return number

    def as_bool(self) -> bool:
        text = self.value.strip().lower()
        if text in _TRUE_VALUES:
            return True
        if text in _FALSE_VALUES:
            return False
        raise InvalidArgumentError(
            f"Argument value is not boolean: {self.value!r}", value=self.value
        )

    def as_list(self) -> list[str]:
        return [part.strip() for part in self.value.split(",") if part.strip()]


class ModifierInfo(BaseModel):
    """修正器元信息（对应记录中的 ``Modifier`` 字段）"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    modifier_id: str = Field(default="", alias="ModifierId")
    new_only: bool = Field(default=False, alias="NewOnly")
    collection: str | None = Field(default=None, alias="Collection")


class ResolvedModifier(BaseModel):
    """已从注册表解析出的修正器"""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    effect_type: str = Field(alias="EffectType")
    arguments: dict[str, ModifierArgument] = Field(default_factory=dict, alias="Arguments")
    info: ModifierInfo = Field(default_factory=ModifierInfo, alias="Modifier")

    @field_validator("effect_type")
    @classmethod
    def _effect_type_not_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("EffectType must not be empty")
        return v.strip()

    @classmethod
    def from_game_data(cls, raw: dict[str, Any]) -> ResolvedModifier:
        """从游戏数据字典构建修正器，校验失败抛出 pydantic.ValidationError"""
        return cls.model_validate(raw)

    # ==================== 参数访问 ====================

    @property
    def modifier_id(self) -> str:
        return self.info.modifier_id

    @property
    def new_only(self) -> bool:
        return self.info.new_only

    def argument(self, name: str) -> ModifierArgument | None:
        return self.arguments.get(name)

    def has_argument(self, name: str) -> bool:
        return name in self.arguments

    def number(self, name: str, default: float | None = None) -> float:
        """读取数值参数

        参数缺失时返回 default；default 也为 None 时抛出 InvalidArgumentError。
        """
        arg = self.arguments.get(name)
        if arg is None:
            if default is None:
                raise InvalidArgumentError(
                    f"Missing argument {name}", argument=name, modifier_id=self.modifier_id
                )
            return default
        try:
            return arg.as_float()
        except InvalidArgumentError as exc:
            raise InvalidArgumentError(
                exc.message, argument=name, value=arg.value, modifier_id=self.modifier_id
            ) from exc

    def flag(self, name: str, default: bool = False) -> bool:
        arg = self.arguments.get(name)
        if arg is None:
            return default
        try:
            return arg.as_bool()
        except InvalidArgumentError as exc:
            raise InvalidArgumentError(
                exc.message, argument=name, value=arg.value, modifier_id=self.modifier_id
            ) from exc

    def values(self, name: str) -> list[str]:
        arg = self.arguments.get(name)
        return arg.as_list() if arg is not None else []

    def yield_types(self) -> list[YieldType]:
        """解析 YieldType 参数（允许逗号分隔的多个产出类型）"""
        result: list[YieldType] = []
        for tag in self.values("YieldType"):
            try:
                result.append(YieldType(tag))
            except ValueError as exc:
                raise InvalidArgumentError(
                    f"Unknown yield type {tag}",
                    argument="YieldType",
                    value=tag,
                    modifier_id=self.modifier_id,
                ) from exc
        return result
