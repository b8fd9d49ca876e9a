"""修正器解析异常模块
定义产出解析过程中的各类异常，提供明确的错误类型和信息
"""


class ModifierError(Exception):
    """修正器异常基类

    所有解析相关的异常都应该继承此类，
    驱动器据此区分"单个主体失败"与宿主状态故障。
    """

    def __init__(self, message: str, details: dict | None = None):
        """初始化修正器异常

        Args:
            message: 错误消息
            details: 额外的错误详情（可选）
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


# ==================== 注册表相关异常 ====================


class EffectRegistryError(ModifierError):
    """效果注册表异常

    启动时校验失败（存在未映射的效果类型）时抛出
    """

    def __init__(self, message: str | None = None, missing: list[str] | None = None):
        if message is None:
            message = "Effect registry is incomplete"
        details = {}
        if missing:
            details["missing"] = missing
        super().__init__(message, details)
        self.missing = missing or []


class DuplicateEffectHandlerError(EffectRegistryError):
    """同一效果类型被重复注册"""

    def __init__(self, effect_type: str):
        super().__init__(f"Duplicate handler for effect type {effect_type}")
        self.details["effect_type"] = effect_type
        self.effect_type = effect_type


# ==================== 参数相关异常 ====================


class InvalidArgumentError(ModifierError):
    """修正器参数不合法

    数值参数无法解析、产出类型未知等情况
    """

    def __init__(
        self,
        message: str | None = None,
        argument: str | None = None,
        value: str | None = None,
        modifier_id: str | None = None,
    ):
        if message is None:
            message = "Invalid modifier argument"
        details = {}
        if argument:
            details["argument"] = argument
        if value is not None:
            details["value"] = value
        if modifier_id:
            details["modifier_id"] = modifier_id
        super().__init__(message, details)
        self.argument = argument
        self.value = value
        self.modifier_id = modifier_id


class InvalidDivisorError(InvalidArgumentError):
    """Divisor 参数 <= 0"""

    def __init__(self, divisor: float, modifier_id: str | None = None):
        super().__init__(
            f"Divisor must be positive, got {divisor}",
            argument="Divisor",
            value=str(divisor),
            modifier_id=modifier_id,
        )
        self.divisor = divisor


class UnknownAdjacencyError(ModifierError):
    """相邻加成 ID 在游戏数据中不存在"""

    def __init__(self, adjacency_id: str, modifier_id: str | None = None):
        details = {"adjacency_id": adjacency_id}
        if modifier_id:
            details["modifier_id"] = modifier_id
        super().__init__(f"Unknown adjacency {adjacency_id}", details)
        self.adjacency_id = adjacency_id
        self.modifier_id = modifier_id


# ==================== 嵌套修正器异常 ====================


class NestedModifierError(ModifierError):
    """嵌套修正器展开失败的基类"""

    def __init__(
        self,
        message: str,
        modifier_id: str | None = None,
        chain: tuple[str, ...] = (),
    ):
        details: dict = {}
        if modifier_id:
            details["modifier_id"] = modifier_id
        if chain:
            details["chain"] = list(chain)
        super().__init__(message, details)
        self.modifier_id = modifier_id
        self.chain = chain


class UnresolvedModifierError(NestedModifierError):
    """附加的修正器 ID 无法解析"""

    def __init__(self, modifier_id: str, chain: tuple[str, ...] = ()):
        super().__init__(f"Cannot resolve modifier {modifier_id}", modifier_id, chain)


class ModifierCycleError(NestedModifierError):
    """修正器引用链中出现环"""

    def __init__(self, modifier_id: str, chain: tuple[str, ...] = ()):
        super().__init__(
            f"Modifier {modifier_id} attaches itself through {' -> '.join(chain)}",
            modifier_id,
            chain,
        )


class ModifierDepthError(NestedModifierError):
    """嵌套层数超出配置上限"""

    def __init__(self, modifier_id: str, max_depth: int, chain: tuple[str, ...] = ()):
        super().__init__(
            f"Modifier nesting exceeds {max_depth} levels at {modifier_id}",
            modifier_id,
            chain,
        )
        self.details["max_depth"] = max_depth
        self.max_depth = max_depth
