"""实验配置：参数定义、默认值与输入校验"""
import dataclasses
import math
import numbers
from dataclasses import dataclass
from enum import Enum

MIN_ORDER = 1
MAX_ORDER = 6


class ConfigurationError(ValueError):
    """实验配置不合法（阶数越界、步长非正、区间为空等）"""


class ProblemFamily(Enum):
    """内置问题族，取值为配置中使用的标签"""
    EXPONENTIAL = 'exponential'
    LOGISTIC = 'logistic'
    HARMONIC = 'harmonic'
    CUSTOM = 'custom'

    @classmethod
    def parse(cls, tag):
        """把字符串标签转换为枚举成员，兼容旧标签 'exp'"""
        if isinstance(tag, cls):
            return tag
        if isinstance(tag, str):
            key = tag.strip().lower()
            if key == 'exp':
                return cls.EXPONENTIAL
            for member in cls:
                if member.value == key:
                    return member
        raise ConfigurationError(f"未知的问题类型: {tag!r}")


class DerivativeMode(Enum):
    """高阶导数的计算方式。目前只有解析导数真正实现，'finite' 与之等价"""
    ANALYTIC = 'analytic'
    FINITE = 'finite'

    @classmethod
    def parse(cls, mode):
        if isinstance(mode, cls):
            return mode
        if isinstance(mode, str):
            for member in cls:
                if member.value == mode.strip().lower():
                    return member
        raise ConfigurationError(f"未知的导数计算方式: {mode!r}")


def count_steps(t0, t_end, h):
    """
    步数 ceil((t_end - t0) / h)

    浮点除法可能让商略大于整数（例如 1.1 / 0.1），这时最后一步的
    起点已经落在 t_end 上。这样的空步不计入步数。
    """
    n = int(math.ceil((t_end - t0) / h))
    while n > 1 and t0 + (n - 1) * h >= t_end:
        n -= 1
    return max(n, 1)


# 原始前端表单使用的驼峰字段名
_CAMEL_CASE_KEYS = {
    'logisticR': 'logistic_r',
    'logisticK': 'logistic_k',
    'harmonicA': 'harmonic_a',
    'harmonicW': 'harmonic_w',
    'customFunctionString': 'custom_function',
    'derivativeMode': 'derivative_mode',
}


@dataclass(frozen=True)
class ExperimentConfig:
    """
    一次数值实验的完整配置

    参数:
        t0, y0: 初始条件 y(t0) = y0
        t_end: 积分终点
        h: 固定步长
        order: 泰勒展开阶数 (1-6)
        problem: 问题族，见 ProblemFamily
        logistic_r, logistic_k: Logistic 方程的增长率与环境容量
        harmonic_a, harmonic_w: 简谐驱动的振幅与角频率
        custom_function: 自定义方程的文本，仅作记录，不参与计算
        derivative_mode: 导数计算方式，见 DerivativeMode
    """
    t0: float = 0.0
    y0: float = 1.0
    t_end: float = 1.0
    h: float = 0.1
    order: int = 3
    problem: ProblemFamily = ProblemFamily.EXPONENTIAL
    logistic_r: float = 1.0
    logistic_k: float = 10.0
    harmonic_a: float = 1.0
    harmonic_w: float = 1.0
    custom_function: str = "y' = t * y"
    derivative_mode: DerivativeMode = DerivativeMode.ANALYTIC

    def __post_init__(self):
        # 允许直接传入字符串标签
        object.__setattr__(self, 'problem', ProblemFamily.parse(self.problem))
        object.__setattr__(self, 'derivative_mode', DerivativeMode.parse(self.derivative_mode))
        # 表单数值可能以 3.0 的形式传入
        if isinstance(self.order, float) and self.order.is_integer():
            object.__setattr__(self, 'order', int(self.order))

    @classmethod
    def from_dict(cls, data):
        """从字典构建配置，同时接受 snake_case 与原始的驼峰字段名"""
        known = {field.name for field in dataclasses.fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _CAMEL_CASE_KEYS.get(key, key)
            if name not in known:
                raise ConfigurationError(f"未知的配置字段: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self):
        """转换为普通字典，枚举字段输出为字符串标签"""
        data = dataclasses.asdict(self)
        data['problem'] = self.problem.value
        data['derivative_mode'] = self.derivative_mode.value
        return data

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    @property
    def num_steps(self):
        return count_steps(self.t0, self.t_end, self.h)

    def validate(self):
        """检查核心约束，不满足时抛出 ConfigurationError，满足时返回自身"""
        for name in ('t0', 'y0', 't_end', 'h', 'logistic_r', 'logistic_k', 'harmonic_a', 'harmonic_w'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, numbers.Real):
                raise ConfigurationError(f"{name} 必须是数值，得到 {value!r}")
            if not math.isfinite(value):
                raise ConfigurationError(f"{name} 必须是有限数值，得到 {value!r}")

        if isinstance(self.order, bool) or not isinstance(self.order, numbers.Integral):
            raise ConfigurationError(f"阶数必须是整数，得到 {self.order!r}")
        if not MIN_ORDER <= self.order <= MAX_ORDER:
            raise ConfigurationError(f"阶数必须在 {MIN_ORDER} 到 {MAX_ORDER} 之间，得到 {self.order}")

        if self.h <= 0:
            raise ConfigurationError(f"步长必须大于0，得到 h={self.h}")
        if self.t_end <= self.t0:
            raise ConfigurationError(f"t_end 必须大于 t0，得到 t0={self.t0}, t_end={self.t_end}")
        return self


DEFAULT_CONFIG = ExperimentConfig()

EXAMPLE_CONFIG = ExperimentConfig(t0=0.0, y0=1.0, t_end=5.0, h=0.2, order=4,
                                  problem=ProblemFamily.EXPONENTIAL)
