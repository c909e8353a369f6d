"""
内置问题族

每个问题族提供三类纯函数:
    first_derivative(t, y): 方程右端 f(t, y)
    derivatives(t, y, order): y 对 t 的前 order 阶解析导数 [y', y'', ...]
    exact_solution(t): 满足 y(t0) = y0 的解析解

三角与指数函数经由 math_compat 调用，因此 t、y 也可以是 sympy 符号，
便于对照符号微分检查导数递推。
"""
import warnings
from abc import ABC, abstractmethod

import numpy as np
from scipy.special import comb

from .config import ProblemFamily
from .math_compat import compatible_sin, compatible_cos, compatible_exp


class ProblemDefinition(ABC):
    """标量初值问题 y' = f(t, y), y(t0) = y0 的接口"""

    family = None

    def __init__(self, t0, y0):
        self.t0 = t0
        self.y0 = y0

    @abstractmethod
    def first_derivative(self, t, y):
        """方程右端 f(t, y)"""
        pass

    @abstractmethod
    def derivatives(self, t, y, order):
        """前 order 阶导数，第 k 个元素为 y^(k+1)"""
        pass

    @abstractmethod
    def exact_solution(self, t):
        """解析解 y(t)"""
        pass

    def __repr__(self):
        return f"{type(self).__name__}(t0={self.t0}, y0={self.y0})"


class ExponentialProblem(ProblemDefinition):
    """y' = y，任意阶导数都等于 y 本身"""

    family = ProblemFamily.EXPONENTIAL

    def first_derivative(self, t, y):
        return y

    def derivatives(self, t, y, order):
        return [y] * order

    def exact_solution(self, t):
        return self.y0 * compatible_exp(t - self.t0)


class LogisticProblem(ProblemDefinition):
    """
    Logistic 增长 y' = r*y*(1 - y/K)

    记 g = r - 2*r*y/K，则 y'' = g*y'。g 的 k 阶导数为 -2*r*y^(k)/K，
    由 Leibniz 公式得到递推:
        y^(n+1) = sum_{k=0}^{n-1} C(n-1, k) * g^(k) * y^(n-k)

    K <= 0 时方程退化，导数一律取 0；y0 = 0 时种群保持灭绝，解析解恒为 0。
    """

    family = ProblemFamily.LOGISTIC

    def __init__(self, t0, y0, r=1.0, k=10.0):
        super().__init__(t0, y0)
        self.r = r
        self.k = k

    def first_derivative(self, t, y):
        if self.k <= 0:
            return 0.0
        return self.r * y * (1 - y / self.k)

    def derivatives(self, t, y, order):
        if self.k <= 0:
            return [0.0] * order
        if order <= 0:
            return []

        g = self.r - 2 * self.r * y / self.k
        # g^(k) = g_scale * y^(k), k >= 1
        g_scale = -2 * self.r / self.k

        derivs = [self.first_derivative(t, y)]
        for n in range(1, order):
            term = g * derivs[n - 1]
            for k in range(1, n):
                term = term + comb(n - 1, k, exact=True) * g_scale * derivs[k - 1] * derivs[n - k - 1]
            derivs.append(term)
        return derivs

    def exact_solution(self, t):
        if self.y0 == 0:
            return 0.0
        a = (self.k - self.y0) / self.y0
        return self.k / (1 + a * compatible_exp(-self.r * (t - self.t0)))

    def __repr__(self):
        return f"LogisticProblem(t0={self.t0}, y0={self.y0}, r={self.r}, k={self.k})"


class HarmonicProblem(ProblemDefinition):
    """
    简谐驱动 y' = A*w*cos(w*t)

    n 阶导数按 {cos, -sin, -cos, sin} 四周期循环，幅值为 A*w^n。
    解析解 A*(sin(w*t) - sin(w*t0)) + y0 在 w = 0 时自然退化为常数 y0。
    """

    family = ProblemFamily.HARMONIC

    _CYCLE = (
        (1, compatible_cos),
        (-1, compatible_sin),
        (-1, compatible_cos),
        (1, compatible_sin),
    )

    def __init__(self, t0, y0, amplitude=1.0, omega=1.0):
        super().__init__(t0, y0)
        self.amplitude = amplitude
        self.omega = omega

    def first_derivative(self, t, y):
        return self.amplitude * self.omega * compatible_cos(self.omega * t)

    def derivatives(self, t, y, order):
        derivs = []
        for n in range(1, order + 1):
            sign, func = self._CYCLE[(n - 1) % 4]
            # 大 w 时幅值溢出为 inf
            scale = sign * np.float64(self.amplitude) * np.power(np.float64(self.omega), n)
            derivs.append(func(self.omega * t) * scale)
        return derivs

    def exact_solution(self, t):
        return (self.amplitude * (compatible_sin(self.omega * t) - compatible_sin(self.omega * self.t0))
                + self.y0)

    def __repr__(self):
        return (f"HarmonicProblem(t0={self.t0}, y0={self.y0}, "
                f"amplitude={self.amplitude}, omega={self.omega})")


def make_problem(config):
    """
    根据配置构建问题实例

    参数:
        config: ExperimentConfig

    返回:
        ProblemDefinition 子类实例。custom 问题族尚无表达式求值器，
        返回指数问题并发出警告，调用方可通过 problem.family 识别替换。
    """
    family = config.problem
    if family is ProblemFamily.EXPONENTIAL:
        return ExponentialProblem(config.t0, config.y0)
    elif family is ProblemFamily.LOGISTIC:
        return LogisticProblem(config.t0, config.y0, r=config.logistic_r, k=config.logistic_k)
    elif family is ProblemFamily.HARMONIC:
        return HarmonicProblem(config.t0, config.y0,
                               amplitude=config.harmonic_a, omega=config.harmonic_w)
    elif family is ProblemFamily.CUSTOM:
        warnings.warn(
            f"自定义方程尚未实现 ({config.custom_function!r})，使用指数问题 y' = y 代替",
            UserWarning,
            stacklevel=2,
        )
        return ExponentialProblem(config.t0, config.y0)
    else:
        raise ValueError(f"不支持的问题类型: {family}")
