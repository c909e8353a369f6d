import warnings

import numpy as np

from .base import ODESolverBase
from .config import DerivativeMode
from .optimizations import FACTORIALS, clamp_order, jit_taylor_step


class TaylorODESolver(ODESolverBase):
    """基于泰勒展开的固定步长ODE求解器"""

    def __init__(self, problem, order=5, derivative_mode=DerivativeMode.ANALYTIC):
        """
        初始化泰勒展开求解器

        参数:
            problem: ProblemDefinition，提供解析高阶导数
            order: 泰勒展开阶数，限制在 1-6
            derivative_mode: 导数计算方式。'finite' 目前与 'analytic' 等价
        """
        super().__init__(problem)
        self.order = clamp_order(order)
        self.derivative_mode = DerivativeMode.parse(derivative_mode)
        if self.derivative_mode is DerivativeMode.FINITE:
            warnings.warn("有限差分导数尚未实现，使用解析导数", UserWarning, stacklevel=2)

    @property
    def name(self):
        return f"Taylor(order={self.order})"

    def compute_derivatives(self, t, y):
        """计算泰勒展开所需的前 order 阶导数"""
        return np.asarray(self.problem.derivatives(t, y, self.order), dtype=np.float64)

    def taylor_step(self, t, y, h):
        """执行一个泰勒展开步骤: y + sum_k y^(k) * h^k / k!"""
        derivatives = self.compute_derivatives(t, y)
        return jit_taylor_step(np.float64(y), derivatives, np.float64(h), self.order, FACTORIALS)

    def step(self, t, y, h):
        return self.taylor_step(t, y, h)
