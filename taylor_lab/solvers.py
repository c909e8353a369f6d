"""对比用的参考求解器，只使用方程右端 f(t, y)"""
from .base import ODESolverBase


class EulerSolver(ODESolverBase):
    """显式欧拉法"""

    def step(self, t, y, h):
        return y + h * self.problem.first_derivative(t, y)

    @property
    def name(self):
        return "Euler"


class RK4Solver(ODESolverBase):
    """经典四阶Runge-Kutta法"""

    def step(self, t, y, h):
        f = self.problem.first_derivative
        k1 = f(t, y)
        k2 = f(t + h/2, y + h*k1/2)
        k3 = f(t + h/2, y + h*k2/2)
        k4 = f(t + h, y + h*k3)

        return y + h * (k1 + 2*k2 + 2*k3 + k4) / 6

    @property
    def name(self):
        return "RK4"
