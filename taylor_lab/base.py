from abc import ABC, abstractmethod

import numpy as np

from .config import count_steps


class StepGrid:
    """
    固定步长网格

    第 i 步从名义时间 t0 + i*h 出发，步宽 min(h, t_end - t_i)，
    因此最后一步恰好落在 t_end 上，即使区间长度不是 h 的整数倍。

    属性:
        starts: 每一步的起点 t_i，长度 num_steps
        widths: 每一步的实际步宽 h_eff，长度 num_steps
        times: 输出时间点，长度 num_steps + 1，times[-1] == t_end
    """

    def __init__(self, t0, t_end, h):
        self.t0 = t0
        self.t_end = t_end
        self.h = h
        self.num_steps = count_steps(t0, t_end, h)

        self.starts = t0 + np.arange(self.num_steps) * h
        self.widths = np.minimum(h, t_end - self.starts)

        self.times = np.empty(self.num_steps + 1)
        self.times[:-1] = self.starts
        self.times[-1] = t_end

    def __len__(self):
        return self.num_steps

    def __iter__(self):
        """逐步给出 (t_i, h_eff)"""
        for t, h in zip(self.starts, self.widths):
            yield float(t), float(h)

    def __repr__(self):
        return f"StepGrid(t0={self.t0}, t_end={self.t_end}, h={self.h}, num_steps={self.num_steps})"


class ODESolverBase(ABC):
    """固定步长单步法求解器的基类接口"""

    def __init__(self, problem):
        self.problem = problem

    @abstractmethod
    def step(self, t, y, h):
        """从 (t, y) 前进一步，返回 y(t + h) 的近似值"""
        pass

    @property
    @abstractmethod
    def name(self):
        """求解器名称"""
        pass

    def solve(self, grid, y0):
        """
        在给定网格上推进，返回与 grid.times 等长的解数组

        h_eff <= 0 的步（只可能是退化的末尾步）被跳过，解保持不变。
        """
        values = np.empty(len(grid.times))
        y = np.float64(y0)
        values[0] = y
        for i, (t, h) in enumerate(grid):
            if h > 0:
                y = self.step(t, y, h)
            values[i + 1] = y
        return values

    def __repr__(self):
        return f"{type(self).__name__}({self.problem!r})"


class CompositeODESolver:
    """多个求解器在同一网格上同步推进，用于方法对比"""

    def __init__(self, solvers=None):
        """
        参数:
            solvers: 求解器列表 [求解器1, 求解器2, ...]
        """
        self.solvers = list(solvers or [])

    def add_solver(self, solver):
        """添加求解器到对比列表"""
        self.solvers.append(solver)
        return self

    def solve(self, grid, y0):
        """
        逐步同步推进所有求解器

        返回:
            {求解器名称: 解数组}，各数组与 grid.times 等长
        """
        if not self.solvers:
            raise ValueError("没有可用的求解器")

        names = [solver.name for solver in self.solvers]
        if len(set(names)) != len(names):
            raise ValueError(f"求解器名称重复: {names}")

        values = {name: np.empty(len(grid.times)) for name in names}
        states = [np.float64(y0)] * len(self.solvers)
        for name in names:
            values[name][0] = y0

        for i, (t, h) in enumerate(grid):
            for j, solver in enumerate(self.solvers):
                if h > 0:
                    states[j] = solver.step(t, states[j], h)
                values[names[j]][i + 1] = states[j]
        return values
