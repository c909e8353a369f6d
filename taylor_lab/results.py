"""
仿真结果数据结构

SimulationResults 由 evaluate() 一次性构建，之后不再修改：
数组均设为只读，轨迹点为冻结的数据类。
"""
import dataclasses
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

CSV_COLUMNS = ('t', 'y_taylor', 'y_exact', 'abs_error')


def _frozen_array(values):
    array = np.array(values, dtype=np.float64)
    array.flags.writeable = False
    return array


@dataclass(frozen=True)
class TrajectoryPoint:
    t: float
    y_taylor: float
    y_exact: float
    abs_error: float


@dataclass(frozen=True, eq=False)
class SolutionSeries:
    t: np.ndarray
    taylor: np.ndarray
    exact: np.ndarray
    euler: np.ndarray
    rk4: np.ndarray


@dataclass(frozen=True, eq=False)
class ErrorSeries:
    t: np.ndarray
    error: np.ndarray


@dataclass(frozen=True, eq=False)
class PlotSeries:
    """绘图数据，与轨迹逐点对齐"""
    solution: SolutionSeries
    error: ErrorSeries


@dataclass(frozen=True)
class SimulationMeta:
    """
    运行摘要

    substituted_problem 非空时表示请求的问题族未实现，
    实际计算使用了该字段给出的问题族。
    runtime 仅供展示，不参与结果比较。
    """
    problem: str
    t0: float
    y0: float
    t_end: float
    h: float
    order: int
    num_steps: int
    max_error: float
    rmse: float
    derivative_mode: str = 'analytic'
    substituted_problem: Optional[str] = None
    runtime: Optional[str] = dataclasses.field(default=None, compare=False)

    def to_dict(self):
        return dataclasses.asdict(self)


@dataclass(frozen=True, eq=False)
class SimulationResults:
    meta: SimulationMeta
    data: Tuple[TrajectoryPoint, ...]
    plots: PlotSeries

    @classmethod
    def build(cls, meta, t, y_taylor, y_exact, abs_error, y_euler, y_rk4):
        """由并行数组组装结果，所有序列长度必须一致"""
        t = _frozen_array(t)
        y_taylor = _frozen_array(y_taylor)
        y_exact = _frozen_array(y_exact)
        abs_error = _frozen_array(abs_error)
        y_euler = _frozen_array(y_euler)
        y_rk4 = _frozen_array(y_rk4)

        lengths = {len(a) for a in (t, y_taylor, y_exact, abs_error, y_euler, y_rk4)}
        if len(lengths) != 1:
            raise ValueError(f"结果序列长度不一致: {sorted(lengths)}")

        data = tuple(
            TrajectoryPoint(float(ti), float(yt), float(ye), float(err))
            for ti, yt, ye, err in zip(t, y_taylor, y_exact, abs_error)
        )
        plots = PlotSeries(
            solution=SolutionSeries(t=t, taylor=y_taylor, exact=y_exact, euler=y_euler, rk4=y_rk4),
            error=ErrorSeries(t=t, error=abs_error),
        )
        return cls(meta=meta, data=data, plots=plots)

    def __len__(self):
        return len(self.data)

    def to_dataframe(self):
        """轨迹数据表，列顺序与 CSV 表头 t,y_taylor,y_exact,abs_error 一致"""
        return pd.DataFrame(
            {
                't': self.plots.solution.t,
                'y_taylor': self.plots.solution.taylor,
                'y_exact': self.plots.solution.exact,
                'abs_error': self.plots.error.error,
            },
            columns=list(CSV_COLUMNS),
        )
