import time
from collections.abc import Mapping

import numpy as np

from .base import CompositeODESolver, StepGrid
from .config import ConfigurationError, ExperimentConfig
from .core import TaylorODESolver
from .problems import make_problem
from .results import SimulationMeta, SimulationResults
from .solvers import EulerSolver, RK4Solver
from .utils import analyze_errors


def evaluate(config, verbose=False):
    """
    统一的实验接口：按配置运行一次固定步长仿真

    参数:
        config: ExperimentConfig，或可由 ExperimentConfig.from_dict 解析的字典
        verbose: 是否打印运行摘要

    返回:
        SimulationResults，包含摘要、逐点轨迹以及泰勒/欧拉/RK4 对比数据

    异常:
        ConfigurationError: 阶数不在 1-6、h <= 0 或 t_end <= t0 等非法配置
    """
    if isinstance(config, Mapping):
        config = ExperimentConfig.from_dict(config)
    elif not isinstance(config, ExperimentConfig):
        raise ConfigurationError(f"无法识别的配置类型: {type(config).__name__}")
    config.validate()

    start_time = time.perf_counter()

    problem = make_problem(config)
    grid = StepGrid(config.t0, config.t_end, config.h)

    taylor = TaylorODESolver(problem, order=config.order, derivative_mode=config.derivative_mode)
    euler = EulerSolver(problem)
    rk4 = RK4Solver(problem)
    composite = CompositeODESolver([taylor, euler, rk4])

    # 发散参数下的 inf/nan 原样写入轨迹，只在统计时排除
    with np.errstate(over='ignore', invalid='ignore', divide='ignore'):
        values = composite.solve(grid, config.y0)
        # 初值即 t0 处的精确解
        y_exact = np.empty(len(grid.times))
        y_exact[0] = config.y0
        y_exact[1:] = [problem.exact_solution(t) for t in grid.times[1:]]

    y_taylor = values[taylor.name]
    abs_error, summary = analyze_errors(y_taylor, y_exact)

    runtime = time.perf_counter() - start_time

    substituted = problem.family.value if problem.family is not config.problem else None
    meta = SimulationMeta(
        problem=config.problem.value,
        t0=config.t0,
        y0=config.y0,
        t_end=config.t_end,
        h=config.h,
        order=config.order,
        num_steps=grid.num_steps,
        max_error=summary.max_error,
        rmse=summary.rmse,
        derivative_mode=config.derivative_mode.value,
        substituted_problem=substituted,
        runtime=f"{runtime * 1000:.3f} ms",
    )

    if verbose:
        print(f"{config.problem.value}: {taylor.name}, 步数={grid.num_steps}, "
              f"最大误差={summary.max_error:.3e}, RMSE={summary.rmse:.3e}, 用时 {meta.runtime}")

    return SimulationResults.build(
        meta,
        t=grid.times,
        y_taylor=y_taylor,
        y_exact=y_exact,
        abs_error=abs_error,
        y_euler=values[euler.name],
        y_rk4=values[rk4.name],
    )
