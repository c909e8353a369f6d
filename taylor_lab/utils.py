import warnings
from dataclasses import dataclass

import numpy as np
import pandas as pd

from .config import MIN_ORDER, MAX_ORDER


@dataclass(frozen=True)
class ErrorSummary:
    """误差统计结果"""
    max_error: float
    rmse: float
    finite_count: int
    total_count: int


def absolute_errors(approx, exact):
    """逐点绝对误差 |approx - exact|，非有限值原样保留"""
    with np.errstate(invalid='ignore', over='ignore'):
        return np.abs(np.asarray(approx, dtype=np.float64) - np.asarray(exact, dtype=np.float64))


def max_finite_error(errors):
    """
    有限误差中的最大值

    非有限项直接跳过；若没有任何有限项，返回 nan。
    """
    errors = np.asarray(errors, dtype=np.float64)
    finite = errors[np.isfinite(errors)]
    if finite.size == 0:
        return float('nan')
    return float(np.max(finite))


def rmse_total(errors):
    """
    均方根误差 sqrt(sum(有限项^2) / 总项数)

    分子只累加有限项，分母却是全部项数（含非有限项），
    与既有输出保持一致。
    """
    errors = np.asarray(errors, dtype=np.float64)
    if errors.size == 0:
        return float('nan')
    finite = errors[np.isfinite(errors)]
    with np.errstate(over='ignore'):
        return float(np.sqrt(np.sum(finite**2) / errors.size))


def analyze_errors(approx, exact):
    """
    对比数值解与解析解

    参数:
        approx: 数值解序列
        exact: 解析解序列

    返回:
        (逐点绝对误差数组, ErrorSummary)
    """
    errors = absolute_errors(approx, exact)
    finite_count = int(np.count_nonzero(np.isfinite(errors)))
    if finite_count < errors.size:
        warnings.warn(f"{errors.size - finite_count} 个误差值非有限，已从统计中排除",
                      RuntimeWarning, stacklevel=2)
    summary = ErrorSummary(
        max_error=max_finite_error(errors),
        rmse=rmse_total(errors),
        finite_count=finite_count,
        total_count=int(errors.size),
    )
    return errors, summary


def local_truncation_error(config, h):
    """
    从 (t0, y0) 出发单步推进 h 后，泰勒法与解析解的误差

    参数:
        config: ExperimentConfig
        h: 单步步长

    返回:
        |y_taylor(t0 + h) - y_exact(t0 + h)|
    """
    from .core import TaylorODESolver
    from .problems import make_problem

    problem = make_problem(config)
    solver = TaylorODESolver(problem, order=config.order, derivative_mode=config.derivative_mode)
    y_next = solver.taylor_step(config.t0, config.y0, h)
    return abs(float(y_next) - float(problem.exact_solution(config.t0 + h)))


def estimate_convergence_order(config, refinements=3, h=None):
    """
    估计泰勒法的局部截断阶

    步长逐次减半，局部误差应按 2^(order+1) 缩小，因此
    log2(e(h) / e(h/2)) 应接近 order + 1。

    参数:
        config: ExperimentConfig
        refinements: 减半次数
        h: 起始步长，默认使用 config.h

    返回:
        长度为 refinements 的观测阶数组
    """
    h = config.h if h is None else h
    steps = h / 2.0**np.arange(refinements + 1)
    errors = np.array([local_truncation_error(config, step) for step in steps])
    with np.errstate(divide='ignore', invalid='ignore'):
        return np.log2(errors[:-1] / errors[1:])


def order_study(config, orders=None):
    """
    固定其余参数，比较不同阶数的整体误差

    参数:
        config: ExperimentConfig
        orders: 待比较的阶数，默认 1-6

    返回:
        pandas.DataFrame，列为 order, num_steps, max_error, rmse
    """
    from .api import evaluate

    orders = range(MIN_ORDER, MAX_ORDER + 1) if orders is None else orders
    rows = []
    for order in orders:
        meta = evaluate(config.replace(order=order)).meta
        rows.append([order, meta.num_steps, meta.max_error, meta.rmse])
    return pd.DataFrame(rows, columns=['order', 'num_steps', 'max_error', 'rmse'])
