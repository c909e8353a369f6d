import numpy as np
from numba import jit
from scipy.special import factorial

from .config import MIN_ORDER, MAX_ORDER

# 0! .. 6!，与允许的阶数范围一致
FACTORIALS = factorial(np.arange(MAX_ORDER + 1))


def clamp_order(order):
    """把阶数限制在 [MIN_ORDER, MAX_ORDER] 内"""
    return max(MIN_ORDER, min(int(order), MAX_ORDER))


@jit(nopython=True)
def jit_taylor_step(y, derivatives, h, order, factorials):
    """
    使用Numba JIT加速泰勒级数求和

    参数:
        y: 当前值
        derivatives: 导数数组 [y', y'', ...]，长度不少于 order
        h: 步长
        order: 展开阶数
        factorials: 阶乘表

    返回:
        y + sum_{k=1..order} y^(k) * h^k / k!
    """
    result = y
    for k in range(1, order + 1):
        result += derivatives[k - 1] * (h**k) / factorials[k]
    return result
