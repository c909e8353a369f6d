"""问题族使用的初等函数，既接受浮点数也接受 sympy 表达式"""
import numpy as np
import sympy


def is_symbolic(obj):
    """检查对象是否为含自由符号的 sympy 表达式"""
    return isinstance(obj, sympy.Basic) and len(obj.free_symbols) > 0


def _compatible(numeric_func, symbolic_func):
    def func(x):
        if is_symbolic(x):
            return symbolic_func(x)
        return numeric_func(x)
    func.__name__ = f"compatible_{numeric_func.__name__}"
    func.__doc__ = f"对符号输入调用 sympy.{symbolic_func.__name__}，否则调用 numpy.{numeric_func.__name__}"
    return func


compatible_sin = _compatible(np.sin, sympy.sin)
compatible_cos = _compatible(np.cos, sympy.cos)
compatible_exp = _compatible(np.exp, sympy.exp)
