import os
import sys

import matplotlib.pyplot as plt
import numpy as np

# 设置中文字体支持
plt.rcParams['font.sans-serif'] = ['SimHei', 'Microsoft YaHei', 'Arial Unicode MS']
plt.rcParams['axes.unicode_minus'] = False

# 添加项目根目录到Python搜索路径
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taylor_lab import ExperimentConfig, EXAMPLE_CONFIG, estimate_convergence_order, order_study

output_dir = os.path.join("results", "taylor_evaluation")
os.makedirs(output_dir, exist_ok=True)


def evaluate_order_effects():
    """评估1: 不同阶数泰勒展开的整体误差"""
    print("评估1: 不同阶数泰勒展开的效果")
    configs = {
        'exponential': EXAMPLE_CONFIG,
        'logistic': ExperimentConfig(problem='logistic', t_end=8.0, h=0.2),
        'harmonic': ExperimentConfig(problem='harmonic', t_end=6.0, h=0.2, harmonic_w=2.0),
    }

    plt.figure(figsize=(10, 6))
    for name, config in configs.items():
        table = order_study(config)
        print(f"\n{name}:")
        print(table.to_string(index=False))
        plt.semilogy(table['order'], table['max_error'], 'o-', label=name)

        with open(os.path.join(output_dir, f"order_study_{name}.txt"), "w", encoding='utf-8') as f:
            f.write(table.to_string(index=False))

    plt.xlabel('阶数')
    plt.ylabel('最大误差 (对数)')
    plt.title('不同阶数泰勒展开的误差比较')
    plt.legend()
    plt.grid(True)
    plt.savefig(os.path.join(output_dir, "order_effects.png"))


def evaluate_local_order():
    """评估2: 步长减半时的局部截断阶"""
    print("\n评估2: 局部截断阶 (理论值 order + 1)")
    for order in range(1, 5):
        config = ExperimentConfig(problem='exponential', order=order, h=0.2)
        observed = estimate_convergence_order(config, refinements=3)
        print(f"  阶数 {order}: 观测阶 {np.round(observed, 3)}")


if __name__ == "__main__":
    evaluate_order_effects()
    evaluate_local_order()
    plt.show()
