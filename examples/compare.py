import matplotlib.pyplot as plt
import sys
import os
import datetime

# 添加中文字体支持
plt.rcParams['font.sans-serif'] = ['Microsoft YaHei', 'SimHei', 'Arial Unicode MS']
plt.rcParams['axes.unicode_minus'] = False

# 添加父目录到搜索路径
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from taylor_lab import ExperimentConfig, evaluate

# 创建results主目录及compare子目录
results_dir = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "results")
compare_dir = os.path.join(results_dir, "compare")
os.makedirs(compare_dir, exist_ok=True)

EXPERIMENTS = {
    '指数增长': ExperimentConfig(problem='exponential', t_end=3.0, h=0.3, order=3),
    'Logistic增长': ExperimentConfig(problem='logistic', y0=0.5, t_end=10.0, h=0.5, order=4,
                                    logistic_r=1.2, logistic_k=8.0),
    '简谐驱动': ExperimentConfig(problem='harmonic', t_end=6.0, h=0.25, order=2,
                             harmonic_a=1.5, harmonic_w=2.0),
}


def plot_experiment(title, results, timestamp):
    """绘制解曲线（泰勒/精确/欧拉/RK4）与泰勒法误差曲线"""
    solution = results.plots.solution
    error = results.plots.error
    meta = results.meta

    fig, axes = plt.subplots(2, 1, figsize=(10, 9))

    axes[0].plot(solution.t, solution.exact, 'k-', label='解析解')
    axes[0].plot(solution.t, solution.taylor, 'bo-', label=f'泰勒{meta.order}阶')
    axes[0].plot(solution.t, solution.euler, 'g--', label='欧拉法')
    axes[0].plot(solution.t, solution.rk4, 'r:', label='RK4')
    axes[0].set_xlabel('时间')
    axes[0].set_ylabel('y(t)')
    axes[0].set_title(f'{title} (h={meta.h})')
    axes[0].legend()
    axes[0].grid(True)

    # 误差中可能含 0，对数坐标下跳过首点
    axes[1].semilogy(error.t[1:], error.error[1:], 'b.-')
    axes[1].set_xlabel('时间')
    axes[1].set_ylabel('绝对误差 (对数)')
    axes[1].set_title(f'最大误差 {meta.max_error:.2e}, RMSE {meta.rmse:.2e}')
    axes[1].grid(True)

    plt.tight_layout()
    plt.savefig(os.path.join(compare_dir, f"compare_{meta.problem}_{timestamp}.png"), dpi=300)


def compare_methods():
    """在同一网格上比较泰勒展开法、欧拉法与RK4"""
    timestamp = datetime.datetime.now().strftime("%Y%m%d_%H%M%S")

    for title, config in EXPERIMENTS.items():
        results = evaluate(config, verbose=True)
        solution = results.plots.solution
        for label, values in [('泰勒', solution.taylor), ('欧拉', solution.euler), ('RK4', solution.rk4)]:
            final_error = abs(values[-1] - solution.exact[-1])
            print(f"  {label} 终点误差: {final_error:.2e}")
        plot_experiment(title, results, timestamp)

    print(f"图像已保存到 {compare_dir} 目录")
    plt.show()


if __name__ == "__main__":
    compare_methods()
