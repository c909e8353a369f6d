from .config import (ExperimentConfig, ProblemFamily, DerivativeMode, ConfigurationError,
                     DEFAULT_CONFIG, EXAMPLE_CONFIG, MIN_ORDER, MAX_ORDER)
from .problems import (ProblemDefinition, ExponentialProblem, LogisticProblem, HarmonicProblem,
                       make_problem)
from .base import ODESolverBase, CompositeODESolver, StepGrid
from .core import TaylorODESolver
from .solvers import EulerSolver, RK4Solver
from .results import (SimulationResults, SimulationMeta, TrajectoryPoint, PlotSeries,
                      SolutionSeries, ErrorSeries)
from .utils import analyze_errors, estimate_convergence_order, order_study

# 统一接口
from .api import evaluate

__version__ = '0.3.0'
