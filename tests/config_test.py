"""
Unit tests for ExperimentConfig.

Tests cover:
1. Problem family / derivative mode tags
2. Defaults and dictionary conversion
3. Step counting
4. Validation
"""

import dataclasses
import math

import numpy as np
import pytest

from taylor_lab.config import (
    ConfigurationError,
    DEFAULT_CONFIG,
    DerivativeMode,
    EXAMPLE_CONFIG,
    ExperimentConfig,
    ProblemFamily,
    count_steps,
)


# ============================================================================
# Test Class 1: Tags
# ============================================================================

class TestTags:
    """Test enum parsing of problem and derivative mode tags"""

    @pytest.mark.parametrize("tag, expected", [
        ("exponential", ProblemFamily.EXPONENTIAL),
        ("exp", ProblemFamily.EXPONENTIAL),
        ("Logistic", ProblemFamily.LOGISTIC),
        ("harmonic", ProblemFamily.HARMONIC),
        ("custom", ProblemFamily.CUSTOM),
        (ProblemFamily.HARMONIC, ProblemFamily.HARMONIC),
    ])
    def test_problem_family_parse(self, tag, expected):
        assert ProblemFamily.parse(tag) is expected

    def test_unknown_problem_raises(self):
        with pytest.raises(ConfigurationError):
            ProblemFamily.parse("lorenz")

    def test_unknown_problem_in_config_raises(self):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(problem="lorenz")

    def test_derivative_mode_parse(self):
        assert DerivativeMode.parse("finite") is DerivativeMode.FINITE
        assert DerivativeMode.parse("analytic") is DerivativeMode.ANALYTIC
        with pytest.raises(ConfigurationError):
            DerivativeMode.parse("symbolic")


# ============================================================================
# Test Class 2: Defaults and conversion
# ============================================================================

class TestConfigConversion:
    """Test defaults, from_dict and to_dict"""

    def test_default_config(self):
        assert DEFAULT_CONFIG.t0 == 0.0
        assert DEFAULT_CONFIG.y0 == 1.0
        assert DEFAULT_CONFIG.t_end == 1.0
        assert DEFAULT_CONFIG.h == 0.1
        assert DEFAULT_CONFIG.order == 3
        assert DEFAULT_CONFIG.problem is ProblemFamily.EXPONENTIAL
        assert DEFAULT_CONFIG.derivative_mode is DerivativeMode.ANALYTIC
        assert DEFAULT_CONFIG.logistic_r == 1.0
        assert DEFAULT_CONFIG.logistic_k == 10.0

    def test_example_config(self):
        assert EXAMPLE_CONFIG.t_end == 5.0
        assert EXAMPLE_CONFIG.h == 0.2
        assert EXAMPLE_CONFIG.order == 4
        assert EXAMPLE_CONFIG.num_steps == 25

    def test_string_tags_converted(self):
        config = ExperimentConfig(problem="logistic", derivative_mode="finite")
        assert config.problem is ProblemFamily.LOGISTIC
        assert config.derivative_mode is DerivativeMode.FINITE

    def test_from_dict_accepts_camel_case(self):
        config = ExperimentConfig.from_dict({
            "t0": 0.0,
            "y0": 2.0,
            "t_end": 3.0,
            "h": 0.25,
            "order": 4,
            "problem": "logistic",
            "logisticR": 0.5,
            "logisticK": 20.0,
            "harmonicA": 2.0,
            "harmonicW": 3.0,
            "customFunctionString": "y' = -y",
            "derivativeMode": "analytic",
        })
        assert config.problem is ProblemFamily.LOGISTIC
        assert config.logistic_r == 0.5
        assert config.logistic_k == 20.0
        assert config.harmonic_a == 2.0
        assert config.harmonic_w == 3.0
        assert config.custom_function == "y' = -y"

    def test_from_dict_unknown_key_raises(self):
        with pytest.raises(ConfigurationError):
            ExperimentConfig.from_dict({"t0": 0.0, "stepSize": 0.1})

    def test_to_dict_uses_string_tags(self):
        data = ExperimentConfig(problem="harmonic").to_dict()
        assert data["problem"] == "harmonic"
        assert data["derivative_mode"] == "analytic"
        assert ExperimentConfig.from_dict(data) == ExperimentConfig(problem="harmonic")

    def test_replace(self):
        config = DEFAULT_CONFIG.replace(order=6)
        assert config.order == 6
        assert DEFAULT_CONFIG.order == 3

    def test_config_is_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.h = 0.5

    def test_integral_float_order_coerced(self):
        config = ExperimentConfig(order=3.0)
        assert config.order == 3
        assert isinstance(config.order, int)


# ============================================================================
# Test Class 3: Step counting
# ============================================================================

class TestStepCount:
    """Test num_steps = ceil((t_end - t0) / h)"""

    @pytest.mark.parametrize("t0, t_end, h, expected", [
        (0.0, 1.0, 0.5, 2),
        (0.0, 1.0, 0.3, 4),
        (0.0, 1.0, 0.1, 10),
        (0.0, 1.0, 2.0, 1),
        (-1.0, 1.0, 0.25, 8),
    ])
    def test_count_steps(self, t0, t_end, h, expected):
        assert count_steps(t0, t_end, h) == expected

    def test_float_quotient_above_integer(self):
        # 1.1 / 0.1 rounds slightly above 11
        assert count_steps(0.0, 1.1, 0.1) == 11

    def test_last_step_start_before_end(self):
        for t_end, h in [(1.1, 0.1), (0.7, 0.1), (3.3, 1.1), (2.0, 0.2)]:
            n = count_steps(0.0, t_end, h)
            assert (n - 1) * h < t_end
            assert math.isclose(n * h, t_end) or n * h > t_end

    def test_num_steps_property(self):
        assert ExperimentConfig(t_end=1.0, h=0.3).num_steps == 4


# ============================================================================
# Test Class 4: Validation
# ============================================================================

class TestValidation:
    """Test core configuration checks"""

    def test_valid_config_returns_self(self):
        config = ExperimentConfig()
        assert config.validate() is config

    @pytest.mark.parametrize("order", [1, 6, np.int64(4)])
    def test_order_bounds_accepted(self, order):
        ExperimentConfig(order=order).validate()

    @pytest.mark.parametrize("order", [0, 7, -1, 2.5, True, "3"])
    def test_invalid_order(self, order):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(order=order).validate()

    @pytest.mark.parametrize("h", [0.0, -0.1])
    def test_non_positive_step(self, h):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(h=h).validate()

    @pytest.mark.parametrize("t0, t_end", [(1.0, 1.0), (2.0, 1.0)])
    def test_empty_interval(self, t0, t_end):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(t0=t0, t_end=t_end).validate()

    @pytest.mark.parametrize("field", ["t0", "y0", "t_end", "h"])
    def test_non_finite_values(self, field):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(**{field: float("nan")}).validate()

    def test_non_numeric_value(self):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(y0="1.0").validate()

    @pytest.mark.parametrize("field", ["logistic_r", "logistic_k", "harmonic_a", "harmonic_w"])
    @pytest.mark.parametrize("value", [None, "2", True, float("inf"), float("nan")])
    def test_invalid_family_parameter(self, field, value):
        with pytest.raises(ConfigurationError, match=field):
            ExperimentConfig(**{field: value}).validate()

    def test_family_parameters_checked_for_every_problem(self):
        with pytest.raises(ConfigurationError):
            ExperimentConfig(problem="exponential", harmonic_w=None).validate()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)
