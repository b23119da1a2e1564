"""
End-to-end inference scenarios.

Each test walks the full specify -> (hypothesize) -> generate ->
calculate -> reduce pipeline on the kind of data the five canonical
analyses use: marbles in a bowl, a smoking survey, salaries by league
and housing prices by size.
"""

import numpy as np
import pytest

from pyinfer import (
    Sample, calculate, generate, get_confidence_interval, get_p_value,
    hypothesize, specify,
)


class TestPopulationProportion:

    def test_bootstrap_ci_covers_true_proportion(self, marbles):
        design = specify(marbles, "color", success="red")
        obs = calculate(design)
        assert obs == pytest.approx(0.36)

        boot = calculate(generate(design, 1000, type="bootstrap", seed=76))
        ci = get_confidence_interval(boot, 0.95)
        assert ci.contains(0.36)
        # Normal approximation half-width is about 0.094
        assert 0.12 < ci.width < 0.26

    def test_coverage_across_runs(self):
        # Repeated samples of 100 marbles from a bowl that is 36% red.
        rng = np.random.default_rng(2024)
        covered = 0
        runs = 40
        for i in range(runs):
            draws = np.where(rng.random(100) < 0.36, "red", "white")
            sample = Sample.from_columns({"color": draws})
            design = specify(sample, "color", success="red")
            boot = calculate(generate(design, 1000, seed=i))
            covered += get_confidence_interval(boot, 0.95).contains(0.36)
        assert covered / runs >= 0.8

    def test_point_null_draw(self, marbles):
        design = specify(marbles, "color", success="red")
        obs = calculate(design)
        null = hypothesize(design, "point", p=0.5)
        dist = calculate(generate(null, 1000, type="draw", seed=1))
        p = get_p_value(dist, obs, "less")
        assert p.value < 0.01


class TestDifferenceInProportions:

    def test_permutation_test(self, smoking):
        design = specify(
            smoking, "smokes", explanatory="sex", success="yes",
            order=("male", "female"),
        )
        obs = calculate(design)
        assert obs == pytest.approx(0.15)

        null = hypothesize(design, "independence")
        dist = calculate(generate(null, 1000, type="permutation", seed=2))
        assert dist.mean == pytest.approx(0.0, abs=0.02)
        p = get_p_value(dist, obs, "greater")
        assert 0.0 < p.value < 0.2

    def test_bootstrap_ci(self, smoking):
        design = specify(
            smoking, "smokes", explanatory="sex", success="yes",
            order=("male", "female"),
        )
        boot = calculate(generate(design, 1000, seed=3))
        ci = get_confidence_interval(boot, 0.90)
        assert ci.contains(0.15)


class TestPopulationMean:

    def test_bootstrap_ci_and_point_null(self, housing):
        design = specify(housing, "price")
        obs = calculate(design)

        boot = calculate(generate(design, 1000, seed=4))
        assert boot.mean == pytest.approx(obs, abs=0.1)
        ci = get_confidence_interval(boot, 0.95)
        se_ci = get_confidence_interval(boot, 0.95, type="se", point_estimate=obs)
        assert ci.lower == pytest.approx(se_ci.lower, abs=0.15)
        assert ci.upper == pytest.approx(se_ci.upper, abs=0.15)

        null = hypothesize(design, "point", mu=obs + 2.0)
        dist = calculate(generate(null, 1000, seed=5))
        assert get_p_value(dist, obs, "both").value < 0.01


class TestDifferenceInMeans:

    def test_null_distribution_centred_on_zero(self, salaries):
        design = specify(salaries, "salary", explanatory="league", order=("AL", "NL"))
        obs = calculate(design)
        assert obs == pytest.approx(0.0, abs=1e-12)

        null = hypothesize(design, "independence")
        dist = calculate(generate(null, 1000, type="permutation", seed=6))
        assert abs(dist.mean) < 0.15 * dist.se
        assert get_p_value(dist, obs, "both").value > 0.5

    def test_empirical_mean_close_to_zero(self, salaries):
        design = specify(salaries, "salary", explanatory="league")
        null = hypothesize(design, "independence")
        dist = calculate(generate(null, 1000, type="permutation", seed=6))
        # Standard error of the replicate mean is se / sqrt(1000)
        assert abs(dist.mean) < 4 * dist.se / np.sqrt(1000)


class TestRegressionSlope:

    def test_slope_recovered_and_significant(self, housing):
        design = specify(housing, "price", explanatory="size")
        obs = calculate(design)
        assert obs == pytest.approx(0.9, abs=0.1)

        null = hypothesize(design, "independence")
        dist = calculate(generate(null, 1000, type="permutation", seed=7))
        p = get_p_value(dist, obs, "both")
        assert p.value < 0.01

    def test_bootstrap_slope_ci(self, housing):
        design = specify(housing, "price", explanatory="size")
        boot = calculate(generate(design, 1000, seed=8))
        ci = get_confidence_interval(boot, 0.95)
        assert ci.contains(calculate(design))
        assert 0.7 < ci.lower < ci.upper < 1.1
