"""
pytest configuration and shared fixtures.
"""

import numpy as np
import pytest

from pyinfer.sample import Sample


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def marbles():
    """Bowl sample: 100 marbles, 36 red."""
    colors = ["red"] * 36 + ["white"] * 64
    return Sample.from_columns({"color": colors})


@pytest.fixture
def smoking():
    """Survey sample: smoking status by sex (60/40 group sizes)."""
    sex = ["female"] * 60 + ["male"] * 40
    smokes = (
        ["yes"] * 12 + ["no"] * 48
        + ["yes"] * 14 + ["no"] * 26
    )
    return Sample.from_columns({"smokes": smokes, "sex": sex})


@pytest.fixture
def salaries(rng):
    """Two leagues, 25 players each, same mean salary."""
    base = rng.normal(4.0, 1.0, 25)
    salary = np.concatenate([base, base[::-1]])
    league = ["AL"] * 25 + ["NL"] * 25
    return Sample.from_columns({"salary": salary, "league": league})


@pytest.fixture
def housing(rng):
    """Housing sample with price = 10 + 0.9 * size + small noise."""
    size = rng.uniform(0, 10, 80)
    price = 10.0 + 0.9 * size + rng.normal(0, 0.3, 80)
    return Sample.from_columns({"price": price, "size": size})
