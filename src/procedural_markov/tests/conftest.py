"""Shared test fixtures for procedural_markov tests.

This module provides:
1. Chain fixtures in the untrained and trained states
2. A composite, hashable state type for non-primitive chains
3. Assertion helpers for comparing transition tables
"""

from dataclasses import dataclass

import numpy as np
import pytest

from procedural_markov import MultiOrderMarkovChain


# ==============================================================================
# CHAIN FIXTURES
# ==============================================================================


@pytest.fixture
def rng():
    """Seeded generator so sampling tests are reproducible."""
    return np.random.default_rng(42)


@pytest.fixture
def untrained_chain():
    """Chain with default settings and no training."""
    return MultiOrderMarkovChain(random_state=0)


@pytest.fixture
def alphabet_chain():
    """Chain trained once on A B C D E with max_order=3."""
    chain = MultiOrderMarkovChain(max_order=3, random_state=0)
    chain.add_sequence(["A", "B", "C", "D", "E"])
    return chain


@pytest.fixture
def moon_chain():
    """Chain trained on two sentences sharing 'one' and 'for'."""
    chain = MultiOrderMarkovChain(random_state=0)
    chain.add_sequence(["one", "small", "step", "for", "man"])
    chain.add_sequence(["one", "giant", "leap", "for", "mankind"])
    return chain


# ==============================================================================
# COMPOSITE STATES
# ==============================================================================


@dataclass(frozen=True)
class WeatherPattern:
    condition: str
    temperature: int
    wind_direction: str


@pytest.fixture
def weather():
    return {
        "sunny": WeatherPattern("sunny", 75, "W"),
        "cloudy": WeatherPattern("cloudy", 55, "N"),
        "partly_cloudy": WeatherPattern("partly cloudy", 65, "S"),
        "stormy": WeatherPattern("stormy", 50, "E"),
    }


# ==============================================================================
# ASSERTION HELPERS
# ==============================================================================


def snapshot_transitions(chain):
    """Deep copy of a chain's transition table for before/after comparisons."""
    return {
        context: dict(distribution)
        for context, distribution in chain.model.transitions.items()
    }
