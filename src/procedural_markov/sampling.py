"""Draw a next state from a transition distribution.

Both samplers take the random generator as an argument so the owning chain
controls seeding. The generator is a ``numpy.random.Generator``.
"""

from __future__ import annotations

from collections.abc import Hashable

import numpy as np

from procedural_markov.types import Distribution


def make_rng(
    random_state: int | np.random.Generator | None = None,
) -> np.random.Generator:
    """Build a random generator from a seed, an existing generator, or None.

    Examples
    --------
    >>> rng = make_rng(42)
    >>> make_rng(rng) is rng
    True
    """
    if isinstance(random_state, np.random.Generator):
        return random_state
    return np.random.default_rng(random_state)


def weighted_choice(distribution: Distribution, rng: np.random.Generator) -> Hashable:
    """Pick a state with probability proportional to its weight.

    Draws a roll uniformly from ``[0, total_weight)`` and walks the entries
    in insertion order, subtracting each weight until the roll falls inside
    the current entry. Entry ``i`` therefore owns the half-open slice
    ``[w_0 + ... + w_(i-1), w_0 + ... + w_i)``, so a zero-weight entry is
    never picked. Rounding can leave a residue after the last entry; the
    last entry is returned in that case.

    Parameters
    ----------
    distribution : dict
        Non-empty mapping of state -> non-negative weight.
    rng : np.random.Generator

    Returns
    -------
    state : Hashable
    """
    total_weight = sum(distribution.values())
    roll = rng.uniform(0.0, total_weight) if total_weight > 0 else 0.0
    state = None
    for state, weight in distribution.items():
        if roll < weight:
            return state
        roll -= weight
    return state


def unweighted_choice(distribution: Distribution, rng: np.random.Generator) -> Hashable:
    """Pick one of the distribution's states uniformly, ignoring weights."""
    states = list(distribution)
    return states[int(rng.integers(len(states)))]
