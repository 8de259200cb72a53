"""Type definitions for the procedural_markov package.

These aliases name the data structures shared by the model store, trainer,
back-off resolver and sampler.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TypeVar

State = TypeVar("State", bound=Hashable)
"""Type variable for a chain state.

Any hashable value with a consistent ``__eq__`` can be a state: characters,
words, integers, or frozen dataclasses describing richer tokens.
"""

Context = tuple[Hashable, ...]
"""Type alias for a context key.

An ordered tuple of 1..max_order states. Two contexts built from equal
states in the same order hash to the same key, whatever sequence type the
caller used to build them.
"""

Distribution = dict[Hashable, float]
"""Type alias for a transition distribution.

Maps each possible next state to its accumulated, unnormalized weight.
"""

Transitions = dict[Context, Distribution]
"""Type alias for the full transition table: context -> distribution."""
