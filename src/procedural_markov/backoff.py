"""Katz back-off lookup of the most specific known distribution."""

from __future__ import annotations

from collections.abc import Hashable, Sequence

from procedural_markov import _validation as val
from procedural_markov.exceptions import NoTransitionsAvailableError
from procedural_markov.model import TransitionModel
from procedural_markov.types import Distribution


def resolve_context(
    model: TransitionModel, context_sequence: Sequence[Hashable], max_order: int
) -> tuple:
    """Return the longest trailing slice of ``context_sequence`` stored in ``model``.

    Candidates are tried from order ``min(max_order, len(context_sequence))``
    down to 1.

    Raises
    ------
    InvalidInputError
        If ``context_sequence`` is empty or holds a state the model has
        never seen.
    NoTransitionsAvailableError
        If the final state is terminal, i.e. the length-1 context made of
        it has no outgoing transitions.
    """
    states = tuple(context_sequence)
    val.ensure_min_length(states, "context sequence", 1)
    val.ensure_hashable_states(states, "context sequence")
    val.ensure_known_states(states, model.known_states, "context sequence")

    last_state = states[-1:]
    if not model.has_transitions(last_state):
        raise NoTransitionsAvailableError(
            "No transitions are known from this state",
            state=states[-1],
            hint="The state was only observed at the end of training sequences",
        )

    for order in range(min(max_order, len(states)), 1, -1):
        candidate = states[-order:]
        if model.has_transitions(candidate):
            return candidate
    return last_state


def best_model(
    model: TransitionModel, context_sequence: Sequence[Hashable], max_order: int
) -> Distribution:
    """Return the distribution for the most specific known context.

    Prefers the longest matching history and degrades to shorter ones when
    a longer context was never observed.

    Examples
    --------
    >>> model = TransitionModel()
    >>> model.increment(("a",), "b")
    >>> model.increment(("x",), "a")
    >>> model.increment(("x", "a"), "c")
    >>> best_model(model, ["x", "a"], max_order=3)
    {'c': 1.0}
    >>> best_model(model, ["b", "x", "a"], max_order=3)
    {'c': 1.0}
    >>> best_model(model, ["a"], max_order=3)
    {'b': 1.0}
    """
    return model[resolve_context(model, context_sequence, max_order)]
