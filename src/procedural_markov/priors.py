"""Inject and prune small prior weights for smoothing.

A prior gives every known state a small chance of following every context
that already has observed transitions, so generation can leave the paths
seen during training. Pruning with a threshold above the prior but at or
below 1.0 (the smallest trained increment) removes the priors again.
"""

from __future__ import annotations

from procedural_markov.model import TransitionModel


def add_priors(model: TransitionModel, prior_weight: float) -> int:
    """Give every unobserved ``context -> state`` link a weight of ``prior_weight``.

    Only contexts with at least one transition receive priors. Terminal
    states never gain a context entry, and contexts emptied by pruning stay
    empty. Existing weights are left untouched, so calling this twice with
    the same known states changes nothing.

    Returns
    -------
    n_added : int
        Number of links created.
    """
    n_added = 0
    for distribution in model.transitions.values():
        if not distribution:
            continue
        for state in model.known_states:
            if state not in distribution:
                distribution[state] = prior_weight
                n_added += 1
    return n_added


def remove_weak_links(model: TransitionModel, threshold: float) -> int:
    """Delete every link whose weight is strictly less than ``threshold``.

    A context left without any transition keeps its key with an empty
    distribution. Back-off treats it like a terminal context.

    Returns
    -------
    n_removed : int
        Number of links deleted.
    """
    n_removed = 0
    for context in model.contexts():
        distribution = model[context]
        weak = [state for state, weight in distribution.items() if weight < threshold]
        for state in weak:
            del distribution[state]
        n_removed += len(weak)
    return n_removed
