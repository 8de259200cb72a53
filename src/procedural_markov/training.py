"""Extract overlapping multi-order contexts from training sequences."""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Sequence
from logging import getLogger

from procedural_markov.model import TransitionModel
from procedural_markov.types import Context

logger = getLogger(__name__)


def iter_links(
    sequence: Sequence[Hashable], max_order: int
) -> Iterator[tuple[Context, Hashable]]:
    """Yield every ``(context, target)`` pair observed in ``sequence``.

    For each target position ``p`` (1..n-1) and each order ``o``
    (1..min(max_order, p)) the context is the ``o`` states immediately
    preceding position ``p``.

    Parameters
    ----------
    sequence : Sequence
        Ordered states. Sequences shorter than 2 yield nothing.
    max_order : int
        Longest context length to extract.

    Yields
    ------
    context : tuple
        The preceding states, oldest first.
    target : Hashable
        The state at position ``p``.

    Examples
    --------
    >>> list(iter_links("abc", max_order=2))
    [(('a',), 'b'), (('b',), 'c'), (('a', 'b'), 'c')]
    """
    states = tuple(sequence)
    for position in range(1, len(states)):
        target = states[position]
        for order in range(1, min(max_order, position) + 1):
            yield states[position - order : position], target


def train_sequence(
    model: TransitionModel, sequence: Sequence[Hashable], max_order: int
) -> int:
    """Add every link observed in ``sequence`` to ``model``.

    Each observation adds 1.0 to the weight of its ``context -> target``
    transition, so repeated observations accumulate.

    Returns
    -------
    n_links : int
        Number of weight increments applied.
    """
    model.add_states(sequence)
    n_links = 0
    for context, target in iter_links(sequence, max_order):
        logger.debug("implementing link: %r -> %r", context, target)
        model.increment(context, target)
        n_links += 1
    return n_links
