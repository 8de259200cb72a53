"""Multi-order Markov chain for procedural generation.

`MultiOrderMarkovChain` learns which states follow which contexts (runs of
1..max_order preceding states) and samples plausible continuations using
Katz back-off: the longest context that was observed wins, shorter ones are
used when it was not.

Examples
--------
>>> chain = MultiOrderMarkovChain(random_state=0)
>>> chain.add_sequence(["one", "small", "step", "for", "man"])
>>> chain.add_sequence(["one", "giant", "leap", "for", "mankind"])
>>> sorted(chain.all_possible_next(["one"]))
['giant', 'small']
>>> chain.all_possible_next(["mankind"])
set()
"""

from __future__ import annotations

import pickle
from collections.abc import Hashable, Iterable, Sequence
from logging import getLogger

import numpy as np

from procedural_markov import _validation as val
from procedural_markov import backoff, priors
from procedural_markov.exceptions import (
    InvalidInputError,
    NoTransitionsAvailableError,
)
from procedural_markov.model import TransitionModel
from procedural_markov.sampling import make_rng, unweighted_choice, weighted_choice
from procedural_markov.training import train_sequence
from procedural_markov.types import Distribution

logger = getLogger(__name__)

DEFAULT_MAX_ORDER = 3
DEFAULT_PRIOR = 0.005
DEFAULT_WEAK_LINK_THRESHOLD = 1.0


class MultiOrderMarkovChain:
    """Weighted transition model over contexts of up to ``max_order`` states.

    Parameters
    ----------
    max_order : int, optional
        Longest context the chain learns and queries, by default 3.
    random_state : int or np.random.Generator, optional
        Seed or generator used by the samplers. By default a fresh,
        unseeded generator.

    Attributes
    ----------
    model : TransitionModel
        Context -> {next state: weight} table plus the known-state alphabet.
    num_trained_sequences : int
        Number of sequences successfully ingested by `add_sequence`.
    random : np.random.Generator
        Random source used by the samplers.

    Notes
    -----
    Instances are not thread-safe. Callers sharing one chain between
    threads must serialize access themselves.
    """

    def __init__(
        self,
        max_order: int = DEFAULT_MAX_ORDER,
        random_state: int | np.random.Generator | None = None,
    ) -> None:
        val.ensure_positive_integer(max_order, "max_order")
        self._max_order = int(max_order)
        self.model = TransitionModel()
        self.num_trained_sequences = 0
        self.random = make_rng(random_state)

    # --- Configuration ---

    @property
    def max_order(self) -> int:
        return self._max_order

    @max_order.setter
    def max_order(self, value: int) -> None:
        val.ensure_positive_integer(value, "max_order")
        self._max_order = int(value)

    def get_max_order(self) -> int:
        return self.max_order

    def set_max_order(self, max_order: int) -> None:
        """Change the longest context used by later training and queries.

        Contexts already learned are kept as they are.
        """
        self.max_order = max_order

    def with_max_order(self, max_order: int) -> MultiOrderMarkovChain:
        """Set ``max_order`` and return the chain, for fluent construction."""
        self.set_max_order(max_order)
        return self

    def set_random(self, random: np.random.Generator) -> None:
        """Replace the random generator used by the samplers."""
        if not isinstance(random, np.random.Generator):
            raise TypeError(
                f"random must be a numpy.random.Generator, got {type(random).__name__}"
            )
        self.random = random

    def seed(self, seed: int) -> None:
        """Reseed the samplers with a fresh generator."""
        self.random = np.random.default_rng(seed)

    # --- Training ---

    def add_sequence(self, sequence: Sequence[Hashable]) -> None:
        """Learn every context -> next-state link observed in ``sequence``.

        Parameters
        ----------
        sequence : Sequence
            At least two hashable states.

        Raises
        ------
        InvalidInputError
            If the sequence holds fewer than two states or an unhashable
            state. Nothing is recorded in that case, not even known states.
        """
        states = tuple(sequence)
        val.ensure_hashable_states(states, "training sequence")
        val.ensure_min_length(
            states,
            "training sequence",
            2,
            hint="A transition needs a preceding state and a following state",
        )

        train_sequence(self.model, states, self._max_order)
        self.num_trained_sequences += 1

    def train(self, sequences: Iterable[Sequence[Hashable]]) -> None:
        """Learn from a (possibly lazy) iterable of sequences.

        Sequences with fewer than two states are skipped without error.
        """
        n_trained = 0
        n_skipped = 0
        for sequence in sequences:
            states = tuple(sequence)
            if len(states) < 2:
                logger.debug("skipping short training sequence: %r", states)
                n_skipped += 1
                continue
            self.add_sequence(states)
            n_trained += 1
        logger.info(
            "Trained on %d sequence(s), skipped %d short sequence(s)",
            n_trained,
            n_skipped,
        )

    def and_train(
        self, sequences: Iterable[Sequence[Hashable]]
    ) -> MultiOrderMarkovChain:
        """Train on ``sequences`` and return the chain, for fluent construction."""
        self.train(sequences)
        return self

    def specify_link(
        self, context: Sequence[Hashable], target: Hashable, weight: float
    ) -> None:
        """Set the distribution for ``context`` to exactly ``{target: weight}``.

        Unlike training, this overwrites: every other transition previously
        stored for this exact context is discarded.

        Raises
        ------
        InvalidInputError
            If ``context`` is empty, longer than ``max_order``, or holds an
            unhashable state, or if ``weight`` is negative.
        """
        context = tuple(context)
        val.ensure_min_length(context, "context", 1)
        val.ensure_hashable_states((*context, target), "link")
        val.ensure_non_negative_weight(weight, "weight")
        if len(context) > self._max_order:
            raise InvalidInputError(
                "context is longer than max_order",
                expected=f"at most {self._max_order} state(s)",
                got=f"{len(context)} state(s)",
                hint="Raise max_order before specifying longer contexts",
            )
        self.model.replace(context, {target: weight})

    # --- Queries ---

    def has_model(self) -> bool:
        """True once at least one transition is known."""
        return bool(self.model)

    def get_model(self) -> TransitionModel:
        return self.model

    def get_num_trained_sequences(self) -> int:
        return self.num_trained_sequences

    def all_known_states(self) -> set[Hashable]:
        """Return a copy of every state seen in training or specification."""
        return set(self.model.known_states)

    def _resolve(self, context_sequence: Sequence[Hashable]) -> Distribution:
        return backoff.best_model(self.model, context_sequence, self._max_order)

    def best_model(self, context_sequence: Sequence[Hashable]) -> Distribution:
        """Return a copy of the most specific distribution for ``context_sequence``.

        Raises
        ------
        InvalidInputError
            If the context is empty or holds unknown states.
        NoTransitionsAvailableError
            If the last state of the context is terminal.
        """
        return dict(self._resolve(context_sequence))

    def all_possible_next(
        self, context_sequence: Sequence[Hashable]
    ) -> set[Hashable]:
        """Return every state that may follow ``context_sequence``.

        A terminal final state gives an empty set rather than an error.

        Raises
        ------
        InvalidInputError
            If the context is empty or holds unknown states.
        """
        try:
            distribution = self._resolve(context_sequence)
        except NoTransitionsAvailableError:
            return set()
        return set(distribution)

    def weighted_random_next(self, context_sequence: Sequence[Hashable]) -> Hashable:
        """Draw a next state with probability proportional to its weight.

        Raises
        ------
        InvalidInputError
            If the context is empty or holds unknown states.
        NoTransitionsAvailableError
            If the last state of the context is terminal.
        """
        distribution = self._resolve(context_sequence)
        return weighted_choice(distribution, self.random)

    def unweighted_random_next(self, context_sequence: Sequence[Hashable]) -> Hashable:
        """Draw a next state uniformly among the possible ones, ignoring weights.

        Raises
        ------
        InvalidInputError
            If the context is empty or holds unknown states.
        NoTransitionsAvailableError
            If the last state of the context is terminal.
        """
        distribution = self._resolve(context_sequence)
        return unweighted_choice(distribution, self.random)

    # --- Smoothing ---

    def add_priors(self, prior_weight: float = DEFAULT_PRIOR) -> None:
        """Give unobserved links from every known context a small weight.

        Terminal states still get no context entry, so sampling from them
        keeps raising `NoTransitionsAvailableError`.
        """
        val.ensure_non_negative_weight(prior_weight, "prior_weight")
        n_added = priors.add_priors(self.model, float(prior_weight))
        logger.info("Added %d prior link(s) with weight %g", n_added, prior_weight)

    def remove_weak_links(
        self, threshold: float = DEFAULT_WEAK_LINK_THRESHOLD
    ) -> None:
        """Remove every link whose weight is below ``threshold``.

        With the default threshold of 1.0 this undoes `add_priors` for any
        prior weight below 1.0, since trained links always weigh at least 1.0.
        """
        val.ensure_non_negative_weight(threshold, "threshold")
        n_removed = priors.remove_weak_links(self.model, float(threshold))
        logger.info("Removed %d link(s) weaker than %g", n_removed, threshold)

    # --- Persistence ---

    def save(self, filename: str = "markov_chain.pkl") -> None:
        """Save the chain, including its random generator, with pickle.

        Parameters
        ----------
        filename : str, optional
            Destination path, by default "markov_chain.pkl".
        """
        with open(filename, "wb") as fh:
            pickle.dump(self, fh, protocol=pickle.HIGHEST_PROTOCOL)
        logger.info("Markov chain saved to %s", filename)

    @classmethod
    def load(cls, filename: str) -> MultiOrderMarkovChain:
        """Load a chain written by `save`.

        Raises
        ------
        TypeError
            If the file does not hold a `MultiOrderMarkovChain`.
        """
        with open(filename, "rb") as fh:
            chain = pickle.load(fh)
        if not isinstance(chain, cls):
            raise TypeError(f"Loaded object is not type {cls.__name__}")
        logger.info("Markov chain loaded from %s", filename)
        return chain

    def __eq__(self, other: object) -> bool:
        """Chains are equal when model, known states, max order and trained
        sequence count match. The random generator is not compared."""
        if other.__class__ is not self.__class__:
            return NotImplemented
        assert isinstance(other, MultiOrderMarkovChain)
        return (
            self.model == other.model
            and self._max_order == other._max_order
            and self.num_trained_sequences == other.num_trained_sequences
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(max_order={self._max_order}, "
            f"n_contexts={len(self.model)}, "
            f"n_known_states={len(self.model.known_states)}, "
            f"num_trained_sequences={self.num_trained_sequences})"
        )
