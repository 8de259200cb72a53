"""The transition store behind a multi-order Markov chain.

`TransitionModel` owns two structures:

* ``transitions``: context tuple -> {next state: accumulated weight}
* ``known_states``: every state ever seen, the chain's "alphabet"

Every state that appears in a context or as a target is also a member of
``known_states``, and ``known_states`` only ever grows.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator

from procedural_markov.types import Context, Distribution, Transitions


class TransitionModel:
    """Mapping from contexts to weighted next-state distributions.

    Examples
    --------
    >>> model = TransitionModel()
    >>> model.increment(("a",), "b")
    >>> model.increment(("a",), "b")
    >>> model[("a",)]
    {'b': 2.0}
    >>> sorted(model.known_states)
    ['a', 'b']
    """

    def __init__(self) -> None:
        self.transitions: Transitions = {}
        self.known_states: set[Hashable] = set()

    def add_states(self, states: Iterable[Hashable]) -> None:
        """Add states to the known-state alphabet."""
        self.known_states.update(states)

    def increment(
        self, context: Context, target: Hashable, amount: float = 1.0
    ) -> None:
        """Add ``amount`` to the weight of ``context -> target``.

        Creates the context entry and the target entry when absent.
        """
        self.known_states.update(context)
        self.known_states.add(target)
        distribution = self.transitions.setdefault(context, {})
        distribution[target] = distribution.get(target, 0.0) + amount

    def replace(self, context: Context, distribution: Distribution) -> None:
        """Overwrite the whole distribution for ``context``.

        Any transitions previously stored for this exact context are dropped.
        """
        self.known_states.update(context)
        self.known_states.update(distribution)
        self.transitions[context] = {
            state: float(weight) for state, weight in distribution.items()
        }

    def distribution(self, context: Context) -> Distribution | None:
        """Return the stored distribution for ``context``, or None."""
        return self.transitions.get(context)

    def has_transitions(self, context: Context) -> bool:
        """True if ``context`` is a key with at least one outgoing transition."""
        return bool(self.transitions.get(context))

    def contexts(self) -> list[Context]:
        return list(self.transitions)

    @property
    def max_context_length(self) -> int:
        """Length of the longest stored context, 0 when empty."""
        return max((len(context) for context in self.transitions), default=0)

    def __getitem__(self, context: Context) -> Distribution:
        return self.transitions[context]

    def __contains__(self, context: object) -> bool:
        return context in self.transitions

    def __iter__(self) -> Iterator[Context]:
        return iter(self.transitions)

    def __len__(self) -> int:
        return len(self.transitions)

    def __bool__(self) -> bool:
        return bool(self.transitions)

    def __eq__(self, other: object) -> bool:
        """Two models are equal when transitions and known states match."""
        if other.__class__ is not self.__class__:
            return NotImplemented
        assert isinstance(other, TransitionModel)
        return (self.transitions, self.known_states) == (
            other.transitions,
            other.known_states,
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(n_contexts={len(self.transitions)}, "
            f"n_known_states={len(self.known_states)})"
        )
