"""Internal validation utilities for parameter checking.

Plain functions that raise package exceptions with structured messages.
They never mutate their arguments, so callers can run every check before
touching the model.
"""

import math
import numbers
from collections.abc import Hashable, Sequence, Set
from typing import Any

from procedural_markov.exceptions import ConfigurationError, InvalidInputError


def ensure_min_length(
    sequence: Sequence, name: str, minimum: int, hint: str | None = None
) -> None:
    """Verify a sequence holds at least ``minimum`` states.

    Parameters
    ----------
    sequence : Sequence
        Sequence to check
    name : str
        Name of the sequence for error messages
    minimum : int
        Smallest accepted length
    hint : str, optional
        Actionable suggestion appended to the error message

    Raises
    ------
    InvalidInputError
        If the sequence is shorter than ``minimum``

    Examples
    --------
    >>> ensure_min_length(["a", "b"], "sequence", 2)  # OK
    >>> ensure_min_length(["a"], "sequence", 2)  # Raises
    """
    if len(sequence) < minimum:
        raise InvalidInputError(
            f"{name} is too short",
            expected=f"at least {minimum} state(s)",
            got=f"{len(sequence)} state(s)",
            hint=hint,
        )


def ensure_hashable_states(sequence: Sequence, name: str) -> None:
    """Verify every state in a sequence can be used as a dictionary key.

    Raises
    ------
    InvalidInputError
        If any state is unhashable (e.g. a list or a dict)
    """
    for index, state in enumerate(sequence):
        if not isinstance(state, Hashable):
            raise InvalidInputError(
                f"{name} contains an unhashable state",
                expected="hashable states (str, int, tuple, frozen dataclass, ...)",
                got=f"{type(state).__name__} at index {index}",
                hint="Convert mutable states to immutable ones, e.g. tuple(state)",
            )


def ensure_known_states(sequence: Sequence, known_states: Set, name: str) -> None:
    """Verify every state in a sequence is in the known-state alphabet.

    Parameters
    ----------
    sequence : Sequence
        Query context to check
    known_states : Set
        States the chain has learned
    name : str
        Name of the sequence for error messages

    Raises
    ------
    InvalidInputError
        If any state has never been seen by the chain
    """
    unknown = [state for state in sequence if state not in known_states]
    if unknown:
        sample_str = ", ".join(repr(state) for state in unknown[:3])
        if len(unknown) > 3:
            sample_str += f", ... ({len(unknown) - 3} more)"
        raise InvalidInputError(
            f"{name} contains state(s) unknown to this model",
            expected="only states returned by all_known_states()",
            got=f"unknown state(s): {sample_str}",
            hint="Train the chain on sequences that include these states first",
        )


def ensure_positive_integer(value: Any, name: str) -> None:
    """Verify a configuration value is an integer >= 1.

    Raises
    ------
    ConfigurationError
        If ``value`` is not an ``int`` or is smaller than 1
    """
    if (
        isinstance(value, bool)
        or not isinstance(value, numbers.Integral)
        or value < 1
    ):
        raise ConfigurationError(
            f"{name} must be a positive integer, got {value!r}",
            hint=f"Use a value such as {name}=3",
        )


def ensure_non_negative_weight(value: Any, name: str) -> None:
    """Verify a weight is a finite real number >= 0.

    Examples
    --------
    >>> ensure_non_negative_weight(0.005, "prior_weight")  # OK
    >>> ensure_non_negative_weight(-1.0, "prior_weight")  # Raises
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(
            f"{name} must be a real number",
            expected="int or float",
            got=f"{type(value).__name__}",
        )
    if not math.isfinite(value) or value < 0:
        raise InvalidInputError(
            f"Invalid value for {name}",
            expected=f"finite {name} >= 0",
            got=f"{name} = {value}",
            hint="Transition weights are non-negative frequencies or priors",
        )
