"""Custom exceptions for procedural_markov.

Every error the chain raises tells the caller what was wrong with the
request and, where possible, how to fix it.

Usage Guidelines
----------------
- **InvalidInputError**: the caller passed something the chain cannot use:
  a training sequence with fewer than two states, an unhashable state, a
  negative weight, or a query context containing a state the chain has
  never seen.

- **NoTransitionsAvailableError**: the query was well formed but its final
  state is *terminal*. It was only ever observed at the end of training
  sequences, so the chain knows no state that can follow it.

- **ConfigurationError**: a configuration value such as ``max_order`` is
  out of range.

All exceptions inherit from **MarkovChainError**, so any package-specific
error can be caught with a single except clause.

Examples
--------
>>> from procedural_markov.exceptions import InvalidInputError
>>> try:
...     raise InvalidInputError(
...         "Training sequence is too short",
...         expected="at least 2 states",
...         got="1 state(s)",
...     )
... except InvalidInputError as e:
...     print(e)
Training sequence is too short
<BLANKLINE>
Expected: at least 2 states
Got: 1 state(s)
"""


class MarkovChainError(Exception):
    """Base exception for all procedural_markov errors."""

    pass


class InvalidInputError(MarkovChainError):
    """Raised when a sequence, state or weight passed by the caller is invalid.

    Parameters
    ----------
    message : str
        Description of what went wrong
    expected : str, optional
        What was expected
    got : str, optional
        What was actually received
    hint : str, optional
        Actionable suggestion for fixing the error
    example : str, optional
        Code snippet showing correct usage
    """

    def __init__(
        self,
        message: str,
        expected: str | None = None,
        got: str | None = None,
        hint: str | None = None,
        example: str | None = None,
    ):
        parts = [message]

        if expected is not None:
            parts.append(f"\nExpected: {expected}")

        if got is not None:
            parts.append(f"Got: {got}")

        if hint is not None:
            parts.append(f"\nHint: {hint}")

        if example is not None:
            parts.append(f"\nExample:\n{example}")

        super().__init__("\n".join(parts))


class NoTransitionsAvailableError(MarkovChainError):
    """Raised when a query context ends in a terminal state.

    Parameters
    ----------
    message : str
        Description of the failed query
    state : object, optional
        The terminal state that has no outgoing transitions
    hint : str, optional
        Actionable suggestion for the caller

    Examples
    --------
    >>> raise NoTransitionsAvailableError(
    ...     "No transitions are known from this state",
    ...     state="mankind",
    ...     hint="Use all_possible_next() to test for terminal states before sampling",
    ... )
    """

    def __init__(
        self, message: str, state: object = None, hint: str | None = None
    ) -> None:
        self.state = state
        if state is not None:
            message = f"{message} (state: {state!r})"
        if hint is not None:
            message = f"{message}\n\nHint: {hint}"
        super().__init__(message)


class ConfigurationError(MarkovChainError):
    """Raised when a configuration value is invalid.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    hint : str, optional
        Actionable suggestion for fixing the configuration
    """

    def __init__(self, message: str, hint: str | None = None) -> None:
        if hint is not None:
            message = f"{message}\n\nHint: {hint}"
        super().__init__(message)
