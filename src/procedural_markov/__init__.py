from procedural_markov.chain import (  # noqa
    DEFAULT_MAX_ORDER,
    DEFAULT_PRIOR,
    DEFAULT_WEAK_LINK_THRESHOLD,
    MultiOrderMarkovChain,
)
from procedural_markov.exceptions import (  # noqa
    ConfigurationError,
    InvalidInputError,
    MarkovChainError,
    NoTransitionsAvailableError,
)
from procedural_markov.model import TransitionModel  # noqa

from ._version import __version__  # noqa
