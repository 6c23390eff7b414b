"""
Errors raised at the boundary of a run. Nothing inside the round loop raises for expected
conditions (exhausted ballots, ties), so these only ever surface before counting starts.
"""


class VoteCounterError(RuntimeError):
    """Base class for errors that abort a run before tabulation."""


class ConfigurationError(VoteCounterError):
    """Invalid run parameters, e.g. a seat count that is not an integer in [1, n_candidates]."""


class IngestionError(VoteCounterError):
    """Missing, unreadable or empty candidate or ballot source."""
