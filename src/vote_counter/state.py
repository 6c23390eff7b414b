"""
Contains ElectionState class
"""

from typing import List, Optional

import decimal
import random

from vote_counter.ballot import Ballot
from vote_counter.errors import ConfigurationError
from vote_counter.tally import TallyState


class ElectionState:
    """Everything a single run mutates, passed explicitly to the engines that work on it.

    Working ballots are consumed by redistribution. Original ballots are separate copies that are
    never touched after construction and are only read by the tie-break.
    """

    @staticmethod
    def droop_quota(total_ballots: int, seats: int) -> decimal.Decimal:
        """Votes a candidate must strictly exceed to be elected: total_ballots / (seats + 1).

        :param total_ballots: Number of ballots cast.
        :type total_ballots: int
        :param seats: Number of seats to fill.
        :type seats: int
        :rtype: decimal.Decimal
        """
        return decimal.Decimal(total_ballots) / decimal.Decimal(seats + 1)

    def __init__(
        self,
        candidates: List[str],
        ranks: List[List[str]],
        seats: int,
        voters: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        """Constructor

        :param candidates: Unique candidate names in input order. This order decides scan order.
        :type candidates: List[str]
        :param ranks: One list of candidate names per ballot, first choice first. Names not in
            `candidates` are dropped.
        :type ranks: List[List[str]]
        :param seats: Number of winners.
        :type seats: int
        :param voters: Optional voter labels, index-matched to `ranks`.
        :type voters: Optional[List[str]], optional
        :param rng: Random source for the final tie-break fallback. Defaults to an unseeded
            `random.Random`.
        :type rng: Optional[random.Random], optional
        :raises ConfigurationError: Raised if `voters` and `ranks` differ in length.
        """
        if voters is None:
            voters = [""] * len(ranks)
        elif len(voters) != len(ranks):
            raise ConfigurationError(f"got {len(voters)} voter labels for {len(ranks)} ballots")

        self.candidates = list(candidates)
        self.seats = seats
        self.rng = rng if rng is not None else random.Random()

        candidate_set = set(self.candidates)
        cleaned_ranks = [[mark for mark in ballot_ranks if mark in candidate_set] for ballot_ranks in ranks]

        self.ballots = [Ballot(marks, voter=voter) for marks, voter in zip(cleaned_ranks, voters)]
        self.original_ballots = [Ballot(marks, voter=voter) for marks, voter in zip(cleaned_ranks, voters)]

        self.total_ballots = len(self.ballots)
        self.threshold = ElectionState.droop_quota(self.total_ballots, seats)

        self.tally = TallyState(self.candidates)
        self.round_num = 0
        self.winners = []
        self.eliminated = []

    def remaining_seats(self) -> int:
        return self.seats - len(self.winners)

    def is_complete(self) -> bool:
        return len(self.winners) == self.seats
