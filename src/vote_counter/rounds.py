"""
Contains the RoundEngine class.
Defines the class and adds in methods from tables.py.
"""

from typing import Callable, Dict, List, Optional

import decimal
import random

import vote_counter.events as events

from vote_counter.ballot import Ballot
from vote_counter.config import validate_candidates, validate_seats
from vote_counter.redistribution import redistribute
from vote_counter.state import ElectionState
from vote_counter.tables import RoundEngine_tables
from vote_counter.tiebreak import CondorcetTieBreak


class RoundEngine(RoundEngine_tables):
    """
    Multi winner ranked choice tabulation with fractional surplus transfer.

    - Win threshold is (# ballots)/(# of seats + 1), fixed before the first round. A candidate must
      strictly exceed it.
    - At most one winner per round: the first candidate over threshold, in candidate list order.
      The winner's ballots move on with their weight multiplied by (winner votes - threshold)/(# ballots).
    - In a no winner round, the candidate with least votes is eliminated and their ballots move on
      at full weight. Ties for least votes go to `CondorcetTieBreak`.
    - When the active candidates exactly fill the remaining seats, they are all elected.
    """

    def __init__(
        self,
        candidates: List[str],
        ranks: List[List[str]],
        seats,
        voters: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
        seed: Optional[int] = None,
        reporter: Optional[Callable[[int, Dict[str, decimal.Decimal], Dict], None]] = None,
    ) -> None:
        """
        Constructor. Validates the seat count, builds ballots and tallies, and tabulates the election.

        :param candidates: Unique candidate names. Their order is the scan order used every round.
        :type candidates: List[str]
        :param ranks: One list of candidate names per ballot, first choice first.
        :type ranks: List[List[str]]
        :param seats: Number of winners, int or numeric string.
        :param voters: Optional voter labels, index-matched to `ranks`, defaults to None
        :type voters: Optional[List[str]], optional
        :param rng: Random source for the final tie-break fallback, defaults to None
        :type rng: Optional[random.Random], optional
        :param seed: Seed for a new random source, ignored if `rng` is passed. Defaults to None
        :type seed: Optional[int], optional
        :param reporter: Called as reporter(round_num, tally, event) for every event, in order.
            `tally` is the snapshot taken at the start of the round (the remaining tally for the
            final winners event). Defaults to None
        :type reporter: Optional[Callable], optional
        :raises ConfigurationError: Raised if seats is not an integer in [1, len(candidates)],
            if candidate names repeat, or if `voters` and `ranks` differ in length.
        """
        candidates = validate_candidates(candidates)
        seats = validate_seats(seats, len(candidates))

        if rng is None:
            rng = random.Random(seed)

        self._state = ElectionState(candidates, ranks, seats, voters=voters, rng=rng)
        self._tie_break = CondorcetTieBreak(self._state.original_ballots, rng=rng)
        self._reporter = reporter

        self._rounds = []
        self._tie_breaks = []
        self._candidate_outcomes = {
            cand: {"name": cand, "round_elected": None, "round_eliminated": None} for cand in self._state.candidates
        }
        self._exhausted_weight = decimal.Decimal(0)
        self._retained_weight = {}
        self._final_tally = {}

        # RUN
        self._initial_tally()
        self._tabulate()

    def _emit(self, event: Dict, tally: Dict[str, decimal.Decimal]) -> None:
        if self._rounds:
            self._rounds[-1]["events"].append(event)
        if self._reporter is not None:
            self._reporter(self._state.round_num, tally, event)

    def _initial_tally(self) -> None:
        """
        Credit every ballot's first choice. Ballots with no valid marks exhaust immediately.
        """
        for b in self._state.ballots:
            b.reset_cursor()
            if b.is_exhausted():
                self._exhausted_weight += b.weight
            else:
                self._state.tally.credit(b.current_preference(), b.weight)

    def _tabulate(self) -> None:
        """
        Run the rounds of the contest.
        """
        while not self._state.is_complete():
            self._run_round()

        self._final_tally = self._state.tally.snapshot()
        self._emit(events.final_winners(self._state.winners), self._final_tally)

    def _new_round(self) -> Dict[str, decimal.Decimal]:
        self._state.round_num += 1
        round_tally = self._state.tally.snapshot()
        self._rounds.append({"round": self._state.round_num, "tally": round_tally, "events": [], "transfers": {}})
        return round_tally

    def _run_round(self) -> None:

        round_tally = self._new_round()
        state = self._state

        #############################################
        # REMAINING CANDIDATES FILL REMAINING SEATS
        if len(state.tally) == state.remaining_seats():
            for cand in state.tally.active_candidates():
                total = state.tally.remove(cand)
                self._elect(cand, total)
                self._emit(events.winner(cand, total, last_round=True), round_tally)
            return

        #############################################
        # CHECK FOR ROUND WINNER, TRACK ROUND LOSERS
        round_winner = None
        min_total = None
        round_losers = []
        for cand, total in state.tally.items():

            if total > state.threshold:
                round_winner = cand
                break

            if min_total is None or total < min_total:
                min_total = total
                round_losers = [cand]
            elif total == min_total:
                round_losers.append(cand)

        if round_winner is not None:
            total = state.tally[round_winner]
            surplus_fraction = (total - state.threshold) / decimal.Decimal(state.total_ballots)
            transfers = self._transfer(round_winner, surplus_fraction)
            state.tally.remove(round_winner)
            self._elect(round_winner, total + transfers[round_winner])
            self._emit(events.winner(round_winner, total), round_tally)
            return

        #############################################
        # IDENTIFY ROUND LOSER
        if len(round_losers) == 1:
            round_loser = round_losers[0]
        else:
            tie_break = self._tie_break.break_tie(round_losers)
            tie_break["round"] = state.round_num
            self._tie_breaks.append(tie_break)
            round_loser = tie_break["loser"]
            self._emit(events.tie_break(round_losers, round_loser, tie_break["resolved_by"]), round_tally)

        total = state.tally[round_loser]
        self._transfer(round_loser, decimal.Decimal(1))
        state.tally.remove(round_loser)
        state.eliminated.append(round_loser)
        self._candidate_outcomes[round_loser]["round_eliminated"] = state.round_num
        self._emit(events.eliminated(round_loser, total), round_tally)

    def _transfer(self, candidate: str, fraction: decimal.Decimal) -> Dict[str, decimal.Decimal]:
        transfers = redistribute(self._state, candidate, fraction)
        self._rounds[-1]["transfers"] = transfers
        self._exhausted_weight += transfers[Ballot.EXHAUSTED]
        return transfers

    def _elect(self, candidate: str, retained: decimal.Decimal) -> None:
        self._state.winners.append(candidate)
        self._retained_weight[candidate] = retained
        self._candidate_outcomes[candidate]["round_elected"] = self._state.round_num

    def get_winners(self) -> List[str]:
        """
        :return: Winners in the order they were elected.
        :rtype: List[str]
        """
        return list(self._state.winners)

    def get_eliminated(self) -> List[str]:
        """
        :return: Eliminated candidates in the order they were eliminated.
        :rtype: List[str]
        """
        return list(self._state.eliminated)

    def get_candidates(self) -> List[str]:
        return list(self._state.candidates)

    def get_seats(self) -> int:
        return self._state.seats

    def get_total_ballots(self) -> int:
        return self._state.total_ballots

    def get_win_threshold(self) -> decimal.Decimal:
        """Votes a candidate must strictly exceed to win.

        :rtype: decimal.Decimal
        """
        return self._state.threshold

    def n_rounds(self) -> int:
        return len(self._rounds)

    def get_round_tally_dict(self, round_num: int) -> Dict[str, decimal.Decimal]:
        """Return candidate totals at the start of a round. Only candidates active in that round are
        included, in candidate list order.

        :param round_num: Round number, starting at 1.
        :type round_num: int
        :rtype: Dict[str, decimal.Decimal]
        """
        return dict(self._rounds[round_num - 1]["tally"])

    def get_round_transfer_dict(self, round_num: int) -> Dict[str, decimal.Decimal]:
        """Return vote flows out of the candidate resolved in a round. Keys are all candidate names
        plus 'exhaust'. Empty if no votes moved, as in a round where all remaining candidates are
        elected.

        :param round_num: Round number, starting at 1.
        :type round_num: int
        :rtype: Dict[str, decimal.Decimal]
        """
        return dict(self._rounds[round_num - 1]["transfers"])

    def get_round_events(self, round_num: int) -> List[Dict]:
        return list(self._rounds[round_num - 1]["events"])

    def get_final_tally(self) -> Dict[str, decimal.Decimal]:
        """Totals of candidates still active (neither elected nor eliminated) when the count ended."""
        return dict(self._final_tally)

    def get_candidate_outcomes(self) -> List[Dict]:
        """Return a list of dictionaries with keys name, round_elected and round_eliminated. Round values
        are integers or None. Candidates left over when the seats are filled have None for both.

        :rtype: List[Dict]
        """
        return [dict(d) for d in self._candidate_outcomes.values()]

    def get_tie_breaks(self) -> List[Dict]:
        """Results of each tie break run, see `CondorcetTieBreak.break_tie`, with an added 'round' key."""
        return list(self._tie_breaks)

    def get_exhausted_weight(self) -> decimal.Decimal:
        """Ballot weight that no longer counts for anyone, including ballots with no valid marks."""
        return self._exhausted_weight

    def get_retained_weight(self) -> Dict[str, decimal.Decimal]:
        """Weight kept by each winner after any surplus transfer.

        :rtype: Dict[str, decimal.Decimal]
        """
        return dict(self._retained_weight)
