"""
Contains CondorcetTieBreak class
"""

from typing import Dict, List, Optional

import random

import pandas as pd

from vote_counter.ballot import Ballot


class CondorcetTieBreak:
    """
    Picks one candidate to eliminate from a set of candidates tied for last place.

    Cascade, each step only applied to those still tied after the previous one:

    1. head-to-head wins: fewest pairwise victories among the tied set
    2. margin: smallest sum of pairwise margins against the whole tied set
    3. points: smallest total of rank scores over all ballots
    4. random choice

    Only original ballots are used, so the outcome does not depend on transfers made in earlier
    rounds.
    """

    # resolved_by values
    WINS = "wins"
    MAGNITUDE = "magnitude"
    POINTS = "points"
    RANDOM = "random"

    def __init__(self, original_ballots: List[Ballot], rng: Optional[random.Random] = None) -> None:
        """Constructor

        :param original_ballots: Unmodified ballots as cast.
        :type original_ballots: List[Ballot]
        :param rng: Random source for the last resort. Defaults to an unseeded `random.Random`.
        :type rng: Optional[random.Random], optional
        """
        self._ballots = original_ballots
        self._rng = rng if rng is not None else random.Random()

    def pairwise_count_table(self, candidates: List[str]) -> pd.DataFrame:
        """
        Returns a table with the tied candidates as row and column indices. Each cell counts the
        ballots that rank the row-candidate over the column-candidate (including ballots that only
        rank the row-candidate). The diagonal is zero.

        :param candidates: Tied candidates.
        :type candidates: List[str]
        :rtype: pd.DataFrame
        """
        count_df = pd.DataFrame(0, index=candidates, columns=candidates, dtype=int)
        for runner in candidates:
            for opponent in candidates:
                count_df.loc[runner, opponent] = sum(1 for b in self._ballots if b.pairwise_beats(runner, opponent))
        return count_df

    @staticmethod
    def win_table(count_df: pd.DataFrame) -> pd.DataFrame:
        """1 where the row-candidate beats the column-candidate head to head, else 0."""
        return (count_df > count_df.T).astype(int)

    @staticmethod
    def magnitude_table(count_df: pd.DataFrame) -> pd.DataFrame:
        """Signed head to head margin of the row-candidate over the column-candidate."""
        return count_df - count_df.T

    def point_totals(self, candidates: List[str]) -> Dict[str, int]:
        return {cand: sum(b.rank_score(cand) for b in self._ballots) for cand in candidates}

    @staticmethod
    def _lowest(scores: Dict[str, int]) -> List[str]:
        min_score = min(scores.values())
        return [cand for cand, score in scores.items() if score == min_score]

    def break_tie(self, candidates: List[str]) -> Dict:
        """Run the cascade and return the loser along with every intermediate result.

        :param candidates: At least two tied candidates, in scan order.
        :type candidates: List[str]
        :raises ValueError: Raised if fewer than two candidates are passed.
        :return: Dictionary with keys 'candidates', 'loser', 'resolved_by', 'pairwise_counts',
            'win_totals', 'magnitude_totals', 'point_totals'. Totals only cover the candidates
            that reached that step, and are None for steps not reached.
        :rtype: Dict
        """
        candidates = list(candidates)
        if len(candidates) < 2:
            raise ValueError("tie break needs at least two candidates")

        result = {
            "candidates": candidates,
            "loser": None,
            "resolved_by": None,
            "pairwise_counts": None,
            "win_totals": None,
            "magnitude_totals": None,
            "point_totals": None,
        }

        count_df = self.pairwise_count_table(candidates)
        result["pairwise_counts"] = count_df

        win_totals = self.win_table(count_df).sum(axis=1)
        result["win_totals"] = {cand: int(win_totals[cand]) for cand in candidates}
        weakest = self._lowest(result["win_totals"])
        if len(weakest) == 1:
            result.update({"loser": weakest[0], "resolved_by": CondorcetTieBreak.WINS})
            return result

        magnitude_totals = self.magnitude_table(count_df).sum(axis=1)
        result["magnitude_totals"] = {cand: int(magnitude_totals[cand]) for cand in weakest}
        weakest = self._lowest(result["magnitude_totals"])
        if len(weakest) == 1:
            result.update({"loser": weakest[0], "resolved_by": CondorcetTieBreak.MAGNITUDE})
            return result

        result["point_totals"] = self.point_totals(weakest)
        weakest = self._lowest(result["point_totals"])
        if len(weakest) == 1:
            result.update({"loser": weakest[0], "resolved_by": CondorcetTieBreak.POINTS})
            return result

        result.update({"loser": self._rng.sample(weakest, 1)[0], "resolved_by": CondorcetTieBreak.RANDOM})
        return result
