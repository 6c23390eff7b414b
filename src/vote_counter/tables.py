"""Contains RoundEngine_tables class which is added into RoundEngine.
"""

from typing import Dict, List

import decimal

import pandas as pd

import vote_counter.events as events
import vote_counter.util as util
from vote_counter.ballot import Ballot


class RoundEngine_tables:
    """Extra methods added into RoundEngine class"""

    def _ordered_candidate_names(self) -> List[str]:
        """
        Winners in order elected, then candidates still active at the end,
        followed by eliminated candidates in reverse order of elimination.
        """
        winners = self.get_winners()
        eliminated = self.get_eliminated()
        remaining = [cand for cand in self.get_candidates() if cand not in winners and cand not in eliminated]
        return winners + remaining + eliminated[::-1]

    def _initial_exhausted_weight(self) -> decimal.Decimal:
        first_round_total = sum(self.get_round_tally_dict(1).values(), decimal.Decimal(0))
        return decimal.Decimal(self.get_total_ballots()) - first_round_total

    def get_round_by_round_table(self) -> pd.DataFrame:
        """Create a table containing round by round details for the tabulation.

        One row per candidate plus 'exhaust' and 'colsum' rows. For each round there is a count
        column (totals at the start of the round, blank once a candidate is resolved) and a transfer
        column (votes moved at the end of the round).

        :return: round by round table
        :rtype: pd.DataFrame
        """
        row_names = self._ordered_candidate_names() + [Ballot.EXHAUSTED]
        rcv_df = pd.DataFrame({"candidate": row_names + ["colsum"]}, index=row_names + ["colsum"])

        exhausted = self._initial_exhausted_weight()

        for rnd in range(1, self.n_rounds() + 1):

            rnd_info = self.get_round_tally_dict(rnd)
            rnd_info[Ballot.EXHAUSTED] = exhausted

            rnd_transfer = self.get_round_transfer_dict(rnd)

            rnd_count_col = "r" + str(rnd) + "_count"
            rnd_transfer_col = "r" + str(rnd) + "_transfer"

            rcv_df[rnd_count_col] = [util.decimal2float(rnd_info.get(cand, util.NAN)) for cand in row_names] + [
                util.decimal2float(sum(rnd_info.values(), decimal.Decimal(0)))
            ]
            rcv_df[rnd_transfer_col] = [
                util.decimal2float(rnd_transfer.get(cand, util.NAN)) for cand in row_names
            ] + [util.decimal2float(sum(rnd_transfer.values(), decimal.Decimal(0)))]

            # maintain cumulative exhaust total
            exhausted += rnd_transfer.get(Ballot.EXHAUSTED, decimal.Decimal(0))

        # remove rownames
        rcv_df = rcv_df.reset_index(drop=True)
        return rcv_df

    def get_round_by_round_dict(self) -> Dict:
        """Create a dictionary containing election round by round information, nested the same way as
        the RCVIS upload format.

        :return: Dictionary containing election round by round details
        :rtype: Dict
        """
        json_dict = {
            "config": {
                "seats": self.get_seats(),
                "total_ballots": self.get_total_ballots(),
                "threshold": str(util.decimal2float(self.get_win_threshold())),
            },
            "results": [],
            "winners": self.get_winners(),
        }

        for round_num in range(1, self.n_rounds() + 1):

            tally_dict = {
                cand: str(util.decimal2float(tally)) for cand, tally in self.get_round_tally_dict(round_num).items()
            }

            # remove negative transfer
            round_transfer = {
                key: str(util.decimal2float(val)) for key, val in self.get_round_transfer_dict(round_num).items() if val > 0
            }
            if Ballot.EXHAUSTED in round_transfer:  # small rename
                round_transfer["exhausted"] = round_transfer[Ballot.EXHAUSTED]
                del round_transfer[Ballot.EXHAUSTED]

            transfer_list = []
            for event in self.get_round_events(round_num):
                if event["type"] == events.WINNER:
                    transfers = {} if event["last_round"] else round_transfer
                    transfer_list.append({"elected": event["candidate"], "transfers": transfers})
                elif event["type"] == events.ELIMINATED:
                    transfer_list.append({"eliminated": event["candidate"], "transfers": round_transfer})
                elif event["type"] == events.TIE_BREAK:
                    transfer_list.append({"tieBreak": event["candidates"], "resolvedBy": event["resolved_by"]})

            json_dict["results"].append(
                {
                    "round": round_num,
                    "tally": tally_dict,
                    "tallyResults": transfer_list,
                }
            )

        return json_dict

    def get_tie_break_tables(self) -> Dict[int, pd.DataFrame]:
        """
        Pairwise count tables for each tie break, keyed by the round the tie break happened in.
        Each cell counts the original ballots ranking the row-candidate over the column-candidate.
        Extra columns hold each candidate's win, magnitude and point totals where that step was reached.

        :rtype: Dict[int, pd.DataFrame]
        """
        tables = {}
        for tie_break in self.get_tie_breaks():
            df = tie_break["pairwise_counts"].copy()
            for key in ["win_totals", "magnitude_totals", "point_totals"]:
                totals = tie_break[key] or {}
                df[key] = [totals.get(cand, float("nan")) for cand in df.index]
            df["eliminated"] = [cand == tie_break["loser"] for cand in df.index]
            tables[tie_break["round"]] = df
        return tables

    def get_candidate_outcomes_table(self) -> pd.DataFrame:
        return pd.DataFrame(self.get_candidate_outcomes(), columns=["name", "round_elected", "round_eliminated"])
