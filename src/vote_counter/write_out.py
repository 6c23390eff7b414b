"""
Console reporting of round events and writers for round by round results.
"""

from typing import Dict, Union

import decimal
import json
import pathlib
import sys

import vote_counter.events as events
import vote_counter.util as util


class ConsoleReporter:
    """Prints each round's vote counts and outcome as the count runs.

    Pass an instance as the `reporter` argument of `RoundEngine`.
    """

    def __init__(self, stream=None) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self._last_round = None

    def _print(self, line: str = "") -> None:
        print(line, file=self.stream)

    def __call__(self, round_num: int, tally: Dict[str, decimal.Decimal], event: Dict) -> None:

        if event["type"] == events.FINAL_WINNERS:
            self._print()
            self._print("Winners:")
            self._print(", ".join(event["winners"]))
            return

        if round_num != self._last_round:
            self._last_round = round_num
            self._print()
            self._print(f"Round {round_num} vote counts:")
            self._print(" | ".join(f"{cand}: {util.decimal2float(total)}" for cand, total in tally.items()))

        if event["type"] == events.WINNER:
            if event["last_round"]:
                self._print(f"{event['candidate']} has won in the last round.")
            else:
                self._print(f"{event['candidate']} has won with {util.decimal2float(event['total'])} votes.")
        elif event["type"] == events.TIE_BREAK:
            self._print(f"Breaking last place tie between: {', '.join(event['candidates'])}")
            self._print(f"{event['loser']} loses the tie break on {event['resolved_by']}.")
        elif event["type"] == events.ELIMINATED:
            self._print(f"{event['candidate']} has been eliminated with {util.decimal2float(event['total'])} votes.")


def write_round_by_round_table(engine, save_dir: Union[str, pathlib.Path], uid: str = "election") -> pathlib.Path:
    """Wrapper for `RoundEngine.get_round_by_round_table` that writes out the table to path
    '{save_dir}/round_by_round_table/{uid}.csv'

    :param engine: Tabulated RoundEngine object
    :param save_dir: Directory path to write tables to
    :type save_dir: Union[str, pathlib.Path]
    :param uid: File name stem, defaults to "election"
    :type uid: str, optional
    :return: Path of the written file
    :rtype: pathlib.Path
    """
    save_path = pathlib.Path(save_dir) / "round_by_round_table"
    util.verifyDir(save_path)

    outfile = save_path / f"{uid}.csv"
    engine.get_round_by_round_table().to_csv(outfile, index=False)
    return outfile


def write_round_by_round_json(engine, save_dir: Union[str, pathlib.Path], uid: str = "election") -> pathlib.Path:
    """
    Wrapper for `RoundEngine.get_round_by_round_dict` that writes out the dictionary to path
    '{save_dir}/round_by_round_json/{uid}.json'

    :param engine: Tabulated RoundEngine object
    :param save_dir: Directory path to write to
    :type save_dir: Union[str, pathlib.Path]
    :param uid: File name stem, defaults to "election"
    :type uid: str, optional
    :return: Path of the written file
    :rtype: pathlib.Path
    """
    save_path = pathlib.Path(save_dir) / "round_by_round_json"
    util.verifyDir(save_path)

    outfile = save_path / f"{uid}.json"
    with open(outfile, "w") as json_file:
        json.dump(engine.get_round_by_round_dict(), json_file, indent=2)
    return outfile


def write_tie_break_tables(engine, save_dir: Union[str, pathlib.Path], uid: str = "election") -> None:
    """Writes one csv per tie break to '{save_dir}/tie_break_tables/{uid}_round{round_num}.csv'.
    Nothing is written if the count had no tie breaks.
    """
    tables = engine.get_tie_break_tables()
    if not tables:
        return

    save_path = pathlib.Path(save_dir) / "tie_break_tables"
    util.verifyDir(save_path)

    for round_num, df in tables.items():
        df.to_csv(save_path / f"{uid}_round{round_num}.csv")


def write_candidate_outcomes(engine, save_dir: Union[str, pathlib.Path], uid: str = "election") -> None:
    save_path = pathlib.Path(save_dir) / "candidate_outcomes"
    util.verifyDir(save_path)
    engine.get_candidate_outcomes_table().to_csv(save_path / f"{uid}.csv", index=False)
