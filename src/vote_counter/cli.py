"""
Module that contains the command line app.

Why does this file exist, and why not put this in __main__?

  You might be tempted to import things from __main__ later, but that will cause
  problems: the code will get executed twice:

  - When you run `python -mvote_counter` python will execute
    ``__main__.py`` as a script. That means there won't be any
    ``vote_counter.__main__`` in ``sys.modules``.
  - When you import __main__ it will get executed again (as a module) because
    there's no ``vote_counter.__main__`` in ``sys.modules``.
"""
import argparse
import os
import pathlib
import sys

import vote_counter.batch as batch
import vote_counter.write_out as write_out

from vote_counter.config import validate_seats
from vote_counter.errors import VoteCounterError
from vote_counter.parsers import read_ballots, read_candidates
from vote_counter.rounds import RoundEngine


def _build_parser():

    p = argparse.ArgumentParser(
        description="Count a multi winner ranked choice election. Surplus votes of winners are transferred "
        "fractionally, ties for last place are broken with a condorcet comparison."
    )

    p.add_argument("candidates", nargs="?", help="Path to a file listing one candidate per line.")
    p.add_argument(
        "ballots", nargs="?", help="Path to the ballot csv. Header row, then one ballot per row: voter, choice1, choice2, ..."
    )
    p.add_argument("seats", nargs="?", help="Number of winners, between 1 and the number of candidates.")
    p.add_argument("--seed", type=int, default=None, help="Seed for the random last resort of the tie break.")
    p.add_argument("--output-dir", default=None, help="If given, round by round results are written to this directory.")
    p.add_argument("--quiet", action="store_true", help="Only print the winners.")
    p.add_argument(
        "--contest-set",
        default=None,
        help="Path to a directory containing contest_set.csv and run_config.json. Counts every contest listed.",
    )
    p.add_argument(
        "--fresh", action="store_true", help="With --contest-set, delete an existing results/ directory first."
    )
    return p


def _run_single(args) -> int:

    candidates = read_candidates(args.candidates)
    ballot_dict = read_ballots(args.ballots, candidates=candidates)
    seats = validate_seats(args.seats, len(candidates))

    reporter = None if args.quiet else write_out.ConsoleReporter()
    engine = RoundEngine(
        candidates, ballot_dict["ranks"], seats, voters=ballot_dict["voter"], seed=args.seed, reporter=reporter
    )

    if args.quiet:
        print(", ".join(engine.get_winners()))

    if args.output_dir:
        output_dir = pathlib.Path(args.output_dir)
        uid = pathlib.Path(args.ballots).stem
        write_out.write_round_by_round_table(engine, output_dir, uid=uid)
        write_out.write_round_by_round_json(engine, output_dir, uid=uid)
        write_out.write_tie_break_tables(engine, output_dir, uid=uid)
        write_out.write_candidate_outcomes(engine, output_dir, uid=uid)

    return 0


def main(argv=None) -> int:

    # argument parse and valid
    p = _build_parser()
    args = p.parse_args(argv)

    try:
        if args.contest_set:
            contest_set_path = args.contest_set
            if not os.path.isdir(contest_set_path):
                raise VoteCounterError(f"invalid path [contest_set]: {contest_set_path}")
            output_path = args.output_dir if args.output_dir else contest_set_path
            batch.analyze_election_set(contest_set_path, output_path, fresh_output=args.fresh)
            return 0

        if args.candidates is None or args.ballots is None or args.seats is None:
            p.error("candidates, ballots and seats are required unless --contest-set is given")

        return _run_single(args)

    except VoteCounterError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
