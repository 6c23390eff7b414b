"""
Contains functions used to count a batch of elections.
"""

from typing import Dict, List, Tuple

import datetime
import os
import pathlib
import shutil

import pandas as pd
import tqdm

import vote_counter
import vote_counter.util as util
import vote_counter.write_out as write_out

from vote_counter.config import cast_dict, load_settings, read_run_config
from vote_counter.errors import ConfigurationError
from vote_counter.parsers import read_ballots, read_candidates
from vote_counter.rounds import RoundEngine


def _read_contest_set(contest_set_path) -> Tuple[List[Dict], Dict]:
    """Read contest_set.csv and run_config.json from a contest set directory.

    Candidate and ballot paths in contest_set.csv are relative to the contest set directory
    unless absolute.
    """
    contest_set_path = pathlib.Path(contest_set_path)

    contest_set_settings = load_settings("contest_set_settings")

    run_config_fpath = contest_set_path / "run_config.json"
    run_config = read_run_config(run_config_fpath)

    # read contest_set.csv
    contest_set_fpath = contest_set_path / "contest_set.csv"
    if os.path.isfile(contest_set_fpath) is False:
        raise ConfigurationError(f"not a valid file path: {contest_set_fpath}")

    contest_set_df = pd.read_csv(contest_set_fpath, dtype=object)

    # add in default values for missing columns
    for setting in contest_set_settings:
        if setting not in contest_set_df.columns:
            contest_set_df[setting] = contest_set_settings[setting]["default"]

    # fill in na values with defaults and evaluate column
    for col in contest_set_df:

        if col not in contest_set_settings:
            print(f'info -- "{col}" is an unrecognized column in contest_set.csv, it will be ignored.')
        else:
            default = contest_set_settings[col]["default"]
            contest_set_df[col] = [
                cast_dict[contest_set_settings[col]["type"]](default if pd.isna(i) else i)
                for i in contest_set_df[col].tolist()
            ]

    # convert df to listOdicts, one dict per row
    contests = contest_set_df.to_dict("records")

    valid_contests = []
    for idx, contest in enumerate(contests, start=1):

        if not contest["name"]:
            contest["name"] = f"contest{idx}"

        if contest["ignore_contest"]:
            print(f'ignoring contest: {contest["name"]}')
            continue

        for path_field in ["candidates_path", "ballots_path"]:
            contest[path_field] = contest_set_path / contest[path_field]

        valid_contests.append({k: v for k, v in contest.items() if k in contest_set_settings})

    # store file locations
    run_config["contest_set_file_path"] = contest_set_fpath
    run_config["run_config_file_path"] = run_config_fpath

    return valid_contests, run_config


def _count_contest(contest: Dict) -> RoundEngine:
    candidates = read_candidates(contest["candidates_path"])
    ballot_dict = read_ballots(contest["ballots_path"], candidates=candidates)
    return RoundEngine(
        candidates,
        ballot_dict["ranks"],
        contest["seats"],
        voters=ballot_dict["voter"],
        seed=contest["seed"],
    )


def _write_contest_results(engine: RoundEngine, contest: Dict, output_config: Dict, results_dir: pathlib.Path) -> None:

    uid = contest["name"]

    if output_config.get("round_by_round_table"):
        write_out.write_round_by_round_table(engine, results_dir, uid=uid)

    if output_config.get("round_by_round_json"):
        write_out.write_round_by_round_json(engine, results_dir, uid=uid)

    if output_config.get("tie_break_tables"):
        write_out.write_tie_break_tables(engine, results_dir, uid=uid)

    write_out.write_candidate_outcomes(engine, results_dir, uid=uid)


def _write_input_dir(results_dir, output_config, start_time, end_time):

    # copy input files
    result_log_dir = results_dir / "inputs"
    util.verifyDir(result_log_dir)

    with open(result_log_dir / "pkg_info.txt", "w") as pkg_info:
        pkg_info.write(f"version: {vote_counter.__version__}\n")
        pkg_info.write(f'start_time: {start_time.strftime("%Y-%m-%d %H:%M:%S")}\n')
        pkg_info.write(f'end_time: {end_time.strftime("%Y-%m-%d %H:%M:%S")}')

    shutil.copy2(output_config["run_config_file_path"], result_log_dir / "run_config.json")
    shutil.copy2(output_config["contest_set_file_path"], result_log_dir / "contest_set.csv")


def _count_contest_set(contest_set, output_config, path_to_output, fresh_output=False) -> pd.DataFrame:

    start_time = datetime.datetime.now()

    ##################
    # OUTPUT PATHS
    path_to_output = pathlib.Path(path_to_output)

    results_dir = path_to_output / "results"
    if fresh_output and results_dir.exists():
        print("deleting existing results directory...")
        shutil.rmtree(results_dir)
    util.verifyDir(results_dir)

    empty_error_log_path = results_dir / "error_log_EMPTY.csv"
    if empty_error_log_path.exists():
        os.remove(empty_error_log_path)

    #########################
    # LOOP THROUGH CONTESTS

    summary_rows = []

    error_log_path = results_dir / "error_log.csv"
    with util.CSVLogger(error_log_path, ["contest", "message"]) as error_logger:

        pbar = tqdm.tqdm(contest_set, bar_format="{l_bar}{bar}|{postfix}", colour="GREEN")
        for contest in pbar:

            pbar_desc = contest["name"]
            if not error_logger.is_empty:
                pbar_desc = f"[{error_logger.n_rows} ERRORS SO FAR] " + pbar_desc
            pbar.set_description(pbar_desc)

            try:
                engine = _count_contest(contest)
                _write_contest_results(engine, contest, output_config, results_dir)
            except Exception as e:
                error_logger.write([contest["name"], repr(e)])
                continue

            summary_rows.append(
                {
                    "contest": contest["name"],
                    "seats": engine.get_seats(),
                    "total_ballots": engine.get_total_ballots(),
                    "threshold": util.decimal2float(engine.get_win_threshold()),
                    "n_rounds": engine.n_rounds(),
                    "n_tie_breaks": len(engine.get_tie_breaks()),
                    "winners": "; ".join(engine.get_winners()),
                }
            )

        pbar.set_postfix_str("complete")
        pbar.close()

    if error_logger.is_empty:
        os.rename(error_log_path, empty_error_log_path)
    else:
        print(f"[{error_logger.n_rows} TOTAL ERRORS]")

    summary_df = pd.DataFrame(
        summary_rows, columns=["contest", "seats", "total_ballots", "threshold", "n_rounds", "n_tie_breaks", "winners"]
    )
    if output_config.get("winners_summary"):
        summary_df.to_csv(results_dir / "winners_summary.csv", index=False)

    end_time = datetime.datetime.now()

    _write_input_dir(results_dir, output_config, start_time, end_time)

    duration = end_time - start_time
    print(f"runtime duration: {str(duration)}")
    print("DONE!")

    return summary_df


def analyze_election_set(contest_set_path: str, output_path: str, fresh_output=False) -> pd.DataFrame:
    """
    Count a set of elections.

    :param contest_set_path: Directory containing two files: contest_set.csv, which lists the elections to count, and run_config.json, which specifies which results to write out.
    :type contest_set_path: str
    :param output_path: Directory where output will be written to.
    :type output_path: str
    :param fresh_output: If True, a results folder already present in `output_path` is deleted first, defaults to False
    :type fresh_output: bool, optional
    :return: One summary row per successfully counted contest.
    :rtype: pd.DataFrame
    """

    # read in contest set info
    contest_set, run_config = _read_contest_set(contest_set_path)

    # count contests
    return _count_contest_set(contest_set, run_config, output_path, fresh_output=fresh_output)
