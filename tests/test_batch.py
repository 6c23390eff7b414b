import json

import pytest

from vote_counter.batch import analyze_election_set
from vote_counter.cli import main


def write_contest(contest_dir, candidates, ballot_rows):
    contest_dir.mkdir(parents=True)
    (contest_dir / "candidates.txt").write_text("\n".join(candidates) + "\n")
    (contest_dir / "ballots.csv").write_text(
        "voter,choice1,choice2\n" + "\n".join(",".join(row) for row in ballot_rows) + "\n"
    )


@pytest.fixture
def contest_set_dir(tmp_path):

    set_dir = tmp_path / "contest_set"
    write_contest(set_dir / "surplus", ["A", "B", "C"], [["v1", "A", "B"], ["v2", "A", "C"], ["v3", "B", "A"]])
    write_contest(set_dir / "tie", ["A", "B", "C"], [["v1", "A", "B"], ["v2", "B", "A"]])

    (set_dir / "contest_set.csv").write_text(
        "name,candidates_path,ballots_path,seats,seed,ignore_contest\n"
        "surplus,surplus/candidates.txt,surplus/ballots.csv,1,,false\n"
        "tie,tie/candidates.txt,tie/ballots.csv,1,5,\n"
        "broken,surplus/candidates.txt,surplus/ballots.csv,7,,false\n"
        "skipped,surplus/candidates.txt,surplus/ballots.csv,1,,true\n"
    )
    (set_dir / "run_config.json").write_text(json.dumps({"round_by_round_json": False}))

    return set_dir


def test_analyze_election_set(contest_set_dir, tmp_path):

    output_dir = tmp_path / "output"
    summary_df = analyze_election_set(contest_set_dir, output_dir)

    assert summary_df["contest"].tolist() == ["surplus", "tie"]
    assert summary_df["winners"].tolist()[0] == "A"
    assert summary_df["winners"].tolist()[1] in ["A", "B"]
    assert summary_df["n_tie_breaks"].tolist() == [0, 1]
    assert summary_df["threshold"].tolist() == [1.5, 1.0]

    results_dir = output_dir / "results"
    assert (results_dir / "winners_summary.csv").is_file()
    assert (results_dir / "round_by_round_table" / "surplus.csv").is_file()
    assert (results_dir / "tie_break_tables" / "tie_round2.csv").is_file()
    assert (results_dir / "candidate_outcomes" / "tie.csv").is_file()
    assert not (results_dir / "round_by_round_json").exists()

    # bad seat count is logged and the rest of the set still runs
    error_log = (results_dir / "error_log.csv").read_text()
    assert "broken" in error_log
    assert "skipped" not in error_log

    assert (results_dir / "inputs" / "pkg_info.txt").is_file()
    assert (results_dir / "inputs" / "contest_set.csv").is_file()


def test_analyze_election_set_seeded(contest_set_dir, tmp_path):

    first = analyze_election_set(contest_set_dir, tmp_path / "first")
    second = analyze_election_set(contest_set_dir, tmp_path / "second")

    assert first["winners"].tolist() == second["winners"].tolist()


def test_empty_error_log(contest_set_dir, tmp_path):

    contest_set_csv = contest_set_dir / "contest_set.csv"
    lines = contest_set_csv.read_text().splitlines()
    contest_set_csv.write_text("\n".join(line for line in lines if not line.startswith("broken")) + "\n")

    output_dir = tmp_path / "output"
    analyze_election_set(contest_set_dir, output_dir)

    assert (output_dir / "results" / "error_log_EMPTY.csv").is_file()
    assert not (output_dir / "results" / "error_log.csv").exists()

    # a fresh run clears out the old results first
    analyze_election_set(contest_set_dir, output_dir, fresh_output=True)
    assert (output_dir / "results" / "error_log_EMPTY.csv").is_file()


def test_default_contest_names(tmp_path):

    set_dir = tmp_path / "contest_set"
    write_contest(set_dir / "c", ["A", "B"], [["v1", "A"], ["v2", "A"], ["v3", "B"]])
    (set_dir / "contest_set.csv").write_text("candidates_path,ballots_path\nc/candidates.txt,c/ballots.csv\n")
    (set_dir / "run_config.json").write_text("{}")

    summary_df = analyze_election_set(set_dir, set_dir)

    assert summary_df["contest"].tolist() == ["contest1"]
    assert summary_df["seats"].tolist() == [1]


def test_main_contest_set(contest_set_dir, capsys):

    assert main(["--contest-set", str(contest_set_dir)]) == 0
    assert (contest_set_dir / "results" / "winners_summary.csv").is_file()
    assert "DONE!" in capsys.readouterr().out
