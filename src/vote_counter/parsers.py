"""
Contains candidate list and ballot file readers.
"""

from typing import Dict, List, Optional, Union

import csv
import pathlib

from vote_counter.errors import IngestionError


def read_candidates(candidates_path: Union[str, pathlib.Path]) -> List[str]:
    """Reads the candidate list. One candidate name per line, surrounding whitespace is trimmed and
    blank lines are skipped. Repeated names are kept only once, at their first position.

    :param candidates_path: Path to the candidate file.
    :type candidates_path: Union[str, pathlib.Path]
    :raises IngestionError: Raised if the file can't be read or lists no candidates.
    :return: Candidate names in file order.
    :rtype: List[str]
    """
    candidates_path = pathlib.Path(candidates_path)

    try:
        with open(candidates_path, encoding="utf8") as candidates_file:
            lines = candidates_file.readlines()
    except FileNotFoundError:
        raise IngestionError(
            f"unable to open the candidate file: {candidates_path}. Please ensure the provided file path is correct."
        ) from None
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"an error occurred while reading the candidate file {candidates_path}: {e}") from e

    candidates = []
    for line in lines:
        name = line.strip()
        if name and name not in candidates:
            candidates.append(name)

    if not candidates:
        raise IngestionError(f"no candidates found in {candidates_path}")

    return candidates


def read_ballots(
    ballots_path: Union[str, pathlib.Path], candidates: Optional[List[str]] = None
) -> Dict[str, List]:
    """Reads ballots stored in csv format. The first row is a header and is skipped. Every following
    row is one ballot: the voter label in the first column, then candidate names in preference order.
    Rows don't need to be the same length.

    Entries are whitespace trimmed and blank entries are dropped, so a malformed row just yields a
    ballot with fewer preferences.

    :param ballots_path: Path to the ballot csv.
    :type ballots_path: Union[str, pathlib.Path]
    :param candidates: If passed, names not in this list are dropped from ballots. Defaults to None
    :type candidates: Optional[List[str]], optional
    :raises IngestionError: Raised if the file can't be read.
    :return: A dictionary of lists. Key 'voter' holds voter labels and key 'ranks' holds one list of
        candidate names per ballot, index-matched.
    :rtype: Dict[str, List]
    """
    ballots_path = pathlib.Path(ballots_path)

    try:
        with open(ballots_path, encoding="utf8", newline="") as ballots_file:
            rows = list(csv.reader(ballots_file))
    except FileNotFoundError:
        raise IngestionError(
            f"unable to open the ballot file: {ballots_path}. Please ensure the provided file path is correct."
        ) from None
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise IngestionError(f"an error occurred while reading the ballot file {ballots_path}: {e}") from e

    candidate_set = set(candidates) if candidates is not None else None
    unknown = set()

    ballot_dict = {"voter": [], "ranks": []}
    for row in rows[1:]:

        # an empty line is still a cast ballot, just one with no preferences
        voter = row[0].strip() if row else ""
        ranks = [mark.strip() for mark in row[1:] if mark.strip()]

        if candidate_set is not None:
            unknown.update(mark for mark in ranks if mark not in candidate_set)
            ranks = [mark for mark in ranks if mark in candidate_set]

        ballot_dict["voter"].append(voter)
        ballot_dict["ranks"].append(ranks)

    if unknown:
        print(f"info -- ignoring ballot marks that are not listed candidates: {', '.join(sorted(unknown))}")

    return ballot_dict
