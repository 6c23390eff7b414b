"""
Run parameter validation and the typed settings used to read contest sets.
"""

from typing import Dict, List

import json
import os
import pathlib

from vote_counter.errors import ConfigurationError


def validate_candidates(candidates: List[str]) -> List[str]:
    """Check that candidate names are unique.

    :param candidates: Candidate names in input order.
    :type candidates: List[str]
    :raises ConfigurationError: Raised if a name is listed more than once.
    :return: Candidate names as a new list.
    :rtype: List[str]
    """
    candidates = list(candidates)

    seen = set()
    duplicates = []
    for cand in candidates:
        if cand in seen and cand not in duplicates:
            duplicates.append(cand)
        seen.add(cand)

    if duplicates:
        raise ConfigurationError(f"candidate names must be unique, repeated: {', '.join(duplicates)}")

    return candidates


def validate_seats(seats, n_candidates: int) -> int:
    """Parse and range check a seat count.

    :param seats: Seat count as an int or a string such as a command line argument.
    :param n_candidates: Number of candidates in the election.
    :type n_candidates: int
    :raises ConfigurationError: Raised if seats is not an integer in [1, n_candidates].
    :return: Seat count as an int.
    :rtype: int
    """
    if isinstance(seats, bool):
        raise ConfigurationError(f"invalid seat count: {seats!r}")

    if isinstance(seats, int):
        parsed = seats
    else:
        try:
            parsed = int(str(seats).strip())
        except ValueError:
            raise ConfigurationError(f"invalid seat count: {seats!r}. Must be an integer.") from None

    if parsed < 1 or parsed > n_candidates:
        raise ConfigurationError(
            f"the number of seats must be at least 1 and no more than the number of candidates ({n_candidates}),"
            f" got {parsed}"
        )

    return parsed


# typecast functions
def _cast_str(s):
    """
    If string-in-string '"0006"', evaluate to '0006'
    If 'None', return None
    else, return str() result
    """
    s = str(s)
    if len(s) > 1 and ((s[0] == '"' and s[-1] == '"') or (s[0] == "'" and s[-1] == "'")):
        return s[1:-1]
    elif s == "None":
        return None
    else:
        return s


def _cast_int(s):
    if isinstance(s, int):
        return s
    return int(s)


def _cast_optional_int(s):
    if s is None or s == "" or s == "None":
        return None
    return _cast_int(s)


def _cast_bool(s):
    if isinstance(s, bool):
        return s
    if str(s).title() not in ("True", "False"):
        raise ConfigurationError(f'invalid boolean value ({s}). Must be "true" or "false".')
    return str(s).title() == "True"


cast_dict = {
    "str": _cast_str,
    "int": _cast_int,
    "optional_int": _cast_optional_int,
    "bool": _cast_bool,
}


def load_settings(settings_name: str) -> Dict:
    """Read one of the JSON settings files shipped with the package. Each entry maps a field name
    to its "type" (a key of `cast_dict`) and "default".

    :param settings_name: "contest_set_settings" or "run_config_settings"
    :type settings_name: str
    :rtype: Dict
    """
    settings_fpath = pathlib.Path(os.path.dirname(__file__)) / f"{settings_name}.json"
    if not settings_fpath.is_file():
        raise RuntimeError(f"(developer error) Looking for {settings_name}.json. Not a valid file path: {settings_fpath}")

    with open(settings_fpath) as settings_file:
        return json.load(settings_file)


def read_run_config(run_config_fpath) -> Dict:
    """Read run_config.json and fill in defaults for missing options.

    :param run_config_fpath: Path to run_config.json
    :raises ConfigurationError: Raised if the file is missing or an option has an invalid value.
    :rtype: Dict
    """
    run_config_fpath = pathlib.Path(run_config_fpath)
    if not run_config_fpath.is_file():
        raise ConfigurationError(f"not a valid file path: {run_config_fpath}")

    run_config_settings = load_settings("run_config_settings")

    with open(run_config_fpath) as run_config_file:
        run_config = json.load(run_config_file)

    for field, setting in run_config_settings.items():
        if field not in run_config:
            run_config[field] = setting["default"]
        else:
            run_config[field] = cast_dict[setting["type"]](run_config[field])

    for field in run_config:
        if field not in run_config_settings:
            print(f'info -- "{field}" is an unrecognized option in run_config.json, it will be ignored.')

    return run_config
