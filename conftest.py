import glob
import os

import pytest


def read_test_config(test_config_path):

    test_config = {}
    with open(test_config_path) as test_config_file:
        for line_num, l in enumerate(test_config_file, start=1):

            l_splits = l.strip('\n').split("=")
            l_splits = [s.strip() for s in l_splits]

            if len(l_splits) < 2:
                continue

            input_option = l_splits[0]
            input_value = l_splits[1]

            if not input_value.lstrip('-').isdigit():
                raise RuntimeError(f'invalid value ({input_value}) provided in {test_config_path}'
                                   f' on line {line_num} for option "{input_option}". Must be an integer.')

            test_config.update({input_option: int(input_value)})

    return test_config


class LastChoiceRandom:
    """Stands in for random.Random in tie breaks, always picks the last of the remaining candidates."""

    def sample(self, population, k):
        return list(population)[-k:]


@pytest.fixture
def election_config(election_path):
    return read_test_config(os.path.join(election_path, "input", "test_config.txt"))


@pytest.fixture
def last_choice_rng():
    return LastChoiceRandom()


def pytest_generate_tests(metafunc):
    if "election_path" in metafunc.fixturenames:

        test_contest_set = glob.glob(f'{metafunc.config.rootpath}/tests/contest_sets/tabulation_test/**/input', recursive=True)
        test_contest_set_dirs = sorted(os.path.dirname(test_path) for test_path in test_contest_set)

        metafunc.parametrize("election_path", test_contest_set_dirs)
