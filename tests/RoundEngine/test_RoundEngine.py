import random

import pytest

from decimal import Decimal

import vote_counter.events as events
from vote_counter.ballot import Ballot
from vote_counter.errors import ConfigurationError
from vote_counter.rounds import RoundEngine
from vote_counter.tiebreak import CondorcetTieBreak


def test_surplus_transfer():

    rcv = RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['A', 'C'], ['B', 'A']], 1)

    assert rcv.get_win_threshold() == Decimal('1.5')
    assert rcv.get_winners() == ['A']
    assert rcv.n_rounds() == 1
    assert rcv.get_round_tally_dict(1) == {'A': Decimal(2), 'B': Decimal(1), 'C': Decimal(0)}

    # (2 - 1.5) / 3 of each of A's ballots moves on
    transfers = {k: float(v) for k, v in rcv.get_round_transfer_dict(1).items()}
    assert transfers['B'] == pytest.approx(1 / 6)
    assert transfers['C'] == pytest.approx(1 / 6)
    assert transfers['A'] == pytest.approx(-1 / 3)
    assert transfers[Ballot.EXHAUSTED] == 0

    final_tally = {k: float(v) for k, v in rcv.get_final_tally().items()}
    assert final_tally == pytest.approx({'B': 7 / 6, 'C': 1 / 6})

    assert float(rcv.get_retained_weight()['A']) == pytest.approx(5 / 3)

    round_events = rcv.get_round_events(1)
    assert round_events == [events.winner('A', Decimal(2))]


def test_last_place_tie(last_choice_rng):

    rcv = RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['B', 'A']], 1, rng=last_choice_rng)

    assert rcv.get_win_threshold() == Decimal(1)
    assert rcv.n_rounds() == 3
    assert rcv.get_eliminated() == ['C', 'B']
    assert rcv.get_winners() == ['A']

    tie_breaks = rcv.get_tie_breaks()
    assert len(tie_breaks) == 1
    assert tie_breaks[0]['round'] == 2
    assert tie_breaks[0]['candidates'] == ['A', 'B']
    assert tie_breaks[0]['resolved_by'] == CondorcetTieBreak.RANDOM

    assert rcv.get_round_tally_dict(3) == {'A': Decimal(2)}
    assert rcv.get_round_events(3) == [events.winner('A', Decimal(2), last_round=True)]


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 4, 5])
def test_last_place_tie_seeded(seed):

    rcv = RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['B', 'A']], 1, seed=seed)

    assert rcv.get_eliminated()[0] == 'C'
    assert len(rcv.get_winners()) == 1
    assert rcv.get_winners()[0] in ['A', 'B']

    again = RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['B', 'A']], 1, rng=random.Random(seed))
    assert again.get_winners() == rcv.get_winners()


def test_threshold_must_be_exceeded():

    rcv = RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['A', 'B'], ['B'], ['C']], 1)

    assert rcv.get_win_threshold() == Decimal(2)

    # A sits exactly on the threshold and is not elected by it
    assert rcv.get_round_tally_dict(1)['A'] == Decimal(2)
    assert [e['type'] for e in rcv.get_round_events(1)] == [events.TIE_BREAK, events.ELIMINATED]
    assert rcv.get_tie_breaks()[0]['loser'] == 'C'
    assert rcv.get_tie_breaks()[0]['resolved_by'] == CondorcetTieBreak.WINS

    assert rcv.get_round_events(2) == [events.eliminated('B', Decimal(1))]
    assert rcv.get_round_events(3) == [events.winner('A', Decimal(2), last_round=True)]

    assert rcv.get_exhausted_weight() == Decimal(2)
    assert rcv.get_retained_weight() == {'A': Decimal(2)}


params = [
    ({
        'input': {
            'candidates': ['A', 'B', 'C', 'D'],
            'ranks': [['A', 'C']] * 4 + [['B', 'D']] * 4 + [['C']],
            'seats': 2
        },
        'expected': {
            'winners': ['A', 'B'],
            'n_round': 2,
            'round2_candidates': ['B', 'C', 'D']
        }
    }),
    ({
        'input': {
            'candidates': ['B', 'A', 'C', 'D'],
            'ranks': [['A', 'C']] * 4 + [['B', 'D']] * 4 + [['C']],
            'seats': 2
        },
        'expected': {
            'winners': ['B', 'A'],
            'n_round': 2,
            'round2_candidates': ['A', 'C', 'D']
        }
    })
]


@pytest.mark.parametrize("param", params)
def test_one_winner_per_round(param):

    rcv = RoundEngine(**param['input'])

    assert rcv.get_win_threshold() == Decimal(3)
    assert rcv.get_winners() == param['expected']['winners']
    assert rcv.n_rounds() == param['expected']['n_round']
    assert list(rcv.get_round_tally_dict(2)) == param['expected']['round2_candidates']

    # both are over threshold in round 1, only the first in candidate order is elected
    round1_winners = [e for e in rcv.get_round_events(1) if e['type'] == events.WINNER]
    assert len(round1_winners) == 1


def test_surplus_reaches_second_choice():

    rcv = RoundEngine(['A', 'B', 'C', 'D'], [['A', 'C']] * 4 + [['B', 'D']] * 4 + [['C']], 2)

    # (4 - 3) / 9 of each A ballot goes to C
    assert float(rcv.get_round_tally_dict(2)['C']) == pytest.approx(1 + 4 / 9)


def test_remaining_candidates_fill_seats(last_choice_rng):

    rcv = RoundEngine(['A', 'B', 'C'], [['A'], ['B'], ['C']], 2, rng=last_choice_rng)

    assert rcv.get_eliminated() == ['C']
    assert rcv.get_winners() == ['A', 'B']
    assert rcv.n_rounds() == 2
    assert rcv.get_round_events(2) == [
        events.winner('A', Decimal(1), last_round=True),
        events.winner('B', Decimal(1), last_round=True),
    ]
    assert rcv.get_round_transfer_dict(2) == {}

    assert rcv.get_candidate_outcomes() == [
        {'name': 'A', 'round_elected': 2, 'round_eliminated': None},
        {'name': 'B', 'round_elected': 2, 'round_eliminated': None},
        {'name': 'C', 'round_elected': None, 'round_eliminated': 1},
    ]


def test_seats_equal_candidates():

    rcv = RoundEngine(['A', 'B'], [['A'], ['A'], ['B']], 2)

    assert rcv.n_rounds() == 1
    assert rcv.get_winners() == ['A', 'B']
    assert rcv.get_eliminated() == []


def test_no_ballots():

    rcv = RoundEngine(['A', 'B'], [], 1, seed=3)

    assert rcv.get_total_ballots() == 0
    assert rcv.get_win_threshold() == Decimal(0)
    assert len(rcv.get_winners()) == 1
    assert rcv.n_rounds() == 2
    assert rcv.get_tie_breaks()[0]['resolved_by'] == CondorcetTieBreak.RANDOM


def test_blank_ballots_count_toward_threshold():

    rcv = RoundEngine(['A', 'B'], [[], ['A']], 1)

    assert rcv.get_total_ballots() == 2
    assert rcv.get_win_threshold() == Decimal(1)
    assert rcv.get_eliminated() == ['B']
    assert rcv.get_winners() == ['A']
    assert rcv.get_exhausted_weight() == Decimal(1)


def test_unknown_marks_ignored():

    rcv = RoundEngine(['A', 'B'], [['Z', 'A'], ['Z', 'A'], ['B']], 1)

    assert rcv.get_round_tally_dict(1) == {'A': Decimal(2), 'B': Decimal(1)}
    assert rcv.get_winners() == ['A']


def test_seats_as_string():
    rcv = RoundEngine(['A', 'B'], [['A']], '1')
    assert rcv.get_seats() == 1


def test_reporter_events(last_choice_rng):

    calls = []

    def reporter(round_num, tally, event):
        calls.append((round_num, dict(tally), event))

    RoundEngine(['A', 'B', 'C'], [['A', 'B'], ['B', 'A']], 1, rng=last_choice_rng, reporter=reporter)

    assert [(c[0], c[2]['type']) for c in calls] == [
        (1, events.ELIMINATED),
        (2, events.TIE_BREAK),
        (2, events.ELIMINATED),
        (3, events.WINNER),
        (3, events.FINAL_WINNERS),
    ]
    assert calls[0][1] == {'A': Decimal(1), 'B': Decimal(1), 'C': Decimal(0)}
    assert calls[0][2] == events.eliminated('C', Decimal(0))
    assert calls[1][2] == events.tie_break(['A', 'B'], 'B', CondorcetTieBreak.RANDOM)
    assert calls[4][1] == {}
    assert calls[4][2] == events.final_winners(['A'])


params = [
    (ConfigurationError, ['A', 'B', 'C'], [['A']], 0),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], -1),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], 4),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], 'x'),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], '1.5'),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], 1.5),
    (ConfigurationError, ['A', 'B', 'C'], [['A']], True),
    (ConfigurationError, ['A', 'B', 'A'], [['A'], ['B']], 3),
    (ConfigurationError, ['A', 'B', 'A'], [['A'], ['B']], 1),
]


@pytest.mark.parametrize("error_type, candidates, ranks, seats", params)
def test_constructor_errors(error_type, candidates, ranks, seats):

    calls = []

    with pytest.raises(error_type):
        RoundEngine(candidates, ranks, seats, reporter=lambda *args: calls.append(args))

    # rejected before any counting
    assert calls == []


def test_voter_labels_must_match_ballots():

    with pytest.raises(ConfigurationError):
        RoundEngine(['A', 'B'], [['A'], ['A'], ['B']], 1, voters=['v1'])


def random_election(seed, n_ballots=60):
    candidates = ['A', 'B', 'C', 'D', 'E', 'F']
    rng = random.Random(seed)
    ranks = []
    for _ in range(n_ballots):
        ranking = rng.sample(candidates, len(candidates))
        ranks.append(ranking[:rng.randint(0, len(candidates))])
    return candidates, ranks


@pytest.mark.parametrize("seats", [1, 2, 3, 5])
@pytest.mark.parametrize("seed", [11, 12, 13])
def test_count_invariants(seed, seats):

    candidates, ranks = random_election(seed)
    rcv = RoundEngine(candidates, ranks, seats, seed=seed)
    n_ballots = Decimal(len(ranks))

    winners = rcv.get_winners()
    eliminated = rcv.get_eliminated()

    assert len(winners) == seats
    assert len(set(winners)) == seats
    assert not set(winners) & set(eliminated)
    assert rcv.n_rounds() <= len(candidates)

    outcomes = {d['name']: d for d in rcv.get_candidate_outcomes()}
    exhausted = Decimal(sum(1 for r in ranks if not r))

    for round_num in range(1, rcv.n_rounds() + 1):

        round_tally = rcv.get_round_tally_dict(round_num)

        # resolved candidates never come back
        resolved_before = [
            cand for cand, d in outcomes.items()
            if (d['round_elected'] or rcv.n_rounds() + 1) < round_num
            or (d['round_eliminated'] or rcv.n_rounds() + 1) < round_num
        ]
        assert not set(resolved_before) & set(round_tally)

        # candidate order is kept
        assert list(round_tally) == [cand for cand in candidates if cand in round_tally]

        # weight is neither created nor lost
        retained = sum(
            (w for cand, w in rcv.get_retained_weight().items() if outcomes[cand]['round_elected'] < round_num),
            Decimal(0),
        )
        active = sum(round_tally.values(), Decimal(0))
        assert float(active + exhausted + retained) == pytest.approx(float(n_ballots))

        exhausted += rcv.get_round_transfer_dict(round_num).get(Ballot.EXHAUSTED, Decimal(0))

    assert float(exhausted) == pytest.approx(float(rcv.get_exhausted_weight()))

    final_active = sum(rcv.get_final_tally().values(), Decimal(0))
    retained = sum(rcv.get_retained_weight().values(), Decimal(0))
    total = final_active + rcv.get_exhausted_weight() + retained
    assert float(total) == pytest.approx(float(n_ballots))
