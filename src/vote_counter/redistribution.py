"""
Moves ballot weight away from a resolved (elected or eliminated) candidate.
"""

from typing import Dict

import decimal

from vote_counter.ballot import Ballot
from vote_counter.state import ElectionState


def _next_preference(ballot: Ballot, candidate: str) -> bool:
    # step past the resolved candidate, including any repeated marks for them
    while ballot.current_preference() == candidate:
        if not ballot.advance():
            return False
    return True


def redistribute(state: ElectionState, candidate: str, fraction: decimal.Decimal) -> Dict[str, decimal.Decimal]:
    """Transfer every ballot currently credited to `candidate` to its next preference.

    Each transferred ballot has its weight multiplied by `fraction` and that reduced weight is
    credited to the new preference. Ballots with no next preference exhaust. Once all transfers are
    made, `candidate` is purged from every working ballot, including ballots that were not
    crediting them.

    The resolved candidate's tally entry is left in place, removing it is up to the caller.

    :param state: Run state holding ballots and tally.
    :type state: ElectionState
    :param candidate: Candidate being elected or eliminated.
    :type candidate: str
    :param fraction: Share of each ballot's weight that moves on. 1 for eliminations.
    :type fraction: decimal.Decimal
    :return: Transfer flows for the round. Keys are candidate names plus 'exhaust'. Receiving
        candidates and 'exhaust' have positive values, `candidate` has the negative sum of the rest.
    :rtype: Dict[str, decimal.Decimal]
    """
    fraction = decimal.Decimal(fraction)

    transfer_dict = {cand: decimal.Decimal(0) for cand in state.candidates}
    transfer_dict[Ballot.EXHAUSTED] = decimal.Decimal(0)

    for b in state.ballots:

        if b.is_exhausted() or b.current_preference() != candidate:
            continue

        b.scale_weight(fraction)

        if _next_preference(b, candidate):
            new_candidate = b.current_preference()
            state.tally.credit(new_candidate, b.weight)
            transfer_dict[new_candidate] += b.weight
        else:
            b.exhaust()
            transfer_dict[Ballot.EXHAUSTED] += b.weight

    transfer_dict[candidate] = sum(transfer_dict.values(), decimal.Decimal(0)) * -1

    # purge only after every transfer is made, cursors still refer to the unpurged lists above
    for b in state.ballots:
        b.remove_preference(candidate)

    return transfer_dict
