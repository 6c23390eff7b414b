"""
Contains TallyState class
"""

from typing import Dict, List

import decimal


class TallyState:
    """Running weighted vote totals for active candidates.

    Insertion order is the candidate list order and is never changed, so iterating a TallyState
    always scans candidates in the order they first appeared in the input.
    """

    def __init__(self, candidates: List[str]) -> None:
        self._totals = {cand: decimal.Decimal(0) for cand in candidates}

    def __contains__(self, candidate: str) -> bool:
        return candidate in self._totals

    def __len__(self) -> int:
        return len(self._totals)

    def __iter__(self):
        return iter(self._totals)

    def __getitem__(self, candidate: str) -> decimal.Decimal:
        return self._totals[candidate]

    def items(self):
        return self._totals.items()

    def active_candidates(self) -> List[str]:
        return list(self._totals)

    def credit(self, candidate: str, weight: decimal.Decimal) -> None:
        """Add ballot weight to an active candidate's total.

        :raises KeyError: Raised if candidate is not active.
        """
        self._totals[candidate] += weight

    def remove(self, candidate: str) -> decimal.Decimal:
        """Remove a resolved candidate and return their final total."""
        return self._totals.pop(candidate)

    def total(self) -> decimal.Decimal:
        return sum(self._totals.values(), decimal.Decimal(0))

    def snapshot(self) -> Dict[str, decimal.Decimal]:
        """
        :return: Copy of the current totals, in scan order.
        :rtype: Dict[str, decimal.Decimal]
        """
        return dict(self._totals)
