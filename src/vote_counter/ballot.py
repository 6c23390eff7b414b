"""
Contains Ballot class
"""

from __future__ import annotations
from typing import List, Tuple

import decimal


class Ballot:
    """Wrap up the ranking list of a single voter with a cursor and a transferable weight."""

    # returned by current_preference when nothing is left to credit
    EXHAUSTED = "exhaust"

    @staticmethod
    def remove_mark(marks: List[str], cursor: int, candidate: str) -> Tuple[List[str], int]:
        """Return a new marks list with every occurrence of `candidate` removed, along with the
        adjusted cursor. Each removed position that precedes the cursor moves the cursor back by one
        so it still points at the same logical entry.

        If the entry under the cursor is itself removed, the cursor is left pointing at whatever
        followed it, or at the last remaining entry.

        :param marks: Ordered candidate names.
        :type marks: List[str]
        :param cursor: Index of the currently credited preference.
        :type cursor: int
        :param candidate: Name to remove.
        :type candidate: str
        :return: Tuple of (new marks list, new cursor).
        :rtype: Tuple[List[str], int]
        """
        if not isinstance(marks, list):
            raise TypeError("marks must be a list")

        new_marks = [mark for mark in marks if mark != candidate]
        shift = sum(1 for idx, mark in enumerate(marks) if mark == candidate and idx < cursor)
        new_cursor = cursor - shift

        if not new_marks:
            new_cursor = 0
        elif new_cursor >= len(new_marks):
            new_cursor = len(new_marks) - 1

        return new_marks, new_cursor

    def __init__(self, marks: List[str] = None, weight: decimal.Decimal = decimal.Decimal(1), voter: str = "") -> None:
        """Constructor

        :param marks: Ordered candidate names, first choice first. Defaults to empty list.
        :type marks: List[str], optional
        :param weight: Starting weight of the ballot, defaults to 1.
        :type weight: decimal.Decimal, optional
        :param voter: Voter label carried along for reporting, defaults to ""
        :type voter: str, optional
        """
        if marks is None:
            marks = []

        if not isinstance(marks, list):
            raise TypeError("marks must be a list of candidate names")

        self.voter = voter
        self.marks = [mark for mark in marks]
        self.cursor = 0
        self.weight = decimal.Decimal(weight)

    def __repr__(self) -> str:
        return f"Ballot(marks={self.marks}, cursor={self.cursor}, weight={self.weight})"

    def copy(self) -> Ballot:
        """Make a copy.

        :return: Returns a copy of the Ballot object, including cursor and weight.
        :rtype: Ballot
        """
        copy_obj = Ballot(self.marks, weight=self.weight, voter=self.voter)
        copy_obj.cursor = self.cursor
        return copy_obj

    def is_exhausted(self) -> bool:
        return not self.marks

    def current_preference(self) -> str:
        """
        :return: Candidate currently credited with this ballot, or `Ballot.EXHAUSTED`.
        :rtype: str
        """
        if self.is_exhausted():
            return Ballot.EXHAUSTED
        return self.marks[self.cursor]

    def advance(self) -> bool:
        """Move the cursor to the next preference.

        :return: True if the cursor moved, False if there was no next preference.
        :rtype: bool
        """
        if self.cursor + 1 < len(self.marks):
            self.cursor += 1
            return True
        return False

    def reset_cursor(self) -> None:
        self.cursor = 0

    def remove_preference(self, candidate: str) -> None:
        self.marks, self.cursor = Ballot.remove_mark(self.marks, self.cursor, candidate)

    def exhaust(self) -> None:
        """Drop all remaining preferences. The ballot no longer counts for anyone."""
        self.marks = []
        self.cursor = 0

    def scale_weight(self, factor: decimal.Decimal) -> None:
        """Multiply the ballot weight by `factor`. Weight can only shrink.

        :param factor: Value in (0, 1]
        :type factor: decimal.Decimal
        :raises ValueError: Raised if factor is outside (0, 1].
        """
        factor = decimal.Decimal(factor)
        if not 0 < factor <= 1:
            raise ValueError(f"weight factor must be in (0, 1], got {factor}")
        self.weight *= factor

    def rank_score(self, candidate: str) -> int:
        """Points for `candidate` on this ballot: (number of marks - index), 0 if unranked.

        :param candidate: Candidate name.
        :type candidate: str
        :rtype: int
        """
        if candidate in self.marks:
            return len(self.marks) - self.marks.index(candidate)
        return 0

    def pairwise_beats(self, runner: str, opponent: str) -> bool:
        """True if `runner` is ranked strictly before `opponent` on this ballot, or if `runner`
        is ranked and `opponent` is not. A candidate never beats itself.

        :param runner: Candidate name.
        :type runner: str
        :param opponent: Candidate name.
        :type opponent: str
        :rtype: bool
        """
        if runner == opponent or runner not in self.marks:
            return False
        if opponent not in self.marks:
            return True
        return self.marks.index(runner) < self.marks.index(opponent)
