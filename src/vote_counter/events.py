"""
Round event records handed to reporters.

Events are plain dictionaries with a "type" key set to one of the constants below, plus
type-specific fields:

- WINNER: "candidate", "total", "last_round" (True when elected by the all-remaining-win rule)
- ELIMINATED: "candidate", "total"
- TIE_BREAK: "candidates", "loser", "resolved_by"
- FINAL_WINNERS: "winners"
"""

from typing import Dict, List

import decimal

WINNER = "winner"
ELIMINATED = "eliminated"
TIE_BREAK = "tie_break"
FINAL_WINNERS = "final_winners"


def winner(candidate: str, total: decimal.Decimal, last_round: bool = False) -> Dict:
    return {"type": WINNER, "candidate": candidate, "total": total, "last_round": last_round}


def eliminated(candidate: str, total: decimal.Decimal) -> Dict:
    return {"type": ELIMINATED, "candidate": candidate, "total": total}


def tie_break(candidates: List[str], loser: str, resolved_by: str) -> Dict:
    return {"type": TIE_BREAK, "candidates": list(candidates), "loser": loser, "resolved_by": resolved_by}


def final_winners(winners: List[str]) -> Dict:
    return {"type": FINAL_WINNERS, "winners": list(winners)}
