"""
Multi-winner ranked choice tabulation with fractional surplus transfer and a condorcet
tie-break for last place.
"""

__version__ = "0.1.0"
