"""Search engine components."""

from .certificate import CpSatVerifier, Verdict, VerificationResult
from .feasibility import FeasibilityPrecheck
from .ordering import LEAVE_EMPTY, SearchHeuristics
from .search import BacktrackingSearch

__all__ = [
    "BacktrackingSearch",
    "SearchHeuristics",
    "FeasibilityPrecheck",
    "CpSatVerifier",
    "Verdict",
    "VerificationResult",
    "LEAVE_EMPTY",
]
