"""Tests for the CP-SAT cross-check."""

import pytest

from weekly_timetable.scheduler.solver import CpSatVerifier, Verdict, VerificationResult


class TestVerificationResult:
    """Tests for VerificationResult.agrees_with."""

    @pytest.mark.parametrize(
        "verdict,solved,expected",
        [
            (Verdict.FEASIBLE, True, True),
            (Verdict.FEASIBLE, False, False),
            (Verdict.INFEASIBLE, False, True),
            (Verdict.INFEASIBLE, True, False),
            (Verdict.UNKNOWN, True, True),
            (Verdict.UNKNOWN, False, True),
        ],
    )
    def test_agrees_with(self, verdict, solved, expected):
        result = VerificationResult(verdict=verdict, solver_status="X", wall_time_seconds=0.0)
        assert result.agrees_with(solved) is expected


class TestCpSatVerifier:
    """Tests for CpSatVerifier class."""

    def test_variables_cover_open_slots_only(self, sample_problem):
        verifier = CpSatVerifier(sample_problem)
        verifier.build()

        # c1: 3 subjects x 24 open slots, c2: 3 subjects x 25 slots
        assert len(verifier.x) == 3 * 24 + 3 * 25

    def test_sample_roster_is_feasible(self, sample_problem):
        result = CpSatVerifier(sample_problem).verify()
        assert result.verdict is Verdict.FEASIBLE
        assert result.solver_status in ("OPTIMAL", "FEASIBLE")

    def test_overloaded_is_infeasible(self, overloaded_problem):
        result = CpSatVerifier(overloaded_problem).verify()
        assert result.verdict is Verdict.INFEASIBLE

    def test_consecutive_trap_is_infeasible(self, consecutive_trap_problem):
        result = CpSatVerifier(consecutive_trap_problem).verify()
        assert result.verdict is Verdict.INFEASIBLE
        assert result.wall_time_seconds >= 0.0
