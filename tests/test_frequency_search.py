"""Tests for the divisor/step search."""

import pytest

from cwgen.hw import ShadowTonePort
from cwgen.models import FrequencySynthesisModel, MatchPolicy

F0 = 132.5


def make_model(tolerance: int = 10) -> FrequencySynthesisModel:
    return FrequencySynthesisModel(ShadowTonePort(), F0, tolerance=tolerance)


def test_optimal_match_takes_smallest_divisor_within_tolerance():
    model = make_model(tolerance=10)
    result = model.search_best_frequency(1000.0)

    assert result.tolerance_met is True
    assert result.policy is MatchPolicy.OPTIMAL
    assert (result.divisor, result.step) == (1, 15)
    assert model.clock_divisor == 1
    assert model.frequency_step == 15
    assert model.actual_frequency == 993.75
    assert model.target_frequency == 1000.0
    assert model.deviation == -6.25

    # Every smaller divisor misses the 1% bound
    for candidate in result.candidates[: result.divisor]:
        assert candidate.error >= 1000.0 * 10 / 1000


def test_best_match_takes_smallest_error():
    model = make_model(tolerance=10)
    result = model.search_best_frequency(1000.0, MatchPolicy.BEST)

    assert (result.divisor, result.step) == (6, 53)
    assert result.tolerance_met is True
    assert model.actual_frequency == pytest.approx(132.5 * 53 / 7)
    assert result.error == min(c.error for c in result.candidates)


def test_best_match_tie_goes_to_lowest_divisor():
    # 993.75 Hz is exact for divisors 1, 3, 5 and 7
    model = make_model(tolerance=1)
    result = model.search_best_frequency(993.75, MatchPolicy.BEST)

    assert [c.divisor for c in result.candidates if c.error == 0.0] == [1, 3, 5, 7]
    assert result.divisor == 1
    assert result.step == 15


def test_wide_tolerance_always_picks_divisor_zero():
    model = make_model(tolerance=999)
    for target in (1000.0, 5000.0, 12345.6):
        result = model.search_best_frequency(target)
        assert result.divisor == 0
        assert result.tolerance_met is True


def test_impossible_tolerance_falls_back_to_best():
    model = make_model(tolerance=1)
    result = model.search_best_frequency(20.0)

    assert result.tolerance_met is False
    assert (result.divisor, result.step) == (6, 1)
    assert model.actual_frequency == pytest.approx(132.5 / 7)
    assert model.deviation == pytest.approx(132.5 / 7 - 20.0)


def test_error_equal_to_bound_is_outside_tolerance():
    # every divisor lands on 132.5 Hz, 7.5 Hz off; 125 * 60 / 1000 is also 7.5
    model = make_model(tolerance=60)
    result = model.search_best_frequency(125.0)

    assert {candidate.error for candidate in result.candidates} == {7.5}
    assert result.tolerance_met is False
    assert (result.divisor, result.step) == (0, 1)

    model.set_tolerance(61)
    assert model.search_best_frequency(125.0).tolerance_met is True


def test_high_target_meets_one_per_mille_at_divisor_zero():
    # bound is ~1000 Hz, while divisor 0 is off by only 21.5 Hz
    model = make_model(tolerance=1)
    result = model.search_best_frequency(999999.0)

    assert result.tolerance_met is True
    assert (result.divisor, result.step) == (0, 7547)
    assert model.actual_frequency == 999977.5


def test_search_is_deterministic():
    first = make_model(tolerance=7).search_best_frequency(4321.0)
    second = make_model(tolerance=7).search_best_frequency(4321.0)
    assert (first.divisor, first.step) == (second.divisor, second.step)
    assert first.candidates == second.candidates


def test_deviation_tracks_new_target():
    model = make_model()
    model.search_best_frequency(1000.0)
    model.search_best_frequency(2000.0)

    assert model.target_frequency == 2000.0
    assert model.deviation == pytest.approx(model.actual_frequency - 2000.0)


def test_candidate_table_leaves_state_alone():
    model = make_model()
    table = model.candidate_table(1000.0)

    assert [c.step for c in table] == [8, 15, 23, 30, 38, 45, 53, 60]
    assert model.clock_divisor == 0
    assert model.frequency_step == 1
    assert model.target_frequency == 132.5


def test_candidate_table_rounds_halves_up():
    model = make_model()
    assert model.candidate_table(331.25)[0].step == 3


def test_non_positive_target_does_not_crash():
    model = make_model()
    result = model.search_best_frequency(0.0)
    assert result.tolerance_met is False
    assert 1 <= result.step <= 65535
