import math

import pytest

from finscope_core.domain.models import AnnuityMode, AnnuityParams, GoalStatus
from finscope_core.services.annuity import annuity_factor, future_value, solve_annuity


def test_zero_rate_contribution_mode_is_linear():
    params = AnnuityParams(years=2, annual_rate=0.0, initial_value=1000.0, contribution=100.0)
    solution = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    assert solution is not None
    assert solution.future_value == pytest.approx(3400.0)
    assert solution.result == pytest.approx(3400.0)
    assert solution.total_contributed == pytest.approx(3400.0)
    assert solution.earnings == pytest.approx(0.0)
    assert solution.status is GoalStatus.PROJECTED


def test_known_future_value():
    params = AnnuityParams(years=1, annual_rate=0.12, contribution=100.0)
    solution = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    assert solution.future_value == pytest.approx(100.0 * (1.01 ** 12 - 1) / 0.01)
    assert round(solution.future_value, 2) == 1268.25
    assert solution.term_months == 12


def test_goal_round_trip_reproduces_target():
    goal = AnnuityParams(years=10, annual_rate=0.10, initial_value=5000.0, target=100000.0)
    solved = solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, goal)
    assert solved.status is GoalStatus.CONTRIBUTION_REQUIRED
    assert solved.result > 0

    forward = AnnuityParams(years=10, annual_rate=0.10, initial_value=5000.0, contribution=solved.result)
    projected = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, forward)
    assert projected.future_value == pytest.approx(100000.0, rel=1e-6)


def test_zero_rate_goal_round_trip():
    goal = AnnuityParams(years=3, annual_rate=0.0, initial_value=400.0, target=4000.0)
    solved = solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, goal)
    assert solved.result == pytest.approx(100.0)


def test_goal_already_met_is_tagged():
    goal = AnnuityParams(years=5, annual_rate=0.05, initial_value=100000.0, target=50000.0)
    solved = solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, goal)
    assert solved.result == 0.0
    assert solved.status is GoalStatus.ALREADY_MET
    assert solved.goal_already_met
    assert solved.future_value > 50000.0


def test_goal_exactly_met_counts_as_already_met():
    goal = AnnuityParams(years=1, annual_rate=0.0, initial_value=1000.0, target=1000.0)
    assert solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, goal).status is GoalStatus.ALREADY_MET


@pytest.mark.parametrize(
    "params",
    [
        AnnuityParams(years=0, target=1000.0),
        AnnuityParams(years=None, target=1000.0),
        AnnuityParams(years=5, target=None),
        AnnuityParams(years=5, target=0.0),
        AnnuityParams(years=5, target=-10.0),
        AnnuityParams(years=5, target=1000.0, annual_rate=float("nan")),
    ],
)
def test_goal_mode_without_usable_inputs_returns_none(params):
    assert solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, params) is None


@pytest.mark.parametrize("years", [0, -1, None, float("inf")])
def test_contribution_mode_needs_positive_term(years):
    params = AnnuityParams(years=years, contribution=100.0)
    assert solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params) is None


def test_missing_contribution_counts_as_zero():
    params = AnnuityParams(years=1, annual_rate=0.0, initial_value=250.0)
    solution = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    assert solution.future_value == pytest.approx(250.0)
    assert solution.contribution == 0.0


def test_overflow_returns_none_instead_of_raising():
    params = AnnuityParams(years=1_000_000, annual_rate=1.0, initial_value=1.0, contribution=1.0)
    assert solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params) is None


def test_rate_wiping_out_balance_is_rejected():
    params = AnnuityParams(years=1, annual_rate=-12.0, contribution=1.0)
    assert solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params) is None


def test_yearly_series_matches_closed_form_per_year():
    params = AnnuityParams(years=5, annual_rate=0.08, initial_value=2000.0, contribution=250.0)
    solution = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    series = solution.yearly_series
    assert [row.year for row in series] == [0, 1, 2, 3, 4, 5]
    assert series[0].total_value == pytest.approx(2000.0)
    assert series[0].earnings == pytest.approx(0.0)
    for row in series:
        months = row.year * 12
        assert row.total_value == pytest.approx(future_value(2000.0, 250.0, 0.08 / 12, months))
        assert row.total_contributed == pytest.approx(2000.0 + 250.0 * months)
    assert series[-1].total_value == pytest.approx(solution.future_value)


def test_fractional_years_series_stops_at_last_whole_year():
    params = AnnuityParams(years=2.5, annual_rate=0.05, contribution=10.0)
    solution = solve_annuity(AnnuityMode.SOLVE_FUTURE_VALUE, params)
    assert [row.year for row in solution.yearly_series] == [0, 1, 2]
    assert solution.term_months == pytest.approx(30.0)


def test_goal_series_ends_on_target():
    goal = AnnuityParams(years=4, annual_rate=0.06, initial_value=1000.0, target=20000.0)
    solved = solve_annuity(AnnuityMode.SOLVE_CONTRIBUTION, goal)
    assert solved.yearly_series[-1].total_value == pytest.approx(20000.0, rel=1e-9)


def test_annuity_factor_limit():
    assert annuity_factor(0.0, 24) == 24
    assert annuity_factor(1e-20, 24) == 24
    assert math.isclose(annuity_factor(1e-9, 24), 24, rel_tol=1e-6)
