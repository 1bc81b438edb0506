"""Tests for year-end bonus treatments and the recommendation."""

import pytest

from iitcalc.sdk.taxes import (
    evaluate_bonus,
    find_monthly_bracket,
    merged_bonus_tax,
    resolve_tax,
    standalone_bonus_tax,
)


class TestStandaloneBonusTax:
    """Bracket picked from bonus / 12, formula applied to the whole bonus."""

    def test_scenario_3(self):
        """120000 / 12 = 10000 -> 10% bracket, 2520 deduction -> 9480."""
        bracket = find_monthly_bracket(10000)
        assert bracket.rate == 0.10
        assert bracket.quick_deduction == 2520
        assert standalone_bonus_tax(120000) == pytest.approx(9480)

    def test_small_bonus_lowest_bracket(self):
        """24000 / 12 = 2000 -> 3%."""
        assert standalone_bonus_tax(24000) == pytest.approx(720)

    def test_monthly_boundary_inclusive(self):
        """36000 / 12 = 3000 sits at the start of the 10% bracket."""
        assert find_monthly_bracket(3000).rate == 0.10
        assert find_monthly_bracket(2999.99).rate == 0.03

    def test_top_bracket(self):
        """1,200,000 / 12 = 100000 -> 45%."""
        assert standalone_bonus_tax(1_200_000) == pytest.approx(1_200_000 * 0.45 - 181920)

    def test_zero_or_negative(self):
        assert standalone_bonus_tax(0) == 0
        assert standalone_bonus_tax(-100) == 0


class TestMergedBonusTax:
    """Bonus stacked on annual taxable income."""

    def test_on_top_of_income(self):
        """tax(33000 + 120000) - tax(33000) = 13680 - 990."""
        assert merged_bonus_tax(120000, 33000) == pytest.approx(12690)

    def test_no_other_income(self):
        assert merged_bonus_tax(120000, 0) == pytest.approx(resolve_tax(120000))

    def test_zero_bonus(self):
        assert merged_bonus_tax(0, 50000) == 0


class TestEvaluateBonus:
    """Both treatments computed; cheaper one recommended."""

    def test_scenario_4_no_bonus(self):
        """Zero bonus: all figures 0 and no recommendation."""
        evaluation = evaluate_bonus(0, "standalone", 33000, 990)

        assert evaluation.bonus_tax == 0
        assert evaluation.standalone_tax == 0
        assert evaluation.merged_tax == 0
        assert evaluation.recommended_tax == 0
        assert evaluation.savings == 0
        assert evaluation.recommended_treatment is None

    def test_standalone_chosen_and_optimal(self):
        evaluation = evaluate_bonus(120000, "standalone", 33000, 990)

        assert evaluation.bonus_tax == pytest.approx(9480)
        assert evaluation.standalone_tax == pytest.approx(9480)
        assert evaluation.merged_tax == pytest.approx(12690)
        assert evaluation.recommended_treatment == "standalone"
        assert evaluation.recommended_tax == pytest.approx(9480)
        assert evaluation.savings == 0

    def test_merged_chosen_reports_savings(self):
        """Choosing merged costs 12690 - 9480 = 3210 more."""
        evaluation = evaluate_bonus(120000, "merged", 33000, 990)

        assert evaluation.bonus_tax == pytest.approx(12690)
        assert evaluation.recommended_treatment == "standalone"
        assert evaluation.savings == pytest.approx(3210)

    def test_tie_keeps_chosen_treatment(self):
        """With no other income both treatments cost the same."""
        evaluation = evaluate_bonus(40000, "merged", 0, 0)

        assert evaluation.standalone_tax == pytest.approx(evaluation.merged_tax)
        assert evaluation.recommended_treatment == "merged"
        assert evaluation.savings == 0

    @pytest.mark.parametrize("bonus", [1000, 36000, 120000, 500000, 2_000_000])
    @pytest.mark.parametrize("annual_income", [0, 33000, 405000])
    @pytest.mark.parametrize("chosen", ["standalone", "merged"])
    def test_recommendation_is_minimum(self, bonus, annual_income, chosen):
        evaluation = evaluate_bonus(bonus, chosen, annual_income, resolve_tax(annual_income))

        assert evaluation.savings >= 0
        assert evaluation.recommended_tax == min(evaluation.standalone_tax, evaluation.merged_tax)
        assert evaluation.bonus_tax - evaluation.savings == pytest.approx(evaluation.recommended_tax)
