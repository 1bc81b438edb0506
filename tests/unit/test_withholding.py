"""Tests for monthly taxable income and cumulative withholding.

Scenarios:
1. Salary 10000, default ratios: stays in the 3% bracket all year
2. Salary 50000: cumulative income crosses brackets during the year
3. Deductions larger than income: taxable income floors at zero
"""

import pytest

from iitcalc.sdk.schemas import SpecialDeductions
from iitcalc.sdk.taxes import (
    TaxBracket,
    calc_cumulative_withholding,
    deduction_breakdown,
    housing_fund_withholding,
    monthly_taxable_income,
    resolve_tax,
    social_security_withholding,
    special_deduction_total,
)


def _params(salary, **kwargs):
    params = dict(
        salary=salary,
        other_income=0,
        housing_fund_ratio=0.12,
        ss_mode="ratio",
        ss_ratio=0.105,
        ss_fixed=0,
        special_deduction=0,
        other_deduction=0,
    )
    params.update(kwargs)
    return params


def _taxable(salary, **kwargs):
    return monthly_taxable_income(**_params(salary, **kwargs))


class TestMonthlyTaxableIncome:
    """Threshold, social insurance, housing fund and deductions."""

    def test_salary_10000(self):
        """10000 - 5000 - 1050 - 1200 = 2750."""
        assert _taxable(10000) == pytest.approx(2750)

    def test_salary_50000(self):
        """50000 - 5000 - 5250 - 6000 = 33750."""
        assert _taxable(50000) == pytest.approx(33750)

    def test_other_income_included_in_ratio_base(self):
        """Ratios apply to salary + other income."""
        assert _taxable(8000, other_income=2000) == pytest.approx(2750)

    def test_fixed_social_security(self):
        """Fixed mode ignores the ratio."""
        assert _taxable(10000, ss_mode="fixed", ss_fixed=800, ss_ratio=0.5) == pytest.approx(3000)

    def test_special_and_other_deductions(self):
        assert _taxable(10000, special_deduction=1500, other_deduction=250) == pytest.approx(1000)

    def test_custom_threshold(self):
        assert _taxable(10000, threshold=3500) == pytest.approx(4250)

    def test_floor_at_zero(self):
        """Deductions exceeding income never give negative taxable income."""
        assert _taxable(6000) == 0
        assert _taxable(10000, special_deduction=50000) == 0
        assert _taxable(0) == 0

    def test_helpers(self):
        assert social_security_withholding(10000, "ratio", 0.105, 999) == pytest.approx(1050)
        assert social_security_withholding(10000, "fixed", 0.105, 999) == 999
        assert housing_fund_withholding(10000, 0.07) == pytest.approx(700)

    def test_special_deduction_total(self):
        deductions = SpecialDeductions(
            children_education=2000,
            continuing_education=400,
            major_disease_medical=0,
            housing_loan_interest=1000,
            housing_rent=0,
            elderly_support=3000,
        )
        assert special_deduction_total(deductions) == 6400


class TestDeductionBreakdown:
    """Itemized amounts behind the monthly taxable income."""

    def test_itemized_amounts(self):
        breakdown = deduction_breakdown(**_params(8000, other_income=2000, special_deduction=1500))

        assert breakdown.salary == 8000
        assert breakdown.other_income == 2000
        assert breakdown.total_income == 10000
        assert breakdown.social_security == pytest.approx(1050)
        assert breakdown.housing_fund == pytest.approx(1200)
        assert breakdown.special_deduction_total == 1500
        assert breakdown.total_deduction == pytest.approx(8750)
        assert breakdown.taxable_income == pytest.approx(1250)

    def test_fixed_mode_has_no_ratio(self):
        breakdown = deduction_breakdown(**_params(10000, ss_mode="fixed", ss_fixed=800))

        assert breakdown.social_security == 800
        assert breakdown.social_security_ratio is None

    def test_taxable_income_floored(self):
        breakdown = deduction_breakdown(**_params(3000))

        assert breakdown.total_deduction > breakdown.total_income
        assert breakdown.taxable_income == 0


class TestCumulativeWithholding:
    """Cumulative (year-to-date) method over 12 months."""

    def test_twelve_months_in_order(self):
        results = calc_cumulative_withholding(2750)
        assert [r.month for r in results] == list(range(1, 13))

    def test_scenario_1_flat_bracket(self):
        """2750/month stays under 36000 all year: 82.5 every month."""
        results = calc_cumulative_withholding(2750)

        assert results[0].tax_amount == pytest.approx(82.5)
        for r in results:
            assert r.taxable_income == 2750
            assert r.tax_amount == pytest.approx(82.5)
        assert results[-1].cumulative_taxable_income == pytest.approx(33000)
        assert results[-1].cumulative_tax_amount == pytest.approx(990)

    def test_scenario_2_bracket_crossing(self):
        """33750/month crosses 36000 in month 2 and 144000 in month 5."""
        results = calc_cumulative_withholding(33750)

        # Month 1: 33750 x 3%
        assert results[0].tax_amount == pytest.approx(1012.5)
        # Month 2: 67500 x 10% - 2520 = 4230, minus 1012.5
        assert results[1].cumulative_tax_amount == pytest.approx(4230)
        assert results[1].tax_amount == pytest.approx(3217.5)
        # Months 3-4 fully in the 10% bracket
        assert results[2].tax_amount == pytest.approx(3375)
        assert results[3].tax_amount == pytest.approx(3375)
        # Month 5: 168750 x 20% - 16920 = 16830, minus 10980
        assert results[4].tax_amount == pytest.approx(5850)
        # Month 12: 405000 x 25% - 31920
        assert results[-1].cumulative_taxable_income == pytest.approx(405000)
        assert results[-1].cumulative_tax_amount == pytest.approx(69330)

    def test_later_months_never_lower(self):
        """Withholding rises (or holds) as the cumulative figure climbs brackets."""
        results = calc_cumulative_withholding(33750)
        amounts = [r.tax_amount for r in results]
        for earlier, later in zip(amounts, amounts[1:]):
            assert later >= earlier - 1e-9

    @pytest.mark.parametrize("monthly", [0, 1000, 2750, 12000, 33750, 90000, 250000])
    def test_sum_equals_annual_tax(self, monthly):
        """Sum of monthly withholding equals tax on 12 x monthly taxable income."""
        results = calc_cumulative_withholding(monthly)
        total = sum(r.tax_amount for r in results)
        assert total == pytest.approx(resolve_tax(12 * monthly))
        assert results[-1].cumulative_tax_amount == pytest.approx(resolve_tax(12 * monthly))

    def test_zero_income(self):
        results = calc_cumulative_withholding(0)
        assert all(r.tax_amount == 0 for r in results)
        assert results[-1].cumulative_tax_amount == 0

    def test_negative_delta_reported_as_zero(self):
        """When cumulative tax falls, that month reports 0 withholding."""
        table = [
            TaxBracket(lower_bound=0, upper_bound=1000, rate=0.1),
            TaxBracket(lower_bound=1000, upper_bound=None, rate=0.2, quick_deduction=250),
        ]
        results = calc_cumulative_withholding(500, table, months=3)

        # Month 1: 50; month 2: 1000 x 20% - 250 = -50 -> delta -100 floored to 0
        assert results[0].tax_amount == pytest.approx(50)
        assert results[1].tax_amount == 0
        assert results[1].cumulative_tax_amount == pytest.approx(-50)
        # Month 3: 1500 x 20% - 250 = 50 -> delta from -50 is +100
        assert results[2].tax_amount == pytest.approx(100)
