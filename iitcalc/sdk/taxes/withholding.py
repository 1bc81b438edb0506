"""Monthly taxable income and cumulative withholding.

Wage withholding is not a flat monthly bracket lookup. Each month the annual
bracket table is applied to year-to-date taxable income, and that month's
withholding is the increase in cumulative tax over what was already withheld.
Early months sit in low brackets; later months catch up as the cumulative
figure crosses bracket boundaries.
"""

import logging
from typing import List, Sequence

from ..schemas import (
    MonthlyDeductionBreakdown,
    MonthlyTaxResult,
    SocialSecurityMode,
    SpecialDeductions,
)
from .brackets import MONTHLY_THRESHOLD, TAX_BRACKETS, resolve_tax
from .schemas import TaxBracket

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def social_security_withholding(
    total_income: float,
    mode: SocialSecurityMode,
    ratio: float,
    fixed: float,
) -> float:
    """Employee social insurance for the month.

    In "fixed" mode the fixed amount is used as-is; otherwise the ratio is
    applied to total monthly income.
    """
    if mode == "fixed":
        return fixed
    return total_income * ratio


def housing_fund_withholding(total_income: float, ratio: float) -> float:
    """Employee housing provident fund contribution for the month."""
    return total_income * ratio


def special_deduction_total(deductions: SpecialDeductions) -> float:
    """Sum of the six special additional deduction categories."""
    return deductions.total


def deduction_breakdown(
    salary: float,
    other_income: float,
    housing_fund_ratio: float,
    ss_mode: SocialSecurityMode,
    ss_ratio: float,
    ss_fixed: float,
    special_deduction: float,
    other_deduction: float,
    threshold: float = MONTHLY_THRESHOLD,
) -> MonthlyDeductionBreakdown:
    """Itemize one month's income and deductions.

    Args:
        salary: Monthly wage income
        other_income: Other monthly income
        housing_fund_ratio: Housing fund ratio applied to total income
        ss_mode: "ratio" or "fixed"
        ss_ratio: Social insurance ratio (ratio mode)
        ss_fixed: Social insurance amount (fixed mode)
        special_deduction: Total of special additional deductions
        other_deduction: Other monthly deductions
        threshold: Statutory monthly basic deduction
    """
    total_income = salary + other_income

    return MonthlyDeductionBreakdown(
        salary=salary,
        other_income=other_income,
        total_income=total_income,
        social_security=social_security_withholding(total_income, ss_mode, ss_ratio, ss_fixed),
        social_security_ratio=None if ss_mode == "fixed" else ss_ratio,
        housing_fund=housing_fund_withholding(total_income, housing_fund_ratio),
        housing_fund_ratio=housing_fund_ratio,
        special_deduction_total=special_deduction,
        other_deduction=other_deduction,
        threshold=threshold,
    )


def monthly_taxable_income(
    salary: float,
    other_income: float,
    housing_fund_ratio: float,
    ss_mode: SocialSecurityMode,
    ss_ratio: float,
    ss_fixed: float,
    special_deduction: float,
    other_deduction: float,
    threshold: float = MONTHLY_THRESHOLD,
) -> float:
    """Taxable income for one month, never negative.

    Takes the same arguments as deduction_breakdown().

    Returns:
        max(0, total income - all deductions). Excess deductions are not
        carried to other months.
    """
    return deduction_breakdown(
        salary, other_income, housing_fund_ratio, ss_mode, ss_ratio, ss_fixed,
        special_deduction, other_deduction, threshold,
    ).taxable_income


def calc_cumulative_withholding(
    monthly_taxable: float,
    brackets: Sequence[TaxBracket] = TAX_BRACKETS,
    months: int = MONTHS_PER_YEAR,
) -> List[MonthlyTaxResult]:
    """Run the cumulative withholding method over months 1..12.

    The same monthly taxable income is assumed for every month. Each month:
    cumulative income grows, tax is resolved on the cumulative figure, and
    the month's withholding is the delta against tax already withheld.

    The withheld total tracks the unfloored cumulative tax so a negative
    delta in one month does not skew later months; only the reported
    per-month amount is floored at zero.

    Returns:
        List of MonthlyTaxResult, one per month in order
    """
    results = []
    cumulative_taxable_income = 0.0
    cumulative_tax_withheld = 0.0

    for month in range(1, months + 1):
        cumulative_taxable_income += monthly_taxable
        cumulative_tax = resolve_tax(cumulative_taxable_income, brackets)
        incremental_tax = cumulative_tax - cumulative_tax_withheld

        results.append(MonthlyTaxResult(
            month=month,
            taxable_income=monthly_taxable,
            tax_amount=max(0, incremental_tax),
            cumulative_taxable_income=cumulative_taxable_income,
            cumulative_tax_amount=cumulative_tax,
        ))

        cumulative_tax_withheld = cumulative_tax

    logger.debug(
        f"Cumulative withholding: {months} months, "
        f"income {cumulative_taxable_income:.2f}, tax {cumulative_tax_withheld:.2f}"
    )
    return results
