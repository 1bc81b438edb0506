"""Assemble the full calculation result from the tax engine pieces."""

import logging

from .schemas import AnnualTaxResult, TaxCalculationResult, TaxInput
from .taxes.bonus import evaluate_bonus
from .taxes.brackets import DEFAULT_TAX_RULES
from .taxes.schemas import TaxRules
from .taxes.withholding import (
    calc_cumulative_withholding,
    deduction_breakdown,
    special_deduction_total,
)

logger = logging.getLogger(__name__)


def calculate_annual_tax(tax_input: TaxInput, rules: TaxRules = DEFAULT_TAX_RULES) -> AnnualTaxResult:
    """Run cumulative withholding for the year and evaluate the bonus."""
    deductions = deduction_breakdown(
        salary=tax_input.monthly_salary,
        other_income=tax_input.monthly_other_income,
        housing_fund_ratio=tax_input.housing_fund_ratio,
        ss_mode=tax_input.social_security_mode,
        ss_ratio=tax_input.social_security_ratio,
        ss_fixed=tax_input.social_security_fixed,
        special_deduction=special_deduction_total(tax_input.special_deductions),
        other_deduction=tax_input.other_deduction,
        threshold=rules.monthly_threshold,
    )
    taxable = deductions.taxable_income

    monthly_results = calc_cumulative_withholding(taxable, rules.brackets)
    total_taxable_income = monthly_results[-1].cumulative_taxable_income
    total_tax_amount = monthly_results[-1].cumulative_tax_amount

    bonus = evaluate_bonus(
        tax_input.year_end_bonus,
        tax_input.bonus_treatment,
        total_taxable_income,
        total_tax_amount,
        rules.brackets,
    )

    return AnnualTaxResult(
        total_taxable_income=total_taxable_income,
        total_tax_amount=total_tax_amount,
        refundable_tax=0,
        monthly_results=monthly_results,
        deductions=deductions,
        bonus_taxable_income=max(0, tax_input.year_end_bonus),
        bonus_tax_amount=bonus.bonus_tax,
        total_with_bonus_tax=total_tax_amount + bonus.bonus_tax,
        recommended_bonus_treatment=bonus.recommended_treatment,
        recommended_bonus_tax=bonus.recommended_tax,
        bonus_tax_savings=bonus.savings,
        standalone_bonus_tax=bonus.standalone_tax,
        merged_bonus_tax=bonus.merged_tax,
    )


def calculate_tax(tax_input: TaxInput, rules: TaxRules = DEFAULT_TAX_RULES) -> TaxCalculationResult:
    """Calculate this month's withholding and the annual report.

    Pure function of the input and the rules; calling it twice with the
    same input yields equal results.
    """
    annual = calculate_annual_tax(tax_input, rules)
    result = TaxCalculationResult(
        monthly_tax=annual.monthly_results[0].tax_amount,
        annual_result=annual,
    )
    logger.debug(
        f"Calculated with '{rules.name}': monthly {result.monthly_tax:.2f}, "
        f"annual {annual.total_with_bonus_tax:.2f}"
    )
    return result
