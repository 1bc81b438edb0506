"""Year-end bonus taxation.

Two treatments are available for an annual one-off bonus:

- standalone: the bonus is divided by 12 only to pick a bracket; that
  bracket's rate and quick deduction are then applied to the full bonus.
- merged: the bonus is stacked on top of the year's comprehensive taxable
  income and taxed at the marginal brackets it lands in.

Both are always computed so the caller can show the cost of the choice made.
"""

import logging
from typing import Optional, Sequence

from ..schemas import BonusEvaluation, BonusTreatment
from .brackets import TAX_BRACKETS, resolve_tax
from .schemas import TaxBracket

logger = logging.getLogger(__name__)


def find_monthly_bracket(monthly_amount: float, brackets: Sequence[TaxBracket] = TAX_BRACKETS) -> Optional[TaxBracket]:
    """Bracket whose thresholds, converted to monthly (divided by 12), contain the amount."""
    for bracket in brackets:
        lower = bracket.lower_bound / 12
        upper = None if bracket.upper_bound is None else bracket.upper_bound / 12
        if monthly_amount >= lower and (upper is None or monthly_amount < upper):
            return bracket
    return None


def standalone_bonus_tax(bonus: float, brackets: Sequence[TaxBracket] = TAX_BRACKETS) -> float:
    """Tax on the bonus taxed separately from comprehensive income.

    The monthly-equivalent (bonus / 12) selects the bracket; its rate and
    quick deduction are applied to the whole bonus.
    """
    if bonus <= 0:
        return 0.0

    bracket = find_monthly_bracket(bonus / 12, brackets)
    if bracket is None:
        logger.warning(f"No bracket matches monthly-equivalent bonus {bonus / 12}; using 0 tax")
        return 0.0

    return bonus * bracket.rate - bracket.quick_deduction


def merged_bonus_tax(
    bonus: float,
    annual_taxable_income: float,
    brackets: Sequence[TaxBracket] = TAX_BRACKETS,
) -> float:
    """Additional tax from folding the bonus into annual taxable income."""
    if bonus <= 0:
        return 0.0
    return resolve_tax(annual_taxable_income + bonus, brackets) - resolve_tax(annual_taxable_income, brackets)


def evaluate_bonus(
    bonus: float,
    chosen: BonusTreatment,
    annual_taxable_income: float,
    annual_tax: float,
    brackets: Sequence[TaxBracket] = TAX_BRACKETS,
) -> BonusEvaluation:
    """Compare both bonus treatments and recommend the cheaper one.

    Args:
        bonus: Year-end bonus amount
        chosen: Treatment the user selected
        annual_taxable_income: Comprehensive taxable income for the year (no bonus)
        annual_tax: Tax on annual_taxable_income
        brackets: Bracket table

    Returns:
        BonusEvaluation. With no bonus every figure is 0 and there is no
        recommendation. On a tie the chosen treatment is recommended.
    """
    if bonus <= 0:
        return BonusEvaluation()

    standalone = standalone_bonus_tax(bonus, brackets)
    merged = merged_bonus_tax(bonus, annual_taxable_income, brackets)
    by_treatment = {"standalone": standalone, "merged": merged}

    chosen_tax = by_treatment[chosen]
    other = "merged" if chosen == "standalone" else "standalone"
    recommended = other if by_treatment[other] < chosen_tax else chosen
    recommended_tax = by_treatment[recommended]

    logger.debug(
        f"Bonus {bonus:.2f}: standalone {standalone:.2f}, merged {merged:.2f} "
        f"(annual tax before bonus {annual_tax:.2f}); recommend {recommended}"
    )

    return BonusEvaluation(
        bonus_tax=chosen_tax,
        recommended_treatment=recommended,
        recommended_tax=recommended_tax,
        savings=chosen_tax - recommended_tax,
        standalone_tax=standalone,
        merged_tax=merged,
    )
