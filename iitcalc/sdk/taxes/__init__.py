"""taxes - Tax calculation and withholding logic.

Scope:
- Progressive bracket table with quick deductions
- Monthly taxable income (threshold, social insurance, housing fund, deductions)
- Cumulative (year-to-date) withholding across months 1..12
- Year-end bonus: standalone vs merged treatment comparison

Constraints:
- Pure calculation - no I/O except explicit rules loading
- No scheme access - receives data, returns results
- Alternative bracket tables loaded from YAML via load_tax_rules

Modules:
- brackets: Bracket table, bracket resolution, rules loading
- withholding: Monthly taxable income and cumulative withholding
- bonus: Year-end bonus treatments and recommendation

Usage:
    from iitcalc.sdk.taxes import resolve_tax, calc_cumulative_withholding

    tax = resolve_tax(120000)
    months = calc_cumulative_withholding(monthly_taxable=2750)
"""

# Bracket table and resolution
from .brackets import (
    DEFAULT_TAX_RULES,
    MONTHLY_THRESHOLD,
    TAX_BRACKETS,
    TaxRulesError,
    find_bracket,
    get_active_tax_rules,
    load_tax_rules,
    resolve_tax,
)

# Tax rules schemas
from .schemas import TaxBracket, TaxRules

# Monthly and cumulative withholding
from .withholding import (
    calc_cumulative_withholding,
    deduction_breakdown,
    housing_fund_withholding,
    monthly_taxable_income,
    social_security_withholding,
    special_deduction_total,
)

# Bonus treatments
from .bonus import evaluate_bonus, find_monthly_bracket, merged_bonus_tax, standalone_bonus_tax

__all__ = [
    # Brackets
    "DEFAULT_TAX_RULES",
    "MONTHLY_THRESHOLD",
    "TAX_BRACKETS",
    "TaxRulesError",
    "find_bracket",
    "get_active_tax_rules",
    "load_tax_rules",
    "resolve_tax",
    # Rules
    "TaxBracket",
    "TaxRules",
    # Withholding
    "calc_cumulative_withholding",
    "deduction_breakdown",
    "housing_fund_withholding",
    "monthly_taxable_income",
    "social_security_withholding",
    "special_deduction_total",
    # Bonus
    "evaluate_bonus",
    "find_monthly_bracket",
    "merged_bonus_tax",
    "standalone_bonus_tax",
]
