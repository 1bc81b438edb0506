"""Progressive bracket table and bracket resolution.

The built-in table is the comprehensive-income schedule applied to annual
(cumulative) taxable income. Tax in a bracket is computed with the quick
deduction form: income * rate - quick_deduction, which equals the piecewise
sum across lower brackets.

Alternative tables for other years or jurisdictions can be loaded from YAML
(see load_tax_rules) and must keep the brackets contiguous.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

import yaml
from pydantic import ValidationError

from .schemas import TaxBracket, TaxRules

logger = logging.getLogger(__name__)

# Statutory basic deduction per month
MONTHLY_THRESHOLD = 5000

# (lower_bound, upper_bound, rate, quick_deduction)
_BRACKET_ROWS = [
    (0, 36000, 0.03, 0),
    (36000, 144000, 0.10, 2520),
    (144000, 300000, 0.20, 16920),
    (300000, 420000, 0.25, 31920),
    (420000, 660000, 0.30, 52920),
    (660000, 960000, 0.35, 85920),
    (960000, None, 0.45, 181920),
]

DEFAULT_TAX_RULES = TaxRules(
    name="PRC comprehensive income (2019+)",
    monthly_threshold=MONTHLY_THRESHOLD,
    brackets=[
        TaxBracket(lower_bound=lo, upper_bound=hi, rate=rate, quick_deduction=qd)
        for lo, hi, rate, qd in _BRACKET_ROWS
    ],
)

TAX_BRACKETS = tuple(DEFAULT_TAX_RULES.brackets)


class TaxRulesError(ValueError):
    """Raised when a tax rules file is missing or invalid."""
    pass


def find_bracket(amount: float, brackets: Sequence[TaxBracket] = TAX_BRACKETS) -> Optional[TaxBracket]:
    """Return the bracket containing `amount`, or None if no bracket matches."""
    for bracket in brackets:
        if bracket.contains(amount):
            return bracket
    return None


def resolve_tax(taxable_income: float, brackets: Sequence[TaxBracket] = TAX_BRACKETS) -> float:
    """Compute tax on `taxable_income` with the quick-deduction formula.

    Callers floor negative income before calling; the result is not floored.
    An income that matches no bracket (malformed table) yields 0.
    """
    bracket = find_bracket(taxable_income, brackets)
    if bracket is None:
        logger.warning(f"No bracket matches taxable income {taxable_income}; using 0 tax")
        return 0.0
    return taxable_income * bracket.rate - bracket.quick_deduction


def load_tax_rules(path: Union[str, Path]) -> TaxRules:
    """Load and validate a tax rules YAML file.

    Raises:
        TaxRulesError: If the file is missing, unreadable, unparseable or invalid
    """
    rules_file = Path(path).expanduser()
    if not rules_file.exists():
        raise TaxRulesError(f"Tax rules file not found: {rules_file}")

    try:
        with open(rules_file, "r") as f:
            raw = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise TaxRulesError(f"Cannot parse tax rules file {rules_file}: {e}") from e
    except OSError as e:
        raise TaxRulesError(f"Cannot read tax rules file {rules_file}: {e}") from e

    try:
        rules = TaxRules.model_validate(raw)
    except ValidationError as e:
        raise TaxRulesError(f"Invalid tax rules in {rules_file}:\n{e}") from e

    logger.debug(f"Loaded tax rules '{rules.name}' from {rules_file}")
    return rules


def get_active_tax_rules(path: Optional[Union[str, Path]] = None) -> TaxRules:
    """Return rules from `path`, else from the tax_rules setting, else the defaults."""
    from ..config import get_setting

    if path is None:
        path = get_setting("tax_rules")
    if not path:
        return DEFAULT_TAX_RULES
    return load_tax_rules(path)
