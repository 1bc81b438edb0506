"""Tax calculation command and shared input options."""

import json
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError
from rich.console import Console

from iitcalc.sdk import (
    SchemeStore,
    TaxInput,
    TaxRulesError,
    calculate_tax,
    get_active_tax_rules,
    get_output_format,
    result_to_dict,
    write_result_csv,
)
from iitcalc.sdk.config import OUTPUT_FORMATS

from .renderers.result_renderer import render_result

# CLI option name -> TaxInput field
INPUT_FIELDS = {
    "salary": "monthly_salary",
    "other_income": "monthly_other_income",
    "housing_fund_ratio": "housing_fund_ratio",
    "ss_mode": "social_security_mode",
    "ss_ratio": "social_security_ratio",
    "ss_fixed": "social_security_fixed",
    "other_deduction": "other_deduction",
    "bonus": "year_end_bonus",
    "bonus_treatment": "bonus_treatment",
}

# CLI option name -> SpecialDeductions field
SPECIAL_DEDUCTION_FIELDS = {
    "children_education": "children_education",
    "continuing_education": "continuing_education",
    "major_disease_medical": "major_disease_medical",
    "housing_loan_interest": "housing_loan_interest",
    "housing_rent": "housing_rent",
    "elderly_support": "elderly_support",
}

_INPUT_OPTIONS = [
    click.option("--salary", type=float, help="Monthly salary"),
    click.option("--other-income", type=float, help="Other monthly income (allowances etc.)"),
    click.option("--housing-fund-ratio", type=float, help="Housing fund ratio (default: 0.12)"),
    click.option("--ss-mode", type=click.Choice(["ratio", "fixed"]), help="Social insurance by ratio or fixed amount"),
    click.option("--ss-ratio", type=float, help="Social insurance ratio (default: 0.105)"),
    click.option("--ss-fixed", type=float, help="Fixed monthly social insurance amount"),
    click.option("--children-education", type=float, help="Monthly children's education deduction"),
    click.option("--continuing-education", type=float, help="Monthly continuing education deduction"),
    click.option("--major-disease-medical", type=float, help="Monthly major disease medical deduction"),
    click.option("--housing-loan-interest", type=float, help="Monthly housing loan interest deduction"),
    click.option("--housing-rent", type=float, help="Monthly housing rent deduction"),
    click.option("--elderly-support", type=float, help="Monthly elderly support deduction"),
    click.option("--other-deduction", type=float, help="Other monthly deductions"),
    click.option("--bonus", type=float, help="Year-end bonus"),
    click.option("--bonus-treatment", type=click.Choice(["standalone", "merged"]),
                 help="Bonus taxed standalone or merged into annual income"),
]


def tax_input_options(func):
    """Decorator adding all TaxInput options to a command."""
    for option in reversed(_INPUT_OPTIONS):
        func = option(func)
    return func


def has_input_options(options: Dict[str, Any]) -> bool:
    """True if any input option was given on the command line."""
    names = list(INPUT_FIELDS) + list(SPECIAL_DEDUCTION_FIELDS)
    return any(options.get(name) is not None for name in names)


def build_tax_input(options: Dict[str, Any], base: Optional[TaxInput] = None) -> TaxInput:
    """Build a TaxInput from CLI options layered over `base`.

    Options left unset keep the base value (or the schema default).

    Raises:
        click.ClickException: If the resulting input is invalid
    """
    data = base.model_dump() if base else {}
    special = dict(data.get("special_deductions") or {})

    for option_name, field in INPUT_FIELDS.items():
        if options.get(option_name) is not None:
            data[field] = options[option_name]

    for option_name, field in SPECIAL_DEDUCTION_FIELDS.items():
        if options.get(option_name) is not None:
            special[field] = options[option_name]

    data["special_deductions"] = special

    try:
        return TaxInput.model_validate(data)
    except ValidationError as e:
        raise click.ClickException(format_validation_error(e))


def format_validation_error(error: ValidationError) -> str:
    """Format a pydantic ValidationError as one line per field."""
    lines = ["Invalid input:"]
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "input"
        lines.append(f"  {loc}: {err['msg']}")
    return "\n".join(lines)


@click.command("calc")
@tax_input_options
@click.option("--scheme", "scheme_id", help="Start from a saved scheme (options override its values)")
@click.option("--rules", "rules_path", type=click.Path(), help="Tax rules YAML (default: settings or built-in)")
@click.option("--format", "output_format", type=click.Choice(OUTPUT_FORMATS), default=None,
              help="Output format (default: settings or 'table')")
def calc(scheme_id, rules_path, output_format, **input_options):
    """Calculate monthly withholding and the annual tax report.

    The monthly profile is assumed to repeat for all 12 months. Withholding
    uses the cumulative method, and a year-end bonus is evaluated under both
    standalone and merged treatments.

    Examples:
        iit-calc calc --salary 10000
        iit-calc calc --salary 50000 --bonus 120000 --bonus-treatment merged
        iit-calc calc --scheme 3fa2b1c9 --format json
    """
    base = None
    if scheme_id:
        base = SchemeStore().load(scheme_id)
        if base is None:
            raise click.ClickException(f"Scheme not found: {scheme_id}")

    tax_input = build_tax_input(input_options, base)

    try:
        rules = get_active_tax_rules(rules_path)
    except TaxRulesError as e:
        raise click.ClickException(str(e))

    result = calculate_tax(tax_input, rules)
    output_format = output_format or get_output_format()

    if output_format == "json":
        click.echo(json.dumps(result_to_dict(result), indent=2))
    elif output_format == "csv":
        click.echo(write_result_csv(result), nl=False)
    else:
        render_result(Console(), result, rules.name)
