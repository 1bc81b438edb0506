"""Rich renderer for tax calculation results.

Transforms SDK result models into formatted Rich tables.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from iitcalc.sdk.schemas import AnnualTaxResult, MonthlyDeductionBreakdown, TaxCalculationResult
from iitcalc.sdk.schemes import SchemeSummary

TREATMENT_LABELS = {
    "standalone": "Standalone",
    "merged": "Merged into annual income",
}


def render_result(console: Console, result: TaxCalculationResult, rules_name: str = "") -> None:
    """Render a calculation result as Rich tables.

    Args:
        console: Rich Console instance
        result: Output of calculate_tax()
        rules_name: Label of the tax rules used
    """
    annual = result.annual_result
    _render_summary(console, result, rules_name)
    _render_deductions(console, annual)
    _render_monthly_table(console, annual)
    if annual.bonus_taxable_income > 0:
        _render_bonus_table(console, annual)


def _render_summary(console: Console, result: TaxCalculationResult, rules_name: str) -> None:
    """Render headline figures panel."""
    annual = result.annual_result
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    table.add_row("This month's withholding", f"[bold]{_fmt(result.monthly_tax)}[/bold]")
    table.add_row("Annual taxable income", _fmt(annual.total_taxable_income))
    table.add_row("Annual tax (wages)", _fmt(annual.total_tax_amount))
    if annual.bonus_taxable_income > 0:
        table.add_row("Bonus tax", _fmt(annual.bonus_tax_amount))
    table.add_row("Annual tax (total)", f"[bold]{_fmt(annual.total_with_bonus_tax)}[/bold]")
    table.add_row("Refund / (owed)", _fmt(annual.refundable_tax))

    title = f"Summary ({rules_name})" if rules_name else "Summary"
    console.print(Panel(table, title=title, border_style="dim"))


def _render_deductions(console: Console, annual: AnnualTaxResult) -> None:
    """Render the monthly income and deduction breakdown."""
    deductions: MonthlyDeductionBreakdown = annual.deductions
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value", justify="right")

    if deductions.social_security_ratio is None:
        ss_label = "Social insurance (fixed)"
    else:
        ss_label = f"Social insurance ({_pct(deductions.social_security_ratio)})"

    table.add_row("Salary", _fmt(deductions.salary))
    table.add_row("Other income", _fmt(deductions.other_income))
    table.add_row("Total income", f"[bold]{_fmt(deductions.total_income)}[/bold]")
    table.add_row(ss_label, _fmt(deductions.social_security))
    table.add_row(f"Housing fund ({_pct(deductions.housing_fund_ratio)})", _fmt(deductions.housing_fund))
    table.add_row("Special deductions", _fmt(deductions.special_deduction_total))
    table.add_row("Other deductions", _fmt(deductions.other_deduction))
    table.add_row("Basic deduction", _fmt(deductions.threshold))
    table.add_row("Taxable income", f"[bold]{_fmt(deductions.taxable_income)}[/bold]")

    console.print(Panel(table, title="Income & deductions (monthly)", border_style="dim"))


def _render_monthly_table(console: Console, annual: AnnualTaxResult) -> None:
    """Render the 12-month cumulative withholding table."""
    table = Table(title="Cumulative Withholding", box=box.ROUNDED)
    table.add_column("Month", justify="right")
    table.add_column("Taxable", justify="right", min_width=12)
    table.add_column("Tax", justify="right", min_width=12)
    table.add_column("YTD Taxable", justify="right", min_width=12)
    table.add_column("YTD Tax", justify="right", min_width=12)

    for month in annual.monthly_results:
        table.add_row(
            str(month.month),
            _fmt(month.taxable_income),
            _fmt(month.tax_amount),
            _fmt(month.cumulative_taxable_income),
            _fmt(month.cumulative_tax_amount),
        )

    table.add_row(
        "[bold]Total[/bold]",
        f"[bold]{_fmt(annual.total_taxable_income)}[/bold]",
        f"[bold]{_fmt(annual.total_tax_amount)}[/bold]",
        "",
        "",
    )
    console.print(table)


def _render_bonus_table(console: Console, annual: AnnualTaxResult) -> None:
    """Render the bonus treatment comparison."""
    recommended = annual.recommended_bonus_treatment

    table = Table(title=f"Year-end Bonus: {_fmt(annual.bonus_taxable_income)}", box=box.ROUNDED)
    table.add_column("Treatment", min_width=25)
    table.add_column("Bonus Tax", justify="right", min_width=12)
    table.add_column("", min_width=12)

    for key, amount in (
        ("standalone", annual.standalone_bonus_tax),
        ("merged", annual.merged_bonus_tax),
    ):
        marker = "[green]recommended[/green]" if key == recommended else ""
        table.add_row(TREATMENT_LABELS[key], _fmt(amount), marker)

    console.print(table)

    if annual.bonus_tax_savings > 0:
        console.print(
            f"[yellow]Switching to {TREATMENT_LABELS[recommended].lower()} treatment "
            f"saves {_fmt(annual.bonus_tax_savings)}.[/yellow]"
        )


def render_scheme_list(console: Console, schemes: List[SchemeSummary]) -> None:
    """Render saved schemes as a table."""
    table = Table(title="Saved Schemes", box=box.ROUNDED)
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Updated", style="dim")

    for scheme in schemes:
        table.add_row(scheme.id, scheme.name, scheme.updated_at[:19].replace("T", " "))

    console.print(table)


def _fmt(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"¥{amount:,.2f}"


def _pct(ratio: float) -> str:
    return f"{ratio * 100:g}%"
