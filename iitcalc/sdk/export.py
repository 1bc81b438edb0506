"""Serialize calculation results to JSON-ready dicts and CSV."""

import csv
import io
from pathlib import Path
from typing import Optional

from .schemas import TaxCalculationResult

CSV_HEADER = [
    "month",
    "taxable_income",
    "tax_amount",
    "cumulative_taxable_income",
    "cumulative_tax_amount",
]

DEDUCTION_FIELDS = [
    "salary",
    "other_income",
    "total_income",
    "social_security",
    "housing_fund",
    "special_deduction_total",
    "other_deduction",
    "threshold",
]


def result_to_dict(result: TaxCalculationResult) -> dict:
    """Convert a result to a plain dict suitable for json.dumps."""
    return result.model_dump(mode="json")


def _write_result_rows(writer, result: TaxCalculationResult) -> None:
    """Write monthly rows, an annual total row, the deduction breakdown and bonus rows."""
    annual = result.annual_result
    writer.writerow(CSV_HEADER)
    for month in annual.monthly_results:
        writer.writerow([
            month.month,
            f"{month.taxable_income:.2f}",
            f"{month.tax_amount:.2f}",
            f"{month.cumulative_taxable_income:.2f}",
            f"{month.cumulative_tax_amount:.2f}",
        ])
    writer.writerow([
        "total",
        f"{annual.total_taxable_income:.2f}",
        f"{annual.total_tax_amount:.2f}",
        "",
        "",
    ])

    deductions = annual.deductions
    writer.writerow([])
    writer.writerow(["deduction", "monthly_amount"])
    for field in DEDUCTION_FIELDS:
        writer.writerow([field, f"{getattr(deductions, field):.2f}"])
    writer.writerow(["taxable_income", f"{deductions.taxable_income:.2f}"])

    if annual.bonus_taxable_income > 0:
        writer.writerow([])
        writer.writerow(["bonus", "taxable_income", "tax_amount", "total_with_bonus_tax", "recommended"])
        writer.writerow([
            "bonus",
            f"{annual.bonus_taxable_income:.2f}",
            f"{annual.bonus_tax_amount:.2f}",
            f"{annual.total_with_bonus_tax:.2f}",
            annual.recommended_bonus_treatment or "",
        ])


def write_result_csv(result: TaxCalculationResult, output_path: Optional[Path] = None) -> str:
    """Render a result as CSV.

    Args:
        result: Calculation result
        output_path: Optional file to also write the CSV to

    Returns:
        CSV content as a string
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    _write_result_rows(writer, result)
    content = buffer.getvalue()

    if output_path is not None:
        with open(output_path, "w", newline="") as f:
            f.write(content)

    return content
