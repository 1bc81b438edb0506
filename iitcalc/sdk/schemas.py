"""Pydantic schemas for calculation inputs and results.

All schemas use extra='forbid' to reject unknown fields, ensuring
typos in saved schemes cause clear errors rather than silent ignoring.
"""

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

SocialSecurityMode = Literal["ratio", "fixed"]
BonusTreatment = Literal["standalone", "merged"]

DEFAULT_HOUSING_FUND_RATIO = 0.12
# Pension 8% + medical 2% + unemployment 0.5%
DEFAULT_SOCIAL_SECURITY_RATIO = 0.105


# =============================================================================
# Input
# =============================================================================


class SpecialDeductions(BaseModel):
    """Monthly itemized special additional deductions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    children_education: float = Field(default=0, ge=0)
    continuing_education: float = Field(default=0, ge=0)
    major_disease_medical: float = Field(default=0, ge=0)
    housing_loan_interest: float = Field(default=0, ge=0)
    housing_rent: float = Field(default=0, ge=0)
    elderly_support: float = Field(default=0, ge=0)

    @property
    def total(self) -> float:
        """Sum of all six categories."""
        return (
            self.children_education
            + self.continuing_education
            + self.major_disease_medical
            + self.housing_loan_interest
            + self.housing_rent
            + self.elderly_support
        )


class TaxInput(BaseModel):
    """One monthly income profile, assumed to repeat for all 12 months."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_salary: float = Field(default=0, ge=0, description="Monthly wage income")
    monthly_other_income: float = Field(
        default=0, ge=0, description="Other monthly income (allowances, subsidies)"
    )
    housing_fund_ratio: float = Field(
        default=DEFAULT_HOUSING_FUND_RATIO, ge=0, le=1,
        description="Employee housing provident fund contribution ratio",
    )
    social_security_mode: SocialSecurityMode = Field(
        default="ratio", description="Withhold social insurance by ratio or as a fixed amount"
    )
    social_security_ratio: float = Field(
        default=DEFAULT_SOCIAL_SECURITY_RATIO, ge=0, le=1,
        description="Employee social insurance ratio (used when mode is 'ratio')",
    )
    social_security_fixed: float = Field(
        default=0, ge=0, description="Monthly social insurance amount (used when mode is 'fixed')"
    )
    special_deductions: SpecialDeductions = Field(default_factory=SpecialDeductions)
    other_deduction: float = Field(default=0, ge=0, description="Other monthly deductions")
    year_end_bonus: float = Field(default=0, ge=0, description="Annual one-off bonus")
    bonus_treatment: BonusTreatment = Field(
        default="standalone", description="How the bonus is taxed"
    )


# =============================================================================
# Results
# =============================================================================


class MonthlyDeductionBreakdown(BaseModel):
    """Where one month's taxable income comes from."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    salary: float
    other_income: float
    total_income: float
    social_security: float = Field(..., description="Employee social insurance withheld")
    social_security_ratio: Optional[float] = Field(
        default=None, description="Ratio applied to total income (None in fixed mode)"
    )
    housing_fund: float = Field(..., description="Employee housing fund withheld")
    housing_fund_ratio: float
    special_deduction_total: float
    other_deduction: float
    threshold: float = Field(..., description="Statutory monthly basic deduction")

    @property
    def total_deduction(self) -> float:
        return (
            self.threshold
            + self.social_security
            + self.housing_fund
            + self.special_deduction_total
            + self.other_deduction
        )

    @property
    def taxable_income(self) -> float:
        """Total income less all deductions, never negative."""
        return max(0, self.total_income - self.total_deduction)


class MonthlyTaxResult(BaseModel):
    """Withholding for one month under the cumulative method."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    month: int = Field(..., ge=1, le=12)
    taxable_income: float = Field(..., description="This month's taxable income")
    tax_amount: float = Field(..., ge=0, description="This month's withholding (floored at 0)")
    cumulative_taxable_income: float = Field(..., description="Year-to-date taxable income")
    cumulative_tax_amount: float = Field(..., description="Tax on year-to-date taxable income")


class BonusEvaluation(BaseModel):
    """Tax on the year-end bonus under both treatments."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    bonus_tax: float = Field(default=0, description="Tax under the chosen treatment")
    recommended_treatment: Optional[BonusTreatment] = Field(
        default=None, description="Cheaper treatment (None when there is no bonus)"
    )
    recommended_tax: float = Field(default=0, description="Tax under the recommended treatment")
    savings: float = Field(default=0, ge=0, description="Chosen tax minus recommended tax")
    standalone_tax: float = Field(default=0)
    merged_tax: float = Field(default=0)


class AnnualTaxResult(BaseModel):
    """Full-year withholding breakdown plus bonus figures."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    total_taxable_income: float = Field(..., description="Annual taxable income excluding bonus")
    total_tax_amount: float = Field(..., description="Annual tax excluding bonus")
    refundable_tax: float = Field(
        default=0, description="Year-end settlement; withholding is assumed to match liability"
    )
    monthly_results: List[MonthlyTaxResult] = Field(..., min_length=12, max_length=12)
    deductions: MonthlyDeductionBreakdown = Field(
        ..., description="Monthly income and deductions behind the taxable income"
    )

    bonus_taxable_income: float = Field(default=0)
    bonus_tax_amount: float = Field(default=0)
    total_with_bonus_tax: float = Field(..., description="Annual tax including bonus tax")

    recommended_bonus_treatment: Optional[BonusTreatment] = None
    recommended_bonus_tax: float = 0
    bonus_tax_savings: float = 0
    standalone_bonus_tax: float = 0
    merged_bonus_tax: float = 0


class TaxCalculationResult(BaseModel):
    """Engine output: the current month's tax and the annual report."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    monthly_tax: float = Field(..., description="Month 1 withholding")
    annual_result: AnnualTaxResult
