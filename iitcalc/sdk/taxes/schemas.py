"""Pydantic schemas for tax rules validation.

These schemas validate tax-rules YAML files and provide typed access
to the monthly threshold and the progressive bracket table.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TaxBracket(BaseModel):
    """Single progressive bracket with its quick-deduction constant."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    lower_bound: float = Field(..., ge=0, description="Inclusive lower bound of taxable income")
    upper_bound: Optional[float] = Field(default=None, description="Exclusive upper bound (None for top bracket)")
    rate: float = Field(..., ge=0, le=1, description="Tax rate as decimal")
    quick_deduction: float = Field(default=0, ge=0, description="Subtracted from income * rate")

    def contains(self, amount: float) -> bool:
        """True if `amount` falls in [lower_bound, upper_bound)."""
        if amount < self.lower_bound:
            return False
        return self.upper_bound is None or amount < self.upper_bound


class TaxRules(BaseModel):
    """Complete rule set for a tax year / jurisdiction."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = Field(default="custom", description="Label shown in reports")
    monthly_threshold: float = Field(..., ge=0, description="Statutory monthly basic deduction")
    brackets: List[TaxBracket] = Field(..., min_length=1)

    @model_validator(mode="after")
    def check_contiguous(self) -> "TaxRules":
        """Brackets must start at 0, be contiguous, and end unbounded."""
        errors = []
        brackets = self.brackets

        if brackets[0].lower_bound != 0:
            errors.append(f"first bracket must start at 0, got {brackets[0].lower_bound}")

        for i, (current, following) in enumerate(zip(brackets, brackets[1:])):
            if current.upper_bound is None:
                errors.append(f"bracket {i} is unbounded but is not the last bracket")
                continue
            if current.upper_bound <= current.lower_bound:
                errors.append(f"bracket {i} upper_bound must exceed lower_bound")
            if current.upper_bound != following.lower_bound:
                errors.append(
                    f"bracket {i} ends at {current.upper_bound} but bracket {i + 1} "
                    f"starts at {following.lower_bound}"
                )
            if following.rate <= current.rate:
                errors.append(f"bracket {i + 1} rate must exceed bracket {i} rate")

        if brackets[-1].upper_bound is not None:
            errors.append("last bracket must have no upper_bound")

        if errors:
            raise ValueError("; ".join(errors))

        return self
