"""IIT Calc MCP Server - FastMCP implementation for tax calculation tools."""

import json
import logging
from typing import Any

from mcp.server.fastmcp import FastMCP
from pydantic import Field, ValidationError

from iitcalc.sdk import (
    SchemeStore,
    TaxInput,
    TaxRulesError,
    calculate_tax as sdk_calculate_tax,
    get_active_tax_rules,
    result_to_dict,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("iit-calc")


def _build_input(
    monthly_salary: float,
    monthly_other_income: float,
    housing_fund_ratio: float,
    social_security_mode: str,
    social_security_ratio: float,
    social_security_fixed: float,
    special_deductions: dict[str, float] | None,
    other_deduction: float,
    year_end_bonus: float,
    bonus_treatment: str,
) -> TaxInput:
    return TaxInput(
        monthly_salary=monthly_salary,
        monthly_other_income=monthly_other_income,
        housing_fund_ratio=housing_fund_ratio,
        social_security_mode=social_security_mode,
        social_security_ratio=social_security_ratio,
        social_security_fixed=social_security_fixed,
        special_deductions=special_deductions or {},
        other_deduction=other_deduction,
        year_end_bonus=year_end_bonus,
        bonus_treatment=bonus_treatment,
    )


# --- Tools ---

@mcp.tool()
async def calculate_tax(
    monthly_salary: float = Field(description="Monthly salary"),
    monthly_other_income: float = Field(default=0, description="Other monthly income"),
    housing_fund_ratio: float = Field(default=0.12, description="Housing fund ratio (0-1)"),
    social_security_mode: str = Field(default="ratio", description="'ratio' or 'fixed'"),
    social_security_ratio: float = Field(default=0.105, description="Social insurance ratio (0-1)"),
    social_security_fixed: float = Field(default=0, description="Fixed monthly social insurance"),
    special_deductions: dict[str, float] | None = Field(
        default=None,
        description=(
            "Monthly special deductions keyed by children_education, continuing_education, "
            "major_disease_medical, housing_loan_interest, housing_rent, elderly_support"
        ),
    ),
    other_deduction: float = Field(default=0, description="Other monthly deductions"),
    year_end_bonus: float = Field(default=0, description="Year-end bonus"),
    bonus_treatment: str = Field(default="standalone", description="'standalone' or 'merged'"),
) -> dict[str, Any]:
    """Calculate monthly withholding (cumulative method), the annual report, and the cheaper bonus treatment."""
    try:
        tax_input = _build_input(
            monthly_salary, monthly_other_income, housing_fund_ratio,
            social_security_mode, social_security_ratio, social_security_fixed,
            special_deductions, other_deduction, year_end_bonus, bonus_treatment,
        )
        rules = get_active_tax_rules()
        result = sdk_calculate_tax(tax_input, rules)
        return {"rules": rules.name, "result": result_to_dict(result)}

    except (ValidationError, TaxRulesError) as e:
        return {"error": str(e), "result": None}


@mcp.tool()
async def list_schemes() -> dict[str, Any]:
    """List saved calculation schemes (id, name, timestamps)."""
    summaries = SchemeStore().list_all()
    return {
        "schemes": [s.model_dump() for s in summaries],
        "count": len(summaries),
    }


@mcp.tool()
async def get_scheme(
    scheme_id: str = Field(description="The 8-character scheme ID (from list_schemes)"),
    calculate: bool = Field(default=True, description="Also return the calculation result"),
) -> dict[str, Any]:
    """Get a saved scheme's inputs, optionally with its recalculated result."""
    scheme = SchemeStore().get(scheme_id)
    if scheme is None:
        return {"error": f"Scheme not found: {scheme_id}", "scheme": None}

    output = {"scheme": scheme.model_dump(mode="json")}
    if calculate:
        try:
            rules = get_active_tax_rules()
        except TaxRulesError as e:
            output["error"] = str(e)
            return output
        output["result"] = result_to_dict(sdk_calculate_tax(scheme.input, rules))
    return output


@mcp.tool()
async def save_scheme(
    name: str = Field(description="Scheme name"),
    tax_input: dict[str, Any] = Field(description="TaxInput fields (same names as calculate_tax parameters)"),
) -> dict[str, Any]:
    """Save a named set of calculation inputs."""
    try:
        scheme = SchemeStore().save(name, TaxInput.model_validate(tax_input))
        return {"id": scheme.id, "name": scheme.name}
    except (ValidationError, ValueError) as e:
        return {"error": str(e)}


@mcp.tool()
async def delete_scheme(
    scheme_id: str = Field(description="The 8-character scheme ID"),
) -> dict[str, Any]:
    """Delete a saved scheme."""
    deleted = SchemeStore().delete(scheme_id)
    if not deleted:
        logger.info(f"delete_scheme: {scheme_id} not found")
    return {"deleted": deleted, "id": scheme_id}


# --- Resources (optional, for browsing) ---

@mcp.resource("iitcalc://schemes")
async def list_schemes_resource() -> str:
    """List saved schemes as JSON."""
    summaries = SchemeStore().list_all()
    return json.dumps({"schemes": [s.model_dump() for s in summaries]}, indent=2)


# --- Server Entry Point ---

def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
