"""IIT Calc SDK - Core functionality for income tax withholding calculations."""

from .config import (
    get_config_dir,
    get_settings_path,
    load_settings,
    save_settings,
    get_setting,
    set_setting,
    clear_setting,
    get_data_path,
    get_output_format,
)

from .schemas import (
    SpecialDeductions,
    TaxInput,
    MonthlyDeductionBreakdown,
    MonthlyTaxResult,
    BonusEvaluation,
    AnnualTaxResult,
    TaxCalculationResult,
)

from .taxes import (
    DEFAULT_TAX_RULES,
    TaxRules,
    TaxRulesError,
    get_active_tax_rules,
    load_tax_rules,
    resolve_tax,
)

from .calculator import calculate_annual_tax, calculate_tax

from .schemes import (
    Scheme,
    SchemeNotFoundError,
    SchemeStore,
    SchemeSummary,
    get_schemes_dir,
)

from .export import result_to_dict, write_result_csv

__all__ = [
    # Config
    "get_config_dir",
    "get_settings_path",
    "load_settings",
    "save_settings",
    "get_setting",
    "set_setting",
    "clear_setting",
    "get_data_path",
    "get_output_format",
    # Schemas
    "SpecialDeductions",
    "TaxInput",
    "MonthlyDeductionBreakdown",
    "MonthlyTaxResult",
    "BonusEvaluation",
    "AnnualTaxResult",
    "TaxCalculationResult",
    # Tax rules
    "DEFAULT_TAX_RULES",
    "TaxRules",
    "TaxRulesError",
    "get_active_tax_rules",
    "load_tax_rules",
    "resolve_tax",
    # Calculation
    "calculate_annual_tax",
    "calculate_tax",
    # Schemes
    "Scheme",
    "SchemeNotFoundError",
    "SchemeStore",
    "SchemeSummary",
    "get_schemes_dir",
    # Export
    "result_to_dict",
    "write_result_csv",
]
