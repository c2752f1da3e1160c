"""
Configuration Management for the bookkeeping engine

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
The fixed assumptions used by the formula sheet live here too, so they can
be tuned per business without touching the formulas themselves.
"""

from decimal import Decimal
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerSettings(BaseSettings):
    """Ledger, CSV and report formatting configuration."""

    model_config = SettingsConfigDict(
        env_prefix="LEDGER_",
        extra="ignore"
    )

    currency_code: str = Field(
        default="ZAR",
        min_length=3,
        max_length=3,
        description="ISO currency code used in the CSV header"
    )
    currency_symbol: str = Field(
        default="R",
        description="Prefix used when formatting amounts"
    )

    # VAT convention (the engine itself never clamps)
    min_vat_rate: int = Field(
        default=0,
        ge=0,
        description="Lowest VAT rate considered normal"
    )
    max_vat_rate: int = Field(
        default=20,
        ge=0,
        le=100,
        description="Highest VAT rate considered normal"
    )

    report_date_format: str = Field(
        default="%Y-%m-%d",
        description="strftime format for the 'Generated on' line"
    )
    csv_encoding: str = Field(
        default="utf-8",
        description="Encoding used for CSV import and export"
    )

    @model_validator(mode="after")
    def validate_vat_range(self) -> "LedgerSettings":
        if self.max_vat_rate < self.min_vat_rate:
            raise ValueError("max_vat_rate cannot be below min_vat_rate")
        return self


class FormulaSettings(BaseSettings):
    """
    Fixed inputs for the formula sheet.

    These figures are not tracked by the ledger, so the formula sheet
    evaluates them against configured assumptions.
    """

    model_config = SettingsConfigDict(
        env_prefix="FORMULA_",
        extra="ignore"
    )

    cost_price: Decimal = Field(default=Decimal("100"))
    selling_price: Decimal = Field(default=Decimal("150"))
    credit_sales_ratio: Decimal = Field(
        default=Decimal("0.8"),
        ge=0,
        le=1,
        description="Share of sales revenue made on credit"
    )
    average_accounts_receivable: Decimal = Field(default=Decimal("2000"))
    fixed_costs: Decimal = Field(default=Decimal("5000"))
    selling_price_per_unit: Decimal = Field(default=Decimal("50"))
    variable_cost_per_unit: Decimal = Field(default=Decimal("30"))
    liabilities: Decimal = Field(default=Decimal("10000"))
    owners_equity: Decimal = Field(default=Decimal("15000"))


class AuthSettings(BaseSettings):
    """Credential hashing configuration."""

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        extra="ignore"
    )

    hash_iterations: int = Field(
        default=100_000,
        ge=1000,
        description="PBKDF2 iterations used when hashing seed passwords"
    )


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    log_level: str = Field(
        default="INFO",
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Level for the stdlib logger behind structlog"
    )

    activity_console_size: int = Field(
        default=500,
        ge=10,
        le=10000,
        description="How many activity lines the console keeps"
    )


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()

    @property
    def formulas(self) -> FormulaSettings:
        return FormulaSettings()

    @property
    def auth(self) -> AuthSettings:
        return AuthSettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    `<name>_error` entry for every group that failed to load.
    """
    results = {}

    settings = get_settings()

    for name in ("ledger", "formulas", "auth", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results
