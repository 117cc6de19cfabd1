"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use LEDGERDOWN_ prefix (e.g., LEDGERDOWN_DEBUG_MODE=true).

Settings can also be loaded from a .env file in the project root.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use LEDGERDOWN_ prefix.

    Examples:
        LEDGERDOWN_CURRENCY_SYMBOL=zł
        LEDGERDOWN_STRICT_MODE=true
        LEDGERDOWN_DEFAULT_THEME=default
    """

    model_config = SettingsConfigDict(
        env_prefix="LEDGERDOWN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Money presentation
    currency_symbol: str = Field(
        default="zł",
        description="Currency symbol appended to formatted amounts",
    )

    decimal_separator: str = Field(
        default=",",
        description="Separator between integer and fractional part of amounts",
    )

    group_separator: str = Field(
        default="\u00a0",
        description="Thousands separator (non-breaking space for pl-PL)",
    )

    min_grouping_digits: int = Field(
        default=5,
        description="Integer digit count from which thousands grouping is applied",
    )

    # Links
    transactions_path: str = Field(
        default="/app/transactions",
        description="Path of the transactions page that category rows link to",
    )

    # Compilation configuration
    debug_mode: bool = Field(
        default=False,
        description="Print a traceback when compilation fails",
    )

    strict_mode: bool = Field(
        default=False,
        description="Strict mode: a missing or blank AI analysis is an error",
    )

    default_theme: str = Field(
        default="default",
        description="Theme used when --theme is not given",
    )

    # Output configuration
    report_filename: str = Field(
        default="index.html",
        description="Name of the generated report file",
    )

    report_title: str = Field(
        default="Podsumowanie miesiąca",
        description="Title of the generated report (month is appended)",
    )

    def reportTitle_make(self, month: str) -> str:
        """
        Build the report title for a given month.

        Example:
            >>> settings = AppSettings()
            >>> settings.reportTitle_make('2024-03')
            'Podsumowanie miesiąca 2024-03'
        """
        return f"{self.report_title} {month}"


# Singleton instance - import this in your code
appsettings = AppSettings()
