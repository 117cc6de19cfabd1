"""
Monthly summary data models

Mirror the JSON documents returned by the finance tracker backend
(GET /api/summary and POST /api/summary/ai-analysis). Amounts travel as
decimal strings ("1234.50") and are parsed to Decimal on load.
"""

import re
from decimal import Decimal
from typing import Dict, Iterable, List, Literal

from pydantic import BaseModel, Field, field_validator


MONTH_PATTERN = re.compile(r'[0-9]{4}-(0[1-9]|1[0-2])')
MONTH_ERROR = "Invalid month format. Use YYYY-MM"


def month_validate(value: str) -> str:
    """
    Validate a YYYY-MM month string

    Raises:
        ValueError: If value is not a valid YYYY-MM month
    """
    if not MONTH_PATTERN.fullmatch(value):
        raise ValueError(MONTH_ERROR)
    return value


class CategorySummary(BaseModel):
    """
    Per-category totals for one month

    Attributes:
        category_id: Backend identifier of the category
        category_name: Display name
        income: Sum of income transactions
        expenses: Sum of expense transactions
        balance: income - expenses
        transaction_count: Number of transactions in the category
    """

    category_id: str
    category_name: str
    income: Decimal = Field(default=Decimal("0.00"))
    expenses: Decimal = Field(default=Decimal("0.00"))
    balance: Decimal = Field(default=Decimal("0.00"))
    transaction_count: int = Field(default=0, ge=0)


class TransactionRecord(BaseModel):
    """Single transaction as needed for summary aggregation"""

    category_id: str
    category_name: str
    amount: Decimal
    type: Literal["income", "expense"]


class MonthlySummary(BaseModel):
    """
    Totals for one month, with a per-category breakdown

    Categories keep the order in which the backend (or summary_aggregate)
    first saw them.
    """

    month: str
    total_income: Decimal = Field(default=Decimal("0.00"))
    total_expenses: Decimal = Field(default=Decimal("0.00"))
    balance: Decimal = Field(default=Decimal("0.00"))
    categories: List[CategorySummary] = Field(default_factory=list)

    @field_validator("month")
    @classmethod
    def month_check(cls, value: str) -> str:
        return month_validate(value)

    @classmethod
    def summary_aggregate(cls, month: str, transactions: Iterable[TransactionRecord]) -> "MonthlySummary":
        """
        Build a summary from raw transactions

        Groups by category_id in first-seen order, summing income and
        expenses separately; balances are income minus expenses.

        Args:
            month: YYYY-MM month the transactions belong to
            transactions: Transactions of that month

        Returns:
            MonthlySummary with per-category and overall totals
        """
        grouped: Dict[str, CategorySummary] = {}
        for record in transactions:
            category = grouped.get(record.category_id)
            if category is None:
                category = CategorySummary(
                    category_id=record.category_id,
                    category_name=record.category_name,
                )
                grouped[record.category_id] = category
            category.transaction_count += 1
            if record.type == "income":
                category.income += record.amount
            else:
                category.expenses += record.amount

        for category in grouped.values():
            category.balance = category.income - category.expenses

        total_income = sum((c.income for c in grouped.values()), Decimal("0.00"))
        total_expenses = sum((c.expenses for c in grouped.values()), Decimal("0.00"))

        return cls(
            month=month,
            total_income=total_income,
            total_expenses=total_expenses,
            balance=total_income - total_expenses,
            categories=list(grouped.values()),
        )


class AIAnalysis(BaseModel):
    """AI analysis response: markdown-subset text for one month"""

    analysis: str
    month: str

    @field_validator("month")
    @classmethod
    def month_check(cls, value: str) -> str:
        return month_validate(value)
