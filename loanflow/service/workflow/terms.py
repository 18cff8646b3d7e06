"""
Loan term arithmetic.

Loans use simple interest over the whole term: the rate is applied once
to the principal and the repayment is spread evenly over the months.
"""

import calendar
from dataclasses import dataclass
from datetime import date, datetime

from .settings import WorkflowSettings, workflow_settings


@dataclass(frozen=True)
class LoanTerms:
    principal: float
    interest_rate: float
    duration: int
    total_interest: float
    total_repayment: float
    monthly_payment: float


def calculate_loan_terms(amount: float, interest_rate: float, duration: int) -> LoanTerms:
    """
    Calculate repayment terms for a principal.

    Args:
        amount: Principal
        interest_rate: Rate in percent for the whole term
        duration: Term in months (must be positive)

    Returns:
        LoanTerms with every money value rounded to 2 decimals
    """
    if duration <= 0:
        raise ValueError("duration must be positive")

    total_interest = amount * interest_rate / 100
    total_repayment = amount + total_interest
    return LoanTerms(
        principal=round(amount, 2),
        interest_rate=interest_rate,
        duration=duration,
        total_interest=round(total_interest, 2),
        total_repayment=round(total_repayment, 2),
        monthly_payment=round(total_repayment / duration, 2),
    )


def add_months(moment: datetime, months: int = 1) -> date:
    """Same day `months` later, clamped to the end of shorter months."""
    month_index = moment.month - 1 + months
    year = moment.year + month_index // 12
    month = month_index % 12 + 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def risk_band(amount: float, settings: WorkflowSettings = workflow_settings) -> str:
    """Coarse risk label shown on the approver queue."""
    if amount > settings.high_risk_amount:
        return "High"
    if amount > settings.medium_risk_amount:
        return "Medium"
    return "Low"
