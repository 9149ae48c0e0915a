"""Amortization engine - monthly debt service for new and existing loans"""

from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from housing_calculator.domain.models import LoanItem, RepaymentType
from housing_calculator.utils.date_utils import months_between


def monthly_rate(annual_rate_pct: float) -> float:
    """Nominal annual percent (e.g. 2.5) to monthly decimal rate"""
    return annual_rate_pct / 100 / 12


def annuity_payment(principal: float, annual_rate_pct: float, months: int) -> float:
    """
    Equal principal-and-interest monthly payment.

    P * r * (1+r)^n / ((1+r)^n - 1), falling back to P / n at a zero rate.
    Returned unrounded so ratio math stays exact.
    """
    if months <= 0:
        raise ValueError(f"Loan term must be positive, got {months} months")
    if principal <= 0:
        return 0.0

    r = monthly_rate(annual_rate_pct)
    if r == 0:
        return principal / months

    compound = (1 + r) ** months
    return principal * r * compound / (compound - 1)


def round_currency(amount: float) -> int:
    """Round to the nearest whole currency unit, halves away from zero"""
    return int(Decimal(str(amount)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def remaining_term_months(loan: LoanItem, as_of: date, default_term_months: int) -> int:
    """
    Months left until the loan's expiration date.

    A loan with no expiration date, or one already past it while a balance is
    still registered, is assumed to run for the default term.
    """
    if loan.expiration_date is not None:
        months = months_between(as_of, loan.expiration_date)
        if months > 0:
            return months
    return max(default_term_months, 1)


def existing_loan_monthly_payment(loan: LoanItem, as_of: date, default_term_months: int) -> float:
    """
    Full monthly debt service (principal + interest) of an existing loan.

    - EPI, GG or unspecified: annuity over the remaining term
    - EP: first-month payment, principal/n plus a full month of interest
    - MDT: monthly interest plus principal spread over the remaining term
    """
    months = remaining_term_months(loan, as_of, default_term_months)
    rate_pct = loan.interest_rate or 0.0
    r = monthly_rate(rate_pct)

    if loan.repayment_type in (RepaymentType.EQUAL_PRINCIPAL, RepaymentType.MATURITY_LUMP_SUM):
        return loan.amount / months + loan.amount * r

    return annuity_payment(loan.amount, rate_pct, months)


def existing_loan_annual_interest(loan: LoanItem) -> float:
    """Interest-only yearly burden of an existing loan"""
    return loan.amount * (loan.interest_rate or 0.0) / 100
