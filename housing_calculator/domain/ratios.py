"""Regulatory ratio engine - LTV, DTI and DSR against loan product limits"""

from datetime import date
from typing import Optional, Sequence

from housing_calculator.domain.amortization import (
    existing_loan_annual_interest,
    existing_loan_monthly_payment,
)
from housing_calculator.domain.models import LoanItem, LoanProduct, LoanRatios

# Reported when there is debt service but no income; above any percent limit
RATIO_CAP = 999.99


def _applies(flag: bool, limit: Optional[float]) -> bool:
    return flag and limit is not None


def calculate_ltv(loan_amount: int, housing_price: int) -> float:
    """Loan-to-value in percent"""
    if housing_price <= 0:
        return RATIO_CAP
    return loan_amount / housing_price * 100


def _income_ratio(annual_debt_service: float, annual_income: int) -> float:
    if annual_income <= 0:
        return RATIO_CAP if annual_debt_service > 0 else 0.0
    return min(annual_debt_service / annual_income * 100, RATIO_CAP)


def calculate_dti(
    new_loan_monthly_payment: float,
    existing_loans: Sequence[LoanItem],
    annual_income: int,
) -> float:
    """Debt-to-income: new loan's full service plus interest-only burden of existing loans"""
    annual_debt_service = new_loan_monthly_payment * 12 + sum(
        existing_loan_annual_interest(loan) for loan in existing_loans
    )
    return _income_ratio(annual_debt_service, annual_income)


def calculate_dsr(
    new_loan_monthly_payment: float,
    existing_loans: Sequence[LoanItem],
    annual_income: int,
    as_of: date,
    default_term_months: int,
) -> float:
    """Debt-service ratio: full principal and interest of every loan"""
    existing_monthly = sum(
        existing_loan_monthly_payment(loan, as_of, default_term_months) for loan in existing_loans
    )
    annual_debt_service = (new_loan_monthly_payment + existing_monthly) * 12
    return _income_ratio(annual_debt_service, annual_income)


def calculate_ratios(
    product: LoanProduct,
    loan_amount: int,
    housing_price: int,
    new_loan_monthly_payment: float,
    existing_loans: Sequence[LoanItem],
    annual_income: int,
    as_of: date,
    default_term_months: int,
) -> LoanRatios:
    """
    Compute the ratios the product applies.

    A ratio the product does not apply is reported as 0 and its limit is passed
    through (0 when absent). existing_loans must already exclude loans flagged
    as excluded from calculation.
    """
    ltv_applied = _applies(product.apply_ltv, product.ltv_limit)
    dti_applied = _applies(product.apply_dti, product.dti_limit)
    dsr_applied = _applies(product.apply_dsr, product.dsr_limit)

    ltv = calculate_ltv(loan_amount, housing_price) if ltv_applied else 0.0
    dti = calculate_dti(new_loan_monthly_payment, existing_loans, annual_income) if dti_applied else 0.0
    dsr = (
        calculate_dsr(new_loan_monthly_payment, existing_loans, annual_income, as_of, default_term_months)
        if dsr_applied
        else 0.0
    )

    return LoanRatios(
        ltv=ltv,
        dti=dti,
        dsr=dsr,
        ltv_limit=product.ltv_limit or 0.0,
        dti_limit=product.dti_limit or 0.0,
        dsr_limit=product.dsr_limit or 0.0,
        ltv_applied=ltv_applied,
        dti_applied=dti_applied,
        dsr_applied=dsr_applied,
    )
