"""Eligibility decision - combines ratio checks into a verdict with reasons"""

from typing import List

from housing_calculator.domain.models import (
    EligibilityDecision,
    EligibilityStatus,
    LoanRatios,
)


def _ratio_reason(name: str, value: float, limit: float) -> str:
    return f"{name} {value:.2f}% exceeds the product limit of {limit:g}%"


def decide_eligibility(
    ratios: LoanRatios,
    loan_amount: int,
    loan_limit: int,
    housing_price: int,
) -> EligibilityDecision:
    """
    Evaluate the verdict for a single request.

    Rules:
    - Every applied ratio must be <= its limit (equal is eligible)
    - Loan amount must not exceed the product loan limit
    - Housing price must be positive

    Reasons are ordered LTV, DTI, DSR, loan limit, housing price.
    """
    reasons: List[str] = []

    if ratios.ltv_applied and ratios.ltv > ratios.ltv_limit:
        reasons.append(_ratio_reason("LTV", ratios.ltv, ratios.ltv_limit))
    if ratios.dti_applied and ratios.dti > ratios.dti_limit:
        reasons.append(_ratio_reason("DTI", ratios.dti, ratios.dti_limit))
    if ratios.dsr_applied and ratios.dsr > ratios.dsr_limit:
        reasons.append(_ratio_reason("DSR", ratios.dsr, ratios.dsr_limit))

    if loan_amount > loan_limit:
        reasons.append(f"Loan amount {loan_amount:,} exceeds the product loan limit of {loan_limit:,}")
    if housing_price <= 0:
        reasons.append(f"Housing price must be positive, got {housing_price:,}")

    status = EligibilityStatus.INELIGIBLE if reasons else EligibilityStatus.ELIGIBLE
    return EligibilityDecision(status=status, reasons=reasons)
