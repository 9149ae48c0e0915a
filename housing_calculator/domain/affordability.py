"""Affordability calculation - core business logic, pure and stateless"""

from datetime import date

from housing_calculator.domain.amortization import annuity_payment, round_currency
from housing_calculator.domain.eligibility import decide_eligibility
from housing_calculator.domain.models import (
    CalculationOutcome,
    CombinedProfile,
    HousingListing,
    LoanProduct,
)
from housing_calculator.domain.projection import project_after_move_in, project_financial_status
from housing_calculator.domain.ratios import calculate_ratios


def calculate_affordability(
    housing: HousingListing,
    product: LoanProduct,
    loan_amount: int,
    loan_term_months: int,
    combined: CombinedProfile,
    as_of: date,
    default_term_months: int,
) -> CalculationOutcome:
    """
    Main entry point: ratios, payment, verdict and projection for one request.

    The new loan is amortized with equal principal and interest at the
    product's rate. Ratios use the unrounded payment; only the reported
    payment is rounded.
    """
    payment = annuity_payment(loan_amount, product.interest_rate, loan_term_months)

    ratios = calculate_ratios(
        product=product,
        loan_amount=loan_amount,
        housing_price=housing.price,
        new_loan_monthly_payment=payment,
        existing_loans=combined.ratio_loans,
        annual_income=combined.annual_income,
        as_of=as_of,
        default_term_months=default_term_months,
    )
    decision = decide_eligibility(ratios, loan_amount, product.loan_limit, housing.price)

    monthly_payment = round_currency(payment)
    return CalculationOutcome(
        ratios=ratios,
        monthly_payment=monthly_payment,
        decision=decision,
        financial_status=project_financial_status(combined, housing.price),
        after_move_in=project_after_move_in(combined, housing.price, loan_amount, monthly_payment),
    )
