"""Projection engine - financial position before and after moving in"""

from housing_calculator.domain.models import AfterMoveIn, CombinedProfile, FinancialStatus


def project_financial_status(combined: CombinedProfile, housing_price: int) -> FinancialStatus:
    """Current and move-in-date assets; no growth model, so estimated == current"""
    estimated_assets = combined.total_assets
    return FinancialStatus(
        current_assets=combined.total_assets,
        estimated_assets=estimated_assets,
        loan_required=housing_price - estimated_assets,
    )


def project_after_move_in(
    combined: CombinedProfile,
    housing_price: int,
    loan_amount: int,
    monthly_payment: int,
) -> AfterMoveIn:
    """
    Balance sheet and cash flow once the purchase is made.

    The down payment (price minus loan) comes out of current assets. Existing
    loan payments are already part of the profile's monthly expenses, so only
    the new loan's payment is added. Results may be negative.
    """
    monthly_income = combined.total_monthly_income
    monthly_expenses = combined.total_monthly_expense + monthly_payment

    return AfterMoveIn(
        assets=combined.total_assets - (housing_price - loan_amount),
        monthly_income=monthly_income,
        monthly_expenses=monthly_expenses,
        monthly_available_funds=monthly_income - monthly_expenses,
    )
