"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from housing_calculator.domain.models import CalculationResult, EligibilityStatus


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CalculationRequestSchema(CamelModel):
    """Request body for POST /calculator/housing-expenses"""

    housing_id: str = Field(..., min_length=1, description="Housing listing identifier")
    loan_product_id: str = Field(..., min_length=1, description="Loan product identifier")
    loan_amount: int = Field(..., gt=0, description="Requested loan amount in currency units")
    loan_term: int = Field(..., gt=0, description="Loan term in months")
    household_member_ids: List[str] = Field(default_factory=list, description="Other household members to include")


class FinancialStatusSchema(CamelModel):
    current_assets: int
    estimated_assets: int
    loan_required: int


class LoanAnalysisSchema(CamelModel):
    ltv: float
    dti: float
    dsr: float
    ltv_limit: float
    dti_limit: float
    dsr_limit: float
    is_eligible: bool
    ineligibility_reasons: List[str]
    monthly_payment: int


class AfterMoveInSchema(CamelModel):
    assets: int
    monthly_income: int
    monthly_expenses: int
    monthly_available_funds: int


class HouseholdMemberSchema(CamelModel):
    user_id: str
    name: str
    role: str


class CalculationResultResponse(CamelModel):
    """Response for POST /calculator/housing-expenses and GET /calculator/results/{id}"""

    id: str
    user_id: str
    housing_id: str
    housing_name: str
    move_in_date: Optional[str] = None
    loan_product_id: str
    loan_product_name: str
    loan_amount: int
    loan_term: int
    calculated_at: datetime
    status: EligibilityStatus
    financial_status: FinancialStatusSchema
    loan_analysis: LoanAnalysisSchema
    after_move_in: AfterMoveInSchema
    household_members: List[HouseholdMemberSchema] = []

    @classmethod
    def from_result(cls, result: CalculationResult) -> "CalculationResultResponse":
        outcome = result.outcome
        return cls(
            id=result.id,
            user_id=result.user_id,
            housing_id=result.housing_id,
            housing_name=result.housing_name,
            move_in_date=result.move_in_date,
            loan_product_id=result.loan_product_id,
            loan_product_name=result.loan_product_name,
            loan_amount=result.loan_amount,
            loan_term=result.loan_term_months,
            calculated_at=result.calculated_at,
            status=result.status,
            financial_status=FinancialStatusSchema(
                current_assets=outcome.financial_status.current_assets,
                estimated_assets=outcome.financial_status.estimated_assets,
                loan_required=outcome.financial_status.loan_required,
            ),
            loan_analysis=LoanAnalysisSchema(
                ltv=outcome.ratios.ltv,
                dti=outcome.ratios.dti,
                dsr=outcome.ratios.dsr,
                ltv_limit=outcome.ratios.ltv_limit,
                dti_limit=outcome.ratios.dti_limit,
                dsr_limit=outcome.ratios.dsr_limit,
                is_eligible=outcome.decision.is_eligible,
                ineligibility_reasons=list(outcome.decision.reasons),
                monthly_payment=outcome.monthly_payment,
            ),
            after_move_in=AfterMoveInSchema(
                assets=outcome.after_move_in.assets,
                monthly_income=outcome.after_move_in.monthly_income,
                monthly_expenses=outcome.after_move_in.monthly_expenses,
                monthly_available_funds=outcome.after_move_in.monthly_available_funds,
            ),
            household_members=[
                HouseholdMemberSchema(user_id=m.user_id, name=m.name, role=m.role.value)
                for m in result.household_members
            ],
        )


class CalculationResultListItem(CamelModel):
    """Single result in a listing"""

    id: str
    housing_name: str
    loan_product_name: str
    calculated_at: datetime
    status: EligibilityStatus
    monthly_available_funds: int


class CalculationResultListResponse(CamelModel):
    """Response for GET /calculator/results"""

    results: List[CalculationResultListItem]
    page: int
    size: int
    total: int


class ApiResponse(CamelModel):
    """Envelope used by the product's services for command responses"""

    success: bool
    message: str
    data: Optional[Any] = None
