"""Data access layer for calculation results"""

import uuid
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session
from housing_calculator.infrastructure.database.models import CalculationResultRecord
from housing_calculator.domain.models import (
    AfterMoveIn,
    CalculationOutcome,
    CalculationResult,
    EligibilityDecision,
    EligibilityStatus,
    FinancialStatus,
    HouseholdMember,
    HouseholdRole,
    LoanRatios,
)

SORTABLE_COLUMNS = {
    "calculatedAt": CalculationResultRecord.calculated_at,
    "loanAmount": CalculationResultRecord.loan_amount,
    "monthlyAvailableFunds": CalculationResultRecord.monthly_available_funds,
    "housingName": CalculationResultRecord.housing_name,
}


def to_domain(record: CalculationResultRecord) -> CalculationResult:
    """Rebuild the immutable domain result from its stored row"""
    ratios = LoanRatios(
        ltv=record.ltv,
        dti=record.dti,
        dsr=record.dsr,
        ltv_limit=record.ltv_limit,
        dti_limit=record.dti_limit,
        dsr_limit=record.dsr_limit,
        ltv_applied=record.ltv_applied,
        dti_applied=record.dti_applied,
        dsr_applied=record.dsr_applied,
    )
    outcome = CalculationOutcome(
        ratios=ratios,
        monthly_payment=record.monthly_payment,
        decision=EligibilityDecision(
            status=EligibilityStatus(record.status),
            reasons=list(record.ineligibility_reasons or []),
        ),
        financial_status=FinancialStatus(
            current_assets=record.current_assets,
            estimated_assets=record.estimated_assets,
            loan_required=record.loan_required,
        ),
        after_move_in=AfterMoveIn(
            assets=record.after_assets,
            monthly_income=record.after_monthly_income,
            monthly_expenses=record.after_monthly_expenses,
            monthly_available_funds=record.monthly_available_funds,
        ),
    )
    return CalculationResult(
        id=str(record.id),
        user_id=record.user_id,
        housing_id=record.housing_id,
        housing_name=record.housing_name,
        move_in_date=record.move_in_date,
        loan_product_id=record.loan_product_id,
        loan_product_name=record.loan_product_name,
        loan_amount=record.loan_amount,
        loan_term_months=record.loan_term_months,
        calculated_at=record.calculated_at,
        outcome=outcome,
        household_members=[
            HouseholdMember(user_id=m["userId"], name=m["name"], role=HouseholdRole(m["role"]))
            for m in record.household_members or []
        ],
    )


class CalculationResultRepository:
    """Repository for calculation results"""

    def __init__(self, db: Session):
        self.db = db

    def create_result(self, result: CalculationResult) -> CalculationResultRecord:
        """Persist calculation result to database"""
        outcome = result.outcome
        db_result = CalculationResultRecord(
            id=uuid.UUID(result.id),
            user_id=result.user_id,
            housing_id=result.housing_id,
            housing_name=result.housing_name,
            move_in_date=result.move_in_date,
            loan_product_id=result.loan_product_id,
            loan_product_name=result.loan_product_name,
            loan_amount=result.loan_amount,
            loan_term_months=result.loan_term_months,
            status=outcome.decision.status.value,
            current_assets=outcome.financial_status.current_assets,
            estimated_assets=outcome.financial_status.estimated_assets,
            loan_required=outcome.financial_status.loan_required,
            ltv=outcome.ratios.ltv,
            dti=outcome.ratios.dti,
            dsr=outcome.ratios.dsr,
            ltv_limit=outcome.ratios.ltv_limit,
            dti_limit=outcome.ratios.dti_limit,
            dsr_limit=outcome.ratios.dsr_limit,
            ltv_applied=outcome.ratios.ltv_applied,
            dti_applied=outcome.ratios.dti_applied,
            dsr_applied=outcome.ratios.dsr_applied,
            is_eligible=outcome.decision.is_eligible,
            ineligibility_reasons=list(outcome.decision.reasons),
            monthly_payment=outcome.monthly_payment,
            after_assets=outcome.after_move_in.assets,
            after_monthly_income=outcome.after_move_in.monthly_income,
            after_monthly_expenses=outcome.after_move_in.monthly_expenses,
            monthly_available_funds=outcome.after_move_in.monthly_available_funds,
            household_members=[
                {"userId": m.user_id, "name": m.name, "role": m.role.value}
                for m in result.household_members
            ],
            calculated_at=result.calculated_at,
        )
        self.db.add(db_result)
        self.db.flush()  # Surface constraint errors before commit
        return db_result

    def get_result_by_id(self, result_id: uuid.UUID) -> Optional[CalculationResultRecord]:
        """Fetch a single result regardless of owner"""
        return (
            self.db.query(CalculationResultRecord)
            .filter(CalculationResultRecord.id == result_id)
            .first()
        )

    def list_results(
        self,
        user_id: str,
        page: int = 0,
        size: int = 20,
        sort_by: str = "calculatedAt",
        sort_order: str = "desc",
        status: Optional[str] = None,
        housing_id: Optional[str] = None,
    ) -> Tuple[List[CalculationResultRecord], int]:
        """Page of a user's results plus the total matching count"""
        query = self.db.query(CalculationResultRecord).filter(CalculationResultRecord.user_id == user_id)
        if status:
            query = query.filter(CalculationResultRecord.status == status)
        if housing_id:
            query = query.filter(CalculationResultRecord.housing_id == housing_id)

        total = query.count()

        column = SORTABLE_COLUMNS.get(sort_by, CalculationResultRecord.calculated_at)
        order = column.asc() if sort_order == "asc" else column.desc()
        records = (
            query.order_by(order, CalculationResultRecord.id)
            .offset(page * size)
            .limit(size)
            .all()
        )
        return records, total

    def delete_result(self, record: CalculationResultRecord) -> None:
        """Hard delete"""
        self.db.delete(record)
        self.db.flush()
