"""POST /calculator/housing-expenses - housing affordability calculation endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.orm import Session

from housing_calculator.api.v1.schemas import CalculationRequestSchema, CalculationResultResponse
from housing_calculator.api.dependencies import get_calculator_service, get_request_id, get_requester_id
from housing_calculator.infrastructure.database.session import get_db
from housing_calculator.services.calculator import CalculatorService
from housing_calculator.domain.models import CalculationRequest
from housing_calculator.domain.exceptions import (
    CalculationValidationError,
    NotFoundError,
    UpstreamUnavailableError,
)
from housing_calculator.infrastructure.observability.metrics import record_calculation
from housing_calculator.infrastructure.observability.logging import log_calculation

router = APIRouter()


@router.post("/housing-expenses", response_model=CalculationResultResponse)
async def calculate_housing_expenses(
    request_body: CalculationRequestSchema,
    request: Request,
    requester_id: str = Depends(get_requester_id),
    db: Session = Depends(get_db),
    service: CalculatorService = Depends(get_calculator_service),
):
    """
    Check loan eligibility and project post-move-in cash flow.

    Flow:
    1. Fetch housing, loan product and household members
    2. Fetch requester and member financial profiles
    3. Compute LTV/DTI/DSR, monthly payment and verdict
    4. Project assets and monthly available funds after moving in
    5. Persist the result and return it
    """
    start_time = time.time()
    request_id = get_request_id(request)

    try:
        result = await service.calculate(
            CalculationRequest(
                housing_id=request_body.housing_id,
                loan_product_id=request_body.loan_product_id,
                loan_amount=request_body.loan_amount,
                loan_term_months=request_body.loan_term,
                household_member_ids=request_body.household_member_ids,
            ),
            requester_id,
        )
        db.commit()

        duration_ms = (time.time() - start_time) * 1000
        funds = result.outcome.after_move_in.monthly_available_funds
        record_calculation(result.outcome.decision.is_eligible, funds)
        log_calculation(request_id, requester_id, result.id, result.status.value, funds, duration_ms)

        return CalculationResultResponse.from_result(result)

    except UpstreamUnavailableError as e:
        db.rollback()
        logging.error(f"Upstream error: {e}", extra={"request_id": request_id, "source": e.source})
        raise HTTPException(status_code=503, detail=f"{e.source} service unavailable")

    except NotFoundError as e:
        db.rollback()
        logging.warning(f"Not found: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail=str(e))

    except CalculationValidationError as e:
        db.rollback()
        logging.warning(f"Invalid calculation request: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")
