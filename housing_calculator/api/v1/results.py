"""GET/DELETE /calculator/results - stored calculation results of the requester"""

import logging
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.orm import Session

from housing_calculator.api.v1.schemas import (
    ApiResponse,
    CalculationResultListItem,
    CalculationResultListResponse,
    CalculationResultResponse,
)
from housing_calculator.api.dependencies import get_calculator_service, get_request_id, get_requester_id
from housing_calculator.config import settings
from housing_calculator.domain.exceptions import CalculationValidationError, ForbiddenError, NotFoundError
from housing_calculator.domain.models import EligibilityStatus
from housing_calculator.infrastructure.database.session import get_db
from housing_calculator.services.calculator import CalculatorService

router = APIRouter()


@router.get("/results", response_model=CalculationResultListResponse)
def list_results(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    sort_by: Literal["calculatedAt", "loanAmount", "monthlyAvailableFunds", "housingName"] = Query(
        "calculatedAt", alias="sortBy"
    ),
    sort_order: Literal["asc", "desc"] = Query("desc", alias="sortOrder"),
    status: Optional[EligibilityStatus] = Query(None),
    housing_id: Optional[str] = Query(None, alias="housingId"),
    requester_id: str = Depends(get_requester_id),
    service: CalculatorService = Depends(get_calculator_service),
):
    """
    Retrieve the requester's calculation results.

    Returns:
        One page of results, newest first unless another sort is requested
    """
    try:
        results, total = service.list_results(
            requester_id,
            page=page,
            size=size,
            sort_by=sort_by,
            sort_order=sort_order,
            status=status.value if status else None,
            housing_id=housing_id,
        )
    except CalculationValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

    items = [
        CalculationResultListItem(
            id=r.id,
            housing_name=r.housing_name,
            loan_product_name=r.loan_product_name,
            calculated_at=r.calculated_at,
            status=r.status,
            monthly_available_funds=r.outcome.after_move_in.monthly_available_funds,
        )
        for r in results
    ]
    return CalculationResultListResponse(results=items, page=page, size=size, total=total)


@router.get("/results/{result_id}", response_model=CalculationResultResponse)
def get_result(
    result_id: str,
    requester_id: str = Depends(get_requester_id),
    service: CalculatorService = Depends(get_calculator_service),
):
    """Retrieve one calculation result owned by the requester"""
    try:
        result = service.get_result(result_id, requester_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Calculation result not found")
    except ForbiddenError:
        raise HTTPException(status_code=403, detail="Calculation result belongs to another user")

    return CalculationResultResponse.from_result(result)


@router.delete("/results/{result_id}", response_model=ApiResponse)
def delete_result(
    result_id: str,
    request: Request,
    requester_id: str = Depends(get_requester_id),
    db: Session = Depends(get_db),
    service: CalculatorService = Depends(get_calculator_service),
):
    """Hard-delete a calculation result owned by the requester"""
    try:
        service.delete_result(result_id, requester_id)
        db.commit()
    except NotFoundError:
        db.rollback()
        raise HTTPException(status_code=404, detail="Calculation result not found")
    except ForbiddenError:
        db.rollback()
        logging.warning(
            "Delete of another user's result refused",
            extra={"request_id": get_request_id(request), "user_id": requester_id, "result_id": result_id},
        )
        raise HTTPException(status_code=403, detail="Calculation result belongs to another user")

    return ApiResponse(success=True, message="Calculation result deleted")
