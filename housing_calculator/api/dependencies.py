"""Dependency injection for FastAPI endpoints"""

from fastapi import Depends, Header, HTTPException, Request
from sqlalchemy.orm import Session

from housing_calculator.infrastructure.clients.user import UserClient
from housing_calculator.infrastructure.clients.housing import HousingClient
from housing_calculator.infrastructure.clients.loan import LoanProductClient
from housing_calculator.infrastructure.clients.profile import ProfileClient
from housing_calculator.infrastructure.database.repositories import CalculationResultRepository
from housing_calculator.infrastructure.database.session import get_db
from housing_calculator.services.calculator import CalculatorService


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_requester_id(x_user_id: str | None = Header(default=None)) -> str:
    """Authenticated user id forwarded by the gateway"""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


def get_profile_client() -> ProfileClient:
    """Provide asset service client instance"""
    return ProfileClient()


def get_housing_client() -> HousingClient:
    """Provide housing service client instance"""
    return HousingClient()


def get_loan_client() -> LoanProductClient:
    """Provide loan product service client instance"""
    return LoanProductClient()


def get_user_client() -> UserClient:
    """Provide household service client instance"""
    return UserClient()


def get_calculator_service(
    db: Session = Depends(get_db),
    profile_client: ProfileClient = Depends(get_profile_client),
    housing_client: HousingClient = Depends(get_housing_client),
    loan_client: LoanProductClient = Depends(get_loan_client),
    user_client: UserClient = Depends(get_user_client),
) -> CalculatorService:
    """Calculator service bound to the request's database session"""
    return CalculatorService(
        repository=CalculationResultRepository(db),
        profile_client=profile_client,
        housing_client=housing_client,
        loan_client=loan_client,
        user_client=user_client,
    )
