"""Asset service client for fetching a member's financial profile"""

from typing import Any, Dict, List, Optional

import httpx

from housing_calculator.config import settings
from housing_calculator.domain.models import (
    FinancialProfile,
    LoanItem,
    MoneyItem,
    OwnerType,
    RepaymentType,
)
from housing_calculator.infrastructure.clients.base import UpstreamClient
from housing_calculator.utils.date_utils import parse_optional_date


def _money_items(raw: List[Dict[str, Any]]) -> List[MoneyItem]:
    return [MoneyItem(id=str(item["id"]), name=item["name"], amount=int(item["amount"])) for item in raw]


def _loan_items(raw: List[Dict[str, Any]]) -> List[LoanItem]:
    return [
        LoanItem(
            id=str(item["id"]),
            name=item["name"],
            amount=int(item["amount"]),
            interest_rate=float(item["interestRate"]) if item.get("interestRate") is not None else None,
            repayment_type=RepaymentType(item["repaymentType"]) if item.get("repaymentType") else None,
            expiration_date=parse_optional_date(item.get("expirationDate")),
            is_excluded_from_calculation=bool(
                item.get("isExcludedFromCalculation", item.get("isExcludingCalculation", False))
            ),
        )
        for item in raw
    ]


def _owner_records(data: Any) -> List[Dict[str, Any]]:
    """Asset records in the response: a list, a {assets, combinedSummary} listing, or a single record"""
    if isinstance(data, list):
        return data
    if "combinedSummary" in data:
        return data.get("assets") or []
    return [data]


def _profile(user_id: str, record: Dict[str, Any]) -> FinancialProfile:
    return FinancialProfile(
        user_id=user_id,
        assets=_money_items(record.get("assets") or []),
        loans=_loan_items(record.get("loans") or []),
        monthly_incomes=_money_items(record.get("monthlyIncomes") or []),
        monthly_expenses=_money_items(record.get("monthlyExpenses") or []),
    )


class ProfileClient(UpstreamClient):
    """Client for the asset service's per-user financial data"""

    source = "asset"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url or settings.asset_api_base, timeout, transport)

    async def get_financial_profile(self, user_id: str) -> Optional[FinancialProfile]:
        """
        Fetch assets, loans, monthly incomes and expenses for a user.

        A user holds one record per owner type. The SELF record becomes the
        profile and a SPOUSE record, if registered, is attached as its spouse.
        The withholding salary lives in the user service and is not set here.

        Returns:
            FinancialProfile, or None when the user never registered one

        Raises:
            UpstreamUnavailableError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json(f"{settings.api_group}/assets/users/{user_id}", requester_id=user_id)
        if data is None:
            return None

        try:
            by_owner = {
                OwnerType(record.get("ownerType") or OwnerType.SELF.value): _profile(user_id, record)
                for record in _owner_records(data)
            }
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise self._invalid(e) from e

        if not by_owner:
            return None
        profile = by_owner.get(OwnerType.SELF) or FinancialProfile.empty(user_id)
        profile.spouse = by_owner.get(OwnerType.SPOUSE)
        return profile
