"""User service client for household membership and the withholding salary"""

from typing import List, Optional

import httpx

from housing_calculator.config import settings
from housing_calculator.domain.models import HouseholdMember, HouseholdRole
from housing_calculator.infrastructure.clients.base import UpstreamClient


class UserClient(UpstreamClient):
    """Client for the user service: household members and user profiles"""

    source = "user"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url or settings.user_api_base, timeout, transport)

    async def get_household_members(self, user_id: str) -> List[HouseholdMember]:
        """Members of the user's household; empty when the user has none"""
        data = await self._get_json("/users/household/members", requester_id=user_id)
        if data is None:
            return []

        try:
            return [
                HouseholdMember(
                    user_id=str(member["userId"]),
                    name=member["name"],
                    role=HouseholdRole(member["role"]),
                )
                for member in data.get("members", [])
            ]
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise self._invalid(e) from e

    async def get_withholding_tax_salary(self, user_id: str) -> Optional[int]:
        """Annual salary from the user's profile; None when unknown or not registered"""
        data = await self._get_json("/users/profile", requester_id=user_id)
        if data is None:
            return None

        try:
            salary = data.get("withholdingTaxSalary")
            return int(salary) if salary is not None else None
        except (ValueError, TypeError, AttributeError) as e:
            raise self._invalid(e) from e
