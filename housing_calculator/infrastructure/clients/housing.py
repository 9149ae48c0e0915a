"""Housing service client for fetching candidate listings"""

from typing import Optional

import httpx

from housing_calculator.config import settings
from housing_calculator.domain.models import HousingListing, HousingType
from housing_calculator.infrastructure.clients.base import UpstreamClient


class HousingClient(UpstreamClient):
    """Client for the housing listing service"""

    source = "housing"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url or settings.housing_api_base, timeout, transport)

    async def get_housing(self, housing_id: str, requester_id: str) -> Optional[HousingListing]:
        """Fetch a housing listing; None if it does not exist"""
        data = await self._get_json(f"/housings/{housing_id}", requester_id=requester_id)
        if data is None:
            return None

        try:
            return HousingListing(
                id=str(data["id"]),
                name=data["housingName"],
                price=int(data["price"]),
                housing_type=HousingType(data["housingType"]),
                move_in_date=data.get("moveInDate"),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise self._invalid(e) from e
