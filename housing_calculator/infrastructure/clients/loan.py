"""Loan service client for fetching loan product terms"""

from typing import Optional

import httpx

from housing_calculator.config import settings
from housing_calculator.domain.models import LoanProduct
from housing_calculator.infrastructure.clients.base import UpstreamClient


def _optional_float(value) -> Optional[float]:
    return float(value) if value is not None else None


class LoanProductClient(UpstreamClient):
    """Client for the loan product catalogue"""

    source = "loan"

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(base_url or settings.loan_api_base, timeout, transport)

    async def get_loan_product(self, loan_product_id: str) -> Optional[LoanProduct]:
        """Fetch a loan product with its limits; None if it does not exist"""
        data = await self._get_json(f"{settings.api_group}/loans/{loan_product_id}")
        if data is None:
            return None

        try:
            return LoanProduct(
                id=str(data["id"]),
                name=data["name"],
                loan_limit=int(data["loanLimit"]),
                interest_rate=float(data["interestRate"]),
                ltv_limit=_optional_float(data.get("ltvLimit")),
                dti_limit=_optional_float(data.get("dtiLimit")),
                dsr_limit=_optional_float(data.get("dsrLimit")),
                apply_ltv=bool(data.get("isApplyLtv", False)),
                apply_dti=bool(data.get("isApplyDti", False)),
                apply_dsr=bool(data.get("isApplyDsr", False)),
                active=bool(data.get("active", True)),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise self._invalid(e) from e
