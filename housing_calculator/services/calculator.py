"""Calculator service - request validation, upstream reads, calculation and result storage"""

import asyncio
import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple

from housing_calculator.config import settings
from housing_calculator.domain.affordability import calculate_affordability
from housing_calculator.domain.aggregation import combine_profiles
from housing_calculator.domain.exceptions import (
    CalculationValidationError,
    ForbiddenError,
    NotFoundError,
)
from housing_calculator.domain.models import (
    CalculationRequest,
    CalculationResult,
    FinancialProfile,
    HouseholdMember,
    HouseholdRole,
)
from housing_calculator.infrastructure.clients.user import UserClient
from housing_calculator.infrastructure.clients.housing import HousingClient
from housing_calculator.infrastructure.clients.loan import LoanProductClient
from housing_calculator.infrastructure.clients.profile import ProfileClient
from housing_calculator.infrastructure.database.repositories import (
    CalculationResultRepository,
    to_domain,
)

logger = logging.getLogger(__name__)


class CalculatorService:
    """Entry point for calculate / get / list / delete on behalf of a requester"""

    def __init__(
        self,
        repository: CalculationResultRepository,
        profile_client: ProfileClient,
        housing_client: HousingClient,
        loan_client: LoanProductClient,
        user_client: UserClient,
        default_term_months: int | None = None,
    ):
        self.repository = repository
        self.profile_client = profile_client
        self.housing_client = housing_client
        self.loan_client = loan_client
        self.user_client = user_client
        self.default_term_months = default_term_months or settings.default_existing_loan_term_months

    async def calculate(
        self,
        request: CalculationRequest,
        requester_id: str,
        as_of: date | None = None,
    ) -> CalculationResult:
        """
        Run an affordability calculation and store its result.

        Flow:
        1. Validate amount and term
        2. Fetch housing and loan product, reject unknown or inactive ones
        3. Check the amount against the product limit
        4. Validate selected household members
        5. Fetch requester and member profiles and salaries concurrently
        6. Calculate, then persist (caller commits)

        Raises:
            CalculationValidationError, NotFoundError, ProfileNotFoundError,
            UpstreamUnavailableError
        """
        if request.loan_amount <= 0:
            raise CalculationValidationError(f"Loan amount must be positive, got {request.loan_amount}")
        if request.loan_term_months <= 0:
            raise CalculationValidationError(f"Loan term must be positive, got {request.loan_term_months}")

        housing, product = await asyncio.gather(
            self.housing_client.get_housing(request.housing_id, requester_id),
            self.loan_client.get_loan_product(request.loan_product_id),
        )
        if housing is None:
            raise NotFoundError(f"Housing {request.housing_id} not found")
        if product is None:
            raise NotFoundError(f"Loan product {request.loan_product_id} not found")
        if not product.active:
            raise NotFoundError(f"Loan product {request.loan_product_id} is not active")

        if request.loan_amount > product.loan_limit:
            raise CalculationValidationError(
                f"Loan amount {request.loan_amount:,} exceeds the product loan limit of {product.loan_limit:,}"
            )

        requester, members = await self._resolve_members(request.household_member_ids, requester_id)

        requester_profile, *member_profiles = await asyncio.gather(
            self._fetch_profile(requester_id),
            *(self._fetch_profile(m.user_id) for m in members),
        )
        for member, profile in zip(members, member_profiles):
            if profile is None:
                logger.info(
                    "Member has no financial profile, counting as zero",
                    extra={"user_id": requester_id, "member_id": member.user_id},
                )
        combined = combine_profiles(
            requester_id,
            requester_profile,
            [(m.user_id, p) for m, p in zip(members, member_profiles)],
        )

        calculated_at = datetime.now(timezone.utc)
        outcome = calculate_affordability(
            housing=housing,
            product=product,
            loan_amount=request.loan_amount,
            loan_term_months=request.loan_term_months,
            combined=combined,
            as_of=as_of or calculated_at.date(),
            default_term_months=self.default_term_months,
        )

        result = CalculationResult(
            id=str(uuid.uuid4()),
            user_id=requester_id,
            housing_id=housing.id,
            housing_name=housing.name,
            move_in_date=housing.move_in_date,
            loan_product_id=product.id,
            loan_product_name=product.name,
            loan_amount=request.loan_amount,
            loan_term_months=request.loan_term_months,
            calculated_at=calculated_at,
            outcome=outcome,
            household_members=[requester, *members],
        )
        self.repository.create_result(result)
        return result

    async def _fetch_profile(self, user_id: str) -> Optional[FinancialProfile]:
        """Asset records from the asset service plus the withholding salary from the user service"""
        profile, salary = await asyncio.gather(
            self.profile_client.get_financial_profile(user_id),
            self.user_client.get_withholding_tax_salary(user_id),
        )
        if profile is not None:
            profile.withholding_tax_salary = salary
        return profile

    async def _resolve_members(
        self, member_ids: List[str], requester_id: str
    ) -> Tuple[HouseholdMember, List[HouseholdMember]]:
        """Requester's own entry plus selected co-members in request order; unknown ids are rejected"""
        requester = HouseholdMember(user_id=requester_id, name=requester_id, role=HouseholdRole.OWNER)
        wanted = list(dict.fromkeys(m for m in member_ids if m != requester_id))
        if not wanted:
            return requester, []

        household = await self.user_client.get_household_members(requester_id)
        by_id = {m.user_id: m for m in household}
        unknown = [m for m in wanted if m not in by_id]
        if unknown:
            raise CalculationValidationError(f"Not members of the requester's household: {', '.join(unknown)}")
        return by_id.get(requester_id, requester), [by_id[m] for m in wanted]

    def get_result(self, result_id: str, requester_id: str) -> CalculationResult:
        """Raises NotFoundError if absent, ForbiddenError if owned by someone else"""
        return to_domain(self._owned_record(result_id, requester_id))

    def list_results(
        self,
        requester_id: str,
        page: int = 0,
        size: int | None = None,
        sort_by: str = "calculatedAt",
        sort_order: str = "desc",
        status: Optional[str] = None,
        housing_id: Optional[str] = None,
    ) -> Tuple[List[CalculationResult], int]:
        """Requester's results, newest first by default"""
        if page < 0:
            raise CalculationValidationError(f"Page must be non-negative, got {page}")
        size = size or settings.default_page_size
        if not 0 < size <= settings.max_page_size:
            raise CalculationValidationError(f"Page size must be within 1-{settings.max_page_size}, got {size}")

        records, total = self.repository.list_results(
            user_id=requester_id,
            page=page,
            size=size,
            sort_by=sort_by,
            sort_order=sort_order,
            status=status,
            housing_id=housing_id,
        )
        return [to_domain(r) for r in records], total

    def delete_result(self, result_id: str, requester_id: str) -> None:
        """Hard delete by the owner only (caller commits)"""
        self.repository.delete_result(self._owned_record(result_id, requester_id))

    def _owned_record(self, result_id: str, requester_id: str):
        try:
            result_uuid = uuid.UUID(result_id)
        except ValueError:
            raise NotFoundError(f"Calculation result {result_id} not found")

        record = self.repository.get_result_by_id(result_uuid)
        if record is None:
            raise NotFoundError(f"Calculation result {result_id} not found")
        if record.user_id != requester_id:
            raise ForbiddenError(f"Calculation result {result_id} belongs to another user")
        return record
