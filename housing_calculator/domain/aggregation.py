"""Input aggregation - household profiles folded into one financial snapshot"""

from typing import List, Optional, Sequence

from housing_calculator.domain.models import CombinedProfile, FinancialProfile
from housing_calculator.domain.exceptions import ProfileNotFoundError


def combine_profiles(
    requester_id: str,
    requester_profile: Optional[FinancialProfile],
    member_profiles: Sequence[tuple[str, Optional[FinancialProfile]]] = (),
) -> CombinedProfile:
    """
    Sum the requester's and selected members' profiles.

    Requirements:
    - Requester must have a registered profile
    - A member without a profile contributes zero
    - A spouse registered under a member's account is summed with that member
    - Loans are kept as items so excluded ones can be filtered for DTI/DSR

    Raises:
        ProfileNotFoundError: requester profile is missing
    """
    if requester_profile is None:
        raise ProfileNotFoundError(f"No financial profile registered for user {requester_id}")

    profiles: List[FinancialProfile] = [requester_profile]
    member_ids = [requester_id]
    for member_id, profile in member_profiles:
        member_ids.append(member_id)
        profiles.append(profile if profile is not None else FinancialProfile.empty(member_id))

    # Registered spouses count as additional earners
    profiles.extend([p.spouse for p in profiles if p.spouse is not None])

    return CombinedProfile(
        member_ids=member_ids,
        total_assets=sum(p.total_assets for p in profiles),
        total_loans=sum(p.total_loans for p in profiles),
        total_monthly_income=sum(p.total_monthly_income for p in profiles),
        total_monthly_expense=sum(p.total_monthly_expense for p in profiles),
        annual_income=sum(p.annual_income for p in profiles),
        loans=[loan for p in profiles for loan in p.loans],
    )
