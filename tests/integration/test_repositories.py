"""Integration tests for the calculation result repository"""

import uuid
from datetime import datetime, timedelta
from housing_calculator.domain.affordability import calculate_affordability
from housing_calculator.domain.aggregation import combine_profiles
from housing_calculator.domain.models import (
    CalculationResult,
    EligibilityStatus,
    HouseholdMember,
    HouseholdRole,
)
from housing_calculator.infrastructure.database.repositories import (
    CalculationResultRepository,
    to_domain,
)


def _result(housing, product, profile, as_of, user_id="kim", loan_amount=300_000_000, calculated_at=None):
    outcome = calculate_affordability(
        housing, product, loan_amount, 360, combine_profiles(user_id, profile), as_of, 120
    )
    return CalculationResult(
        id=str(uuid.uuid4()),
        user_id=user_id,
        housing_id=housing.id,
        housing_name=housing.name,
        move_in_date=housing.move_in_date,
        loan_product_id=product.id,
        loan_product_name=product.name,
        loan_amount=loan_amount,
        loan_term_months=360,
        calculated_at=calculated_at or datetime(2026, 1, 1, 9, 0),
        outcome=outcome,
        household_members=[HouseholdMember(user_id=user_id, name="Kim Minsu", role=HouseholdRole.OWNER)],
    )


def test_create_and_read_back(db, housing, loan_product, requester_profile, as_of):
    repo = CalculationResultRepository(db)
    result = _result(housing, loan_product, requester_profile, as_of)

    repo.create_result(result)
    db.commit()

    record = repo.get_result_by_id(uuid.UUID(result.id))
    assert record is not None
    assert record.is_eligible is True
    assert record.status == "ELIGIBLE"

    restored = to_domain(record)
    assert restored.id == result.id
    assert restored.outcome.ratios == result.outcome.ratios
    assert restored.outcome.decision == result.outcome.decision
    assert restored.outcome.after_move_in == result.outcome.after_move_in
    assert restored.household_members == result.household_members


def test_reasons_survive_storage(db, housing, loan_product, requester_profile, as_of):
    repo = CalculationResultRepository(db)
    loan_product.loan_limit = 800_000_000
    loan_product.ltv_limit = 50
    result = _result(housing, loan_product, requester_profile, as_of, loan_amount=500_000_000)

    repo.create_result(result)
    db.commit()

    restored = to_domain(repo.get_result_by_id(uuid.UUID(result.id)))
    assert restored.status == EligibilityStatus.INELIGIBLE
    assert restored.outcome.decision.reasons == result.outcome.decision.reasons
    assert restored.outcome.decision.reasons[0].startswith("LTV")


def test_list_filters_and_default_order(db, housing, loan_product, requester_profile, as_of):
    repo = CalculationResultRepository(db)
    start = datetime(2026, 1, 1, 9, 0)
    older = _result(housing, loan_product, requester_profile, as_of, calculated_at=start)
    newer = _result(housing, loan_product, requester_profile, as_of, calculated_at=start + timedelta(hours=1))
    someone_else = _result(housing, loan_product, requester_profile, as_of, user_id="lee")
    for result in (older, newer, someone_else):
        repo.create_result(result)
    db.commit()

    records, total = repo.list_results("kim")
    assert total == 2
    assert [str(r.id) for r in records] == [newer.id, older.id]

    records, total = repo.list_results("kim", status="INELIGIBLE")
    assert (records, total) == ([], 0)

    records, total = repo.list_results("kim", housing_id="1", sort_order="asc")
    assert [str(r.id) for r in records] == [older.id, newer.id]


def test_delete_result(db, housing, loan_product, requester_profile, as_of):
    repo = CalculationResultRepository(db)
    result = _result(housing, loan_product, requester_profile, as_of)
    record = repo.create_result(result)
    db.commit()

    repo.delete_result(record)
    db.commit()

    assert repo.get_result_by_id(uuid.UUID(result.id)) is None
