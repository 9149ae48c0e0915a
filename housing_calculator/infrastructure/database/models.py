"""SQLAlchemy ORM models for stored calculation results"""

import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, Boolean, Float, DateTime, Integer, Text, JSON
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalculationResultRecord(Base):
    """Immutable affordability calculation, hard-deleted only by its owner"""

    __tablename__ = "calculation_result"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    housing_id = Column(Text, nullable=False, index=True)
    housing_name = Column(Text, nullable=False)
    move_in_date = Column(String(7), nullable=True)
    loan_product_id = Column(Text, nullable=False)
    loan_product_name = Column(Text, nullable=False)
    loan_amount = Column(BigInteger, nullable=False)
    loan_term_months = Column(Integer, nullable=False)
    status = Column(String(16), nullable=False, index=True)

    # Financial status
    current_assets = Column(BigInteger, nullable=False)
    estimated_assets = Column(BigInteger, nullable=False)
    loan_required = Column(BigInteger, nullable=False)

    # Loan analysis
    ltv = Column(Float, nullable=False)
    dti = Column(Float, nullable=False)
    dsr = Column(Float, nullable=False)
    ltv_limit = Column(Float, nullable=False)
    dti_limit = Column(Float, nullable=False)
    dsr_limit = Column(Float, nullable=False)
    ltv_applied = Column(Boolean, nullable=False, default=False)
    dti_applied = Column(Boolean, nullable=False, default=False)
    dsr_applied = Column(Boolean, nullable=False, default=False)
    is_eligible = Column(Boolean, nullable=False)
    ineligibility_reasons = Column(JSON, nullable=False, default=list)
    monthly_payment = Column(BigInteger, nullable=False)

    # After move-in
    after_assets = Column(BigInteger, nullable=False)
    after_monthly_income = Column(BigInteger, nullable=False)
    after_monthly_expenses = Column(BigInteger, nullable=False)
    monthly_available_funds = Column(BigInteger, nullable=False)

    household_members = Column(JSON, nullable=False, default=list)
    calculated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, index=True)
