"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional


class RepaymentType(str, Enum):
    """How an existing loan is paid back"""

    EQUAL_PRINCIPAL = "EP"
    EQUAL_PRINCIPAL_INTEREST = "EPI"
    MATURITY_LUMP_SUM = "MDT"
    GRADUATED_PAYMENT = "GG"


class HousingType(str, Enum):
    APARTMENT = "APARTMENT"
    OFFICETEL = "OFFICETEL"
    VILLA = "VILLA"
    HOUSE = "HOUSE"


class OwnerType(str, Enum):
    """Whose data an asset record holds; a user may register their spouse's too"""

    SELF = "SELF"
    SPOUSE = "SPOUSE"


class HouseholdRole(str, Enum):
    OWNER = "OWNER"
    MEMBER = "MEMBER"


class EligibilityStatus(str, Enum):
    ELIGIBLE = "ELIGIBLE"
    INELIGIBLE = "INELIGIBLE"


@dataclass
class MoneyItem:
    """Named amount in the smallest currency unit"""

    id: str
    name: str
    amount: int

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Item name must not be empty")
        if self.amount < 0:
            raise ValueError(f"Item amount must be non-negative, got {self.amount}")


@dataclass
class LoanItem(MoneyItem):
    """Existing loan registered by a household member"""

    interest_rate: Optional[float] = None  # Annual percent, e.g. 3.5
    repayment_type: Optional[RepaymentType] = None
    expiration_date: Optional[date] = None
    is_excluded_from_calculation: bool = False

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.interest_rate is not None and not 0 <= self.interest_rate <= 100:
            raise ValueError(f"Interest rate must be within 0-100, got {self.interest_rate}")


@dataclass
class FinancialProfile:
    """
    Assets, loans, incomes and expenses of one household member.

    Totals cover the member's own records only. A spouse registered under the
    member's account is kept separately and folded in by the aggregator.
    """

    user_id: str
    assets: List[MoneyItem] = field(default_factory=list)
    loans: List[LoanItem] = field(default_factory=list)
    monthly_incomes: List[MoneyItem] = field(default_factory=list)
    monthly_expenses: List[MoneyItem] = field(default_factory=list)
    withholding_tax_salary: Optional[int] = None  # Annual, from the withholding tax receipt
    spouse: Optional["FinancialProfile"] = None

    @property
    def total_assets(self) -> int:
        return sum(item.amount for item in self.assets)

    @property
    def total_loans(self) -> int:
        return sum(item.amount for item in self.loans)

    @property
    def total_monthly_income(self) -> int:
        return sum(item.amount for item in self.monthly_incomes)

    @property
    def total_monthly_expense(self) -> int:
        return sum(item.amount for item in self.monthly_expenses)

    @property
    def annual_income(self) -> int:
        """Withholding salary when registered, otherwise monthly income annualized"""
        if self.withholding_tax_salary:
            return self.withholding_tax_salary
        return self.total_monthly_income * 12

    @classmethod
    def empty(cls, user_id: str) -> "FinancialProfile":
        return cls(user_id=user_id)


@dataclass
class CombinedProfile:
    """Household snapshot summed over every member included in a calculation"""

    member_ids: List[str]
    total_assets: int
    total_loans: int
    total_monthly_income: int
    total_monthly_expense: int
    annual_income: int
    loans: List[LoanItem] = field(default_factory=list)

    @property
    def net_assets(self) -> int:
        return self.total_assets - self.total_loans

    @property
    def monthly_available_funds(self) -> int:
        return self.total_monthly_income - self.total_monthly_expense

    @property
    def ratio_loans(self) -> List[LoanItem]:
        """Existing loans that count toward DTI/DSR"""
        return [loan for loan in self.loans if not loan.is_excluded_from_calculation]


@dataclass
class HousingListing:
    id: str
    name: str
    price: int
    housing_type: HousingType
    move_in_date: Optional[str] = None  # YYYY-MM


@dataclass
class LoanProduct:
    id: str
    name: str
    loan_limit: int
    interest_rate: float
    ltv_limit: Optional[float] = None
    dti_limit: Optional[float] = None
    dsr_limit: Optional[float] = None
    apply_ltv: bool = False
    apply_dti: bool = False
    apply_dsr: bool = False
    active: bool = True


@dataclass
class HouseholdMember:
    user_id: str
    name: str
    role: HouseholdRole


@dataclass
class CalculationRequest:
    housing_id: str
    loan_product_id: str
    loan_amount: int
    loan_term_months: int
    household_member_ids: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class LoanRatios:
    """Regulatory ratios in percent with the limits they were checked against"""

    ltv: float
    dti: float
    dsr: float
    ltv_limit: float
    dti_limit: float
    dsr_limit: float
    ltv_applied: bool
    dti_applied: bool
    dsr_applied: bool


@dataclass(frozen=True)
class EligibilityDecision:
    status: EligibilityStatus
    reasons: List[str]

    @property
    def is_eligible(self) -> bool:
        return self.status == EligibilityStatus.ELIGIBLE


@dataclass(frozen=True)
class FinancialStatus:
    current_assets: int
    estimated_assets: int
    loan_required: int


@dataclass(frozen=True)
class AfterMoveIn:
    assets: int
    monthly_income: int
    monthly_expenses: int
    monthly_available_funds: int


@dataclass(frozen=True)
class CalculationOutcome:
    """Output of the calculation pipeline, before it is stored"""

    ratios: LoanRatios
    monthly_payment: int
    decision: EligibilityDecision
    financial_status: FinancialStatus
    after_move_in: AfterMoveIn


@dataclass(frozen=True)
class CalculationResult:
    """Stored calculation, owned by the user who requested it"""

    id: str
    user_id: str
    housing_id: str
    housing_name: str
    move_in_date: Optional[str]
    loan_product_id: str
    loan_product_name: str
    loan_amount: int
    loan_term_months: int
    calculated_at: datetime
    outcome: CalculationOutcome
    household_members: List[HouseholdMember] = field(default_factory=list)

    @property
    def status(self) -> EligibilityStatus:
        return self.outcome.decision.status
