"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class CalculationValidationError(DomainException):
    """Calculation request fields are malformed or out of range"""

    pass


class NotFoundError(DomainException):
    """Referenced housing, loan product, profile or result does not exist"""

    pass


class ProfileNotFoundError(NotFoundError):
    """Requester has no registered financial profile"""

    pass


class ForbiddenError(DomainException):
    """Requester does not own the calculation result"""

    pass


class UpstreamUnavailableError(DomainException):
    """Profile, housing, loan or household source is unreachable or returned bad data"""

    def __init__(self, source: str, message: str):
        super().__init__(message)
        self.source = source
