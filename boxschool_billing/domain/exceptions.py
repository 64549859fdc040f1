"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class EnrollmentNotFoundError(DomainException):
    """Enrollment does not exist"""

    pass


class ChargeNotFoundError(DomainException):
    """Charge does not exist"""

    pass


class NotAnInstallmentError(DomainException):
    """Charge exists but is not an installment"""

    pass


class CreditPlanConflictError(DomainException):
    """New credit plan does not fit the installments already paid"""

    pass
