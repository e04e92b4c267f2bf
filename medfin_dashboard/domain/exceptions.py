"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class DataAccessError(DomainException):
    """Records service returned an error, is unavailable, or sent malformed rows"""

    pass


class ScoringPolicyError(DomainException):
    """Scoring policy is internally inconsistent (e.g. weights do not sum to 1)"""

    pass
