"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class FxRateSourceError(DomainException):
    """FX rate provider returned an error or is unavailable"""

    pass


class ConversionDegraded(DomainException):
    """
    Live FX rate unavailable; a fallback rate (or no conversion) was used.

    Never raised. Instances are attached to conversion results and quote totals
    so callers can flag that rates may be approximate.
    """

    def __init__(self, from_currency: str, to_currency: str, reason: str):
        self.from_currency = from_currency
        self.to_currency = to_currency
        self.reason = reason
        super().__init__(f"{from_currency}->{to_currency}: {reason}")


class InvalidComponentSelection(DomainException):
    """Component selection cannot be priced (bad dates, quantities or prices)"""

    def __init__(self, kind: str, reason: str):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} selection: {reason}")


class ScheduleReconciliationFailure(DomainException):
    """Installments could not be made to sum exactly to the scheduled total"""

    pass
