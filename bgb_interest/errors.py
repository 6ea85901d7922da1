"""Exception types raised by the calculator and the rate provider."""


class InterestError(Exception):
    """Base class for all bgb_interest errors."""


class InvalidAmountError(InterestError, ValueError):
    pass


class InvalidPaymentFormatError(InterestError, ValueError):
    pass


class InvalidPaymentDateError(InterestError, ValueError):
    pass


class InvalidPaymentAmountError(InterestError, ValueError):
    pass


class RateNotFoundError(InterestError, LookupError):
    """Requested date lies before the first known base-rate change."""


class RateSeriesError(InterestError, ValueError):
    """Rate series is empty or not in ascending month order."""


class SourceUnavailableError(InterestError):
    """Base-rate data could not be retrieved (network or cache file)."""


class RateParseError(InterestError):
    """Base-rate data was retrieved but could not be parsed."""
