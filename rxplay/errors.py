class RxPlayError(Exception):
    """Base class for errors raised by rxplay itself."""

    pass


class InvalidDemandError(RxPlayError, ValueError):
    """Raised when a demand would be negative."""

    pass


class FutureTimeoutError(RxPlayError, TimeoutError):
    pass
