class ConsumerError(Exception):
    """
    Base class for exceptions that are raised during consumption.

    Subclasses may extend this class to disambiguate errors that are specific
    to their implementation.
    """


class InvalidStateError(RuntimeError):
    """
    Raised when the commit manager detects that its own scheduling invariants
    no longer hold. This always indicates a programming error.
    """
