"""Exception hierarchy for the Speed Rush race engine.

Every error is raised synchronously to the direct caller of the violated
operation.  Rejections are checked before any state is mutated, so the
engine is unchanged whenever one of these propagates.
"""


class RaceError(Exception):
    """Base exception for all race engine errors."""

    pass


class NullVehicleError(RaceError, ValueError):
    """Raised when a race is started without a vehicle."""

    pass


class AlreadyInProgressError(RaceError, RuntimeError):
    """Raised when a race is started while another is in progress."""

    pass


class NotInProgressError(RaceError, RuntimeError):
    """Raised when an action is submitted outside of a running race."""

    pass


class LimitExceededError(RaceError):
    """Raised when a speed increase would exceed the vehicle's max speed."""

    pass


class AlreadyFullError(RaceError):
    """Raised when refuelling a vehicle whose tank is already full."""

    pass


class ActionFailedError(RaceError):
    """Raised when a player action is rejected inside a turn.

    The underlying :class:`LimitExceededError` or :class:`AlreadyFullError`
    is chained as ``__cause__``.  Fuel, track position and remaining time
    are untouched when this is raised.
    """

    pass
