"""Exceptions raised by the blackjack table."""


class IllegalActionError(Exception):
    """Raised when a command is issued outside its phase or breaks a precondition.

    The table catches it at the command boundary and reports it as a status
    message; the table state is left unchanged.
    """

    pass


class InsufficientFundsError(IllegalActionError):
    """Raised when a player does not have enough chips to perform an action."""

    pass


class ShoeExhaustedError(IllegalActionError):
    """Raised when the shoe cannot supply the cards an action needs."""

    pass


class InvariantViolation(AssertionError):
    """Raised when the table reaches a state that should be impossible."""

    pass
