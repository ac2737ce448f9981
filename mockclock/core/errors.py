"""Exception hierarchy for mockclock."""


class MockClockError(Exception):
    """Package base exception."""


class InvalidArgumentError(MockClockError, ValueError):
    """Missing argument, illegal calendar field or unknown zone."""
