"""Errors shared across the CafeHub domain that Protean does not model."""


class ForbiddenError(Exception):
    """The acting user does not own the cafe or rating being changed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
