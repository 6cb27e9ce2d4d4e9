class MssError(Exception):
    """Base class for the errors raised by mssilp."""


class MalformedInputError(MssError, ValueError):
    """The input violates the pathway invariants (unknown or out-of-range
    compound, missing or truncated section)."""


class UnsupportedShapeError(MssError, ValueError):
    """The pathway has a shape the requested formulation cannot encode."""

    def __init__(self, message, reaction_id=None):
        super().__init__(message)
        self.reaction_id = reaction_id
