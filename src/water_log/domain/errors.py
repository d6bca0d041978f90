"""Domain errors for the water log."""


class InvalidOperationError(ValueError):
    """Raised when a tracker operation is rejected before touching state."""
