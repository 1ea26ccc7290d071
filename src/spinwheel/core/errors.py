"""Error types raised by the spin engine."""


class ValidationError(ValueError):
    """Raised when caller-supplied data has the wrong shape.

    Covers malformed outcome tables (length outside 3-8, probabilities not
    summing to 1.0), out-of-range seeds, segment counts and indices.
    Always raised synchronously and never retried.
    """


class PrizeProviderError(RuntimeError):
    """A prize session could not be loaded (network or server failure)."""
