"""Exception hierarchy for the simulation pipeline."""


class PricecastError(Exception):
    """Base class for all pricecast errors."""


class InvalidParameterError(PricecastError, ValueError):
    """An input violates its domain constraint; raised before any simulation work."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class DegenerateNumericError(PricecastError, ArithmeticError):
    """The GBM recursion produced a non-finite price."""


class SimulationCancelledError(PricecastError):
    """The run was cancelled at a batch boundary. No result is published."""
