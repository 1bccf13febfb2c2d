"""
Exceptions raised by the toolkit and the reference oracle.
"""


class OracleError(RuntimeError):
    """Base class for failures attributed to the prediction oracle."""


class MissingPredictionError(OracleError):
    """The oracle returned no prediction for a requested point."""

    def __init__(self, message: str = "Failed to get prediction for point"):
        super().__init__(message)


class ModelNotInitialisedError(OracleError):
    """The oracle was used before ``initialize()``."""

    def __init__(self, message: str = "Model not initialised. Call initialize() first."):
        super().__init__(message)


class GradientExplosionError(OracleError):
    """Training produced a NaN loss, usually from a too-high learning rate."""

    def __init__(
        self, message: str = "Training produced NaN loss. Try lowering the learning rate."
    ):
        super().__init__(message)
