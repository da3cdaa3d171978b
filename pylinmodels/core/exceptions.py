"""
Exception hierarchy for pylinmodels.

All exceptions inherit from PyLinModelsError to allow catching any
library-specific error. Domain-specific exceptions should inherit from
the appropriate base class here.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyLinModelsError(Exception):
    """Base exception for all pylinmodels errors."""
    pass


class ValidationError(PyLinModelsError, ValueError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks: negative
    regularization strength, targets outside a model's support,
    inconsistent bucket counts.
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class NotFittedError(PyLinModelsError):
    """
    An estimator was used before it was fitted.

    Attributes:
        estimator: Class name of the unfitted estimator
    """

    def __init__(self, message: str, estimator: str | None = None):
        super().__init__(message)
        self.estimator = estimator


class InternalConsistencyError(PyLinModelsError):
    """
    An internal invariant was violated.

    Signals a state the library guarantees cannot be reached with valid
    inputs, e.g. a value that falls in no discretizer bucket.
    """
    pass


class NumericalError(PyLinModelsError):
    """
    Numerical computation failed.

    Raised when an objective evaluates to NaN or Inf at a point where a
    finite value is required.
    """
    pass


class ConvergenceError(PyLinModelsError):
    """
    Iterative algorithm failed to converge.

    Only raised when the caller opts in (OptimizerConfig.raise_on_failure);
    by default the optimizer warns and returns its best iterate.

    Attributes:
        iterations: Number of iterations completed
        final_change: Final gradient norm
        reason: Why convergence failed (e.g., 'max_iterations', 'line_search')
        threshold: The convergence threshold that was not met
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
        threshold: float | None = None
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
        self.threshold = threshold
