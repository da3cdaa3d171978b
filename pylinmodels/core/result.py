"""
Generic result container for pylinmodels computations.

Every optimizer backend returns its payload inside a Result so that timing,
convergence metadata and non-fatal warnings travel with the numbers.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (converged, iterations, message)
    - timing is optional (don't burden unit tests)
    - Immutable (frozen=True) so a fitted model's history cannot change
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope.

    Type Parameters:
        P: The parameter payload type

    Attributes:
        params: Payload (minimizer, objective value, iteration counts, ...)
        info: Structured metadata (method, convergence, diagnostics)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the backend that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> Result(
        ...     params=OptimizeParams(...),
        ...     info={'method': 'lbfgs', 'converged': True, 'n_iter': 12},
        ...     timing={'total_seconds': 0.002},
        ...     backend_name='cpu_lbfgs'
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
