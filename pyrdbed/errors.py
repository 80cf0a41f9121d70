"""
Error taxonomy for the dose-equivalence engine.

Every numerical failure raised by pyRDBED is a subclass of :class:`DomainError`,
itself a :class:`ValueError`, so callers can either catch the whole family or
react to a single kind. Each class carries a short ``kind`` label that
presentation layers can map to a specific message (e.g. ``"singular"`` ->
"r ≈ 1: BED singularity").

Kinds
-----

- ``below_branch_point``: Lambert-W argument below -1/e.
- ``non_convergent``: iterative solver exhausted its budget or diverged.
- ``overflow``: an exponential left the representable range.
- ``complex_root``: negative discriminant in the shoulder-form translation.
- ``zero_division``: a divisor within tolerance of zero.
- ``singular``: the model is singular (1 - r ≈ 0, or r ≈ 0 with β > 0).
- ``non_physical_result``: a computed quantity is negative or non-finite.
- ``no_physical_solution``: the isoeffect equation has no admissible root.
- ``invalid_parameter``: an input violates a precondition (D ≤ 0, s < 0, ...).
"""


class DomainError(ValueError):
    """Base class of all recoverable numerical failures."""

    kind = "domain_error"


class BelowBranchPointError(DomainError):
    kind = "below_branch_point"


class NonConvergentError(DomainError):
    kind = "non_convergent"


class NumericOverflowError(DomainError):
    kind = "overflow"


class ComplexRootError(DomainError):
    kind = "complex_root"


class DivisionByZeroError(DomainError):
    kind = "zero_division"


class SingularError(DomainError):
    kind = "singular"


class NonPhysicalResultError(DomainError):
    kind = "non_physical_result"


class NoPhysicalSolutionError(DomainError):
    """
    Raised by the isoeffect inverter when the Lambert-W step fails.

    The underlying solver error is available as ``__cause__``.
    """

    kind = "no_physical_solution"


class InvalidParameterError(DomainError):
    kind = "invalid_parameter"


__all__ = [
    "DomainError",
    "BelowBranchPointError",
    "NonConvergentError",
    "NumericOverflowError",
    "ComplexRootError",
    "DivisionByZeroError",
    "SingularError",
    "NonPhysicalResultError",
    "NoPhysicalSolutionError",
    "InvalidParameterError",
]
