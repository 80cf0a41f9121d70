"""
Isoeffective dose inversion.

Given a reference BED and a target number of fractions n2, find the total dose
D2 such that ``bed(D2, n2, r, s) == reference_bed``. Writing x = s·D2/n2 and

    K = r + s(1 - r)·BED / n2

the BED equation becomes x + r·e^{-x} = K, whose solution is

    D2 = (n2/s) · (K + W₀(-r·e^{-K}))

with W₀ the principal branch of the Lambert W function.

For small s·D2/n2 the closed form cancels (K ≈ -W ≈ r), so x = s·D2/n2 is
refined with Newton steps on the cancellation-free residual

    g(x) = (1 - r)·x + r·(x + e^{-x} - 1) - s(1 - r)·BED/n2

and every result is checked by substituting it back into the BED formula.

In the s → 0 limit the isoeffect is schedule-invariant (BED = D) and the
Lambert-W path is bypassed: D2 equals the reference dose.
"""

import math
import logging
from dataclasses import dataclass
from typing import Optional

from pyrdbed.biology.parameters import RDParams
from pyrdbed.constants import (
    EXP_MAX_ARG,
    EXP_MIN_ARG,
    ISOEFFECT_POLISH_ITER,
    ISOEFFECT_POLISH_TOL,
    ISOEFFECT_RTOL,
    S_EPS,
)
from pyrdbed.dose.bed import bed, check_rd, expm1_remainder
from pyrdbed.dose.schedule import Schedule
from pyrdbed.errors import (
    DomainError,
    InvalidParameterError,
    NoPhysicalSolutionError,
    NonConvergentError,
    NonPhysicalResultError,
    NumericOverflowError,
)
from pyrdbed.utils.lambertw import lambert_w0

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


@dataclass(frozen=True)
class IsoeffectResult:
    """
    Solution of the isoeffect equation.

    ``intermediate_k`` and ``lambert_w_value`` are kept for diagnostics; both are
    None when the s → 0 branch was taken.

    :ivar new_total_dose: Total dose D2 [Gy].
    :ivar new_per_fraction: Dose per fraction D2/n2 [Gy].
    :ivar target_fractions: Number of fractions n2.
    :ivar intermediate_k: K = r + s(1 - r)·BED/n2.
    :ivar lambert_w_value: W₀(-r·e^{-K}).
    """

    new_total_dose: float
    new_per_fraction: float
    target_fractions: float
    intermediate_k: Optional[float] = None
    lambert_w_value: Optional[float] = None


def _exp_safe(x: float) -> float:
    if x > EXP_MAX_ARG:
        return math.inf
    if x < EXP_MIN_ARG:
        return 0.0
    return math.exp(x)


def _polish(x: float, r: float, target: float) -> float:
    """
    Newton refinement of x = s·D2/n2 on g(x) = (1 - r)x + r(x + e^{-x} - 1) - target.

    g'(x) = (1 - r) - r·expm1(-x) is positive on the principal branch; the
    refinement stops early if it is not.
    """
    for _ in range(ISOEFFECT_POLISH_ITER):
        residual = (1.0 - r) * x + r * expm1_remainder(x) - target
        try:
            slope = (1.0 - r) - r * math.expm1(-x)
        except OverflowError as exc:
            raise NumericOverflowError(f"exp(-x) overflow while refining x = {x!r}.") from exc
        if not (math.isfinite(slope) and slope > 0):
            break
        dx = residual / slope
        x -= dx
        if abs(dx) <= ISOEFFECT_POLISH_TOL * abs(x):
            break
    return x


def solve_isoeffect(
    reference_bed: float,
    r: float,
    s: float,
    target_fractions: float,
    *,
    allow_negative_s: bool = False,
) -> IsoeffectResult:
    """
    Solve for the total dose at ``target_fractions`` that reproduces ``reference_bed``.

    :param reference_bed: Reference BED [Gy], > 0.
    :type reference_bed: float
    :param r: Residual/resistance fraction, r < 1.
    :type r: float
    :param s: Sensitization rate [Gy⁻¹].
    :type s: float
    :param target_fractions: Target number of fractions n2, > 0.
    :type target_fractions: float
    :param allow_negative_s: Permit s < 0.
    :type allow_negative_s: bool

    :returns: New total dose, dose per fraction and the intermediate K and W.
    :rtype: IsoeffectResult

    :raises InvalidParameterError: If BED ≤ 0, n2 ≤ 0, or s < 0 in strict mode.
    :raises SingularError: If 1 - r is below tolerance.
    :raises NoPhysicalSolutionError: If the Lambert-W evaluation fails, or (s < 0)
        the root does not reproduce the reference BED.
    :raises NonConvergentError: If (s > 0) the root does not reproduce the reference BED.
    :raises NonPhysicalResultError: If D2 ≤ 0 or is not finite.
    """
    if not (math.isfinite(reference_bed) and reference_bed > 0):
        raise InvalidParameterError(f"Reference BED must be > 0, got {reference_bed}.")
    if not (math.isfinite(target_fractions) and target_fractions > 0):
        raise InvalidParameterError(f"Target fractions must be > 0, got {target_fractions}.")
    check_rd(r, s, allow_negative_s)

    n2 = target_fractions
    if abs(s) < S_EPS:
        logger.debug("s = %r below tolerance, isoeffect is schedule-invariant", s)
        d2 = float(reference_bed)
        return IsoeffectResult(new_total_dose=d2, new_per_fraction=d2 / n2, target_fractions=n2)

    K = r + (s * (1.0 - r) / n2) * reference_bed
    arg = 0.0 if r == 0 else -r * _exp_safe(-K)

    try:
        w = lambert_w0(arg)
    except DomainError as exc:
        raise NoPhysicalSolutionError(
            f"Lambert-W failure for K = {K:.6g} (argument {arg:.6g}): parameters out of domain."
        ) from exc

    x = _polish(K + w, r, s * (1.0 - r) * reference_bed / n2)
    d2 = (n2 / s) * x
    if not (math.isfinite(d2) and d2 > 0):
        raise NonPhysicalResultError(f"Computed D2 = {d2} is non-physical.")

    check = bed(d2, n2, r, s, allow_negative_s=True)
    if abs(check - reference_bed) > ISOEFFECT_RTOL * abs(reference_bed):
        # BED is not monotone in D when s < 0
        error = NoPhysicalSolutionError if s < 0 else NonConvergentError
        raise error(
            f"Root D2 = {d2:.6g} gives BED {check:.6g}, expected {reference_bed:.6g}."
        )

    logger.debug("isoeffect: BED=%r n2=%r K=%r W=%r D2=%r", reference_bed, n2, K, w, d2)
    return IsoeffectResult(
        new_total_dose=d2,
        new_per_fraction=d2 / n2,
        target_fractions=n2,
        intermediate_k=K,
        lambert_w_value=w,
    )


def invert_isoeffective_dose(
    reference_bed: float,
    r: float,
    s: float,
    target_fractions: float,
    *,
    allow_negative_s: bool = False,
) -> float:
    """
    Total dose D2 [Gy] at ``target_fractions`` with the same BED as the reference.

    See :func:`solve_isoeffect` for the algorithm and the errors raised.

    :rtype: float
    """
    return solve_isoeffect(
        reference_bed, r, s, target_fractions, allow_negative_s=allow_negative_s
    ).new_total_dose


def isoeffective_schedule(
    reference: Schedule,
    rd: RDParams,
    target_fractions: int,
    *,
    allow_negative_s: bool = False,
) -> Schedule:
    """
    Convert a reference schedule into the isoeffective schedule with ``target_fractions``.

    :param reference: Reference schedule (D1, n1).
    :type reference: Schedule
    :param rd: RD model parameters.
    :type rd: RDParams
    :param target_fractions: Number of fractions of the new schedule.
    :type target_fractions: int

    :returns: Isoeffective schedule (D2, n2).
    :rtype: Schedule
    """
    reference_bed = bed(
        reference.total_dose, reference.fractions, rd.r, rd.s, allow_negative_s=allow_negative_s
    )
    d2 = invert_isoeffective_dose(
        reference_bed, rd.r, rd.s, target_fractions, allow_negative_s=allow_negative_s
    )
    return Schedule(total_dose=d2, fractions=target_fractions)
