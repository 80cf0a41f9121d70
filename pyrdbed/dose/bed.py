"""
Biologically effective dose under the repair/damage kinetic model.

For a total dose D delivered in n equal fractions:

    BED = D/(1 - r) - n·r / (s·(1 - r)) · (1 - e^{-s·D/n})

which is evaluated in the equivalent form

    BED = D + n·r / (s·(1 - r)) · (x + e^{-x} - 1),    x = s·D/n

with x + e^{-x} - 1 taken from :func:`expm1_remainder`. This avoids the
cancellation between the two terms when s·D/n is small or r is close to 1.

Degenerate limits:

- s → 0: BED = D exactly (linear, single-hit limit).
- 1 - r → 0: the model is singular; :class:`~pyrdbed.errors.SingularError` is raised.

This module also provides the BED of a single 2-Gy fraction
(:func:`denom_bed_per_fraction_2gy`) and the EQD2 conversion (:func:`eqd2`).
"""

import math
import logging
from typing import Tuple

from pyrdbed.constants import ONE_R_EPS, S_EPS, EQD2_DENOM_EPS, REFERENCE_FRACTION_DOSE
from pyrdbed.errors import (
    DivisionByZeroError,
    InvalidParameterError,
    NumericOverflowError,
    SingularError,
)

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def expm1_remainder(x: float) -> float:
    """
    x + e^{-x} - 1, accurate for small |x|.

    :raises NumericOverflowError: If e^{-x} overflows.
    """
    if abs(x) < 1e-3:
        # alternating series x²/2 - x³/6 + x⁴/24 - x⁵/120
        return x * x * (0.5 - x * (1.0 / 6.0 - x * (1.0 / 24.0 - x / 120.0)))
    try:
        return x + math.expm1(-x)
    except OverflowError as exc:
        raise NumericOverflowError(f"exp(-s·d) overflow for s·d = {x!r}.") from exc


def check_rd(r: float, s: float, allow_negative_s: bool = False) -> None:
    """
    Validate RD parameters before evaluating any dose formula.

    :raises InvalidParameterError: If r or s is not finite, or s < 0 in strict mode.
    :raises SingularError: If 1 - r ≤ 1e-9.
    """
    if not (math.isfinite(r) and math.isfinite(s)):
        raise InvalidParameterError(f"r and s must be finite numbers, got r={r}, s={s}.")
    if (1.0 - r) <= ONE_R_EPS:
        raise SingularError(f"r = {r} ≈ 1: BED singularity.")
    if s < 0 and not allow_negative_s:
        raise InvalidParameterError(
            f"s must be non-negative, got {s}; set allow_negative_s=True for atypical tissue."
        )


def bed(
    total_dose: float,
    fractions: float,
    r: float,
    s: float,
    *,
    allow_negative_s: bool = False,
) -> float:
    """
    Compute the biologically effective dose of a fractionated schedule.

    :param total_dose: Total dose D [Gy], D > 0.
    :type total_dose: float
    :param fractions: Number of equal fractions n, n > 0 (need not be integral here).
    :type fractions: float
    :param r: Residual/resistance fraction, r < 1.
    :type r: float
    :param s: Sensitization rate [Gy⁻¹].
    :type s: float
    :param allow_negative_s: Permit s < 0.
    :type allow_negative_s: bool

    :returns: BED [Gy].
    :rtype: float

    :raises InvalidParameterError: If D ≤ 0, n ≤ 0, an input is not finite, or s < 0 in strict mode.
    :raises SingularError: If 1 - r is below tolerance.
    :raises NumericOverflowError: If e^{-s·D/n} overflows (large negative s).
    """
    if not (math.isfinite(total_dose) and total_dose > 0):
        raise InvalidParameterError(f"Total dose must be > 0, got {total_dose}.")
    if not (math.isfinite(fractions) and fractions > 0):
        raise InvalidParameterError(f"Number of fractions must be > 0, got {fractions}.")
    check_rd(r, s, allow_negative_s)

    if abs(s) < S_EPS:
        logger.debug("s = %r below tolerance, using linear limit BED = D", s)
        return float(total_dose)

    x = s * total_dose / fractions
    value = total_dose + (fractions * r) / (s * (1.0 - r)) * expm1_remainder(x)
    if not math.isfinite(value):
        raise NumericOverflowError(f"BED is not finite for D={total_dose}, n={fractions}, r={r}, s={s}.")
    return value


def denom_bed_per_fraction_2gy(
    r: float, s: float, *, allow_negative_s: bool = False
) -> float:
    """
    BED of a single 2-Gy fraction.

    Equals 2/(1 - r) - r/(s(1 - r))·(1 - e^{-2s}), and exactly 2 in the s → 0 limit.
    Used as the denominator when converting a BED into an equivalent number of 2-Gy fractions.

    :rtype: float
    """
    return bed(REFERENCE_FRACTION_DOSE, 1, r, s, allow_negative_s=allow_negative_s)


def eqd2(
    bed_value: float, r: float, s: float, *, allow_negative_s: bool = False
) -> Tuple[float, float]:
    """
    Express a BED as an equivalent schedule of 2-Gy fractions.

    :param bed_value: BED [Gy].
    :type bed_value: float
    :param r: Residual/resistance fraction.
    :type r: float
    :param s: Sensitization rate [Gy⁻¹].
    :type s: float

    :returns: Tuple (equivalent number of 2-Gy fractions, EQD2 total dose [Gy]).
    :rtype: tuple[float, float]

    :raises DivisionByZeroError: If the BED of a 2-Gy fraction is ≤ 1e-9.
    """
    denom = denom_bed_per_fraction_2gy(r, s, allow_negative_s=allow_negative_s)
    if not (denom > EQD2_DENOM_EPS):
        raise DivisionByZeroError(f"BED of a 2-Gy fraction is {denom:.3g}: EQD2 undefined.")
    n_eqd2 = bed_value / denom
    return n_eqd2, REFERENCE_FRACTION_DOSE * n_eqd2
