"""
Principal branch of the Lambert W function.

This module defines :func:`lambert_w0`, a scalar root-finder for W₀(z),
the solution of W·e^W = z with W ≥ -1, valid on z ≥ -1/e.

The solver uses a case-dependent initial guess followed by safeguarded
Halley iterations:

- near the branch point: W ≈ -1 + p - p²/3, with p = √(2(e·z + 1))
- small negative z: W ≈ log1p(z)
- 0 < z < 1: W ≈ z
- large z: W ≈ ln z - ln ln z

It never returns a stale guess: failures raise a
:class:`~pyrdbed.errors.DomainError` subclass instead.

Examples
--------

>>> from pyrdbed.utils.lambertw import lambert_w0
>>> lambert_w0(0.0)
0.0
>>> round(lambert_w0(1.0), 12)
0.56714329041
"""

import math
import sys
import logging

from pyrdbed.constants import (
    BRANCH_POINT,
    BRANCH_TOL,
    W_ZERO_EPS,
    W_STEP_TOL,
    W_MAX_ITER,
    W_MAX_STEP,
)
from pyrdbed.errors import (
    BelowBranchPointError,
    InvalidParameterError,
    NonConvergentError,
    NumericOverflowError,
)

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)

_EPS = sys.float_info.epsilon


def _initial_guess(z: float) -> float:
    """
    Pick a starting point for the Halley iteration.

    :param z: Argument, already known to lie strictly above the branch point.
    :type z: float
    :returns: Initial estimate of W₀(z).
    :rtype: float
    """
    if z < -0.3:
        p = math.sqrt(max(0.0, 2.0 * (math.e * z + 1.0)))
        w = -1.0 + p - (p * p) / 3.0
        return min(max(w, -1.0), -0.1)
    if z < 0.0:
        return max(math.log1p(z), -1.0 + 1e-9)
    if z < 1.0:
        return z
    if z < 3.0:
        return math.log1p(z)
    log_z = math.log(z)
    return log_z - math.log(log_z)


def _clamp(dw: float) -> float:
    return max(min(dw, W_MAX_STEP), -W_MAX_STEP)


def lambert_w0(z: float, max_iter: int = W_MAX_ITER, tol: float = W_STEP_TOL) -> float:
    """
    Evaluate the principal branch W₀(z) of the Lambert W function.

    Special values are returned exactly: W₀(0) = 0 and W₀(-1/e) = -1.

    :param z: Argument, z ≥ -1/e.
    :type z: float
    :param max_iter: Maximum number of Halley iterations.
    :type max_iter: int
    :param tol: Step-size convergence tolerance (relative to max(1, |W|)).
    :type tol: float

    :returns: W₀(z).
    :rtype: float

    :raises BelowBranchPointError: If z < -1/e (beyond a 1e-15 tolerance).
    :raises NumericOverflowError: If z is +inf or e^W overflows during iteration.
    :raises NonConvergentError: If the iteration diverges or does not converge.
    :raises InvalidParameterError: If z is NaN.
    """
    z = float(z)
    if math.isnan(z):
        raise InvalidParameterError("Lambert W argument is NaN.")
    if math.isinf(z):
        if z > 0:
            raise NumericOverflowError("Lambert W argument is +inf.")
        raise BelowBranchPointError("Lambert W argument is -inf.")

    if z < BRANCH_POINT - BRANCH_TOL:
        raise BelowBranchPointError(
            f"Lambert W0 undefined for z = {z!r} < -1/e."
        )
    if abs(z - BRANCH_POINT) <= BRANCH_TOL:
        return -1.0
    if abs(z) < W_ZERO_EPS:
        return 0.0

    w = _initial_guess(z)

    for iteration in range(max_iter):
        try:
            ew = math.exp(w)
        except OverflowError as exc:
            raise NumericOverflowError(
                f"exp(W) overflow while solving W·e^W = {z!r} (W = {w!r})."
            ) from exc

        wew = w * ew
        f = wew - z
        if abs(f) <= 4.0 * _EPS * max(abs(z), abs(wew)):
            logger.debug("W0(%r) converged on residual after %d iterations", z, iteration)
            return w

        wp1 = w + 1.0
        if abs(wp1) < 1e-14:
            # f'(W) vanishes at W = -1
            w = -1.0 + 1e-12
            continue

        denom = ew * wp1 - (w + 2.0) * f / (2.0 * wp1)
        if not math.isfinite(denom) or abs(denom) < 1e-300:
            newton_denom = ew * wp1
            if not math.isfinite(newton_denom) or newton_denom == 0.0:
                raise NonConvergentError(
                    f"Lambert W0 iteration broke down at W = {w!r} for z = {z!r}."
                )
            dw = _clamp(f / newton_denom)
        else:
            dw = _clamp(f / denom)

        w -= dw
        if not math.isfinite(w):
            raise NonConvergentError(f"Lambert W0 iteration diverged for z = {z!r}.")
        if w <= -1.0:
            # stay on the principal branch
            w = -1.0 + 1e-12
            continue
        if abs(dw) <= tol * max(1.0, abs(w)):
            logger.debug("W0(%r) converged after %d iterations", z, iteration + 1)
            return w

    raise NonConvergentError(
        f"Lambert W0 did not converge for z = {z!r} within {max_iter} iterations."
    )
