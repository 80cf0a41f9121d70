"""
Translation between classical and repair/damage (RD) parameterizations.

Two independent pairings are provided, each an exact inverse of the other
for s > 0 (the LQ pairing also for s < 0):

- Shoulder form {α/β, Dq} ↔ {r, s}: :func:`shoulder_to_rd`, :func:`rd_to_shoulder`.
  The model constant is carried by a :class:`~pyrdbed.biology.parameters.ShoulderConvention`.
- LQ form {α, β, D0} ↔ {r, s, k}:  :func:`lq_to_rd`, :func:`rd_to_lq`, using

  k = 1/D0,  r = 1 - α·D0,  s = 2β/(r·k)   and   D0 = 1/k,  α = k(1 - r),  β = r·s·k/2.

:func:`classical_to_rd` and :func:`rd_to_classical` dispatch on the active
representation of the container they receive.

Negative s (and the negative Dq / α/β it implies) is rejected unless the
caller opts in with ``allow_negative_s=True``. The shoulder map always takes
the + root, so for s < 0 the round trip {r, s} -> {α/β, Dq} -> {r, s} can land
on the other root: (r = 0.5, s = -0.1) comes back as (r = -1, s = 0.2).
"""

import math
from typing import Optional, Tuple

from pyrdbed.biology.parameters import (
    ClassicalParams,
    RDParams,
    ShoulderConvention,
    DEFAULT_CONVENTION,
)
from pyrdbed.constants import B_EPS, DIV_EPS, R_EPS, S_EPS
from pyrdbed.errors import (
    ComplexRootError,
    DivisionByZeroError,
    InvalidParameterError,
    NonPhysicalResultError,
    SingularError,
)


def _require_finite(**values):
    for name, value in values.items():
        if value is None or not math.isfinite(value):
            raise InvalidParameterError(f"{name} must be a finite number, got {value}.")


# --- Shoulder form {α/β, Dq} <-> {r, s} ---

def shoulder_to_rd(
    alpha_beta: float,
    Dq: float,
    *,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> Tuple[float, float]:
    """
    Map the shoulder form {α/β, Dq} to {r, s}.

    Always takes the + root of the quadratic. For s > 0 this inverts
    :func:`rd_to_shoulder` exactly; for s < 0 (``allow_negative_s=True``) it may
    return the other root: (r = 0.5, s = -0.1) maps to Dq = -5 and comes back
    as (r = -1, s = 0.2) under either convention.

    :param alpha_beta: α/β ratio [Gy].
    :type alpha_beta: float
    :param Dq: Quasi-threshold dose [Gy].
    :type Dq: float
    :param convention: Model constant c of the quadratic relation.
    :type convention: ShoulderConvention
    :param allow_negative_s: Accept negative α/β or Dq (atypical, repair-deficient tissue).
    :type allow_negative_s: bool

    :returns: Tuple (r, s).
    :rtype: tuple[float, float]

    :raises DivisionByZeroError: If α/β or Dq is within tolerance of zero.
    :raises ComplexRootError: If Dq² + c·Dq·α/β is negative.
    :raises InvalidParameterError: If α/β or Dq is negative and ``allow_negative_s`` is False.
    """
    _require_finite(alpha_beta=alpha_beta, Dq=Dq)
    if abs(alpha_beta) < DIV_EPS:
        raise DivisionByZeroError("alpha_beta cannot be zero.")
    if abs(Dq) < DIV_EPS:
        raise DivisionByZeroError("Dq cannot be zero.")
    if not allow_negative_s and (alpha_beta < 0 or Dq < 0):
        raise InvalidParameterError(
            f"alpha_beta and Dq must be positive (got {alpha_beta}, {Dq}); "
            "set allow_negative_s=True for atypical tissue."
        )

    discriminant = Dq * Dq + convention.discriminant_coefficient * Dq * alpha_beta
    if discriminant < 0:
        raise ComplexRootError(
            f"Complex root: Dq² + {convention.discriminant_coefficient:g}·Dq·α/β = {discriminant:.6g} < 0 "
            "(Dq, α/β mismatch)."
        )

    r = convention.root_scale * (math.sqrt(discriminant) - Dq) / alpha_beta
    s = r / Dq
    return r, s


def rd_to_shoulder(
    r: float,
    s: float,
    *,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> Tuple[float, float]:
    """
    Map {r, s} to the shoulder form {α/β, Dq}.

    :returns: Tuple (alpha_beta, Dq).
    :rtype: tuple[float, float]

    :raises DivisionByZeroError: If r or s is within tolerance of zero.
    :raises InvalidParameterError: If s < 0 and ``allow_negative_s`` is False.
    """
    _require_finite(r=r, s=s)
    if abs(s) < S_EPS:
        raise DivisionByZeroError("s cannot be zero in the shoulder form (Dq = r/s).")
    if abs(r) < R_EPS:
        raise DivisionByZeroError("r cannot be zero in the shoulder form (α/β ∝ 1/r).")
    if s < 0 and not allow_negative_s:
        raise InvalidParameterError(f"s must be non-negative, got {s}.")

    Dq = r / s
    alpha_beta = convention.inverse_coefficient * (1.0 - r) / (r * s)
    return alpha_beta, Dq


# --- LQ form {α, β, D0} <-> {r, s, k} ---

def lq_to_rd(
    alpha: float,
    beta: float,
    D0: float,
    *,
    allow_negative_s: bool = False,
) -> Tuple[float, float, float]:
    """
    Map the LQ form {α, β, D0} to {r, s, k}.

    β within tolerance of zero gives s = 0 exactly (single-hit limit).

    :param alpha: Linear coefficient α [Gy⁻¹].
    :type alpha: float
    :param beta: Quadratic coefficient β [Gy⁻²].
    :type beta: float
    :param D0: Mean lethal dose [Gy].
    :type D0: float
    :param allow_negative_s: Skip the sign checks on α, β and the resulting s.
    :type allow_negative_s: bool

    :returns: Tuple (r, s, k).
    :rtype: tuple[float, float, float]

    :raises DivisionByZeroError: If D0 is within tolerance of zero.
    :raises InvalidParameterError: If α ≤ 0, β < 0 or D0 < 0 in strict mode.
    :raises SingularError: If r ≈ 0 while β ≠ 0 (s undefined).
    :raises NonPhysicalResultError: If the resulting s is negative in strict mode.
    """
    _require_finite(alpha=alpha, beta=beta, D0=D0)
    if abs(D0) < DIV_EPS:
        raise DivisionByZeroError("D0 cannot be zero.")
    if not allow_negative_s:
        if alpha <= 0:
            raise InvalidParameterError(f"alpha must be strictly positive, got {alpha}.")
        if beta < 0:
            raise InvalidParameterError(f"beta must be non-negative, got {beta}.")
        if D0 < 0:
            raise InvalidParameterError(f"D0 must be strictly positive, got {D0}.")

    k = 1.0 / D0
    r = 1.0 - alpha * D0

    if abs(beta) <= B_EPS:
        return r, 0.0, k

    if abs(r) < R_EPS:
        raise SingularError("Conversion singular: r ≈ 0 while β > 0, s is undefined.")

    s = (2.0 * beta) / (r * k)
    if not math.isfinite(s):
        raise NonPhysicalResultError(f"Resulting s is not finite (r = {r}, k = {k}).")
    if s < 0 and not allow_negative_s:
        raise NonPhysicalResultError(
            f"Resulting s = {s:.6g} < 0: incompatible classical inputs (α·D0 > 1)."
        )
    return r, s, k


def rd_to_lq(r: float, s: float, k: float) -> Tuple[float, float, float]:
    """
    Map {r, s, k} to the LQ form {α, β, D0}.

    :returns: Tuple (alpha, beta, D0).
    :rtype: tuple[float, float, float]

    :raises InvalidParameterError: If k is missing or not strictly positive.
    """
    _require_finite(r=r, s=s, k=k)
    if k <= 0:
        raise InvalidParameterError(f"k must be strictly positive, got {k}.")
    D0 = 1.0 / k
    alpha = k * (1.0 - r)
    beta = (r * s * k) / 2.0
    return alpha, beta, D0


# --- Dispatchers ---

def classical_to_rd(
    params: ClassicalParams,
    *,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> RDParams:
    """
    Convert a :class:`ClassicalParams` container to :class:`RDParams`.

    The LQ form yields {r, s, k}; the shoulder form yields {r, s} with k = None.

    :param params: Classical parameters in either representation.
    :type params: ClassicalParams
    :param convention: Shoulder-form model constant (ignored for the LQ form).
    :type convention: ShoulderConvention
    :param allow_negative_s: Permit negative s.
    :type allow_negative_s: bool

    :returns: Equivalent RD parameters.
    :rtype: RDParams
    """
    if params.representation == "lq":
        r, s, k = lq_to_rd(params.alpha, params.beta, params.D0, allow_negative_s=allow_negative_s)
        return RDParams(r=r, s=s, k=k)
    r, s = shoulder_to_rd(
        params.alpha_beta, params.Dq, convention=convention, allow_negative_s=allow_negative_s
    )
    return RDParams(r=r, s=s)


def rd_to_classical(
    params: RDParams,
    *,
    form: Optional[str] = None,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> ClassicalParams:
    """
    Convert :class:`RDParams` back to a :class:`ClassicalParams` container.

    :param params: RD parameters.
    :type params: RDParams
    :param form: ``"lq"`` or ``"shoulder"``. Defaults to ``"lq"`` when k is set,
        ``"shoulder"`` otherwise.
    :type form: Optional[str]
    :param convention: Shoulder-form model constant.
    :type convention: ShoulderConvention
    :param allow_negative_s: Permit negative s.
    :type allow_negative_s: bool

    :returns: Equivalent classical parameters.
    :rtype: ClassicalParams

    :raises ValueError: If the form is unknown, or "lq" is requested without k.
    """
    if form is None:
        form = "lq" if params.k is not None else "shoulder"

    if form == "lq":
        if params.k is None:
            raise ValueError("LQ form requires the scale k.")
        if params.s < 0 and not allow_negative_s:
            raise InvalidParameterError(f"s must be non-negative, got {params.s}.")
        alpha, beta, D0 = rd_to_lq(params.r, params.s, params.k)
        return ClassicalParams(alpha=alpha, beta=beta, D0=D0)
    elif form == "shoulder":
        alpha_beta, Dq = rd_to_shoulder(
            params.r, params.s, convention=convention, allow_negative_s=allow_negative_s
        )
        return ClassicalParams(alpha_beta=alpha_beta, Dq=Dq)
    else:
        raise ValueError(f"Unsupported classical form: {form}")
