"""
Radiobiological parameter containers.

This module defines:

- :class:`ClassicalParams`: tissue response parameters in one of the two
  classical forms, either the linear-quadratic {α, β, D0} set or the clinical
  {α/β, Dq} (shoulder) set.
- :class:`RDParams`: the reduced repair/damage parameters {r, s} with an
  optional overall scale k.
- :class:`ShoulderConvention`: the model constant relating the shoulder form
  to {r, s}, kept as a named, explicit parameter.

All containers are created fresh per calculation and carry no identity.
"""

import math
from dataclasses import dataclass
from typing import Optional

from pyrdbed.constants import ONE_R_EPS
from pyrdbed.errors import InvalidParameterError, SingularError


@dataclass(frozen=True)
class ClassicalParams:
    """
    Classical survival-curve parameters for a single tissue.

    Exactly one representation must be active: either the LQ form
    (``alpha``, ``beta``, ``D0``) or the shoulder form (``alpha_beta``, ``Dq``).
    Both describe the same underlying survival curve.

    :param alpha: Linear coefficient α [Gy⁻¹].
    :type alpha: Optional[float]
    :param beta: Quadratic coefficient β [Gy⁻²].
    :type beta: Optional[float]
    :param D0: Inverse terminal slope (mean lethal dose) [Gy].
    :type D0: Optional[float]
    :param alpha_beta: α/β ratio [Gy].
    :type alpha_beta: Optional[float]
    :param Dq: Quasi-threshold (shoulder) dose [Gy].
    :type Dq: Optional[float]
    """

    alpha: Optional[float] = None
    beta: Optional[float] = None
    D0: Optional[float] = None

    alpha_beta: Optional[float] = None
    Dq: Optional[float] = None

    def __post_init__(self):
        """
        Check that exactly one complete representation is provided.

        :raises ValueError: If the LQ and shoulder forms are mixed, incomplete, or missing.
        """
        lq = (self.alpha, self.beta, self.D0)
        shoulder = (self.alpha_beta, self.Dq)
        has_lq = any(v is not None for v in lq)
        has_shoulder = any(v is not None for v in shoulder)

        if has_lq and has_shoulder:
            raise ValueError(
                "Cannot mix LQ (alpha, beta, D0) and shoulder (alpha_beta, Dq) parameters."
            )
        if not has_lq and not has_shoulder:
            raise ValueError(
                "Either (alpha, beta, D0) or (alpha_beta, Dq) must be provided."
            )
        if has_lq and any(v is None for v in lq):
            raise ValueError("LQ form requires all of alpha, beta and D0.")
        if has_shoulder and any(v is None for v in shoulder):
            raise ValueError("Shoulder form requires both alpha_beta and Dq.")

        for name in ("alpha", "beta", "D0", "alpha_beta", "Dq"):
            value = getattr(self, name)
            if value is not None:
                value = float(value)
                if not math.isfinite(value):
                    raise ValueError(f"{name} must be a finite number, got {value}.")
                object.__setattr__(self, name, value)

    @property
    def representation(self) -> str:
        """
        Get the active representation.

        :returns: ``"lq"`` for {α, β, D0}, ``"shoulder"`` for {α/β, Dq}.
        :rtype: str
        """
        return "lq" if self.alpha is not None else "shoulder"

    @classmethod
    def from_dict(cls, config: dict) -> "ClassicalParams":
        """
        Create a ClassicalParams instance from a dictionary.

        :param config: Dictionary of parameters with keys matching the dataclass fields.
        :type config: dict

        :returns: A populated ClassicalParams instance.
        :rtype: ClassicalParams

        :raises ValueError: If unknown keys are present in the dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys
        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in ClassicalParams config: {sorted(extra_keys)}"
            )
        return cls(**config)


@dataclass(frozen=True)
class RDParams:
    """
    Reduced repair/damage model parameters.

    :ivar r: Residual/resistance fraction (dimensionless, r < 1).
    :ivar s: Sensitization rate [Gy⁻¹].
    :ivar k: Optional overall scale [Gy⁻¹]; cancels in ratio-based formulas.
    """

    r: float
    s: float
    k: Optional[float] = None

    def __post_init__(self):
        """
        :raises InvalidParameterError: If r, s or k is not finite.
        :raises SingularError: If 1 - r is below tolerance.
        """
        for name in ("r", "s", "k"):
            value = getattr(self, name)
            if value is None:
                continue
            value = float(value)
            if not math.isfinite(value):
                raise InvalidParameterError(f"{name} must be a finite number, got {value}.")
            object.__setattr__(self, name, value)

        if (1.0 - self.r) <= ONE_R_EPS:
            raise SingularError(f"r = {self.r} is too close to (or above) 1: BED singularity.")

    @classmethod
    def from_dict(cls, config: dict) -> "RDParams":
        """
        Create an RDParams instance from a dictionary.

        :raises ValueError: If unknown keys are present in the dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys
        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in RDParams config: {sorted(extra_keys)}"
            )
        return cls(**config)


@dataclass(frozen=True)
class ShoulderConvention:
    """
    Model constant linking the shoulder form {α/β, Dq} to {r, s}.

    The forward map solves

        r = root_scale · (√(Dq² + c·Dq·α/β) - Dq) / (α/β),    s = r / Dq

    and the inverse map is

        Dq = r / s,    α/β = c' · (1 - r) / (r·s)

    with c' = 4/c and root_scale = 2/c. This is the only choice of (c', root_scale)
    for which the two maps are exact inverses of one another for a given c.

    :ivar discriminant_coefficient: The constant c (> 0).
    :ivar name: Label shown in summaries.
    """

    discriminant_coefficient: float
    name: str = "custom"

    def __post_init__(self):
        c = float(self.discriminant_coefficient)
        if not (math.isfinite(c) and c > 0):
            raise ValueError(f"discriminant_coefficient must be positive, got {c}.")
        object.__setattr__(self, "discriminant_coefficient", c)

    @property
    def inverse_coefficient(self) -> float:
        """The constant c' of the inverse map α/β = c'(1 - r)/(r·s)."""
        return 4.0 / self.discriminant_coefficient

    @property
    def root_scale(self) -> float:
        """Prefactor of the quadratic root in the forward map."""
        return 2.0 / self.discriminant_coefficient


# α/β from the shoulder map equals α/β from the LQ map {α, β, D0} <-> {r, s, k}
LQ_CONSISTENT = ShoulderConvention(2.0, name="lq-consistent")

# Calculator mapping (c = 1, c' = 4), used by default
CALCULATOR_LEGACY = ShoulderConvention(1.0, name="calculator-legacy")

DEFAULT_CONVENTION = CALCULATOR_LEGACY
