"""
Tumor vs. normal-tissue decision rule for hypofractionation.

The comparison maps both tissues to the RD resilience r and evaluates

    ratio = [ (α/β)_T · (1 - r_T) ] / [ (α/β)_N · (1 - r_N) ]

Hypofractionation is favoured when ratio ≤ 1 (inclusive), conventional
fractionation otherwise.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple

from pyrdbed.biology.parameters import ClassicalParams, ShoulderConvention, DEFAULT_CONVENTION
from pyrdbed.biology.translator import lq_to_rd, shoulder_to_rd
from pyrdbed.constants import DIV_EPS
from pyrdbed.errors import DivisionByZeroError


class Recommendation(Enum):
    HYPOFRACTIONATION = "hypofractionation"
    CONVENTIONAL = "conventional"

    def __str__(self):
        if self is Recommendation.HYPOFRACTIONATION:
            return "Hypofractionation is preferable"
        return "Conventional is preferable"


@dataclass(frozen=True)
class HypofractionationResult:
    """
    Outcome of a tumor/normal comparison.

    :ivar ratio: Therapeutic ratio (α/β)_T(1 - r_T) / (α/β)_N(1 - r_N).
    :ivar r_tumor: RD resilience of the tumor.
    :ivar r_normal: RD resilience of the normal tissue.
    :ivar recommendation: Decision derived from the ratio.
    """

    ratio: float
    r_tumor: float
    r_normal: float
    recommendation: Recommendation


def _alpha_beta_and_r(
    params: ClassicalParams, convention: ShoulderConvention, allow_negative_s: bool
) -> Tuple[float, float]:
    if params.representation == "shoulder":
        r, _ = shoulder_to_rd(
            params.alpha_beta, params.Dq, convention=convention, allow_negative_s=allow_negative_s
        )
        return params.alpha_beta, r

    if abs(params.beta) < DIV_EPS:
        raise DivisionByZeroError("beta cannot be zero when deriving α/β from the LQ form.")
    r, _, _ = lq_to_rd(params.alpha, params.beta, params.D0, allow_negative_s=allow_negative_s)
    return params.alpha / params.beta, r


def compare_tissues(
    tumor: ClassicalParams,
    normal: ClassicalParams,
    *,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> HypofractionationResult:
    """
    Compare tumor and normal-tissue response and recommend a fractionation regime.

    :param tumor: Classical parameters of the tumor.
    :type tumor: ClassicalParams
    :param normal: Classical parameters of the dose-limiting normal tissue.
    :type normal: ClassicalParams
    :param convention: Shoulder-form model constant used to derive r.
    :type convention: ShoulderConvention
    :param allow_negative_s: Permit negative s in the translation.
    :type allow_negative_s: bool

    :returns: Ratio, derived r values and the recommendation.
    :rtype: HypofractionationResult

    :raises ComplexRootError: Propagated from the translator.
    :raises SingularError: Propagated from the translator.
    :raises DivisionByZeroError: If the normal-tissue term (α/β)_N(1 - r_N) vanishes.
    """
    ab_t, r_t = _alpha_beta_and_r(tumor, convention, allow_negative_s)
    ab_n, r_n = _alpha_beta_and_r(normal, convention, allow_negative_s)

    numerator = ab_t * (1.0 - r_t)
    denominator = ab_n * (1.0 - r_n)
    if abs(denominator) < DIV_EPS:
        raise DivisionByZeroError(
            "Division by zero in ratio calculation: normal tissue parameters yield r ≈ 1."
        )

    ratio = numerator / denominator
    recommendation = (
        Recommendation.HYPOFRACTIONATION if ratio <= 1.0 else Recommendation.CONVENTIONAL
    )
    return HypofractionationResult(
        ratio=ratio, r_tumor=r_t, r_normal=r_n, recommendation=recommendation
    )


def evaluate_hypofractionation(
    tumor: ClassicalParams,
    normal: ClassicalParams,
    *,
    convention: ShoulderConvention = DEFAULT_CONVENTION,
    allow_negative_s: bool = False,
) -> Recommendation:
    """Return only the :class:`Recommendation` of :func:`compare_tissues`."""
    return compare_tissues(
        tumor, normal, convention=convention, allow_negative_s=allow_negative_s
    ).recommendation
