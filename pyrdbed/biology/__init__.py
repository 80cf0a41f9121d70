# This file marks this directory as a Python package
"""
Radiobiological parameter models.

This subpackage holds the tissue response parameterizations of the
repair/damage (RD) kinetic model and the rules built directly on them.

Modules
-------

- :mod:`parameters`:
  Defines :class:`~pyrdbed.biology.parameters.ClassicalParams`,
  :class:`~pyrdbed.biology.parameters.RDParams` and the
  :class:`~pyrdbed.biology.parameters.ShoulderConvention` model constant.

- :mod:`translator`:
  Exact, mutually inverse maps between {α/β, Dq} and {r, s}, and between
  {α, β, D0} and {r, s, k}.

- :mod:`hypofractionation`:
  Tumor vs. normal-tissue comparison returning a
  :class:`~pyrdbed.biology.hypofractionation.Recommendation`.
"""

from .parameters import (
    ClassicalParams,
    RDParams,
    ShoulderConvention,
    LQ_CONSISTENT,
    CALCULATOR_LEGACY,
    DEFAULT_CONVENTION,
)
from .translator import (
    classical_to_rd,
    rd_to_classical,
    shoulder_to_rd,
    rd_to_shoulder,
    lq_to_rd,
    rd_to_lq,
)
from .hypofractionation import (
    Recommendation,
    HypofractionationResult,
    compare_tissues,
    evaluate_hypofractionation,
)

__all__ = [
    "ClassicalParams",
    "RDParams",
    "ShoulderConvention",
    "LQ_CONSISTENT",
    "CALCULATOR_LEGACY",
    "DEFAULT_CONVENTION",
    "classical_to_rd",
    "rd_to_classical",
    "shoulder_to_rd",
    "rd_to_shoulder",
    "lq_to_rd",
    "rd_to_lq",
    "Recommendation",
    "HypofractionationResult",
    "compare_tissues",
    "evaluate_hypofractionation",
]
