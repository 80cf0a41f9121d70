"""
pyRDBED: isoeffective dose conversion with the repair/damage kinetic model.

pyRDBED converts radiotherapy prescriptions between biologically equivalent
fractionation schedules. It supports:

- Translation between classical {α, β, D0} / {α/β, Dq} and reduced {r, s[, k]} parameters
- Biologically effective dose (BED) and 2-Gy equivalent (EQD2) calculations
- Isoeffective dose inversion through the principal branch of the Lambert W function
- A tumor vs. normal-tissue rule recommending hypofractionation or conventional fractionation
- Isoeffect tables over a range of fraction counts, with tabular and graphical output

Main subpackages
----------------

- :mod:`pyrdbed.biology`: Parameter containers, translations and the hypofractionation rule.
- :mod:`pyrdbed.dose`: BED, EQD2 and isoeffective dose inversion.
- :mod:`pyrdbed.isotable`: Isoeffect table generation and visualization.
- :mod:`pyrdbed.utils`: Numerical helpers (Lambert W₀).
- :mod:`pyrdbed.errors`: The :class:`~pyrdbed.errors.DomainError` taxonomy.

The engine never performs statistical fitting; it consumes already-derived parameters.
"""

from .errors import DomainError
from .utils import lambert_w0
from .biology import (
    ClassicalParams,
    RDParams,
    ShoulderConvention,
    classical_to_rd,
    rd_to_classical,
    Recommendation,
    evaluate_hypofractionation,
)
from .dose import Schedule, bed, invert_isoeffective_dose
from .isotable import IsoeffectTable, IsoeffectTableParameters

__all__ = [
    "DomainError",
    "lambert_w0",
    "ClassicalParams",
    "RDParams",
    "ShoulderConvention",
    "classical_to_rd",
    "rd_to_classical",
    "Recommendation",
    "evaluate_hypofractionation",
    "Schedule",
    "bed",
    "invert_isoeffective_dose",
    "IsoeffectTable",
    "IsoeffectTableParameters",
    ]
