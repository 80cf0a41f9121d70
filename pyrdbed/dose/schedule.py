"""
Treatment schedules and BED results.

This module defines:

- :class:`Schedule`: a total dose delivered in an integral number of equal fractions.
- :class:`BedResult`: the BED of a schedule together with its 2-Gy normalization.
- :func:`compute_bed`: evaluates a :class:`Schedule` for a set of RD parameters.
"""

import math
from dataclasses import dataclass

from pyrdbed.biology.parameters import RDParams
from pyrdbed.dose.bed import bed, denom_bed_per_fraction_2gy
from pyrdbed.constants import EQD2_DENOM_EPS, REFERENCE_FRACTION_DOSE
from pyrdbed.errors import DivisionByZeroError, InvalidParameterError


@dataclass(frozen=True)
class Schedule:
    """
    Fractionated treatment schedule.

    :ivar total_dose: Total dose [Gy], strictly positive.
    :ivar fractions: Number of fractions, positive integer.
    """

    total_dose: float
    fractions: int

    def __post_init__(self):
        """
        :raises InvalidParameterError: If the dose is not positive or the fraction count
            is not a positive integer.
        """
        dose = float(self.total_dose)
        if not (math.isfinite(dose) and dose > 0):
            raise InvalidParameterError(f"Total dose must be > 0, got {self.total_dose}.")

        n = self.fractions
        if isinstance(n, bool) or not float(n).is_integer() or n <= 0:
            raise InvalidParameterError(f"Fractions must be a positive integer, got {n}.")

        object.__setattr__(self, "total_dose", dose)
        object.__setattr__(self, "fractions", int(n))

    @property
    def dose_per_fraction(self) -> float:
        return self.total_dose / self.fractions

    def __str__(self):
        return f"{self.total_dose:.2f} Gy / {self.fractions} fx ({self.dose_per_fraction:.2f} Gy/fx)"


@dataclass(frozen=True)
class BedResult:
    """
    BED of a schedule and its normalization constant for EQD2.

    :ivar bed: Biologically effective dose [Gy].
    :ivar per_fraction_2gy_denominator: BED of a single 2-Gy fraction [Gy].
    """

    bed: float
    per_fraction_2gy_denominator: float

    @property
    def equivalent_fractions(self) -> float:
        """
        Number of 2-Gy fractions producing the same BED.

        :raises DivisionByZeroError: If the 2-Gy denominator is ≤ 1e-9.
        """
        if not (self.per_fraction_2gy_denominator > EQD2_DENOM_EPS):
            raise DivisionByZeroError("BED of a 2-Gy fraction vanishes: EQD2 undefined.")
        return self.bed / self.per_fraction_2gy_denominator

    @property
    def eqd2(self) -> float:
        """Total dose [Gy] of the equivalent 2-Gy schedule."""
        return REFERENCE_FRACTION_DOSE * self.equivalent_fractions


def compute_bed(
    schedule: Schedule, rd: RDParams, *, allow_negative_s: bool = False
) -> BedResult:
    """
    Evaluate the BED of a schedule and its 2-Gy normalization.

    :param schedule: Treatment schedule.
    :type schedule: Schedule
    :param rd: RD model parameters.
    :type rd: RDParams
    :param allow_negative_s: Permit s < 0.
    :type allow_negative_s: bool

    :returns: BED and 2-Gy denominator.
    :rtype: BedResult
    """
    value = bed(schedule.total_dose, schedule.fractions, rd.r, rd.s, allow_negative_s=allow_negative_s)
    denom = denom_bed_per_fraction_2gy(rd.r, rd.s, allow_negative_s=allow_negative_s)
    return BedResult(bed=value, per_fraction_2gy_denominator=denom)
