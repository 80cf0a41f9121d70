# This file marks this directory as a Python package
"""
Dose-equivalence engine.

This subpackage computes biologically effective doses (BED) under the
repair/damage kinetic model and inverts them to isoeffective schedules.

Modules
-------

- :mod:`bed`:
  :func:`~pyrdbed.dose.bed.bed`, its 2-Gy denominator
  :func:`~pyrdbed.dose.bed.denom_bed_per_fraction_2gy` and the EQD2 conversion
  :func:`~pyrdbed.dose.bed.eqd2`.

- :mod:`schedule`:
  :class:`~pyrdbed.dose.schedule.Schedule` and
  :class:`~pyrdbed.dose.schedule.BedResult` value types.

- :mod:`isoeffect`:
  Lambert-W based inversion :func:`~pyrdbed.dose.isoeffect.invert_isoeffective_dose`.
"""

from .bed import bed, denom_bed_per_fraction_2gy, eqd2
from .schedule import Schedule, BedResult, compute_bed
from .isoeffect import (
    IsoeffectResult,
    solve_isoeffect,
    invert_isoeffective_dose,
    isoeffective_schedule,
)

__all__ = [
    "bed",
    "denom_bed_per_fraction_2gy",
    "eqd2",
    "Schedule",
    "BedResult",
    "compute_bed",
    "IsoeffectResult",
    "solve_isoeffect",
    "invert_isoeffective_dose",
    "isoeffective_schedule",
]
