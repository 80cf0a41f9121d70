"""
Computation of isoeffective schedule tables.

This module defines the method :meth:`IsoeffectTable.compute`, which evaluates
the reference BED once and inverts it for every target fraction count.

A failure at a single fraction count (e.g. no physical solution in permissive
mode) is recorded in the ``status`` column with NaN doses instead of aborting
the whole table. Failures of the reference BED itself propagate.
"""

import logging
import numpy as np
import pandas as pd

from .core import IsoeffectTable
from pyrdbed.dose.schedule import compute_bed
from pyrdbed.dose.isoeffect import solve_isoeffect
from pyrdbed.errors import DomainError

logger = logging.getLogger(__name__)
logger.setLevel(logging.WARNING)


def compute(self: IsoeffectTable) -> pd.DataFrame:
    """
    Compute isoeffective schedules for all target fraction counts.

    Results are stored in ``self.table`` as a DataFrame with columns
    ``fractions``, ``total_dose`` [Gy], ``dose_per_fraction`` [Gy],
    ``bed`` [Gy], ``K``, ``W`` and ``status`` (``"ok"`` or the error kind).
    The reference BED and its EQD2 normalization are stored in ``self.reference_bed``.

    :returns: The computed table (also stored in ``self.table``).
    :rtype: pd.DataFrame

    :raises DomainError: If the reference BED cannot be computed.
    """
    params = self.params
    rd = params.rd
    allow_negative_s = params.allow_negative_s

    self.reference_bed = compute_bed(params.reference, rd, allow_negative_s=allow_negative_s)
    bed1 = self.reference_bed.bed

    rows = []
    for n2 in params.target_fractions:
        n2 = int(n2)
        try:
            result = solve_isoeffect(bed1, rd.r, rd.s, n2, allow_negative_s=allow_negative_s)
        except DomainError as exc:
            logger.warning("No isoeffective dose for n2 = %d: %s", n2, exc)
            rows.append({
                "fractions": n2,
                "total_dose": np.nan,
                "dose_per_fraction": np.nan,
                "bed": bed1,
                "K": np.nan,
                "W": np.nan,
                "status": exc.kind,
            })
            continue

        rows.append({
            "fractions": n2,
            "total_dose": result.new_total_dose,
            "dose_per_fraction": result.new_per_fraction,
            "bed": bed1,
            "K": result.intermediate_k if result.intermediate_k is not None else np.nan,
            "W": result.lambert_w_value if result.lambert_w_value is not None else np.nan,
            "status": "ok",
        })

    self.table = pd.DataFrame(
        rows, columns=["fractions", "total_dose", "dose_per_fraction", "bed", "K", "W", "status"]
    )
    return self.table

IsoeffectTable.compute = compute
