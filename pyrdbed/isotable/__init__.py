"""
Isoeffective schedule tables.

This subpackage converts a reference schedule into the family of
biologically equivalent schedules over a range of fraction counts.

After running `compute()`, the results are stored in `self.table` as a
:class:`pandas.DataFrame`:

.. code-block:: python

    IsoeffectTable.table = pd.DataFrame({
        "fractions": [...],          # n2
        "total_dose": [...],         # [Gy]
        "dose_per_fraction": [...],  # [Gy]
        "bed": [...],                # reference BED [Gy]
        "K": [...],                  # Lambert-W intermediate
        "W": [...],                  # W0(-r·exp(-K))
        "status": [...],             # "ok" or error kind
    })

Modules
-------

- :mod:`core`:
  Defines :class:`~pyrdbed.isotable.core.IsoeffectTableParameters` and
  :class:`~pyrdbed.isotable.core.IsoeffectTable`.

- :mod:`compute`:
  Provides :meth:`~pyrdbed.isotable.compute.compute`.

- :mod:`plot`:
  Plots total dose and dose per fraction against the fraction count.

Usage
-----

.. code-block:: python

    from pyrdbed import IsoeffectTable, IsoeffectTableParameters, RDParams, Schedule

    params = IsoeffectTableParameters(
        reference=Schedule(total_dose=54.0, fractions=3),
        rd=RDParams(r=0.5414, s=0.1694),
    )
    table = IsoeffectTable(params)
    table.compute()
    table.display()
    table.plot()
"""

from .core import IsoeffectTable, IsoeffectTableParameters
from . import compute  # noqa
from . import plot  # noqa

__all__ = ["IsoeffectTable", "IsoeffectTableParameters"]
