import matplotlib.pyplot as plt
import numpy as np

from pyrdbed.biology.parameters import RDParams
from pyrdbed.dose.schedule import Schedule
from pyrdbed.isotable.core import IsoeffectTableParameters, IsoeffectTable

"""
Example usage of IsoeffectTableParameters to convert a hypofractionated schedule
into isoeffective schedules over a range of fraction counts.

This script demonstrates how to:
  - Store the reference schedule and the RD parameters of the H460 cell line.
  - Compute the isoeffective total dose for 1 to 30 fractions.
  - Print the configuration summary, including BED and EQD2 of the reference.
  - Display and plot the resulting table.
"""

def main():

    ## Select reference schedule and tissue parameters
    total_dose = 54.0 # Gy
    fractions = 3
    r = 0.5414
    s = 0.1694 # 1/Gy
    k = 0.641 # 1/Gy

    ## Store input parameters
    params = IsoeffectTableParameters(
        reference=Schedule(total_dose=total_dose, fractions=fractions),
        rd=RDParams(r=r, s=s, k=k),
        target_fractions=np.arange(1, 31),
    )

    ## Generate isoeffective schedules
    table = IsoeffectTable(params)
    table.compute()
    table.summary()
    table.display()

    ## Plot using built-in method
    _, ax = plt.subplots(figsize=(9, 6))
    table.plot(verbose=True, ax=ax)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
