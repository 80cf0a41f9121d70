"""
Plotting utilities for isoeffective schedule tables.

This module defines :meth:`IsoeffectTable.plot`, which draws the isoeffective
total dose (left axis) and dose per fraction (right axis) against the number
of fractions, marking the reference schedule.
"""

import matplotlib.pyplot as plt
plt.rcParams.update({
    "axes.linewidth": 1.2,
    "axes.labelsize": 16,
    "xtick.labelsize": 14,
    "ytick.labelsize": 14,
    "xtick.major.width": 1.2,
    "ytick.major.width": 1.2,
    "legend.fontsize": 14
})
from typing import Optional
from .core import IsoeffectTable

def plot(self,
         *,
         verbose: Optional[bool] = False,
         ax: Optional[plt.Axes] = None,
         show: Optional[bool] = True
):
    """
    Plot the isoeffective schedules stored in ``self.table``.

    :param verbose: If True, displays model parameters on the plot.
    :type verbose: Optional[bool]
    :param ax: Matplotlib Axes object to draw on. If None, a new figure is created.
    :type ax: Optional[matplotlib.axes.Axes]
    :param show: If True, displays the plot. Set False when embedding or scripting.
    :type show: Optional[bool]

    :raises ValueError: If no results are available or no row could be solved.
    """
    if self.table is None:
        raise ValueError("No isoeffect data available. Run 'compute()' first.")

    df = self.table[self.table["status"] == "ok"]
    if df.empty:
        raise ValueError("No solvable fraction counts to plot.")

    reference = self.params.reference

    created_fig = False
    if ax is None:
        _, ax = plt.subplots()
        created_fig = True

    ax.plot(df["fractions"], df["total_dose"], "o-", color="tab:blue",
            linewidth=2, label="Total dose")
    ax.scatter([reference.fractions], [reference.total_dose], s=120, marker="*",
               color="black", zorder=3, label="Reference")
    ax.set_xlabel("Number of fractions")
    ax.set_ylabel("Total dose [Gy]", color="tab:blue")
    ax.grid(True, linestyle='--', alpha=0.5)

    ax2 = ax.twinx()
    ax2.plot(df["fractions"], df["dose_per_fraction"], "s--", color="tab:red",
             linewidth=1.5, label="Dose per fraction")
    ax2.set_ylabel("Dose per fraction [Gy]", color="tab:red")
    ax2.set_yscale("log")

    ax.set_title(f"Isoeffective schedules\nReference: {reference}", fontsize=14)
    lines = ax.get_legend_handles_labels()
    lines2 = ax2.get_legend_handles_labels()
    ax.legend(lines[0] + lines2[0], lines[1] + lines2[1], loc="best")

    if verbose:
        rd = self.params.rd
        info_text = (
            f"r: {rd.r:.4f}\n"
            f"s: {rd.s:.4f} Gy⁻¹\n"
            f"BED₁: {self.reference_bed.bed:.2f} Gy"
        )
        ax.text(0.05, 0.05, info_text, transform=ax.transAxes,
                fontsize=12, verticalalignment='bottom', horizontalalignment='left',
                bbox=dict(facecolor='white', alpha=0.8, edgecolor='black', boxstyle='round'))

    if show and created_fig:
        plt.tight_layout()
        plt.show()

    return ax

IsoeffectTable.plot = plot
