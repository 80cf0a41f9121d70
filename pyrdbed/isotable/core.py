"""
Core classes for isoeffective schedule table generation.

This module defines:

- :class:`IsoeffectTableParameters`: A dataclass storing the reference schedule,
  the tissue parameters and the target fraction counts.
- :class:`IsoeffectTable`: A computation manager that converts the reference
  schedule into isoeffective schedules over a range of fraction counts.

Tissue parameters may be given either as :class:`~pyrdbed.biology.parameters.RDParams`
or as :class:`~pyrdbed.biology.parameters.ClassicalParams`; the latter are
translated once, at construction.
"""

from dataclasses import dataclass, field
from typing import Optional
import numpy as np
import warnings
from tabulate import tabulate

from pyrdbed.biology.parameters import (
    ClassicalParams,
    RDParams,
    ShoulderConvention,
    DEFAULT_CONVENTION,
)
from pyrdbed.biology.translator import classical_to_rd
from pyrdbed.dose.schedule import Schedule
from pyrdbed.errors import DivisionByZeroError


@dataclass
class IsoeffectTableParameters:
    """
    Configuration container for computing isoeffective schedules.

    :param reference: Reference schedule (D1, n1).
    :type reference: pyrdbed.dose.schedule.Schedule

    :param rd: RD parameters {r, s[, k]}. Required unless `classical` is provided.
    :type rd: Optional[RDParams]

    :param classical: Classical parameters, translated to `rd` at construction.
    :type classical: Optional[ClassicalParams]

    :param target_fractions: Fraction counts n2 to evaluate. Defaults to 1..40.
    :type target_fractions: np.ndarray

    :param convention: Shoulder-form model constant used for the translation.
    :type convention: ShoulderConvention

    :param allow_negative_s: Permit negative s (atypical, repair-deficient tissue).
    :type allow_negative_s: bool
    """

    reference: Schedule
    rd: Optional[RDParams] = None
    classical: Optional[ClassicalParams] = None
    target_fractions: np.ndarray = field(default_factory=lambda: np.arange(1, 41))
    convention: ShoulderConvention = DEFAULT_CONVENTION
    allow_negative_s: bool = False

    def __post_init__(self):
        """
        Validate parameter consistency and derive missing values.

        - Ensures `reference` is a Schedule.
        - Requires exactly one of `rd` and `classical`, translating the latter.
        - Converts `target_fractions` to a sorted array of unique positive integers.

        :raises TypeError: If `reference` is not a Schedule.
        :raises ValueError: If the tissue parameters are missing or duplicated,
            or the target fractions are invalid.
        """
        if not isinstance(self.reference, Schedule):
            raise TypeError("reference must be an instance of Schedule")

        if self.rd is None and self.classical is None:
            raise ValueError("Either rd or classical parameters must be provided.")
        if self.rd is not None and self.classical is not None:
            raise ValueError("Provide either rd or classical parameters, not both.")

        if self.allow_negative_s:
            warnings.warn(
                "allow_negative_s=True: negative s is accepted as atypical tissue. "
                "Check that it is not a data-entry artifact."
            )

        if self.classical is not None:
            self.rd = classical_to_rd(
                self.classical,
                convention=self.convention,
                allow_negative_s=self.allow_negative_s,
            )

        n2 = np.atleast_1d(np.asarray(self.target_fractions, dtype=float))
        if n2.size == 0:
            raise ValueError("target_fractions must not be empty.")
        if not np.all(np.isfinite(n2)) or np.any(n2 <= 0) or not np.all(n2 == np.round(n2)):
            raise ValueError("target_fractions must contain positive integers only.")
        self.target_fractions = np.unique(n2.astype(int))

    @classmethod
    def from_dict(cls, config: dict) -> "IsoeffectTableParameters":
        """
        Create an IsoeffectTableParameters instance from a dictionary.

        Nested dictionaries under ``reference``, ``rd`` and ``classical`` are
        converted to their dataclasses.

        :param config: Dictionary of parameters with keys matching the dataclass fields.
        :type config: dict

        :returns: A populated IsoeffectTableParameters instance.
        :rtype: IsoeffectTableParameters

        :raises ValueError: If unknown keys are present in the configuration dictionary.
        """
        valid_keys = set(cls.__dataclass_fields__.keys())
        extra_keys = set(config.keys()) - valid_keys
        if extra_keys:
            raise ValueError(
                f"Unrecognized keys in IsoeffectTableParameters config: {sorted(extra_keys)}"
            )

        config = dict(config)
        if isinstance(config.get("reference"), dict):
            config["reference"] = Schedule(**config["reference"])
        if isinstance(config.get("rd"), dict):
            config["rd"] = RDParams.from_dict(config["rd"])
        if isinstance(config.get("classical"), dict):
            config["classical"] = ClassicalParams.from_dict(config["classical"])
        return cls(**config)


class IsoeffectTable:
    def __init__(self, parameters: IsoeffectTableParameters):
        """
        Initialize the IsoeffectTable with a reference schedule and tissue parameters.

        :param parameters: An IsoeffectTableParameters instance.
        :type parameters: IsoeffectTableParameters
        """
        self.params = parameters
        self.reference_bed = None
        self.table = None

    def __repr__(self):
        rd = self.params.rd
        return (f"<IsoeffectTable | D1 = {self.params.reference.total_dose} Gy, "
                f"n1 = {self.params.reference.fractions}, r = {rd.r}, s = {rd.s}>")

    def summary(self):
        """
        Print the reference schedule and model parameters.

        Shows the reference BED and EQD2 once :meth:`compute` has run.
        """
        params = self.params
        rd = params.rd
        print("\nIsoeffectTable Configuration")
        table = [
            ("D1 [Gy]", f"{params.reference.total_dose:.2f}"),
            ("n1", f"{params.reference.fractions}"),
            ("d1 [Gy/fx]", f"{params.reference.dose_per_fraction:.2f}"),
            ("r", f"{rd.r:.4f}"),
            ("s [Gy^-1]", f"{rd.s:.4f}"),
            ("k [Gy^-1]", f"{rd.k:.4f}" if rd.k is not None else "None"),
            ("n2 range", f"{params.target_fractions.min()} – {params.target_fractions.max()}"),
        ]
        if params.classical is not None:
            table.append(("Input form", params.classical.representation))
            if params.classical.representation == "shoulder":
                table.append(("Convention", f"{params.convention.name} (c = {params.convention.discriminant_coefficient:g})"))
        if params.allow_negative_s:
            table.append(("Negative s", "allowed"))

        if self.reference_bed is not None:
            table.append(("BED1 [Gy]", f"{self.reference_bed.bed:.2f}"))
            try:
                table += [
                    ("EQD2 fractions", f"{self.reference_bed.equivalent_fractions:.2f}"),
                    ("EQD2 [Gy]", f"{self.reference_bed.eqd2:.2f}"),
                ]
            except DivisionByZeroError:
                table.append(("EQD2 [Gy]", "undefined"))

        print(tabulate(table, headers=["Parameter", "Value"], tablefmt="fancy_grid"))

    def display(self):
        """
        Display the computed isoeffective schedules in a tabular format.

        :raises ValueError: If :meth:`compute` has not been run.
        """
        if self.table is None:
            raise ValueError("No results to display. Please run 'compute()' first.")

        print("\nIsoeffective Schedules:")
        print(tabulate(self.table, headers="keys", tablefmt="fancy_grid",
                       showindex=False, floatfmt=".2f"))
