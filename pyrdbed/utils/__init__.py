# This file marks this directory as a Python package
"""
Utility submodule for pyRDBED.

This package contains numerical helpers used by the dose-equivalence engine.

Modules
-------

- :mod:`lambertw`:
  Provides :func:`~pyrdbed.utils.lambertw.lambert_w0`, a safeguarded Halley
  solver for the principal branch of the Lambert W function, used by the
  isoeffective dose inversion.
"""

from .lambertw import lambert_w0

__all__ = ["lambert_w0"]
