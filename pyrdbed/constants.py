"""
Numerical tolerances shared across pyRDBED.

All thresholds are absolute unless stated otherwise.
"""

import math

# --- Model parameters ---
ONE_R_EPS = 1e-9      # 1 - r below this -> BED singularity
S_EPS = 1e-12         # |s| below this -> linear (s = 0) limit
R_EPS = 1e-12         # |r| below this -> r treated as zero in divisions
B_EPS = 1e-12         # |beta| below this -> s = 0 exactly
DIV_EPS = 1e-12       # generic divisor tolerance (alpha/beta, Dq, ratio denominators)
EQD2_DENOM_EPS = 1e-9 # minimum BED of a 2-Gy fraction

# --- Lambert W0 ---
BRANCH_POINT = -1.0 / math.e
BRANCH_TOL = 1e-15
W_ZERO_EPS = 1e-16
W_STEP_TOL = 1e-14
W_MAX_ITER = 80
W_MAX_STEP = 1.0

# --- exp() range (IEEE double) ---
EXP_MAX_ARG = 709.0
EXP_MIN_ARG = -745.0

# --- Isoeffect refinement and back-substitution check ---
ISOEFFECT_RTOL = 1e-6
ISOEFFECT_POLISH_ITER = 4
ISOEFFECT_POLISH_TOL = 1e-15

REFERENCE_FRACTION_DOSE = 2.0  # Gy, EQD2 reference
