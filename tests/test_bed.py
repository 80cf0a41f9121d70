import math
import pytest

from pyrdbed.biology.parameters import RDParams
from pyrdbed.dose.bed import bed, check_rd, denom_bed_per_fraction_2gy, eqd2, expm1_remainder
from pyrdbed.dose.schedule import Schedule, BedResult, compute_bed
from pyrdbed.errors import (
    DivisionByZeroError,
    InvalidParameterError,
    NumericOverflowError,
    SingularError,
)

R, S = 0.5414, 0.1694


def reference_formula(D, n, r, s):
    return D / (1 - r) - n * r / (s * (1 - r)) * (1 - math.exp(-s * D / n))


def test_bed_matches_closed_form():
    assert bed(54.0, 3, R, S) == pytest.approx(reference_formula(54.0, 3, R, S), rel=1e-12)
    assert bed(60.0, 30, 0.6, 0.15) == pytest.approx(reference_formula(60.0, 30, 0.6, 0.15), rel=1e-12)

def test_bed_h460_reference_value():
    assert bed(54.0, 3, R, S) == pytest.approx(97.84, abs=0.05)

def test_bed_exceeds_physical_dose_for_resistant_tissue():
    assert bed(54.0, 3, R, S) > 54.0

def test_bed_grows_with_dose_per_fraction():
    assert bed(60.0, 30, 0.6, 0.15) < bed(60.0, 10, 0.6, 0.15) < bed(60.0, 3, 0.6, 0.15)

def test_bed_s_zero_is_physical_dose():
    assert bed(60.0, 30, 0.6, 0.0) == 60.0

@pytest.mark.parametrize("r", [-0.5, 0.0, 0.3, 0.9])
@pytest.mark.parametrize("D, n", [(2.0, 1), (60.0, 30), (54.0, 3)])
def test_bed_continuous_in_s_limit(r, D, n):
    assert bed(D, n, r, 1e-10) == pytest.approx(bed(D, n, r, 0.0), abs=1e-4)

def test_bed_r_zero_is_physical_dose():
    assert bed(60.0, 30, 0.0, 0.2) == pytest.approx(60.0, rel=1e-12)

@pytest.mark.parametrize("r", [0.9999999995, 1.0, 1.2])
def test_bed_singular(r):
    with pytest.raises(SingularError):
        bed(60.0, 30, r, 0.1)

@pytest.mark.parametrize("D, n", [(0.0, 30), (-1.0, 30), (60.0, 0), (60.0, -3), (math.nan, 3)])
def test_bed_invalid_schedule(D, n):
    with pytest.raises(InvalidParameterError):
        bed(D, n, 0.5, 0.1)

def test_bed_negative_s_strict_and_permissive():
    with pytest.raises(InvalidParameterError, match="allow_negative_s"):
        bed(10.0, 5, 0.2, -0.05)
    value = bed(10.0, 5, 0.2, -0.05, allow_negative_s=True)
    assert value == pytest.approx(reference_formula(10.0, 5, 0.2, -0.05), rel=1e-12)

def test_bed_overflow_for_large_negative_s():
    with pytest.raises(NumericOverflowError, match="overflow"):
        bed(60.0, 1, 0.5, -100.0, allow_negative_s=True)

@pytest.mark.parametrize("x", [1e-4, -5e-4, 9.99e-4, 1e-3, 0.5, -0.5, 3.0])
def test_expm1_remainder(x):
    assert expm1_remainder(x) == pytest.approx(x + math.exp(-x) - 1.0, rel=1e-6)

def test_expm1_remainder_small_argument_is_quadratic():
    assert expm1_remainder(1e-8) == pytest.approx(5e-17, rel=1e-8)
    assert expm1_remainder(0.0) == 0.0

def test_bed_near_singular_r_small_s():
    # BED - D ≈ r·s·D²/(2n(1 - r))
    value = bed(54.0, 3, 0.99999, 1e-11)
    assert value - 54.0 == pytest.approx(0.99999 * 1e-11 * 54.0 ** 2 / (6 * 1e-5), rel=1e-6)

def test_check_rd_non_finite():
    with pytest.raises(InvalidParameterError):
        check_rd(math.nan, 0.1)
    with pytest.raises(InvalidParameterError):
        check_rd(0.5, math.inf)

def test_denominator_two_gray_limit():
    assert denom_bed_per_fraction_2gy(0.6, 0.0) == 2.0
    assert denom_bed_per_fraction_2gy(R, S) == pytest.approx(bed(2.0, 1, R, S))

def test_eqd2_of_two_gray_schedule():
    value = bed(60.0, 30, 0.6, 0.15)
    n_eqd2, dose = eqd2(value, 0.6, 0.15)
    assert n_eqd2 == pytest.approx(30.0, rel=1e-12)
    assert dose == pytest.approx(60.0, rel=1e-12)

def test_eqd2_undefined_denominator():
    # 2/(1-r) - r/(s(1-r))(1 - e^{-2s}) turns negative here
    with pytest.raises(DivisionByZeroError):
        eqd2(10.0, 0.9, -2.0, allow_negative_s=True)


# --- Schedule / BedResult ---

def test_schedule_properties():
    sched = Schedule(total_dose=54, fractions=3)
    assert sched.total_dose == 54.0
    assert isinstance(sched.total_dose, float)
    assert sched.dose_per_fraction == 18.0
    assert str(sched) == "54.00 Gy / 3 fx (18.00 Gy/fx)"

def test_schedule_integral_float_fractions():
    assert Schedule(total_dose=60.0, fractions=30.0).fractions == 30

@pytest.mark.parametrize("D, n", [(0.0, 3), (-10.0, 3), (math.inf, 3), (54.0, 0), (54.0, -1), (54.0, 2.5), (54.0, True)])
def test_schedule_invalid(D, n):
    with pytest.raises(InvalidParameterError):
        Schedule(total_dose=D, fractions=n)

def test_compute_bed():
    result = compute_bed(Schedule(60.0, 30), RDParams(r=0.6, s=0.15))
    assert isinstance(result, BedResult)
    assert result.bed == pytest.approx(bed(60.0, 30, 0.6, 0.15))
    assert result.equivalent_fractions == pytest.approx(30.0)
    assert result.eqd2 == pytest.approx(60.0)

def test_bed_result_zero_denominator():
    result = BedResult(bed=50.0, per_fraction_2gy_denominator=1e-12)
    with pytest.raises(DivisionByZeroError, match="EQD2 undefined"):
        result.equivalent_fractions
    with pytest.raises(DivisionByZeroError):
        result.eqd2
