import math
import pytest
from unittest.mock import patch

from pyrdbed.biology.parameters import RDParams
from pyrdbed.dose.bed import bed
from pyrdbed.dose.isoeffect import (
    IsoeffectResult,
    solve_isoeffect,
    invert_isoeffective_dose,
    isoeffective_schedule,
)
from pyrdbed.dose.schedule import Schedule
from pyrdbed.errors import (
    BelowBranchPointError,
    InvalidParameterError,
    NoPhysicalSolutionError,
    NonConvergentError,
    NonPhysicalResultError,
    SingularError,
)

R, S = 0.5414, 0.1694


def test_identity_when_fractions_unchanged():
    bed1 = bed(60.0, 30, 0.6, 0.15)
    assert invert_isoeffective_dose(bed1, 0.6, 0.15, 30) == pytest.approx(60.0, rel=1e-9)

@pytest.mark.parametrize("n2", [1, 2, 5, 10, 20, 40])
def test_inverted_dose_reproduces_reference_bed(n2):
    bed1 = bed(54.0, 3, R, S)
    d2 = invert_isoeffective_dose(bed1, R, S, n2)
    assert bed(d2, n2, R, S) == pytest.approx(bed1, rel=1e-9)

def test_h460_more_fractions_needs_more_dose():
    bed1 = bed(54.0, 3, R, S)
    d2 = invert_isoeffective_dose(bed1, R, S, 5)
    assert math.isfinite(d2)
    assert d2 > 54.0

def test_total_dose_increases_with_fractions():
    bed1 = bed(54.0, 3, R, S)
    doses = [invert_isoeffective_dose(bed1, R, S, n) for n in (1, 3, 5, 10, 30)]
    assert doses == sorted(doses)

def test_result_intermediates_consistent():
    bed1 = bed(54.0, 3, R, S)
    result = solve_isoeffect(bed1, R, S, 5)
    assert isinstance(result, IsoeffectResult)
    K, W = result.intermediate_k, result.lambert_w_value
    assert K == pytest.approx(R + S * (1 - R) * bed1 / 5)
    assert W * math.exp(W) == pytest.approx(-R * math.exp(-K), rel=1e-12)
    assert result.new_total_dose == pytest.approx((5 / S) * (K + W))
    assert result.new_per_fraction == pytest.approx(result.new_total_dose / 5)
    assert result.target_fractions == 5

@pytest.mark.parametrize("s", [0.0, 1e-13])
def test_s_zero_bypass(s):
    result = solve_isoeffect(60.0, 0.6, s, 5)
    assert result.new_total_dose == 60.0
    assert result.new_per_fraction == 12.0
    assert result.intermediate_k is None
    assert result.lambert_w_value is None

def test_r_zero_dose_equals_bed():
    assert invert_isoeffective_dose(60.0, 0.0, 0.2, 10) == pytest.approx(60.0, rel=1e-12)

def test_negative_r_resolves():
    bed1 = bed(60.0, 30, -0.3, 0.1)
    d2 = invert_isoeffective_dose(bed1, -0.3, 0.1, 5)
    assert bed(d2, 5, -0.3, 0.1) == pytest.approx(bed1, rel=1e-9)

def test_negative_s_permissive_round_trip():
    bed1 = bed(10.0, 5, 0.2, -0.05, allow_negative_s=True)
    d2 = invert_isoeffective_dose(bed1, 0.2, -0.05, 5, allow_negative_s=True)
    assert d2 == pytest.approx(10.0, rel=1e-9)

def test_negative_s_strict_rejected():
    with pytest.raises(InvalidParameterError):
        invert_isoeffective_dose(10.0, 0.2, -0.05, 5)

@pytest.mark.parametrize("r", [0.9999999995, 1.0])
def test_singular(r):
    with pytest.raises(SingularError):
        invert_isoeffective_dose(60.0, r, 0.1, 5)

@pytest.mark.parametrize("ref_bed, n2", [(0.0, 5), (-1.0, 5), (math.nan, 5), (60.0, 0), (60.0, -2)])
def test_invalid_inputs(ref_bed, n2):
    with pytest.raises(InvalidParameterError):
        invert_isoeffective_dose(ref_bed, 0.5, 0.1, n2)

@patch("pyrdbed.dose.isoeffect.lambert_w0")
def test_lambert_failure_is_no_physical_solution(mock_w):
    mock_w.side_effect = BelowBranchPointError("below branch point")
    with pytest.raises(NoPhysicalSolutionError, match="Lambert-W failure") as excinfo:
        solve_isoeffect(100.0, 0.5, 0.1, 5)
    assert isinstance(excinfo.value.__cause__, BelowBranchPointError)
    assert excinfo.value.kind == "no_physical_solution"

@patch("pyrdbed.dose.isoeffect.lambert_w0", return_value=-50.0)
def test_non_positive_dose_is_non_physical(mock_w):
    with pytest.raises(NonPhysicalResultError, match="non-physical"):
        solve_isoeffect(100.0, 0.5, 0.1, 5)

@patch("pyrdbed.dose.isoeffect.lambert_w0", return_value=-0.5)
def test_inaccurate_lambert_value_is_refined(mock_w):
    bed1 = bed(10.0, 5, 0.2, -0.05, allow_negative_s=True)
    result = solve_isoeffect(bed1, 0.2, -0.05, 5, allow_negative_s=True)
    assert result.new_total_dose == pytest.approx(10.0, rel=1e-9)

@patch("pyrdbed.dose.isoeffect.bed", return_value=60.0)
def test_back_substitution_mismatch_positive_s(mock_bed):
    with pytest.raises(NonConvergentError, match="expected 100"):
        solve_isoeffect(100.0, 0.5, 0.1, 5)

@patch("pyrdbed.dose.isoeffect.bed", return_value=5.0)
def test_back_substitution_mismatch_negative_s(mock_bed):
    with pytest.raises(NoPhysicalSolutionError, match="expected"):
        solve_isoeffect(9.87, 0.2, -0.05, 5, allow_negative_s=True)

@pytest.mark.parametrize("r", [-2.0, 0.5, 0.9, 0.99, 0.99999])
@pytest.mark.parametrize("s", [1e-11, 1e-10, 1e-9, 1e-8, 1e-7])
@pytest.mark.parametrize("n2", [1, 5, 30])
def test_small_s_above_bypass_reproduces_bed(r, s, n2):
    bed1 = bed(54.0, 3, r, s)
    d2 = invert_isoeffective_dose(bed1, r, s, n2)
    assert bed(d2, n2, r, s) == pytest.approx(bed1, rel=1e-9)

def test_small_s_near_singular_r():
    bed1 = bed(54.0, 3, 0.99999, 1e-11)
    assert bed1 == pytest.approx(54.0, abs=1e-3)
    d2 = invert_isoeffective_dose(bed1, 0.99999, 1e-11, 5)
    assert d2 == pytest.approx(54.0, abs=1e-3)
    assert bed(d2, 5, 0.99999, 1e-11) == pytest.approx(bed1, rel=1e-12)

def test_isoeffective_schedule():
    rd = RDParams(r=R, s=S)
    new = isoeffective_schedule(Schedule(54.0, 3), rd, 5)
    assert isinstance(new, Schedule)
    assert new.fractions == 5
    assert new.total_dose == pytest.approx(invert_isoeffective_dose(bed(54.0, 3, R, S), R, S, 5))

def test_isoeffective_schedule_identity():
    rd = RDParams(r=0.6, s=0.15)
    new = isoeffective_schedule(Schedule(60.0, 30), rd, 30)
    assert new.total_dose == pytest.approx(60.0, rel=1e-9)
