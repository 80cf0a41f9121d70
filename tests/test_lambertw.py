import math
import pytest
from scipy.special import lambertw as scipy_lambertw

from pyrdbed.errors import (
    DomainError,
    BelowBranchPointError,
    InvalidParameterError,
    NonConvergentError,
    NumericOverflowError,
)
from pyrdbed.utils.lambertw import lambert_w0, _initial_guess

BRANCH = -1 / math.e
OMEGA = 0.5671432904097838  # W(1)


def test_lambert_w0_zero_is_exact():
    assert lambert_w0(0.0) == 0.0
    assert lambert_w0(1e-17) == 0.0
    assert lambert_w0(-1e-17) == 0.0

def test_lambert_w0_branch_point_is_exact():
    assert lambert_w0(BRANCH) == -1.0
    assert lambert_w0(-1 / math.e) == -1.0

def test_lambert_w0_below_branch_point_raises():
    with pytest.raises(BelowBranchPointError, match="undefined"):
        lambert_w0(BRANCH - 1e-10)
    with pytest.raises(BelowBranchPointError):
        lambert_w0(-1.0)

def test_lambert_w0_known_values():
    assert lambert_w0(1.0) == pytest.approx(OMEGA, rel=1e-14)
    assert lambert_w0(math.e) == pytest.approx(1.0, rel=1e-14)
    assert lambert_w0(2 * math.exp(2)) == pytest.approx(2.0, rel=1e-14)

def test_lambert_w0_inverse_property_negative_exact():
    # W(-0.5·e^-0.5) = -0.5
    z = -0.5 * math.exp(-0.5)
    assert lambert_w0(z) == pytest.approx(-0.5, rel=1e-13)

@pytest.mark.parametrize("z", [
    -0.3678, -0.36, -0.3, -0.2, -0.1, -1e-5, 1e-12, 1e-5, 0.5, 1.0,
    2.5, 3.0, 10.0, 1e3, 1e10, 1e100, 1e300,
])
def test_lambert_w0_satisfies_defining_equation(z):
    w = lambert_w0(z)
    assert w >= -1.0
    assert w * math.exp(w) == pytest.approx(z, rel=1e-9, abs=1e-12)

@pytest.mark.parametrize("z", [-0.35, -0.25, -0.1, -0.01, 0.3, 1.0, 5.0, 100.0, 1e6])
def test_lambert_w0_matches_scipy(z):
    expected = scipy_lambertw(z, 0).real
    assert lambert_w0(z) == pytest.approx(expected, rel=1e-10, abs=1e-14)

def test_lambert_w0_near_branch_point():
    z = BRANCH + 1e-13
    w = lambert_w0(z)
    assert -1.0 < w < -0.99999
    assert abs(w * math.exp(w) - z) <= 1e-15

def test_lambert_w0_is_monotonic():
    zs = [-0.36, -0.2, 0.0, 0.4, 2.0, 50.0]
    ws = [lambert_w0(z) for z in zs]
    assert ws == sorted(ws)

def test_lambert_w0_nan_raises():
    with pytest.raises(InvalidParameterError, match="NaN"):
        lambert_w0(float("nan"))

def test_lambert_w0_infinities_raise():
    with pytest.raises(NumericOverflowError):
        lambert_w0(float("inf"))
    with pytest.raises(BelowBranchPointError):
        lambert_w0(float("-inf"))

def test_lambert_w0_no_stale_guess_without_iterations():
    with pytest.raises(NonConvergentError, match="did not converge"):
        lambert_w0(5.0, max_iter=0)

def test_lambert_w0_errors_are_domain_errors():
    with pytest.raises(DomainError):
        lambert_w0(-1.0)
    with pytest.raises(ValueError):
        lambert_w0(-1.0)

def test_initial_guess_regions():
    assert -1.0 <= _initial_guess(-0.35) <= -0.1
    assert _initial_guess(-0.2) == pytest.approx(math.log1p(-0.2))
    assert _initial_guess(0.5) == 0.5
    assert _initial_guess(2.0) == pytest.approx(math.log1p(2.0))
    assert _initial_guess(100.0) == pytest.approx(math.log(100.0) - math.log(math.log(100.0)))
