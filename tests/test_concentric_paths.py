import pytest

from concentric_paths import STEP_FRACTION, concentric_radii, hole_paths
from drill_parser import parse_drill


def test_radii_innermost_first():
    assert concentric_radii(0.92, 0.7) == [pytest.approx(0.29), pytest.approx(0.605), pytest.approx(0.92)]


def test_radii_step_by_fraction_of_bit():
    bit_size = 0.8
    radii = concentric_radii(3.1, bit_size)

    assert radii[-1] == 3.1
    assert all(r > 0 for r in radii)
    for inner, outer in zip(radii, radii[1:]):
        assert outer - inner == pytest.approx(STEP_FRACTION * bit_size)
    assert radii[0] <= STEP_FRACTION * bit_size


def test_radius_reaching_exactly_zero_is_excluded():
    # step is 0.45, so 0.9 - 2 * 0.45 lands on 0
    assert concentric_radii(0.9, 1.0) == [0.45, 0.9]


def test_small_radius_gives_single_circle():
    assert concentric_radii(0.05, 0.7) == [0.05]


@pytest.mark.parametrize("cut_radius", [0.0, -0.1])
def test_no_circles_when_tool_matches_bit(cut_radius):
    assert concentric_radii(cut_radius, 0.7) == []


def test_non_positive_bit_is_rejected():
    with pytest.raises(ValueError):
        concentric_radii(1.0, 0.0)


def test_hole_paths_follow_file_order():
    job = parse_drill(["METRIC", "T1C0.7", "T2C2.54", "T2", "X1Y1", "T1", "X2Y2", "T2", "X3Y3"], bit_size=0.7)

    paths = list(hole_paths(job))

    assert [(hole.cx, hole.cy) for hole, _ in paths] == [(1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]
    assert paths[0][1] == [pytest.approx(0.29), pytest.approx(0.605), pytest.approx(0.92)]
    assert paths[1][1] == []
    assert paths[2][1] == paths[0][1]
