import pytest

from ballplate.pd import DEFAULT_DENOMINATOR, DEFAULT_NUMERATOR, PDController


def test_defaults_from_controller():
    c = PDController()
    assert c.numerator == DEFAULT_NUMERATOR
    assert c.denominator == DEFAULT_DENOMINATOR
    assert (c.y_des, c.z_des) == (0.0, 0.0)


def test_zero_error_gives_zero_output():
    c = PDController(y_des=0.02, z_des=-0.01)
    for _ in range(10):
        assert c.step(0.02, -0.01) == (0.0, 0.0)


def test_pure_gain_and_axis_mapping():
    c = PDController([2.0, 0.0], [1.0, 0.0])
    angle_y, angle_z = c.step(0.5, -0.25)
    assert angle_y == pytest.approx(0.5)
    assert angle_z == pytest.approx(-1.0)


def test_first_order_recursion():
    c = PDController([1.0, 0.0], [1.0, -0.5])
    outputs = [c.step(-1.0, 0.0)[1] for _ in range(3)]
    assert outputs == pytest.approx([1.0, 1.5, 1.75])


def test_axes_are_symmetric():
    a = PDController()
    b = PDController()
    seq = [(0.01, -0.02), (0.015, -0.01), (0.0, 0.005), (-0.01, 0.02), (0.02, 0.0)]
    for y, z in seq:
        ay, az = a.step(y, z)
        by, bz = b.step(z, y)
        assert ay == pytest.approx(bz)
        assert az == pytest.approx(by)


def test_linearity():
    a = PDController()
    b = PDController()
    seq = [0.01, 0.02, -0.005, 0.0, 0.03, 0.01]
    for y in seq:
        ya = a.step(y, 0.0)[1]
        yb = b.step(3 * y, 0.0)[1]
        assert yb == pytest.approx(3 * ya)


def test_reset_repeats_sequence():
    c = PDController()
    seq = [(0.01, 0.02), (0.02, -0.01), (-0.03, 0.0), (0.0, 0.04), (0.05, 0.01)]
    first = [c.step(y, z) for y, z in seq]
    c.reset()
    second = [c.step(y, z) for y, z in seq]
    assert first == second


def test_normalises_leading_coefficient():
    a = PDController([1.0, 0.5], [1.0, -0.2])
    b = PDController([2.0, 1.0], [2.0, -0.4])
    for y in (0.1, -0.2, 0.3):
        assert a.step(y, y) == pytest.approx(b.step(y, y))


def test_invalid_coefficients():
    with pytest.raises(ValueError):
        PDController([1.0, 2.0], [1.0])
    with pytest.raises(ValueError):
        PDController([1.0], [0.0])
    with pytest.raises(ValueError):
        PDController([], [])