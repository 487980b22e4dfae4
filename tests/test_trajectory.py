import math

import pytest

from ballplate.trajectory import DesiredState, Diamond, SquareWave, circle_reference


def test_circle_starts_on_y_axis():
    state = circle_reference(0, 0.017, 0.05, 0.05)
    assert state.y == pytest.approx(0.05)
    assert state.z == pytest.approx(0.0)
    assert state.vel_y == pytest.approx(0.0)


@pytest.mark.parametrize("k", [0, 1, 17, 250, 1000])
def test_circle_stays_on_radius(k):
    state = circle_reference(k, 0.017, 0.05, 0.05)
    assert math.hypot(state.y, state.z) == pytest.approx(0.05)


@pytest.mark.parametrize("k", [3, 99, 777])
def test_circle_velocity_is_tangent(k):
    state = circle_reference(k)
    assert state.y * state.vel_y + state.z * state.vel_z == pytest.approx(0.0, abs=1e-12)


def test_circle_is_periodic():
    # frequency 0.05 Hz with t_camp 1 s: period of 20 samples
    first = circle_reference(3, 1.0, 0.05, 0.05)
    later = circle_reference(23, 1.0, 0.05, 0.05)
    assert later.y == pytest.approx(first.y)
    assert later.z == pytest.approx(first.z)


def test_square_wave_unfiltered_sequence():
    wave = SquareWave(t_camp=1.0, amplitude=0.04, half_period=2.0, time_constant=0.0)
    ys = [wave.step().y for _ in range(7)]
    assert ys == pytest.approx([0.0, 0.0, -0.04, -0.04, 0.04, 0.04, -0.04])


def test_square_wave_keeps_z_at_zero():
    wave = SquareWave(t_camp=1.0, half_period=2.0, time_constant=1.0)
    assert all(wave.step().z == 0.0 for _ in range(20))


def test_square_wave_filter_approaches_set_point():
    wave = SquareWave(t_camp=1.0, amplitude=0.04, half_period=100.0, time_constant=1.0)
    values = [wave.step().y for _ in range(100)]
    # switched to -amplitude at sample 100 only, so all zero so far
    assert values == [0.0] * 100
    tail = [wave.step().y for _ in range(50)]
    assert all(b <= a for a, b in zip(tail, tail[1:]))
    assert all(v >= -0.04 for v in tail)
    assert tail[-1] == pytest.approx(-0.04, abs=1e-9)


def test_diamond_unfiltered_sequence():
    diamond = Diamond(t_camp=1.0, amplitude=0.04, leg_duration=1.0, time_constant=0.0)
    points = [diamond.step() for _ in range(7)]
    expected = [
        (0.04, 0.0),
        (0.0, 0.04),
        (-0.04, 0.0),
        (0.0, -0.04),
        (0.0, -0.04),
        (0.0, 0.04),
        (-0.04, 0.0),
    ]
    assert [(p.y, p.z) for p in points] == pytest.approx(expected)


def test_diamond_filtered_moves_towards_first_corner():
    diamond = Diamond(t_camp=0.017)
    first = diamond.step()
    second = diamond.step()
    assert 0.0 < first.y < second.y < 0.04
    assert first.z == 0.0


def test_desired_state_defaults_velocity_to_zero():
    state = DesiredState(0.01, 0.02)
    assert (state.vel_y, state.vel_z) == (0.0, 0.0)


@pytest.mark.parametrize("cls", [SquareWave, Diamond])
def test_non_positive_sampling_time_rejected(cls):
    with pytest.raises(ValueError):
        cls(0.0)