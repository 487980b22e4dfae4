import numpy as np
import pytest

from ballplate.kalman import AxisKalman, PlantModel, plant_model


def test_plant_model_shapes():
    model = plant_model()
    assert isinstance(model, PlantModel)
    assert model.a.shape == (8, 8)
    assert model.b.shape == (8, 1)
    assert model.c.shape == (1, 8)
    assert model.d.shape == (1, 1)
    assert model.state_size == 8


def test_plant_model_constants():
    model = plant_model()
    assert model.a[0, 1] == 0.017
    assert model.a[1, 3] == -0.547433035714286
    assert model.b[7, 0] == 1.0
    assert model.c[0, 0] == 1.0
    assert np.allclose(np.diag(model.w), 1e-8)
    assert model.v[0, 0] == 1e-6


def test_reset_sets_position():
    kalman = AxisKalman()
    kalman.reset(0.03)
    assert kalman.state[0] == 0.03
    assert np.count_nonzero(kalman.state) == 1
    assert not kalman.covariance.any()


def test_rest_state_is_kept_when_measurement_agrees():
    kalman = AxisKalman()
    kalman.reset(0.02)
    estimate = kalman.step(0.0, 0.02)
    assert estimate[0] == pytest.approx(0.02)
    assert np.allclose(estimate[1:], 0.0)


def test_estimate_moves_towards_measurement():
    kalman = AxisKalman()
    kalman.reset(0.0)
    estimate = kalman.step(0.0, 0.01)
    assert 0.0 < estimate[0] < 0.01


def test_input_enters_last_state():
    kalman = AxisKalman()
    kalman.reset(0.0)
    estimate = kalman.step(1.0, 0.0)
    assert estimate[7] == pytest.approx(1.0)


def test_covariance_stays_symmetric_and_non_negative():
    kalman = AxisKalman()
    kalman.reset(0.0)
    for k in range(50):
        kalman.step(0.1 * (-1) ** k, 0.001 * k)
    p = kalman.covariance
    assert np.allclose(p, p.T, atol=1e-15)
    assert (np.diag(p) >= 0).all()


def test_step_returns_copy():
    kalman = AxisKalman()
    kalman.reset(0.0)
    estimate = kalman.step(0.0, 0.005)
    original = float(estimate[0])
    assert 0.0 < original < 0.005
    estimate[0] = 99.0
    assert kalman.state[0] == pytest.approx(original)