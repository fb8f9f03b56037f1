import pytest

from carlink.controller import PidController, clamp


@pytest.mark.parametrize(
    "value, low, high, expected",
    [(5, 0, 10, 5), (-3, 0, 10, 0), (42, 0, 10, 10), (10, 0, 10, 10)],
)
def test_clamp(value, low, high, expected):
    assert clamp(value, low, high) == expected


def test_defaults_match_initialisation():
    pid = PidController()
    assert pid.kp == pytest.approx(0.2)
    assert pid.ki == pytest.approx(0.015)
    assert pid.kd == pytest.approx(0.2)
    assert pid.limit == 250


def test_derivative_only_first_step_gives_error():
    pid = PidController(kp=0.0, ki=0.0, kd=1.0, set_angle=30.0)
    assert pid.update() == pytest.approx(30.0)
    assert pid.err == pytest.approx(30.0)
    assert pid.err_last == pytest.approx(30.0)


def test_proportional_term_uses_previous_error():
    pid = PidController(kp=1.0, ki=0.0, kd=0.0, set_angle=25.0)
    assert pid.update() == pytest.approx(0.0)
    assert pid.update() == pytest.approx(25.0)


def test_integral_accumulates():
    pid = PidController(kp=0.0, ki=1.0, kd=0.0, set_angle=12.0)
    pid.update()
    pid.update()
    assert pid.integral == pytest.approx(24.0)


@pytest.mark.parametrize("target", [170.0, -170.0])
def test_output_is_limited(target):
    pid = PidController(kp=100.0, ki=100.0, kd=100.0, limit=50.0, set_angle=target)
    out = pid.update()
    assert abs(out) == pytest.approx(50.0)
    assert (out > 0) == (target > 0)


def test_wraps_set_angle_past_half_turn():
    pid = PidController(set_angle=20.0, actual_angle=170.0)
    pid.update()
    assert pid.set_angle == pytest.approx(-170.0)
    assert pid.err == pytest.approx(pid.set_angle - pid.actual_angle)


def test_reset_keeps_gains():
    pid = PidController(kp=1.5, set_angle=40.0)
    pid.update()
    pid.reset()
    assert pid.integral == 0.0
    assert pid.err_last == 0.0
    assert pid.set_angle == 0.0
    assert pid.kp == 1.5