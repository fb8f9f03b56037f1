"""Positional PID controller for steering towards a heading."""

from dataclasses import dataclass


def clamp(value, low, high):
    """Limit value to the closed interval [low, high]."""
    return min(max(value, low), high)


@dataclass
class PidController:
    """Heading PID controller; angles are in degrees."""

    set_angle: float = 0.0
    actual_angle: float = 0.0
    err: float = 0.0
    err_last: float = 0.0
    kp: float = 0.2
    ki: float = 0.015
    kd: float = 0.2
    angle: float = 0.0
    integral: float = 0.0
    limit: float = 250.0

    def update(self):
        """Advance one step and return the limited control output."""
        if self.actual_angle + self.set_angle > 180:
            self.set_angle -= 360 - self.actual_angle
        self.err = self.set_angle - self.actual_angle
        self.integral += self.err
        derivative = self.err - self.err_last
        proportional = self.err_last
        self.err_last = self.err
        out = (
            proportional * self.kp
            + self.integral * self.ki
            + derivative * self.kd
        )
        return clamp(out, -self.limit, self.limit)

    def reset(self):
        """Clear the running state, keeping gains and limit."""
        self.set_angle = 0.0
        self.actual_angle = 0.0
        self.err = 0.0
        self.err_last = 0.0
        self.integral = 0.0
        self.angle = 0.0