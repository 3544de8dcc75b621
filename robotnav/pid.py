"""PID controllers with integral anti-windup and output saturation."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def normalize_angle(angle: float) -> float:
    """Wrap an angle in radians into the range [-pi, pi]."""
    while angle > math.pi:
        angle -= 2.0 * math.pi
    while angle < -math.pi:
        angle += 2.0 * math.pi
    return angle


@dataclass
class PIDComponents:
    """The individual terms of one PID step, before saturation."""

    proportional: float = 0.0
    integral: float = 0.0
    derivative: float = 0.0
    total: float = 0.0


class PIDController:
    """A PID controller with anti-windup, output limits and resettable state."""

    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        output_min: float = -1.0,
        output_max: float = 1.0,
        integral_max: float = 1.0,
    ) -> None:
        self.kp = kp
        self.ki = ki
        self.kd = kd
        self.output_min = output_min
        self.output_max = output_max
        self.integral_max = integral_max
        self.last_components = PIDComponents()
        self._previous_error = 0.0
        self._integral = 0.0
        self._first_call = True

    @property
    def error(self) -> float:
        """The error seen on the most recent step."""
        return self._previous_error

    @property
    def integral(self) -> float:
        """The accumulated (clamped) integral of the error."""
        return self._integral

    def _step(self, setpoint: float, measurement: float, dt: float) -> PIDComponents:
        error = setpoint - measurement
        proportional = self.kp * error

        if dt > 0.0:
            self._integral = _clamp(
                self._integral + error * dt, -self.integral_max, self.integral_max
            )
        integral_term = self.ki * self._integral

        derivative = 0.0
        if not self._first_call and dt > 0.0:
            derivative = self.kd * (self._previous_error - error) / dt

        self._previous_error = error
        self._first_call = False
        return PIDComponents(
            proportional=proportional,
            integral=integral_term,
            derivative=derivative,
            total=proportional + integral_term + derivative,
        )

    def compute(self, setpoint: float, measurement: float, dt: float) -> float:
        """Advance one step and return the saturated output."""
        return _clamp(
            self._step(setpoint, measurement, dt).total, self.output_min, self.output_max
        )

    def compute_with_components(
        self, setpoint: float, measurement: float, dt: float
    ) -> float:
        """Like compute, but also records the terms in last_components."""
        self.last_components = self._step(setpoint, measurement, dt)
        return _clamp(self.last_components.total, self.output_min, self.output_max)

    def reset(self) -> None:
        """Clear the error history and the integral."""
        self._previous_error = 0.0
        self._integral = 0.0
        self._first_call = True

    def set_gains(self, kp: float, ki: float, kd: float) -> None:
        self.kp = kp
        self.ki = ki
        self.kd = kd

    def set_output_limits(self, output_min: float, output_max: float) -> None:
        self.output_min = output_min
        self.output_max = output_max


class AngularPIDController(PIDController):
    """PID for heading control with angle wrapping, a deadband and feedforward."""

    def __init__(
        self,
        kp: float,
        ki: float,
        kd: float,
        output_min: float = -2.0,
        output_max: float = 2.0,
        deadband: float = 0.05,
        feedforward: float = 0.0,
    ) -> None:
        super().__init__(kp, ki, kd, output_min, output_max)
        self.deadband = deadband
        self.feedforward = feedforward

    def compute_angular(
        self, setpoint_angle: float, current_angle: float, dt: float
    ) -> float:
        """Return an angular velocity command towards setpoint_angle."""
        error = normalize_angle(setpoint_angle - current_angle)
        if abs(error) < self.deadband:
            self.reset()
            return 0.0
        return self.compute(current_angle + error, current_angle, dt) + self.feedforward