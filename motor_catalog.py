"""
Motor catalog with trapezoidal thrust curves.

Each motor ramps up to peak thrust, holds it, and ramps back down to
zero at burnout. The catalog is built once at import time and exposed
as a read-only mapping; lookups of unknown identifiers return None.

Usage:
    from motor_catalog import get_motor

    motor = get_motor("estes-c6")
    thrust = motor.thrust_at(0.5)  # N, 0.5 s after ignition
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from scipy import integrate

# NAR impulse classes: upper bound of total impulse (N*s) per letter
_IMPULSE_CLASSES = (
    (2.5, "A"),
    (5.0, "B"),
    (10.0, "C"),
    (20.0, "D"),
    (40.0, "E"),
    (80.0, "F"),
    (160.0, "G"),
    (320.0, "H"),
)


@dataclass(frozen=True)
class MotorSpec:
    """
    Single-use solid motor with a trapezoidal thrust curve.

    total_impulse is the documented value for display; it is not derived
    from the curve.
    """

    motor_id: str
    name: str
    total_impulse: float  # N*s
    burn_time: float  # s
    propellant_mass: float  # kg
    dry_mass: float  # kg, casing + nozzle
    peak_thrust: float  # N
    ramp_up_ratio: float = 0.1
    ramp_down_ratio: float = 0.2

    def thrust_at(self, t: float) -> float:
        """Thrust (N) at time t (s) from start of burn"""
        if t <= 0 or t >= self.burn_time:
            return 0.0

        t1 = self.burn_time * self.ramp_up_ratio
        t2 = self.burn_time * (1 - self.ramp_down_ratio)
        if t < t1:
            return self.peak_thrust * t / t1
        if t <= t2:
            return self.peak_thrust
        return self.peak_thrust * (self.burn_time - t) / (self.burn_time - t2)

    @property
    def total_mass(self) -> float:
        """Loaded motor mass (kg)"""
        return self.propellant_mass + self.dry_mass

    @property
    def average_thrust(self) -> float:
        if self.burn_time <= 0:
            return 0.0
        return self.total_impulse / self.burn_time

    @property
    def impulse_class(self) -> str:
        for upper, letter in _IMPULSE_CLASSES:
            if self.total_impulse <= upper:
                return letter
        return "I+"

    def curve_impulse(self) -> float:
        """Integral of the thrust curve (N*s), for display alongside total_impulse"""
        if self.burn_time <= 0:
            return 0.0
        breakpoints = [
            self.burn_time * self.ramp_up_ratio,
            self.burn_time * (1 - self.ramp_down_ratio),
        ]
        impulse, _ = integrate.quad(self.thrust_at, 0.0, self.burn_time, points=breakpoints)
        return impulse


_MOTORS = (
    MotorSpec(
        motor_id="estes-a8",
        name="Estes A8",
        total_impulse=2.5,
        burn_time=0.5,
        propellant_mass=0.006,
        dry_mass=0.012,
        peak_thrust=5.5,
    ),
    MotorSpec(
        motor_id="estes-b6",
        name="Estes B6",
        total_impulse=5.0,
        burn_time=0.8,
        propellant_mass=0.012,
        dry_mass=0.012,
        peak_thrust=7.5,
    ),
    # Estes C6-like: total impulse ~10 N*s, burn ~1.6 s
    MotorSpec(
        motor_id="estes-c6",
        name="Estes C6",
        total_impulse=10.0,
        burn_time=1.6,
        propellant_mass=0.024,
        dry_mass=0.012,
        peak_thrust=9.0,
    ),
    MotorSpec(
        motor_id="estes-d12",
        name="Estes D12",
        total_impulse=20.0,
        burn_time=2.2,
        propellant_mass=0.044,
        dry_mass=0.014,
        peak_thrust=14.0,
    ),
    MotorSpec(
        motor_id="custom-mid",
        name="Custom Mid",
        total_impulse=50.0,
        burn_time=3.0,
        propellant_mass=0.08,
        dry_mass=0.02,
        peak_thrust=25.0,
    ),
)

MOTOR_CATALOG: Mapping[str, MotorSpec] = MappingProxyType({m.motor_id: m for m in _MOTORS})


def get_motor(motor_id: str) -> Optional[MotorSpec]:
    """Look up a motor by identifier; None if the catalog has no such motor"""
    return MOTOR_CATALOG.get(motor_id)


def available_motor_ids() -> Tuple[str, ...]:
    return tuple(MOTOR_CATALOG)
