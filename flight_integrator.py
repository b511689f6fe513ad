"""
Flight Integrator

1-D vertical flight: thrust, drag and gravity are summed each step and
integrated with semi-implicit Euler at a fixed timestep. The flight
phase advances through an explicit transition table:

    pre -> burn -> coast -> apogee -> recovery

Thrust rises slightly with altitude as ambient pressure drops (nozzle
pressure term). Drag starts at zero, peaks near Max-Q (maximum dynamic
pressure 1/2 rho v^2), then falls off as the air thins.

Every call to step() returns a new SimulationState; the input state is
never modified.

Usage:
    from flight_integrator import SimulationParams, initial_state, step
    from motor_catalog import get_motor

    params = SimulationParams(reference_area=1.26e-3, dry_mass=0.1,
                              motor=get_motor("estes-c6"))
    state = initial_state(params)
    state = step(state, params, dt=1 / 60)
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterator, List, Mapping, NamedTuple, Optional

import numpy as np

from atmosphere import SEA_LEVEL_PRESSURE, density, mach_number, pressure
from drag_model import drag_coefficient, drag_force_magnitude
from motor_catalog import MotorSpec

logger = logging.getLogger(__name__)

G = 9.81  # m/s^2
DEFAULT_DT = 1 / 60  # 60 Hz
DEFAULT_TRAIL_CAPACITY = 500

# Thrust gain between sea level and vacuum
THRUST_VACUUM_GAIN = 0.12


class FlightPhase(Enum):
    """Flight phases in the order a nominal flight visits them"""
    PRE = "pre"
    BURN = "burn"
    COAST = "coast"
    APOGEE = "apogee"
    RECOVERY = "recovery"

    @property
    def order(self) -> int:
        return _PHASE_ORDER[self]


_PHASE_ORDER = {phase: i for i, phase in enumerate(FlightPhase)}


class TrailPoint(NamedTuple):
    altitude: float
    velocity: float
    mach: float
    time: float


class FlightTrail:
    """
    Bounded history of recent samples, oldest evicted first.

    Index-based ring buffer over a fixed (capacity, 4) array. Buffers
    are read-only; appended() returns a new trail.
    """

    __slots__ = ("_data", "_start", "_size")

    def __init__(self, capacity: int = DEFAULT_TRAIL_CAPACITY):
        if capacity < 1:
            raise ValueError(f"Trail capacity must be >= 1, got {capacity}")
        data = np.zeros((int(capacity), len(TrailPoint._fields)))
        data.flags.writeable = False
        self._data = data
        self._start = 0
        self._size = 0

    @classmethod
    def _from_buffer(cls, data: np.ndarray, start: int, size: int) -> "FlightTrail":
        trail = cls.__new__(cls)
        trail._data = data
        trail._start = start
        trail._size = size
        return trail

    @property
    def capacity(self) -> int:
        return len(self._data)

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[TrailPoint]:
        capacity = self.capacity
        for i in range(self._size):
            row = self._data[(self._start + i) % capacity]
            yield TrailPoint(*(float(x) for x in row))

    def __eq__(self, other) -> bool:
        if not isinstance(other, FlightTrail):
            return NotImplemented
        return self.capacity == other.capacity and list(self) == list(other)

    def __hash__(self) -> int:
        return hash((self.capacity, tuple(self)))

    def __repr__(self) -> str:
        return f"FlightTrail(size={self._size}, capacity={self.capacity})"

    def appended(self, point: TrailPoint) -> "FlightTrail":
        """
        New trail with point added at the end.

        Copies the whole buffer, so an append costs O(capacity); the copy
        keeps every earlier state's trail unchanged.
        """
        capacity = self.capacity
        data = self._data.copy()
        data[(self._start + self._size) % capacity] = point
        data.flags.writeable = False

        if self._size < capacity:
            return FlightTrail._from_buffer(data, self._start, self._size + 1)
        return FlightTrail._from_buffer(data, (self._start + 1) % capacity, capacity)

    @property
    def latest(self) -> Optional[TrailPoint]:
        if self._size == 0:
            return None
        row = self._data[(self._start + self._size - 1) % self.capacity]
        return TrailPoint(*(float(x) for x in row))

    def to_list(self) -> List[Dict[str, float]]:
        return [p._asdict() for p in self]


@dataclass(frozen=True)
class SimulationParams:
    """
    Fixed inputs for one trajectory run.

    Attributes:
        reference_area: Body cross-section (m^2)
        dry_mass: Airframe + payload mass without the motor (kg)
        motor: Motor flown on this run
        ignition_time: Motor ignition time (s)
        deploy_at_apogee: Recovery device setting carried with the run;
            apogee always hands over to recovery on the next step
        trail_capacity: Max number of trail points kept in each state
    """

    reference_area: float
    dry_mass: float
    motor: MotorSpec
    ignition_time: float = 0.0
    deploy_at_apogee: bool = True
    trail_capacity: int = DEFAULT_TRAIL_CAPACITY

    def __post_init__(self):
        if self.reference_area < 0:
            raise ValueError(f"reference_area must be >= 0, got {self.reference_area}")
        if self.dry_mass < 0:
            raise ValueError(f"dry_mass must be >= 0, got {self.dry_mass}")
        if self.ignition_time < 0:
            raise ValueError(f"ignition_time must be >= 0, got {self.ignition_time}")
        if self.trail_capacity < 1:
            raise ValueError(f"trail_capacity must be >= 1, got {self.trail_capacity}")

    @property
    def wet_mass(self) -> float:
        """Liftoff mass with a full motor (kg)"""
        return self.dry_mass + self.motor.dry_mass + self.motor.propellant_mass

    @property
    def burnout_mass(self) -> float:
        return self.dry_mass + self.motor.dry_mass

    @property
    def burnout_time(self) -> float:
        return self.ignition_time + self.motor.burn_time


@dataclass(frozen=True)
class SimulationState:
    """One trajectory sample"""

    time: float
    altitude: float
    velocity: float
    acceleration: float
    mass: float
    mach: float
    drag_coefficient: float
    air_density: float
    thrust: float
    drag: float
    phase: FlightPhase
    apogee: float
    trail: FlightTrail = field(default_factory=FlightTrail, repr=False)

    @property
    def dynamic_pressure(self) -> float:
        """q = 1/2 rho v^2 (Pa)"""
        return 0.5 * self.air_density * self.velocity**2

    def to_dict(self, include_trail: bool = True) -> Dict[str, Any]:
        data = {
            "time": self.time,
            "altitude": self.altitude,
            "velocity": self.velocity,
            "acceleration": self.acceleration,
            "mass": self.mass,
            "mach": self.mach,
            "drag_coefficient": self.drag_coefficient,
            "air_density": self.air_density,
            "thrust": self.thrust,
            "drag": self.drag,
            "phase": self.phase.value,
            "apogee": self.apogee,
        }
        if include_trail:
            data["trail"] = self.trail.to_list()
        return data


# Phase state machine


class PhaseContext(NamedTuple):
    """
    What the transition rules look at.

    time and in_burn are evaluated at the new time; velocity is the value
    at the start of the step, so apogee is flagged on the sample after the
    peak.
    """
    time: float
    ignition_time: float
    in_burn: bool
    velocity: float


def _from_pre(ctx: PhaseContext) -> FlightPhase:
    if ctx.time < ctx.ignition_time:
        return FlightPhase.PRE
    # Ignition time passed; a zero-length burn goes straight to coast
    return FlightPhase.BURN if ctx.in_burn else FlightPhase.COAST


def _from_burn(ctx: PhaseContext) -> FlightPhase:
    return FlightPhase.BURN if ctx.in_burn else FlightPhase.COAST


def _from_coast(ctx: PhaseContext) -> FlightPhase:
    return FlightPhase.APOGEE if ctx.velocity < 0 else FlightPhase.COAST


def _from_apogee(ctx: PhaseContext) -> FlightPhase:
    return FlightPhase.RECOVERY


def _from_recovery(ctx: PhaseContext) -> FlightPhase:
    return FlightPhase.RECOVERY


PHASE_TRANSITIONS: Mapping[FlightPhase, Callable[[PhaseContext], FlightPhase]] = MappingProxyType({
    FlightPhase.PRE: _from_pre,
    FlightPhase.BURN: _from_burn,
    FlightPhase.COAST: _from_coast,
    FlightPhase.APOGEE: _from_apogee,
    FlightPhase.RECOVERY: _from_recovery,
})


def next_phase(phase: FlightPhase, ctx: PhaseContext) -> FlightPhase:
    """Phase after one step; at most one transition per step"""
    return PHASE_TRANSITIONS[phase](ctx)


# Physics


def thrust_altitude_factor(altitude: float) -> float:
    """1 at sea level, rising toward 1.12 as ambient pressure drops to vacuum"""
    ratio = pressure(altitude) / SEA_LEVEL_PRESSURE
    return 1 + THRUST_VACUUM_GAIN * (1 - max(0.0, ratio))


def initial_state(params: SimulationParams) -> SimulationState:
    """Rocket on the pad at t = 0 with a full motor"""
    return SimulationState(
        time=0.0,
        altitude=0.0,
        velocity=0.0,
        acceleration=0.0,
        mass=params.wet_mass,
        mach=0.0,
        drag_coefficient=drag_coefficient(0.0),
        air_density=density(0.0),
        thrust=0.0,
        drag=0.0,
        phase=FlightPhase.PRE,
        apogee=0.0,
        trail=FlightTrail(params.trail_capacity),
    )


def step(state: SimulationState, params: SimulationParams, dt: float = DEFAULT_DT) -> SimulationState:
    """
    Single integration step.

    Args:
        state: Current state at time t
        params: Fixed run parameters
        dt: Timestep (s)

    Returns:
        New state at time t + dt
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")

    motor = params.motor
    t = state.time + dt
    h = state.altitude
    v = state.velocity

    in_burn = params.ignition_time <= t < params.burnout_time
    burn_elapsed = t - params.ignition_time if in_burn else 0.0

    if in_burn:
        propellant_used = (burn_elapsed / motor.burn_time) * motor.propellant_mass
        mass = params.wet_mass - propellant_used
    elif t >= params.burnout_time:
        # Residual propellant is discarded at burnout
        mass = params.burnout_mass
    else:
        mass = params.wet_mass

    thrust = motor.thrust_at(burn_elapsed) * thrust_altitude_factor(h) if in_burn else 0.0

    rho = density(h)
    speed = abs(v)
    mach = mach_number(speed, h)
    cd = drag_coefficient(mach)
    drag_magnitude = drag_force_magnitude(rho, speed, cd, params.reference_area)
    drag = -drag_magnitude if v >= 0 else drag_magnitude

    gravity = -G * mass
    net_force = thrust + drag + gravity
    acceleration = net_force / mass if mass > 0 else 0.0

    new_velocity = v + acceleration * dt
    new_altitude = max(0.0, h + v * dt + 0.5 * acceleration * dt * dt)

    phase = next_phase(
        state.phase,
        PhaseContext(
            time=t,
            ignition_time=params.ignition_time,
            in_burn=in_burn,
            velocity=v,
        ),
    )

    if phase is FlightPhase.PRE:
        # Still on the pad before ignition: the pad carries the weight
        acceleration = 0.0
        new_velocity = 0.0
        new_altitude = h

    apogee = state.apogee
    if FlightPhase.COAST in (state.phase, phase):
        apogee = max(apogee, new_altitude)

    if phase is not state.phase:
        logger.debug(
            f"t={t:.3f}s: {state.phase.value} -> {phase.value} "
            f"(h={new_altitude:.2f} m, v={new_velocity:.2f} m/s, m={mass:.4f} kg)"
        )

    return SimulationState(
        time=t,
        altitude=new_altitude,
        velocity=new_velocity,
        acceleration=acceleration,
        mass=mass,
        mach=mach,
        drag_coefficient=cd,
        air_density=rho,
        thrust=thrust,
        drag=drag,
        phase=phase,
        apogee=apogee,
        trail=state.trail.appended(TrailPoint(new_altitude, new_velocity, mach, t)),
    )
