"""
Trajectory Runner

Drives the flight integrator from the pad until recovery, producing the
full sequence of states and a lightweight telemetry series for charts.

A run always ends with a finite, complete sequence: reaching the time
ceiling or the iteration cap is a normal (if unusual) termination that
is reported in Trajectory.termination rather than raised.

Usage:
    from trajectory_runner import run

    trajectory = run(params)
    print(trajectory.summary().apogee)
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional, Tuple

import numpy as np
import pandas as pd

from flight_integrator import (
    DEFAULT_DT,
    FlightPhase,
    SimulationParams,
    SimulationState,
    initial_state,
    step,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_TIME = 120.0  # seconds


class Termination(Enum):
    """Why a run stopped"""
    RECOVERY = "recovery"
    TIME_LIMIT = "time_limit"
    ITERATION_LIMIT = "iteration_limit"


class TelemetryPoint(NamedTuple):
    time: float
    altitude: float
    velocity: float


@dataclass(frozen=True)
class FlightSummary:
    """Headline numbers for a trajectory"""

    apogee: float  # m
    time_to_apogee: Optional[float]  # s, first sample in the apogee phase
    burnout_time: Optional[float]  # s, first sample in coast
    max_velocity: float  # m/s
    max_acceleration: float  # m/s^2
    max_mach: float
    max_q: float  # Pa
    max_q_time: float  # s
    flight_time: float  # s, time of the last sample
    landed_phase: FlightPhase


@dataclass(frozen=True)
class Trajectory:
    """States (initial state included), telemetry and termination reason"""

    states: Tuple[SimulationState, ...]
    telemetry: Tuple[TelemetryPoint, ...]
    termination: Termination

    @property
    def final_state(self) -> SimulationState:
        return self.states[-1]

    def first_time_in(self, phase: FlightPhase) -> Optional[float]:
        for state in self.states:
            if state.phase is phase:
                return state.time
        return None

    def summary(self) -> FlightSummary:
        velocity = np.array([s.velocity for s in self.states])
        acceleration = np.array([s.acceleration for s in self.states])
        mach = np.array([s.mach for s in self.states])
        q = np.array([s.dynamic_pressure for s in self.states])
        i_max_q = int(np.argmax(q))

        return FlightSummary(
            apogee=max(s.apogee for s in self.states),
            time_to_apogee=self.first_time_in(FlightPhase.APOGEE),
            burnout_time=self.first_time_in(FlightPhase.COAST),
            max_velocity=float(velocity.max()),
            max_acceleration=float(acceleration.max()),
            max_mach=float(mach.max()),
            max_q=float(q[i_max_q]),
            max_q_time=self.states[i_max_q].time,
            flight_time=self.final_state.time,
            landed_phase=self.final_state.phase,
        )

    def to_dataframe(self) -> pd.DataFrame:
        """One row per state, trail omitted"""
        return pd.DataFrame([s.to_dict(include_trail=False) for s in self.states])


def default_max_iterations(max_time: float, dt: float) -> int:
    """Runaway guard slightly above the number of steps the time ceiling allows"""
    return math.ceil(max_time / dt) + 10


def run(
    params: SimulationParams,
    dt: float = DEFAULT_DT,
    max_time: float = DEFAULT_MAX_TIME,
    max_iterations: Optional[int] = None,
) -> Trajectory:
    """
    Integrate from the pad until recovery or a limit is reached.

    Args:
        params: Fixed run parameters
        dt: Timestep (s)
        max_time: Time ceiling (s)
        max_iterations: Hard cap on steps (default: derived from max_time/dt)

    Returns:
        Trajectory with every state, including the initial one
    """
    if dt <= 0:
        raise ValueError(f"dt must be positive, got {dt}")
    if max_iterations is None:
        max_iterations = default_max_iterations(max_time, dt)

    state = initial_state(params)
    states = [state]
    termination = Termination.TIME_LIMIT

    while state.time < max_time:
        if state.phase is FlightPhase.RECOVERY:
            termination = Termination.RECOVERY
            break
        if len(states) - 1 >= max_iterations:
            termination = Termination.ITERATION_LIMIT
            break
        state = step(state, params, dt)
        states.append(state)
    else:
        if state.phase is FlightPhase.RECOVERY:
            termination = Termination.RECOVERY

    if termination is Termination.RECOVERY:
        logger.info(
            f"Run finished in recovery at t={state.time:.2f}s after {len(states) - 1} steps, "
            f"apogee {state.apogee:.1f} m"
        )
    else:
        logger.warning(
            f"Run stopped by {termination.value} at t={state.time:.2f}s "
            f"in phase {state.phase.value} after {len(states) - 1} steps"
        )

    telemetry = tuple(TelemetryPoint(s.time, s.altitude, s.velocity) for s in states)
    return Trajectory(states=tuple(states), telemetry=telemetry, termination=termination)


def run_to_apogee(
    params: SimulationParams,
    max_time: float = DEFAULT_MAX_TIME,
    dt: float = DEFAULT_DT,
) -> Tuple[SimulationState, int]:
    """
    Quick apogee estimate: step until the apogee phase (or max_time).

    Returns:
        (state, steps) where state is the first state past the peak
    """
    state = initial_state(params)
    steps = 0
    while state.time < max_time and state.phase.order < FlightPhase.APOGEE.order:
        state = step(state, params, dt)
        steps += 1
    return state, steps
