"""
Design analysis and trajectory entry points.

Two stateless operations on a RocketDesign:

    analyze(design)         -> StabilityAnalysis | UnknownMotor
    run_trajectory(design)  -> Trajectory | UnknownMotor

An unrecognized motor identifier is an expected condition and comes
back as an UnknownMotor value from both operations; there is no
fallback motor mass. Malformed input raises.

Usage:
    from airframe import RocketDesign
    from flight_analysis import analyze, run_trajectory

    design = RocketDesign.default()
    report = analyze(design)
    result = run_trajectory(design)
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from airframe import (
    DEFAULT_MIN_STABLE_CALIBERS,
    RocketDesign,
    build_mass_components,
    center_of_gravity,
    center_of_pressure,
    is_stable,
    nose_mass,
    reference_area,
    stability_margin_calibers,
)
from flight_config import SimulationSettings
from flight_integrator import SimulationParams
from motor_catalog import available_motor_ids, get_motor
from trajectory_runner import Trajectory, run

logger = logging.getLogger(__name__)

# Public name for the RunTrajectory result
TrajectoryResult = Trajectory


@dataclass(frozen=True)
class StabilityAnalysis:
    """Pre-launch static stability, distances from nose tip (m)"""

    center_of_gravity: float
    center_of_pressure: float
    stability_margin_calibers: float
    is_stable: bool


@dataclass(frozen=True)
class UnknownMotor:
    """The design names a motor the catalog does not have"""

    motor_id: str
    available: Tuple[str, ...]

    @property
    def message(self) -> str:
        return f"Unknown motor: {self.motor_id!r}. Available: {list(self.available)}"


def _check_design(design) -> None:
    if not isinstance(design, RocketDesign):
        raise TypeError(f"Expected a RocketDesign, got {type(design).__name__}")


def _unknown_motor(design: RocketDesign) -> UnknownMotor:
    result = UnknownMotor(design.motor_id, available_motor_ids())
    logger.warning(result.message)
    return result


def dry_mass(design: RocketDesign) -> float:
    """Airframe + payload mass without the motor (kg)"""
    return nose_mass(design) + design.body_mass + design.fin_mass + design.payload_mass


def analyze(
    design: RocketDesign,
    min_stable_calibers: float = DEFAULT_MIN_STABLE_CALIBERS,
) -> Union[StabilityAnalysis, UnknownMotor]:
    """
    Static stability of a design with its loaded motor.

    Args:
        design: Rocket design
        min_stable_calibers: Margin required to call the design stable

    Returns:
        StabilityAnalysis, or UnknownMotor if the motor is not in the catalog
    """
    _check_design(design)

    motor = get_motor(design.motor_id)
    if motor is None:
        return _unknown_motor(design)

    cp = center_of_pressure(design.geometry)
    cg = center_of_gravity(build_mass_components(design, motor.total_mass))
    margin = stability_margin_calibers(cp, cg, design.geometry.body_diameter)

    return StabilityAnalysis(
        center_of_gravity=cg,
        center_of_pressure=cp,
        stability_margin_calibers=margin,
        is_stable=is_stable(margin, min_stable_calibers),
    )


def build_simulation_params(
    design: RocketDesign,
    settings: Optional[SimulationSettings] = None,
) -> Union[SimulationParams, UnknownMotor]:
    """Derive the fixed run parameters for a design"""
    _check_design(design)
    settings = settings or SimulationSettings()

    motor = get_motor(design.motor_id)
    if motor is None:
        return _unknown_motor(design)

    return SimulationParams(
        reference_area=reference_area(design.geometry),
        dry_mass=dry_mass(design),
        motor=motor,
        ignition_time=settings.ignition_time,
        deploy_at_apogee=settings.deploy_at_apogee,
        trail_capacity=settings.trail_capacity,
    )


def run_trajectory(
    design: RocketDesign,
    settings: Optional[SimulationSettings] = None,
) -> Union[TrajectoryResult, UnknownMotor]:
    """
    Fly the design from the pad to recovery.

    Deterministic: identical designs and settings give identical states.

    Returns:
        Trajectory (states + telemetry), or UnknownMotor
    """
    settings = settings or SimulationSettings()
    params = build_simulation_params(design, settings)
    if isinstance(params, UnknownMotor):
        return params

    logger.debug(
        f"Running {design.name!r}: motor={params.motor.motor_id}, "
        f"wet mass={params.wet_mass:.4f} kg, dt={settings.dt:.4f}s"
    )
    return run(
        params,
        dt=settings.dt,
        max_time=settings.max_time,
        max_iterations=settings.iteration_cap,
    )
